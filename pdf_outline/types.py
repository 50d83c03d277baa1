"""
Type definitions and dataclasses for PDF Outline.

This module defines data structures used throughout the library: the flat
:class:`OutlineItem` edited by callers, the :class:`OutlineNode` forest used
while converting to and from the PDF object graph, and the option and report
containers passed around by the public API.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .ids import IdFactory, uuid_id_factory

DEFAULT_TITLE = "Untitled"

FIT_XYZ = "/XYZ"
FIT_PAGE = "/Fit"
SUPPORTED_FITS = (FIT_XYZ, FIT_PAGE)


def _coerce_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass(slots=True)
class OutlineItem:
    """
    Flat, level-annotated outline entry.

    Attributes:
        id: Opaque token unique within one outline. ``None`` until assigned.
        title: Bookmark text. ``None`` is replaced by the default title.
        page_index: Zero-based target page. Negative values are clamped to 0.
        level: Nesting depth, 0 for top-level entries.
    """

    id: Optional[str] = None
    title: Optional[str] = None
    page_index: Optional[int] = 0
    level: int = 0

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        *,
        id_factory: IdFactory = uuid_id_factory,
        default_title: str = DEFAULT_TITLE,
    ) -> "OutlineItem":
        """Build an item from the ``{id?, title?, pageIndex?, level?}`` shape.

        Missing or unusable fields fall back to their defaults; ``page_index``
        is accepted as an alias of ``pageIndex``.
        """

        raw_id = data.get("id")
        title = data.get("title")
        if title is not None and not isinstance(title, str):
            title = None

        page_index = _coerce_int(data.get("pageIndex", data.get("page_index")))
        level = _coerce_int(data.get("level"))

        return cls(
            id=str(raw_id) if raw_id not in (None, "") else id_factory(),
            title=default_title if title is None else title,
            page_index=max(0, page_index or 0),
            level=max(0, level or 0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "pageIndex": self.page_index,
            "level": self.level,
        }


@dataclass(slots=True)
class OutlineNode:
    """
    Node of an outline forest.

    Children are owned, ordered and listed in display order. Parent and
    sibling relations are implied by the shape of the forest.
    """

    id: Optional[str]
    title: str
    page_index: int
    level: int = 0
    children: List["OutlineNode"] = field(default_factory=list)

    @classmethod
    def from_item(cls, item: OutlineItem) -> "OutlineNode":
        return cls(
            id=item.id,
            title=item.title if item.title is not None else DEFAULT_TITLE,
            page_index=item.page_index or 0,
            level=item.level,
        )

    def to_item(self, level: int) -> OutlineItem:
        return OutlineItem(id=self.id, title=self.title, page_index=self.page_index, level=level)


@dataclass
class OutlineOptions:
    """
    Options controlling how outlines are written and read.

    Attributes:
        default_title: Title used for entries without a usable title.
        fit: Destination fit mode written for every entry. ``/XYZ`` with null
            coordinates keeps the viewer's zoom and scroll position; ``/Fit``
            shows the whole page.
        max_depth: Deepest nesting level the reader descends into, or
            ``None`` to read the whole outline.
        strict: Reject flat outlines whose levels skip ahead instead of
            re-parenting the offending entries.
        page_mode: Optional ``/PageMode`` stored in the catalog when a
            non-empty outline is written, e.g. ``/UseOutlines``.
    """

    default_title: str = DEFAULT_TITLE
    fit: str = FIT_XYZ
    max_depth: Optional[int] = None
    strict: bool = False
    page_mode: Optional[str] = None


@dataclass
class OutlineInfo:
    """
    Summary of a PDF document's outline.

    Attributes:
        num_pages: Number of pages in the PDF
        file_size: Size of the PDF data in bytes
        has_outline: Whether the catalog references an outline
        entries: Number of outline entries at all depths
        max_level: Deepest level present, ``-1`` for an empty outline
        top_level: Number of top-level entries
    """

    num_pages: int
    file_size: int
    has_outline: bool = False
    entries: int = 0
    max_level: int = -1
    top_level: int = 0

    def __str__(self) -> str:
        return (
            "OutlineInfo(pages={pages}, entries={entries}, max_level={max_level})"
        ).format(pages=self.num_pages, entries=self.entries, max_level=self.max_level)


__all__ = [
    "DEFAULT_TITLE",
    "FIT_XYZ",
    "FIT_PAGE",
    "SUPPORTED_FITS",
    "OutlineItem",
    "OutlineNode",
    "OutlineOptions",
    "OutlineInfo",
]
