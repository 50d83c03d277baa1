"""Destination handling for outline entries.

Writing binds a page index to a destination array referencing the page
object. Reading maps an entry's ``/Dest`` (or the ``/D`` of a GoTo action)
back to a page ordinal through a :class:`PageIndex`.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Hashable, Optional, Sequence

from pypdf.generic import (
    ArrayObject,
    ByteStringObject,
    DictionaryObject,
    NameObject,
    NullObject,
    TextStringObject,
)

from .backends.base import BackendDocument
from .types import FIT_XYZ, SUPPORTED_FITS

LOGGER = logging.getLogger("pdf_outline.destinations")

GOTO_ACTION = "/GoTo"


def clamp_page_index(page_index: Optional[int], page_count: int) -> int:
    """Clamp ``page_index`` into the document; out-of-range indices map to the first page."""

    index = max(0, page_index or 0)
    if index >= page_count:
        LOGGER.warning(
            "Page index %d is beyond the last page (%d pages); using the first page",
            index,
            page_count,
        )
        return 0
    return index


def make_destination(
    page_refs: Sequence[Any],
    page_index: Optional[int],
    fit: str = FIT_XYZ,
) -> ArrayObject:
    """Return a destination array for ``page_index``.

    ``/XYZ`` destinations carry null left, top and zoom values so viewers keep
    their current position and magnification.
    """

    if fit not in SUPPORTED_FITS:
        raise ValueError(f"Unsupported destination fit: {fit!r}")
    if not page_refs:
        raise ValueError("Cannot build a destination for a document without pages")

    page_ref = page_refs[clamp_page_index(page_index, len(page_refs))]
    destination = ArrayObject([page_ref, NameObject(fit)])
    if fit == FIT_XYZ:
        destination.extend([NullObject(), NullObject(), NullObject()])
    return destination


class PageIndex:
    """Identity to ordinal lookup for the pages of one document.

    Built once per extraction so resolving an entry does not scan the page
    list.
    """

    def __init__(self, document: BackendDocument) -> None:
        self._document = document
        self._ordinals: Dict[Hashable, int] = {}
        for ordinal, ref in enumerate(document.page_refs()):
            key = document.ref_key(ref)
            if key is not None:
                self._ordinals.setdefault(key, ordinal)

    def __len__(self) -> int:
        return len(self._ordinals)

    def ordinal(self, ref: Any) -> Optional[int]:
        key = self._document.ref_key(ref)
        if key is None:
            return None
        return self._ordinals.get(key)


def _named_page(document: BackendDocument, name: Any) -> Any:
    text = str(name)
    candidates = [text]
    if isinstance(name, NameObject):
        candidates.append(text[1:])
    else:
        candidates.append("/" + text)
    for candidate in candidates:
        page = document.named_destination_page(candidate)
        if page is not None:
            return page
    return None


def _page_from_destination(document: BackendDocument, destination: Any, pages: PageIndex) -> Optional[int]:
    if isinstance(destination, (NameObject, TextStringObject, ByteStringObject)):
        return pages.ordinal(_named_page(document, destination))
    if isinstance(destination, DictionaryObject):
        destination = document.resolve(destination.get("/D"))
    if isinstance(destination, ArrayObject) and len(destination) > 0:
        return pages.ordinal(destination[0])
    return None


def try_resolve_page_index(
    document: BackendDocument,
    entry: DictionaryObject,
    pages: PageIndex,
) -> Optional[int]:
    """Resolve the target page of an outline entry, ``None`` when it cannot be resolved.

    ``/Dest`` takes precedence over ``/A``. Only GoTo actions are followed.
    """

    destination = document.resolve(entry.get("/Dest"))
    if destination is None:
        action = document.resolve(entry.get("/A"))
        if not isinstance(action, DictionaryObject):
            return None
        if document.resolve(action.get("/S")) != GOTO_ACTION:
            return None
        destination = document.resolve(action.get("/D"))
    if destination is None:
        return None
    return _page_from_destination(document, destination, pages)


def resolve_page_index(
    document: BackendDocument,
    entry: DictionaryObject,
    pages: PageIndex,
) -> int:
    """Resolve the target page of an outline entry, defaulting to the first page."""

    page_index = try_resolve_page_index(document, entry, pages)
    if page_index is None:
        LOGGER.debug("Unresolved outline destination; using page 0")
        return 0
    return page_index


__all__ = [
    "GOTO_ACTION",
    "PageIndex",
    "clamp_page_index",
    "make_destination",
    "try_resolve_page_index",
    "resolve_page_index",
]
