"""Synthesis of the PDF outline object graph from an outline forest."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence, Tuple

from .backends.base import BackendDocument
from .destinations import make_destination
from .titles import encode_title
from .types import FIT_XYZ, OutlineNode

LOGGER = logging.getLogger("pdf_outline.synthesizer")

OUTLINES_KEY = "/Outlines"


@dataclass(slots=True)
class _Slot:
    """Arena entry: one outline node and the arena indices it links to."""

    node: OutlineNode
    parent: Optional[int]
    children: List[int] = field(default_factory=list)
    prev: Optional[int] = None
    next: Optional[int] = None
    descendants: int = 0


def _link_siblings(slots: List[_Slot], siblings: Sequence[int]) -> None:
    for position, index in enumerate(siblings):
        if position > 0:
            slots[index].prev = siblings[position - 1]
        if position + 1 < len(siblings):
            slots[index].next = siblings[position + 1]


def layout_forest(forest: Sequence[OutlineNode]) -> Tuple[List[_Slot], List[int]]:
    """Lay ``forest`` out in an arena ordered by preorder position.

    Returns the arena and the indices of the top-level entries.
    """

    slots: List[_Slot] = []
    top_level: List[int] = []
    stack: List[Tuple[OutlineNode, Optional[int]]] = [(node, None) for node in reversed(forest)]

    while stack:
        node, parent = stack.pop()
        index = len(slots)
        slots.append(_Slot(node=node, parent=parent))
        if parent is None:
            top_level.append(index)
        else:
            slots[parent].children.append(index)
        stack.extend((child, index) for child in reversed(node.children))

    # Children always follow their parent in preorder.
    for slot in reversed(slots):
        slot.descendants = sum(1 + slots[child].descendants for child in slot.children)

    _link_siblings(slots, top_level)
    for slot in slots:
        _link_siblings(slots, slot.children)

    return slots, top_level


class OutlineSynthesizer:
    """Write an outline forest into a document's object store.

    Every node gets a freshly allocated record; any previous outline is left
    unreferenced. Records are linked through ``/Parent``, ``/First``,
    ``/Last``, ``/Prev`` and ``/Next`` and all entries are written open, so
    every ``/Count`` is the positive number of descendants.
    """

    def __init__(
        self,
        document: BackendDocument,
        *,
        fit: str = FIT_XYZ,
        page_mode: Optional[str] = None,
    ) -> None:
        self.document = document
        self.fit = fit
        self.page_mode = page_mode

    def synthesize(self, forest: Sequence[OutlineNode]) -> Any:
        """Commit ``forest`` and bind it to the catalog.

        Returns the reference of the new outline root, or ``None`` when
        ``forest`` is empty, in which case the catalog is not modified.
        """

        if not forest:
            LOGGER.debug("Empty outline; catalog left untouched")
            return None

        slots, top_level = layout_forest(forest)

        # Allocate everything up front so forward links can be written.
        root_ref = self.document.allocate()
        refs = [self.document.allocate() for _ in slots]
        page_refs = self.document.page_refs()

        def ref_at(index: Optional[int]) -> Any:
            return refs[index] if index is not None else None

        for slot, ref in zip(slots, refs):
            record = self.document.make_record(
                {
                    "/Title": encode_title(slot.node.title),
                    "/Parent": root_ref if slot.parent is None else refs[slot.parent],
                    "/Dest": make_destination(page_refs, slot.node.page_index, self.fit),
                    "/Prev": ref_at(slot.prev),
                    "/Next": ref_at(slot.next),
                    "/First": ref_at(slot.children[0]) if slot.children else None,
                    "/Last": ref_at(slot.children[-1]) if slot.children else None,
                    "/Count": slot.descendants if slot.children else None,
                }
            )
            self.document.assign(ref, record)

        root = self.document.make_record(
            {
                "/Type": OUTLINES_KEY,
                "/First": refs[top_level[0]],
                "/Last": refs[top_level[-1]],
                "/Count": len(slots),
            }
        )
        self.document.assign(root_ref, root)
        self.document.catalog_set(OUTLINES_KEY, root_ref)
        if self.page_mode:
            self.document.catalog_set("/PageMode", self.page_mode)

        LOGGER.debug("Synthesized %d outline entries (%d top-level)", len(slots), len(top_level))
        return root_ref


def synthesize_outline(
    document: BackendDocument,
    forest: Sequence[OutlineNode],
    *,
    fit: str = FIT_XYZ,
    page_mode: Optional[str] = None,
) -> Any:
    """Convenience wrapper around :class:`OutlineSynthesizer`."""

    return OutlineSynthesizer(document, fit=fit, page_mode=page_mode).synthesize(forest)


__all__ = ["OUTLINES_KEY", "OutlineSynthesizer", "layout_forest", "synthesize_outline"]
