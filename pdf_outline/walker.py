"""Reading an existing PDF outline object graph back into a forest."""

from __future__ import annotations

import logging
from typing import Any, Hashable, List, Optional, Set, Tuple

from pypdf.generic import DictionaryObject

from .backends.base import BackendDocument
from .destinations import PageIndex, resolve_page_index
from .ids import IdFactory, uuid_id_factory
from .synthesizer import OUTLINES_KEY
from .titles import decode_title
from .types import DEFAULT_TITLE, OutlineNode

LOGGER = logging.getLogger("pdf_outline.walker")

DEFAULT_MAX_DEPTH: Optional[int] = None

# An outline entry carries at least one of these keys.
ENTRY_KEYS = ("/Title", "/Dest", "/A", "/First")
NON_ENTRY_TYPES = ("/Page", "/Pages")


class OutlineWalker:
    """Depth-first reader for the ``/Outlines`` graph of a document.

    The graph comes from arbitrary files and is not trusted: every reference
    is visited at most once, sibling chains are followed iteratively and
    dictionaries that are not outline entries (pages, for instance) are
    skipped. When ``max_depth`` is set, entries nested deeper are dropped.
    """

    def __init__(
        self,
        document: BackendDocument,
        *,
        default_title: str = DEFAULT_TITLE,
        max_depth: Optional[int] = DEFAULT_MAX_DEPTH,
        id_factory: IdFactory = uuid_id_factory,
    ) -> None:
        self.document = document
        self.default_title = default_title
        self.max_depth = max_depth
        self.id_factory = id_factory

    def walk(self) -> List[OutlineNode]:
        """Return the outline forest, empty when the document has no usable outline."""

        raw_root = self.document.catalog_get(OUTLINES_KEY)
        root = self.document.resolve(raw_root)
        if not isinstance(root, DictionaryObject):
            if raw_root is not None:
                LOGGER.debug("Ignoring malformed %s entry: %r", OUTLINES_KEY, root)
            return []

        visited: Set[Hashable] = set()
        root_key = self.document.ref_key(raw_root)
        if root_key is not None:
            visited.add(root_key)

        pages = PageIndex(self.document)
        forest: List[OutlineNode] = []
        # Each frame is the next entry to read, its depth and the list it joins.
        # Children are pushed above the sibling so traversal stays in preorder.
        stack: List[Tuple[Any, int, List[OutlineNode]]] = []
        first = root.get("/First")
        if first is not None:
            stack.append((first, 0, forest))

        while stack:
            raw, depth, siblings = stack.pop()
            key = self.document.ref_key(raw)
            if key is not None:
                if key in visited:
                    LOGGER.warning("Outline cycle detected at object %s; truncating", key)
                    continue
                visited.add(key)

            entry = self.document.resolve(raw)
            if not isinstance(entry, DictionaryObject):
                LOGGER.debug("Skipping non-dictionary outline entry %r", entry)
                continue
            if not _is_entry(entry):
                LOGGER.debug("Skipping object that is not an outline entry: %s", key)
                continue

            node = self._read_node(entry, depth, pages)
            siblings.append(node)

            following = entry.get("/Next")
            if following is not None:
                stack.append((following, depth, siblings))

            child = entry.get("/First")
            if child is not None:
                if self.max_depth is not None and depth + 1 > self.max_depth:
                    LOGGER.warning(
                        "Outline deeper than %d levels; children of %r dropped",
                        self.max_depth,
                        node.title,
                    )
                else:
                    stack.append((child, depth + 1, node.children))

        LOGGER.debug("Read %d top-level outline entries", len(forest))
        return forest

    def _read_node(self, entry: DictionaryObject, depth: int, pages: PageIndex) -> OutlineNode:
        title = decode_title(self.document.resolve(entry.get("/Title")), self.default_title)
        return OutlineNode(
            id=self.id_factory(),
            title=title,
            page_index=resolve_page_index(self.document, entry, pages),
            level=depth,
        )


def _is_entry(entry: DictionaryObject) -> bool:
    if entry.get("/Type") in NON_ENTRY_TYPES:
        return False
    return any(key in entry for key in ENTRY_KEYS)


def walk_outline(
    document: BackendDocument,
    *,
    default_title: str = DEFAULT_TITLE,
    max_depth: Optional[int] = DEFAULT_MAX_DEPTH,
    id_factory: IdFactory = uuid_id_factory,
) -> List[OutlineNode]:
    return OutlineWalker(
        document,
        default_title=default_title,
        max_depth=max_depth,
        id_factory=id_factory,
    ).walk()


__all__ = ["DEFAULT_MAX_DEPTH", "OutlineWalker", "walk_outline"]
