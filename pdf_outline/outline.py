"""
Public entry points for writing and reading PDF outlines.

The apply path turns a flat outline into a forest and synthesizes it into the
document's object store; the extract path walks the stored graph and
flattens it again::

    >>> data = apply_outline(pdf_bytes, [{"title": "Intro", "pageIndex": 0}])
    >>> [item.title for item in extract_outline(data)]
    ['Intro']

Both functions load a fresh object store from the given bytes, so a failure
never leaves partially written state behind.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from .backends import BackendDocument, OutlineBackend, PypdfBackend
from .ids import IdFactory, uuid_id_factory
from .synthesizer import OutlineSynthesizer
from .tree import ItemLike, build_tree, flatten, normalize_items
from .types import SUPPORTED_FITS, OutlineItem, OutlineOptions
from .utils import time_block
from .walker import OutlineWalker

LOGGER = logging.getLogger("pdf_outline.outline")


def _normalize_page_mode(page_mode: Optional[str]) -> Optional[str]:
    if not page_mode:
        return None
    return "/" + page_mode.lstrip("/")


def write_outline(
    document: BackendDocument,
    items: Iterable[ItemLike],
    options: Optional[OutlineOptions] = None,
    *,
    id_factory: IdFactory = uuid_id_factory,
) -> List[OutlineItem]:
    """Replace the outline of a loaded document with ``items``.

    Returns the normalized items that were written. An empty outline leaves
    the catalog untouched.
    """

    options = options or OutlineOptions()
    if options.fit not in SUPPORTED_FITS:
        raise ValueError(f"Unsupported destination fit: {options.fit!r}")

    normalized = normalize_items(
        items,
        id_factory=id_factory,
        default_title=options.default_title,
        strict=options.strict,
    )
    forest = build_tree(normalized)
    OutlineSynthesizer(
        document,
        fit=options.fit,
        page_mode=_normalize_page_mode(options.page_mode),
    ).synthesize(forest)
    return normalized


def read_outline(
    document: BackendDocument,
    options: Optional[OutlineOptions] = None,
    *,
    id_factory: IdFactory = uuid_id_factory,
) -> List[OutlineItem]:
    """Return the flat outline of a loaded document."""

    options = options or OutlineOptions()
    forest = OutlineWalker(
        document,
        default_title=options.default_title,
        max_depth=options.max_depth,
        id_factory=id_factory,
    ).walk()
    return flatten(forest)


def apply_outline(
    data: bytes,
    items: Iterable[ItemLike],
    *,
    backend: Optional[OutlineBackend] = None,
    options: Optional[OutlineOptions] = None,
    id_factory: IdFactory = uuid_id_factory,
) -> bytes:
    """Return ``data`` re-serialized with its outline replaced by ``items``.

    ``items`` may be :class:`OutlineItem` instances or mappings of the
    ``{id?, title?, pageIndex?, level?}`` shape.
    """

    backend = backend or PypdfBackend()
    with time_block(LOGGER, "Outline apply"):
        document = backend.load(data)
        written = write_outline(document, items, options, id_factory=id_factory)
        result = document.save()
    LOGGER.info("Applied %d outline entries", len(written))
    return result


def extract_outline(
    data: bytes,
    *,
    backend: Optional[OutlineBackend] = None,
    options: Optional[OutlineOptions] = None,
    id_factory: IdFactory = uuid_id_factory,
) -> List[OutlineItem]:
    """Return the outline stored in ``data`` as a flat list with fresh ids."""

    backend = backend or PypdfBackend()
    with time_block(LOGGER, "Outline extract"):
        document = backend.load(data)
        items = read_outline(document, options, id_factory=id_factory)
    LOGGER.info("Extracted %d outline entries", len(items))
    return items


__all__ = [
    "apply_outline",
    "extract_outline",
    "read_outline",
    "write_outline",
]
