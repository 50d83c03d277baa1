"""Editing operations over flat outlines.

Each operation takes the current list plus the id of the selected item and
returns a new list; the input list and its items are never modified. An
unknown id leaves the outline unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, List, Optional, Sequence, Tuple

from .ids import IdFactory, uuid_id_factory
from .tree import ItemLike, normalize_items
from .types import DEFAULT_TITLE, OutlineItem

LOGGER = logging.getLogger("pdf_outline.editing")

MAX_LEVEL = 6
NEW_ITEM_TITLE = "New Title"


def _copy(items: Sequence[OutlineItem]) -> List[OutlineItem]:
    return [replace(item) for item in items]


def index_of(items: Sequence[OutlineItem], item_id: Optional[str]) -> int:
    """Return the position of ``item_id`` in ``items``, ``-1`` when absent."""

    if item_id is None:
        return -1
    for index, item in enumerate(items):
        if item.id == item_id:
            return index
    return -1


def add_item(
    items: Sequence[OutlineItem],
    selected_id: Optional[str] = None,
    *,
    as_child: bool = False,
    title: str = NEW_ITEM_TITLE,
    page_index: int = 0,
    id_factory: IdFactory = uuid_id_factory,
) -> Tuple[List[OutlineItem], OutlineItem]:
    """Insert a new item after the selected one.

    The new item takes the selected item's level, or one level deeper when
    ``as_child`` is set (never deeper than :data:`MAX_LEVEL`). Without a
    selection it is appended at level 0. Returns the new list and the new
    item.
    """

    result = _copy(items)
    base = index_of(result, selected_id)
    insert_at = base + 1 if base >= 0 else len(result)
    base_level = result[base].level if base >= 0 else 0
    level = min(base_level + 1, MAX_LEVEL) if as_child else base_level

    item = OutlineItem(id=id_factory(), title=title, page_index=max(0, page_index), level=level)
    result.insert(insert_at, item)
    LOGGER.debug("Added outline item %r at %d (level %d)", item.id, insert_at, level)
    return result, item


def delete_item(
    items: Sequence[OutlineItem],
    selected_id: Optional[str],
) -> Tuple[List[OutlineItem], Optional[str]]:
    """Remove the selected item.

    Returns the new list and the id that should be selected next: the item
    that moved into the removed position, else its predecessor, else ``None``.
    """

    result = _copy(items)
    index = index_of(result, selected_id)
    if index < 0:
        return result, selected_id

    del result[index]
    if index < len(result):
        return result, result[index].id
    if index > 0:
        return result, result[index - 1].id
    return result, None


def adjust_level(items: Sequence[OutlineItem], selected_id: Optional[str], delta: int) -> List[OutlineItem]:
    result = _copy(items)
    index = index_of(result, selected_id)
    if index >= 0:
        result[index].level = max(0, result[index].level + delta)
    return result


def indent(items: Sequence[OutlineItem], selected_id: Optional[str]) -> List[OutlineItem]:
    return adjust_level(items, selected_id, 1)


def outdent(items: Sequence[OutlineItem], selected_id: Optional[str]) -> List[OutlineItem]:
    return adjust_level(items, selected_id, -1)


def move_item(items: Sequence[OutlineItem], selected_id: Optional[str], delta: int) -> List[OutlineItem]:
    """Move the selected item by ``delta`` positions; moves past either end are ignored."""

    result = _copy(items)
    index = index_of(result, selected_id)
    if index < 0:
        return result
    target = index + delta
    if target < 0 or target >= len(result):
        return result
    result.insert(target, result.pop(index))
    return result


def move_to(items: Sequence[OutlineItem], source_index: int, target_index: int) -> List[OutlineItem]:
    """Move the item at ``source_index`` so that it ends up at ``target_index``."""

    result = _copy(items)
    if not (0 <= source_index < len(result)) or not (0 <= target_index < len(result)):
        raise IndexError(f"Cannot move item {source_index} to {target_index} in an outline of {len(result)}")
    result.insert(target_index, result.pop(source_index))
    return result


def sanitize(
    items: Iterable[ItemLike],
    *,
    id_factory: IdFactory = uuid_id_factory,
    default_title: str = DEFAULT_TITLE,
) -> List[OutlineItem]:
    """Apply loader defaults: fresh ids, default title, page 0 and level 0."""

    return normalize_items(items, id_factory=id_factory, default_title=default_title)


__all__ = [
    "MAX_LEVEL",
    "NEW_ITEM_TITLE",
    "add_item",
    "adjust_level",
    "delete_item",
    "indent",
    "index_of",
    "move_item",
    "move_to",
    "outdent",
    "sanitize",
]
