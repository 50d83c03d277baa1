"""Conversion between flat, level-annotated outlines and outline forests.

:func:`build_tree` and :func:`flatten` are pure, total functions over the
same node shape.  For every flat outline that satisfies the level
invariants (first level is 0, no level is more than one deeper than its
predecessor) they are inverse to each other::

    flatten(build_tree(items)) == items
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator, List, Mapping, Sequence, Tuple, Union

from .exceptions import InvalidOutlineError
from .ids import IdFactory, uuid_id_factory
from .types import DEFAULT_TITLE, OutlineItem, OutlineNode

LOGGER = logging.getLogger("pdf_outline.tree")

ItemLike = Union[OutlineItem, Mapping[str, Any]]

_ROOT_LEVEL = -1


def build_tree(items: Sequence[OutlineItem]) -> List[OutlineNode]:
    """Nest a flat outline into an ordered forest using the item levels.

    Pre-conditions:
        ``items`` is in display order. Levels are non-negative integers.

    Post-conditions:
        Every item appears exactly once, in preorder. An item becomes the
        last child of the closest preceding item with a smaller level, or a
        root when there is none. An item whose level skips ahead of its
        predecessor is therefore attached to the nearest shallower ancestor.
        The input is not modified.
    """

    roots: List[OutlineNode] = []
    stack: List[Tuple[OutlineNode | None, int]] = [(None, _ROOT_LEVEL)]

    for item in items:
        level = max(0, item.level)
        while stack[-1][1] >= level:
            stack.pop()
        node = OutlineNode.from_item(item)
        parent = stack[-1][0]
        if parent is None:
            roots.append(node)
        else:
            parent.children.append(node)
        stack.append((node, level))

    return roots


def flatten(forest: Sequence[OutlineNode]) -> List[OutlineItem]:
    """Emit a forest as a flat outline in preorder.

    Pre-conditions:
        ``forest`` is an ordered list of root nodes.

    Post-conditions:
        One item per node, parents before their children, siblings in
        order. Each item's ``level`` is the node's depth (0 for roots),
        regardless of the ``level`` stored on the node.
    """

    return [node.to_item(depth) for node, depth in iter_nodes(forest)]


def iter_nodes(forest: Iterable[OutlineNode], depth: int = 0) -> Iterator[Tuple[OutlineNode, int]]:
    """Yield ``(node, depth)`` pairs in preorder.

    Iterative, so arbitrarily deep forests do not hit the recursion limit.
    """

    stack: List[Tuple[OutlineNode, int]] = [(node, depth) for node in reversed(list(forest))]
    while stack:
        node, node_depth = stack.pop()
        yield node, node_depth
        stack.extend((child, node_depth + 1) for child in reversed(node.children))


def count_descendants(node: OutlineNode) -> int:
    """Return the number of nodes below ``node`` at every depth."""

    return sum(1 for _ in iter_nodes(node.children))


def count_nodes(forest: Iterable[OutlineNode]) -> int:
    return sum(1 for _ in iter_nodes(forest))


def find_level_skips(items: Sequence[OutlineItem]) -> List[int]:
    """Return indices of items nested more than one level below their predecessor."""

    skips: List[int] = []
    previous = _ROOT_LEVEL
    for index, item in enumerate(items):
        if item.level > previous + 1:
            skips.append(index)
        previous = item.level
    return skips


def validate_levels(items: Sequence[OutlineItem]) -> None:
    """Raise :class:`InvalidOutlineError` when the level invariants do not hold."""

    skips = find_level_skips(items)
    if skips:
        details = ", ".join(
            f"#{index} '{items[index].title}' (level {items[index].level})" for index in skips
        )
        raise InvalidOutlineError(f"Outline levels skip ahead at: {details}")


def normalize_items(
    items: Iterable[ItemLike],
    *,
    id_factory: IdFactory = uuid_id_factory,
    default_title: str = DEFAULT_TITLE,
    strict: bool = False,
) -> List[OutlineItem]:
    """Return fresh items with every default applied.

    Missing titles become ``default_title``, missing or negative page indices
    become 0, negative levels become 0 and missing ids are drawn from
    ``id_factory``. Duplicate ids are replaced (or rejected when ``strict``).
    With ``strict`` the level invariants are validated as well.
    """

    normalized: List[OutlineItem] = []
    seen: set[str] = set()

    for raw in items:
        if isinstance(raw, OutlineItem):
            item = OutlineItem(
                id=raw.id if raw.id else id_factory(),
                title=raw.title if raw.title is not None else default_title,
                page_index=max(0, raw.page_index or 0),
                level=max(0, raw.level or 0),
            )
        else:
            item = OutlineItem.from_dict(raw, id_factory=id_factory, default_title=default_title)

        if item.id in seen:
            if strict:
                raise InvalidOutlineError(f"Duplicate outline id: {item.id!r}")
            replacement = id_factory()
            LOGGER.warning("Duplicate outline id %r replaced with %r", item.id, replacement)
            item.id = replacement
        seen.add(item.id)
        normalized.append(item)

    if strict:
        validate_levels(normalized)
    else:
        skips = find_level_skips(normalized)
        if skips:
            LOGGER.warning(
                "%d outline item(s) skip levels and will be nested under the nearest shallower entry",
                len(skips),
            )

    return normalized


__all__ = [
    "build_tree",
    "flatten",
    "iter_nodes",
    "count_descendants",
    "count_nodes",
    "find_level_skips",
    "validate_levels",
    "normalize_items",
]
