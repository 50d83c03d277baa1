"""Id factories used to label outline items."""

from __future__ import annotations

import itertools
import uuid
from typing import Callable

IdFactory = Callable[[], str]


def uuid_id_factory() -> str:
    """Return a random UUID4 string."""

    return str(uuid.uuid4())


def sequential_id_factory(prefix: str = "item-") -> IdFactory:
    """Return a factory yielding ``prefix1``, ``prefix2``, ...

    Useful where ids must be reproducible, e.g. in tests or when diffing
    extracted outlines.
    """

    counter = itertools.count(1)

    def _next_id() -> str:
        return f"{prefix}{next(counter)}"

    return _next_id


__all__ = ["IdFactory", "uuid_id_factory", "sequential_id_factory"]
