"""Backend protocol for PDF object-store operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Hashable, List, Mapping, Optional, Protocol


@dataclass
class BackendDocument:
    """Represents a loaded PDF document and its mutable object store.

    Records are addressed by references handed out by :meth:`allocate`;
    nothing outside the store holds direct pointers between records.
    """

    num_pages: int
    file_size: int

    def page_refs(self) -> List[Any]:
        """Return references to the document's pages in page order."""
        raise NotImplementedError

    def allocate(self) -> Any:
        """Reserve a fresh reference in the object store."""
        raise NotImplementedError

    def make_record(self, fields: Mapping[str, Any]) -> Any:
        """Build a dictionary record from ``fields``; ``None`` values are omitted."""
        raise NotImplementedError

    def assign(self, ref: Any, record: Any) -> None:
        """Store ``record`` under a reference obtained from :meth:`allocate`."""
        raise NotImplementedError

    def resolve(self, obj: Any) -> Any:
        """Dereference ``obj`` if it is a reference; ``None`` if it cannot be resolved."""
        raise NotImplementedError

    def ref_key(self, obj: Any) -> Optional[Hashable]:
        """Return a hashable identity for a reference, ``None`` for direct objects."""
        raise NotImplementedError

    def catalog_get(self, key: str) -> Any:
        raise NotImplementedError

    def catalog_set(self, key: str, value: Any) -> None:
        raise NotImplementedError

    def named_destination_page(self, name: str) -> Any:
        """Return the page reference of a named destination, if any."""
        raise NotImplementedError

    def save(self) -> bytes:
        """Serialise the document, including any assigned records."""
        raise NotImplementedError


class OutlineBackend(Protocol):
    """Protocol defining how PDF bytes are loaded into a backend document."""

    def load(self, data: bytes) -> BackendDocument:
        """Parse ``data`` and return a backend document wrapper."""
