"""pypdf backend implementation for PDF Outline."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, List, Mapping, Optional

from pypdf import PdfReader, PdfWriter
from pypdf.errors import PdfReadError
from pypdf.generic import (
    DictionaryObject,
    IndirectObject,
    NameObject,
    NullObject,
    NumberObject,
    PdfObject,
)

from ..exceptions import EncryptedPDFError, InvalidPDFError
from .base import BackendDocument, OutlineBackend

LOGGER = logging.getLogger("pdf_outline.backends.pypdf")


def _as_pdf_object(value: Any) -> PdfObject:
    if isinstance(value, PdfObject):
        return value
    if isinstance(value, bool):
        raise TypeError(f"Unsupported record value: {value!r}")
    if isinstance(value, int):
        return NumberObject(value)
    if isinstance(value, str) and value.startswith("/"):
        return NameObject(value)
    raise TypeError(f"Unsupported record value: {value!r}")


@dataclass
class PypdfDocument(BackendDocument):
    writer: PdfWriter
    _named_pages: Optional[Dict[str, Any]] = field(default=None, repr=False)

    def page_refs(self) -> List[Any]:
        return [page.indirect_reference for page in self.writer.pages]

    def allocate(self) -> IndirectObject:
        return self.writer._add_object(NullObject())  # type: ignore[attr-defined]

    def make_record(self, fields: Mapping[str, Any]) -> DictionaryObject:
        record = DictionaryObject()
        for key, value in fields.items():
            if value is None:
                continue
            record[NameObject(key)] = _as_pdf_object(value)
        return record

    def assign(self, ref: IndirectObject, record: DictionaryObject) -> None:
        self.writer._replace_object(ref, record)  # type: ignore[attr-defined]

    def resolve(self, obj: Any) -> Any:
        if isinstance(obj, IndirectObject):
            try:
                resolved = obj.get_object()
            except Exception:
                return None
            if isinstance(resolved, NullObject):
                return None
            return resolved
        if isinstance(obj, NullObject):
            return None
        return obj

    def ref_key(self, obj: Any) -> Optional[Hashable]:
        if isinstance(obj, IndirectObject):
            return (obj.idnum, obj.generation)
        return None

    def catalog_get(self, key: str) -> Any:
        return self.writer.root_object.get(NameObject(key))

    def catalog_set(self, key: str, value: Any) -> None:
        self.writer.root_object[NameObject(key)] = _as_pdf_object(value)

    def named_destination_page(self, name: str) -> Any:
        if self._named_pages is None:
            try:
                destinations = self.writer.named_destinations
            except Exception as exc:
                LOGGER.debug("Named destinations unavailable: %s", exc)
                destinations = {}
            self._named_pages = {key: dest.page for key, dest in destinations.items()}
        return self._named_pages.get(name)

    def save(self) -> bytes:
        buffer = io.BytesIO()
        self.writer.write(buffer)
        return buffer.getvalue()


class PypdfBackend(OutlineBackend):
    """Backend implementation that uses `pypdf` under the hood."""

    def load(self, data: bytes) -> PypdfDocument:
        try:
            reader = PdfReader(io.BytesIO(data))
        except PdfReadError as exc:
            raise InvalidPDFError(f"Corrupted or invalid PDF data. Error: {exc}") from exc
        except Exception as exc:
            raise InvalidPDFError(f"Unexpected error reading PDF. Error: {exc}") from exc

        if reader.is_encrypted:
            raise EncryptedPDFError("Encrypted PDFs are not supported.")

        try:
            writer = PdfWriter(clone_from=reader)
        except Exception as exc:
            raise InvalidPDFError(f"Unable to load PDF object store. Error: {exc}") from exc

        num_pages = len(writer.pages)
        if num_pages == 0:
            raise InvalidPDFError("PDF has no pages.")

        LOGGER.debug("Loaded PDF with %d page(s), %d bytes", num_pages, len(data))
        return PypdfDocument(num_pages=num_pages, file_size=len(data), writer=writer)
