"""File-based adapter around a backend document for outline editing."""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import Iterable, List, Optional

from .backends import BackendDocument, OutlineBackend, PypdfBackend
from .exceptions import InvalidPDFError
from .ids import IdFactory, uuid_id_factory
from .outline import read_outline, write_outline
from .synthesizer import OUTLINES_KEY
from .tree import ItemLike
from .types import OutlineInfo, OutlineItem, OutlineOptions
from .utils import PathLike, ensure_output_directory, time_block

LOGGER = logging.getLogger("pdf_outline.document")


class OutlineDocument:
    """High level helper for reading and replacing the outline of a PDF.

    The original bytes are kept so every write starts again from a fresh
    object store; a failed write leaves the document as it was.
    """

    def __init__(
        self,
        data: bytes,
        *,
        path: Optional[Path] = None,
        backend: Optional[OutlineBackend] = None,
        options: Optional[OutlineOptions] = None,
    ) -> None:
        self.path = path
        self.backend: OutlineBackend = backend or PypdfBackend()
        self.options = options or OutlineOptions()
        self._data = data
        self._document: BackendDocument = self.backend.load(data)

    @classmethod
    def open(
        cls,
        pdf_path: PathLike,
        *,
        backend: Optional[OutlineBackend] = None,
        options: Optional[OutlineOptions] = None,
    ) -> "OutlineDocument":
        path = Path(pdf_path)
        try:
            data = path.read_bytes()
        except FileNotFoundError as exc:
            raise InvalidPDFError(f"File not found: {path}") from exc
        except OSError as exc:
            raise InvalidPDFError(f"Cannot read file: {path}. Error: {exc}") from exc
        LOGGER.debug("Opened %s (%d bytes)", path, len(data))
        return cls(data, path=path, backend=backend, options=options)

    # ------------------------------------------------------------------
    # Basic document information helpers
    # ------------------------------------------------------------------
    @property
    def document(self) -> BackendDocument:
        return self._document

    @property
    def page_count(self) -> int:
        return self._document.num_pages

    @property
    def file_size(self) -> int:
        return self._document.file_size

    @property
    def has_outline(self) -> bool:
        root = self._document.resolve(self._document.catalog_get(OUTLINES_KEY))
        if root is None or not hasattr(root, "get"):
            return False
        return root.get("/First") is not None

    # ------------------------------------------------------------------
    # Outline helpers
    # ------------------------------------------------------------------
    def read_outline(self, *, id_factory: IdFactory = uuid_id_factory) -> List[OutlineItem]:
        with time_block(LOGGER, "Outline extract"):
            return read_outline(self._document, self.options, id_factory=id_factory)

    def write_outline(
        self,
        items: Iterable[ItemLike],
        *,
        id_factory: IdFactory = uuid_id_factory,
    ) -> List[OutlineItem]:
        """Replace the outline and return the normalized items written."""

        document = self.backend.load(self._data)
        with time_block(LOGGER, "Outline apply"):
            written = write_outline(document, items, self.options, id_factory=id_factory)
            data = document.save()
        self._data = data
        self._document = self.backend.load(data)
        LOGGER.info("Applied %d outline entries", len(written))
        return written

    def to_bytes(self) -> bytes:
        return self._data

    def save(self, destination: Optional[PathLike] = None) -> Path:
        """Write the current bytes to ``destination`` (defaults to the source path)."""

        target = Path(destination) if destination is not None else self.path
        if target is None:
            raise ValueError("No destination given for a document opened from bytes")
        ensure_output_directory(target)
        with tempfile.NamedTemporaryFile("wb", delete=False, dir=target.parent, suffix=".tmp") as handle:
            handle.write(self._data)
            temp_path = Path(handle.name)
        temp_path.replace(target)
        LOGGER.info("Saved %s (%d bytes)", target, len(self._data))
        return target

    # ------------------------------------------------------------------
    # Reporting helpers
    # ------------------------------------------------------------------
    def to_info(self) -> OutlineInfo:
        items = read_outline(self._document, self.options)
        return OutlineInfo(
            num_pages=self.page_count,
            file_size=len(self._data),
            has_outline=self.has_outline,
            entries=len(items),
            max_level=max((item.level for item in items), default=-1),
            top_level=sum(1 for item in items if item.level == 0),
        )


__all__ = ["OutlineDocument"]
