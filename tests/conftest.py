from __future__ import annotations

import io
from pathlib import Path
from typing import Any, Callable
import sys

import pytest
from pypdf import PdfWriter

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pdf_outline.ids import IdFactory, sequential_id_factory  # noqa: E402


def _blank_writer(page_count: int) -> PdfWriter:
    writer = PdfWriter()
    for _ in range(page_count):
        writer.add_blank_page(width=200, height=200)
    writer.add_metadata({"/Producer": "pdf-outline-tests", "/Title": "Sample"})
    return writer


def _to_bytes(writer: PdfWriter) -> bytes:
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture()
def blank_writer() -> Callable[[int], PdfWriter]:
    return _blank_writer


@pytest.fixture()
def writer_bytes() -> Callable[[PdfWriter], bytes]:
    return _to_bytes


@pytest.fixture()
def pdf_bytes_factory() -> Callable[[int], bytes]:
    def _create(page_count: int = 12) -> bytes:
        return _to_bytes(_blank_writer(page_count))

    return _create


@pytest.fixture()
def blank_pdf(pdf_bytes_factory: Callable[[int], bytes]) -> bytes:
    return pdf_bytes_factory(12)


@pytest.fixture()
def pdf_factory(tmp_path: Path) -> Callable[[str, int], Path]:
    def _create(filename: str, page_count: int = 12) -> Path:
        path = tmp_path / filename
        with path.open("wb") as handle:
            _blank_writer(page_count).write(handle)
        return path

    return _create


@pytest.fixture()
def sample_pdf(pdf_factory: Callable[[str, int], Path]) -> Path:
    return pdf_factory("sample.pdf", 12)


@pytest.fixture()
def ids() -> IdFactory:
    return sequential_id_factory()


@pytest.fixture()
def scenario_items() -> list[dict[str, Any]]:
    return [
        {"id": "cover", "title": "Cover", "pageIndex": 0, "level": 0},
        {"id": "intro", "title": "Introduction", "pageIndex": 2, "level": 0},
        {"id": "goals", "title": "Goals", "pageIndex": 3, "level": 1},
        {"id": "appendix", "title": "Appendix", "pageIndex": 10, "level": 0},
    ]
