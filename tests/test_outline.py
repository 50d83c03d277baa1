from __future__ import annotations

import io
import logging
from typing import Any, Callable

import pytest
from pypdf import PdfReader, PdfWriter

from pdf_outline import (
    EncryptedPDFError,
    InvalidOutlineError,
    InvalidPDFError,
    OutlineItem,
    OutlineOptions,
    apply_outline,
    extract_outline,
)
from pdf_outline.ids import sequential_id_factory


def _summary(items: list[OutlineItem]) -> list[tuple[str, int, int]]:
    return [(item.title, item.page_index, item.level) for item in items]


def test_round_trip_reproduces_titles_levels_and_pages(blank_pdf: bytes) -> None:
    items = [
        OutlineItem(id="a", title="Front Matter", page_index=0, level=0),
        OutlineItem(id="b", title="Preface", page_index=1, level=1),
        OutlineItem(id="c", title="Chapter 1 — Grundlagen", page_index=2, level=0),
        OutlineItem(id="d", title="1.1 Überblick", page_index=3, level=1),
        OutlineItem(id="e", title="1.1.1 细节", page_index=4, level=2),
        OutlineItem(id="f", title="Chapter 2", page_index=8, level=0),
        OutlineItem(id="g", title="Back Cover", page_index=11, level=0),
    ]

    extracted = extract_outline(apply_outline(blank_pdf, items))

    assert _summary(extracted) == _summary(items)


def test_deeply_nested_outline_round_trips(blank_pdf: bytes) -> None:
    items = [{"title": f"L{level}", "pageIndex": level % 12, "level": level} for level in range(70)]

    extracted = extract_outline(apply_outline(blank_pdf, items))

    assert _summary(extracted) == [(f"L{level}", level % 12, level) for level in range(70)]


def test_extract_assigns_fresh_ids(blank_pdf: bytes, scenario_items: list[dict[str, Any]]) -> None:
    data = apply_outline(blank_pdf, scenario_items)

    extracted = extract_outline(data, id_factory=sequential_id_factory("x-"))
    random_ids = [item.id for item in extract_outline(data)]

    assert [item.id for item in extracted] == ["x-1", "x-2", "x-3", "x-4"]
    assert len(set(random_ids)) == 4
    assert not {"cover", "intro", "goals", "appendix"} & set(random_ids)


def test_scenario_round_trip(blank_pdf: bytes, scenario_items: list[dict[str, Any]]) -> None:
    extracted = extract_outline(apply_outline(blank_pdf, scenario_items))

    assert _summary(extracted) == [
        ("Cover", 0, 0),
        ("Introduction", 2, 0),
        ("Goals", 3, 1),
        ("Appendix", 10, 0),
    ]


def test_missing_fields_are_defaulted(blank_pdf: bytes) -> None:
    extracted = extract_outline(apply_outline(blank_pdf, [{"pageIndex": -3}]))

    assert _summary(extracted) == [("Untitled", 0, 0)]


def test_page_beyond_document_falls_back_to_first_page(
    pdf_bytes_factory: Callable[[int], bytes],
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.WARNING, logger="pdf_outline.destinations")

    data = apply_outline(pdf_bytes_factory(3), [{"title": "Too far", "pageIndex": 10}])

    assert _summary(extract_outline(data)) == [("Too far", 0, 0)]
    assert "beyond the last page" in caplog.text


def test_empty_outline_leaves_document_without_outlines(blank_pdf: bytes) -> None:
    data = apply_outline(blank_pdf, [])

    reader = PdfReader(io.BytesIO(data))
    assert "/Outlines" not in reader.trailer["/Root"]
    assert extract_outline(data) == []
    assert len(reader.pages) == 12


def test_apply_replaces_existing_outline(blank_writer, writer_bytes) -> None:
    writer: PdfWriter = blank_writer(4)
    writer.add_outline_item("Old", 1)
    original = writer_bytes(writer)

    data = apply_outline(original, [{"title": "New", "pageIndex": 3}])

    assert _summary(extract_outline(data)) == [("New", 3, 0)]
    assert _summary(extract_outline(original)) == [("Old", 1, 0)]


def test_apply_keeps_pages_and_metadata(blank_pdf: bytes) -> None:
    data = apply_outline(blank_pdf, [{"title": "Start"}])

    reader = PdfReader(io.BytesIO(data))
    assert len(reader.pages) == 12
    assert reader.metadata.get("/Title") == "Sample"


def test_level_skip_is_reparented_unless_strict(blank_pdf: bytes) -> None:
    items = [{"title": "Top"}, {"title": "Deep", "level": 3}]

    assert _summary(extract_outline(apply_outline(blank_pdf, items))) == [("Top", 0, 0), ("Deep", 0, 1)]

    with pytest.raises(InvalidOutlineError):
        apply_outline(blank_pdf, items, options=OutlineOptions(strict=True))


def test_page_mode_and_fit_options(blank_pdf: bytes) -> None:
    options = OutlineOptions(fit="/Fit", page_mode="UseOutlines")

    data = apply_outline(blank_pdf, [{"title": "Start", "pageIndex": 5}], options=options)

    catalog = PdfReader(io.BytesIO(data)).trailer["/Root"]
    assert catalog["/PageMode"] == "/UseOutlines"
    assert catalog["/Outlines"]["/First"]["/Dest"][1] == "/Fit"
    assert _summary(extract_outline(data)) == [("Start", 5, 0)]


def test_unsupported_fit_option(blank_pdf: bytes) -> None:
    with pytest.raises(ValueError):
        apply_outline(blank_pdf, [{"title": "x"}], options=OutlineOptions(fit="/FitR"))


def test_default_title_option(blank_writer, writer_bytes) -> None:
    writer: PdfWriter = blank_writer(2)
    entry = writer.add_outline_item("Gone", 0)
    del entry.get_object()["/Title"]

    items = extract_outline(writer_bytes(writer), options=OutlineOptions(default_title="(untitled)"))

    assert [item.title for item in items] == ["(untitled)"]


def test_invalid_pdf_bytes() -> None:
    with pytest.raises(InvalidPDFError):
        extract_outline(b"this is not a pdf")
    with pytest.raises(InvalidPDFError):
        apply_outline(b"", [{"title": "x"}])


def test_encrypted_pdf_is_rejected(blank_writer, writer_bytes) -> None:
    writer: PdfWriter = blank_writer(2)
    writer.encrypt("secret", algorithm="RC4-128")

    with pytest.raises(EncryptedPDFError):
        extract_outline(writer_bytes(writer))


def test_custom_backend_is_used(blank_pdf: bytes) -> None:
    from pdf_outline.backends import PypdfBackend

    class RecordingBackend(PypdfBackend):
        def __init__(self) -> None:
            self.loads = 0

        def load(self, data: bytes):
            self.loads += 1
            return super().load(data)

    backend = RecordingBackend()
    data = apply_outline(blank_pdf, [{"title": "x"}], backend=backend)
    extract_outline(data, backend=backend)

    assert backend.loads == 2
