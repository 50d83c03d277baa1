from __future__ import annotations

import json
from pathlib import Path

import pytest

from pdf_outline.exceptions import OutlineFileError
from pdf_outline.ids import sequential_id_factory
from pdf_outline.outline_file import (
    FORMAT_TEXT,
    detect_format,
    dumps,
    dumps_text,
    loads_json,
    loads_text,
    read_outline_file,
    write_outline_file,
)
from pdf_outline.types import OutlineItem

ITEMS = [
    OutlineItem(id="cover", title="Cover", page_index=0, level=0),
    OutlineItem(id="intro", title="Introduction", page_index=2, level=0),
    OutlineItem(id="goals", title="Goals", page_index=3, level=1),
]


def test_detect_format() -> None:
    assert detect_format("outline.txt") == "text"
    assert detect_format("outline.OUTLINE") == "text"
    assert detect_format("outline.json") == "json"
    assert detect_format("outline") == "json"


def test_json_file_round_trip(tmp_path: Path) -> None:
    path = write_outline_file(tmp_path / "nested" / "outline.json", ITEMS)

    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["version"] == 1
    assert payload["items"][2] == {"id": "goals", "title": "Goals", "pageIndex": 3, "level": 1}
    assert read_outline_file(path) == ITEMS
    assert not list(path.parent.glob("*.tmp"))


def test_json_accepts_bare_lists_and_applies_defaults() -> None:
    items = loads_json('[{"pageIndex": -3}, {"title": "Named", "level": 1}]', id_factory=sequential_id_factory())

    assert items == [
        OutlineItem(id="item-1", title="Untitled", page_index=0, level=0),
        OutlineItem(id="item-2", title="Named", page_index=0, level=1),
    ]


@pytest.mark.parametrize(
    "text",
    ["{not json", '{"version": 2, "items": []}', '{"items": {"title": "x"}}', '["just a string"]'],
)
def test_invalid_json_outlines(text: str) -> None:
    with pytest.raises(OutlineFileError):
        loads_json(text)


def test_text_format_uses_tabs_and_one_based_pages() -> None:
    assert dumps_text(ITEMS) == "Cover\t1\nIntroduction\t3\n\tGoals\t4\n"
    assert dumps_text([]) == ""


def test_text_round_trip(tmp_path: Path) -> None:
    path = write_outline_file(tmp_path / "outline.txt", ITEMS)

    items = read_outline_file(path, id_factory=sequential_id_factory())

    assert [(item.title, item.page_index, item.level) for item in items] == [
        ("Cover", 0, 0),
        ("Introduction", 2, 0),
        ("Goals", 3, 1),
    ]


def test_loads_text_skips_comments_and_blank_lines() -> None:
    text = "# table of contents\n\nPreface\n\tPart\tOne\t7\n\t\tAppendix\t12\r\n"

    items = loads_text(text, id_factory=sequential_id_factory())

    assert [(item.title, item.page_index, item.level) for item in items] == [
        ("Preface", 0, 0),
        ("Part\tOne", 6, 1),
        ("Appendix", 11, 2),
    ]


def test_loads_text_rejects_bad_page_numbers() -> None:
    with pytest.raises(OutlineFileError, match="Line 2"):
        loads_text("Cover\t1\nBroken\tten\n")


def test_text_titles_are_kept_on_one_line() -> None:
    text = dumps([OutlineItem(id="x", title="Multi\nline\ttitle", page_index=0, level=0)], FORMAT_TEXT)

    assert text == "Multi line title\t1\n"


def test_unknown_format_and_missing_file(tmp_path: Path) -> None:
    with pytest.raises(OutlineFileError):
        write_outline_file(tmp_path / "outline.json", ITEMS, fmt="yaml")
    with pytest.raises(OutlineFileError):
        read_outline_file(tmp_path / "missing.json")
    with pytest.raises(OutlineFileError):
        dumps(ITEMS, "csv")


def test_utf8_bom_is_accepted(tmp_path: Path) -> None:
    path = tmp_path / "outline.txt"
    path.write_bytes("\ufeffÜbersicht\t2\n".encode("utf-8"))

    items = read_outline_file(path)

    assert [(item.title, item.page_index) for item in items] == [("Übersicht", 1)]
