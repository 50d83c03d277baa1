"""Reading and writing outline files.

Two formats are supported:

``json``
    ``{"version": 1, "items": [{"id", "title", "pageIndex", "level"}, ...]}``
    with zero-based page indices. A bare list of items is accepted on read.

``text``
    One entry per line, indented with one tab per level, the title and the
    one-based page number separated by a tab::

        Cover	1
        Introduction	3
        	Goals	4

    Blank lines and lines starting with ``#`` are ignored.
"""

from __future__ import annotations

import json
import logging
import tempfile
from pathlib import Path
from typing import Any, Iterable, List, Optional

from .exceptions import InvalidOutlineError, OutlineFileError
from .ids import IdFactory, uuid_id_factory
from .tree import normalize_items
from .types import DEFAULT_TITLE, OutlineItem
from .utils import PathLike

LOGGER = logging.getLogger("pdf_outline.outline_file")

FORMAT_JSON = "json"
FORMAT_TEXT = "text"
FORMATS = (FORMAT_JSON, FORMAT_TEXT)

VERSION = 1

_TEXT_SUFFIXES = {".txt", ".outline"}


def detect_format(path: PathLike) -> str:
    """Guess the format of ``path`` from its suffix, defaulting to JSON."""

    return FORMAT_TEXT if Path(path).suffix.lower() in _TEXT_SUFFIXES else FORMAT_JSON


# ----------------------------------------------------------------------
# JSON
# ----------------------------------------------------------------------
def dumps_json(items: Iterable[OutlineItem]) -> str:
    payload = {"version": VERSION, "items": [item.to_dict() for item in items]}
    return json.dumps(payload, indent=2, ensure_ascii=False)


def loads_json(
    text: str,
    *,
    id_factory: IdFactory = uuid_id_factory,
    default_title: str = DEFAULT_TITLE,
) -> List[OutlineItem]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise OutlineFileError(f"Invalid outline JSON: {exc}") from exc

    if isinstance(data, dict):
        version = data.get("version", VERSION)
        if version != VERSION:
            raise OutlineFileError(f"Unsupported outline file version: {version}")
        raw_items = data.get("items", [])
    else:
        raw_items = data

    if not isinstance(raw_items, list) or not all(isinstance(entry, dict) for entry in raw_items):
        raise OutlineFileError("Outline JSON must contain a list of item objects")

    try:
        return normalize_items(raw_items, id_factory=id_factory, default_title=default_title)
    except InvalidOutlineError as exc:
        raise OutlineFileError(str(exc)) from exc


# ----------------------------------------------------------------------
# Tab-indented text
# ----------------------------------------------------------------------
def dumps_text(items: Iterable[OutlineItem]) -> str:
    lines = []
    for item in items:
        title = (item.title or "").replace("\t", " ").replace("\r", " ").replace("\n", " ")
        lines.append("\t" * item.level + f"{title}\t{(item.page_index or 0) + 1}")
    return "\n".join(lines) + ("\n" if lines else "")


def _parse_text_line(line: str, line_number: int) -> dict[str, Any]:
    stripped = line.lstrip("\t")
    level = len(line) - len(stripped)
    title, separator, page = stripped.rpartition("\t")
    if not separator:
        return {"title": stripped.strip() or None, "pageIndex": 0, "level": level}
    try:
        page_number = int(page.strip())
    except ValueError as exc:
        raise OutlineFileError(f"Line {line_number}: invalid page number {page.strip()!r}") from exc
    return {"title": title.strip() or None, "pageIndex": page_number - 1, "level": level}


def loads_text(
    text: str,
    *,
    id_factory: IdFactory = uuid_id_factory,
    default_title: str = DEFAULT_TITLE,
) -> List[OutlineItem]:
    raw_items = []
    for line_number, line in enumerate(text.splitlines(), start=1):
        if not line.strip() or line.lstrip().startswith("#"):
            continue
        raw_items.append(_parse_text_line(line.rstrip("\r\n "), line_number))
    return normalize_items(raw_items, id_factory=id_factory, default_title=default_title)


# ----------------------------------------------------------------------
# Files
# ----------------------------------------------------------------------
def read_outline_file(
    path: PathLike,
    fmt: Optional[str] = None,
    *,
    id_factory: IdFactory = uuid_id_factory,
    default_title: str = DEFAULT_TITLE,
) -> List[OutlineItem]:
    """Load the items of an outline file."""

    path = Path(path)
    fmt = fmt or detect_format(path)
    if fmt not in FORMATS:
        raise OutlineFileError(f"Unsupported outline format: {fmt}")
    try:
        text = path.read_text(encoding="utf-8-sig")
    except OSError as exc:
        raise OutlineFileError(f"Cannot read outline file: {path}. Error: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise OutlineFileError(f"Outline file is not UTF-8 text: {path}") from exc

    loader = loads_text if fmt == FORMAT_TEXT else loads_json
    items = loader(text, id_factory=id_factory, default_title=default_title)
    LOGGER.debug("Read %d outline entries from %s", len(items), path)
    return items


def write_outline_file(path: PathLike, items: Iterable[OutlineItem], fmt: Optional[str] = None) -> Path:
    """Write ``items`` to ``path`` atomically and return the path."""

    path = Path(path)
    fmt = fmt or detect_format(path)
    if fmt not in FORMATS:
        raise OutlineFileError(f"Unsupported outline format: {fmt}")
    content = dumps_text(items) if fmt == FORMAT_TEXT else dumps_json(items)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w", delete=False, dir=path.parent, suffix=".tmp", encoding="utf-8"
        ) as handle:
            handle.write(content)
            temp_path = Path(handle.name)
        temp_path.replace(path)
    except OSError as exc:
        raise OutlineFileError(f"Cannot write outline file: {path}. Error: {exc}") from exc

    LOGGER.debug("Wrote outline file %s (%s)", path, fmt)
    return path


def dumps(items: Iterable[OutlineItem], fmt: str = FORMAT_JSON) -> str:
    if fmt == FORMAT_TEXT:
        return dumps_text(items)
    if fmt == FORMAT_JSON:
        return dumps_json(items)
    raise OutlineFileError(f"Unsupported outline format: {fmt}")


__all__ = [
    "FORMATS",
    "FORMAT_JSON",
    "FORMAT_TEXT",
    "VERSION",
    "detect_format",
    "dumps",
    "dumps_json",
    "dumps_text",
    "loads_json",
    "loads_text",
    "read_outline_file",
    "write_outline_file",
]
