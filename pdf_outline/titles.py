"""Encoding and decoding of outline entry titles."""

from __future__ import annotations

import codecs
import logging
from typing import Optional

from pypdf.generic import ByteStringObject, NameObject, TextStringObject, create_string_object

from .types import DEFAULT_TITLE

LOGGER = logging.getLogger("pdf_outline.titles")


def encode_title(title: str) -> ByteStringObject:
    """Encode ``title`` as a UTF-16BE byte string with a byte order mark.

    Byte strings are written in hexadecimal form, so any Unicode text
    survives serialisation unchanged.
    """

    return ByteStringObject(codecs.BOM_UTF16_BE + title.encode("utf-16-be", errors="replace"))


def try_decode_title(raw: object) -> Optional[str]:
    """Decode a ``/Title`` value, returning ``None`` when it is not text."""

    if raw is None or isinstance(raw, NameObject):
        return None
    if isinstance(raw, TextStringObject):
        return str(raw)
    if isinstance(raw, (bytes, ByteStringObject)):
        data = bytes(raw)
        if data.startswith(codecs.BOM_UTF8):
            try:
                return data[len(codecs.BOM_UTF8):].decode("utf-8")
            except UnicodeDecodeError:
                return None
        decoded = create_string_object(data)
        if isinstance(decoded, TextStringObject):
            return str(decoded)
        return None
    if isinstance(raw, str):
        return str(raw)
    return None


def decode_title(raw: object, default: str = DEFAULT_TITLE) -> str:
    """Decode a ``/Title`` value, falling back to ``default``."""

    title = try_decode_title(raw)
    if title is None:
        LOGGER.debug("Undecodable outline title %r; using %r", raw, default)
        return default
    return title


__all__ = ["encode_title", "try_decode_title", "decode_title"]
