"""Font container detection from magic bytes."""

from __future__ import annotations


_SIGNATURES: tuple[tuple[bytes, str], ...] = (
    (b"wOF2", "woff2"),
    (b"wOFF", "woff"),
    (b"OTTO", "opentype"),
    (b"\x00\x01\x00\x00", "truetype"),
)

MIME_TYPES = {
    "woff2": "font/woff2",
    "woff": "font/woff",
    "opentype": "font/otf",
    "truetype": "font/ttf",
}


def detect_font_format(data: bytes) -> str:
    """Return the CSS ``format()`` keyword for ``data`` or ``"unknown"``."""
    header = bytes(data[:4])
    for signature, name in _SIGNATURES:
        if header == signature:
            return name
    return "unknown"


def mime_type(font_format: str) -> str | None:
    return MIME_TYPES.get(font_format)


__all__ = ["MIME_TYPES", "detect_font_format", "mime_type"]
