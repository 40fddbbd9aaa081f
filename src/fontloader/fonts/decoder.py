"""fontTools adapter exposing the glyph surface used by the width probe."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
import io
import struct

from fontTools.ttLib import TTFont, TTLibError

from fontloader.core.exceptions import FontDecodeError
from fontloader.fonts.metrics import DecodedFontMetrics, calc_average_width


NOTDEF = ".notdef"


@dataclass(frozen=True, slots=True)
class FontGlyph:
    name: str
    advance_width: int
    code_points: tuple[int, ...]


class FontToolsFont:
    """Read-only view over a ``TTFont`` with per-character glyph lookup.

    Characters are mapped through the best Unicode cmap without any layout
    features; unmapped characters resolve to ``.notdef`` while keeping their
    code point so callers can detect the gap.
    """

    def __init__(self, font: TTFont) -> None:
        self.font = font
        self._cmap: dict[int, str] = dict(font.getBestCmap() or {})
        self._hmtx = font["hmtx"]

    @property
    def ascent(self) -> int:
        return int(self.font["hhea"].ascent)

    @property
    def descent(self) -> int:
        return int(self.font["hhea"].descent)

    @property
    def line_gap(self) -> int:
        return int(self.font["hhea"].lineGap)

    @property
    def units_per_em(self) -> int:
        return int(self.font["head"].unitsPerEm)

    def has_glyph_for_code_point(self, code_point: int) -> bool:
        return code_point in self._cmap

    def glyph_for_code_point(self, code_point: int) -> FontGlyph:
        name = self._cmap.get(code_point, NOTDEF)
        advance, _lsb = self._hmtx[name]
        return FontGlyph(name=name, advance_width=advance, code_points=(code_point,))

    def glyphs_for_string(self, text: str) -> Sequence[FontGlyph]:
        return [self.glyph_for_code_point(ord(char)) for char in text]


def load_font(data: bytes) -> FontToolsFont:
    """Decode raw TTF/OTF/WOFF/WOFF2 bytes."""
    try:
        font = TTFont(io.BytesIO(data))
        return FontToolsFont(font)
    except (TTLibError, KeyError, ImportError, OSError, ValueError, struct.error) as exc:
        raise FontDecodeError(f"Unable to decode font data: {exc}") from exc


def decode_metrics(font: FontToolsFont) -> DecodedFontMetrics:
    """Collect the box metrics and probe width of ``font``.

    Raises ``FontDecodeError`` when the ``hhea`` or ``head`` table is missing
    or malformed. An unmeasurable probe only leaves the width unset.
    """
    try:
        ascent, descent, line_gap = font.ascent, font.descent, font.line_gap
        units_per_em = font.units_per_em
    except (KeyError, AttributeError, TTLibError, struct.error) as exc:
        raise FontDecodeError(f"Unable to read font metrics: {exc}") from exc
    return DecodedFontMetrics(
        ascent=ascent,
        descent=descent,
        line_gap=line_gap,
        units_per_em=units_per_em,
        average_glyph_width=calc_average_width(font),
    )


__all__ = ["FontGlyph", "FontToolsFont", "decode_metrics", "load_font"]
