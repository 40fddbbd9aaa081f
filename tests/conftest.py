from __future__ import annotations

import io
from pathlib import Path
import string

from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen
import pytest


PROBE_CHARACTERS = string.ascii_lowercase + " "


def _glyph_name(char: str) -> str:
    return "space" if char == " " else char


def build_test_font(
    *,
    units_per_em: int = 1000,
    ascent: int = 800,
    descent: int = -200,
    line_gap: int = 0,
    letter_width: int = 500,
    space_width: int = 250,
    characters: str = PROBE_CHARACTERS,
    family: str = "Probe Sans",
) -> bytes:
    """Build a minimal TrueType font mapping ``characters`` to empty glyphs."""
    fb = FontBuilder(units_per_em, isTTF=True)
    names = [_glyph_name(char) for char in PROBE_CHARACTERS]
    fb.setupGlyphOrder([".notdef", *names])
    fb.setupCharacterMap({ord(char): _glyph_name(char) for char in characters})

    empty = TTGlyphPen(None).glyph()
    fb.setupGlyf({name: empty for name in [".notdef", *names]})

    metrics = {".notdef": (units_per_em, 0)}
    for char in PROBE_CHARACTERS:
        width = space_width if char == " " else letter_width
        metrics[_glyph_name(char)] = (width, 0)
    fb.setupHorizontalMetrics(metrics)
    fb.setupHorizontalHeader(ascent=ascent, descent=descent)
    fb.font["hhea"].lineGap = line_gap

    fb.setupNameTable({"familyName": family, "styleName": "Regular"})
    fb.setupOS2(sTypoAscender=ascent, sTypoDescender=descent, sTypoLineGap=line_gap)
    fb.setupPost()
    fb.setupMaxp()

    buffer = io.BytesIO()
    fb.font.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def font_bytes() -> bytes:
    return build_test_font()


@pytest.fixture
def write_font(tmp_path: Path):
    def _write(name: str, **kwargs) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(build_test_font(**kwargs))
        return path

    return _write


@pytest.fixture
def make_font():
    return build_test_font
