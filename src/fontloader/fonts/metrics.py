"""Compute metric overrides that make a system font mimic a web font.

The fallback face declared next to a web font uses ``local()`` to point at a
generic system font (Arial or Times New Roman) and rescales it with
``size-adjust``. The vertical overrides are then expressed relative to the
rescaled em square so that the line box matches the real font.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol


AVERAGE_WIDTH_PROBE = "aaabcdeeeefghiijklmnnoopqrrssttuvwxyz      "
ZERO_OVERRIDE = "0.00%"


@dataclass(frozen=True, slots=True)
class FallbackReferenceFont:
    """Average lowercase width of a generic system font."""

    name: str
    average_glyph_width: float
    units_per_em: int

    @property
    def normalized_width(self) -> float:
        return self.average_glyph_width / self.units_per_em


SANS_SERIF_REFERENCE = FallbackReferenceFont(
    name="Arial",
    average_glyph_width=934.5116279069767,
    units_per_em=2048,
)
SERIF_REFERENCE = FallbackReferenceFont(
    name="Times New Roman",
    average_glyph_width=854.3953488372093,
    units_per_em=2048,
)


def reference_font(category: str) -> FallbackReferenceFont:
    """Return the reference font for ``category`` (anything but serif is sans)."""
    return SERIF_REFERENCE if category == "serif" else SANS_SERIF_REFERENCE


class Glyph(Protocol):
    @property
    def advance_width(self) -> float: ...

    @property
    def code_points(self) -> Sequence[int]: ...


class GlyphSource(Protocol):
    """Decoded font surface consumed by the width probe."""

    ascent: float
    descent: float
    line_gap: float
    units_per_em: int

    def glyphs_for_string(self, text: str) -> Sequence[Glyph]: ...

    def has_glyph_for_code_point(self, code_point: int) -> bool: ...


@dataclass(frozen=True, slots=True)
class DecodedFontMetrics:
    """Box metrics of one font file, in font design units."""

    ascent: float
    descent: float
    line_gap: float
    units_per_em: int
    average_glyph_width: float | None = None


@dataclass(frozen=True, slots=True)
class FallbackMetrics:
    """CSS-ready override values for a fallback ``@font-face``."""

    ascent_override: str
    descent_override: str
    line_gap_override: str
    fallback_font: str
    size_adjust: str

    @property
    def is_degenerate(self) -> bool:
        """True when the font could not be measured and overrides are zeroed."""
        return all(
            value == ZERO_OVERRIDE
            for value in (
                self.ascent_override,
                self.descent_override,
                self.line_gap_override,
                self.size_adjust,
            )
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "ascent_override": self.ascent_override,
            "descent_override": self.descent_override,
            "line_gap_override": self.line_gap_override,
            "fallback_font": self.fallback_font,
            "size_adjust": self.size_adjust,
        }


def calc_average_width(font: GlyphSource) -> float | None:
    """Mean advance width of the probe string, or ``None`` if a glyph is missing."""
    try:
        glyphs = list(font.glyphs_for_string(AVERAGE_WIDTH_PROBE))
        has_all_chars = all(
            font.has_glyph_for_code_point(code_point)
            for glyph in glyphs
            for code_point in glyph.code_points
        )
        if not has_all_chars or not glyphs:
            return None
        widths = [glyph.advance_width for glyph in glyphs]
        return sum(widths) / len(widths)
    except Exception:
        return None


def format_override_value(value: float) -> str:
    """Format a ratio as an unsigned percentage with two decimals."""
    return f"{abs(value * 100):.2f}%"


def _degenerate(reference: FallbackReferenceFont) -> FallbackMetrics:
    return FallbackMetrics(
        ascent_override=ZERO_OVERRIDE,
        descent_override=ZERO_OVERRIDE,
        line_gap_override=ZERO_OVERRIDE,
        fallback_font=reference.name,
        size_adjust=ZERO_OVERRIDE,
    )


def compute_fallback_metrics(
    metrics: DecodedFontMetrics, category: str = "serif"
) -> FallbackMetrics:
    """Compute ``size-adjust`` and vertical overrides for ``metrics``.

    ``size-adjust`` is the ratio between the normalised average glyph width of
    the font and that of the reference system font. The vertical overrides are
    divided by it so the rescaled fallback keeps the original line box.
    Unmeasurable fonts produce the zeroed result instead of an error.
    """
    reference = reference_font(category)
    width = metrics.average_glyph_width
    if width is None:
        return _degenerate(reference)

    try:
        size_adjust = (width / metrics.units_per_em) / reference.normalized_width
        scale = metrics.units_per_em * size_adjust
        return FallbackMetrics(
            ascent_override=format_override_value(metrics.ascent / scale),
            descent_override=format_override_value(metrics.descent / scale),
            line_gap_override=format_override_value(metrics.line_gap / scale),
            fallback_font=reference.name,
            size_adjust=format_override_value(size_adjust),
        )
    except (ArithmeticError, TypeError, ValueError):
        return _degenerate(reference)


__all__ = [
    "AVERAGE_WIDTH_PROBE",
    "SANS_SERIF_REFERENCE",
    "SERIF_REFERENCE",
    "ZERO_OVERRIDE",
    "DecodedFontMetrics",
    "FallbackMetrics",
    "FallbackReferenceFont",
    "Glyph",
    "GlyphSource",
    "calc_average_width",
    "compute_fallback_metrics",
    "format_override_value",
    "reference_font",
]
