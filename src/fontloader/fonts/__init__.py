"""Fallback candidate selection, metric overrides, and font decoding."""

from fontloader.fonts.metrics import (
    DecodedFontMetrics,
    FallbackMetrics,
    FallbackReferenceFont,
    calc_average_width,
    compute_fallback_metrics,
)
from fontloader.fonts.selection import pick_font_file_for_fallback_generation, weight_distance


__all__ = [
    "DecodedFontMetrics",
    "FallbackMetrics",
    "FallbackReferenceFont",
    "calc_average_width",
    "compute_fallback_metrics",
    "pick_font_file_for_fallback_generation",
    "weight_distance",
]
