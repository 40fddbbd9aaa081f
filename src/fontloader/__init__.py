"""Generate ``@font-face`` CSS with metric-adjusted fallbacks for local fonts.

Architecture
: `pick_font_file_for_fallback_generation` chooses the file of a family whose
  weight is closest to regular; only that file is measured.
: `compute_fallback_metrics` turns the measured box metrics and average glyph
  width into `size-adjust` and vertical overrides for Arial or Times New Roman.
: `local_font` reads the configured files, emits one `@font-face` per file
  plus the fallback face and class/variable bindings, and hands the stylesheet
  to a `StyleTarget`.
"""

from __future__ import annotations

from fontloader.core.config import FontFile, LocalFontOptions, load_config
from fontloader.core.exceptions import (
    ConfigError,
    FontDecodeError,
    FontLoaderError,
    FontSourceError,
)
from fontloader.fonts.metrics import (
    DecodedFontMetrics,
    FallbackMetrics,
    compute_fallback_metrics,
)
from fontloader.fonts.selection import pick_font_file_for_fallback_generation
from fontloader.loader import FontOutput, FontStyle, local_font, local_fonts
from fontloader.targets import AppendTarget, FileTarget, MemoryTarget, StyleTarget
from fontloader.version import get_version


__version__ = get_version()

__all__ = [
    "AppendTarget",
    "ConfigError",
    "DecodedFontMetrics",
    "FallbackMetrics",
    "FileTarget",
    "FontDecodeError",
    "FontFile",
    "FontLoaderError",
    "FontOutput",
    "FontSourceError",
    "FontStyle",
    "LocalFontOptions",
    "MemoryTarget",
    "StyleTarget",
    "__version__",
    "compute_fallback_metrics",
    "load_config",
    "local_font",
    "local_fonts",
    "pick_font_file_for_fallback_generation",
]
