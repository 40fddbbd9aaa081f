"""Exception hierarchy for font loading and CSS generation."""

from __future__ import annotations


class FontLoaderError(RuntimeError):
    """Base exception for font-loader failures."""


class ConfigError(FontLoaderError):
    """Raised when a configuration file is missing or invalid."""


class FontSourceError(FontLoaderError):
    """Raised when a font file cannot be read from disk."""


class FontDecodeError(FontLoaderError):
    """Raised when font bytes cannot be decoded."""


__all__ = [
    "ConfigError",
    "FontDecodeError",
    "FontLoaderError",
    "FontSourceError",
]
