"""CLI command implementations exposed via `fontloader.ui.cli`."""

from __future__ import annotations

from .generate import generate
from .process import process


__all__ = ["generate", "process"]
