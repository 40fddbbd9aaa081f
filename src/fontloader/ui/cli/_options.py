"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from fontloader.core.config import DEFAULT_CONFIG_NAME


DIAGNOSTICS_PANEL = "Diagnostics"

ConfigOption = Annotated[
    Path,
    typer.Option(
        "--config",
        "-c",
        help="Path to the configuration file.",
        dir_okay=False,
    ),
]

VerboseOption = Annotated[
    int,
    typer.Option(
        "--verbose",
        "-V",
        count=True,
        help="Increase CLI verbosity. Combine multiple times for additional diagnostics.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]

DebugOption = Annotated[
    bool,
    typer.Option(
        "--debug",
        help="Show full tracebacks when an unexpected error occurs.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]

DEFAULT_CONFIG_PATH = Path(DEFAULT_CONFIG_NAME)
