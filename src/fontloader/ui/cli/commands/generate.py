"""Scaffold a configuration file."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from fontloader.core.config import DEFAULT_CONFIG_NAME, DEFAULT_CONFIG_TEMPLATE

from ..state import emit_error, get_cli_state


def generate(
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing configuration file."),
    ] = False,
) -> None:
    """Generate a fonts configuration file in the current directory."""
    target = Path.cwd() / DEFAULT_CONFIG_NAME
    if target.exists() and not force:
        emit_error(f"{DEFAULT_CONFIG_NAME} already exists; use --force to overwrite it.")
        raise typer.Exit(code=1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE, encoding="utf-8")
    get_cli_state().console.print(
        f"Generated [bold blue]{DEFAULT_CONFIG_NAME}[/] in the current directory."
    )


__all__ = ["generate"]
