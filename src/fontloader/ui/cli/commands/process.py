"""Process fonts declared in a configuration file."""

from __future__ import annotations

from rich import box
from rich.table import Table
import typer

from fontloader.core.config import load_config
from fontloader.core.exceptions import ConfigError
from fontloader.loader import FontOutput, local_fonts
from fontloader.logging import FontLoaderLogger

from .._options import DEFAULT_CONFIG_PATH, ConfigOption
from ..state import emit_error, get_cli_state


CONFIG_HINT = "run `font-loader generate` to write a fresh configuration file."


def _summary_table(outputs: list[FontOutput]) -> Table:
    table = Table(box=box.SIMPLE, header_style="bold cyan")
    table.add_column("Class", style="magenta")
    table.add_column("Font family")
    table.add_column("Fallback")
    table.add_column("Size adjust", justify="right")
    for output in outputs:
        metrics = output.fallback_metrics
        table.add_row(
            output.class_name,
            output.style.font_family,
            metrics.fallback_font if metrics else "-",
            metrics.size_adjust if metrics else "-",
        )
    return table


def process(config: ConfigOption = DEFAULT_CONFIG_PATH) -> None:
    """Process fonts based on the configuration file."""
    state = get_cli_state()
    try:
        options = load_config(config)
    except ConfigError as exc:
        emit_error(
            "Please check your config file.", path=str(config), hint=CONFIG_HINT, exception=exc
        )
        raise typer.Exit(code=1) from exc

    outputs = local_fonts(options, logger=FontLoaderLogger(state))
    produced = [output for output in outputs if output]
    if not produced:
        state.console.print("[bold]Nothing to do![/bold]")
        return

    state.console.print(_summary_table(produced))
    links = [link for output in produced for link in output.preload]
    if links:
        state.console.print("Preload links for the document <head>:")
        for link in links:
            state.console.print(link, markup=False, highlight=False, soft_wrap=True)
    state.console.print("[bold]Done![/bold]")


__all__ = ["CONFIG_HINT", "process"]
