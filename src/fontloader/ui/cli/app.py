"""Typer application wiring for the font-loader CLI."""

from __future__ import annotations

from typing import Annotated

import typer

from fontloader.version import get_version

from ._options import DebugOption, VerboseOption
from .commands import generate, process
from .state import debug_enabled, emit_error, get_cli_state, set_cli_state


app = typer.Typer(
    help="Generate @font-face CSS with metric-adjusted fallbacks for local fonts.",
    context_settings={"help_option_names": ["-h", "--help"]},
    no_args_is_help=True,
)


def _print_version(value: bool) -> None:
    if not value:
        return
    typer.echo(f"font-loader {get_version()}")
    raise typer.Exit()


@app.callback()
def _main(
    ctx: typer.Context,
    verbose: VerboseOption = 0,
    debug: DebugOption = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Output the version number and exit.",
            callback=_print_version,
            is_eager=True,
        ),
    ] = False,
) -> None:
    set_cli_state(ctx, verbosity=verbose, debug=debug)


app.command("process")(process)
app.command("generate")(generate)


def main() -> None:
    """Console script entry point; ``--debug`` keeps the full traceback."""
    try:
        app()
    except (typer.Exit, SystemExit):
        raise
    except KeyboardInterrupt as exc:
        if debug_enabled():
            raise
        emit_error("Interrupted.")
        raise typer.Exit(code=130) from exc
    except Exception as exc:  # pragma: no cover - unexpected failure
        state = get_cli_state()
        if not state.show_tracebacks:
            emit_error(str(exc) or type(exc).__name__, exception=exc, hint="rerun with --debug")
            raise typer.Exit(code=1) from exc
        from rich.traceback import Traceback

        state.err_console.print(Traceback.from_exception(type(exc), exc, exc.__traceback__))
        raise typer.Exit(code=1) from exc


__all__ = ["app", "main"]
