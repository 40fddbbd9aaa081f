"""Console state shared by the font-loader commands."""

from __future__ import annotations

from contextvars import ContextVar
from dataclasses import dataclass, field

import click
from rich.console import Console
from rich.text import Text


__all__ = [
    "CLIState",
    "active_cli_state",
    "debug_enabled",
    "emit_error",
    "emit_warning",
    "get_cli_state",
    "render_message",
    "set_cli_state",
]

LEVEL_STYLES = {"warning": "yellow", "error": "red"}


@dataclass(slots=True)
class CLIState:
    """Verbosity flags and the consoles diagnostics are written to.

    Both consoles resolve ``sys.stdout``/``sys.stderr`` when they write, so
    captured streams (test runners, redirections) are honoured.
    """

    verbosity: int = 0
    show_tracebacks: bool = False
    console: Console = field(default_factory=Console, repr=False)
    err_console: Console = field(
        default_factory=lambda: Console(stderr=True, highlight=False), repr=False
    )


# Outlives the click context so ``main`` can still honour ``--debug``.
_LAST_STATE: ContextVar[CLIState | None] = ContextVar("fontloader_cli_state", default=None)


def active_cli_state() -> CLIState | None:
    """Return the state of the running command, or ``None`` outside the CLI."""
    ctx = click.get_current_context(silent=True)
    if ctx is None:
        return None
    return ctx.find_object(CLIState)


def get_cli_state() -> CLIState:
    return active_cli_state() or _LAST_STATE.get() or CLIState()


def set_cli_state(ctx: click.Context, *, verbosity: int = 0, debug: bool = False) -> CLIState:
    state = ctx.ensure_object(CLIState)
    state.verbosity = max(0, verbosity)
    state.show_tracebacks = debug
    _LAST_STATE.set(state)
    return state


def render_message(
    level: str,
    message: str,
    *,
    path: str | None = None,
    hint: str | None = None,
    exception: BaseException | None = None,
    state: CLIState | None = None,
) -> None:
    """Print a diagnostic for ``path`` with an optional hint.

    ``-V`` adds the exception detail; ``-VV`` adds its exception type.
    """
    state = state or get_cli_state()
    text = Text()
    if path:
        text.append(f"{path}: ", style="bold")

    if level == "info":
        text.append(message)
        state.console.print(text, soft_wrap=True)
        return

    style = LEVEL_STYLES.get(level, "yellow")
    text = Text.assemble((f"{level}: ", f"bold {style}"), text, (message, style))
    if exception is not None and state.verbosity >= 1:
        detail = str(exception).strip()
        if detail and detail not in message:
            text.append(f"\n  {detail}", style=style)
        if state.verbosity >= 2:
            text.append(f"\n  ({type(exception).__name__})", style="dim")
    if hint:
        text.append(f"\nhint: {hint}", style="dim")
    state.err_console.print(text, soft_wrap=True)


def emit_warning(message: str, **context) -> None:
    render_message("warning", message, **context)


def emit_error(message: str, **context) -> None:
    render_message("error", message, **context)


def debug_enabled() -> bool:
    """Return whether ``--debug`` asked for full tracebacks."""
    return get_cli_state().show_tracebacks
