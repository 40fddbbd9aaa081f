"""Diagnostics reported while generating font stylesheets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import typer


if TYPE_CHECKING:
    from fontloader.ui.cli.state import CLIState


def _active_state() -> CLIState | None:
    # Imported lazily: the CLI package imports the loader, which imports this module.
    from fontloader.ui.cli.state import active_cli_state

    return active_cli_state()


@dataclass(slots=True)
class FontLoaderLogger:
    """Report per-file progress and failures of a font run.

    Inside a ``font-loader`` command the messages go through the command's
    rich consoles; elsewhere they are echoed with Typer, prefixed with the
    font path they concern.
    """

    state: CLIState | None = field(default_factory=_active_state)

    @property
    def verbose(self) -> bool:
        return self.state is not None and self.state.verbosity >= 1

    def _emit(
        self,
        level: str,
        message: str,
        args: tuple[Any, ...],
        *,
        path: str | None = None,
        exception: BaseException | None = None,
    ) -> None:
        if args:
            message = message % args
        if self.state is not None:
            from fontloader.ui.cli.state import render_message

            render_message(level, message, path=path, exception=exception, state=self.state)
            return
        if path:
            message = f"{path}: {message}"
        if level == "info":
            typer.echo(message)
        else:
            typer.secho(message, fg="red" if level == "error" else "yellow", err=True)

    def info(self, message: str, *args: Any, path: str | None = None) -> None:
        self._emit("info", message, args, path=path)

    def debug(self, message: str, *args: Any, path: str | None = None) -> None:
        """Report progress, only with ``--verbose``."""
        if self.verbose:
            self._emit("info", message, args, path=path)

    def warning(
        self,
        message: str,
        *args: Any,
        path: str | None = None,
        exception: BaseException | None = None,
    ) -> None:
        self._emit("warning", message, args, path=path, exception=exception)

    def error(
        self,
        message: str,
        *args: Any,
        path: str | None = None,
        exception: BaseException | None = None,
    ) -> None:
        self._emit("error", message, args, path=path, exception=exception)


__all__ = ["FontLoaderLogger"]
