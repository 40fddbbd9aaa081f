"""Destinations receiving generated stylesheets."""

from __future__ import annotations

from pathlib import Path
import re
from typing import Protocol


class StyleTarget(Protocol):
    """Anything able to store CSS under a stable key."""

    def apply(self, key: str, css: str) -> None: ...


class MemoryTarget:
    """Keep generated CSS in memory, one entry per key."""

    def __init__(self) -> None:
        self.styles: dict[str, str] = {}

    def apply(self, key: str, css: str) -> None:
        self.styles[key] = css

    def text(self) -> str:
        return "\n".join(self.styles.values())


class FileTarget:
    """Write generated CSS as the whole content of ``path``."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def apply(self, key: str, css: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(css, encoding="utf-8")


class AppendTarget:
    """Maintain a marked block inside an existing stylesheet.

    The block for ``key`` is replaced on every call so that re-running the
    generator never duplicates rules.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    @staticmethod
    def markers(key: str) -> tuple[str, str]:
        return f"/* font-loader:{key} */", f"/* /font-loader:{key} */"

    def apply(self, key: str, css: str) -> None:
        start, end = self.markers(key)
        block = f"{start}\n{css.rstrip()}\n{end}\n"
        existing = self.path.read_text(encoding="utf-8") if self.path.exists() else ""
        pattern = re.compile(re.escape(start) + r".*?" + re.escape(end) + r"\n?", re.DOTALL)
        if pattern.search(existing):
            updated = pattern.sub(lambda _match: block, existing, count=1)
        else:
            separator = "" if not existing or existing.endswith("\n") else "\n"
            updated = f"{existing}{separator}{block}"
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(updated, encoding="utf-8")


__all__ = ["AppendTarget", "FileTarget", "MemoryTarget", "StyleTarget"]
