"""CSS text assembly for font faces, fallback faces, and style bindings."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
import hashlib

from fontloader.fonts.formats import mime_type
from fontloader.fonts.metrics import FallbackMetrics


FontFaceProperty = tuple[str, str]

GENERIC_FAMILIES = frozenset(
    {
        "serif",
        "sans-serif",
        "monospace",
        "cursive",
        "fantasy",
        "system-ui",
        "ui-serif",
        "ui-sans-serif",
        "ui-monospace",
        "ui-rounded",
        "emoji",
        "math",
        "fangsong",
    }
)


def font_hash(paths: Iterable[str]) -> str:
    """Return a short deterministic token identifying a set of font files."""
    content = "|".join(paths)
    return hashlib.sha256(content.encode("utf-8")).hexdigest()[:16]


@dataclass(frozen=True, slots=True)
class FontNames:
    """Generated identifiers derived from the font hash."""

    hash: str

    @property
    def family(self) -> str:
        return f"__font_{self.hash}"

    @property
    def fallback_family(self) -> str:
        return f"__font_Fallback_{self.hash}"

    @property
    def class_name(self) -> str:
        return f"__className_{self.hash}"

    @property
    def variable_class(self) -> str:
        return f"__variable_{self.hash}"

    @property
    def style_id(self) -> str:
        return f"__font_style_{self.hash}"

    @classmethod
    def for_paths(cls, paths: Iterable[str]) -> FontNames:
        return cls(font_hash(paths))


def quote_family(name: str) -> str:
    if name in GENERIC_FAMILIES:
        return name
    return "'" + name.replace("'", "\\'") + "'"


def font_stack(families: Sequence[str]) -> str:
    """Join families into a ``font-family`` value, leaving generic keywords bare."""
    return ", ".join(quote_family(name) for name in families)


def font_face(properties: Iterable[FontFaceProperty]) -> str:
    body = "\n".join(f"  {prop}: {value};" for prop, value in properties)
    return f"@font-face {{\n{body}\n}}\n"


def src_url(url: str, font_format: str) -> str:
    if font_format == "unknown":
        return f"url({url})"
    return f"url({url}) format('{font_format}')"


def fallback_font_face(family: str, metrics: FallbackMetrics) -> str:
    """Render the ``local()`` fallback face carrying the metric overrides.

    Unmeasured fonts keep the ``local()`` source without overrides since a
    zero ``size-adjust`` would collapse the glyphs.
    """
    properties: list[FontFaceProperty] = [
        ("font-family", quote_family(family)),
        ("src", f"local({quote_family(metrics.fallback_font)})"),
    ]
    if not metrics.is_degenerate:
        properties.extend(
            [
                ("ascent-override", metrics.ascent_override),
                ("descent-override", metrics.descent_override),
                ("line-gap-override", metrics.line_gap_override),
                ("size-adjust", metrics.size_adjust),
            ]
        )
    return font_face(properties)


def class_rule(class_name: str, families: Sequence[str]) -> str:
    return f".{class_name} {{\n  font-family: {font_stack(families)};\n}}\n"


def variable_rule(selector: str, variable: str, families: Sequence[str]) -> str:
    return f".{selector} {{\n  {variable}: {font_stack(families)};\n}}\n"


def preload_link(href: str, font_format: str) -> str:
    """Render a ``<link rel="preload">`` hint for a font file."""
    attributes = ['rel="preload"', f'href="{href}"', 'as="font"']
    mime = mime_type(font_format)
    if mime:
        attributes.append(f'type="{mime}"')
    attributes.append("crossorigin")
    return f"<link {' '.join(attributes)}>"


__all__ = [
    "FontFaceProperty",
    "GENERIC_FAMILIES",
    "FontNames",
    "class_rule",
    "fallback_font_face",
    "font_face",
    "font_hash",
    "font_stack",
    "preload_link",
    "quote_family",
    "src_url",
    "variable_rule",
]
