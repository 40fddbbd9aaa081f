"""Generate ``@font-face`` rules and style bindings for local font files."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
import math
import os
from pathlib import Path
import shutil
from urllib.parse import quote

from fontloader.core.config import FontFile, LocalFontOptions
from fontloader.core.exceptions import FontDecodeError, FontSourceError
from fontloader.css import (
    FontFaceProperty,
    FontNames,
    class_rule,
    fallback_font_face,
    font_face,
    font_stack,
    preload_link,
    quote_family,
    src_url,
    variable_rule,
)
from fontloader.fonts.decoder import FontToolsFont, decode_metrics, load_font
from fontloader.fonts.formats import detect_font_format
from fontloader.fonts.metrics import FallbackMetrics, compute_fallback_metrics
from fontloader.fonts.selection import pick_font_file_for_fallback_generation, weight_number
from fontloader.logging import FontLoaderLogger
from fontloader.targets import AppendTarget, FileTarget, MemoryTarget, StyleTarget


@dataclass(frozen=True, slots=True)
class FontStyle:
    """Inline style binding for the generated family."""

    font_family: str
    font_weight: int | None = None
    font_style: str | None = None


@dataclass(slots=True)
class FontOutput:
    """Everything a caller needs to reference the generated fonts."""

    class_name: str
    style: FontStyle
    variable: str | None = None
    variable_class: str | None = None
    css: str = ""
    preload: list[str] = field(default_factory=list)
    fallback_metrics: FallbackMetrics | None = None

    def __bool__(self) -> bool:
        return bool(self.css)


@dataclass(frozen=True, slots=True)
class LoadedFontFile:
    """A font file descriptor paired with its decoded font."""

    descriptor: FontFile
    font: FontToolsFont

    @property
    def weight(self) -> str | None:
        return self.descriptor.weight

    @property
    def style(self) -> str | None:
        return self.descriptor.style


def target_for_options(options: LocalFontOptions) -> StyleTarget:
    """Return the stylesheet destination configured by ``options``."""
    if options.append_to is not None:
        return AppendTarget(options.append_to)
    return FileTarget(options.output_dir / options.output_css)


def stylesheet_dir(options: LocalFontOptions) -> Path:
    if options.append_to is not None:
        return options.append_to.parent
    return options.output_dir


def fallback_category(adjust_font_fallback: str) -> str:
    return "serif" if adjust_font_fallback == "Times New Roman" else "sans-serif"


def style_weight(weight: str | None) -> int | None:
    """Numeric weight of the first token in ``weight``, if any."""
    if not weight or not weight.split():
        return None
    value = weight_number(weight.split()[0])
    if math.isnan(value):
        return None
    return int(value)


def relative_url(path: Path, base: Path) -> str:
    """Percent-encoded URL of ``path`` as seen from a stylesheet in ``base``."""
    try:
        return quote(Path(os.path.relpath(path.resolve(), base.resolve())).as_posix())
    except ValueError:
        return path.resolve().as_uri()


def read_font_file(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise FontSourceError(f"Unable to read font file '{path}': {exc}") from exc


def _copy_font(source: Path, font_dir: Path, copied: dict[Path, Path]) -> Path:
    """Copy ``source`` into ``font_dir``; ``copied`` maps targets to their sources."""
    target = (font_dir / source.name).resolve()
    origin = copied.get(target)
    if origin is not None and origin != source.resolve():
        raise FontSourceError(
            f"'{source}' would overwrite '{origin}' in '{font_dir}'; rename one of them."
        )
    if target != source.resolve():
        try:
            font_dir.mkdir(parents=True, exist_ok=True)
            shutil.copy2(source, target)
        except OSError as exc:
            raise FontSourceError(f"Unable to copy '{source}' to '{font_dir}': {exc}") from exc
    copied[target] = source.resolve()
    return target


def _face_properties(
    options: LocalFontOptions,
    names: FontNames,
    font_file: FontFile,
    url: str,
    font_format: str,
) -> list[FontFaceProperty]:
    properties: list[FontFaceProperty] = [
        ("font-family", quote_family(names.family)),
        ("src", src_url(url, font_format)),
        ("font-display", options.display),
    ]
    if font_file.weight:
        properties.append(("font-weight", font_file.weight))
    if font_file.style:
        properties.append(("font-style", font_file.style))
    properties.extend((item.prop, item.value) for item in options.declarations)
    return properties


def _family_stack(names: FontNames, options: LocalFontOptions, with_fallback: bool) -> list[str]:
    families = [names.family]
    if with_fallback:
        families.append(names.fallback_family)
    families.extend(options.fallback)
    return families


def _measure_fallback(
    chosen: LoadedFontFile, options: LocalFontOptions, logger: FontLoaderLogger
) -> FallbackMetrics | None:
    path = chosen.descriptor.path
    try:
        metrics = decode_metrics(chosen.font)
    except FontDecodeError as exc:
        logger.warning("Skipping fallback face.", path=path, exception=exc)
        return None
    category = fallback_category(options.adjust_font_fallback)
    fallback_metrics = compute_fallback_metrics(metrics, category)
    if fallback_metrics.is_degenerate:
        logger.warning("Could not measure the font; fallback face has no overrides.", path=path)
    return fallback_metrics


def local_font(
    options: LocalFontOptions,
    *,
    target: StyleTarget | None = None,
    logger: FontLoaderLogger | None = None,
) -> FontOutput:
    """Emit the CSS for ``options`` and return the matching style binding.

    Every readable file gets its own ``@font-face``. Files that cannot be read
    are reported and skipped. When fallback adjustment is enabled, the file
    closest to a regular weight is measured to build the fallback face.
    """
    logger = logger or FontLoaderLogger()
    font_files = options.font_files()
    names = FontNames.for_paths(font_file.path for font_file in font_files)
    css_dir = stylesheet_dir(options)

    blocks: list[str] = []
    preload: list[str] = []
    loaded: list[LoadedFontFile] = []
    copied: dict[Path, Path] = {}

    for font_file in font_files:
        source = options.resolve(font_file.path)
        try:
            data = read_font_file(source)
            location = source
            if options.font_dir is not None:
                location = _copy_font(source, options.font_dir, copied)
        except FontSourceError as exc:
            logger.error("Error processing font file.", path=font_file.path, exception=exc)
            continue

        font_format = detect_font_format(data)
        url = relative_url(location, css_dir)
        blocks.append(font_face(_face_properties(options, names, font_file, url, font_format)))
        if options.preload:
            preload.append(preload_link(url, font_format))
        logger.debug("Added as %s.", font_format, path=font_file.path)

        try:
            loaded.append(LoadedFontFile(descriptor=font_file, font=load_font(data)))
        except FontDecodeError as exc:
            logger.warning("Skipping metrics.", path=font_file.path, exception=exc)

    fallback_metrics: FallbackMetrics | None = None
    if blocks and options.adjust_font_fallback is not False:
        chosen = pick_font_file_for_fallback_generation(loaded)
        if chosen is None:
            logger.warning("No decodable font file for %s; skipping fallback.", names.family)
        else:
            fallback_metrics = _measure_fallback(chosen, options, logger)
            if fallback_metrics is not None:
                blocks.append(fallback_font_face(names.fallback_family, fallback_metrics))

    families = _family_stack(names, options, with_fallback=fallback_metrics is not None)
    if blocks:
        blocks.append(class_rule(names.class_name, families))
        if options.variable:
            blocks.append(variable_rule(names.variable_class, options.variable, families))

    css = "\n".join(blocks)
    if css:
        (target or target_for_options(options)).apply(names.style_id, css)
    else:
        logger.warning("No font files could be processed for %s.", names.family)

    return FontOutput(
        class_name=names.class_name,
        style=FontStyle(
            font_family=font_stack(families),
            font_weight=style_weight(options.weight),
            font_style=options.style,
        ),
        variable=options.variable,
        variable_class=names.variable_class if options.variable else None,
        css=css,
        preload=preload,
        fallback_metrics=fallback_metrics,
    )


def local_fonts(
    options: Sequence[LocalFontOptions],
    *,
    logger: FontLoaderLogger | None = None,
) -> list[FontOutput]:
    """Process several configurations, sharing a stylesheet file when they do."""
    logger = logger or FontLoaderLogger()
    outputs: list[FontOutput] = []
    sheets: dict[Path, MemoryTarget] = {}
    for option in options:
        target: StyleTarget | None = None
        if option.append_to is None:
            path = option.output_dir / option.output_css
            target = sheets.setdefault(path.resolve(), MemoryTarget())
        outputs.append(local_font(option, target=target, logger=logger))
    for path, sheet in sheets.items():
        if sheet.styles:
            FileTarget(path).apply(path.name, sheet.text())
    return outputs


__all__ = [
    "FontOutput",
    "FontStyle",
    "LoadedFontFile",
    "fallback_category",
    "local_font",
    "local_fonts",
    "read_font_file",
    "relative_url",
    "style_weight",
    "target_for_options",
]
