"""Configuration models for local font processing.

LocalFontOptions

`src` (`str | list[FontFile]`)
: A single font path, or a list of files each declaring its own `weight`
  and `style`.

`output_dir` (`Path`)
: Directory receiving the generated stylesheet. Defaults to the directory of
  the configuration file.

`output_css` (`str`)
: File name of the generated stylesheet (`fonts.css` by default).

`font_dir` (`Path | None`)
: When set, font files are copied there and referenced from the stylesheet
  through a path relative to it.

`append_to` (`Path | None`)
: Existing stylesheet that receives the generated rules inside a marked block
  instead of writing `output_css`.

`display` (`auto | block | swap | fallback | optional`)
: Value of `font-display` for every face (`swap` by default).

`weight`, `style` (`str | None`)
: Axis values used when `src` is a single path. `weight` also sets the
  numeric `font_weight` of the returned style binding.

`adjust_font_fallback` (`"Arial" | "Times New Roman" | false`)
: System font used for the metric-adjusted fallback face, or `false` to skip
  fallback generation.

`fallback` (`list[str]`)
: Extra font families appended after the generated fallback.

`preload` (`bool`)
: Emit `<link rel="preload">` hints for every font file.

`variable` (`str | None`)
: CSS custom property receiving the font stack, e.g. `--font-sans`.

`declarations` (`list[{prop, value}]`)
: Additional properties copied into every `@font-face` block.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
import yaml

from fontloader.core.exceptions import ConfigError


DEFAULT_CONFIG_NAME = "font.config.yml"

Display = Literal["auto", "block", "swap", "fallback", "optional"]
AdjustFontFallback = Literal["Arial", "Times New Roman", False]


def _coerce_token(value: Any) -> Any:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class FontFile(BaseModel):
    """One physical font file and its declared style axis values."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    path: str
    weight: str | None = None
    style: str | None = None

    @field_validator("weight", mode="before")
    @classmethod
    def _coerce_weight(cls, value: Any) -> Any:
        return _coerce_token(value)


class Declaration(BaseModel):
    """Extra ``@font-face`` property."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    prop: str
    value: str


class LocalFontOptions(BaseModel):
    """Options accepted by :func:`fontloader.loader.local_font`."""

    model_config = ConfigDict(extra="forbid")

    src: str | list[FontFile]
    output_dir: Path = Path(".")
    output_css: str = "fonts.css"
    font_dir: Path | None = None
    append_to: Path | None = None
    display: Display = "swap"
    weight: str | None = None
    style: str | None = None
    adjust_font_fallback: AdjustFontFallback = "Arial"
    fallback: list[str] = []
    preload: bool = False
    variable: str | None = None
    declarations: list[Declaration] = []
    base_dir: Path | None = None

    @field_validator("weight", mode="before")
    @classmethod
    def _coerce_weight(cls, value: Any) -> Any:
        return _coerce_token(value)

    @field_validator("declarations", mode="before")
    @classmethod
    def _normalise_declarations(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return value
        normalised: list[Any] = []
        for entry in value:
            if isinstance(entry, (list, tuple)) and len(entry) == 2:
                normalised.append({"prop": str(entry[0]), "value": str(entry[1])})
            else:
                normalised.append(entry)
        return normalised

    @field_validator("variable")
    @classmethod
    def _check_variable(cls, value: str | None) -> str | None:
        if value is not None and not value.startswith("--"):
            raise ValueError("CSS variables must start with '--'")
        return value

    def font_files(self) -> list[FontFile]:
        """Return ``src`` as a list of file descriptors."""
        if isinstance(self.src, str):
            return [FontFile(path=self.src, weight=self.weight, style=self.style)]
        return list(self.src)

    def resolve(self, path: str | Path) -> Path:
        """Resolve ``path`` against ``base_dir`` when it is relative."""
        candidate = Path(path).expanduser()
        if candidate.is_absolute() or self.base_dir is None:
            return candidate
        return self.base_dir / candidate


def _entries(payload: Any) -> list[Any]:
    if isinstance(payload, Mapping):
        fonts = payload.get("fonts")
        if isinstance(fonts, list):
            return fonts
        return [payload]
    if isinstance(payload, list):
        return payload
    raise ConfigError("Invalid configuration: expected a mapping or a list of mappings.")


def parse_config(payload: Any, *, base_dir: Path | None = None) -> list[LocalFontOptions]:
    """Validate a decoded configuration document."""
    options: list[LocalFontOptions] = []
    for index, entry in enumerate(_entries(payload)):
        if not isinstance(entry, Mapping):
            raise ConfigError(f"Invalid configuration entry #{index + 1}: expected a mapping.")
        data = dict(entry)
        if base_dir is not None:
            data.setdefault("base_dir", base_dir)
        try:
            option = LocalFontOptions.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration entry #{index + 1}: {exc}") from exc
        if option.base_dir is not None:
            option.output_dir = option.resolve(option.output_dir)
            if option.font_dir is not None:
                option.font_dir = option.resolve(option.font_dir)
            if option.append_to is not None:
                option.append_to = option.resolve(option.append_to)
        options.append(option)
    return options


def load_config(path: Path) -> list[LocalFontOptions]:
    """Load a YAML (or JSON) configuration file."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Unable to read configuration file '{path}': {exc}") from exc
    try:
        payload = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in '{path}': {exc}") from exc
    if payload is None:
        raise ConfigError(f"Configuration file '{path}' is empty.")
    return parse_config(payload, base_dir=path.resolve().parent)


DEFAULT_CONFIG_TEMPLATE = """\
# font-loader configuration
src:
  - path: ./path-to-your-regular-font.ttf
    weight: "400"
  - path: ./path-to-your-bold-font.ttf
    weight: "700"
output_css: my-fonts.css
display: swap
preload: true
variable: --my-font-variable
"""


__all__ = [
    "DEFAULT_CONFIG_NAME",
    "DEFAULT_CONFIG_TEMPLATE",
    "AdjustFontFallback",
    "Declaration",
    "Display",
    "FontFile",
    "LocalFontOptions",
    "load_config",
    "parse_config",
]
