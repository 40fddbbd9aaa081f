"""Pick the font file whose metrics best represent a family."""

from __future__ import annotations

from collections.abc import Iterable
import math
from typing import Protocol, TypeVar
import warnings


NORMAL_WEIGHT = 400
BOLD_WEIGHT = 700

_WEIGHT_KEYWORDS = {"normal": NORMAL_WEIGHT, "bold": BOLD_WEIGHT}


class WeightedFile(Protocol):
    """Anything exposing optional ``weight`` and ``style`` axis values."""

    @property
    def weight(self) -> str | None: ...

    @property
    def style(self) -> str | None: ...


T = TypeVar("T", bound=WeightedFile)


def weight_number(token: str) -> float:
    """Convert a single weight token into a number (``nan`` when invalid)."""
    keyword = _WEIGHT_KEYWORDS.get(token)
    if keyword is not None:
        return float(keyword)
    try:
        return float(token)
    except ValueError:
        return math.nan


def weight_distance(weight: str | None) -> float:
    """Return the signed distance between ``weight`` and the normal weight.

    A weight range such as ``"100 900"`` that spans 400 has a distance of 0.
    Otherwise the endpoint closest to 400 wins, keeping its sign so that
    lighter faces can be preferred on equal magnitudes.
    """
    if not weight or not weight.strip():
        return 0.0

    tokens = [weight_number(token) for token in weight.split()[:2]]
    if any(math.isnan(value) for value in tokens):
        warnings.warn(
            f"Invalid weight value in src array: `{weight}`. "
            "Expected `normal`, `bold` or a number.",
            stacklevel=2,
        )

    if len(tokens) == 1:
        return tokens[0] - NORMAL_WEIGHT

    first, second = tokens
    if min(first, second) <= NORMAL_WEIGHT <= max(first, second):
        return 0.0

    first_distance = first - NORMAL_WEIGHT
    second_distance = second - NORMAL_WEIGHT
    if abs(first_distance) < abs(second_distance):
        return first_distance
    return second_distance


def _prefer(used: T, current: T) -> T:
    used_distance = weight_distance(used.weight)
    current_distance = weight_distance(current.weight)

    if used_distance == current_distance and current.style in (None, "normal"):
        return current

    abs_used = abs(used_distance)
    abs_current = abs(current_distance)
    if abs_current < abs_used:
        return current
    if abs_current == abs_used and current_distance < used_distance:
        return current
    return used


def pick_font_file_for_fallback_generation(font_files: Iterable[T]) -> T | None:
    """Return the file closest to a normal weight, or ``None`` when empty.

    Exact ties prefer a face with a normal (or unset) style, and equal
    magnitudes prefer the lighter face. The returned object is always one of
    the inputs.
    """
    chosen: T | None = None
    for font_file in font_files:
        chosen = font_file if chosen is None else _prefer(chosen, font_file)
    return chosen


__all__ = [
    "BOLD_WEIGHT",
    "NORMAL_WEIGHT",
    "pick_font_file_for_fallback_generation",
    "weight_distance",
    "weight_number",
]
