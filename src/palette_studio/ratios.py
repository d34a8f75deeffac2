"""Contrast-ratio list of a theme and its swatches.

A :class:`Theme` holds one scale, a background and an ordered list of
:class:`RatioEntry`.  Each entry pairs a target contrast ratio with the
luminosity of the swatch that reaches it; editing either side recomputes the
other against the theme's scale.  Every operation returns a new theme.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from dataclasses import replace as _replace
from typing import Callable, Iterable, Literal, Sequence, TypeVar

from .codec import ColorLike, luminosity, round_to, to_hex
from .contrast import MAX_RATIO, color_for_ratio, signed_contrast
from .locator import LuminositySearch, Scale

log = logging.getLogger(__name__)

DEFAULT_RATIO = 4.5

T = TypeVar("T")


@dataclass(frozen=True)
class RatioEntry:
    ratio: float
    luminosity: float
    swatch: str


@dataclass(frozen=True)
class Theme:
    scale: Scale
    background: str = "#ffffff"
    entries: tuple[RatioEntry, ...] = ()
    smooth: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "background", to_hex(self.background))
        object.__setattr__(self, "entries", tuple(self.entries))

    @property
    def ratios(self) -> list[float]:
        return [e.ratio for e in self.entries]

    @property
    def luminosities(self) -> list[float]:
        return [e.luminosity for e in self.entries]

    @property
    def swatches(self) -> list[str]:
        return [e.swatch for e in self.entries]


# ---- plain value helpers -----------------------------------------------------


def add_ratio(values: Sequence[float]) -> float:
    """Next ratio to offer: one above the highest, or one below at the ceiling."""
    if not values:
        return DEFAULT_RATIO
    hi = max(float(v) for v in values)
    if hi >= MAX_RATIO:
        return round_to(hi - 1, 2)
    return round_to(min(hi + 1, MAX_RATIO), 2)


def distribute_evenly(values: Sequence[float]) -> list[float]:
    """Evenly spaced values from ``min(values)`` to ``max(values)``, same length.

    Every value is rounded to two decimals, the endpoints included.
    """
    values = [float(v) for v in values]
    n = len(values)
    if n < 2:
        return values
    lo, hi = min(values), max(values)
    return [round_to(lo + (hi - lo) * i / (n - 1), 2) for i in range(n)]


def sort_by_value(values: Iterable[T], key: Callable[[T], float] = float) -> list[T]:
    """Ascending by ``key``; ties keep their order."""
    return sorted(values, key=key)


def step_value(value: float, direction: Literal["up", "down"]) -> float:
    """Shift+arrow stepping of a ratio or luminosity field."""
    if direction == "up":
        return round_to(float(value) + 1, 2)
    if direction == "down":
        return round_to(float(value) - 1, 2)
    raise ValueError(f"direction must be 'up' or 'down', not {direction!r}")


# ---- theme operations --------------------------------------------------------


def _from_ratio(theme: Theme, ratio: float) -> RatioEntry:
    swatch = color_for_ratio(theme.scale, theme.background, ratio, theme.smooth)
    return RatioEntry(float(ratio), round_to(luminosity(swatch), 2), swatch)


def _from_luminosity(theme: Theme, value: float) -> RatioEntry:
    scale = theme.scale
    pos = LuminositySearch().locate(scale, scale.domain_max, value, theme.smooth)  # type: ignore[attr-defined]
    swatch = to_hex(scale(pos))
    ratio = round_to(signed_contrast(swatch, theme.background), 2)
    return RatioEntry(ratio, round_to(float(value), 2), swatch)


def create_theme(
    scale: Scale,
    ratios: Iterable[float] = (),
    background: ColorLike = "#ffffff",
    smooth: bool = False,
) -> Theme:
    theme = Theme(scale=scale, background=background, smooth=smooth)
    return _replace(theme, entries=tuple(_from_ratio(theme, r) for r in ratios))


def rebuild(
    theme: Theme,
    scale: Scale | None = None,
    background: ColorLike | None = None,
) -> Theme:
    """Recompute every swatch, e.g. after the key colors or background changed."""
    theme = _replace(
        theme,
        scale=scale if scale is not None else theme.scale,
        background=background if background is not None else theme.background,
    )
    return _replace(theme, entries=tuple(_from_ratio(theme, r) for r in theme.ratios))


def sync_from_ratio(theme: Theme, index: int, ratio: float) -> Theme:
    entries = list(theme.entries)
    entries[index] = _from_ratio(theme, ratio)
    return _replace(theme, entries=tuple(entries))


def sync_from_luminosity(theme: Theme, index: int, value: float) -> Theme:
    entries = list(theme.entries)
    entries[index] = _from_luminosity(theme, value)
    return _replace(theme, entries=tuple(entries))


def add_theme_ratio(theme: Theme, ratio: float | None = None) -> Theme:
    if ratio is None:
        ratio = add_ratio(theme.ratios)
    return _replace(theme, entries=theme.entries + (_from_ratio(theme, ratio),))


def delete_ratio(theme: Theme, index: int) -> Theme:
    entries = list(theme.entries)
    del entries[index]
    return _replace(theme, entries=tuple(entries))


def sort_ratios(theme: Theme) -> Theme:
    if len(theme.entries) < 2:
        return theme
    entries = sort_by_value(theme.entries, key=lambda e: e.ratio)
    return _replace(theme, entries=tuple(entries))


def distribute_ratios(theme: Theme) -> Theme:
    if len(theme.entries) < 2:
        log.debug("Nothing to distribute")
        return theme
    ratios = distribute_evenly(theme.ratios)
    return _replace(theme, entries=tuple(_from_ratio(theme, r) for r in ratios))


def distribute_luminosity(theme: Theme) -> Theme:
    """Even luminosity steps, lightest first, then re-sorted by ratio."""
    if len(theme.entries) < 2:
        log.debug("Nothing to distribute")
        return theme
    values = distribute_evenly(theme.luminosities)
    values.reverse()
    theme = _replace(theme, entries=tuple(_from_luminosity(theme, v) for v in values))
    return sort_ratios(theme)


__all__ = [
    "DEFAULT_RATIO",
    "RatioEntry",
    "Theme",
    "add_ratio",
    "distribute_evenly",
    "sort_by_value",
    "step_value",
    "create_theme",
    "rebuild",
    "sync_from_ratio",
    "sync_from_luminosity",
    "add_theme_ratio",
    "delete_ratio",
    "sort_ratios",
    "distribute_ratios",
    "distribute_luminosity",
]
