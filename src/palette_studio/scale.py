from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from dataclasses import replace as _replace
from typing import Iterable, Literal, Sequence

import numpy as np

from .codec import (
    ColorLike,
    filter_nan,
    from_space,
    get_space,
    luminosity,
    raw_coords,
    to_color,
    to_hex,
    to_space,
)
from .spaces import Color

log = logging.getLogger(__name__)

NEUTRAL_KEY = "#cacaca"  # stand-in when every key has been removed
MIN_SMOOTH_KEYS = 3
EQUILUMINANT_CHROMA = 8.0
ACHROMATIC = 1e-4  # radial channel at or below this has no meaningful hue

Direction = Literal["toLight", "toDark"]


def _short_arc_lerp(h1: float, h2: float, t: float) -> float:
    d = ((h2 - h1 + 180.0) % 360.0) - 180.0
    return (h1 + t * d) % 360.0


def _basis(t1: float, v0, v1, v2, v3):
    t2 = t1 * t1
    t3 = t2 * t1
    return (
        (1 - 3 * t1 + 3 * t2 - t3) * v0
        + (4 - 6 * t2 + 3 * t3) * v1
        + (1 + 3 * t1 + 3 * t2 - 3 * t3) * v2
        + t3 * v3
    ) / 6


def _interpolate_basis(values: np.ndarray, t: float) -> np.ndarray:
    """Uniform cubic B-spline through the end points of ``values`` at ``t`` in [0, 1]."""
    n = len(values) - 1
    if t <= 0:
        t, i = 0.0, 0
    elif t >= 1:
        t, i = 1.0, n - 1
    else:
        i = int(t * n)
    v1, v2 = values[i], values[i + 1]
    v0 = values[i - 1] if i > 0 else 2 * v1 - v2
    v3 = values[i + 2] if i < n - 1 else 2 * v2 - v1
    return _basis((t - i / n) * n, v0, v1, v2, v3)


def _fill_hues(coords: np.ndarray, hue: int) -> None:
    """Achromatic keys borrow the hue of the nearest key that has one."""
    defined = [
        i
        for i, row in enumerate(coords)
        if math.isfinite(row[hue]) and filter_nan(row[1]) > ACHROMATIC
    ]
    for i, row in enumerate(coords):
        if i in defined:
            continue
        if defined:
            nearest = min(defined, key=lambda j: abs(j - i))
            row[hue] = coords[nearest][hue]
        else:
            row[hue] = 0.0


class _Sampling:
    """Shared helpers for anything callable as ``scale(position) -> Color``."""

    domain_max: float

    def __call__(self, position: float) -> Color:  # pragma: no cover - abstract
        raise NotImplementedError

    def hex(self, position: float) -> str:
        return to_hex(self(position))

    def luminosity(self, position: float) -> float:
        return luminosity(self(position))

    def samples(self, n: int) -> list[str]:
        if n < 1:
            return []
        if n == 1:
            return [self.hex(0.0)]
        step = self.domain_max / (n - 1)
        return [self.hex(i * step) for i in range(n)]


@dataclass(frozen=True)
class ColorScale(_Sampling):
    """Continuous scale over ``[0, domain]`` with ``keys`` evenly placed on it.

    Stepped scales interpolate linearly between neighbouring keys (shorter hue
    arc in polar spaces) and return the key itself at key positions.  Smooth
    scales run a uniform B-spline through the channel values; they need at
    least three keys and otherwise behave exactly like stepped ones.
    """

    keys: tuple[Color, ...]
    space: str = "CAM02"
    smooth: bool = False
    domain: float | None = None
    _coords: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        cs = get_space(self.space)
        object.__setattr__(self, "space", cs.tag)
        object.__setattr__(self, "keys", tuple(to_color(k) for k in self.keys))
        if self.domain is None:
            object.__setattr__(self, "domain", float(len(self.keys) - 1))

        coords = np.array([raw_coords(k, cs.tag) for k in self.keys], dtype=np.float64)
        if cs.hue_index is not None:
            _fill_hues(coords, cs.hue_index)
        coords = np.where(np.isfinite(coords), coords, 0.0)
        if cs.hue_index is not None and self.is_smooth:
            h = cs.hue_index
            for i in range(1, len(coords)):
                d = ((coords[i, h] - coords[i - 1, h] + 180.0) % 360.0) - 180.0
                coords[i, h] = coords[i - 1, h] + d
        object.__setattr__(self, "_coords", coords)

    @property
    def is_smooth(self) -> bool:
        return self.smooth and len(self.keys) >= MIN_SMOOTH_KEYS

    @property
    def domain_max(self) -> float:
        return float(self.domain)

    def _index(self, position: float) -> float:
        n = len(self.keys)
        if n == 1 or self.domain <= 0:
            return 0.0
        x = position * (n - 1) / self.domain
        return min(max(x, 0.0), float(n - 1))

    def channels(self, position: float) -> tuple[float, float, float]:
        """Interpolated channel triple at ``position``."""
        cs = get_space(self.space)
        hue = cs.hue_index
        coords = self._coords
        n = len(coords)
        x = self._index(position)

        if n == 1:
            out = coords[0].copy()
        elif self.is_smooth:
            out = np.asarray(_interpolate_basis(coords, x / (n - 1)), dtype=np.float64)
            if hue is not None:
                out[hue] %= 360.0
        else:
            i = min(int(x), n - 2)
            f = x - i
            a, b = coords[i], coords[i + 1]
            out = a + (b - a) * f
            if hue is not None:
                out[hue] = _short_arc_lerp(a[hue], b[hue], f)

        if cs.polar:
            out[1] = max(0.0, out[1])
        return float(out[0]), float(out[1]), float(out[2])

    def __call__(self, position: float) -> Color:
        if not self.is_smooth:
            x = self._index(position)
            if x == int(x):
                return self.keys[int(x)].clone()
        return from_space(self.channels(position), self.space)


def build_scale(
    keys: Iterable[ColorLike],
    *,
    smooth: bool = False,
    space: str = "CAM02",
    domain: float | None = None,
) -> ColorScale:
    keys = tuple(keys)
    if not keys:
        log.warning("No key colors; using %s", NEUTRAL_KEY)
        keys = (NEUTRAL_KEY,)
    if smooth and len(keys) < MIN_SMOOTH_KEYS:
        log.warning("Smoothing needs %d keys, got %d; stepped", MIN_SMOOTH_KEYS, len(keys))
        smooth = False
    return ColorScale(keys=keys, space=space, smooth=smooth, domain=domain)


# ---- ordering / diverging scales ---------------------------------------------


def order_by_luminosity(
    colors: Sequence[ColorLike], direction: Direction = "toLight"
) -> list[ColorLike]:
    """``toLight`` puts the lightest color first, ``toDark`` the darkest."""
    if direction not in ("toLight", "toDark"):
        raise ValueError(f"direction must be 'toLight' or 'toDark', not {direction!r}")
    return sorted(colors, key=luminosity, reverse=direction == "toLight")


def create_equiluminant_key(middle_key: ColorLike, keys: Sequence[ColorLike]) -> str:
    """A low-chroma key at the middle key's CAM02 lightness, tinted with the hue
    of the lightest surrounding key."""
    J = to_space(middle_key, "CAM02p")[0]
    lightest = order_by_luminosity(keys, "toLight")[0]
    hue = to_space(lightest, "CAM02p")[2]
    return to_hex(from_space((J, EQUILUMINANT_CHROMA, hue), "CAM02p"))


@dataclass(frozen=True)
class DivergingScale(_Sampling):
    """Two half scales joined at ``domain / 2``."""

    start: ColorScale
    end: ColorScale
    domain: float = 1.0

    @property
    def domain_max(self) -> float:
        return float(self.domain)

    def __call__(self, position: float) -> Color:
        half = self.domain / 2
        if position <= half:
            return self.start(position / half * self.start.domain_max)
        return self.end((position - half) / half * self.end.domain_max)


def build_diverging(
    start_keys: Sequence[ColorLike],
    end_keys: Sequence[ColorLike],
    middle: ColorLike | None = None,
    *,
    smooth: bool = False,
    space: str = "CAM02",
    equiluminant: bool = True,
    domain: float = 1.0,
) -> DivergingScale:
    start = list(start_keys)
    end = list(end_keys)
    if middle is not None:
        if equiluminant and start:
            start.append(create_equiluminant_key(middle, start_keys))
        start.append(middle)
        end.insert(0, middle)
        if equiluminant and end_keys:
            end.insert(1, create_equiluminant_key(middle, end_keys))
    return DivergingScale(
        start=build_scale(start, smooth=smooth, space=space),
        end=build_scale(end, smooth=smooth, space=space),
        domain=domain,
    )


# ---- key color editing -------------------------------------------------------


def next_key_color(keys: Sequence[ColorLike]) -> str:
    """Key suggested after the last one: same HSLuv hue/saturation, lightness
    halved when light, otherwise moved a third of the way towards white."""
    last = keys[-1] if keys else NEUTRAL_KEY
    h, s, l = to_space(last, "HSLuv")
    l = l / 2 if l >= 50 else (100 - l) / 3 + l
    return to_hex(from_space((h, s, l), "HSLuv"))


@dataclass(frozen=True)
class KeyColors:
    """Ordered key colors of one scale plus its interpolation options.

    Every edit returns a new value; smoothing is switched off whenever fewer
    than three keys remain.
    """

    keys: tuple[str, ...] = (NEUTRAL_KEY,)
    smooth: bool = False
    space: str = "CAM02"

    def __post_init__(self) -> None:
        keys = tuple(to_hex(k) for k in self.keys) or (NEUTRAL_KEY,)
        object.__setattr__(self, "keys", keys)
        if self.smooth and not self.smooth_enabled:
            object.__setattr__(self, "smooth", False)

    @property
    def smooth_enabled(self) -> bool:
        return len(self.keys) >= MIN_SMOOTH_KEYS

    @property
    def scale(self) -> ColorScale:
        return build_scale(self.keys, smooth=self.smooth, space=self.space)

    def add(self, color: ColorLike | None = None) -> KeyColors:
        new = color if color is not None else next_key_color(self.keys)
        return _replace(self, keys=self.keys + (to_hex(new),))

    def insert(self, index: int, color: ColorLike) -> KeyColors:
        keys = list(self.keys)
        keys.insert(index, to_hex(color))
        return _replace(self, keys=tuple(keys))

    def remove(self, index: int) -> KeyColors:
        keys = list(self.keys)
        del keys[index]
        return _replace(self, keys=tuple(keys))

    def replace(self, index: int, color: ColorLike) -> KeyColors:
        keys = list(self.keys)
        keys[index] = to_hex(color)
        return _replace(self, keys=tuple(keys))

    def clear(self) -> KeyColors:
        return _replace(self, keys=(NEUTRAL_KEY,))

    def with_smooth(self, smooth: bool) -> KeyColors:
        return _replace(self, smooth=smooth)


__all__ = [
    "NEUTRAL_KEY",
    "ColorScale",
    "DivergingScale",
    "KeyColors",
    "build_scale",
    "build_diverging",
    "create_equiluminant_key",
    "next_key_color",
    "order_by_luminosity",
]
