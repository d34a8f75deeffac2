from __future__ import annotations

import math
from typing import Callable, Iterable, Mapping

from .codec import ColorLike, filter_nan, get_space, to_space

# (c1, c2, c3) per space: for polar spaces c1 is the hue, c2 the radius and
# c3 the lightness axis; otherwise c1/c2 are the planar axes.
CHART_CHANNELS: Mapping[str, tuple[str, str, str]] = {
    "RGB": ("r", "g", "b"),
    "HEX": ("r", "g", "b"),
    "LAB": ("a", "b", "l"),
    "LCH": ("h", "c", "l"),
    "CAM02": ("a", "b", "J"),
    "CAM02p": ("h", "C", "J"),
    "HSL": ("h", "s", "l"),
    "HSLuv": ("h", "s", "l"),
    "HSV": ("h", "s", "v"),
}

# native [0, 1] channels, scaled up to percentages for charting
_PERCENT_SPACES = {"HSL", "HSV"}


def chart_channels(space: str) -> tuple[str, str, str]:
    return CHART_CHANNELS[get_space(space).tag]


def convert_to_cartesian(
    radius: float, angle: float, clamp: bool = False
) -> dict[str, float]:
    """Polar (radius, angle in degrees) → ``{"x", "y"}``; ``clamp`` caps radius at 100."""
    if clamp and radius > 100:
        radius = 100
    rad = math.radians(angle)
    return {"x": radius * math.cos(rad), "y": radius * math.sin(rad)}


def project(colors: Iterable[ColorLike], space: str) -> dict[str, list[float]]:
    """Three parallel chart series ``a``, ``b``, ``c`` for ``colors`` in ``space``."""
    cs = get_space(space)
    c1, c2, c3 = CHART_CHANNELS[cs.tag]
    scale = 100.0 if cs.tag in _PERCENT_SPACES else 1.0

    a: list[float] = []
    b: list[float] = []
    c: list[float] = []
    for color in colors:
        values = dict(zip(cs.channels, to_space(color, cs.tag)))
        if cs.polar:
            xy = convert_to_cartesian(values[c2] * scale, values[c1])
            a.append(filter_nan(xy["x"]))
            c.append(filter_nan(xy["y"]))
        else:
            a.append(filter_nan(values[c1]))
            c.append(filter_nan(values[c2]))
        b.append(filter_nan(values[c3] * scale))
    return {"a": a, "b": b, "c": c}


def make_pow_scale(
    exp: float = 1.0,
    domain: tuple[float, float] = (0.0, 1.0),
    range_: tuple[float, float] = (0.0, 1.0),
) -> Callable[[float], float]:
    """``y = m·x**exp + c`` through (domain[0], range_[0]) and (domain[1], range_[1])."""
    m = (range_[1] - range_[0]) / (domain[1] ** exp - domain[0] ** exp)
    c = range_[0] - m * domain[0] ** exp
    return lambda x: m * x**exp + c


__all__ = [
    "CHART_CHANNELS",
    "chart_channels",
    "convert_to_cartesian",
    "project",
    "make_pow_scale",
]
