from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, Iterable

from .codec import from_space, luminosity, round_to, to_hex

log = logging.getLogger(__name__)

# anything callable as scale(position) -> color (ColorScale, DivergingScale, ...)
Scale = Callable[[float], Any]


@dataclass
class LuminositySearch:
    """Bisection over a scale's domain for a target HSLuv lightness.

    The search never fails: after ``max_iter`` halvings the best sample is
    returned even when it is not within ``epsilon`` of the target.

    Positions are rounded to ``precision`` decimals, so the domain must be wide
    enough for that rounding to stay under ``epsilon``.  A two-key scale on the
    default ``[0, 1]`` domain only lands within about a tenth of the target;
    build it over ``[0, 3000]`` or so when the full precision matters.
    """

    epsilon: float = 0.01
    max_iter: int = 100
    nudge: float = 0.005
    precision: int = 3

    def locate(
        self, scale: Scale, domain_max: float, target: float, smooth: bool = False
    ) -> float:
        lum = self._reader(scale, smooth)
        first = lum(0.0)
        last = lum(domain_max)
        direction = 1 if first < last else -1

        x = float(target)
        x += self.nudge * math.copysign(1.0, x) if x else 0.0
        step = domain_max / 2
        dot = step
        val = lum(dot)
        counter = self.max_iter
        while abs(val - x) > self.epsilon and counter:
            counter -= 1
            step /= 2
            if val < x:
                dot += step * direction
            else:
                dot -= step * direction
            val = lum(dot)

        if abs(val - x) > self.epsilon:
            log.debug(
                "luminosity %.3f not reached in %d steps; best %.3f at %.4f",
                target,
                self.max_iter,
                val,
                dot,
            )
        return round_to(dot, self.precision)

    # ---- internals ----

    @staticmethod
    def _reader(scale: Scale, smooth: bool) -> Callable[[float], float]:
        # smoothed scales are read through their raw channel accessor
        channels = getattr(scale, "channels", None)
        if smooth and channels is not None:
            space = scale.space  # type: ignore[attr-defined]
            return lambda p: luminosity(from_space(channels(p), space))
        return lambda p: luminosity(scale(p))


def locate(
    scale: Scale, domain_max: float, target: float, smooth: bool = False
) -> float:
    return LuminositySearch().locate(scale, domain_max, target, smooth)


def find_matching_luminosity(
    scale: Scale,
    domain_max: float,
    luminosities: Iterable[float],
    smooth: bool = False,
) -> list[str]:
    """Hex swatch on ``scale`` for each requested luminosity."""
    search = LuminositySearch()
    out: list[str] = []
    for lum in luminosities:
        pos = search.locate(scale, domain_max, float(lum), smooth)
        out.append(to_hex(scale(pos)))
    return out


__all__ = ["LuminositySearch", "locate", "find_matching_luminosity"]
