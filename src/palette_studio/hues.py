from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from random import Random
from typing import Sequence, TypeVar

from .codec import ColorLike, to_color, to_space

log = logging.getLogger(__name__)

C = TypeVar("C", bound=ColorLike)

ORDER_OPTIONS = ("hue", "saturation", "lightness")


def color_difference(color1: ColorLike, color2: ColorLike) -> float:
    """CIEDE2000 distance."""
    return to_color(color1).delta_e(to_color(color2), method="2000")


def order_colors(
    colors: Sequence[C],
    priority1: str,
    priority2: str | None = None,
    random: bool = False,
    rng: Random | None = None,
) -> list[C]:
    """Order by floored CAM02 ``hue`` / ``saturation`` (chroma) / ``lightness``.

    With ``random`` and a hue ordering, the sequence is rotated so that it
    starts at a random hue.
    """
    for p in (priority1, priority2):
        if p is not None and p not in ORDER_OPTIONS:
            raise ValueError(f"{p!r} is not a valid option of {ORDER_OPTIONS}")

    def key(color: C) -> tuple[int, ...]:
        J, chroma, h = to_space(color, "CAM02p")
        fields = {
            "hue": math.floor(h),
            "saturation": math.floor(chroma),
            "lightness": math.floor(J),
        }
        return tuple(fields[p] for p in (priority1, priority2) if p is not None)

    ordered = sorted(colors, key=key)
    if random and priority1 == "hue" and ordered:
        start = (rng or Random()).randrange(len(ordered))
        ordered = ordered[start:] + ordered[:start]
    return ordered


@dataclass
class HueGrouper:
    """Buckets of visually related hues, used to propose color names.

    Colors are walked in CAM02 hue order.  A hue jump of ``hue_group_threshold``
    or more opens a new bucket; otherwise the color joins every bucket whose
    members are all noticeably different (ΔE2000 above ``difference_min``),
    none wildly different (below ``difference_max``) and whose closest hue is
    within ``hue_threshold``.  A color may therefore join several buckets, or
    none.  Dull or very dark colors are left out.
    """

    hue_group_threshold: float = 22
    hue_threshold: float = 22
    difference_min: float = 16
    difference_max: float = 100
    min_chroma: float = 30
    min_luma: float = 8

    def group(self, colors: Sequence[C]) -> list[list[C]]:
        ordered = order_colors(colors, "hue", "saturation")
        filtered = [c for c in ordered if self._distinct(c)]
        if len(filtered) < len(ordered):
            log.debug("Dropped %d indistinct colors", len(ordered) - len(filtered))
        hues = [to_space(c, "CAM02p")[2] for c in filtered]

        buckets: list[list[int]] = []
        for i in range(len(filtered)):
            last = len(filtered) - 1 if i == 0 else i - 1
            hue_diff = abs(hues[i] - hues[last])

            if hue_diff >= self.hue_group_threshold or not buckets:
                buckets.append([i])
            if hue_diff < self.hue_group_threshold and buckets:
                for bucket in buckets:
                    diffs = [color_difference(filtered[j], filtered[i]) for j in bucket]
                    hue_diffs = [hues[i] - hues[j] for j in bucket]
                    if (
                        min(diffs) > self.difference_min
                        and max(diffs) < self.difference_max
                        and min(hue_diffs) <= self.hue_threshold
                    ):
                        bucket.append(i)

        return [[filtered[j] for j in bucket] for bucket in buckets]

    # ---- internals ----

    def _distinct(self, color: ColorLike) -> bool:
        lightness, chroma, _ = to_space(color, "LCH")
        return chroma > self.min_chroma and lightness > self.min_luma


def group_common_hues(colors: Sequence[C]) -> list[list[C]]:
    return HueGrouper().group(colors)


__all__ = ["HueGrouper", "group_common_hues", "order_colors", "color_difference"]
