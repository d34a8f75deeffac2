from __future__ import annotations

from typing import Iterable

from .codec import ColorLike, luminosity, round_to, to_color, to_hex
from .locator import LuminositySearch, Scale
from .spaces import Color

MIN_RATIO = 1.0
MAX_RATIO = 21.0


def relative_luminance(color: ColorLike) -> float:
    """WCAG relative luminance (Y), 0…1."""
    return to_color(color).luminance()


def contrast(foreground: ColorLike, background: ColorLike) -> float:
    """WCAG 2.1 contrast ratio, 1…21."""
    return to_color(foreground).contrast(to_color(background), method="wcag21")


def is_light(background: ColorLike) -> bool:
    return luminosity(background) >= 50


def signed_contrast(foreground: ColorLike, background: ColorLike) -> float:
    """Contrast ratio, negated when ``foreground`` sits on the same side of the
    lightness range as ``background`` (lighter on light, darker on dark)."""
    ratio = contrast(foreground, background)
    fg = relative_luminance(foreground)
    bg = relative_luminance(background)
    if (is_light(background) and fg > bg) or (not is_light(background) and fg < bg):
        return -ratio
    return ratio


def target_luminance(background: ColorLike, ratio: float) -> float:
    """Relative luminance a swatch needs to reach ``ratio`` against ``background``.

    Positive ratios move away from the background (darker on light
    backgrounds), negative ones the other way.  The result is clamped to the
    displayable range, so unreachable ratios land on black or white.
    """
    r = max(MIN_RATIO, abs(float(ratio)))
    y = relative_luminance(background)
    darker = is_light(background) == (ratio >= 0)
    if darker:
        out = (y + 0.05) / r - 0.05
    else:
        out = r * (y + 0.05) - 0.05
    return min(1.0, max(0.0, out))


def luminance_to_luminosity(y: float) -> float:
    """HSLuv lightness of the gray with relative luminance ``y``."""
    return luminosity(Color("srgb-linear", [y, y, y]))


def luminosity_for_ratio(background: ColorLike, ratio: float) -> float:
    return luminance_to_luminosity(target_luminance(background, ratio))


def color_for_ratio(
    scale: Scale,
    background: ColorLike,
    ratio: float,
    smooth: bool = False,
    search: LuminositySearch | None = None,
) -> str:
    """Swatch on ``scale`` that reaches ``ratio`` against ``background``."""
    search = search or LuminositySearch()
    target = luminosity_for_ratio(background, ratio)
    pos = search.locate(scale, scale.domain_max, target, smooth)  # type: ignore[attr-defined]
    return to_hex(scale(pos))


def contrast_colors(
    scale: Scale,
    background: ColorLike,
    ratios: Iterable[float],
    smooth: bool = False,
) -> list[dict]:
    """``{"ratio", "value", "contrast"}`` for every requested ratio, where
    ``contrast`` is the ratio the chosen swatch actually reaches."""
    search = LuminositySearch()
    out = []
    for ratio in ratios:
        swatch = color_for_ratio(scale, background, ratio, smooth, search)
        out.append(
            {
                "ratio": ratio,
                "value": swatch,
                "contrast": round_to(signed_contrast(swatch, background), 2),
            }
        )
    return out


__all__ = [
    "MAX_RATIO",
    "relative_luminance",
    "contrast",
    "is_light",
    "signed_contrast",
    "target_luminance",
    "luminance_to_luminosity",
    "luminosity_for_ratio",
    "color_for_ratio",
    "contrast_colors",
]
