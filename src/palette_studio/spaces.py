from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Mapping

# ColorAide with every bundled space (HSLuv needs Luv/LChuv as bases).
from coloraide.everything import ColorAll


class Color(ColorAll):
    """Project-local Color class; canonical values are kept in sRGB."""


Unit = Literal["", "%", "deg"]


@dataclass(frozen=True)
class ColorSpace:
    tag: str
    notation: str  # function-name prefix used in text form
    channels: tuple[str, str, str]
    polar: bool
    units: tuple[Unit, Unit, Unit]
    # channel indexes stored as fractions [0, 1] and shown as percentages
    fractions: tuple[int, ...] = ()

    @property
    def hue_index(self) -> int | None:
        return self.channels.index("h") if "h" in self.channels else None


SPACES: Mapping[str, ColorSpace] = {
    "RGB": ColorSpace("RGB", "rgb", ("r", "g", "b"), False, ("", "", "")),
    "HEX": ColorSpace("HEX", "hex", ("r", "g", "b"), False, ("", "", "")),
    "HSL": ColorSpace(
        "HSL", "hsl", ("h", "s", "l"), True, ("deg", "%", "%"), fractions=(1, 2)
    ),
    "HSV": ColorSpace(
        "HSV", "hsv", ("h", "s", "v"), True, ("deg", "%", "%"), fractions=(1, 2)
    ),
    "HSLuv": ColorSpace("HSLuv", "hsluv", ("h", "s", "l"), True, ("", "", "")),
    "LAB": ColorSpace("LAB", "lab", ("l", "a", "b"), False, ("%", "", "")),
    "LCH": ColorSpace("LCH", "lch", ("l", "c", "h"), True, ("%", "", "deg")),
    "CAM02": ColorSpace("CAM02", "jab", ("J", "a", "b"), False, ("%", "", "")),
    "CAM02p": ColorSpace("CAM02p", "jch", ("J", "C", "h"), True, ("%", "", "deg")),
}

# ColorAide space ids; CAM02 tags are handled by the local CIECAM02 module.
COLORAIDE_IDS: Mapping[str, str] = {
    "RGB": "srgb",
    "HEX": "srgb",
    "HSL": "hsl",
    "HSV": "hsv",
    "HSLuv": "hsluv",
    "LAB": "lab",
    "LCH": "lch",
}

NOTATIONS: Mapping[str, str] = {
    space.notation: tag for tag, space in SPACES.items() if tag != "HEX"
}


__all__ = ["Color", "ColorSpace", "SPACES", "COLORAIDE_IDS", "NOTATIONS"]
