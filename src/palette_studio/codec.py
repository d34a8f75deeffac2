"""Color-space codec.

Colors are carried around as :class:`~palette_studio.spaces.Color` values held
in sRGB.  Everything else is a view: ``to_space`` produces a channel triple in
one of the tags from :data:`~palette_studio.spaces.SPACES`, ``from_space``
builds a color back from such a triple, and ``parse`` / ``format_color``
handle the textual ``name(c1, c2, c3)`` notation used by the UI.

Channel conventions
-------------------
RGB, HEX   r, g, b on 0…255
HSL, HSV   hue in degrees, saturation/lightness/value as fractions 0…1
HSLuv      hue in degrees, saturation and lightness 0…100
LAB, LCH   CIE L*a*b* / LCh (D50)
CAM02      CAM02-UCS J', a', b'
CAM02p     CIECAM02 J, C, h

Non-finite channel values never leave this module; they are reported as 0.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Any, Iterable, Sequence, Union

from coloraide import Color as _BaseColor

from . import cam02
from .spaces import COLORAIDE_IDS, NOTATIONS, SPACES, Color, ColorSpace

log = logging.getLogger(__name__)

ColorLike = Union[_BaseColor, str]
Triple = tuple[float, float, float]

FIT_HEX = "clip"  # chroma-style clipping for hex output

_FUNC_RE = re.compile(r"^\s*(hsluv|hsl|hsv|lab|lch|jab|jch)\((.*?)\)", re.IGNORECASE)
_SEP_RE = re.compile(r"[\s,/]+")


class ParseError(ValueError):
    """A color value or space tag that cannot be understood."""

    def __init__(self, value: Any, space: str | None = None, reason: str = "") -> None:
        self.value = value
        self.space = space
        if space is not None and value is None:
            msg = f"Cannot convert to colorspace {space!r}"
        elif space is not None:
            msg = f"Cannot convert color value of {value!r} to colorspace {space!r}"
        else:
            msg = f"Cannot convert color value of {value!r}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


def filter_nan(x: Any) -> float:
    """Coerce NaN, infinities, None and junk to 0."""
    try:
        x = float(x)
    except (TypeError, ValueError):
        return 0.0
    return x if math.isfinite(x) else 0.0


def round_to(x: float, n: int = 0) -> float | int:
    # half-up rounding, the way the UI displays numbers
    ten = 10**n
    value = math.floor(x * ten + 0.5) / ten
    return int(value) if n == 0 else value


def get_space(tag: str) -> ColorSpace:
    space = SPACES.get(tag) if isinstance(tag, str) else None
    if space is None:
        raise ParseError(None, str(tag))
    return space


# ---- construction ------------------------------------------------------------


def to_color(value: ColorLike) -> Color:
    """Normalize a color or color string to a canonical sRGB :class:`Color`."""
    if isinstance(value, _BaseColor):
        return Color(value).convert("srgb")
    if isinstance(value, str):
        return parse(value)
    raise ParseError(value, reason="expected a color or a color string")


def parse(text: str) -> Color:
    """Parse ``hsl(...)``, ``hsv(...)``, ``lab(...)``, ``lch(...)``, ``jab(...)``,
    ``jch(...)``, ``hsluv(...)`` or anything ColorAide understands (hex, names,
    ``rgb(...)``)."""
    if not text or not isinstance(text, str):
        raise ParseError(text, reason="empty color")

    m = _FUNC_RE.match(text)
    if m is None:
        try:
            return Color(text.strip()).convert("srgb")
        except ValueError as exc:
            log.debug("ColorAide rejected %r: %s", text, exc)
            raise ParseError(text) from exc

    tag = NOTATIONS[m.group(1).lower()]
    body = m.group(2).replace("%", "").replace("deg", "").strip()
    parts = [p for p in _SEP_RE.split(body) if p]
    if len(parts) != 3:
        raise ParseError(text, tag, "expected three channels")

    coords = [filter_nan(p) for p in parts]
    for i in SPACES[tag].fractions:
        coords[i] /= 100.0
    return from_space(coords, tag)


def from_space(coords: Sequence[float], space: str) -> Color:
    """Build a canonical color from a channel triple in ``space``."""
    tag = get_space(space).tag
    c1, c2, c3 = (filter_nan(v) for v in coords)

    if tag in ("RGB", "HEX"):
        return Color("srgb", [c1 / 255.0, c2 / 255.0, c3 / 255.0])
    if tag == "CAM02":
        xyz = cam02.jab_to_xyz((c1, c2, c3)) / 100.0
        return Color("xyz-d65", [float(v) for v in xyz]).convert("srgb")
    if tag == "CAM02p":
        xyz = cam02.jch_to_xyz((c1, c2, c3)) / 100.0
        return Color("xyz-d65", [float(v) for v in xyz]).convert("srgb")
    return Color(COLORAIDE_IDS[tag], [c1, c2, c3]).convert("srgb")


# ---- views -------------------------------------------------------------------


def raw_coords(color: Color, tag: str) -> list[float]:
    """Channel values of an already canonical color; hue may be NaN."""
    if tag in ("RGB", "HEX"):
        return [v * 255.0 for v in color.convert("srgb").coords()]
    if tag in ("CAM02", "CAM02p"):
        xyz = [filter_nan(v) * 100.0 for v in color.convert("xyz-d65").coords()]
        out = cam02.xyz_to_jab(xyz) if tag == "CAM02" else cam02.xyz_to_jch(xyz)
        return [float(v) for v in out]
    return [float(v) for v in color.convert(COLORAIDE_IDS[tag]).coords()]


def to_space(color: ColorLike, space: str) -> Triple:
    tag = get_space(space).tag
    c1, c2, c3 = (filter_nan(v) for v in raw_coords(to_color(color), tag))
    return c1, c2, c3


def to_hex(color: ColorLike) -> str:
    return to_color(color).to_string(hex=True, fit=FIT_HEX)


def css_to_hex(text: str) -> str:
    return to_hex(parse(text))


def luminosity(color: ColorLike) -> float:
    """HSLuv lightness, 0…100."""
    return filter_nan(to_color(color).convert("hsluv")["l"])


def format_color(color: ColorLike, space: str, as_object: bool = False):
    """Serialize ``color`` as ``name(c1, c2, c3)`` or a ``{channel: value}`` dict.

    Display strings round to whole numbers and carry units (``%``, ``deg``);
    objects keep two decimals.  HEX yields ``#rrggbb`` or ``{r, g, b}``.
    """
    cs = get_space(space)
    c = to_color(color)

    if cs.tag == "HEX":
        if as_object:
            rgb = (min(255.0, max(0.0, v)) for v in to_space(c, "RGB"))
            return dict(zip(cs.channels, (round_to(v) for v in rgb)))
        return to_hex(c)

    coords = to_space(c, cs.tag)
    values: dict[str, float] = {}
    parts: list[str] = []
    for i, (name, unit, value) in enumerate(zip(cs.channels, cs.units, coords)):
        values[name] = round_to(value, 2)
        if i in cs.fractions:
            parts.append(f"{round_to(value * 100)}%")
        else:
            parts.append(f"{round_to(value)}{unit}")

    if as_object:
        return values
    return f"{cs.notation}({', '.join(parts)})"


def bulk_format(colors: Iterable[ColorLike], space: str, as_object: bool = False) -> list:
    return [format_color(c, space, as_object) for c in colors]


def channel_values(colors: Iterable[ColorLike], space: str, channel: str) -> list[float]:
    """One channel (as rounded in object form) for every color."""
    cs = get_space(space)
    if channel not in cs.channels:
        raise ParseError(channel, space, "unknown channel")
    return [obj[channel] for obj in bulk_format(colors, space, as_object=True)]


__all__ = [
    "ColorLike",
    "ParseError",
    "filter_nan",
    "round_to",
    "get_space",
    "to_color",
    "parse",
    "from_space",
    "raw_coords",
    "to_space",
    "to_hex",
    "css_to_hex",
    "luminosity",
    "format_color",
    "bulk_format",
    "channel_values",
]
