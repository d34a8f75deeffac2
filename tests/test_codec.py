import math

import pytest

from palette_studio.codec import (
    ParseError,
    bulk_format,
    channel_values,
    css_to_hex,
    filter_nan,
    format_color,
    from_space,
    luminosity,
    parse,
    round_to,
    to_color,
    to_hex,
    to_space,
)
from palette_studio.hues import color_difference
from palette_studio.spaces import SPACES, Color

SAMPLES = [
    "#000000",
    "#ffffff",
    "#ff0000",
    "#00ff00",
    "#0000ff",
    "#336699",
    "#c0ffee",
    "#7f7f7f",
]


def _srgb(color):
    return to_color(color).coords()


@pytest.mark.parametrize("space", sorted(SPACES))
@pytest.mark.parametrize("hex_", SAMPLES)
def test_round_trip(space, hex_):
    back = from_space(to_space(hex_, space), space)
    assert back.coords() == pytest.approx(_srgb(hex_), abs=1e-4)
    assert to_hex(back) == hex_


def test_to_space_never_returns_nan():
    # gray has no hue in the cylindrical spaces
    for space in ("HSL", "HSV", "HSLuv", "LCH", "CAM02p"):
        assert all(math.isfinite(v) for v in to_space("#808080", space))


def test_rgb_channels_are_bytes():
    assert to_space("#ff8000", "RGB") == pytest.approx((255, 128, 0), abs=1e-9)


def test_parse_function_notations():
    assert to_hex(parse("hsl(120, 100%, 50%)")) == "#00ff00"
    assert to_hex(parse("hsv(0, 100%, 100%)")) == "#ff0000"
    assert to_hex(parse("HSL(240deg 100% 50%)")) == "#0000ff"
    assert to_hex(parse("lab(100%, 0, 0)")) == "#ffffff"
    assert to_hex(parse("hsluv(0, 0, 0)")) == "#000000"


def test_parse_without_prefix_uses_css_parser():
    assert to_hex(parse("#f00")) == "#ff0000"
    assert to_hex(parse("rebeccapurple")) == "#663399"
    assert to_hex(parse("rgb(0, 128, 255)")) == "#0080ff"


@pytest.mark.parametrize("text", ["", "not-a-color", "hsl(10, 20%)", "lch(1, 2, 3, 4)"])
def test_parse_errors(text):
    with pytest.raises(ParseError):
        parse(text)


def test_parse_error_is_value_error_and_names_space():
    with pytest.raises(ValueError) as info:
        to_space("#ffffff", "XYZ")
    assert isinstance(info.value, ParseError)
    assert info.value.space == "XYZ"
    assert "XYZ" in str(info.value)


def test_to_color_rejects_other_types():
    with pytest.raises(ParseError):
        to_color(42)


def test_to_color_accepts_coloraide_colors():
    c = to_color(Color("display-p3", [1, 0, 0]))
    assert c.space() == "srgb"


def test_format_strings():
    assert format_color("#ff0000", "HSL") == "hsl(0deg, 100%, 50%)"
    assert format_color("#ff0000", "HSV") == "hsv(0deg, 100%, 100%)"
    assert format_color("#ff0000", "RGB") == "rgb(255, 0, 0)"
    assert format_color("#FF0000", "HEX") == "#ff0000"
    assert format_color("#ffffff", "LAB") == "lab(100%, 0, 0)"


def test_format_objects_keep_two_decimals():
    obj = format_color("#336699", "LCH", as_object=True)
    assert set(obj) == {"l", "c", "h"}
    for v in obj.values():
        assert round(v, 2) == v
    assert format_color("#ff0000", "HEX", as_object=True) == {"r": 255, "g": 0, "b": 0}


@pytest.mark.parametrize("space", ["HSL", "HSV", "HSLuv", "LAB", "LCH", "CAM02", "CAM02p"])
def test_formatted_strings_parse_back(space):
    text = format_color("#336699", space)
    assert text.startswith(SPACES[space].notation + "(")
    assert color_difference(parse(text), "#336699") < 3


def test_bulk_helpers():
    colors = ["#ff0000", "#00ff00"]
    assert bulk_format(colors, "HEX") == colors
    assert channel_values(colors, "HEX", "g") == [0, 255]
    with pytest.raises(ParseError):
        channel_values(colors, "HEX", "x")


def test_css_to_hex():
    assert css_to_hex("hsl(0, 100%, 50%)") == "#ff0000"


def test_luminosity_bounds():
    assert luminosity("#000000") == pytest.approx(0, abs=1e-6)
    assert luminosity("#ffffff") == pytest.approx(100, abs=1e-3)


def test_filter_nan():
    assert filter_nan(float("nan")) == 0
    assert filter_nan(float("inf")) == 0
    assert filter_nan(None) == 0
    assert filter_nan("junk") == 0
    assert filter_nan("1.5") == 1.5


def test_round_to_is_half_up():
    assert round_to(2.5) == 3
    assert round_to(-2.5) == -2
    assert round_to(1.234, 2) == pytest.approx(1.23)
    assert isinstance(round_to(1.4), int)
