import pytest

from palette_studio.codec import luminosity
from palette_studio.contrast import (
    color_for_ratio,
    contrast,
    contrast_colors,
    signed_contrast,
    target_luminance,
)
from palette_studio.ratios import (
    RatioEntry,
    Theme,
    add_ratio,
    add_theme_ratio,
    create_theme,
    delete_ratio,
    distribute_evenly,
    distribute_luminosity,
    distribute_ratios,
    rebuild,
    sort_by_value,
    sort_ratios,
    step_value,
    sync_from_luminosity,
    sync_from_ratio,
)
from palette_studio.scale import build_scale


@pytest.fixture
def gray_scale():
    return build_scale(["#ffffff", "#000000"], space="RGB", domain=100)


@pytest.fixture
def theme(gray_scale):
    return create_theme(gray_scale, [3, 4.5, 7])


# ---- plain values ----


def test_add_ratio_ceiling():
    assert add_ratio([20]) == 21
    assert add_ratio([21]) == 20
    assert add_ratio([20.5]) == 21
    assert add_ratio([3, 4.5]) == 5.5
    assert add_ratio([]) == 4.5


@pytest.mark.parametrize(
    "values",
    [[1, 7, 3], [4.5, 4.5], [21, 1, 3, 3, 12], [-3, 1.5, 2, 8.25]],
)
def test_distribute_evenly_invariants(values):
    out = distribute_evenly(values)
    assert len(out) == len(values)
    assert out[0] == min(values)
    assert out[-1] == max(values)
    assert all(a <= b for a, b in zip(out, out[1:]))


def test_distribute_evenly_values():
    assert distribute_evenly([1, 7, 3]) == [1.0, 4.0, 7.0]
    assert distribute_evenly([0, 10, 1, 1]) == [0.0, 3.33, 6.67, 10.0]


def test_distribute_evenly_rounds_endpoints():
    assert distribute_evenly([1.234, 5.678]) == [1.23, 5.68]


def test_distribute_evenly_guards_short_lists():
    assert distribute_evenly([]) == []
    assert distribute_evenly([4.5]) == [4.5]


def test_sort_by_value_is_stable():
    assert sort_by_value([3, 1, 2]) == [1, 2, 3]
    assert sort_by_value([2.0, 1, 2]) == [1, 2.0, 2]
    pairs = [("b", 2), ("a", 1), ("c", 2)]
    assert sort_by_value(pairs, key=lambda p: p[1]) == [("a", 1), ("b", 2), ("c", 2)]


def test_step_value():
    assert step_value(4.5, "up") == 5.5
    assert step_value(4.5, "down") == 3.5
    with pytest.raises(ValueError):
        step_value(4.5, "left")


# ---- contrast engine ----


def test_target_luminance():
    assert target_luminance("#ffffff", 4.5) == pytest.approx(1.05 / 4.5 - 0.05, abs=1e-4)
    assert target_luminance("#000000", 4.5) == pytest.approx(4.5 * 0.05 - 0.05, abs=1e-4)
    # toward the background's own side, clamped
    assert target_luminance("#ffffff", -2) == pytest.approx(1.0)
    # magnitudes below 1 mean no contrast at all
    assert target_luminance("#ffffff", 0.5) == pytest.approx(1.0, abs=1e-4)


def test_signed_contrast():
    assert signed_contrast("#000000", "#ffffff") == pytest.approx(21, abs=1e-3)
    assert signed_contrast("#ffffff", "#000000") == pytest.approx(21, abs=1e-3)
    assert signed_contrast("#ffffff", "#cccccc") < 0
    assert signed_contrast("#000000", "#333333") < 0


@pytest.mark.parametrize("background", ["#ffffff", "#000000"])
def test_color_for_ratio(gray_scale, background):
    swatch = color_for_ratio(gray_scale, background, 4.5)
    assert contrast(swatch, background) == pytest.approx(4.5, abs=0.1)


def test_contrast_colors(gray_scale):
    out = contrast_colors(gray_scale, "#ffffff", [3, 4.5, 7])
    assert [c["ratio"] for c in out] == [3, 4.5, 7]
    for c in out:
        assert c["contrast"] == pytest.approx(c["ratio"], abs=0.15)


# ---- theme ----


def test_create_theme(theme):
    assert theme.background == "#ffffff"
    assert theme.ratios == [3, 4.5, 7]
    assert theme.luminosities == sorted(theme.luminosities, reverse=True)
    for entry in theme.entries:
        assert isinstance(entry, RatioEntry)
        assert contrast(entry.swatch, "#ffffff") == pytest.approx(entry.ratio, abs=0.15)
        assert luminosity(entry.swatch) == pytest.approx(entry.luminosity, abs=0.01)


def test_theme_is_immutable(theme):
    updated = sync_from_ratio(theme, 0, 2)
    assert theme.ratios == [3, 4.5, 7]
    assert updated.ratios == [2, 4.5, 7]
    assert updated.entries[1:] == theme.entries[1:]


def test_sync_from_luminosity(theme):
    updated = sync_from_luminosity(theme, 1, 50)
    entry = updated.entries[1]
    assert entry.luminosity == 50
    assert luminosity(entry.swatch) == pytest.approx(50, abs=0.5)
    assert entry.ratio == pytest.approx(contrast(entry.swatch, "#ffffff"), abs=0.01)


def test_sync_from_luminosity_sign_on_dark_background(gray_scale):
    dark = create_theme(gray_scale, [4.5], background="#000000")
    entry = sync_from_luminosity(dark, 0, 80).entries[0]
    assert entry.ratio > 1


def test_add_and_delete(theme):
    added = add_theme_ratio(theme)
    assert added.ratios == [3, 4.5, 7, 8]
    assert add_theme_ratio(theme, 2).ratios == [3, 4.5, 7, 2]
    assert delete_ratio(added, 0).ratios == [4.5, 7, 8]


def test_distribute_ratios(gray_scale):
    theme = create_theme(gray_scale, [3, 4, 9])
    assert distribute_ratios(theme).ratios == [3, 6, 9]


def test_distribute_luminosity(gray_scale):
    theme = create_theme(gray_scale, [2, 9, 4.5])
    lums = distribute_evenly(theme.luminosities)
    out = distribute_luminosity(theme)
    assert sorted(out.luminosities) == sorted(lums)
    assert out.ratios == sorted(out.ratios)
    assert out.luminosities == sorted(out.luminosities, reverse=True)


def test_sort_ratios(gray_scale):
    theme = create_theme(gray_scale, [7, 3, 4.5])
    assert sort_ratios(theme).ratios == [3, 4.5, 7]


def test_sort_ratios_keeps_ties_in_order(gray_scale):
    theme = create_theme(gray_scale, [4.5, 3, 4.5])
    first, second = theme.entries[0], theme.entries[2]
    out = sort_ratios(theme)
    assert out.ratios == [3, 4.5, 4.5]
    assert out.entries[1] is first
    assert out.entries[2] is second


def test_short_lists_are_left_alone(gray_scale):
    theme = create_theme(gray_scale, [4.5])
    assert distribute_ratios(theme) is theme
    assert distribute_luminosity(theme) is theme
    assert sort_ratios(theme) is theme


def test_rebuild_with_new_background(theme):
    dark = rebuild(theme, background="#000000")
    assert dark.ratios == theme.ratios
    for entry in dark.entries:
        assert contrast(entry.swatch, "#000000") == pytest.approx(entry.ratio, abs=0.15)


def test_theme_normalizes_background(gray_scale):
    assert Theme(gray_scale, background="white").background == "#ffffff"
