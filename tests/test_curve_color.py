import pytest

from firewatch.curve_color import COLOR_ARRAY_LEN, color_by_index, scheme_color


def test_first_palette_entry():
    assert color_by_index(0) == (192, 64, 64, 255)


def test_palette_length():
    assert COLOR_ARRAY_LEN == 47
    assert color_by_index(COLOR_ARRAY_LEN - 1) == (80, 192, 64, 255)
    assert color_by_index(COLOR_ARRAY_LEN) == color_by_index(0)


def test_index_wraps_around_palette():
    for index in range(0, 256 - COLOR_ARRAY_LEN):
        assert color_by_index(index) == color_by_index(index + COLOR_ARRAY_LEN)


def test_all_palette_colours_are_opaque():
    assert all(color_by_index(i)[3] == 255 for i in range(256))


@pytest.mark.parametrize("index", [-1, 256, 1000])
def test_out_of_range_index_raises(index):
    with pytest.raises(ValueError):
        color_by_index(index)


def test_scheme_colours():
    assert scheme_color("Dark", "CurveViewBkColor") == (0, 0, 0, 255)
    assert scheme_color("Bright", "CurveViewBkColor") == (0xFF, 0xFF, 0xFF, 255)
    assert scheme_color("Gray", "CurveViewBkColor") == (0x27, 0x2C, 0x36, 255)


def test_unknown_scheme_raises():
    with pytest.raises(KeyError):
        scheme_color("Neon", "CurveViewBkColor")


def test_unknown_colour_name_raises():
    with pytest.raises(KeyError):
        scheme_color("Dark", "GridColor")