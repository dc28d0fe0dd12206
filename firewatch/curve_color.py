"""Palette of curve colours and named background colour schemes."""

Color = tuple[int, int, int, int]

_CURVE_COLORS: tuple[Color, ...] = (
    (192, 64, 64, 255),
    (192, 136, 64, 255),
    (176, 192, 64, 255),
    (104, 192, 64, 255),
    (64, 192, 96, 255),
    (64, 192, 168, 255),
    (64, 144, 192, 255),
    (64, 72, 192, 255),
    (128, 64, 192, 255),
    (192, 64, 184, 255),
    (192, 64, 112, 255),
    (192, 88, 64, 255),
    (192, 160, 64, 255),
    (152, 192, 64, 255),
    (80, 192, 64, 255),
    (64, 192, 120, 255),
    (64, 192, 192, 255),
    (64, 120, 192, 255),
    (80, 64, 192, 255),
    (152, 64, 192, 255),
    (192, 64, 160, 255),
    (192, 64, 88, 255),
    (192, 112, 64, 255),
    (192, 184, 64, 255),
    (128, 192, 64, 255),
    (64, 192, 72, 255),
    (64, 192, 144, 255),
    (64, 168, 192, 255),
    (64, 96, 192, 255),
    (104, 64, 192, 255),
    (176, 64, 192, 255),
    (192, 64, 64, 255),
    (192, 64, 64, 255),
    (192, 136, 64, 255),
    (176, 192, 64, 255),
    (104, 192, 64, 255),
    (64, 192, 96, 255),
    (64, 192, 168, 255),
    (64, 144, 192, 255),
    (64, 72, 192, 255),
    (128, 64, 192, 255),
    (192, 64, 184, 255),
    (192, 64, 112, 255),
    (192, 88, 64, 255),
    (192, 160, 64, 255),
    (152, 192, 64, 255),
    (80, 192, 64, 255),
)

COLOR_ARRAY_LEN = len(_CURVE_COLORS)

_SCHEME_COLOR_NAMES: tuple[str, ...] = ("CurveViewBkColor",)

_SCHEMES: dict[str, tuple[Color, ...]] = {
    "Dark": ((0, 0, 0, 255),),
    "Bright": ((0xFF, 0xFF, 0xFF, 255),),
    "Gray": ((0x27, 0x2C, 0x36, 255),),
}


def color_by_index(index: int) -> Color:
    """Return the palette colour for an index in 0..255, wrapping around the palette."""
    if not 0 <= index <= 0xFF:
        raise ValueError(f"colour index {index} outside 0..255")
    return _CURVE_COLORS[index % COLOR_ARRAY_LEN]


def scheme_color(scheme_name: str, color_name: str) -> Color:
    """Return a named colour of a scheme; raise KeyError for an unknown scheme or name."""
    try:
        scheme = _SCHEMES[scheme_name]
    except KeyError:
        raise KeyError(f"unknown colour scheme {scheme_name!r}") from None
    try:
        position = _SCHEME_COLOR_NAMES.index(color_name)
    except ValueError:
        raise KeyError(f"unknown scheme colour {color_name!r}") from None
    return scheme[position]