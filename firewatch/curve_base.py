"""Data model shared by curve viewers: point series, axes and colours."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .curve_color import Color, scheme_color
from .curve_mode import CurveMode, CurveSeriesMode, CurveXUpdateMode

Point = tuple[float, float]

DEFAULT_CURVE_COLOR: Color = (0x00, 0xFF, 0x00, 255)
DEFAULT_BACKGROUND: Color = (0, 0, 0, 255)
UPDATE_LINE_COLOR: Color = (128, 0, 128, 255)
X_TICK_COUNT = 20


class Series:
    """An ordered list of (x, y) points with a pen colour and width."""

    def __init__(self, color: Color = DEFAULT_CURVE_COLOR, width: int = 1) -> None:
        self.color = color
        self.width = width
        self._points: list[Point] = []

    @property
    def points(self) -> list[Point]:
        return list(self._points)

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self._points)

    def __getitem__(self, index: int) -> Point:
        return self._points[index]

    def append(self, x: float, y: float) -> None:
        self._points.append((float(x), float(y)))

    def replace(self, index: int, x: float, y: float) -> None:
        if not 0 <= index < len(self._points):
            raise IndexError(f"point index {index} out of range")
        self._points[index] = (float(x), float(y))

    def replace_all(self, points: Iterable[Point]) -> None:
        """Replace every point of the series with the given ones."""
        self._points = [(float(x), float(y)) for x, y in points]

    def remove_points(self, start: int, count: int) -> None:
        if start < 0 or count < 0 or start + count > len(self._points):
            raise IndexError(f"cannot remove {count} points from index {start}")
        del self._points[start:start + count]

    def clear(self) -> None:
        self._points.clear()


class CurveViewer:
    """State of a curve display: value ranges, visible axes, series and colours."""

    def __init__(
        self,
        x_min: int = 0,
        x_max: int = 255,
        y_min: int = 0,
        y_max: int = 255,
        mode: CurveMode | None = None,
    ) -> None:
        self.mode = mode if mode is not None else CurveMode()
        self.x_min = x_min
        self.x_max = x_max
        self.y_min = y_min
        self.y_max = y_max
        self.curve_color: Color = DEFAULT_CURVE_COLOR
        self.background: Color = DEFAULT_BACKGROUND
        self.x_tick_count = X_TICK_COUNT
        self.curve_series = Series(color=self.curve_color, width=1)
        self.update_series: Series | None = (
            Series(color=UPDATE_LINE_COLOR, width=2)
            if self.mode.x_update_mode is CurveXUpdateMode.SWEEP
            else None
        )
        self.x_axis: tuple[float, float] = (float(x_min), float(x_max))
        self.y_axis: tuple[float, float] = (float(y_min), float(y_max))

    @property
    def series_mode(self) -> CurveSeriesMode:
        return self.mode.series_mode

    def update_x_axis_range(self, x_min: int, x_max: int) -> None:
        self.x_min = x_min
        self.x_max = x_max
        self.x_axis = (float(x_min), float(x_max))

    def update_y_axis_range(self, y_min: int, y_max: int) -> None:
        self.y_min = y_min
        self.y_max = y_max
        self.y_axis = (float(y_min), float(y_max))

    def switch_color_scheme(self, scheme_name: str) -> None:
        """Use the background colour of a scheme; unknown schemes are ignored."""
        try:
            self.background = scheme_color(scheme_name, "CurveViewBkColor")
        except KeyError:
            pass

    def scroll(self, dx: float) -> None:
        """Shift the visible horizontal axis by dx."""
        low, high = self.x_axis
        self.x_axis = (low + dx, high + dx)