"""Curve viewer whose horizontal axis scrolls along with incoming points."""

from __future__ import annotations

from .curve_base import CurveViewer


class ScrollCurveViewer(CurveViewer):
    """Appends points and scrolls the view to keep the newest point visible.

    Points that fall further than ``x_left_staging`` behind the visible
    window are dropped.
    """

    def __init__(self, x_left_staging: int = 0) -> None:
        if not 0 <= x_left_staging <= 0xFF:
            raise ValueError(f"x_left_staging {x_left_staging} outside 0..255")
        super().__init__()
        self.x_left_staging = x_left_staging

    def receive_point(self, x: float, y: float) -> None:
        """Append a point, scrolling and trimming old points as needed."""
        curve = self.curve_series
        if len(curve) == 0:
            curve.append(x, y)
            return
        x_start = curve[0][0]
        curve.append(x, y)

        axis_max = self.x_axis[1]
        if axis_max < x + 1:
            self.scroll(x + 1 - axis_max)

        axis_min = self.x_axis[0]
        if axis_min > x_start + self.x_left_staging:
            self._remove_points_up_to(int(x_start + self.x_left_staging))

    def _remove_points_up_to(self, x_threshold: int) -> None:
        count = 0
        for px, _ in self.curve_series:
            if px > x_threshold:
                break
            count += 1
        self.curve_series.remove_points(0, count)

    def receive_next_value(self, value: float) -> None:
        """Append a value one step after the last point, or at the axis start."""
        curve = self.curve_series
        if len(curve) == 0:
            self.receive_point(self.x_axis[0], value)
            return
        step = 1.0
        if len(curve) > 1:
            step = curve[-1][0] - curve[-2][0]
        self.receive_point(curve[-1][0] + step, value)