"""Curve viewer that plots arbitrary points within fixed ranges."""

from __future__ import annotations

from .curve_base import CurveViewer


class PlotCurveViewer(CurveViewer):
    """Appends points as given, rejecting any outside the axis ranges."""

    def _validate_x(self, x: float) -> None:
        if x < self.x_min or x > self.x_max:
            raise ValueError(
                f"invalid point x {x} for x_min {self.x_min} and x_max {self.x_max}"
            )

    def _validate_y(self, y: float) -> None:
        if y < self.y_min or y > self.y_max:
            raise ValueError(
                f"invalid point y {y} for y_min {self.y_min} and y_max {self.y_max}"
            )

    def receive_point(self, x: float, y: float) -> None:
        """Validate and append one point."""
        self._validate_x(x)
        self._validate_y(y)
        self.curve_series.append(x, y)