"""Display modes that control how a curve viewer lays out and updates its data."""

from dataclasses import dataclass
from enum import IntEnum


class CurveXAxisMode(IntEnum):
    """How the horizontal axis is treated."""

    FIXED = 0
    DISCRETE = 1
    CONTINUOUS = 2


class CurveYAxisMode(IntEnum):
    """How the vertical axis is treated."""

    FIXED = 0
    ADAPTIVE = 1


class CurveXUpdateMode(IntEnum):
    """How new values move along the horizontal axis."""

    SCROLL = 0
    SWEEP = 1


class CurveSeriesMode(IntEnum):
    """How points of a series are joined."""

    LINE = 0
    SPLINE = 1


@dataclass
class CurveMode:
    """The combined set of modes of one curve viewer."""

    x_axis_mode: CurveXAxisMode = CurveXAxisMode.CONTINUOUS
    y_axis_mode: CurveYAxisMode = CurveYAxisMode.ADAPTIVE
    x_update_mode: CurveXUpdateMode = CurveXUpdateMode.SCROLL
    series_mode: CurveSeriesMode = CurveSeriesMode.LINE

    def __post_init__(self) -> None:
        # Accept plain integers; unknown values raise ValueError.
        self.x_axis_mode = CurveXAxisMode(self.x_axis_mode)
        self.y_axis_mode = CurveYAxisMode(self.y_axis_mode)
        self.x_update_mode = CurveXUpdateMode(self.x_update_mode)
        self.series_mode = CurveSeriesMode(self.series_mode)