"""Curve viewer that sweeps a cursor across a fixed horizontal range."""

from __future__ import annotations

from collections.abc import Sequence

from .curve_base import CurveViewer
from .curve_mode import CurveMode, CurveXUpdateMode


class SweepCurveViewer(CurveViewer):
    """Writes values at horizontal indexes and wraps back to the start at the end.

    A vertical update line marks the index written last.
    """

    def __init__(self) -> None:
        super().__init__(mode=CurveMode(x_update_mode=CurveXUpdateMode.SWEEP))
        self.last_update_index = 0

    def _validate_index(self, index: int) -> None:
        if index < self.x_min or index > self.x_max:
            raise ValueError(
                f"invalid point index {index} for x_min {self.x_min} and x_max {self.x_max}"
            )

    def _move_update_line(self, index: int) -> None:
        update = self.update_series
        if update is None:
            raise RuntimeError("sweep viewer has no update series")
        if len(update) == 0:
            update.append(index, self.y_min)
            update.append(index, self.y_max)
        elif len(update) == 2:
            update.replace(0, index, self.y_min)
            update.replace(1, index, self.y_max)
        else:
            raise RuntimeError(f"invalid update series point count: {len(update)}")

    def receive_index_value(self, index: int, value: float) -> None:
        """Set the value at one index, padding the curve with zeros up to it."""
        self._validate_index(index)
        self._move_update_line(index)

        curve = self.curve_series
        count = len(curve)
        if count <= index:
            for padding_idx in range(index - count):
                curve.append(padding_idx, 0)
            curve.append(index, value)
        else:
            curve.replace(index, index, value)
        self.last_update_index = index

    def receive_index_values(self, indexes: Sequence[int], values: Sequence[float]) -> None:
        """Set several values; a contiguous run of indexes replaces the whole curve."""
        if len(indexes) != len(values):
            raise ValueError("indexes and values differ in length")
        if not indexes:
            raise ValueError("no indexes given")

        start, end = indexes[0], indexes[-1]
        if end - start + 1 == len(indexes):
            self._validate_index(start)
            self._validate_index(end)
            self.curve_series.replace_all(zip(indexes, values))
            self.last_update_index = end
        else:
            for index, value in zip(indexes, values):
                self.receive_index_value(index, value)

    def receive_next_value(self, value: float) -> None:
        """Write the value at the index after the last one, wrapping past x_max."""
        next_index = self.last_update_index + 1
        if next_index > self.x_max:
            next_index = self.x_min
        self.last_update_index = next_index
        self.receive_index_value(next_index, value)