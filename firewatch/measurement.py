"""Routing of measured values to the curve display."""

from __future__ import annotations

from typing import Protocol


class ValueSink(Protocol):
    """Anything that accepts a stream of values, such as a curve viewer."""

    def receive_next_value(self, value: float) -> None: ...


class MeasurementManager:
    """Forwards each new measured value to the attached curve viewer, if any."""

    def __init__(self) -> None:
        self.curve_viewer: ValueSink | None = None

    def set_curve_viewer(self, viewer: ValueSink | None) -> None:
        self.curve_viewer = viewer

    def receive_new_value(self, value: float) -> None:
        if self.curve_viewer is None:
            return
        self.curve_viewer.receive_next_value(value)