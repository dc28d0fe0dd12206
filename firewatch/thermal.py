"""Radiometric thermal frames: false-colour rendering, temperatures and camera start-up."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Protocol

import numpy as np

from .config import AppConfig

log = logging.getLogger(__name__)

KELVIN_OFFSET = 273.15
_BLUE_HUE = 0.66


@dataclass
class ThermalFrame:
    """An RGB false-colour image (H x W x 3, uint8) and temperatures in °C."""

    image: np.ndarray
    min_temp_c: float
    max_temp_c: float
    center_temp_c: float


def _hue_to_rgb(hue: np.ndarray) -> np.ndarray:
    """Convert hues in 0..1 at full saturation and value to 8-bit RGB."""
    h6 = (hue % 1.0) * 6.0
    sector = np.floor(h6).astype(np.int64) % 6
    frac = h6 - np.floor(h6)
    ones = np.ones_like(frac)
    zeros = np.zeros_like(frac)
    q = 1.0 - frac
    t = frac
    choices_r = [ones, q, zeros, zeros, t, ones]
    choices_g = [t, ones, ones, q, zeros, zeros]
    choices_b = [zeros, zeros, t, ones, ones, q]
    conditions = [sector == k for k in range(6)]
    rgb = np.stack(
        [
            np.select(conditions, choices_r),
            np.select(conditions, choices_g),
            np.select(conditions, choices_b),
        ],
        axis=-1,
    )
    return np.rint(rgb * 255.0).astype(np.uint8)


def process_frame(raw: np.ndarray) -> ThermalFrame:
    """Render a 16-bit radiometric frame (centikelvin) and compute its temperatures.

    Colours run from blue at the coldest pixel to red at the hottest.
    """
    data = np.asarray(raw)
    if data.ndim != 2 or data.size == 0:
        raise ValueError("thermal frame must be a non-empty 2-D array")
    data = data.astype(np.uint16)

    min_val = int(data.min())
    max_val = int(data.max())
    value_range = max(float(max_val - min_val), 1.0)

    norm = np.clip((data.astype(np.float64) - min_val) / value_range, 0.0, 1.0)
    image = _hue_to_rgb((1.0 - norm) * _BLUE_HUE)

    height, width = data.shape
    center_raw = int(data[height // 2, width // 2])
    return ThermalFrame(
        image=image,
        min_temp_c=min_val / 100.0 - KELVIN_OFFSET,
        max_temp_c=max_val / 100.0 - KELVIN_OFFSET,
        center_temp_c=center_raw / 100.0 - KELVIN_OFFSET,
    )


def format_overlay(frame: ThermalFrame) -> str:
    """Text drawn under the thermal image."""
    return (
        f"Min: {frame.min_temp_c:.1f} °C   "
        f"Max: {frame.max_temp_c:.1f} °C   "
        f"Center: {frame.center_temp_c:.1f} °C"
    )


class ThermalCamera(Protocol):
    """A camera that can be started with a frame size and rate."""

    def start(self, width: int, height: int, fps: int) -> bool: ...


class ThermalManager:
    """Holds thermal camera settings and starts the camera once."""

    def __init__(self, camera: ThermalCamera | None = None) -> None:
        self.camera = camera
        self.open_on_init = False
        self.width = 160
        self.height = 120
        self.fps = 9
        self._started = False
        self._lock = threading.Lock()

    @property
    def started(self) -> bool:
        return self._started

    def configure(self, config: AppConfig) -> None:
        """Read the ThermalCam section of the configuration."""
        self.open_on_init = config.get_bool("ThermalCam", "OpenOnInit")
        self.width = config.get_int("ThermalCam", "Width")
        self.height = config.get_int("ThermalCam", "Height")
        self.fps = config.get_int("ThermalCam", "FPS")

    def init_after_widget(self) -> None:
        if self.open_on_init:
            self.start()

    def start(self) -> None:
        """Start the camera unless already started; without a camera nothing happens."""
        with self._lock:
            if self._started or self.camera is None:
                return
            if not self.camera.start(self.width, self.height, self.fps):
                log.error("Thermal camera failed to start")
            self._started = True