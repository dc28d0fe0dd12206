"""Object detection on frames, with optional drawing of results onto the frame."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any, Protocol

import numpy as np

from .detect_def import Detection

PREVIEW_THICKNESS = 4


class DetectionModel(Protocol):
    """Anything that turns a BGR image into detections."""

    def run_inference(self, image: Any) -> list[Detection]: ...


def _fill(image: np.ndarray, top: int, bottom: int, left: int, right: int, color) -> None:
    height, width = image.shape[:2]
    top, bottom = max(top, 0), min(bottom, height)
    left, right = max(left, 0), min(right, width)
    if top < bottom and left < right:
        image[top:bottom, left:right] = color


def draw_detections(
    image: np.ndarray, detections: Iterable[Detection], thickness: int = 2
) -> np.ndarray:
    """Paint each detection's mask in its colour and outline its box, in place.

    The outline lies inside the box and is thickness pixels wide.
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError("image must have shape (H, W, 3)")
    if thickness < 1:
        raise ValueError("thickness must be at least 1")
    height, width = image.shape[:2]
    for detection in detections:
        color = np.asarray(detection.color, dtype=image.dtype)
        if detection.mask is not None:
            mask = np.asarray(detection.mask)
            if mask.size:
                if mask.shape[:2] != (height, width):
                    raise ValueError("mask size does not match the image")
                image[mask != 0] = color
        x, y, w, h = detection.box
        if w <= 0 or h <= 0:
            continue
        band = min(thickness, w, h)
        _fill(image, y, y + band, x, x + w, color)
        _fill(image, y + h - band, y + h, x, x + w, color)
        _fill(image, y, y + h, x, x + band, color)
        _fill(image, y, y + h, x + w - band, x + w, color)
    return image


def _check_frame(image: Any) -> None:
    if image is None or np.asarray(image).size == 0:
        raise ValueError("input frame is empty")


class Detector:
    """Runs a detection model on frames."""

    def __init__(self, model: DetectionModel) -> None:
        self.model = model

    def run_detect(self, image: Any) -> list[Detection]:
        """Return the detections found in a non-empty frame."""
        _check_frame(image)
        return list(self.model.run_inference(image))

    def run_detect_with_preview(self, image: np.ndarray) -> Sequence[Detection]:
        """Detect objects and draw masks and boxes onto the frame itself."""
        _check_frame(image)
        detections = list(self.model.run_inference(image))
        draw_detections(image, detections, PREVIEW_THICKNESS)
        return detections