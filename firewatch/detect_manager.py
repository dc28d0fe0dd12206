"""Central control of object detection: start, stop, pause and per-frame runs."""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from typing import Any

import numpy as np
from PIL import Image

from .config import AppConfig
from .detect_def import Detection
from .detector import Detector

log = logging.getLogger(__name__)


def _load_bgr(path: str | os.PathLike[str]) -> np.ndarray:
    """Read an image file into an H x W x 3 uint8 array in BGR order."""
    file_path = Path(path)
    if not file_path.is_file():
        raise FileNotFoundError(f"Image path {file_path} not exists.")
    with Image.open(file_path) as image:
        rgb = np.asarray(image.convert("RGB"))
    return np.ascontiguousarray(rgb[:, :, ::-1])


class DetectManager:
    """Owns the detector and the detecting, paused and initialised flags."""

    def __init__(self, detector: Detector | None = None) -> None:
        self.detector = detector
        self.need_print_debug_info = False
        self.need_save_ori_img = False
        self._initialized = False
        self._detecting = False
        self._paused = False
        self._detected_id = 0
        self._lock = threading.Lock()

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def detecting(self) -> bool:
        return self._detecting

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def detected_id(self) -> int:
        """Number of frames detected successfully so far."""
        return self._detected_id

    def init(self, config: AppConfig | None = None, detector: Detector | None = None) -> bool:
        """Read the RGBCam settings and take the detector; return whether one is ready."""
        if self._initialized:
            log.info("[DetectManager.init] DetectManager already initialized.")
            return True
        if config is not None:
            self.need_print_debug_info = config.get_bool("RGBCam", "NeedPrintDebugInfo")
            self.need_save_ori_img = config.get_bool("RGBCam", "NeedSaveOriImg")
        if detector is not None:
            self.detector = detector
        self._initialized = self.detector is not None
        log.info("DetectManager init finished, ret %d.", int(self._initialized))
        return self._initialized

    def start_detect(self) -> None:
        """Begin detecting, also resuming from a pause."""
        if not self._initialized:
            log.error("[DetectManager.start_detect] DetectManager not initialized.")
            return
        self._paused = False
        self._detecting = True

    def stop_detect(self) -> None:
        if not self._initialized:
            log.error("[DetectManager.stop_detect] DetectManager not initialized.")
            return
        self._detecting = False

    def pause_detect(self) -> None:
        self._paused = True

    def _require_detector(self) -> Detector:
        if self.detector is None:
            raise RuntimeError("no detector available")
        return self.detector

    def _next_id(self) -> int:
        with self._lock:
            self._detected_id += 1
            return self._detected_id

    def run_detect(self, image: Any) -> list[Detection]:
        """Detect objects in a BGR frame or in an image file.

        A frame counts towards detected_id; a file does not.
        """
        detector = self._require_detector()
        if isinstance(image, (str, os.PathLike)):
            return detector.run_detect(_load_bgr(image))
        detections = detector.run_detect(image)
        self._next_id()
        return detections

    def run_detect_with_preview(self, image: np.ndarray) -> list[Detection]:
        """Detect objects and draw them onto the frame itself."""
        detector = self._require_detector()
        detections = list(detector.run_detect_with_preview(image))
        self._next_id()
        return detections