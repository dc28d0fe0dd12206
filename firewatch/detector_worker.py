"""Background worker that takes queued frames, runs detection and reports the results."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from typing import Any

import numpy as np

from .detect_manager import DetectManager
from .detection_queue import DetectionQueue, DetectionTask

log = logging.getLogger(__name__)

FrameCallback = Callable[[str, Any, float, int], None]


class DetectorWorker:
    """Pops tasks from a queue and runs detection on them until stopped.

    Results go to on_frame(source_flag, image, value, time_cost). Images are
    H x W x 3 uint8 arrays in BGR order.
    """

    def __init__(
        self,
        queue: DetectionQueue,
        manager: DetectManager,
        on_frame: FrameCallback | None = None,
    ) -> None:
        self.queue = queue
        self.manager = manager
        self.on_frame = on_frame
        self._running = False
        self._started = threading.Event()

    @property
    def running(self) -> bool:
        return self._running

    def wait_started(self, timeout: float | None = None) -> bool:
        """Block until start_work has opened the queue; False on timeout."""
        return self._started.wait(timeout)

    def _emit(self, source_flag: str, image: Any, value: float, time_cost: int) -> None:
        if self.on_frame is not None:
            self.on_frame(source_flag, image, value, time_cost)

    def start_work(self) -> None:
        """Process tasks until stop_work is called or the queue stops."""
        self._running = True
        self.queue.start()
        self._started.set()
        while self._running:
            task = self.queue.wait_and_pop()
            if task is None:
                break
            self.process_detect(task)

    def stop_work(self) -> None:
        self._running = False
        self.queue.stop()

    def process_frame(self, task: DetectionTask) -> None:
        """Report the mean grey level of the task's image."""
        if task.image is None:
            return
        arr = np.asarray(task.image)
        if arr.size == 0:
            return
        if arr.ndim == 2:
            gray = arr.astype(np.int64)
        elif arr.ndim == 3 and arr.shape[2] >= 3:
            blue = arr[:, :, 0].astype(np.int64)
            green = arr[:, :, 1].astype(np.int64)
            red = arr[:, :, 2].astype(np.int64)
            gray = (red * 11 + green * 16 + blue * 5) // 32
        else:
            raise ValueError("image must have shape (H, W) or (H, W, 3)")
        self._emit(task.source_flag, task.image, float(gray.mean()), task.time_cost)

    def process_detect(self, task: DetectionTask) -> None:
        """Detect on a copy of the frame and report it with the tallest box height."""
        if not self.manager.detecting:
            return

        start = time.perf_counter()
        if task.image is None:
            source = np.zeros((0, 0, 3), dtype=np.uint8)
        else:
            source = np.asarray(task.image)
            if source.ndim == 3:
                source = source[:, :, :3]
        frame = np.array(source, dtype=np.uint8, copy=True)

        detections = []
        try:
            detections = self.manager.run_detect_with_preview(frame)
        except Exception as exc:
            log.error("Object detect inference failed: %s.", exc)

        if self.manager.need_print_debug_info:
            elapsed_ms = int((time.perf_counter() - start) * 1000)
            print(f"Detect time {elapsed_ms} ms, detect_num {len(detections)}")

        max_height = max([0.0, *(float(d.box[3]) for d in detections)])
        self._emit(task.source_flag, frame, max_height, task.time_cost)


class DetectorWorkerManager:
    """Runs one DetectorWorker on a background thread."""

    def __init__(
        self,
        queue: DetectionQueue | None = None,
        manager: DetectManager | None = None,
        on_frame: FrameCallback | None = None,
    ) -> None:
        self.queue = queue if queue is not None else DetectionQueue()
        self.manager = manager if manager is not None else DetectManager()
        self.on_frame = on_frame
        self._worker: DetectorWorker | None = None
        self._thread: threading.Thread | None = None
        self._running = False
        self._lock = threading.Lock()

    @property
    def worker(self) -> DetectorWorker | None:
        return self._worker

    @property
    def running(self) -> bool:
        return self._running

    def _forward(self, source_flag: str, image: Any, value: float, time_cost: int) -> None:
        if self.on_frame is not None:
            self.on_frame(source_flag, image, value, time_cost)

    def _ensure_worker(self) -> None:
        if self._worker is not None:
            return
        self._worker = DetectorWorker(self.queue, self.manager, self._forward)
        self._thread = threading.Thread(
            target=self._worker.start_work, name="detector-worker", daemon=True
        )

    def start(self) -> None:
        """Start the worker thread; does nothing when already running."""
        with self._lock:
            self._ensure_worker()
            if self._running:
                return
            self._running = True
            worker, thread = self._worker, self._thread
            if not thread.is_alive():
                thread.start()
        worker.wait_started()

    def stop(self) -> None:
        """Stop the worker, clear the queue and wait for the thread to end."""
        with self._lock:
            if not self._running:
                return
            self._running = False
            worker, thread = self._worker, self._thread
            self._worker = None
            self._thread = None
        worker.stop_work()
        self.queue.stop()
        thread.join()