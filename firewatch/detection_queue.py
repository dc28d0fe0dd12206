"""Bounded queue of frames waiting for detection, shared between threads."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass
from typing import Any

MAX_QUEUE_SIZE = 5


@dataclass
class DetectionTask:
    """A frame to run detection on, with its source label and capture time cost."""

    source_flag: str
    image: Any
    time_cost: int = 0


class DetectionQueue:
    """Keeps at most the newest MAX_QUEUE_SIZE tasks while running."""

    def __init__(self, max_size: int = MAX_QUEUE_SIZE) -> None:
        self.max_size = max_size
        self._tasks: deque[DetectionTask] = deque()
        self._cond = threading.Condition()
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def __len__(self) -> int:
        with self._cond:
            return len(self._tasks)

    def start(self) -> None:
        with self._cond:
            self._running = True

    def stop(self) -> None:
        """Stop accepting tasks, drop those queued and wake every waiter."""
        with self._cond:
            self._running = False
            self._tasks.clear()
            self._cond.notify_all()

    def enqueue(self, source_flag: str, image: Any, time_cost: int) -> None:
        """Add a task, discarding the oldest when full; ignored while stopped."""
        with self._cond:
            if not self._running:
                return
            if len(self._tasks) >= self.max_size:
                self._tasks.popleft()
            self._tasks.append(DetectionTask(source_flag, image, time_cost))
            self._cond.notify()

    def wait_and_pop(self, timeout: float | None = None) -> DetectionTask | None:
        """Wait for a task and return it; None once stopped or when the wait times out."""
        with self._cond:
            self._cond.wait_for(
                lambda: not self._running or bool(self._tasks), timeout=timeout
            )
            if not self._running or not self._tasks:
                return None
            return self._tasks.popleft()