"""Detection classes, their display names and colours, and the detection record."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

log = logging.getLogger(__name__)

Box = tuple[int, int, int, int]
Scalar = tuple[int, int, int]


class DetectClass(IntEnum):
    """Object classes the detection model reports."""

    FIRE = 0


CLASS_NUM = len(DetectClass)

DEFECT_CLASS_NAMES: tuple[str, ...] = ("火焰",)

CLASS_COLORS: tuple[Scalar, ...] = ((0, 255, 0),)

DETECT_IMG_SIZE = 640


@dataclass
class Detection:
    """One detected object: class, score, colour, box (x, y, w, h) and optional mask."""

    class_id: int = 0
    class_name: str = ""
    confidence: float = 0.0
    color: Scalar = (0, 0, 0)
    box: Box = (0, 0, 0, 0)
    mask: Any = None


def class_color(class_id: int) -> Scalar:
    """Return the drawing colour of a class."""
    if not 0 <= class_id < CLASS_NUM:
        raise ValueError(f"Invalid class id for color generation {class_id}.")
    return CLASS_COLORS[class_id]


def defect_names(class_ids: Iterable[int]) -> str:
    """Join the names of the given classes in ascending id order, skipping invalid ids.

    Every name after the first id in order is preceded by ", ", even when that
    first id was invalid and skipped.
    """
    parts: list[str] = []
    for position, class_id in enumerate(sorted(set(class_ids))):
        if not 0 <= class_id < CLASS_NUM:
            log.error("Invalid defect class id %d.", class_id)
            continue
        name = DEFECT_CLASS_NAMES[class_id]
        parts.append(name if position == 0 else ", " + name)
    return "".join(parts)