"""Decoding of YOLO-style model outputs into scored boxes, masks and class scores."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

import numpy as np

from .detect_def import DETECT_IMG_SIZE

Box = tuple[int, int, int, int]
Size = tuple[int, int]


class ModelType(IntEnum):
    """Kind and precision of a detection model."""

    DETECT = 1
    POSE = 2
    CLS = 3
    SEG = 4
    DETECT_HALF = 5
    POSE_HALF = 6
    CLS_HALF = 7
    SEG_HALF = 8

    @property
    def is_half(self) -> bool:
        return self >= ModelType.DETECT_HALF

    @property
    def is_segmentation(self) -> bool:
        return self in (ModelType.SEG, ModelType.SEG_HALF)

    @property
    def is_classification(self) -> bool:
        return self in (ModelType.CLS, ModelType.CLS_HALF)


@dataclass
class InitParams:
    """Settings used to create an inference session."""

    model_path: str = ""
    model_type: ModelType = ModelType.SEG
    img_size: Size = (DETECT_IMG_SIZE, DETECT_IMG_SIZE)
    rect_confidence_threshold: float = 0.6
    iou_threshold: float = 0.5
    key_points_num: int = 2
    cuda_enable: bool = False
    log_severity_level: int = 3
    intra_op_num_threads: int = 1


@dataclass
class DetResult:
    """One raw model result: class, score, box (x, y, w, h), key points and optional mask."""

    class_id: int = 0
    confidence: float = 0.0
    box: Box = (0, 0, 0, 0)
    key_points: list[tuple[float, float]] = field(default_factory=list)
    mask: Any = None


def sigmoid(values: Any) -> np.ndarray:
    """Element-wise logistic function, returned as float32."""
    arr = np.asarray(values, dtype=np.float32)
    return (1.0 / (1.0 + np.exp(-arr))).astype(np.float32)


def _intersect(a: Box, b: Box) -> Box:
    x1 = max(a[0], b[0])
    y1 = max(a[1], b[1])
    w = min(a[0] + a[2], b[0] + b[2]) - x1
    h = min(a[1] + a[3], b[1] + b[3]) - y1
    if w <= 0 or h <= 0:
        return (0, 0, 0, 0)
    return (x1, y1, w, h)


def _overlap(a: Box, b: Box) -> float:
    area_a = a[2] * a[3]
    area_b = b[2] * b[3]
    if area_a + area_b <= 0:
        return 1.0
    inter = _intersect(a, b)
    area_ab = inter[2] * inter[3]
    return area_ab / (area_a + area_b - area_ab)


def nms_boxes(
    boxes: Sequence[Box],
    scores: Sequence[float],
    score_threshold: float,
    iou_threshold: float,
) -> list[int]:
    """Greedy non-maximum suppression; returns kept indexes, highest score first.

    Boxes scoring no more than score_threshold are dropped; a box is kept when
    its overlap with every box kept before it is at most iou_threshold.
    """
    if len(boxes) != len(scores):
        raise ValueError("boxes and scores differ in length")
    candidates = [i for i, score in enumerate(scores) if score > score_threshold]
    candidates.sort(key=lambda i: scores[i], reverse=True)
    kept: list[int] = []
    for idx in candidates:
        box = tuple(int(v) for v in boxes[idx])
        if all(_overlap(box, tuple(int(v) for v in boxes[k])) <= iou_threshold for k in kept):
            kept.append(idx)
    return kept


def _resize_bilinear(image: np.ndarray, width: int, height: int) -> np.ndarray:
    """Bilinear resize with half-pixel centre alignment."""
    in_h, in_w = image.shape
    if (in_w, in_h) == (width, height):
        return image.astype(np.float32, copy=True)

    def coords(out_len: int, in_len: int) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        scale = in_len / out_len
        src = (np.arange(out_len, dtype=np.float64) + 0.5) * scale - 0.5
        src = np.clip(src, 0.0, in_len - 1)
        low = np.floor(src).astype(np.int64)
        high = np.minimum(low + 1, in_len - 1)
        return low, high, (src - low)

    y0, y1, fy = coords(height, in_h)
    x0, x1, fx = coords(width, in_w)
    img = image.astype(np.float64)
    top = img[y0][:, x0] * (1 - fx) + img[y0][:, x1] * fx
    bottom = img[y1][:, x0] * (1 - fx) + img[y1][:, x1] * fx
    out = top * (1 - fy)[:, None] + bottom * fy[:, None]
    return out.astype(np.float32)


def _build_mask(
    coef: np.ndarray,
    proto: np.ndarray,
    proto_height: int,
    box: Box,
    model_size: Size,
    original_size: Size,
) -> np.ndarray:
    mask = (coef @ proto).reshape(proto_height, -1)
    mask = sigmoid(mask)
    mask = _resize_bilinear(mask, model_size[0], model_size[1])
    mask = _resize_bilinear(mask, original_size[0], original_size[1])

    box_mask = np.zeros((original_size[1], original_size[0]), dtype=np.uint8)
    rx, ry, rw, rh = _intersect(box, (0, 0, mask.shape[1], mask.shape[0]))
    if rw > 0 and rh > 0:
        crop = mask[ry:ry + rh, rx:rx + rw] > 0.5
        box_mask[ry:ry + rh, rx:rx + rw] = np.where(crop, 255, 0).astype(np.uint8)
    return box_mask


def decode_detections(
    output: Any,
    proto: Any,
    num_classes: int,
    conf_threshold: float,
    iou_threshold: float,
    scale_x: float = 1.0,
    scale_y: float = 1.0,
    model_size: Size = (DETECT_IMG_SIZE, DETECT_IMG_SIZE),
    original_size: Size | None = None,
) -> list[DetResult]:
    """Turn a detection head of shape (1, 4 + nc [+ nm], N) into results after NMS.

    Each column holds centre x, centre y, width and height in model pixels, the
    class scores and, for segmentation models, mask coefficients that combine
    with proto (shape (1, nm, H, W)). Boxes are scaled by scale_x and scale_y;
    sizes are given as (width, height).
    """
    data = np.asarray(output, dtype=np.float32)
    if data.ndim == 3:
        if data.shape[0] != 1:
            raise ValueError("batched detection output is not supported")
        data = data[0]
    if data.ndim != 2:
        raise ValueError("detection output must have shape (1, no, N) or (no, N)")
    if num_classes < 1:
        raise ValueError("num_classes must be positive")
    rows_per_anchor = data.shape[0]
    if rows_per_anchor < 4 + num_classes:
        raise ValueError(
            f"output has {rows_per_anchor} rows, fewer than 4 + {num_classes} classes"
        )
    if original_size is None:
        original_size = model_size

    proto_mat: np.ndarray | None = None
    proto_height = 0
    mask_start = 4 + num_classes
    mask_dim = rows_per_anchor - mask_start
    if proto is not None:
        p = np.asarray(proto, dtype=np.float32)
        if p.ndim == 4:
            p = p[0]
        if p.ndim != 3:
            raise ValueError("proto must have shape (1, nm, H, W) or (nm, H, W)")
        nm, proto_height, proto_width = p.shape
        if mask_dim > 0 and mask_dim != nm:
            raise ValueError(f"{mask_dim} mask coefficients do not match {nm} prototypes")
        if p.size:
            proto_mat = p.reshape(nm, proto_height * proto_width)

    anchors = data.T
    class_ids: list[int] = []
    confidences: list[float] = []
    boxes: list[Box] = []
    masks: list[np.ndarray] = []
    for row in anchors:
        scores = row[4:4 + num_classes]
        class_id = int(np.argmax(scores))
        best = float(scores[class_id])
        if best <= conf_threshold:
            continue
        confidences.append(best)
        class_ids.append(class_id)
        x, y, w, h = (float(v) for v in row[:4])
        box = (
            int((x - 0.5 * w) * scale_x),
            int((y - 0.5 * h) * scale_y),
            int(w * scale_x),
            int(h * scale_y),
        )
        boxes.append(box)
        if proto_mat is not None and mask_dim > 0:
            masks.append(
                _build_mask(row[mask_start:], proto_mat, proto_height, box,
                            model_size, original_size)
            )

    results = []
    for idx in nms_boxes(boxes, confidences, conf_threshold, iou_threshold):
        results.append(
            DetResult(
                class_id=class_ids[idx],
                confidence=confidences[idx],
                box=boxes[idx],
                mask=masks[idx] if idx < len(masks) else None,
            )
        )
    return results


def decode_classification(output: Any, num_classes: int) -> list[DetResult]:
    """One result per class holding the model's score for it."""
    data = np.asarray(output, dtype=np.float32).ravel()
    if data.size < num_classes:
        raise ValueError(f"output has {data.size} scores, fewer than {num_classes} classes")
    return [DetResult(class_id=i, confidence=float(data[i])) for i in range(num_classes)]