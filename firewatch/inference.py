"""Running a YOLO-style model session on camera frames and turning its output into detections."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from typing import Any, Protocol

import numpy as np
from PIL import Image

from .detect_def import Detection, class_color
from .postprocess import (
    DetResult,
    InitParams,
    ModelType,
    decode_classification,
    decode_detections,
)

log = logging.getLogger(__name__)

DEFAULT_CLASSES: tuple[str, ...] = ("fire",)

_CJK_PATTERN = re.compile("[\u4e00-\u9fa5]")


class InferenceSession(Protocol):
    """A loaded model: takes an input blob of shape (1, 3, H, W) and returns its output tensors."""

    def run(self, blob: np.ndarray) -> Sequence[Any]: ...


def validate_model_path(path: str) -> str:
    """Return the path unchanged; raise ValueError if it holds Chinese characters."""
    if _CJK_PATTERN.search(str(path)):
        raise ValueError(
            "Model path must not contain Chinese characters; change the model path."
        )
    return str(path)


def blob_from_image(image: Any) -> np.ndarray:
    """Convert an H x W x 3 uint8 image into a (1, 3, H, W) float32 blob scaled to 0..1."""
    arr = np.asarray(image)
    if arr.ndim != 3 or arr.shape[2] < 3:
        raise ValueError("image must have shape (H, W, 3)")
    planes = arr[:, :, :3].astype(np.float32) / 255.0
    return np.ascontiguousarray(planes.transpose(2, 0, 1)[np.newaxis, ...])


def _check_image(image: Any) -> np.ndarray:
    arr = np.asarray(image)
    if arr.size == 0:
        raise ValueError("input image is empty")
    if arr.ndim != 3 or arr.shape[2] != 3:
        raise ValueError("image must have shape (H, W, 3)")
    return arr


class InferenceModel:
    """Wraps a session with the pre- and post-processing a detection model needs."""

    def __init__(
        self,
        session: InferenceSession,
        params: InitParams | None = None,
        classes: Sequence[str] = DEFAULT_CLASSES,
    ) -> None:
        self.params = params if params is not None else InitParams()
        validate_model_path(self.params.model_path)
        self.session = session
        self.classes = list(classes)
        self.model_type = ModelType(self.params.model_type)
        self.img_size = tuple(self.params.img_size)
        self.rect_confidence_threshold = self.params.rect_confidence_threshold
        self.iou_threshold = self.params.iou_threshold
        self.scale_x = 1.0
        self.scale_y = 1.0
        self.original_size: tuple[int, int] = (0, 0)
        self.num_classes = 0
        self.num_masks = 0
        self._warm_up()

    def _warm_up(self) -> None:
        """Run the session once on a blank frame and read the head layout from its outputs."""
        width, height = self.img_size
        blank = np.zeros((height, width, 3), dtype=np.uint8)
        outputs = self._run_session(self.preprocess(blank))
        if not outputs:
            raise ValueError("model session returned no outputs")
        head = np.asarray(outputs[0])
        if head.ndim < 2:
            raise ValueError("model output must have at least two dimensions")
        no = int(head.shape[1])
        if self.model_type.is_segmentation:
            if len(outputs) < 2:
                raise ValueError("segmentation model must return a prototype output")
            self.num_masks = int(np.asarray(outputs[1]).shape[1])
            self.num_classes = no - 4 - self.num_masks
        else:
            self.num_masks = 0
            self.num_classes = no - 4
        log.info("Model head: no=%d, nc=%d, nm=%d", no, self.num_classes, self.num_masks)
        if not self.model_type.is_classification and self.num_classes != len(self.classes):
            log.warning(
                "classes has %d names but the model has nc = %d; scores are sliced by nc "
                "and names are used only for display.",
                len(self.classes),
                self.num_classes,
            )

    def preprocess(self, image: Any) -> np.ndarray:
        """Resize an image to the model input size, recording the scale back to the original."""
        arr = _check_image(image)
        height, width = arr.shape[:2]
        target_w, target_h = self.img_size
        self.original_size = (width, height)
        self.scale_x = width / target_w
        self.scale_y = height / target_h
        if (width, height) == (target_w, target_h):
            return arr.astype(np.uint8, copy=True)
        resized = Image.fromarray(arr.astype(np.uint8)).resize(
            (target_w, target_h), Image.Resampling.BILINEAR
        )
        return np.asarray(resized)

    def _run_session(self, processed: np.ndarray) -> list[Any]:
        blob = blob_from_image(processed)
        if self.model_type.is_half:
            blob = blob.astype(np.float16)
        return list(self.session.run(blob))

    def _decode(self, outputs: list[Any]) -> list[DetResult]:
        model_type = self.model_type
        if model_type.is_classification:
            return decode_classification(outputs[0], len(self.classes))
        if model_type in (ModelType.POSE, ModelType.POSE_HALF):
            log.error("Not support model type.")
            return []
        proto = outputs[1] if model_type.is_segmentation and len(outputs) > 1 else None
        return decode_detections(
            outputs[0],
            proto,
            self.num_classes,
            self.rect_confidence_threshold,
            self.iou_threshold,
            self.scale_x,
            self.scale_y,
            self.img_size,
            self.original_size,
        )

    def run_inference(self, image: Any) -> list[Detection]:
        """Detect objects in a BGR image of shape (H, W, 3)."""
        arr = _check_image(image)
        rgb = np.ascontiguousarray(arr[:, :, ::-1])
        outputs = self._run_session(self.preprocess(rgb))
        return [
            Detection(
                class_id=result.class_id,
                class_name=self.classes[result.class_id],
                confidence=result.confidence,
                color=class_color(result.class_id),
                box=result.box,
                mask=result.mask,
            )
            for result in self._decode(outputs)
        ]