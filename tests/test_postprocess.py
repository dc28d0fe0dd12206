import numpy as np
import pytest

from firewatch.postprocess import (
    DetResult,
    InitParams,
    ModelType,
    decode_classification,
    decode_detections,
    nms_boxes,
    sigmoid,
)


def _head(anchors):
    """Build a (1, no, N) head from per-anchor rows."""
    return np.array(anchors, dtype=np.float32).T[None, ...]


def test_model_type_values_and_flags():
    assert ModelType(1) is ModelType.DETECT
    assert ModelType(8) is ModelType.SEG_HALF
    assert ModelType(4).is_segmentation
    assert not ModelType(1).is_segmentation
    half_cls = ModelType(7)
    assert half_cls.is_half and half_cls.is_classification
    assert not ModelType(4).is_half
    with pytest.raises(ValueError):
        ModelType(0)


def test_init_params_defaults():
    params = InitParams()
    assert params.model_type is ModelType.SEG
    assert params.img_size == (640, 640)
    assert params.rect_confidence_threshold == pytest.approx(0.6)
    assert params.iou_threshold == pytest.approx(0.5)
    assert params.intra_op_num_threads == 1


def test_sigmoid_zero_and_symmetry():
    values = np.array([-3.0, -1.0, 0.0, 1.0, 3.0])
    out = sigmoid(values)
    assert out[2] == pytest.approx(0.5)
    assert np.allclose(out + out[::-1], 1.0)
    assert np.all(np.diff(out) > 0)
    assert out.dtype == np.float32


def test_nms_identical_boxes_keep_best():
    boxes = [(0, 0, 10, 10), (0, 0, 10, 10)]
    assert nms_boxes(boxes, [0.7, 0.9], 0.5, 0.5) == [1]


def test_nms_disjoint_boxes_sorted_by_score():
    boxes = [(0, 0, 10, 10), (50, 50, 10, 10), (100, 0, 5, 5)]
    assert nms_boxes(boxes, [0.6, 0.95, 0.8], 0.5, 0.5) == [1, 2, 0]


def test_nms_score_threshold_is_strict():
    boxes = [(0, 0, 10, 10), (50, 50, 10, 10)]
    assert nms_boxes(boxes, [0.5, 0.9], 0.5, 0.5) == [1]


def test_nms_empty_and_length_mismatch():
    assert nms_boxes([], [], 0.1, 0.5) == []
    with pytest.raises(ValueError):
        nms_boxes([(0, 0, 1, 1)], [], 0.1, 0.5)


def test_decode_detections_filters_and_scales():
    head = _head([
        [100, 100, 20, 40, 0.9],
        [300, 300, 10, 10, 0.2],
    ])
    results = decode_detections(head, None, 1, 0.5, 0.5)
    assert len(results) == 1
    res = results[0]
    assert res.class_id == 0
    assert res.confidence == pytest.approx(0.9)
    x, y, w, h = res.box
    assert (w, h) == (20, 40)
    assert x + w / 2 == 100 and y + h / 2 == 100
    assert res.mask is None

    scaled = decode_detections(head, None, 1, 0.5, 0.5, scale_x=2.0, scale_y=2.0)
    assert scaled[0].box[2] == 2 * w and scaled[0].box[3] == 2 * h


def test_decode_detections_picks_best_class_and_suppresses_overlap():
    head = _head([
        [50, 50, 20, 20, 0.1, 0.8],
        [51, 50, 20, 20, 0.7, 0.2],
        [200, 200, 20, 20, 0.95, 0.1],
    ])
    results = decode_detections(head, None, 2, 0.5, 0.5)
    assert [r.class_id for r in results] == [0, 1]
    confidences = [r.confidence for r in results]
    assert confidences == sorted(confidences, reverse=True)


def test_decode_detections_segmentation_mask():
    head = _head([[32, 32, 16, 16, 0.9, 1.0]])
    proto = np.full((1, 1, 16, 16), 10.0, dtype=np.float32)
    results = decode_detections(
        head, proto, 1, 0.5, 0.5, model_size=(64, 64), original_size=(64, 64)
    )
    assert len(results) == 1
    mask = results[0].mask
    assert mask.shape == (64, 64)
    assert mask.dtype == np.uint8
    x, y, w, h = results[0].box
    assert np.all(mask[y:y + h, x:x + w] == 255)
    assert int(mask.sum()) == w * h * 255


def test_decode_detections_rejects_short_output():
    with pytest.raises(ValueError):
        decode_detections(np.zeros((1, 4, 3)), None, 1, 0.5, 0.5)


def test_decode_detections_rejects_mismatched_proto():
    head = _head([[32, 32, 16, 16, 0.9, 1.0]])
    proto = np.zeros((1, 2, 8, 8), dtype=np.float32)
    with pytest.raises(ValueError):
        decode_detections(head, proto, 1, 0.5, 0.5, model_size=(64, 64))


def test_decode_classification_one_result_per_class():
    results = decode_classification([0.1, 0.7, 0.2], 3)
    assert [r.class_id for r in results] == [0, 1, 2]
    assert [r.confidence for r in results] == pytest.approx([0.1, 0.7, 0.2])
    assert all(isinstance(r, DetResult) and r.box == (0, 0, 0, 0) for r in results)


def test_decode_classification_too_few_scores():
    with pytest.raises(ValueError):
        decode_classification([0.5], 2)