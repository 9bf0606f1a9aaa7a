from __future__ import annotations

import pytest

from nms_fusion.app.models import (
    BoundingBox,
    Detection,
    InvalidInputError,
    detections_from_parallel,
    detections_to_parallel,
)


def test_detections_from_parallel_accepts_tuples_and_boxes() -> None:
    detections = detections_from_parallel(
        [(0, 0, 10, 10), BoundingBox(5, 5, 10, 10)],
        [1, 2],
        [0.9, 0.4],
    )
    assert detections == [
        Detection(box=BoundingBox(0, 0, 10, 10), class_id=1, confidence=0.9),
        Detection(box=BoundingBox(5, 5, 10, 10), class_id=2, confidence=0.4),
    ]


def test_detections_from_parallel_rejects_mismatch() -> None:
    with pytest.raises(InvalidInputError, match="differ in length"):
        detections_from_parallel([(0, 0, 1, 1)], [1, 2], [0.5])


def test_bad_box_shape_is_invalid_input() -> None:
    with pytest.raises(InvalidInputError, match="4 values"):
        detections_from_parallel([(0, 0, 1)], [1], [0.5])


def test_parallel_split_preserves_order() -> None:
    detections = detections_from_parallel([(1, 2, 3, 4), (5, 6, 7, 8)], [3, 4], [0.1, 0.2])
    boxes, class_ids, confidences = detections_to_parallel(detections)
    assert [box.to_xywh() for box in boxes] == [(1.0, 2.0, 3.0, 4.0), (5.0, 6.0, 7.0, 8.0)]
    assert class_ids == [3, 4]
    assert confidences == [0.1, 0.2]


def test_negative_size_is_accepted() -> None:
    box = BoundingBox(10, 10, -5, 4)
    assert box.area == -20.0
    assert box.x_max == 5.0


def test_non_numeric_box_value_is_invalid_input() -> None:
    with pytest.raises(InvalidInputError, match="width"):
        BoundingBox(0, 0, "a", 1)
    with pytest.raises(InvalidInputError, match="width"):
        detections_from_parallel([(0, 0, "a", 1)], [1], [0.5])


def test_non_numeric_class_or_confidence_is_invalid_input() -> None:
    with pytest.raises(InvalidInputError, match="Detection 1"):
        detections_from_parallel([(0, 0, 1, 1), (0, 0, 1, 1)], [1, "x"], [0.5, 0.4])
    with pytest.raises(InvalidInputError, match="Detection 0"):
        detections_from_parallel([(0, 0, 1, 1)], [1], [None])
