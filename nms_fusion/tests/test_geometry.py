from __future__ import annotations

import pytest

from nms_fusion.app.models import BoundingBox
from nms_fusion.app.utils.geometry import compute_iou, overlap_1d, overlap_area


def test_overlap_1d_disjoint_and_touching() -> None:
    assert overlap_1d(0, 10, 20, 30) == 0.0
    assert overlap_1d(20, 30, 0, 10) == 0.0
    assert overlap_1d(0, 10, 10, 20) == 0.0


def test_overlap_1d_partial_is_order_independent() -> None:
    assert overlap_1d(0, 10, 5, 15) == 5
    assert overlap_1d(5, 15, 0, 10) == 5


def test_overlap_1d_containment() -> None:
    assert overlap_1d(0, 100, 20, 30) == 10
    assert overlap_1d(20, 30, 0, 100) == 10


def test_overlap_area_of_offset_boxes() -> None:
    box_a = BoundingBox(0, 0, 100, 100)
    box_b = BoundingBox(10, 10, 100, 100)
    assert overlap_area(box_a, box_b) == pytest.approx(8100.0)


def test_iou_identical_boxes_is_one() -> None:
    box = BoundingBox(5, 5, 40, 20)
    assert compute_iou(box, box) == pytest.approx(1.0)


def test_iou_offset_boxes() -> None:
    iou = compute_iou(BoundingBox(0, 0, 100, 100), BoundingBox(10, 10, 100, 100))
    assert iou == pytest.approx(8100.0 / 11900.0)


def test_iou_disjoint_boxes_is_zero() -> None:
    assert compute_iou(BoundingBox(0, 0, 100, 100), BoundingBox(200, 200, 50, 50)) == 0.0


def test_iou_zero_area_boxes_do_not_divide_by_zero() -> None:
    point = BoundingBox(10, 10, 0, 0)
    assert compute_iou(point, point) == 0.0
    assert compute_iou(point, BoundingBox(0, 0, 100, 100)) == 0.0


def test_iou_half_overlap_is_exact() -> None:
    assert compute_iou(BoundingBox(0, 0, 100, 100), BoundingBox(0, 0, 50, 100)) == 0.5


def test_bounding_box_conversions() -> None:
    box = BoundingBox.from_xyxy(10, 20, 40, 80)
    assert box.to_xywh() == (10.0, 20.0, 30.0, 60.0)
    assert box.to_xyxy() == (10.0, 20.0, 40.0, 80.0)
    assert box.area == 1800.0
    assert isinstance(BoundingBox(1, 2, 3, 4).x, float)
