"""Geometry helper utilities for axis-aligned bounding boxes."""
from __future__ import annotations

from ..models import BoundingBox


def overlap_1d(a_min: float, a_max: float, b_min: float, b_max: float) -> float:
    """Return the overlap length of two closed intervals.

    The interval starting first is treated as the left one, which also covers
    one interval fully containing the other.
    """

    if a_min > b_min:
        a_min, b_min = b_min, a_min
        a_max, b_max = b_max, a_max
    if a_max < b_min:
        return 0.0
    return min(a_max, b_max) - b_min


def overlap_area(box_a: BoundingBox, box_b: BoundingBox) -> float:
    """Return the intersection area of two boxes."""

    overlap_x = overlap_1d(box_a.x, box_a.x_max, box_b.x, box_b.x_max)
    overlap_y = overlap_1d(box_a.y, box_a.y_max, box_b.y, box_b.y_max)
    return overlap_x * overlap_y


def compute_iou(box_a: BoundingBox, box_b: BoundingBox) -> float:
    """Return intersection over union, or 0.0 when the union is empty."""

    intersection = overlap_area(box_a, box_b)
    union = box_a.area + box_b.area - intersection
    if union == 0:
        return 0.0
    return intersection / union
