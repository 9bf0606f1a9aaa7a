"""Greedy class-aware non-maximum suppression."""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Sequence, Tuple

from ..models import (
    BoundingBox,
    BoxLike,
    Detection,
    InvalidInputError,
    detections_from_parallel,
    detections_to_parallel,
)
from ..utils.geometry import compute_iou

LOGGER = logging.getLogger(__name__)


class Suppressor:
    """Filters one frame of detections down to the per-class local maxima."""

    def __init__(self, threshold: float) -> None:
        self.threshold = float(threshold)

    def suppress(self, detections: Sequence[Detection]) -> List[Detection]:
        """Return the detections surviving NMS, in descending-confidence order.

        ``sorted`` is stable, so equal confidences keep their input order.
        A candidate is dropped once any kept detection of the same class
        overlaps it by strictly more than the threshold.
        """

        ordered = sorted(detections, key=lambda detection: detection.confidence, reverse=True)
        kept: List[Detection] = []
        kept_by_class: Dict[int, List[Detection]] = {}
        for candidate in ordered:
            peers = kept_by_class.setdefault(candidate.class_id, [])
            if any(compute_iou(candidate.box, peer.box) > self.threshold for peer in peers):
                continue
            peers.append(candidate)
            kept.append(candidate)
        LOGGER.debug("Kept %d of %d detections (threshold=%s)", len(kept), len(ordered), self.threshold)
        return kept

    def suppress_frames(self, frames: Iterable[Sequence[Detection]]) -> List[List[Detection]]:
        """Apply :meth:`suppress` to each frame independently."""

        return [self.suppress(frame) for frame in frames]


def suppress_frame(detections: Sequence[Detection], threshold: float) -> List[Detection]:
    return Suppressor(threshold).suppress(detections)


def suppress_frames(frames: Iterable[Sequence[Detection]], threshold: float) -> List[List[Detection]]:
    return Suppressor(threshold).suppress_frames(frames)


def suppress_parallel(
    frames_boxes: Sequence[Sequence[BoxLike]],
    frames_class_ids: Sequence[Sequence[int]],
    frames_confidences: Sequence[Sequence[float]],
    threshold: float,
) -> Tuple[List[List[BoundingBox]], List[List[int]], List[List[float]]]:
    """Run NMS over a batch given as parallel per-frame box/class/confidence lists."""

    if not (len(frames_boxes) == len(frames_class_ids) == len(frames_confidences)):
        raise InvalidInputError(
            "Batch sequences differ in frame count: "
            f"{len(frames_boxes)} box frames, {len(frames_class_ids)} class frames, "
            f"{len(frames_confidences)} confidence frames"
        )

    suppressor = Suppressor(threshold)
    out_boxes: List[List[BoundingBox]] = []
    out_class_ids: List[List[int]] = []
    out_confidences: List[List[float]] = []
    for index, (boxes, class_ids, confidences) in enumerate(
        zip(frames_boxes, frames_class_ids, frames_confidences)
    ):
        try:
            detections = detections_from_parallel(boxes, class_ids, confidences)
        except InvalidInputError as exc:
            raise InvalidInputError(f"Frame {index}: {exc}") from exc
        kept_boxes, kept_class_ids, kept_confidences = detections_to_parallel(suppressor.suppress(detections))
        out_boxes.append(kept_boxes)
        out_class_ids.append(kept_class_ids)
        out_confidences.append(kept_confidences)
    return out_boxes, out_class_ids, out_confidences
