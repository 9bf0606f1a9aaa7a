"""Synthetic detection frames for demos and smoke tests."""
from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np

from ..models import BoundingBox, Detection, InvalidInputError

OFFSET_STEP = 10.0
BOX_SIZE = 100.0
BASE_CONFIDENCE = 0.5
CONFIDENCE_STEP = 0.1


def generate_frame(
    rng: np.random.Generator,
    detections_per_frame: int,
    class_ids: Sequence[int],
) -> List[Detection]:
    """Build one frame of diagonally staggered boxes with random class labels."""

    picks = rng.integers(0, len(class_ids), size=detections_per_frame)
    return [
        Detection(
            box=BoundingBox(x=i * OFFSET_STEP, y=i * OFFSET_STEP, width=BOX_SIZE, height=BOX_SIZE),
            class_id=int(class_ids[int(pick)]),
            confidence=round(BASE_CONFIDENCE + CONFIDENCE_STEP * i, 6),
        )
        for i, pick in enumerate(picks)
    ]


def generate_frames(
    num_frames: int = 5,
    detections_per_frame: int = 5,
    class_ids: Sequence[int] = (1, 2, 3),
    seed: Optional[int] = None,
) -> List[List[Detection]]:
    if not class_ids:
        raise InvalidInputError("At least one class id is required to generate frames")
    if num_frames < 0 or detections_per_frame < 0:
        raise InvalidInputError("Frame and detection counts must be non-negative")
    rng = np.random.default_rng(seed)
    return [generate_frame(rng, detections_per_frame, class_ids) for _ in range(num_frames)]
