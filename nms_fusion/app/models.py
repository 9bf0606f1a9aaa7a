"""Shared data models for NMS fusion."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple, Union

BoxLike = Union["BoundingBox", Sequence[float]]


class InvalidInputError(ValueError):
    """Raised when detection input is structurally malformed."""


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned rectangle given by its top-left offset and size in pixels."""

    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        for name in ("x", "y", "width", "height"):
            value = getattr(self, name)
            try:
                object.__setattr__(self, name, float(value))
            except (TypeError, ValueError) as exc:
                raise InvalidInputError(f"Bounding box {name} must be numeric, got {value!r}") from exc

    @property
    def x_max(self) -> float:
        return self.x + self.width

    @property
    def y_max(self) -> float:
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height

    def to_xywh(self) -> Tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)

    def to_xyxy(self) -> Tuple[float, float, float, float]:
        return (self.x, self.y, self.x_max, self.y_max)

    @classmethod
    def from_xyxy(cls, x1: float, y1: float, x2: float, y2: float) -> "BoundingBox":
        return cls(x=x1, y=y1, width=x2 - x1, height=y2 - y1)

    @classmethod
    def coerce(cls, value: BoxLike) -> "BoundingBox":
        """Accept a box instance or an ``(x, y, width, height)`` sequence."""

        if isinstance(value, cls):
            return value
        try:
            x, y, width, height = value
        except (TypeError, ValueError) as exc:
            raise InvalidInputError(f"Bounding box must have 4 values (x, y, width, height), got {value!r}") from exc
        return cls(x=x, y=y, width=width, height=height)


@dataclass(frozen=True)
class Detection:
    """Represents a single detected object within a frame."""

    box: BoundingBox
    class_id: int
    confidence: float


Frame = Sequence[Detection]


def detections_from_parallel(
    boxes: Sequence[BoxLike],
    class_ids: Sequence[int],
    confidences: Sequence[float],
) -> List[Detection]:
    """Zip parallel box/class/confidence sequences into detection records."""

    if not (len(boxes) == len(class_ids) == len(confidences)):
        raise InvalidInputError(
            "Parallel sequences differ in length: "
            f"{len(boxes)} boxes, {len(class_ids)} class ids, {len(confidences)} confidences"
        )
    detections: List[Detection] = []
    for index, (box, class_id, confidence) in enumerate(zip(boxes, class_ids, confidences)):
        try:
            class_id = int(class_id)
            confidence = float(confidence)
        except (TypeError, ValueError) as exc:
            raise InvalidInputError(
                f"Detection {index} has a non-numeric class id or confidence: {class_id!r}, {confidence!r}"
            ) from exc
        detections.append(Detection(box=BoundingBox.coerce(box), class_id=class_id, confidence=confidence))
    return detections


def detections_to_parallel(
    detections: Sequence[Detection],
) -> Tuple[List[BoundingBox], List[int], List[float]]:
    """Split detection records back into parallel sequences."""

    boxes = [detection.box for detection in detections]
    class_ids = [detection.class_id for detection in detections]
    confidences = [detection.confidence for detection in detections]
    return boxes, class_ids, confidences
