"""Load detection frames from disk and persist filtered results."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence

import yaml
from pydantic import BaseModel, ValidationError

from ..models import Detection, InvalidInputError, detections_from_parallel

LOGGER = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}


class DetectionRecord(BaseModel):
    x: float
    y: float
    width: float
    height: float
    class_id: int
    confidence: float

    def to_detection(self) -> Detection:
        return detections_from_parallel(
            [(self.x, self.y, self.width, self.height)], [self.class_id], [self.confidence]
        )[0]


class ParallelFrame(BaseModel):
    boxes: List[List[float]]
    class_ids: List[int]
    confidences: List[float]

    def to_detections(self) -> List[Detection]:
        return detections_from_parallel(self.boxes, self.class_ids, self.confidences)


def _parse_frame(index: int, payload: object) -> List[Detection]:
    try:
        if isinstance(payload, dict):
            return ParallelFrame.model_validate(payload).to_detections()
        if isinstance(payload, list):
            return [DetectionRecord.model_validate(item).to_detection() for item in payload]
    except (ValidationError, InvalidInputError) as exc:
        raise InvalidInputError(f"Frame {index} is malformed: {exc}") from exc
    raise InvalidInputError(f"Frame {index} must be a list of detections or a parallel mapping")


def parse_frames(payload: object) -> List[List[Detection]]:
    """Convert a decoded YAML/JSON document into detection frames."""

    if isinstance(payload, dict):
        payload = payload.get("frames")
    if not isinstance(payload, list):
        raise InvalidInputError("Frame document must be a list of frames or contain a 'frames' list")
    return [_parse_frame(index, frame) for index, frame in enumerate(payload)]


def load_frames(path: Path) -> List[List[Detection]]:
    """Read frames from a YAML or JSON file."""

    with path.open("r", encoding="utf-8") as handle:
        try:
            if path.suffix.lower() in YAML_SUFFIXES:
                payload = yaml.safe_load(handle)
            else:
                payload = json.load(handle)
        except (yaml.YAMLError, json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise InvalidInputError(f"Unable to parse {path}: {exc}") from exc
    frames = parse_frames(payload)
    LOGGER.info("Loaded %d frames from %s", len(frames), path)
    return frames


def frame_to_records(frame: Sequence[Detection]) -> List[Dict[str, Any]]:
    return [
        {
            "x": detection.box.x,
            "y": detection.box.y,
            "width": detection.box.width,
            "height": detection.box.height,
            "class_id": detection.class_id,
            "confidence": detection.confidence,
        }
        for detection in frame
    ]


def write_results(path: Path, frames: Sequence[Sequence[Detection]], threshold: float) -> Path:
    """Write filtered frames as indented JSON and return the path written."""

    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "threshold": threshold,
        "frames": [frame_to_records(frame) for frame in frames],
    }
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2)
    LOGGER.info("Wrote %d frames to %s", len(frames), path)
    return path
