"""Command-line driver: load or synthesize frames, run NMS, report the survivors."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from pydantic import ValidationError

from .config.settings import AppSettings, load_settings
from .models import Detection, InvalidInputError
from .services.frame_io import load_frames, write_results
from .services.suppressor import Suppressor
from .utils.synthetic import generate_frames

LOGGER = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Class-aware greedy non-maximum suppression")
    parser.add_argument("--input", type=Path, default=None, help="YAML/JSON file with detection frames")
    parser.add_argument("--output", type=Path, default=None, help="Write filtered frames to this JSON file")
    parser.add_argument("--threshold", type=float, default=None, help="IoU threshold")
    parser.add_argument("--frames", type=int, default=None, help="Number of synthetic frames")
    parser.add_argument("--per-frame", type=int, default=None, help="Synthetic detections per frame")
    parser.add_argument("--seed", type=int, default=None, help="Seed for synthetic frames")
    parser.add_argument("--log-format", choices=["text", "json"], default=None, help="Logging format")
    parser.add_argument("--quiet", action="store_true", help="Do not print frames to stdout")
    return parser


class JsonLogFormatter(logging.Formatter):
    """Render each record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def setup_logging(settings: AppSettings) -> None:
    if settings.log_format == "json":
        formatter: logging.Formatter = JsonLogFormatter()
    else:
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    logging.basicConfig(level=settings.log_level, handlers=[handler], force=True)


def resolve_settings(args: argparse.Namespace) -> AppSettings:
    overrides = {}
    if args.threshold is not None:
        overrides["nms_threshold"] = args.threshold
    if args.frames is not None:
        overrides["synthetic_frames"] = args.frames
    if args.per_frame is not None:
        overrides["synthetic_detections"] = args.per_frame
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.log_format:
        overrides["log_format"] = args.log_format
    if args.output:
        overrides["output_path"] = args.output
    return load_settings(**overrides)


def format_frame(index: int, frame: Sequence[Detection]) -> List[str]:
    lines = [f"Frame {index}:"]
    for position, detection in enumerate(frame):
        box = detection.box
        lines.append(
            f"Object {position}: ({box.x:g},{box.y:g}), width: {box.width:g}, height: {box.height:g}, "
            f"classid: {detection.class_id}, confidence: {detection.confidence:g}"
        )
    return lines


def print_frames(title: str, frames: Sequence[Sequence[Detection]]) -> None:
    print(f"**** {title}")
    for index, frame in enumerate(frames):
        print("\n".join(format_frame(index, frame)))


def run(settings: AppSettings, input_path: Optional[Path] = None, quiet: bool = False) -> List[List[Detection]]:
    if input_path is not None:
        frames = load_frames(input_path)
    else:
        frames = generate_frames(
            num_frames=settings.synthetic_frames,
            detections_per_frame=settings.synthetic_detections,
            class_ids=settings.synthetic_class_ids,
            seed=settings.seed,
        )
        LOGGER.info("Generated %d synthetic frames", len(frames))

    suppressor = Suppressor(settings.nms_threshold)
    filtered = suppressor.suppress_frames(frames)
    before = sum(len(frame) for frame in frames)
    after = sum(len(frame) for frame in filtered)
    LOGGER.info("NMS kept %d of %d detections at threshold %s", after, before, settings.nms_threshold)

    if not quiet:
        print_frames("Original frames", frames)
        print(f"**nmsThresh: {settings.nms_threshold:g}")
        print_frames("After NMS", filtered)

    if settings.output_path is not None:
        write_results(settings.output_path, filtered, settings.nms_threshold)
    return filtered


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    try:
        settings = resolve_settings(args)
    except ValidationError as exc:
        # logging is not configured yet, so fall back to stderr
        logging.basicConfig(level=logging.INFO, stream=sys.stderr)
        LOGGER.error("Invalid settings: %s", exc)
        return 2
    setup_logging(settings)
    try:
        run(settings, input_path=args.input, quiet=args.quiet)
    except (InvalidInputError, OSError) as exc:
        LOGGER.error("NMS run failed: %s", exc)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
