#!/usr/bin/env python3
"""
passport_photo.py

Generate an identity-document photo for one of the built-in standards:
- Resizes the whole image to the standard's size, or
- Crops a standard-sized frame around a face center (given or detected)
- Optionally forces everything outside a centered ellipse to white

Usage:
  python passport_photo.py --input in.jpg --output out.jpg --standard uk
  python passport_photo.py -i in.jpg -o out.jpg --standard us --face-x 812 --face-y 640
  python passport_photo.py -i in.jpg -o out.jpg --detect-face --remove-bg --validate
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

import numpy as np

from edgepass.core.errors import EdgePassError
from edgepass.core.models import FaceCenter, ProcessingParams
from edgepass.core.standards import PassportStandard, resolve, standard_from_name
from edgepass.engine import PassportEngine
from edgepass.imaging.codec import decode_image_bytes
from edgepass.logging_setup import init_logging
from edgepass.validation.validator import format_report_text, validate_output

logger = logging.getLogger("edgepass.cli")


def _resolve_face_center(args: argparse.Namespace, img_rgb: np.ndarray) -> Optional[FaceCenter]:
    if args.face_x is not None and args.face_y is not None:
        return FaceCenter(x=args.face_x, y=args.face_y)
    if not args.detect_face:
        return None

    # mediapipe is an optional extra; only import it when asked to detect.
    try:
        from edgepass.facehint import detect_face_center
    except ImportError as e:
        raise RuntimeError(f"--detect-face needs the 'face' extra (mediapipe): {e}") from e

    center = detect_face_center(img_rgb)
    logger.info("Detected face center: (%.1f, %.1f)", center.x, center.y)
    return center


def _build_arg_parser() -> argparse.ArgumentParser:
    names = [s.name.lower() for s in PassportStandard]
    p = argparse.ArgumentParser(description="Generate a document photo (visa/passport/ID) from an input image.")
    p.add_argument("--input", "-i", required=True, help="Path to input image (jpg/png/etc.)")
    p.add_argument("--output", "-o", required=True, help="Path to output JPEG")
    p.add_argument("--standard", "-s", default="general_id", choices=names, help="Document standard (default: general_id)")
    p.add_argument("--face-x", type=float, default=None, help="Face center x in source pixels")
    p.add_argument("--face-y", type=float, default=None, help="Face center y in source pixels")
    p.add_argument("--detect-face", action="store_true", help="Find the face center with MediaPipe (needs the 'face' extra)")
    p.add_argument("--remove-bg", action="store_true", help="Whiten everything outside the silhouette ellipse")
    p.add_argument("--validate", action="store_true", help="Print a compliance report for the result")
    p.add_argument("--log-level", default=None, help="Logging level (default: EDGEPASS_LOG_LEVEL or INFO)")
    return p


def main(argv: Optional[list[str]] = None) -> int:
    args = _build_arg_parser().parse_args(argv)
    init_logging(args.log_level.upper() if args.log_level else None)

    if (args.face_x is None) != (args.face_y is None):
        print("ERROR: --face-x and --face-y must be given together", file=sys.stderr)
        return 2

    standard = standard_from_name(args.standard)

    try:
        img = decode_image_bytes(Path(args.input).read_bytes())
        params = ProcessingParams(
            standard=standard,
            face_center=_resolve_face_center(args, img),
            remove_background=args.remove_bg,
        )
        output = PassportEngine().run(img, params)
        Path(args.output).write_bytes(output)
    except (EdgePassError, OSError, RuntimeError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    config = resolve(standard)
    print(f"Saved: {args.output} ({config.target_width}x{config.target_height}, {standard.name})")

    if args.validate:
        report = validate_output(decode_image_bytes(output), standard)
        print(format_report_text(report))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
