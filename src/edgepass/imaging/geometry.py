from __future__ import annotations

import logging
import math
from typing import Optional

import cv2
import numpy as np

from edgepass.core.errors import GeometryDegenerate
from edgepass.core.models import CropBox, CropConfig, FaceCenter

logger = logging.getLogger(__name__)


def _interpolation_for(src_w: int, src_h: int, dst_w: int, dst_h: int) -> int:
    # Area averaging only when both axes shrink; any enlarged axis gets Lanczos.
    if dst_w <= src_w and dst_h <= src_h:
        return cv2.INTER_AREA
    return cv2.INTER_LANCZOS4


def resize_exact(img_rgb: np.ndarray, width: int, height: int) -> np.ndarray:
    """
    Stretch/squeeze the whole image to exactly width x height.

    Aspect ratio is not preserved and nothing is cropped.
    """
    if width <= 0 or height <= 0:
        raise ValueError("target size must be > 0")
    h, w = img_rgb.shape[:2]
    if (w, h) == (width, height):
        return img_rgb.copy()
    interp = _interpolation_for(w, h, width, height)
    return cv2.resize(img_rgb, (width, height), interpolation=interp)


def _clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(value, hi))


def usable_face_center(face_center: Optional[FaceCenter]) -> Optional[FaceCenter]:
    """Return face_center, or None when either coordinate is NaN or infinite."""
    if face_center is None:
        return None
    if not (math.isfinite(face_center.x) and math.isfinite(face_center.y)):
        logger.warning("Ignoring non-finite face center (%r, %r)", face_center.x, face_center.y)
        return None
    return face_center


def compute_crop_box(
    src_w: int,
    src_h: int,
    config: CropConfig,
    face_center: Optional[FaceCenter] = None,
) -> CropBox:
    """
    Place a target-sized rectangle so the face region sits at the configured margin.

    The face region is the top `top_margin_ratio` share of the target height; the
    rectangle is shifted so the face center is at the middle of that region
    vertically and at the middle of the frame horizontally, then clamped into the
    source. A missing or non-finite face center means the source's geometric center.

    Raises GeometryDegenerate if the source is smaller than the target on either axis.
    """
    tw, th = config.target_width, config.target_height
    if src_w < tw or src_h < th:
        raise GeometryDegenerate((src_w, src_h), (tw, th))

    face_center = usable_face_center(face_center)
    if face_center is None:
        face_center = FaceCenter(x=src_w / 2.0, y=src_h / 2.0)

    face_region_h = th * config.top_margin_ratio
    left = int(round(face_center.x - tw / 2.0))
    top = int(round(face_center.y - face_region_h / 2.0))

    max_left = src_w - tw
    max_top = src_h - th
    box = CropBox(
        left=_clamp(left, 0, max_left),
        top=_clamp(top, 0, max_top),
        width=tw,
        height=th,
    )
    if (box.left, box.top) != (left, top):
        logger.debug("Crop offset (%d, %d) clamped to (%d, %d)", left, top, box.left, box.top)
    return box


def cover_scale(src_w: int, src_h: int, config: CropConfig) -> float:
    """Smallest uniform scale (>= 1) that makes the source cover the target."""
    return max(1.0, config.target_width / float(src_w), config.target_height / float(src_h))


def crop_face_centered(
    img_rgb: np.ndarray,
    config: CropConfig,
    face_center: Optional[FaceCenter] = None,
    upscale_small: bool = True,
) -> np.ndarray:
    """
    Extract the target-sized region around the face.

    Sources smaller than the target are treated as enlarged uniformly (the face
    center follows) when upscale_small is set; only the target window is resampled,
    so the enlarged image is never materialized. Without upscale_small,
    GeometryDegenerate propagates.
    """
    h, w = img_rgb.shape[:2]
    face_center = usable_face_center(face_center)
    if face_center is None:
        face_center = FaceCenter(x=w / 2.0, y=h / 2.0)

    scale = cover_scale(w, h, config)
    if not (upscale_small and scale > 1.0):
        box = compute_crop_box(w, h, config, face_center)
        return img_rgb[box.top:box.bottom, box.left:box.right].copy()

    virt_w = max(config.target_width, int(np.ceil(w * scale)))
    virt_h = max(config.target_height, int(np.ceil(h * scale)))
    sx = virt_w / float(w)
    sy = virt_h / float(h)
    box = compute_crop_box(virt_w, virt_h, config, face_center.scaled(sx, sy))
    logger.info(
        "Source %dx%d smaller than target, sampling window (%d, %d) of %dx%d enlargement",
        w, h, box.left, box.top, virt_w, virt_h,
    )

    # Maps source pixels straight into the output window of the enlarged frame.
    matrix = np.array([[sx, 0.0, -box.left], [0.0, sy, -box.top]], dtype=np.float64)
    return cv2.warpAffine(
        img_rgb,
        matrix,
        (config.target_width, config.target_height),
        flags=cv2.INTER_LANCZOS4,
        borderMode=cv2.BORDER_REPLICATE,
    )


def transform(
    img_rgb: np.ndarray,
    config: CropConfig,
    face_center: Optional[FaceCenter] = None,
) -> np.ndarray:
    """Exact resize without a usable face hint, face-centered crop with one."""
    face_center = usable_face_center(face_center)
    if face_center is None:
        return resize_exact(img_rgb, config.target_width, config.target_height)
    return crop_face_centered(img_rgb, config, face_center)
