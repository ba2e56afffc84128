from __future__ import annotations

from typing import Optional

import numpy as np

from edgepass.core.models import MASK_THRESHOLD

WHITE = (255, 255, 255)


def composite_on_white(
    img_rgb: np.ndarray,
    mask: Optional[np.ndarray] = None,
    threshold: int = MASK_THRESHOLD,
) -> np.ndarray:
    """
    Place img_rgb onto an opaque white canvas of the same size.

    With a mask, only pixels whose mask value is strictly above `threshold` are
    copied; everything else stays white. Without one, every pixel is copied.
    """
    h, w = img_rgb.shape[:2]
    out = np.full((h, w, 3), WHITE, dtype=np.uint8)

    if mask is None:
        out[:, :, :] = img_rgb[:, :, :3]
        return out

    if mask.shape[:2] != (h, w):
        raise ValueError(f"mask shape {mask.shape[:2]} does not match image {(h, w)}")

    fg = mask > threshold
    out[fg] = img_rgb[:, :, :3][fg]
    return out
