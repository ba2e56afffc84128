from __future__ import annotations

import numpy as np

ELLIPSE_X_RATIO = 0.40
ELLIPSE_Y_RATIO = 0.50

FOREGROUND = 255
BACKGROUND = 0


def ellipse_mask(width: int, height: int) -> np.ndarray:
    """
    Binary silhouette mask of shape (height, width).

    Pixels inside the ellipse centered on the frame, with semi-axes
    0.40*width and 0.50*height, are FOREGROUND; the rest are BACKGROUND.
    """
    if width <= 0 or height <= 0:
        raise ValueError("mask size must be > 0")

    cx = width / 2.0
    cy = height / 2.0
    a = width * ELLIPSE_X_RATIO
    b = height * ELLIPSE_Y_RATIO

    ys, xs = np.ogrid[0:height, 0:width]
    dx = (xs.astype(np.float64) - cx) / a
    dy = (ys.astype(np.float64) - cy) / b
    dist = np.sqrt(dx * dx + dy * dy)

    return np.where(dist <= 1.0, FOREGROUND, BACKGROUND).astype(np.uint8)
