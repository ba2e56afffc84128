from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

# Fixed pipeline values shared by the engine and the CLI.
JPEG_QUALITY = 95
MASK_THRESHOLD = 128
# Host id of PassportStandard.GENERAL_ID, the fallback for unknown ids.
DEFAULT_STANDARD_ID = 3


@dataclass(frozen=True)
class CropConfig:
    """
    Output geometry for one document standard.

    target_width / target_height:
        Output size in pixels.
    top_margin_ratio:
        Fraction of the output height treated as the face region when the crop is
        positioned from a face center.
    """
    target_width: int
    target_height: int
    top_margin_ratio: float = 0.45

    def __post_init__(self) -> None:
        if self.target_width <= 0 or self.target_height <= 0:
            raise ValueError("target dimensions must be positive")
        if not (0.0 < self.top_margin_ratio <= 1.0):
            raise ValueError("top_margin_ratio must be in (0, 1]")

    @property
    def size(self) -> tuple[int, int]:
        return self.target_width, self.target_height


@dataclass(frozen=True)
class FaceCenter:
    x: float
    y: float

    def scaled(self, sx: float, sy: float) -> "FaceCenter":
        return FaceCenter(x=self.x * sx, y=self.y * sy)


@dataclass(frozen=True)
class CropBox:
    """Pixel rectangle extracted from the source in face-centered mode."""
    left: int
    top: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.left + self.width

    @property
    def bottom(self) -> int:
        return self.top + self.height


@dataclass(frozen=True)
class ProcessingParams:
    """
    Per-call options for the engine.

    face_center:
        Optional face location in source pixels. None selects exact-resize mode.
    remove_background:
        If True, pixels outside the silhouette ellipse are forced to white.
    """
    standard: int = DEFAULT_STANDARD_ID
    face_center: Optional[FaceCenter] = None
    remove_background: bool = False
    jpeg_quality: int = JPEG_QUALITY
