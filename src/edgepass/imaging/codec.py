from __future__ import annotations

import io
import os

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from edgepass.core.errors import DecodeError, EncodeError
from edgepass.core.models import JPEG_QUALITY

MAX_DECODE_MEGAPIXELS = max(1.0, float(os.getenv("EDGEPASS_MAX_DECODE_MEGAPIXELS", "50")))
MAX_DECODE_PIXELS = int(MAX_DECODE_MEGAPIXELS * 1_000_000)


def _pil_to_rgb_np(img: Image.Image) -> np.ndarray:
    """PIL image (any mode) -> contiguous RGB uint8 array."""
    if img.mode != "RGB":
        img = img.convert("RGB")
    return np.ascontiguousarray(np.asarray(img, dtype=np.uint8))


def decode_image_bytes(image_bytes: bytes) -> np.ndarray:
    """
    Decode compressed image bytes into an (H, W, 3) RGB array.

    EXIF orientation is applied, alpha is dropped. Raises DecodeError for empty,
    malformed, unsupported or oversized input.
    """
    if not image_bytes:
        raise DecodeError("empty image buffer")

    try:
        img = Image.open(io.BytesIO(image_bytes))
        w, h = img.size
        if w * h > MAX_DECODE_PIXELS:
            raise DecodeError(
                f"image is {w}x{h}; decode limit is {MAX_DECODE_MEGAPIXELS:.0f} megapixels"
            )
        img = ImageOps.exif_transpose(img)
        return _pil_to_rgb_np(img)
    except DecodeError:
        raise
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, EOFError, SyntaxError, ValueError) as exc:
        raise DecodeError(f"Failed to decode image: {exc}") from exc


def encode_jpeg(rgb: np.ndarray, quality: int = JPEG_QUALITY) -> bytes:
    """Encode an RGB array as JPEG bytes."""
    try:
        img = Image.fromarray(np.ascontiguousarray(rgb, dtype=np.uint8))
        buf = io.BytesIO()
        img.save(buf, format="JPEG", quality=quality, optimize=True)
    except (OSError, ValueError, TypeError) as exc:
        raise EncodeError(f"Failed to encode output: {exc}") from exc

    data = buf.getvalue()
    if not data:
        raise EncodeError("encoder produced an empty buffer")
    return data
