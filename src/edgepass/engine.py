from __future__ import annotations

import logging
from typing import Optional, Union

import numpy as np

from edgepass.core.models import JPEG_QUALITY, FaceCenter, ProcessingParams
from edgepass.core.standards import PassportStandard, resolve, standard_from_id
from edgepass.imaging.codec import decode_image_bytes, encode_jpeg
from edgepass.imaging.compositor import composite_on_white
from edgepass.imaging.geometry import transform
from edgepass.imaging.mask import ellipse_mask

logger = logging.getLogger(__name__)


class PassportEngine:
    """
    Stateless photo pipeline: decode -> crop/resize -> optional mask -> composite -> encode.

    One instance is meant to live for the whole host application and may be shared
    across threads; `process` only touches call-local buffers.
    """

    def __init__(self, model_path: str = ""):
        # Reserved for a segmentation model; the geometric pipeline does not read it.
        self.model_path = model_path
        logger.info("Initializing PassportEngine (model path: %r)", model_path)

    def render(
        self,
        img_rgb: np.ndarray,
        standard: Union[PassportStandard, int],
        face_center: Optional[FaceCenter] = None,
        remove_background: bool = False,
    ) -> np.ndarray:
        """Run the pixel stages on an already-decoded RGB array."""
        config = resolve(standard)
        h, w = img_rgb.shape[:2]
        logger.info(
            "Transforming %dx%d to %dx%d (%s)",
            w, h, config.target_width, config.target_height,
            "face-centered crop" if face_center is not None else "exact resize",
        )

        framed = transform(img_rgb, config, face_center)

        mask = None
        if remove_background:
            logger.info("Creating silhouette mask for %dx%d frame", framed.shape[1], framed.shape[0])
            mask = ellipse_mask(framed.shape[1], framed.shape[0])

        return composite_on_white(framed, mask)

    def process(
        self,
        image_bytes: bytes,
        standard: Union[PassportStandard, int],
        face_center: Optional[FaceCenter] = None,
        remove_background: bool = False,
        suit_bytes: Optional[bytes] = None,
        jpeg_quality: int = JPEG_QUALITY,
    ) -> bytes:
        """
        Produce a JPEG document photo from compressed image bytes.

        `suit_bytes` is accepted for hosts that send a secondary overlay image; it is
        not used. Raises DecodeError, EncodeError or GeometryDegenerate.
        """
        if suit_bytes:
            logger.debug("Ignoring %d bytes of secondary payload", len(suit_bytes))

        img = decode_image_bytes(image_bytes)
        return self.process_image(img, standard, face_center, remove_background, jpeg_quality)

    def process_image(
        self,
        img_rgb: np.ndarray,
        standard: Union[PassportStandard, int],
        face_center: Optional[FaceCenter] = None,
        remove_background: bool = False,
        jpeg_quality: int = JPEG_QUALITY,
    ) -> bytes:
        """Same as `process` for a caller that already holds the decoded RGB array."""
        if not isinstance(standard, PassportStandard):
            standard = standard_from_id(standard)
        logger.info("Processing image with standard: %s", standard.name)
        logger.info("Remove background: %s", remove_background)
        logger.info("Input image dimensions: %dx%d", img_rgb.shape[1], img_rgb.shape[0])

        out = self.render(img_rgb, standard, face_center, remove_background)
        logger.info("Processing complete, output dimensions: %dx%d", out.shape[1], out.shape[0])

        return encode_jpeg(out, quality=jpeg_quality)

    def run(self, img_rgb: np.ndarray, params: ProcessingParams) -> bytes:
        return self.process_image(
            img_rgb,
            params.standard,
            face_center=params.face_center,
            remove_background=params.remove_background,
            jpeg_quality=params.jpeg_quality,
        )
