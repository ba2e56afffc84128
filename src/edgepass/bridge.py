"""
Host-facing entry points.

The host application creates one engine with `init_engine`, keeps the returned
handle, and passes it to every `generate` call. Each call is bytes in / bytes out
and never raises: failures come back as a GenerateResult with an error code.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

from edgepass.core.errors import EdgePassError
from edgepass.core.models import FaceCenter
from edgepass.core.standards import standard_from_id
from edgepass.engine import PassportEngine
from edgepass.logging_setup import init_logging

logger = logging.getLogger(__name__)

VERSION = "EdgePass Core v0.1.0"

NO_FACE_SENTINEL = -1.0

ERR_NOT_INITIALIZED = "not_initialized"
ERR_INTERNAL = "internal"


@dataclass(frozen=True)
class GenerateResult:
    """
    Outcome of one `generate` call.

    Exactly one of `output` / `error` is set. `error` is one of
    "not_initialized", "decode", "encode", "geometry", "internal".
    """
    output: Optional[bytes] = None
    error: Optional[str] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None and self.output is not None


def init_engine(model_path: str) -> PassportEngine:
    init_logging()
    logger.info("Initializing EdgePass Engine with model path: %s", model_path)
    engine = PassportEngine(model_path)
    logger.info("EdgePass Engine initialized successfully")
    return engine


def _face_center_from_host(x: Optional[float], y: Optional[float]) -> Optional[FaceCenter]:
    if x is None or y is None:
        return None
    if x == NO_FACE_SENTINEL and y == NO_FACE_SENTINEL:
        return None
    if not (math.isfinite(x) and math.isfinite(y)):
        logger.warning("Non-finite face center (%r, %r) treated as no hint", x, y)
        return None
    return FaceCenter(x=float(x), y=float(y))


def generate(
    engine: Optional[PassportEngine],
    image_bytes: bytes,
    standard_id: int,
    suit_bytes: Optional[bytes] = None,
    face_center_x: Optional[float] = NO_FACE_SENTINEL,
    face_center_y: Optional[float] = NO_FACE_SENTINEL,
    remove_background: int = 0,
) -> GenerateResult:
    """Run one request through the engine behind a fault barrier."""
    logger.info("generate called with standard_id: %s, remove_bg: %s", standard_id, remove_background)

    if engine is None:
        logger.error("Engine not initialized!")
        return GenerateResult(error=ERR_NOT_INITIALIZED, message="engine not initialized")

    standard = standard_from_id(standard_id)
    face_center = _face_center_from_host(face_center_x, face_center_y)
    remove_bg = bool(remove_background)
    logger.info("Face center: %s, remove_background: %s", face_center, remove_bg)

    try:
        output = engine.process(
            bytes(image_bytes or b""),
            standard,
            face_center=face_center,
            remove_background=remove_bg,
            suit_bytes=suit_bytes,
        )
    except EdgePassError as e:
        logger.error("Processing failed: %s", e)
        return GenerateResult(error=e.code, message=str(e))
    except Exception as e:  # fault barrier: keep the shared engine usable
        logger.exception("Unexpected fault during processing")
        return GenerateResult(error=ERR_INTERNAL, message=f"{type(e).__name__}: {e}")

    logger.info("Processing successful, output bytes: %d", len(output))
    return GenerateResult(output=output)


def check_init(engine: Optional[PassportEngine]) -> bool:
    return engine is not None


def version() -> str:
    return VERSION
