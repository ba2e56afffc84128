from __future__ import annotations


class EdgePassError(Exception):
    """Base class for errors raised by the photo pipeline."""

    code = "internal"


class DecodeError(EdgePassError):
    """Input bytes are not an image the decoder understands."""

    code = "decode"


class EncodeError(EdgePassError):
    code = "encode"


class GeometryDegenerate(EdgePassError):
    """A fixed-size crop was requested from a source smaller than the crop."""

    code = "geometry"

    def __init__(self, source_size: tuple[int, int], target_size: tuple[int, int]):
        self.source_size = source_size
        self.target_size = target_size
        super().__init__(
            f"source {source_size[0]}x{source_size[1]} is smaller than "
            f"crop {target_size[0]}x{target_size[1]}"
        )
