from __future__ import annotations

from enum import IntEnum
from typing import Union

from edgepass.core.models import DEFAULT_STANDARD_ID, CropConfig


class PassportStandard(IntEnum):
    """Document standards, keyed by the integer ids the host application sends."""
    SAUDI_EVISA = 0
    US = 1
    SCHENGEN = 2
    GENERAL_ID = 3
    UK = 4
    INDIA = 5
    CUSTOM = 99


DEFAULT_STANDARD = PassportStandard(DEFAULT_STANDARD_ID)

_CONFIGS: dict[PassportStandard, CropConfig] = {
    PassportStandard.SAUDI_EVISA: CropConfig(500, 500, 0.45),
    PassportStandard.US: CropConfig(600, 600, 0.45),
    PassportStandard.SCHENGEN: CropConfig(500, 500, 0.45),
    PassportStandard.GENERAL_ID: CropConfig(450, 550, 0.45),
    PassportStandard.UK: CropConfig(350, 450, 0.45),
    PassportStandard.INDIA: CropConfig(350, 500, 0.45),
    PassportStandard.CUSTOM: CropConfig(500, 500, 0.45),
}


def standard_from_id(standard_id: int) -> PassportStandard:
    """Map a host id to a standard; unknown ids fall back to GENERAL_ID."""
    try:
        return PassportStandard(int(standard_id))
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_STANDARD


def standard_from_name(name: str) -> PassportStandard:
    key = name.strip().upper().replace("-", "_").replace(" ", "_")
    return PassportStandard.__members__.get(key, DEFAULT_STANDARD)


def resolve(standard: Union[PassportStandard, int]) -> CropConfig:
    """Return the crop configuration for a standard (or raw host id)."""
    if not isinstance(standard, PassportStandard):
        standard = standard_from_id(standard)
    return _CONFIGS[standard]
