"""Point cloud dimension definitions."""

from __future__ import annotations

import numpy as np

# Raw per-point sensor amplitude, 16-bit range-corrected on the RIEGL VZ-400i
INTENSITY = "Intensity"
# Calibrated relative reflectance in dB, see filters.reflectance
REFLECTANCE = "Reflectance"
# Stem membership label written by the stem classifier
STEM = "Stem"

# Dimensions read from LAS files plus the ones derived by crownscorch
STANDARD_DIMENSIONS: dict[str, np.dtype] = {
    "X": np.dtype(np.float64),
    "Y": np.dtype(np.float64),
    "Z": np.dtype(np.float64),
    INTENSITY: np.dtype(np.uint16),
    "ReturnNumber": np.dtype(np.uint8),
    "NumberOfReturns": np.dtype(np.uint8),
    "Classification": np.dtype(np.uint8),
    "GpsTime": np.dtype(np.float64),
    REFLECTANCE: np.dtype(np.float64),
    STEM: np.dtype(bool),
}


def get_dtype(name: str) -> np.dtype:
    """Get the default dtype for a dimension name, defaulting to float64."""
    return STANDARD_DIMENSIONS.get(name, np.dtype(np.float64))
