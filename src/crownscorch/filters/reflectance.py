"""Reflectance calibration filter.

Converts raw range-corrected amplitude into relative reflectance (dB)
against a white reference target orthogonal to the scanner. For the
RIEGL VZ-400i the relation is linear; reflectance of vegetation then
typically falls between -20 dB and 0 dB.
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np

from crownscorch.config import RIEGL_VZ400I_GAIN, RIEGL_VZ400I_OFFSET
from crownscorch.core.dimensions import INTENSITY, REFLECTANCE
from crownscorch.core.pointcloud import PointCloud
from crownscorch.exceptions import MissingAttributeError
from crownscorch.filters.base import Filter

logger = logging.getLogger(__name__)


class ReflectanceFilter(Filter):
    """Add a 'Reflectance' dimension computed as offset + gain * Intensity.

    Clouds that already carry Reflectance are returned unchanged, so the
    filter can be applied any number of times.

    Options:
        offset: float — Calibration offset in dB. Default: -25.0.
        gain: float — dB per raw intensity unit. Default: 4.577804e-4.
    """

    def __init__(self, **options: Any) -> None:
        super().__init__(**options)

    def filter(self, pc: PointCloud) -> PointCloud:
        if REFLECTANCE in pc:
            return pc
        if INTENSITY not in pc:
            raise MissingAttributeError(
                INTENSITY,
                "Reflectance is calibrated from raw Intensity; "
                "read the cloud with its Intensity attribute",
            )

        offset = float(self.options.get("offset", RIEGL_VZ400I_OFFSET))
        gain = float(self.options.get("gain", RIEGL_VZ400I_GAIN))

        reflectance = offset + gain * pc[INTENSITY].astype(np.float64)
        logger.debug("Calibrated reflectance for %d points", pc.num_points)
        return pc.with_dimension(REFLECTANCE, reflectance)

    @classmethod
    def type_name(cls) -> str:
        return "filters.reflectance"


def add_reflectance(
    pc: PointCloud,
    offset: float = RIEGL_VZ400I_OFFSET,
    gain: float = RIEGL_VZ400I_GAIN,
) -> PointCloud:
    """Return `pc` with a calibrated Reflectance dimension.

    The default constants are specific to the RIEGL VZ-400i; data from any
    other scanner needs its own offset and gain.
    """
    return ReflectanceFilter(offset=offset, gain=gain).filter(pc)
