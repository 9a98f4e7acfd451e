"""Crown isolation filter.

Normalises the tree to ground level, removes the stem and everything at
or below a minimum height, leaving the foliage the scorch model sees.
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np

from crownscorch.config import GROUND_QUANTILE, MIN_CROWN_HEIGHT
from crownscorch.core.dimensions import STEM
from crownscorch.core.pointcloud import PointCloud
from crownscorch.exceptions import ClassificationError
from crownscorch.filters.base import Filter
from crownscorch.filters.stem import StemClassifier, StemFilter

logger = logging.getLogger(__name__)


def ground_level(z: np.ndarray, quantile: float = GROUND_QUANTILE) -> float:
    """Robust ground height: a low quantile of Z rather than its minimum."""
    if len(z) == 0:
        raise ValueError("Cannot estimate ground level of an empty point cloud")
    return float(np.quantile(z, quantile))


class CrownFilter(Filter):
    """Keep only crown foliage points.

    Steps:
        1. Subtract the `ground_quantile` quantile of Z from every Z
        2. Label stem points with the stem classifier
        3. Drop stem points
        4. Drop points with corrected Z <= `min_height`

    Classifier failures (ClassificationError) propagate unchanged.

    Options:
        classifier: StemClassifier — Default: CircleStemClassifier().
        ground_quantile: float — Quantile of Z used as ground. Default: 0.001.
        min_height: float — Height floor of the crown. Default: 1.0.
    """

    def __init__(self, **options: Any) -> None:
        super().__init__(**options)

    def filter(self, pc: PointCloud) -> PointCloud:
        quantile = float(self.options.get("ground_quantile", GROUND_QUANTILE))
        min_height = float(self.options.get("min_height", MIN_CROWN_HEIGHT))
        if pc.num_points == 0:
            raise ClassificationError("Cannot isolate the crown of an empty point cloud")

        offset = ground_level(pc["Z"], quantile)
        normalized = pc.with_dimension("Z", pc["Z"] - offset)
        normalized.metadata.ground_offset = offset

        labeled = StemFilter(classifier=self.options.get("classifier")).filter(normalized)
        is_stem = labeled[STEM]

        keep = ~is_stem & (labeled["Z"] > min_height)
        logger.info(
            "Crown isolation: %d points, %d stem, %d kept above %.2f",
            pc.num_points, int(is_stem.sum()), int(keep.sum()), min_height,
        )
        return labeled.mask(keep)

    @classmethod
    def type_name(cls) -> str:
        return "filters.crown"


def remove_stem(
    pc: PointCloud,
    classifier: StemClassifier | None = None,
    ground_quantile: float = GROUND_QUANTILE,
    min_height: float = MIN_CROWN_HEIGHT,
) -> PointCloud:
    """Return the crown of a single tree: stem and near-ground points removed."""
    return CrownFilter(
        classifier=classifier,
        ground_quantile=ground_quantile,
        min_height=min_height,
    ).filter(pc)
