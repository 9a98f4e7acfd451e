"""Stem (trunk) point classification.

The crown isolator only needs something that labels each point as stem or
not; any object with a ``classify(pc) -> bool array`` method will do. The
default classifier tracks the trunk as a stack of horizontal circles:

    1. Normalise Z to the ground quantile and cut the tree into slices
    2. Seed the stem in the slice at breast height, at the densest XY cell
    3. Fit a circle (algebraic fit refined with soft-L1 least squares)
    4. Walk up and down slice by slice, refitting around the previous
       centre, until a slice has too few points or the fit breaks down
    5. Points inside each accepted circle (plus a tolerance) are stem
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

import numpy as np
from scipy.optimize import least_squares

from crownscorch.config import GROUND_QUANTILE
from crownscorch.core.dimensions import STEM
from crownscorch.core.pointcloud import PointCloud
from crownscorch.exceptions import ClassificationError
from crownscorch.filters.base import Filter

logger = logging.getLogger(__name__)


@runtime_checkable
class StemClassifier(Protocol):
    """Anything that can label the stem points of a single tree."""

    def classify(self, pc: PointCloud) -> np.ndarray:
        """Return a boolean array, True for stem points."""
        ...


@dataclass(frozen=True)
class StemCircle:
    """Stem cross-section fitted in one slice."""

    slice_index: int
    x: float
    y: float
    radius: float
    rmse: float


def fit_circle(x: np.ndarray, y: np.ndarray) -> tuple[float, float, float, float] | None:
    """Least-squares circle through 2D points.

    Returns:
        (center_x, center_y, radius, rmse), or None for degenerate input.
    """
    if len(x) < 3:
        return None

    # Algebraic (Kasa) fit: x^2 + y^2 = 2ax + 2by + c
    design = np.column_stack([2.0 * x, 2.0 * y, np.ones_like(x)])
    target = x**2 + y**2
    (a, b, c), *_ = np.linalg.lstsq(design, target, rcond=None)
    r_sq = c + a**2 + b**2
    if not np.isfinite(r_sq) or r_sq <= 0:
        return None

    def residuals(params: np.ndarray) -> np.ndarray:
        cx, cy, r = params
        return np.hypot(x - cx, y - cy) - r

    scale = max(float(np.sqrt(r_sq)) * 0.1, 1e-3)
    result = least_squares(
        residuals, x0=np.array([a, b, np.sqrt(r_sq)]), loss="soft_l1", f_scale=scale
    )
    if not result.success:
        return None
    cx, cy, r = (float(v) for v in result.x)
    if r <= 0:
        return None
    rmse = float(np.sqrt(np.mean(residuals(result.x) ** 2)))
    return cx, cy, r, rmse


def _densest_cell_center(x: np.ndarray, y: np.ndarray, cell_size: float) -> tuple[float, float]:
    """Mean XY of the points in the most populated grid cell."""
    ix = np.floor((x - x.min()) / cell_size).astype(np.int64)
    iy = np.floor((y - y.min()) / cell_size).astype(np.int64)
    cell = ix + (ix.max() + 1) * iy
    densest = cell == np.argmax(np.bincount(cell))
    return float(x[densest].mean()), float(y[densest].mean())


class CircleStemClassifier:
    """Label stem points by tracking trunk cross-sections up the tree.

    Args:
        slice_height: Thickness of each horizontal slice.
        seed_height: Height (above ground) of the slice that seeds the stem.
        min_radius: Smallest accepted stem radius.
        max_radius: Largest accepted stem radius.
        search_margin: Points within fitted radius + margin of the previous
            centre are used for the next fit.
        tolerance: Points within radius + tolerance of a centre are stem.
        max_rmse: Largest accepted circle-fit RMSE.
        min_slice_points: Fewer points than this ends the stem.
        min_points: Clouds smaller than this cannot be classified.
    """

    def __init__(
        self,
        slice_height: float = 0.5,
        seed_height: float = 1.3,
        min_radius: float = 0.02,
        max_radius: float = 0.6,
        search_margin: float = 0.15,
        tolerance: float = 0.05,
        max_rmse: float = 0.05,
        min_slice_points: int = 10,
        min_points: int = 50,
    ) -> None:
        self.slice_height = slice_height
        self.seed_height = seed_height
        self.min_radius = min_radius
        self.max_radius = max_radius
        self.search_margin = search_margin
        self.tolerance = tolerance
        self.max_rmse = max_rmse
        self.min_slice_points = min_slice_points
        self.min_points = min_points

    def _slices(self, pc: PointCloud) -> np.ndarray:
        z = pc["Z"] - np.quantile(pc["Z"], GROUND_QUANTILE)
        return np.floor(z / self.slice_height).astype(np.int64)

    def _fit_slice(
        self, x: np.ndarray, y: np.ndarray, cx: float, cy: float, search: float
    ) -> tuple[float, float, float, float] | None:
        near = np.hypot(x - cx, y - cy) <= search
        if int(near.sum()) < self.min_slice_points:
            return None
        fit = fit_circle(x[near], y[near])
        if fit is None:
            return None
        _, _, r, rmse = fit
        if not self.min_radius <= r <= self.max_radius or rmse > self.max_rmse:
            return None
        return fit

    def _track(
        self,
        x: np.ndarray,
        y: np.ndarray,
        slice_idx: np.ndarray,
        seed: StemCircle,
        step: int,
    ) -> list[StemCircle]:
        circles: list[StemCircle] = []
        prev = seed
        k = seed.slice_index + step
        top = int(slice_idx.max())
        while 0 <= k <= top:
            in_slice = slice_idx == k
            fit = self._fit_slice(
                x[in_slice], y[in_slice], prev.x, prev.y, prev.radius + self.search_margin
            )
            # A sudden widening means the fit has caught branches or foliage
            if fit is None or fit[2] > prev.radius * 1.5 + 0.02:
                break
            prev = StemCircle(k, *fit)
            circles.append(prev)
            k += step
        return circles

    def fit_stem(self, pc: PointCloud) -> list[StemCircle]:
        """Fitted stem cross-sections, bottom to top."""
        n = pc.num_points
        if n < self.min_points:
            raise ClassificationError(
                f"Stem classification needs at least {self.min_points} points, "
                f"got {n}; the cloud is too sparse to fit a stem model"
            )

        x, y = pc["X"], pc["Y"]
        slice_idx = self._slices(pc)
        seed_slice = int(np.floor(self.seed_height / self.slice_height))

        in_seed = slice_idx == seed_slice
        if int(in_seed.sum()) < self.min_slice_points:
            logger.warning("No points at seed height %.2f; no stem found", self.seed_height)
            return []

        sx, sy = x[in_seed], y[in_seed]
        cx, cy = _densest_cell_center(sx, sy, cell_size=self.min_radius * 2)
        fit = self._fit_slice(sx, sy, cx, cy, self.max_radius)
        if fit is None:
            logger.warning("Stem circle fit failed at seed height %.2f", self.seed_height)
            return []

        seed = StemCircle(seed_slice, *fit)
        below = self._track(x, y, slice_idx, seed, -1)
        above = self._track(x, y, slice_idx, seed, 1)
        return below[::-1] + [seed] + above

    def classify(self, pc: PointCloud) -> np.ndarray:
        circles = self.fit_stem(pc)
        stem = np.zeros(pc.num_points, dtype=bool)
        if not circles:
            return stem

        x, y = pc["X"], pc["Y"]
        slice_idx = self._slices(pc)
        for circle in circles:
            inside = np.hypot(x - circle.x, y - circle.y) <= circle.radius + self.tolerance
            stem |= (slice_idx == circle.slice_index) & inside

        logger.debug(
            "Stem of %d slices up to %.2f, %d points",
            len(circles),
            (circles[-1].slice_index + 1) * self.slice_height,
            int(stem.sum()),
        )
        return stem

    def __repr__(self) -> str:
        return (
            f"CircleStemClassifier(slice_height={self.slice_height}, "
            f"seed_height={self.seed_height}, max_radius={self.max_radius})"
        )


class StemFilter(Filter):
    """Write a boolean 'Stem' dimension using a stem classifier.

    Options:
        classifier: StemClassifier — Default: CircleStemClassifier().
    """

    def __init__(self, **options: Any) -> None:
        super().__init__(**options)

    def filter(self, pc: PointCloud) -> PointCloud:
        classifier = self.options.get("classifier") or CircleStemClassifier()
        if not isinstance(classifier, StemClassifier):
            raise TypeError(f"{type(classifier).__name__} has no classify() method")

        labels = np.asarray(classifier.classify(pc))
        if labels.ndim != 1 or len(labels) != pc.num_points:
            raise ClassificationError(
                f"{classifier!r} returned {labels.shape} labels "
                f"for {pc.num_points} points"
            )
        return pc.with_dimension(STEM, labels.astype(bool))

    @classmethod
    def type_name(cls) -> str:
        return "filters.stem"
