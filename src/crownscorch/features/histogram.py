"""Reflectance histogram — the feature representation of a tree crown.

Values on or beyond the outermost breaks are dropped before binning.
Bins are closed on the right, (e_i, e_i+1], and densities are normalised
over the retained points so that sum(density * width) == 1.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import numpy as np
import pandas as pd

from crownscorch.config import DEFAULT_BIN_EDGES
from crownscorch.core.dimensions import REFLECTANCE
from crownscorch.core.pointcloud import PointCloud
from crownscorch.exceptions import MissingAttributeError


@dataclass(frozen=True)
class Histogram:
    """Binned reflectance distribution of one point cloud.

    Attributes:
        edges: Bin breaks, length n_bins + 1.
        counts: Points per bin.
        density: Probability density per bin (0 where the bin is empty).
    """

    edges: np.ndarray
    counts: np.ndarray
    density: np.ndarray

    @property
    def mids(self) -> np.ndarray:
        """Bin midpoints in ascending order."""
        return (self.edges[:-1] + self.edges[1:]) / 2.0

    @property
    def widths(self) -> np.ndarray:
        return np.diff(self.edges)

    @property
    def total(self) -> int:
        """Number of points that fell inside the breaks."""
        return int(self.counts.sum())

    def __len__(self) -> int:
        return len(self.density)

    def __iter__(self) -> Iterator[tuple[float, float]]:
        """Yield (bin midpoint, density) pairs."""
        for mid, dens in zip(self.mids, self.density):
            yield float(mid), float(dens)

    def to_frame(self) -> pd.DataFrame:
        """Two-column frame: `intensity` (bin midpoint) and `density`."""
        return pd.DataFrame({"intensity": self.mids, "density": self.density})


def validate_edges(bin_edges: np.ndarray) -> np.ndarray:
    """Read-only float64 copy of the edges; ValueError unless strictly increasing."""
    edges = np.array(bin_edges, dtype=np.float64)
    if edges.ndim != 1 or len(edges) < 2:
        raise ValueError("bin_edges must be a 1-D sequence of at least 2 breaks")
    if np.any(np.diff(edges) <= 0):
        raise ValueError("bin_edges must be strictly increasing")
    edges.setflags(write=False)
    return edges


def histogram_from_values(
    values: np.ndarray, bin_edges: np.ndarray = DEFAULT_BIN_EDGES
) -> Histogram:
    """Bin raw reflectance values (see module docstring for the rules)."""
    edges = validate_edges(bin_edges)
    values = np.asarray(values, dtype=np.float64)
    values = values[(values > edges[0]) & (values < edges[-1])]

    # side="left" puts a value equal to e_i into the bin ending at e_i
    bin_idx = np.searchsorted(edges, values, side="left") - 1
    counts = np.bincount(bin_idx, minlength=len(edges) - 1)

    n = len(values)
    if n == 0:
        density = np.zeros(len(edges) - 1, dtype=np.float64)
    else:
        density = counts / (n * np.diff(edges))
    return Histogram(edges=edges, counts=counts, density=density)


def get_histogram(
    pc: PointCloud, bin_edges: np.ndarray = DEFAULT_BIN_EDGES
) -> Histogram:
    """Histogram of a cloud's Reflectance dimension.

    Args:
        pc: Point cloud carrying a Reflectance dimension.
        bin_edges: Breaks; the default matches the packaged model.

    Returns:
        Histogram with len(bin_edges) - 1 bins, empty bins included.

    Raises:
        MissingAttributeError: If Reflectance has not been calibrated.
    """
    if REFLECTANCE not in pc:
        raise MissingAttributeError(
            REFLECTANCE,
            "Use add_reflectance() to calculate it from Intensity",
        )
    return histogram_from_values(pc[REFLECTANCE], bin_edges)
