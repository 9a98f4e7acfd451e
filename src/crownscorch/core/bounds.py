"""Axis-aligned 3D bounding box of a tree point cloud."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Bounds:
    """3D axis-aligned bounding box.

    Attributes:
        minx, miny, minz: Minimum corner coordinates.
        maxx, maxy, maxz: Maximum corner coordinates.
    """

    minx: float
    miny: float
    minz: float
    maxx: float
    maxy: float
    maxz: float

    @classmethod
    def from_arrays(cls, x: np.ndarray, y: np.ndarray, z: np.ndarray) -> Bounds:
        """Compute bounds from X, Y, Z arrays."""
        if len(x) == 0:
            raise ValueError("Cannot compute bounds of an empty point cloud")
        return cls(
            minx=float(np.min(x)),
            miny=float(np.min(y)),
            minz=float(np.min(z)),
            maxx=float(np.max(x)),
            maxy=float(np.max(y)),
            maxz=float(np.max(z)),
        )

    @property
    def width(self) -> float:
        return self.maxx - self.minx

    @property
    def depth(self) -> float:
        return self.maxy - self.miny

    @property
    def height(self) -> float:
        """Vertical extent, i.e. tree height for a single-tree cloud."""
        return self.maxz - self.minz

    @property
    def crown_diameter(self) -> float:
        """Mean horizontal extent of the cloud."""
        return (self.width + self.depth) / 2.0

    def __repr__(self) -> str:
        return (
            f"Bounds(x=[{self.minx:.2f}, {self.maxx:.2f}], "
            f"y=[{self.miny:.2f}, {self.maxy:.2f}], "
            f"z=[{self.minz:.2f}, {self.maxz:.2f}])"
        )
