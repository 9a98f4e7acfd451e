"""Columnar point cloud of a single scanned tree."""

from __future__ import annotations

import numpy as np

from crownscorch.core.bounds import Bounds
from crownscorch.core.dimensions import get_dtype
from crownscorch.core.metadata import Metadata
from crownscorch.exceptions import MissingAttributeError


class PointCloud:
    """One NumPy array per dimension (X, Y, Z, Intensity, Reflectance, Stem).

    Clouds are treated as snapshots: calibration, stem labelling and crown
    isolation return new clouds via `with_dimension` and `mask`, so the
    caller's cloud is never modified.

    Examples:
        >>> pc = PointCloud.from_dict({
        ...     "X": [1.0, 2.0], "Y": [4.0, 5.0], "Z": [0.5, 7.0],
        ...     "Intensity": np.array([9000, 21000], dtype=np.uint16),
        ... })
        >>> len(pc)
        2
        >>> "Reflectance" in pc
        False
    """

    def __init__(self) -> None:
        self._arrays: dict[str, np.ndarray] = {}
        self.metadata = Metadata()

    @classmethod
    def from_dict(cls, data: dict[str, np.ndarray]) -> PointCloud:
        """Build a cloud from equally long per-dimension arrays."""
        lengths = {name: len(arr) for name, arr in data.items()}
        if len(set(lengths.values())) > 1:
            raise ValueError(f"All arrays must have same length, got: {lengths}")
        pc = cls()
        for name, arr in data.items():
            pc._arrays[name] = np.asarray(arr)
        return pc

    @property
    def num_points(self) -> int:
        if not self._arrays:
            return 0
        return len(next(iter(self._arrays.values())))

    @property
    def dimensions(self) -> list[str]:
        return list(self._arrays)

    @property
    def bounds(self) -> Bounds:
        """Bounding box of the tree; needs X, Y and Z."""
        return Bounds.from_arrays(self["X"], self["Y"], self["Z"])

    def __getitem__(self, key: str) -> np.ndarray:
        try:
            return self._arrays[key]
        except KeyError:
            raise MissingAttributeError(key, f"Available: {self.dimensions}") from None

    def __contains__(self, key: str) -> bool:
        return key in self._arrays

    def __len__(self) -> int:
        return self.num_points

    def __repr__(self) -> str:
        return f"PointCloud({self.num_points:,} points, dims=[{', '.join(self.dimensions)}])"

    def mask(self, keep: np.ndarray) -> PointCloud:
        """New cloud holding only the points where `keep` is True."""
        keep = np.asarray(keep, dtype=bool)
        if len(keep) != self.num_points:
            raise ValueError(
                f"Mask length {len(keep)} doesn't match point count {self.num_points}"
            )
        result = PointCloud()
        result._arrays = {name: arr[keep] for name, arr in self._arrays.items()}
        result.metadata = self.metadata.copy()
        return result

    def with_dimension(self, name: str, values: np.ndarray) -> PointCloud:
        """Copy of this cloud with dimension `name` set (added or replaced).

        Values are cast to the standard dtype of `name` (float64 for
        Reflectance, bool for Stem, ...).
        """
        values = np.asarray(values, dtype=get_dtype(name))
        if len(values) != self.num_points:
            raise ValueError(
                f"Array length {len(values)} doesn't match "
                f"existing point count {self.num_points}"
            )
        result = self.copy()
        result._arrays[name] = values.copy()
        return result

    def copy(self) -> PointCloud:
        """Deep copy, arrays and metadata included."""
        result = PointCloud()
        result._arrays = {name: arr.copy() for name, arr in self._arrays.items()}
        result.metadata = self.metadata.copy()
        return result
