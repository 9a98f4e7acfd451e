"""Interfaces for tree point cloud file formats."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar

from crownscorch.core.pointcloud import PointCloud


class Reader(ABC):
    """Loads one tree from a file into a PointCloud."""

    extensions: ClassVar[tuple[str, ...]] = ()

    @abstractmethod
    def read(self, path: str) -> PointCloud:
        """Read every dimension the file stores, including extra bytes."""


class Writer(ABC):
    """Stores a PointCloud, derived dimensions included."""

    extensions: ClassVar[tuple[str, ...]] = ()

    @abstractmethod
    def write(self, pc: PointCloud, path: str) -> int:
        """Write `pc` to `path` and return the number of points written."""
