"""Core data model for crownscorch."""

from crownscorch.core.pointcloud import PointCloud
from crownscorch.core.bounds import Bounds
from crownscorch.core.metadata import Metadata
from crownscorch.core.dimensions import STANDARD_DIMENSIONS

__all__ = ["PointCloud", "Bounds", "Metadata", "STANDARD_DIMENSIONS"]
