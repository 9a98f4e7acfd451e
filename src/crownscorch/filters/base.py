"""Base class of the tree processing steps (calibration, stem, crown)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from crownscorch.core.pointcloud import PointCloud


class Filter(ABC):
    """One step of the scorch pipeline, configured by keyword options.

    `filter()` returns a new cloud; the input cloud is left as it was.
    """

    def __init__(self, **options: Any) -> None:
        self.options = options

    @abstractmethod
    def filter(self, pc: PointCloud) -> PointCloud:
        ...

    @classmethod
    @abstractmethod
    def type_name(cls) -> str:
        """Step identifier, e.g. 'filters.crown'."""

    def __repr__(self) -> str:
        opts = ", ".join(f"{k}={v!r}" for k, v in self.options.items() if v is not None)
        return f"{self.type_name()}({opts})"
