"""Point cloud processing filters."""

from crownscorch.filters.base import Filter
from crownscorch.filters.crown import CrownFilter, remove_stem
from crownscorch.filters.reflectance import ReflectanceFilter, add_reflectance
from crownscorch.filters.stem import CircleStemClassifier, StemClassifier, StemFilter

__all__ = [
    "Filter",
    "CrownFilter",
    "ReflectanceFilter",
    "StemFilter",
    "StemClassifier",
    "CircleStemClassifier",
    "add_reflectance",
    "remove_stem",
]
