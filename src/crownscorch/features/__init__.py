"""Feature extraction from calibrated point clouds."""

from crownscorch.features.histogram import Histogram, get_histogram, histogram_from_values

__all__ = ["Histogram", "get_histogram", "histogram_from_values"]
