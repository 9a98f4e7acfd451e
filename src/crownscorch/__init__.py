"""crownscorch — crown fire-scorch estimation from terrestrial lidar."""

from crownscorch._version import __version__
from crownscorch.config import DEFAULT_BIN_EDGES, ScorchConfig
from crownscorch.core.pointcloud import PointCloud
from crownscorch.core.bounds import Bounds
from crownscorch.core.metadata import Metadata
from crownscorch.exceptions import (
    ClassificationError,
    CrownScorchError,
    FeatureMismatchError,
    MissingAttributeError,
    ModelUnavailableError,
)
from crownscorch.features.histogram import Histogram, get_histogram
from crownscorch.filters.crown import remove_stem
from crownscorch.filters.reflectance import add_reflectance
from crownscorch.filters.stem import CircleStemClassifier, StemClassifier
from crownscorch.io.registry import read, write
from crownscorch.model.predictor import Predictor, load_model
from crownscorch.model.scorch import predict_scorch
from crownscorch.batch import predict_directory

__all__ = [
    "__version__",
    "PointCloud",
    "Bounds",
    "Metadata",
    "Histogram",
    "ScorchConfig",
    "DEFAULT_BIN_EDGES",
    "StemClassifier",
    "CircleStemClassifier",
    "Predictor",
    "add_reflectance",
    "get_histogram",
    "remove_stem",
    "predict_scorch",
    "predict_directory",
    "load_model",
    "read",
    "write",
    "CrownScorchError",
    "MissingAttributeError",
    "ClassificationError",
    "ModelUnavailableError",
    "FeatureMismatchError",
]
