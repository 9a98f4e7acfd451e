"""Crown scorch prediction from a single-tree point cloud.

Follows Cannon et al. (2025): the crown's reflectance histogram, one
column per 0.2 dB bin, is the input of a random forest regressor.
"""

from __future__ import annotations

import logging

import numpy as np
import pandas as pd

from crownscorch.config import FEATURE_PREFIX, ScorchConfig
from crownscorch.core.dimensions import REFLECTANCE
from crownscorch.core.pointcloud import PointCloud
from crownscorch.exceptions import FeatureMismatchError
from crownscorch.features.histogram import Histogram, get_histogram
from crownscorch.filters.crown import remove_stem
from crownscorch.filters.reflectance import add_reflectance
from crownscorch.filters.stem import StemClassifier
from crownscorch.model.predictor import Predictor, load_model

logger = logging.getLogger(__name__)

RESULT_KEY = "predicted_scorch"


def feature_key(mid: float) -> str:
    """Column suffix for a bin midpoint, e.g. -19.9 -> '-19.9'."""
    # round() then 'g' gives the same text as the training data (-19.9, -10)
    return format(round(float(mid), 1) + 0.0, "g")


def feature_vector(hist: Histogram, prefix: str = FEATURE_PREFIX) -> pd.DataFrame:
    """Reshape a histogram into the model's one-row feature frame."""
    columns = [f"{prefix}{feature_key(m)}" for m in hist.mids]
    return pd.DataFrame([hist.density], columns=columns)


def predict_scorch(
    pc: PointCloud,
    model: Predictor | None = None,
    plot: bool = False,
    crown_only: bool = False,
    classifier: StemClassifier | None = None,
    config: ScorchConfig | None = None,
) -> dict[str, float]:
    """Predict the scorched fraction of a tree crown.

    Args:
        pc: Single-tree point cloud with Intensity (or Reflectance).
        model: Fitted predictor. None loads the packaged model.
        plot: Show the reflectance histogram (no effect on the result).
        crown_only: `pc` is already a crown; skip stem removal.
        classifier: Stem classifier for crown isolation.
        config: Thresholds and calibration; defaults match the packaged model.

    Returns:
        {"predicted_scorch": value}. Values are not clipped to [0, 1].

    Raises:
        ModelUnavailableError: No model given and the default can't be loaded.
        ClassificationError: The stem classifier failed.
        FeatureMismatchError: The model rejected the feature columns.
    """
    config = config or ScorchConfig.from_env()
    if model is None:
        logger.info("Loading default random forest prediction model")
        model = load_model(config.resolve_model_path())

    if not crown_only:
        logger.info("Removing stem")
        pc = remove_stem(
            pc,
            classifier=classifier,
            ground_quantile=config.ground_quantile,
            min_height=config.min_crown_height,
        )

    if REFLECTANCE not in pc:
        logger.info("Reflectance dimension missing; calibrating from Intensity")
        pc = add_reflectance(
            pc, offset=config.reflectance_offset, gain=config.reflectance_gain
        )

    hist = get_histogram(pc, config.bin_edges)
    if plot:
        from crownscorch.plotting import plot_histogram

        plot_histogram(hist)

    features = feature_vector(hist, config.feature_prefix)
    try:
        prediction = model.predict(features)
    except (ValueError, KeyError) as exc:
        raise FeatureMismatchError(
            f"Model rejected the {features.shape[1]} reflectance features "
            f"({features.columns[0]} .. {features.columns[-1]}). Was it trained "
            f"on histograms with the same bin edges? {exc}"
        ) from exc

    value = float(np.ravel(prediction)[0])
    logger.debug("Predicted scorch %.4f from %d crown points", value, hist.total)
    return {RESULT_KEY: value}
