"""Scorch regression model interface and prediction."""

from crownscorch.model.predictor import Predictor, clear_model_cache, load_model
from crownscorch.model.scorch import feature_vector, predict_scorch

__all__ = ["Predictor", "load_model", "clear_model_cache", "feature_vector", "predict_scorch"]
