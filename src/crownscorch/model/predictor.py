"""Predictor interface and loading of serialized models."""

from __future__ import annotations

import logging
import pickle
from functools import lru_cache
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import joblib

from crownscorch.config import ScorchConfig
from crownscorch.exceptions import ModelUnavailableError

logger = logging.getLogger(__name__)


@runtime_checkable
class Predictor(Protocol):
    """A fitted regressor: feature frame in, one prediction per row out.

    scikit-learn estimators satisfy this directly.
    """

    def predict(self, X: Any) -> Any:
        ...


@lru_cache(maxsize=8)
def _load_cached(path: Path) -> Predictor:
    logger.info("Loading scorch model from %s", path)
    try:
        model = joblib.load(path)
    except (OSError, EOFError, ValueError, KeyError, ImportError, AttributeError,
            pickle.UnpicklingError) as exc:
        raise ModelUnavailableError(f"Cannot load scorch model {path}: {exc}") from exc
    if not isinstance(model, Predictor):
        raise ModelUnavailableError(
            f"{path} holds a {type(model).__name__}, which has no predict() method"
        )
    return model


def load_model(path: str | Path | None = None) -> Predictor:
    """Load a serialized predictor, once per path.

    Args:
        path: joblib file. None uses $CROWNSCORCH_MODEL or the packaged model.

    Raises:
        ModelUnavailableError: If the file is missing or can't be unpickled.
    """
    if path is None:
        path = ScorchConfig.from_env().resolve_model_path()
    path = Path(path).expanduser().resolve()
    if not path.is_file():
        raise ModelUnavailableError(
            f"Scorch model not found at {path}. Pass model= explicitly or "
            f"point $CROWNSCORCH_MODEL at a joblib-serialized regressor"
        )
    return _load_cached(path)


def clear_model_cache() -> None:
    """Forget all loaded models (e.g. after replacing a model file)."""
    _load_cached.cache_clear()
