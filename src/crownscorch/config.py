"""Default constants and runtime configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import numpy as np

# Linear amplitude-to-reflectance calibration for the RIEGL VZ-400i.
# Other scanners need their own offset/gain pair.
RIEGL_VZ400I_OFFSET = -25.0
RIEGL_VZ400I_GAIN = 4.577804e-4

# Reflectance histogram breaks the packaged model was trained on:
# -20 dB to 0 dB in 0.2 dB steps (101 edges, 100 bins).
DEFAULT_BIN_EDGES = -20.0 + 0.2 * np.arange(101)
DEFAULT_BIN_EDGES.setflags(write=False)

GROUND_QUANTILE = 0.001
MIN_CROWN_HEIGHT = 1.0
FEATURE_PREFIX = "intensity_"

MODEL_ENV_VAR = "CROWNSCORCH_MODEL"
DEFAULT_MODEL_PATH = Path(__file__).parent / "data" / "rf_scorch_int.joblib"


@dataclass(frozen=True)
class ScorchConfig:
    """Settings shared by the scorch prediction steps.

    Attributes:
        ground_quantile: Z quantile used as the ground level of a tree.
        min_crown_height: Points at or below this corrected height are dropped.
        reflectance_offset: Calibration offset `a` in `a + b * Intensity`.
        reflectance_gain: Calibration gain `b` in `a + b * Intensity`.
        bin_edges: Reflectance histogram breaks, stored as a tuple.
        feature_prefix: Column prefix of the feature vector.
        model_path: Serialized predictor; None means the packaged model.
    """

    ground_quantile: float = GROUND_QUANTILE
    min_crown_height: float = MIN_CROWN_HEIGHT
    reflectance_offset: float = RIEGL_VZ400I_OFFSET
    reflectance_gain: float = RIEGL_VZ400I_GAIN
    bin_edges: tuple[float, ...] = tuple(DEFAULT_BIN_EDGES.tolist())
    feature_prefix: str = FEATURE_PREFIX
    model_path: Path | None = None

    def __post_init__(self) -> None:
        # Hashable, value-comparable edges; arrays are accepted on input
        edges = np.asarray(self.bin_edges, dtype=np.float64)
        object.__setattr__(self, "bin_edges", tuple(edges.tolist()))

    @classmethod
    def from_env(cls, **overrides) -> ScorchConfig:
        """Build a config, taking the model path from $CROWNSCORCH_MODEL if set."""
        env_model = os.environ.get(MODEL_ENV_VAR)
        if env_model and "model_path" not in overrides:
            overrides["model_path"] = Path(env_model)
        return cls(**overrides)

    def resolve_model_path(self) -> Path:
        """Path of the serialized predictor to load when none is given."""
        if self.model_path is not None:
            return Path(self.model_path)
        return DEFAULT_MODEL_PATH
