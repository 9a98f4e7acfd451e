"""Shared test fixtures."""

import numpy as np
import pandas as pd
import pytest

from crownscorch.config import DEFAULT_BIN_EDGES
from crownscorch.core.pointcloud import PointCloud
from crownscorch.model.scorch import feature_key


@pytest.fixture
def sample_pc() -> PointCloud:
    """A small PointCloud with 100 points for testing."""
    rng = np.random.default_rng(42)
    return PointCloud.from_dict({
        "X": rng.uniform(0, 5, 100),
        "Y": rng.uniform(0, 5, 100),
        "Z": rng.uniform(0, 20, 100),
        "Intensity": rng.integers(0, 65535, 100, dtype=np.uint16),
    })


def make_tree(
    n_trunk: int = 4000,
    n_crown: int = 4000,
    trunk_radius: float = 0.15,
    trunk_top: float = 6.0,
    crown_center: float = 9.0,
    crown_radius: float = 2.5,
    base: float = 250.0,
    seed: int = 42,
) -> PointCloud:
    """Synthetic single tree: a cylindrical trunk under a spherical crown.

    The first `n_trunk` points are trunk, the rest crown. Z is offset by
    `base` to mimic a cloud in absolute elevation.
    """
    rng = np.random.default_rng(seed)

    theta = rng.uniform(0, 2 * np.pi, n_trunk)
    r = trunk_radius + rng.normal(0, 0.005, n_trunk)
    tx = 10.0 + r * np.cos(theta)
    ty = 20.0 + r * np.sin(theta)
    tz = rng.uniform(0, trunk_top, n_trunk)

    direction = rng.normal(size=(n_crown, 3))
    direction /= np.linalg.norm(direction, axis=1, keepdims=True)
    radius = crown_radius * rng.uniform(0, 1, n_crown) ** (1 / 3)
    crown = direction * radius[:, None]

    return PointCloud.from_dict({
        "X": np.concatenate([tx, 10.0 + crown[:, 0]]),
        "Y": np.concatenate([ty, 20.0 + crown[:, 1]]),
        "Z": base + np.concatenate([tz, crown_center + crown[:, 2]]),
        "Intensity": rng.integers(
            5000, 40000, n_trunk + n_crown, dtype=np.uint16
        ),
    })


@pytest.fixture
def tree_pc() -> PointCloud:
    return make_tree()


class NoStem:
    """Stem classifier that labels nothing."""

    def classify(self, pc):
        return np.zeros(pc.num_points, dtype=bool)


class MeanDensityModel:
    """Predictor stand-in: mean density times bin width, records its input."""

    def __init__(self):
        self.seen = []

    def predict(self, X):
        self.seen.append(X)
        return np.asarray(X.mean(axis=1) * 0.2 * 50)


@pytest.fixture
def no_stem() -> NoStem:
    return NoStem()


@pytest.fixture
def mean_model() -> MeanDensityModel:
    return MeanDensityModel()


@pytest.fixture
def feature_columns() -> list[str]:
    mids = (DEFAULT_BIN_EDGES[:-1] + DEFAULT_BIN_EDGES[1:]) / 2
    return [f"intensity_{feature_key(m)}" for m in mids]


@pytest.fixture
def sklearn_model(feature_columns):
    """A fitted scikit-learn regressor trained on the default histogram columns."""
    from sklearn.linear_model import LinearRegression

    rng = np.random.default_rng(0)
    X = pd.DataFrame(rng.uniform(0, 1, (30, len(feature_columns))), columns=feature_columns)
    y = rng.uniform(0, 1, 30)
    return LinearRegression().fit(X, y)
