"""Tests for ScorchConfig."""

import numpy as np
import pytest

from crownscorch.config import DEFAULT_BIN_EDGES, MODEL_ENV_VAR, ScorchConfig


class TestScorchConfig:
    def test_equal_configs(self):
        assert ScorchConfig() == ScorchConfig()
        assert hash(ScorchConfig()) == hash(ScorchConfig())

    def test_different_edges_not_equal(self):
        assert ScorchConfig(bin_edges=np.linspace(-20, 0, 51)) != ScorchConfig()

    def test_edges_from_array(self):
        config = ScorchConfig(bin_edges=np.linspace(-20, 0, 51))
        assert isinstance(config.bin_edges, tuple)
        assert len(config.bin_edges) == 51

    def test_default_edges(self):
        np.testing.assert_array_equal(ScorchConfig().bin_edges, DEFAULT_BIN_EDGES)

    def test_frozen(self):
        with pytest.raises(AttributeError):
            ScorchConfig().min_crown_height = 2.0

    def test_from_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv(MODEL_ENV_VAR, str(tmp_path / "rf.joblib"))
        config = ScorchConfig.from_env()
        assert config.resolve_model_path() == tmp_path / "rf.joblib"

    def test_override_beats_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv(MODEL_ENV_VAR, str(tmp_path / "rf.joblib"))
        config = ScorchConfig.from_env(model_path=tmp_path / "other.joblib")
        assert config.resolve_model_path() == tmp_path / "other.joblib"
