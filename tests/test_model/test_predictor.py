"""Tests for model loading."""

import joblib
import pytest

from crownscorch.config import MODEL_ENV_VAR
from crownscorch.exceptions import ModelUnavailableError
from crownscorch.model.predictor import Predictor, clear_model_cache, load_model


@pytest.fixture(autouse=True)
def _fresh_cache():
    clear_model_cache()
    yield
    clear_model_cache()


class TestLoadModel:
    def test_load_joblib(self, tmp_path, sklearn_model):
        path = tmp_path / "model.joblib"
        joblib.dump(sklearn_model, path)
        model = load_model(path)
        assert isinstance(model, Predictor)
        assert list(model.feature_names_in_) == list(sklearn_model.feature_names_in_)

    def test_loaded_once(self, tmp_path, sklearn_model):
        path = tmp_path / "model.joblib"
        joblib.dump(sklearn_model, path)
        assert load_model(path) is load_model(str(path))

    def test_clear_cache_reloads(self, tmp_path, sklearn_model):
        path = tmp_path / "model.joblib"
        joblib.dump(sklearn_model, path)
        first = load_model(path)
        clear_model_cache()
        assert load_model(path) is not first

    def test_missing_file(self, tmp_path):
        with pytest.raises(ModelUnavailableError, match="not found"):
            load_model(tmp_path / "nope.joblib")

    def test_env_var(self, tmp_path, sklearn_model, monkeypatch):
        path = tmp_path / "env_model.joblib"
        joblib.dump(sklearn_model, path)
        monkeypatch.setenv(MODEL_ENV_VAR, str(path))
        assert isinstance(load_model(), Predictor)

    def test_env_var_missing_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv(MODEL_ENV_VAR, str(tmp_path / "gone.joblib"))
        with pytest.raises(ModelUnavailableError, match="CROWNSCORCH_MODEL"):
            load_model()

    def test_not_a_predictor(self, tmp_path):
        path = tmp_path / "dict.joblib"
        joblib.dump({"weights": [1, 2, 3]}, path)
        with pytest.raises(ModelUnavailableError, match="predict"):
            load_model(path)

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "corrupt.joblib"
        path.write_bytes(b"not a pickle at all")
        with pytest.raises(ModelUnavailableError, match="Cannot load"):
            load_model(path)
