"""Tests for the reflectance histogram plot."""

import numpy as np
import pytest

matplotlib = pytest.importorskip("matplotlib")
matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

from crownscorch.features.histogram import histogram_from_values  # noqa: E402
from crownscorch.model.scorch import predict_scorch  # noqa: E402
from crownscorch.plotting import plot_histogram  # noqa: E402

from conftest import make_tree  # noqa: E402


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


@pytest.fixture
def hist():
    values = np.random.default_rng(3).uniform(-15, -5, 500)
    return histogram_from_values(values)


class TestPlotHistogram:
    def test_saves_figure(self, hist, tmp_path):
        path = tmp_path / "hist.png"
        ax = plot_histogram(hist, path=path)
        assert path.exists() and path.stat().st_size > 0
        assert ax.get_xlabel() == "Reflectance (dB)"

    def test_draws_density_line(self, hist):
        ax = plot_histogram(hist, show=False)
        x, y = ax.lines[0].get_data()
        np.testing.assert_allclose(x, hist.mids)
        np.testing.assert_allclose(y, hist.density)

    def test_existing_axes(self, hist):
        _, ax = plt.subplots()
        assert plot_histogram(hist, ax=ax, show=False) is ax

    def test_predict_with_plot(self, mean_model):
        tree = make_tree(n_trunk=1500, n_crown=1500)
        plain = predict_scorch(tree, model=mean_model)
        plotted = predict_scorch(tree, model=mean_model, plot=True)
        assert plotted == plain
        assert plt.get_fignums()
