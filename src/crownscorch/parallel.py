"""Optional Dask integration for predicting many trees in parallel."""

from __future__ import annotations

from pathlib import Path

from crownscorch.config import ScorchConfig
from crownscorch.filters.stem import StemClassifier
from crownscorch.io.registry import read
from crownscorch.model.predictor import Predictor, load_model
from crownscorch.model.scorch import RESULT_KEY, predict_scorch


def _check_dask() -> None:
    """Check that dask is installed."""
    try:
        import dask  # noqa: F401
    except ImportError:
        raise ImportError(
            "dask required for parallel processing. "
            "Install with: pip install crownscorch[dask]"
        )


def parallel_predict(
    paths: list[str | Path],
    model: Predictor | None = None,
    crown_only: bool = False,
    classifier: StemClassifier | None = None,
    config: ScorchConfig | None = None,
    scheduler: str = "threads",
    num_workers: int | None = None,
) -> list[tuple[str, float]]:
    """Predict scorch for several tree files using Dask.

    Each task reads its own file, so no point data is shared between
    tasks; the model is loaded once up front and shared read-only.

    Args:
        paths: Tree point cloud files.
        model: Fitted predictor. None loads the packaged model.
        crown_only: Files already contain crowns only.
        classifier: Stem classifier for crown isolation.
        config: Thresholds and calibration.
        scheduler: Dask scheduler ("threads", "processes", "synchronous").
        num_workers: Worker count, Dask default if None.

    Returns:
        (file name, predicted scorch) pairs in the order of `paths`.
    """
    if not paths:
        return []
    _check_dask()
    import dask

    config = config or ScorchConfig.from_env()
    if model is None:
        model = load_model(config.resolve_model_path())

    @dask.delayed
    def _predict_one(path: str | Path) -> tuple[str, float]:
        pc = read(path)
        result = predict_scorch(
            pc, model=model, crown_only=crown_only, classifier=classifier, config=config
        )
        return Path(path).name, result[RESULT_KEY]

    tasks = [_predict_one(p) for p in paths]
    compute_kwargs = {"scheduler": scheduler}
    if num_workers is not None:
        compute_kwargs["num_workers"] = num_workers
    return list(dask.compute(*tasks, **compute_kwargs))
