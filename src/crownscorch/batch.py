"""Scorch prediction over a directory of single-tree point clouds."""

from __future__ import annotations

import logging
from pathlib import Path

from crownscorch.config import ScorchConfig
from crownscorch.filters.stem import StemClassifier
from crownscorch.io.registry import read, supported_extensions
from crownscorch.model.predictor import Predictor, load_model
from crownscorch.model.scorch import RESULT_KEY, predict_scorch

logger = logging.getLogger(__name__)


def tree_files(directory: str | Path) -> list[Path]:
    """Point cloud files directly inside `directory`, sorted by name."""
    directory = Path(directory)
    if not directory.is_dir():
        raise NotADirectoryError(f"Not a directory: {directory}")
    exts = set(supported_extensions())
    return sorted(p for p in directory.iterdir() if p.is_file() and p.suffix.lower() in exts)


def predict_directory(
    directory: str | Path,
    model: Predictor | None = None,
    crown_only: bool = False,
    classifier: StemClassifier | None = None,
    config: ScorchConfig | None = None,
) -> list[tuple[str, float]]:
    """Predict scorch for every tree file in a directory.

    The model is loaded once and reused for all trees. The first file that
    fails aborts the batch; its exception propagates to the caller.

    Returns:
        (file name, predicted scorch) pairs in file-name order.
    """
    config = config or ScorchConfig.from_env()
    files = tree_files(directory)
    logger.info("Found %d tree files in %s", len(files), directory)
    if not files:
        return []
    if model is None:
        model = load_model(config.resolve_model_path())

    results: list[tuple[str, float]] = []
    for i, path in enumerate(files, 1):
        logger.info("[%d/%d] %s", i, len(files), path.name)
        pc = read(path)
        prediction = predict_scorch(
            pc, model=model, crown_only=crown_only, classifier=classifier, config=config
        )
        results.append((path.name, prediction[RESULT_KEY]))
    return results
