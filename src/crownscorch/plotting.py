"""Optional matplotlib plot of a reflectance histogram."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from crownscorch.features.histogram import Histogram


def _check_matplotlib() -> None:
    """Check that matplotlib is installed."""
    try:
        import matplotlib  # noqa: F401
    except ImportError:
        raise ImportError(
            "matplotlib required for plotting. "
            "Install with: pip install crownscorch[plot]"
        )


def plot_histogram(
    hist: Histogram,
    ax: Any = None,
    path: str | Path | None = None,
    show: bool | None = None,
) -> Any:
    """Line plot of density against reflectance.

    Args:
        hist: Histogram to draw.
        ax: Existing matplotlib Axes; a new figure is made if None.
        path: Save the figure here if given.
        show: Call plt.show(). Defaults to True unless saving to `path`.

    Returns:
        The matplotlib Axes.
    """
    _check_matplotlib()
    import matplotlib.pyplot as plt

    if ax is None:
        _, ax = plt.subplots(figsize=(6, 4))
    ax.plot(hist.mids, hist.density, color="tab:red")
    ax.set_xlabel("Reflectance (dB)")
    ax.set_ylabel("Density")

    if path is not None:
        ax.figure.savefig(path, dpi=150, bbox_inches="tight")
    if show if show is not None else path is None:
        plt.show()
    return ax
