"""Exception hierarchy for crownscorch.

Every failure surfaces to the caller with a message naming the missing
precondition and the call that remedies it.
"""

from __future__ import annotations


class CrownScorchError(Exception):
    """Base class for all crownscorch errors."""


class MissingAttributeError(CrownScorchError, KeyError):
    """A required raw or derived dimension is absent from a point cloud."""

    def __init__(self, dimension: str, remedy: str | None = None) -> None:
        self.dimension = dimension
        self.remedy = remedy
        msg = f"PointCloud does not contain a '{dimension}' dimension"
        if remedy:
            msg += f". {remedy}"
        super().__init__(msg)

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class ClassificationError(CrownScorchError):
    """The stem classifier could not label the point cloud."""


class ModelUnavailableError(CrownScorchError):
    """No predictor was supplied and the packaged model cannot be loaded."""


class FeatureMismatchError(CrownScorchError, ValueError):
    """The feature vector does not match the columns the predictor expects."""
