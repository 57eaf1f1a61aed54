"""
Exception hierarchy for modelComparator.

Errors local to one grid point (training failures, degenerate metrics) are
recorded on the corresponding report row; structural errors abort the run.
"""


class ModelComparatorError(Exception):
    """Base class for all modelComparator errors."""


class ShapeMismatchError(ModelComparatorError):
    """Predicted and actual label sequences differ in length or are empty."""


class LabelSetError(ModelComparatorError):
    """A label falls outside the fixed label set of an evaluation."""


class EmptyMatrixError(ModelComparatorError):
    """A confusion matrix holds no samples."""


class UndefinedMetricError(ModelComparatorError):
    """A metric's denominator is zero for the given class distribution."""


class TrainingError(ModelComparatorError):
    """The underlying model failed to fit for a hyperparameter tuple."""


class UnsupportedModeError(ModelComparatorError):
    """An adapter was asked for a prediction mode it does not declare."""


class DataValidationError(ModelComparatorError, ValueError):
    """Feature matrix, label vector or partition violate their invariants."""


class NoValidResultError(ModelComparatorError):
    """No successful report row is available for selection."""
