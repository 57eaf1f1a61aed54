"""
Core functionality for modelComparator.

This module contains the shared value types, the error taxonomy and the grid
search runner.
"""

from .base import DataSplit, Direction, HyperparameterTuple, PredictionMode, ReportRow, TrainedModel
from .exceptions import (
    ModelComparatorError,
    ShapeMismatchError,
    LabelSetError,
    EmptyMatrixError,
    UndefinedMetricError,
    TrainingError,
    UnsupportedModeError,
    DataValidationError,
    NoValidResultError,
)
from .grid_search_runner import GridSearchRunner, expand_grid

__all__ = [
    "DataSplit",
    "Direction",
    "HyperparameterTuple",
    "PredictionMode",
    "ReportRow",
    "TrainedModel",
    "ModelComparatorError",
    "ShapeMismatchError",
    "LabelSetError",
    "EmptyMatrixError",
    "UndefinedMetricError",
    "TrainingError",
    "UnsupportedModeError",
    "DataValidationError",
    "NoValidResultError",
    "GridSearchRunner",
    "expand_grid",
]
