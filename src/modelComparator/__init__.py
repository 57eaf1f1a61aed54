"""
modelComparator v1.0

Grid search evaluation harness for comparing classification models.
"""

__version__ = "1.0.0"

# Core imports
from .core.base import DataSplit, Direction, HyperparameterTuple, PredictionMode, ReportRow, TrainedModel
from .core.exceptions import (
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
from .core.grid_search_runner import GridSearchRunner, expand_grid

# Data handling
from .data.dataset import ExperimentData
from .data.validator import DataValidator

# Models
from .models import (
    ModelAdapter,
    GradientBoostedTreeAdapter,
    RandomForestAdapter,
    SupportVectorMachineAdapter,
    LogisticRegressionAdapter,
    ModelFactory,
)

# Evaluation
from .evaluation.confusion import ConfusionMatrix
from .evaluation.metrics import MetricsCalculator, misclassification_rate, sensitivity, specificity
from .evaluation.binner import QuantileBinner, threshold_bin
from .evaluation.reporter import ExperimentReport, select_best

# Label construction
from .pipelines.labels import build_binary_labels, build_multiclass_labels

__all__ = [
    # Core
    "DataSplit",
    "Direction",
    "HyperparameterTuple",
    "PredictionMode",
    "ReportRow",
    "TrainedModel",
    "GridSearchRunner",
    "expand_grid",

    # Errors
    "ModelComparatorError",
    "ShapeMismatchError",
    "LabelSetError",
    "EmptyMatrixError",
    "UndefinedMetricError",
    "TrainingError",
    "UnsupportedModeError",
    "DataValidationError",
    "NoValidResultError",

    # Data
    "ExperimentData",
    "DataValidator",

    # Models
    "ModelAdapter",
    "GradientBoostedTreeAdapter",
    "RandomForestAdapter",
    "SupportVectorMachineAdapter",
    "LogisticRegressionAdapter",
    "ModelFactory",

    # Evaluation
    "ConfusionMatrix",
    "MetricsCalculator",
    "misclassification_rate",
    "sensitivity",
    "specificity",
    "QuantileBinner",
    "threshold_bin",
    "ExperimentReport",
    "select_best",

    # Label construction
    "build_binary_labels",
    "build_multiclass_labels",
]
