"""
Base types for modelComparator.

This module defines the value objects shared by adapters, the grid search
runner and the experiment report.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Iterator, Mapping, Optional, Tuple
import math

import numpy as np

if TYPE_CHECKING:
    from ..evaluation.confusion import ConfusionMatrix


class PredictionMode(Enum):
    """Kind of output an adapter produces at predict time."""
    RAW_SCORE = "raw_score"      # positive-class probability, binned later
    CLASS_LABEL = "class_label"  # labels discretized by the model itself


class Direction(Enum):
    """Optimization direction used when selecting the best report row."""
    MINIMIZE = "minimize"
    MAXIMIZE = "maximize"


@dataclass(frozen=True)
class HyperparameterTuple:
    """Immutable, ordered record of hyperparameter values for one grid point."""
    items: Tuple[Tuple[str, Any], ...]

    @classmethod
    def from_mapping(cls, params: Mapping[str, Any]) -> 'HyperparameterTuple':
        return cls(tuple(params.items()))

    def as_dict(self) -> Dict[str, Any]:
        return dict(self.items)

    def names(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self.items)

    def get(self, name: str, default: Any = None) -> Any:
        for key, value in self.items:
            if key == name:
                return value
        return default

    def __getitem__(self, name: str) -> Any:
        for key, value in self.items:
            if key == name:
                return value
        raise KeyError(name)

    def __iter__(self) -> Iterator[Tuple[str, Any]]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __str__(self) -> str:
        return ", ".join(f"{name}={value!r}" for name, value in self.items)


@dataclass(frozen=True)
class DataSplit:
    """Features and labels for one side (train or test) of a partition."""
    features: np.ndarray
    labels: np.ndarray

    def __post_init__(self):
        # Private read-only copies; the caller's arrays stay untouched.
        features = np.array(self.features, copy=True)
        labels = np.array(self.labels, copy=True)
        features.setflags(write=False)
        labels.setflags(write=False)
        object.__setattr__(self, 'features', features)
        object.__setattr__(self, 'labels', labels)

    @property
    def n_samples(self) -> int:
        return int(self.labels.shape[0])


@dataclass(frozen=True)
class TrainedModel:
    """Opaque artifact produced by ``ModelAdapter.fit`` for one grid point."""
    estimator: Any
    hyperparams: HyperparameterTuple
    classes: Tuple[Any, ...]
    adapter_name: str

    @property
    def is_binary(self) -> bool:
        return len(self.classes) == 2


@dataclass(frozen=True)
class ReportRow:
    """Result of evaluating one hyperparameter tuple.

    Failed rows keep their place in the table with NaN metrics and the error
    message, so that comparisons are never biased by omission.
    """
    index: int
    hyperparams: HyperparameterTuple
    misclassification_rate: float = math.nan
    sensitivity: float = math.nan
    specificity: float = math.nan
    confusion_matrix: Optional["ConfusionMatrix"] = field(default=None, compare=False)
    train_misclassification_rate: Optional[float] = None
    error: Optional[str] = None
    fit_seconds: float = field(default=0.0, compare=False)

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def accuracy(self) -> float:
        return 1.0 - self.misclassification_rate

    def metric(self, name: str) -> float:
        """Look up a metric by name, returning NaN when it is not recorded."""
        if name in ('index', 'hyperparams', 'confusion_matrix', 'error'):
            raise KeyError(f"Not a metric: {name}")
        if not hasattr(self, name):
            raise KeyError(f"Unknown metric: {name}")
        value = getattr(self, name)
        if value is None:
            return math.nan
        if not isinstance(value, (int, float, np.floating, np.integer)):
            raise KeyError(f"Not a numeric metric: {name}")
        return float(value)
