"""
Grid search evaluation harness for modelComparator.

This module trains one adapter instance per point of a hyperparameter grid,
scores it against held-out data and collects one report row per point.
"""

from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple, Union
import itertools
import threading
import time

import numpy as np
from joblib import Parallel, delayed

from .base import DataSplit, HyperparameterTuple, PredictionMode, ReportRow, TrainedModel
from .exceptions import DataValidationError, ShapeMismatchError, TrainingError, UnsupportedModeError
from ..data.validator import DataValidator
from ..evaluation.binner import threshold_bin
from ..evaluation.confusion import ConfusionMatrix
from ..evaluation.metrics import MetricsCalculator, misclassification_rate
from ..models.base_model import ModelAdapter
from ..utils.helpers import format_time
from ..utils.logger import get_logger

AdapterFactory = Callable[[], ModelAdapter]
SplitLike = Union[DataSplit, Tuple[Any, Any]]


def expand_grid(hyperparam_grid: Mapping[str, Sequence[Any]]) -> List[HyperparameterTuple]:
    """
    Enumerate the Cartesian product of a hyperparameter grid.

    The first declared parameter varies slowest and the last one fastest, so
    the enumeration order is reproducible for identical inputs.

    Args:
        hyperparam_grid: Mapping from parameter name to candidate values

    Returns:
        List of HyperparameterTuple in enumeration order
    """
    names = list(hyperparam_grid)
    candidates = []
    for name in names:
        values = hyperparam_grid[name]
        if isinstance(values, (str, bytes)) or not isinstance(values, Sequence):
            raise ValueError(f"Candidate values for '{name}' must be a sequence, got {values!r}")
        if len(values) == 0:
            raise ValueError(f"No candidate values given for '{name}'")
        candidates.append(list(values))

    return [
        HyperparameterTuple(tuple(zip(names, combination)))
        for combination in itertools.product(*candidates)
    ]


class GridSearchRunner:
    """Exhaustive grid search over one adapter family."""

    def __init__(
        self,
        mode: PredictionMode = PredictionMode.RAW_SCORE,
        cutoff: float = 0.5,
        labels: Optional[Sequence[Any]] = None,
        positive_label: Any = 1,
        evaluate_train: bool = False,
        n_jobs: int = 1
    ):
        """
        Args:
            mode: Prediction mode requested from the adapter
            cutoff: Threshold used to bin RAW_SCORE predictions
            labels: Fixed label set; defaults to the labels seen in train and test
            positive_label: Label used for sensitivity and specificity
            evaluate_train: Also score predictions on the training data
            n_jobs: Number of grid points evaluated concurrently
        """
        if not 0.0 <= cutoff <= 1.0:
            raise ValueError(f"cutoff must lie in [0, 1], got {cutoff}")
        self.mode = mode
        self.cutoff = cutoff
        self.labels = None if labels is None else tuple(labels)
        self.positive_label = positive_label
        self.evaluate_train = evaluate_train
        self.n_jobs = n_jobs

        self.metrics_calculator = MetricsCalculator(positive_label)
        self.logger = get_logger("GridSearchRunner")

        self.rows_: List[ReportRow] = []
        self.cancelled_ = False

    def run(
        self,
        adapter_factory: AdapterFactory,
        hyperparam_grid: Mapping[str, Sequence[Any]],
        train_data: SplitLike,
        test_data: SplitLike,
        cancel_event: Optional[threading.Event] = None
    ) -> List[ReportRow]:
        """
        Train and evaluate every point of the grid.

        Args:
            adapter_factory: Callable returning a fresh adapter per grid point
            hyperparam_grid: Mapping from parameter name to candidate values
            train_data: Training split
            test_data: Held-out split used for scoring
            cancel_event: Checked before each grid point; once set, remaining
                points are skipped

        Returns:
            Report rows in enumeration order, failed points included
        """
        train_data = self._as_split(train_data, "train")
        test_data = self._as_split(test_data, "test")
        if train_data.features.shape[1] != test_data.features.shape[1]:
            raise DataValidationError(
                f"Train has {train_data.features.shape[1]} features but test has {test_data.features.shape[1]}"
            )

        adapter_factory().check_mode(self.mode)
        label_set = self._label_set(train_data, test_data)
        if self.mode is PredictionMode.RAW_SCORE and len(label_set) != 2:
            raise UnsupportedModeError(
                f"Raw score binning needs exactly two labels, got {list(label_set)}; use class_label mode"
            )

        points = expand_grid(hyperparam_grid)
        self.cancelled_ = False
        self.logger.info(
            f"GridSearch | points={len(points)} | params={list(hyperparam_grid)} | "
            f"mode={self.mode.value} | n_jobs={self.n_jobs}"
        )
        start = time.perf_counter()

        results = Parallel(n_jobs=self.n_jobs, prefer="threads")(
            delayed(self._evaluate_point)(index, params, adapter_factory, train_data, test_data, label_set, cancel_event)
            for index, params in enumerate(points)
        )

        # Completion order is irrelevant; rows are handed back in enumeration order
        rows = sorted((row for row in results if row is not None), key=lambda row: row.index)
        self.cancelled_ = len(rows) < len(points)
        self.rows_ = rows

        n_failed = sum(row.failed for row in rows)
        if self.cancelled_:
            self.logger.warning(f"GridSearch cancelled after {len(rows)}/{len(points)} points")
        self.logger.info(
            f"GridSearch | done in {format_time(time.perf_counter() - start)} | "
            f"rows={len(rows)} | failed={n_failed}"
        )
        return rows

    def run_experiment(self, adapter_factory: AdapterFactory, hyperparam_grid: Mapping[str, Sequence[Any]],
                       data, cancel_event: Optional[threading.Event] = None) -> List[ReportRow]:
        """Run the grid on the train and test sides of an ExperimentData."""
        return self.run(adapter_factory, hyperparam_grid, data.train(), data.test(), cancel_event)

    def refit_best(self, adapter_factory: AdapterFactory, row: ReportRow, data: SplitLike) -> TrainedModel:
        """Refit the configuration of a selected row on the given data."""
        if row.failed:
            raise ValueError(f"Cannot refit failed configuration {row.hyperparams}: {row.error}")
        data = self._as_split(data, "refit")
        self.logger.info(f"Refitting best configuration: {row.hyperparams}")
        return adapter_factory().fit(data.features, data.labels, row.hyperparams)

    def _evaluate_point(
        self,
        index: int,
        params: HyperparameterTuple,
        adapter_factory: AdapterFactory,
        train_data: DataSplit,
        test_data: DataSplit,
        label_set: Tuple[Any, ...],
        cancel_event: Optional[threading.Event]
    ) -> Optional[ReportRow]:
        if cancel_event is not None and cancel_event.is_set():
            return None

        adapter = adapter_factory()
        start = time.perf_counter()
        try:
            model = adapter.fit(train_data.features, train_data.labels, params)
        except TrainingError as e:
            self.logger.warning(f"Grid point {index} ({params}) failed to train: {e}")
            return ReportRow(index=index, hyperparams=params, error=str(e),
                             fit_seconds=time.perf_counter() - start)
        fit_seconds = time.perf_counter() - start

        try:
            predicted = self._predict_labels(adapter, model, test_data.features)
            cm = ConfusionMatrix.tabulate(predicted, test_data.labels, label_set)
            train_rate = None
            if self.evaluate_train:
                train_predicted = self._predict_labels(adapter, model, train_data.features)
                train_cm = ConfusionMatrix.tabulate(train_predicted, train_data.labels, label_set)
                train_rate = misclassification_rate(train_cm)
        except ShapeMismatchError as e:
            self.logger.warning(f"Grid point {index} ({params}) could not be scored: {e}")
            return ReportRow(index=index, hyperparams=params, error=str(e), fit_seconds=fit_seconds)

        metrics = self.metrics_calculator.calculate_metrics(cm)
        self.logger.debug(
            f"Grid point {index} ({params}) | rate={metrics['misclassification_rate']:.4f} | "
            f"fit={format_time(fit_seconds)}"
        )
        return ReportRow(
            index=index,
            hyperparams=params,
            misclassification_rate=metrics['misclassification_rate'],
            sensitivity=metrics['sensitivity'],
            specificity=metrics['specificity'],
            confusion_matrix=cm,
            train_misclassification_rate=train_rate,
            fit_seconds=fit_seconds,
        )

    def _predict_labels(self, adapter: ModelAdapter, model: TrainedModel, features: np.ndarray) -> np.ndarray:
        output = adapter.predict(model, features, self.mode)
        if self.mode is PredictionMode.RAW_SCORE:
            # 0/1 from the binner index the model's sorted pair of classes
            return np.asarray(model.classes)[threshold_bin(output, self.cutoff)]
        return output

    def _label_set(self, train_data: DataSplit, test_data: DataSplit) -> Tuple[Any, ...]:
        if self.labels is not None:
            return self.labels
        return tuple(np.union1d(train_data.labels, test_data.labels).tolist())

    @staticmethod
    def _as_split(data: SplitLike, side: str) -> DataSplit:
        if isinstance(data, DataSplit):
            features, labels = data.features, data.labels
        else:
            try:
                features, labels = data
            except (TypeError, ValueError):
                raise DataValidationError(f"{side} data must be a DataSplit or a (features, labels) pair") from None
        DataValidator().validate(features, labels)
        return data if isinstance(data, DataSplit) else DataSplit(features, labels)
