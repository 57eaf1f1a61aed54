"""
Base model adapter for modelComparator.

Every trainable classifier is wrapped behind the same ``fit``/``predict``
contract so that the grid search runner stays agnostic to the algorithm
family under evaluation.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, FrozenSet, Mapping, Tuple, Union
import warnings

import numpy as np
import pandas as pd
from sklearn.exceptions import ConvergenceWarning
from sklearn.utils.validation import check_array

from ..core.base import HyperparameterTuple, PredictionMode, TrainedModel
from ..core.exceptions import TrainingError, UnsupportedModeError
from ..utils.logger import get_logger

Features = Union[np.ndarray, pd.DataFrame]
Hyperparams = Union[HyperparameterTuple, Mapping[str, Any]]


class ModelAdapter(ABC):
    """Uniform capability wrapper around a trainable classifier."""

    name: str = "base"
    supported_modes: FrozenSet[PredictionMode] = frozenset()
    # Hyperparameter names accepted by ``fit``; anything else is rejected
    param_names: FrozenSet[str] = frozenset()
    # Library exceptions translated into TrainingError
    library_errors: Tuple[type, ...] = (ValueError, TypeError, ArithmeticError)

    def __init__(self, strict_convergence: bool = False, **defaults):
        """
        Args:
            strict_convergence: Treat convergence warnings as training failures
            **defaults: Hyperparameter values used when a grid point omits them
        """
        self.strict_convergence = strict_convergence
        self.defaults = dict(defaults)
        self.logger = get_logger(self.__class__.__name__)

    def supports(self, mode: PredictionMode) -> bool:
        return mode in self.supported_modes

    def check_mode(self, mode: PredictionMode) -> None:
        if not self.supports(mode):
            supported = sorted(m.value for m in self.supported_modes)
            raise UnsupportedModeError(
                f"{self.name} does not support {mode.value} predictions (supported: {supported})"
            )

    def fit(self, features: Features, labels: Any, hyperparams: Hyperparams) -> TrainedModel:
        """
        Train the underlying model for one hyperparameter tuple.

        Args:
            features: Training feature matrix
            labels: Training labels
            hyperparams: Values for this grid point

        Returns:
            TrainedModel wrapping the fitted estimator

        Raises:
            TrainingError: On malformed input, invalid hyperparameters or a
                failure inside the underlying library
        """
        if not isinstance(hyperparams, HyperparameterTuple):
            hyperparams = HyperparameterTuple.from_mapping(hyperparams)

        params = {**self.defaults, **hyperparams.as_dict()}
        unknown = set(params) - set(self.param_names)
        if unknown:
            raise TrainingError(f"{self.name} got unknown hyperparameters: {sorted(unknown)}")
        try:
            self.validate_params(params)
        except TypeError as e:
            raise TrainingError(f"{self.name} got a hyperparameter of the wrong type: {e}") from e

        try:
            X, y = self._check_inputs(features, labels)
        except ValueError as e:
            raise TrainingError(f"{self.name} received malformed training data: {e}") from e

        classes = tuple(np.unique(y).tolist())
        if len(classes) < 2:
            raise TrainingError(f"{self.name} needs at least two classes, got {list(classes)}")

        try:
            with warnings.catch_warnings():
                if self.strict_convergence:
                    warnings.simplefilter("error", ConvergenceWarning)
                estimator = self._fit(X, y, classes, params)
        except ConvergenceWarning as e:
            raise TrainingError(f"{self.name} did not converge for {hyperparams}: {e}") from e
        except self.library_errors as e:
            raise TrainingError(f"{self.name} failed to fit for {hyperparams}: {e}") from e

        return TrainedModel(
            estimator=estimator,
            hyperparams=hyperparams,
            classes=classes,
            adapter_name=self.name,
        )

    def predict(self, model: TrainedModel, features: Features, mode: PredictionMode) -> np.ndarray:
        """
        Predict with a trained model.

        Args:
            model: Result of ``fit``
            features: Feature matrix to score
            mode: RAW_SCORE for positive-class probabilities, CLASS_LABEL for labels

        Returns:
            1-D array of scores or labels, one per row
        """
        self.check_mode(mode)
        X = check_array(features, dtype=np.float64, copy=True)
        if mode is PredictionMode.RAW_SCORE:
            if not model.is_binary:
                raise UnsupportedModeError(
                    f"{self.name} raw scores require a binary model, got classes {list(model.classes)}"
                )
            return np.asarray(self._predict_scores(model, X), dtype=float)
        return np.asarray(self._predict_labels(model, X))

    def _check_inputs(self, features: Features, labels: Any) -> Tuple[np.ndarray, np.ndarray]:
        # check_array copies so that libraries never write into caller data
        X = check_array(features, dtype=np.float64, copy=True)
        y = np.array(labels, copy=True).ravel()
        if X.shape[0] != y.shape[0]:
            raise ValueError(f"Feature rows ({X.shape[0]}) don't match label count ({y.shape[0]})")
        return X, y

    @staticmethod
    def _require(condition: bool, message: str) -> None:
        if not condition:
            raise TrainingError(message)

    @staticmethod
    def _is_integer(value: Any) -> bool:
        # bool is an int subclass but never a valid count
        return isinstance(value, (int, np.integer)) and not isinstance(value, bool)

    @abstractmethod
    def validate_params(self, params: Dict[str, Any]) -> None:
        """Raise TrainingError for an invalid hyperparameter combination."""

    @abstractmethod
    def _fit(self, X: np.ndarray, y: np.ndarray, classes: Tuple[Any, ...], params: Dict[str, Any]) -> Any:
        """Fit and return the underlying estimator."""

    def _predict_scores(self, model: TrainedModel, X: np.ndarray) -> np.ndarray:
        """Probability of the larger of the two class labels."""
        proba = model.estimator.predict_proba(X)
        return proba[:, 1]

    def _predict_labels(self, model: TrainedModel, X: np.ndarray) -> np.ndarray:
        return model.estimator.predict(X)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.defaults})"
