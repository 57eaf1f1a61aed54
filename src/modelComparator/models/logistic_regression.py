"""
Logistic regression adapter (scikit-learn wrapper).

Used both as a comparison baseline and to estimate the probabilities from
which multiclass labels are derived.
"""

from typing import Any, Dict, Tuple

import numpy as np
from sklearn.linear_model import LogisticRegression

from .base_model import ModelAdapter
from ..core.base import PredictionMode


class LogisticRegressionAdapter(ModelAdapter):
    """Thin wrapper around LogisticRegression exposing probabilities and labels."""

    name = "logistic"
    supported_modes = frozenset({PredictionMode.RAW_SCORE, PredictionMode.CLASS_LABEL})
    param_names = frozenset({'C', 'max_iter', 'random_state'})

    def __init__(self, C: float = 1.0, max_iter: int = 1000, random_state: int = 42, **kwargs):
        super().__init__(C=C, max_iter=max_iter, random_state=random_state, **kwargs)

    def validate_params(self, params: Dict[str, Any]) -> None:
        self._require(params['C'] > 0, f"C must be positive, got {params['C']!r}")
        self._require(self._is_integer(params['max_iter']) and params['max_iter'] >= 1,
                      f"max_iter must be a positive integer, got {params['max_iter']!r}")

    def _fit(self, X: np.ndarray, y: np.ndarray, classes: Tuple[Any, ...], params: Dict[str, Any]) -> LogisticRegression:
        estimator = LogisticRegression(
            C=float(params['C']),
            max_iter=int(params['max_iter']),
            random_state=params['random_state'],
        )
        estimator.fit(X, y)
        return estimator
