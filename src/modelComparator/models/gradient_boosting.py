"""
Gradient boosted tree adapter built on XGBoost.

Hyperparameters:
    shrinkage: learning rate applied to each tree
    depth: maximum tree depth (interaction depth), must be >= 1
    n_trees: number of boosting iterations
    subsample: row sampling fraction per tree
    min_child_weight: minimum hessian sum per leaf
    random_state: random seed
    n_jobs: threads used by XGBoost
"""

from typing import Any, Dict, Tuple

import numpy as np
from xgboost import XGBClassifier
from xgboost.core import XGBoostError

from .base_model import ModelAdapter
from ..core.base import PredictionMode, TrainedModel


class GradientBoostedTreeAdapter(ModelAdapter):
    """XGBoost classifier behind the adapter contract."""

    name = "xgboost"
    supported_modes = frozenset({PredictionMode.RAW_SCORE, PredictionMode.CLASS_LABEL})
    param_names = frozenset({
        'shrinkage', 'depth', 'n_trees', 'subsample', 'min_child_weight', 'random_state', 'n_jobs'
    })
    library_errors = ModelAdapter.library_errors + (XGBoostError,)

    def __init__(self, shrinkage: float = 0.1, depth: int = 1, n_trees: int = 100,
                 subsample: float = 1.0, min_child_weight: float = 1.0,
                 random_state: int = 42, n_jobs: int = 1, **kwargs):
        super().__init__(
            shrinkage=shrinkage, depth=depth, n_trees=n_trees, subsample=subsample,
            min_child_weight=min_child_weight, random_state=random_state, n_jobs=n_jobs,
            **kwargs
        )

    def validate_params(self, params: Dict[str, Any]) -> None:
        self._require(self._is_integer(params['depth']) and params['depth'] >= 1,
                      f"depth must be a positive integer, got {params['depth']!r}")
        self._require(self._is_integer(params['n_trees']) and params['n_trees'] >= 1,
                      f"n_trees must be a positive integer, got {params['n_trees']!r}")
        self._require(0.0 < params['shrinkage'] <= 1.0,
                      f"shrinkage must lie in (0, 1], got {params['shrinkage']!r}")
        self._require(0.0 < params['subsample'] <= 1.0,
                      f"subsample must lie in (0, 1], got {params['subsample']!r}")
        self._require(params['min_child_weight'] >= 0,
                      f"min_child_weight must be non-negative, got {params['min_child_weight']!r}")

    def _fit(self, X: np.ndarray, y: np.ndarray, classes: Tuple[Any, ...], params: Dict[str, Any]) -> XGBClassifier:
        # XGBoost expects labels encoded as 0..k-1
        y_encoded = np.searchsorted(np.asarray(classes), y)
        objective = 'binary:logistic' if len(classes) == 2 else 'multi:softprob'

        estimator = XGBClassifier(
            n_estimators=int(params['n_trees']),
            max_depth=int(params['depth']),
            learning_rate=float(params['shrinkage']),
            subsample=float(params['subsample']),
            min_child_weight=float(params['min_child_weight']),
            random_state=params['random_state'],
            n_jobs=params['n_jobs'],
            objective=objective,
            tree_method='hist',
        )
        estimator.fit(X, y_encoded)
        return estimator

    def _iteration_range(self, model: TrainedModel) -> Tuple[int, int]:
        # Prediction always uses exactly the trees trained for this grid point
        return (0, int(model.estimator.get_params()['n_estimators']))

    def _predict_scores(self, model: TrainedModel, X: np.ndarray) -> np.ndarray:
        proba = model.estimator.predict_proba(X, iteration_range=self._iteration_range(model))
        return proba[:, 1]

    def _predict_labels(self, model: TrainedModel, X: np.ndarray) -> np.ndarray:
        encoded = model.estimator.predict(X, iteration_range=self._iteration_range(model))
        return np.asarray(model.classes)[np.asarray(encoded, dtype=np.int64)]
