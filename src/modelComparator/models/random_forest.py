"""
Random Forest adapter for modelComparator.

This module wraps scikit-learn's RandomForestClassifier.
"""

from typing import Any, Dict, Tuple

import numpy as np
from sklearn.ensemble import RandomForestClassifier

from .base_model import ModelAdapter
from ..core.base import PredictionMode


class RandomForestAdapter(ModelAdapter):
    """Random Forest adapter; ``max_features`` is the number of variables tried per split."""

    name = "randomforest"
    supported_modes = frozenset({PredictionMode.RAW_SCORE, PredictionMode.CLASS_LABEL})
    param_names = frozenset({
        'n_trees', 'max_features', 'depth', 'min_samples_leaf', 'random_state', 'n_jobs'
    })

    def __init__(self, n_trees: int = 500, max_features: Any = 'sqrt', depth: Any = None,
                 min_samples_leaf: int = 1, random_state: int = 42, n_jobs: int = 1, **kwargs):
        super().__init__(
            n_trees=n_trees, max_features=max_features, depth=depth,
            min_samples_leaf=min_samples_leaf, random_state=random_state, n_jobs=n_jobs,
            **kwargs
        )

    def validate_params(self, params: Dict[str, Any]) -> None:
        self._require(self._is_integer(params['n_trees']) and params['n_trees'] >= 1,
                      f"n_trees must be a positive integer, got {params['n_trees']!r}")
        depth = params['depth']
        self._require(depth is None or (self._is_integer(depth) and depth >= 1),
                      f"depth must be None or a positive integer, got {depth!r}")
        self._require(params['min_samples_leaf'] >= 1,
                      f"min_samples_leaf must be >= 1, got {params['min_samples_leaf']!r}")

        max_features = params['max_features']
        if isinstance(max_features, str):
            self._require(max_features in ('sqrt', 'log2'),
                          f"max_features must be 'sqrt', 'log2', a count or a fraction, got {max_features!r}")
        elif self._is_integer(max_features):
            self._require(max_features >= 1, f"max_features must be >= 1, got {max_features!r}")
        elif isinstance(max_features, float):
            self._require(0.0 < max_features <= 1.0,
                          f"max_features fraction must lie in (0, 1], got {max_features!r}")
        else:
            self._require(max_features is None, f"Unsupported max_features: {max_features!r}")

    def _fit(self, X: np.ndarray, y: np.ndarray, classes: Tuple[Any, ...], params: Dict[str, Any]) -> RandomForestClassifier:
        max_features = params['max_features']
        if self._is_integer(max_features) and max_features > X.shape[1]:
            raise ValueError(f"max_features={max_features} exceeds the {X.shape[1]} available features")

        estimator = RandomForestClassifier(
            n_estimators=int(params['n_trees']),
            max_features=max_features,
            max_depth=params['depth'],
            min_samples_leaf=params['min_samples_leaf'],
            random_state=params['random_state'],
            n_jobs=params['n_jobs'],
        )
        estimator.fit(X, y)
        return estimator
