"""
Support vector machine adapter.

Features are standardized before fitting; multiclass problems use the
library's native one-vs-one voting, so only class labels are produced.
"""

from typing import Any, Dict, Tuple

import numpy as np
from sklearn.pipeline import make_pipeline
from sklearn.preprocessing import StandardScaler
from sklearn.svm import SVC

from .base_model import ModelAdapter
from ..core.base import PredictionMode

KERNELS = ('linear', 'poly', 'rbf', 'sigmoid')


class SupportVectorMachineAdapter(ModelAdapter):
    """
    SVC wrapped behind the adapter contract.

    Hyperparameters:
        kernel: one of 'linear', 'poly', 'rbf', 'sigmoid'
        cost: regularization parameter C
        gamma: kernel coefficient ('scale', 'auto' or a positive float)
        degree: polynomial degree (poly kernel only)
        coef0: independent kernel term (poly and sigmoid kernels)
        max_iter: solver iteration limit, -1 for none
    """

    name = "svm"
    supported_modes = frozenset({PredictionMode.CLASS_LABEL})
    param_names = frozenset({'kernel', 'cost', 'gamma', 'degree', 'coef0', 'max_iter', 'random_state'})

    def __init__(self, kernel: str = 'rbf', cost: float = 1.0, gamma: Any = 'scale',
                 degree: int = 3, coef0: float = 0.0, max_iter: int = -1,
                 random_state: int = 42, **kwargs):
        super().__init__(
            kernel=kernel, cost=cost, gamma=gamma, degree=degree, coef0=coef0,
            max_iter=max_iter, random_state=random_state, **kwargs
        )

    def validate_params(self, params: Dict[str, Any]) -> None:
        self._require(params['kernel'] in KERNELS,
                      f"kernel must be one of {KERNELS}, got {params['kernel']!r}")
        self._require(params['cost'] > 0, f"cost must be positive, got {params['cost']!r}")
        gamma = params['gamma']
        if isinstance(gamma, str):
            self._require(gamma in ('scale', 'auto'), f"gamma must be 'scale', 'auto' or positive, got {gamma!r}")
        else:
            self._require(gamma > 0, f"gamma must be positive, got {gamma!r}")
        self._require(self._is_integer(params['degree']) and params['degree'] >= 1,
                      f"degree must be a positive integer, got {params['degree']!r}")

    def _fit(self, X: np.ndarray, y: np.ndarray, classes: Tuple[Any, ...], params: Dict[str, Any]):
        estimator = make_pipeline(
            StandardScaler(),
            SVC(
                C=float(params['cost']),
                kernel=params['kernel'],
                gamma=params['gamma'],
                degree=int(params['degree']),
                coef0=float(params['coef0']),
                max_iter=int(params['max_iter']),
                decision_function_shape='ovo',
                random_state=params['random_state'],
            ),
        )
        estimator.fit(X, y)
        return estimator
