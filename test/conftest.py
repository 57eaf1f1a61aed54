import logging

import numpy as np
import pytest

from modelComparator.core.base import PredictionMode
from modelComparator.data.dataset import ExperimentData
from modelComparator.models.base_model import ModelAdapter
from modelComparator.utils.logger import setup_logging

from generate_test_data import make_separable_blobs, make_overlapping_data, train_mask


class StubEstimator:
    """Logistic curve on the first feature: p = 1 / (1 + exp(-alpha * (x0 - beta)))."""

    def __init__(self, alpha, beta, classes):
        self.alpha = alpha
        self.beta = beta
        self.classes = np.asarray(classes)

    def predict_proba(self, X):
        p = 1.0 / (1.0 + np.exp(-self.alpha * (X[:, 0] - self.beta)))
        return np.column_stack([1.0 - p, p])

    def predict(self, X):
        return self.classes[(self.predict_proba(X)[:, 1] >= 0.5).astype(int)]


class StubAdapter(ModelAdapter):
    """Cheap adapter for exercising the runner; fails on the ``fail_on`` grid point."""

    name = "stub"
    supported_modes = frozenset({PredictionMode.RAW_SCORE, PredictionMode.CLASS_LABEL})
    param_names = frozenset({'alpha', 'beta'})

    def __init__(self, fail_on=None, on_fit=None, **kwargs):
        super().__init__(alpha=1.0, beta=0.0, **kwargs)
        self.fail_on = fail_on
        self.on_fit = on_fit

    def validate_params(self, params):
        self._require(params['alpha'] > 0, f"alpha must be positive, got {params['alpha']}")

    def _fit(self, X, y, classes, params):
        if self.on_fit is not None:
            self.on_fit(params)
        if self.fail_on is not None and (params['alpha'], params['beta']) == self.fail_on:
            raise ValueError("simulated divergence")
        return StubEstimator(params['alpha'], params['beta'], classes)


class LabelOnlyStubAdapter(StubAdapter):
    name = "label_stub"
    supported_modes = frozenset({PredictionMode.CLASS_LABEL})


@pytest.fixture
def blobs():
    return make_separable_blobs(n_samples=100, n_features=2)


@pytest.fixture
def blobs_experiment(blobs):
    features, labels = blobs
    return ExperimentData.from_arrays(features, labels, train_mask(len(labels), 70))


@pytest.fixture
def overlapping():
    return make_overlapping_data()


@pytest.fixture
def stub_adapter_cls():
    return StubAdapter


@pytest.fixture
def label_only_adapter_cls():
    return LabelOnlyStubAdapter


@pytest.fixture(autouse=True)
def reset_package_logging():
    yield
    # setup_logging changes the shared package logger; restore the default level
    setup_logging(logging.INFO)
