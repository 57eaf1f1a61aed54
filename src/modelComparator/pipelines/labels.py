"""
Label construction stages.

Each stage returns a new, separately named label vector; nothing is
reassigned in place.
"""

from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np

from ..core.base import PredictionMode
from ..evaluation.binner import QuantileBinner, threshold_bin
from ..models.logistic_regression import LogisticRegressionAdapter
from ..utils.logger import get_logger

logger = get_logger("LabelConstruction")


@dataclass(frozen=True, eq=False)
class MulticlassLabels:
    """Result of deriving k-class labels from probability quantiles."""
    labels: np.ndarray
    scores: np.ndarray
    cutpoints: np.ndarray

    @property
    def n_classes(self) -> int:
        return int(self.cutpoints.size + 1)

    def class_counts(self) -> np.ndarray:
        return np.bincount(self.labels, minlength=self.n_classes)


def build_binary_labels(scores: Any, cutoff: float = 0.5) -> np.ndarray:
    """Binary labels from probability scores, ``score >= cutoff`` being positive."""
    binary_labels = threshold_bin(scores, cutoff)
    binary_labels.setflags(write=False)
    return binary_labels


def build_multiclass_labels(
    features: Any,
    binary_labels: Any,
    quantiles: Sequence[float] = (0.33, 0.66),
    random_state: int = 42
) -> MulticlassLabels:
    """
    Derive approximately balanced k-class labels from logistic probabilities.

    A logistic regression of the binary labels is fitted on every sample
    (train and test together) and the quantile cutpoints are computed over
    the same full set, before any partitioning. This reproduces the
    reference workflow but lets held-out samples shape the label
    construction, i.e. it leaks test-set information.

    Args:
        features: Full feature matrix
        binary_labels: Full binary label vector
        quantiles: k-1 strictly increasing target quantiles
        random_state: Seed for the logistic regression

    Returns:
        MulticlassLabels holding labels, scores and cutpoints
    """
    logger.warning(
        "Multiclass cutpoints are estimated on the full sample set (train + test); "
        "held-out samples influence label construction"
    )
    adapter = LogisticRegressionAdapter(random_state=random_state)
    model = adapter.fit(features, binary_labels, {})
    scores = adapter.predict(model, features, PredictionMode.RAW_SCORE)

    binner = QuantileBinner(quantiles)
    multiclass_labels = binner.fit_transform(scores)

    for array in (multiclass_labels, scores, binner.cutpoints_):
        array.setflags(write=False)

    result = MulticlassLabels(labels=multiclass_labels, scores=scores, cutpoints=binner.cutpoints_)
    logger.info(
        f"Multiclass labels: cutpoints={np.round(result.cutpoints, 4).tolist()} | "
        f"class counts={result.class_counts().tolist()}"
    )
    return result
