"""
Evaluation metrics for modelComparator.

The module-level functions are pure and raise on degenerate class
distributions; ``MetricsCalculator`` records those cases as NaN instead.
"""

from typing import Any, Dict, Optional
import math

from .confusion import ConfusionMatrix
from ..core.exceptions import EmptyMatrixError, UndefinedMetricError
from ..utils.logger import get_logger


def misclassification_rate(cm: ConfusionMatrix) -> float:
    """Fraction of samples whose predicted label differs from the true label."""
    total = cm.total
    if total == 0:
        raise EmptyMatrixError("Confusion matrix contains no samples")
    return 1.0 - cm.diagonal_sum() / total


def accuracy(cm: ConfusionMatrix) -> float:
    """Fraction of samples predicted correctly."""
    return 1.0 - misclassification_rate(cm)


def sensitivity(cm: ConfusionMatrix, positive_label: Any = 1) -> float:
    """True-positive rate: correctly predicted positives over actual positives."""
    actual_positives = cm.actual_count(positive_label)
    if actual_positives == 0:
        raise UndefinedMetricError(
            f"Sensitivity undefined: no actual members of class {positive_label!r}"
        )
    return cm.cell(positive_label, positive_label) / actual_positives


def specificity(cm: ConfusionMatrix, positive_label: Any = 1) -> float:
    """True-negative rate, treating every label other than ``positive_label`` as negative."""
    pos = cm.index_of(positive_label)
    actual_negatives = cm.total - cm.actual_count(positive_label)
    if actual_negatives == 0:
        raise UndefinedMetricError(
            f"Specificity undefined: no actual members outside class {positive_label!r}"
        )
    counts = cm.counts
    # negatives predicted as any negative label
    true_negatives = counts.sum() - counts[pos, :].sum() - counts[:, pos].sum() + counts[pos, pos]
    return int(true_negatives) / actual_negatives


class MetricsCalculator:
    """Calculator that gathers all metrics of a confusion matrix into a dict."""

    def __init__(self, positive_label: Any = 1):
        self.positive_label = positive_label
        self.logger = get_logger("MetricsCalculator")

    def calculate_metrics(
        self,
        cm: ConfusionMatrix,
        positive_label: Optional[Any] = None
    ) -> Dict[str, float]:
        """
        Calculate misclassification rate, accuracy, sensitivity and specificity.

        Args:
            cm: Confusion matrix to score
            positive_label: Label treated as positive (defaults to the calculator's)

        Returns:
            Dictionary of metrics; undefined metrics are NaN
        """
        if positive_label is None:
            positive_label = self.positive_label

        metrics = {}
        try:
            metrics['misclassification_rate'] = misclassification_rate(cm)
            metrics['accuracy'] = 1.0 - metrics['misclassification_rate']
        except EmptyMatrixError as e:
            self.logger.warning(f"Rate metrics undefined: {e}")
            metrics['misclassification_rate'] = math.nan
            metrics['accuracy'] = math.nan

        if positive_label not in cm.labels:
            self.logger.debug(f"Positive label {positive_label!r} not in label set; skipping class metrics")
            metrics['sensitivity'] = math.nan
            metrics['specificity'] = math.nan
            return metrics

        for name, func in (('sensitivity', sensitivity), ('specificity', specificity)):
            try:
                metrics[name] = func(cm, positive_label)
            except UndefinedMetricError as e:
                self.logger.warning(str(e))
                metrics[name] = math.nan

        return metrics
