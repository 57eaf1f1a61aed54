"""
Evaluation modules for modelComparator.

This module contains confusion matrices, metrics, score binning and reporting.
"""

from .confusion import ConfusionMatrix
from .metrics import MetricsCalculator, misclassification_rate, accuracy, sensitivity, specificity
from .binner import threshold_bin, QuantileBinner
from .reporter import ExperimentReport, select_best

__all__ = [
    "ConfusionMatrix",
    "MetricsCalculator",
    "misclassification_rate",
    "accuracy",
    "sensitivity",
    "specificity",
    "threshold_bin",
    "QuantileBinner",
    "ExperimentReport",
    "select_best",
]
