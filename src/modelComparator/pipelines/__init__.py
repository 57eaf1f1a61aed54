"""
Pipelines for modelComparator.

This module contains label construction stages and the compare pipeline.
"""

from .labels import MulticlassLabels, build_binary_labels, build_multiclass_labels
from .compare import handle_compare, load_experiment_data

__all__ = [
    "MulticlassLabels",
    "build_binary_labels",
    "build_multiclass_labels",
    "handle_compare",
    "load_experiment_data",
]
