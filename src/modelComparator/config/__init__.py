"""
Configuration modules for modelComparator.

This module contains model-specific default settings and grids.
"""

from .model_configs import MODEL_CONFIGS, HYPERPARAMETER_GRIDS

__all__ = [
    "MODEL_CONFIGS",
    "HYPERPARAMETER_GRIDS",
]
