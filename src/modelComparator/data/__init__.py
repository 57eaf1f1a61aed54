"""
Data handling modules for modelComparator.

This module contains the experiment data container and input validation.
"""

from .dataset import ExperimentData
from .validator import DataValidator

__all__ = [
    "ExperimentData",
    "DataValidator",
]
