"""
Data validation utilities for modelComparator.

This module checks the invariants of the feature matrix, label vector and
train/test partition at the call boundary.
"""

from typing import Any, Optional

import numpy as np
import pandas as pd

from ..core.exceptions import DataValidationError
from ..utils.logger import get_logger


class DataValidator:
    """Validator for experiment inputs."""

    def __init__(self):
        self.logger = get_logger("DataValidator")

    def validate(
        self,
        X: Any,
        y: Any,
        partition: Optional[Any] = None
    ) -> None:
        """
        Validate input data.

        Args:
            X: Feature matrix
            y: Target labels
            partition: Boolean train mask or train index set (optional)

        Raises:
            DataValidationError: If data validation fails
        """
        self.logger.debug("Validating input data...")

        X = self._validate_feature_matrix(X)
        y = self._validate_labels(y)

        if X.shape[0] != y.shape[0]:
            raise DataValidationError(
                f"Feature matrix length ({X.shape[0]}) doesn't match labels length ({y.shape[0]})"
            )

        if partition is not None:
            self.partition_mask(partition, X.shape[0])

        self.logger.debug("Data validation passed")

    def _validate_feature_matrix(self, X: Any) -> np.ndarray:
        """Validate feature matrix."""
        if isinstance(X, pd.DataFrame):
            X = X.to_numpy()
        try:
            X = np.asarray(X, dtype=float)
        except (TypeError, ValueError) as e:
            raise DataValidationError(f"Feature matrix must be numeric: {e}") from e

        if X.ndim != 2:
            raise DataValidationError(f"Feature matrix must be 2-dimensional, got {X.ndim} dimensions")

        if X.shape[0] == 0:
            raise DataValidationError("No samples in feature matrix")

        if X.shape[1] == 0:
            raise DataValidationError("No features in feature matrix")

        if not np.isfinite(X).all():
            raise DataValidationError("Feature matrix contains NaN or infinite values")

        return X

    def _validate_labels(self, y: Any) -> np.ndarray:
        """Validate target labels."""
        y = np.asarray(y)
        if y.ndim != 1:
            raise DataValidationError(f"Labels must be 1-dimensional, got {y.ndim} dimensions")

        if y.shape[0] == 0:
            raise DataValidationError("No labels provided")

        if not np.issubdtype(y.dtype, np.integer):
            raise DataValidationError(f"Labels must be integer class codes, got dtype {y.dtype}")

        return y

    def partition_mask(self, partition: Any, n_samples: int) -> np.ndarray:
        """
        Normalize a partition into a boolean train mask.

        Args:
            partition: Boolean mask (True = train) or array of train row indices
            n_samples: Number of rows in the feature matrix

        Returns:
            Boolean array of length ``n_samples``
        """
        partition = np.asarray(partition)

        if partition.dtype == bool:
            if partition.shape != (n_samples,):
                raise DataValidationError(
                    f"Partition mask length ({partition.shape[0] if partition.ndim else 0}) "
                    f"doesn't match sample count ({n_samples})"
                )
            mask = partition.copy()
        else:
            if partition.ndim != 1 or not np.issubdtype(partition.dtype, np.integer):
                raise DataValidationError("Partition must be a boolean mask or a 1-D array of row indices")
            if partition.size and (partition.min() < 0 or partition.max() >= n_samples):
                raise DataValidationError(f"Partition indices out of range [0, {n_samples})")
            if len(np.unique(partition)) != partition.size:
                raise DataValidationError("Partition indices contain duplicates")
            mask = np.zeros(n_samples, dtype=bool)
            mask[partition] = True

        if not mask.any():
            raise DataValidationError("Partition leaves the training set empty")
        if mask.all():
            raise DataValidationError("Partition leaves the test set empty")

        return mask
