"""
Experiment data container for modelComparator.

Holds the feature matrix, label vector and train/test partition of one
experiment, read-only once constructed.
"""

from dataclasses import dataclass
from typing import Any, Optional

import numpy as np
import pandas as pd
from sklearn.model_selection import train_test_split

from .validator import DataValidator
from ..core.base import DataSplit
from ..utils.logger import get_logger


@dataclass(frozen=True, eq=False)
class ExperimentData:
    """Features, labels and train mask for one experiment."""
    features: np.ndarray
    labels: np.ndarray
    train_mask: np.ndarray

    @classmethod
    def from_arrays(cls, features: Any, labels: Any, partition: Any) -> 'ExperimentData':
        """
        Validate inputs and build a read-only experiment container.

        Args:
            features: Feature matrix (array or DataFrame)
            labels: Integer class labels, one per row
            partition: Boolean train mask or train row indices

        Returns:
            ExperimentData
        """
        validator = DataValidator()
        validator.validate(features, labels, partition)

        if isinstance(features, pd.DataFrame):
            features = features.to_numpy()
        features = np.array(features, dtype=float, copy=True)
        labels = np.array(labels, copy=True)
        mask = validator.partition_mask(partition, features.shape[0])

        for array in (features, labels, mask):
            array.setflags(write=False)

        data = cls(features=features, labels=labels, train_mask=mask)
        get_logger("ExperimentData").info(
            f"Experiment data: {data.n_samples} samples x {data.n_features} features, "
            f"{int(mask.sum())} train / {int((~mask).sum())} test, classes={data.classes.tolist()}"
        )
        return data

    @staticmethod
    def random_partition(
        n_samples: int,
        test_fraction: float = 0.3,
        random_state: Optional[int] = 42,
        stratify: Optional[Any] = None
    ) -> np.ndarray:
        """Draw a random boolean train mask holding out ``test_fraction`` of the rows."""
        indices = np.arange(n_samples)
        train_idx, _ = train_test_split(
            indices, test_size=test_fraction, random_state=random_state, stratify=stratify
        )
        mask = np.zeros(n_samples, dtype=bool)
        mask[train_idx] = True
        return mask

    @property
    def n_samples(self) -> int:
        return int(self.features.shape[0])

    @property
    def n_features(self) -> int:
        return int(self.features.shape[1])

    @property
    def classes(self) -> np.ndarray:
        return np.unique(self.labels)

    def train(self) -> DataSplit:
        return DataSplit(self.features[self.train_mask], self.labels[self.train_mask])

    def test(self) -> DataSplit:
        return DataSplit(self.features[~self.train_mask], self.labels[~self.train_mask])

    def with_labels(self, labels: Any) -> 'ExperimentData':
        """Same features and partition with a different label vector."""
        return ExperimentData.from_arrays(self.features, labels, self.train_mask)
