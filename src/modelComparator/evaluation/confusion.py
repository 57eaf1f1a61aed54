"""
Confusion matrix tabulation for modelComparator.

Counts are laid out with predicted labels on the rows and actual labels on
the columns, over a fixed label set that includes zero cells.
"""

from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
from sklearn.metrics import confusion_matrix as sk_confusion_matrix

from ..core.exceptions import LabelSetError, ShapeMismatchError


@dataclass(frozen=True, eq=False)
class ConfusionMatrix:
    """Square table of (predicted label, actual label) counts."""
    labels: Tuple[Any, ...]
    counts: np.ndarray

    @classmethod
    def tabulate(
        cls,
        predicted: Sequence[Any],
        actual: Sequence[Any],
        labels: Optional[Sequence[Any]] = None
    ) -> 'ConfusionMatrix':
        """
        Tabulate predicted against actual labels.

        Args:
            predicted: Predicted label per sample
            actual: True label per sample
            labels: Fixed label set; defaults to the sorted union of both sequences

        Returns:
            ConfusionMatrix whose cells sum to the number of samples

        Raises:
            ShapeMismatchError: If the sequences differ in length or are empty
            LabelSetError: If a label is not part of ``labels``
        """
        predicted = np.asarray(predicted).ravel()
        actual = np.asarray(actual).ravel()

        if predicted.shape[0] != actual.shape[0]:
            raise ShapeMismatchError(
                f"Predicted length ({predicted.shape[0]}) doesn't match actual length ({actual.shape[0]})"
            )
        if predicted.shape[0] == 0:
            raise ShapeMismatchError("Cannot tabulate empty label sequences")

        if labels is None:
            label_set = np.union1d(predicted, actual)
        else:
            label_set = np.asarray(labels).ravel()
            if len(np.unique(label_set)) != len(label_set):
                raise LabelSetError(f"Label set contains duplicates: {label_set.tolist()}")
            unknown = np.setdiff1d(np.union1d(predicted, actual), label_set)
            if unknown.size:
                raise LabelSetError(
                    f"Labels {unknown.tolist()} are not in the label set {label_set.tolist()}"
                )

        # sklearn puts actual labels on the rows; transpose to predicted x actual
        counts = sk_confusion_matrix(actual, predicted, labels=label_set).T.astype(np.int64)
        counts.setflags(write=False)
        return cls(labels=tuple(label_set.tolist()), counts=counts)

    @property
    def total(self) -> int:
        return int(self.counts.sum())

    @property
    def n_labels(self) -> int:
        return len(self.labels)

    def index_of(self, label: Any) -> int:
        try:
            return self.labels.index(label)
        except ValueError:
            raise LabelSetError(f"Label {label!r} is not in the label set {list(self.labels)}") from None

    def diagonal_sum(self) -> int:
        return int(np.trace(self.counts))

    def actual_count(self, label: Any) -> int:
        """Number of samples whose true label is ``label`` (column sum)."""
        return int(self.counts[:, self.index_of(label)].sum())

    def predicted_count(self, label: Any) -> int:
        """Number of samples predicted as ``label`` (row sum)."""
        return int(self.counts[self.index_of(label), :].sum())

    def cell(self, predicted: Any, actual: Any) -> int:
        return int(self.counts[self.index_of(predicted), self.index_of(actual)])

    def to_frame(self) -> pd.DataFrame:
        """Tabular view with predicted labels as rows and actual labels as columns."""
        return pd.DataFrame(
            self.counts,
            index=pd.Index(self.labels, name='predicted'),
            columns=pd.Index(self.labels, name='actual'),
        )

    def to_list(self):
        return self.counts.tolist()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfusionMatrix):
            return NotImplemented
        return self.labels == other.labels and np.array_equal(self.counts, other.counts)

    def __hash__(self) -> int:
        return hash((self.labels, self.counts.tobytes()))
