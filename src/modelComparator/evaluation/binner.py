"""
Conversion of probability scores into discrete class labels.

Two modes are provided:

- threshold mode (binary): a single cutoff, scores equal to the cutoff are
  assigned the positive label;
- quantile mode (k classes): k-1 cutpoints computed as empirical quantiles of
  the score distribution, using linear interpolation between order
  statistics (numpy ``method="linear"``, Hyndman & Fan type 7).
"""

from typing import Optional, Sequence, Union

import numpy as np

from ..utils.logger import get_logger

ArrayLike = Union[Sequence[float], np.ndarray]


def _as_scores(scores: ArrayLike) -> np.ndarray:
    scores = np.asarray(scores, dtype=float).ravel()
    if np.isnan(scores).any():
        raise ValueError("Scores contain NaN values")
    return scores


def threshold_bin(scores: ArrayLike, cutoff: float = 0.5) -> np.ndarray:
    """
    Binarize probability scores with a single cutoff.

    Args:
        scores: Positive-class probabilities
        cutoff: Decision threshold; ``score >= cutoff`` maps to label 1

    Returns:
        Integer array of 0/1 labels
    """
    scores = _as_scores(scores)
    return (scores >= cutoff).astype(np.int64)


class QuantileBinner:
    """
    Discretize scores into ``len(quantiles) + 1`` approximately balanced classes.

    Label 0 covers ``[0, t1]``, label m covers ``(t_m, t_{m+1}]`` and the last
    label covers ``(t_{k-1}, 1]``.
    """

    def __init__(self, quantiles: Sequence[float] = (0.33, 0.66)):
        quantiles = np.asarray(quantiles, dtype=float).ravel()
        if quantiles.size == 0:
            raise ValueError("At least one target quantile is required")
        if np.any(quantiles <= 0.0) or np.any(quantiles >= 1.0):
            raise ValueError(f"Target quantiles must lie strictly between 0 and 1, got {quantiles.tolist()}")
        if np.any(np.diff(quantiles) <= 0):
            raise ValueError(f"Target quantiles must be strictly increasing, got {quantiles.tolist()}")

        self.quantiles = quantiles
        self.cutpoints_: Optional[np.ndarray] = None
        self.logger = get_logger("QuantileBinner")

    @property
    def n_classes(self) -> int:
        return int(self.quantiles.size + 1)

    def fit(self, scores: ArrayLike) -> 'QuantileBinner':
        """
        Compute cutpoints from the score distribution.

        Args:
            scores: Probability scores in [0, 1] over the full sample set

        Returns:
            self
        """
        scores = _as_scores(scores)
        if scores.size == 0:
            raise ValueError("Cannot compute quantile cutpoints from an empty score set")
        if scores.min() < 0.0 or scores.max() > 1.0:
            raise ValueError("Scores must be probabilities in [0, 1]")

        self.cutpoints_ = np.quantile(scores, self.quantiles, method="linear")
        if np.any(np.diff(self.cutpoints_) <= 0):
            self.logger.warning(
                f"Cutpoints are not strictly increasing ({self.cutpoints_.tolist()}); "
                "some classes will be empty"
            )
        self.logger.debug(f"Quantile cutpoints: {self.cutpoints_.tolist()}")
        return self

    def transform(self, scores: ArrayLike) -> np.ndarray:
        """Assign each score the label of the interval it falls in."""
        if self.cutpoints_ is None:
            raise ValueError("QuantileBinner must be fitted before transform")
        scores = _as_scores(scores)
        # number of cutpoints strictly below each score
        return np.searchsorted(self.cutpoints_, scores, side='left').astype(np.int64)

    def fit_transform(self, scores: ArrayLike) -> np.ndarray:
        return self.fit(scores).transform(scores)
