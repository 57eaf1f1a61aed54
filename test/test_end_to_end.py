import numpy as np
import pytest

from modelComparator.core.base import PredictionMode
from modelComparator.core.exceptions import UnsupportedModeError
from modelComparator.core.grid_search_runner import GridSearchRunner
from modelComparator.data.dataset import ExperimentData
from modelComparator.evaluation.reporter import ExperimentReport
from modelComparator.models import (
    GradientBoostedTreeAdapter,
    RandomForestAdapter,
    SupportVectorMachineAdapter,
)
from modelComparator.pipelines.labels import build_multiclass_labels


def test_gradient_boosting_grid_on_separable_blobs(blobs_experiment):
    grid = {'shrinkage': [0.01, 0.1], 'depth': [1, 2]}
    rows = GridSearchRunner().run_experiment(GradientBoostedTreeAdapter, grid, blobs_experiment)
    report = ExperimentReport(rows)

    assert len(report) == 4
    assert not report.failed_rows
    best = report.select_best()
    assert best.misclassification_rate < 0.05


def test_random_forest_grid(blobs_experiment):
    grid = {'n_trees': [10, 30], 'max_features': [1, 2]}
    rows = GridSearchRunner(evaluate_train=True).run_experiment(
        lambda: RandomForestAdapter(random_state=0), grid, blobs_experiment
    )
    assert [row.hyperparams['n_trees'] for row in rows] == [10, 10, 30, 30]
    assert all(row.misclassification_rate < 0.05 for row in rows)


def test_svm_rejects_raw_scores(blobs_experiment):
    with pytest.raises(UnsupportedModeError):
        GridSearchRunner(mode=PredictionMode.RAW_SCORE).run_experiment(
            SupportVectorMachineAdapter, {'cost': [1.0]}, blobs_experiment
        )


def test_multiclass_svm_grid(overlapping):
    X, y = overlapping
    multiclass = build_multiclass_labels(X, y)
    data = ExperimentData.from_arrays(X, multiclass.labels, ExperimentData.random_partition(len(y), 0.3, 0))

    grid = {'kernel': ['linear', 'rbf'], 'cost': [1.0, 10.0]}
    rows = GridSearchRunner(mode=PredictionMode.CLASS_LABEL).run_experiment(
        SupportVectorMachineAdapter, grid, data
    )
    assert len(rows) == 4
    for row in rows:
        assert not row.failed
        assert row.confusion_matrix.labels == (0, 1, 2)
        assert row.confusion_matrix.total == data.test().n_samples
    assert np.isfinite([row.misclassification_rate for row in rows]).all()
