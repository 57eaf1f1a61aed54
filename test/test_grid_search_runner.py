import math
import threading
from functools import partial

import numpy as np
import pytest

from modelComparator.core.base import DataSplit, HyperparameterTuple, PredictionMode
from modelComparator.core.exceptions import DataValidationError, UnsupportedModeError
from modelComparator.core.grid_search_runner import GridSearchRunner, expand_grid

GRID_3x4 = {'alpha': [0.5, 1.0, 2.0], 'beta': [-0.5, 0.0, 0.5, 1.0]}


class TestExpandGrid:

    def test_first_parameter_varies_slowest(self):
        points = expand_grid({'a': [1, 2], 'b': ['x', 'y', 'z']})
        assert [p.as_dict() for p in points] == [
            {'a': 1, 'b': 'x'}, {'a': 1, 'b': 'y'}, {'a': 1, 'b': 'z'},
            {'a': 2, 'b': 'x'}, {'a': 2, 'b': 'y'}, {'a': 2, 'b': 'z'},
        ]
        assert points[0].names() == ('a', 'b')

    def test_repeated_enumeration_is_identical(self):
        assert expand_grid(GRID_3x4) == expand_grid(GRID_3x4)

    def test_empty_candidate_list(self):
        with pytest.raises(ValueError, match="No candidate values"):
            expand_grid({'a': [1], 'b': []})

    def test_scalar_candidates_rejected(self):
        with pytest.raises(ValueError):
            expand_grid({'a': 'abc'})

    def test_hyperparameter_tuple_lookup(self):
        point = expand_grid({'depth': [3], 'shrinkage': [0.1]})[0]
        assert point['depth'] == 3
        assert point.get('missing', 'dflt') == 'dflt'
        assert str(point) == "depth=3, shrinkage=0.1"
        with pytest.raises(KeyError):
            point['missing']


class TestGridSearchRunner:

    def test_one_row_per_grid_point_in_order(self, blobs_experiment, stub_adapter_cls):
        rows = GridSearchRunner().run_experiment(stub_adapter_cls, GRID_3x4, blobs_experiment)
        assert len(rows) == 12
        assert [row.index for row in rows] == list(range(12))
        assert [row.hyperparams for row in rows] == expand_grid(GRID_3x4)
        n_test = blobs_experiment.test().n_samples
        assert all(row.confusion_matrix.total == n_test for row in rows)

    def test_failing_point_leaves_others_intact(self, blobs_experiment, stub_adapter_cls):
        factory = partial(stub_adapter_cls, fail_on=(1.0, 0.5))
        rows = GridSearchRunner().run_experiment(factory, GRID_3x4, blobs_experiment)
        baseline = GridSearchRunner().run_experiment(stub_adapter_cls, GRID_3x4, blobs_experiment)

        assert len(rows) == 12
        failed = [row for row in rows if row.failed]
        assert [row.index for row in failed] == [6]
        assert "simulated divergence" in failed[0].error
        assert math.isnan(failed[0].misclassification_rate)
        assert failed[0].confusion_matrix is None

        for row, expected in zip(rows, baseline):
            if row.index != 6:
                assert row == expected

    def test_raw_scores_binned_at_cutoff(self, blobs_experiment, stub_adapter_cls):
        # cutoff 1.0 only accepts p == 1, so every test sample is predicted negative
        rows = GridSearchRunner(cutoff=1.0).run_experiment(
            stub_adapter_cls, {'alpha': [1.0]}, blobs_experiment
        )
        cm = rows[0].confusion_matrix
        assert cm.predicted_count(1) == 0
        assert rows[0].sensitivity == 0.0
        assert rows[0].specificity == 1.0

    def test_class_label_mode(self, blobs_experiment, stub_adapter_cls):
        rows = GridSearchRunner(mode=PredictionMode.CLASS_LABEL).run_experiment(
            stub_adapter_cls, {'alpha': [4.0]}, blobs_experiment
        )
        assert rows[0].misclassification_rate == 0.0

    def test_unsupported_mode_aborts_run(self, blobs_experiment, label_only_adapter_cls):
        with pytest.raises(UnsupportedModeError):
            GridSearchRunner(mode=PredictionMode.RAW_SCORE).run_experiment(
                label_only_adapter_cls, {'alpha': [1.0]}, blobs_experiment
            )

    def test_raw_score_mode_needs_binary_labels(self, blobs, stub_adapter_cls):
        X, y = blobs
        y3 = y.copy()
        y3[:10] = 2
        with pytest.raises(UnsupportedModeError):
            GridSearchRunner().run(stub_adapter_cls, {'alpha': [1.0]}, (X[:70], y3[:70]), (X[70:], y3[70:]))

    def test_feature_count_mismatch(self, blobs, stub_adapter_cls):
        X, y = blobs
        with pytest.raises(DataValidationError):
            GridSearchRunner().run(stub_adapter_cls, {'alpha': [1.0]}, (X[:70], y[:70]), (X[70:, :1], y[70:]))

    def test_parallel_run_matches_sequential(self, blobs_experiment, stub_adapter_cls):
        sequential = GridSearchRunner(n_jobs=1).run_experiment(stub_adapter_cls, GRID_3x4, blobs_experiment)
        parallel = GridSearchRunner(n_jobs=4).run_experiment(stub_adapter_cls, GRID_3x4, blobs_experiment)
        assert [row.index for row in parallel] == list(range(12))
        assert parallel == sequential

    def test_cancellation_keeps_completed_rows(self, blobs_experiment, stub_adapter_cls):
        cancel = threading.Event()
        fits = []

        def on_fit(params):
            fits.append(params)
            if len(fits) == 3:
                cancel.set()

        runner = GridSearchRunner(n_jobs=1)
        rows = runner.run_experiment(partial(stub_adapter_cls, on_fit=on_fit), GRID_3x4,
                                     blobs_experiment, cancel_event=cancel)
        assert [row.index for row in rows] == [0, 1, 2]
        assert runner.cancelled_
        assert runner.rows_ == rows

    def test_evaluate_train(self, blobs_experiment, stub_adapter_cls):
        rows = GridSearchRunner(evaluate_train=True).run_experiment(
            stub_adapter_cls, {'alpha': [3.0]}, blobs_experiment
        )
        assert rows[0].train_misclassification_rate == pytest.approx(0.0)

    def test_fixed_label_set(self, blobs_experiment, stub_adapter_cls):
        runner = GridSearchRunner(mode=PredictionMode.CLASS_LABEL, labels=[0, 1, 2])
        rows = runner.run_experiment(stub_adapter_cls, {'alpha': [1.0]}, blobs_experiment)
        assert rows[0].confusion_matrix.labels == (0, 1, 2)

    def test_inputs_left_untouched(self, blobs, stub_adapter_cls):
        X, y = blobs
        X_before = X.copy()
        train = DataSplit(X[:70], y[:70])
        assert not train.features.flags.writeable
        GridSearchRunner().run(stub_adapter_cls, GRID_3x4, train, (X[70:], y[70:]))
        np.testing.assert_array_equal(X, X_before)

    def test_refit_best(self, blobs_experiment, stub_adapter_cls):
        runner = GridSearchRunner()
        row = runner.run_experiment(stub_adapter_cls, {'alpha': [2.0]}, blobs_experiment)[0]
        model = runner.refit_best(stub_adapter_cls, row, blobs_experiment.train())
        assert model.hyperparams == HyperparameterTuple((('alpha', 2.0),))

    def test_refit_failed_row_rejected(self, blobs_experiment, stub_adapter_cls):
        runner = GridSearchRunner()
        factory = partial(stub_adapter_cls, fail_on=(2.0, 0.0))
        row = runner.run_experiment(factory, {'alpha': [2.0]}, blobs_experiment)[0]
        assert row.failed
        with pytest.raises(ValueError):
            runner.refit_best(factory, row, blobs_experiment.train())

    def test_invalid_cutoff(self):
        with pytest.raises(ValueError):
            GridSearchRunner(cutoff=1.5)
