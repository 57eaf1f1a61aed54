import numpy as np
import pytest

from modelComparator.core.base import HyperparameterTuple, PredictionMode
from modelComparator.core.exceptions import TrainingError, UnsupportedModeError
from modelComparator.models import (
    ADAPTERS,
    GradientBoostedTreeAdapter,
    LogisticRegressionAdapter,
    ModelFactory,
    RandomForestAdapter,
    SupportVectorMachineAdapter,
)


RAW = PredictionMode.RAW_SCORE
LABEL = PredictionMode.CLASS_LABEL


@pytest.fixture
def three_class_data():
    rng = np.random.RandomState(1)
    centres = np.array([[-3.0, 0.0], [0.0, 3.0], [3.0, 0.0]])
    labels = np.repeat([0, 1, 2], 30)
    features = centres[labels] + rng.normal(scale=0.4, size=(90, 2))
    return features, labels


class TestModelFactory:

    def test_registered_adapters(self):
        assert set(ADAPTERS) == {'xgboost', 'randomforest', 'svm', 'logistic'}
        assert isinstance(ModelFactory.create_adapter('SVM'), SupportVectorMachineAdapter)

    def test_unknown_model(self):
        with pytest.raises(ValueError, match="Unknown model"):
            ModelFactory.get_adapter_class('catboost')


class TestGradientBoostedTreeAdapter:

    def test_raw_scores_are_probabilities(self, blobs):
        X, y = blobs
        adapter = GradientBoostedTreeAdapter(n_trees=20)
        model = adapter.fit(X, y, {'shrinkage': 0.1, 'depth': 2})
        scores = adapter.predict(model, X, RAW)
        assert scores.shape == (len(y),)
        assert np.all((scores >= 0.0) & (scores <= 1.0))
        assert np.mean((scores >= 0.5) == y) > 0.95

    def test_predict_uses_trained_tree_count(self, blobs):
        X, y = blobs
        adapter = GradientBoostedTreeAdapter()
        model = adapter.fit(X, y, {'n_trees': 7, 'shrinkage': 0.3})
        assert model.estimator.get_params()['n_estimators'] == 7
        assert model.hyperparams == HyperparameterTuple((('n_trees', 7), ('shrinkage', 0.3)))

        expected = model.estimator.predict_proba(X, iteration_range=(0, 7))[:, 1]
        np.testing.assert_allclose(adapter.predict(model, X, RAW), expected)
        fewer_trees = model.estimator.predict_proba(X, iteration_range=(0, 3))[:, 1]
        assert not np.allclose(adapter.predict(model, X, RAW), fewer_trees)

    def test_class_labels_decoded_to_original_values(self, blobs):
        X, y = blobs
        shifted = y + 5
        adapter = GradientBoostedTreeAdapter(n_trees=10)
        model = adapter.fit(X, shifted, {})
        assert model.classes == (5, 6)
        assert set(adapter.predict(model, X, LABEL).tolist()) <= {5, 6}

    def test_multiclass_labels(self, three_class_data):
        X, y = three_class_data
        adapter = GradientBoostedTreeAdapter(n_trees=20)
        model = adapter.fit(X, y, {'depth': 2})
        assert np.mean(adapter.predict(model, X, LABEL) == y) > 0.9
        with pytest.raises(UnsupportedModeError):
            adapter.predict(model, X, RAW)

    @pytest.mark.parametrize("params", [
        {'depth': 0},
        {'n_trees': 0},
        {'shrinkage': 0.0},
        {'subsample': 1.5},
        {'shrinkage': 'fast'},
        {'depth': True},
        {'n_trees': np.int64(5), 'depth': False},
    ])
    def test_invalid_hyperparameters(self, blobs, params):
        X, y = blobs
        with pytest.raises(TrainingError):
            GradientBoostedTreeAdapter().fit(X, y, params)


class TestRandomForestAdapter:

    def test_fit_predict(self, blobs):
        X, y = blobs
        adapter = RandomForestAdapter(n_trees=25)
        model = adapter.fit(X, y, {'max_features': 1})
        assert np.mean(adapter.predict(model, X, LABEL) == y) > 0.95
        assert adapter.predict(model, X, RAW).shape == (len(y),)

    def test_max_features_above_column_count(self, blobs):
        X, y = blobs
        with pytest.raises(TrainingError, match="max_features"):
            RandomForestAdapter(n_trees=5).fit(X, y, {'max_features': 3})

    @pytest.mark.parametrize("params", [{'n_trees': True}, {'depth': True}, {'max_features': True}])
    def test_boolean_counts_rejected(self, blobs, params):
        X, y = blobs
        with pytest.raises(TrainingError):
            RandomForestAdapter(n_trees=5).fit(X, y, params)


class TestSupportVectorMachineAdapter:

    def test_class_labels_only(self, blobs):
        X, y = blobs
        adapter = SupportVectorMachineAdapter()
        assert adapter.supports(LABEL)
        assert not adapter.supports(RAW)
        model = adapter.fit(X, y, {'kernel': 'linear', 'cost': 1.0})
        assert np.mean(adapter.predict(model, X, LABEL) == y) > 0.95
        with pytest.raises(UnsupportedModeError):
            adapter.predict(model, X, RAW)

    def test_multiclass_one_vs_one(self, three_class_data):
        X, y = three_class_data
        adapter = SupportVectorMachineAdapter()
        model = adapter.fit(X, y, {'kernel': 'rbf', 'cost': 10})
        assert set(adapter.predict(model, X, LABEL).tolist()) == {0, 1, 2}

    @pytest.mark.parametrize("params", [
        {'kernel': 'cubic'},
        {'cost': -1.0},
        {'gamma': 'large'},
        {'kernel': 'poly', 'degree': 0},
        {'kernel': 'poly', 'degree': True},
    ])
    def test_invalid_hyperparameters(self, blobs, params):
        X, y = blobs
        with pytest.raises(TrainingError):
            SupportVectorMachineAdapter().fit(X, y, params)


class TestModelAdapterContract:

    def test_unknown_hyperparameter(self, blobs):
        X, y = blobs
        with pytest.raises(TrainingError, match="unknown hyperparameters"):
            LogisticRegressionAdapter().fit(X, y, {'penalty_strength': 2})

    def test_single_class_training_data(self, blobs):
        X, _ = blobs
        with pytest.raises(TrainingError, match="two classes"):
            LogisticRegressionAdapter().fit(X, np.zeros(len(X), dtype=int), {})

    def test_malformed_training_data(self, blobs):
        X, y = blobs
        with pytest.raises(TrainingError):
            LogisticRegressionAdapter().fit(X, y[:-3], {})

    def test_inputs_are_not_modified(self, blobs):
        X, y = blobs
        X_before, y_before = X.copy(), y.copy()
        adapter = SupportVectorMachineAdapter()
        model = adapter.fit(X, y, {})
        adapter.predict(model, X, LABEL)
        np.testing.assert_array_equal(X, X_before)
        np.testing.assert_array_equal(y, y_before)

    def test_strict_convergence(self, overlapping):
        X, y = overlapping
        adapter = LogisticRegressionAdapter(strict_convergence=True)
        with pytest.raises(TrainingError, match="did not converge"):
            adapter.fit(X * 1000.0, y, {'max_iter': 1, 'C': 1000.0})

    def test_defaults_overridden_by_grid_point(self, blobs):
        X, y = blobs
        adapter = LogisticRegressionAdapter(C=0.5)
        model = adapter.fit(X, y, {'C': 2.0})
        assert model.estimator.C == 2.0
        assert model.adapter_name == 'logistic'

    def test_boolean_iteration_limit_rejected(self, blobs):
        X, y = blobs
        with pytest.raises(TrainingError, match="max_iter"):
            LogisticRegressionAdapter().fit(X, y, {'max_iter': True})
