"""
Model-specific configurations for modelComparator.

This module contains default adapter settings and hyperparameter grids.
"""

MODEL_CONFIGS = {
    "xgboost": {
        "n_trees": 1000,
        "shrinkage": 0.01,
        "depth": 1,
        "random_state": 42,
        "n_jobs": 1
    },

    "randomforest": {
        "n_trees": 500,
        "max_features": "sqrt",
        "random_state": 42,
        "n_jobs": 1
    },

    "svm": {
        "kernel": "rbf",
        "cost": 1.0,
        "gamma": "scale",
        "random_state": 42
    },

    "logistic": {
        "C": 1.0,
        "max_iter": 1000,
        "random_state": 42
    }
}

# Hyperparameter grids for comparison runs
HYPERPARAMETER_GRIDS = {
    "xgboost": {
        "shrinkage": [0.001, 0.01, 0.1],
        "depth": [1, 2, 4],
        "n_trees": [100, 500, 1000]
    },

    "randomforest": {
        "n_trees": [100, 500],
        "max_features": [1, 2, "sqrt"]
    },

    "svm": {
        "kernel": ["linear", "poly", "rbf"],
        "cost": [0.1, 1, 10, 100]
    },

    "logistic": {
        "C": [0.01, 0.1, 1, 10]
    }
}
