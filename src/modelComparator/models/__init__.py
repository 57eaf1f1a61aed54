"""
Model adapters for modelComparator.

This module contains the adapters wrapping each trainable classifier family.
"""

from .base_model import ModelAdapter
from .gradient_boosting import GradientBoostedTreeAdapter
from .random_forest import RandomForestAdapter
from .svm import SupportVectorMachineAdapter
from .logistic_regression import LogisticRegressionAdapter

ADAPTERS = {
    GradientBoostedTreeAdapter.name: GradientBoostedTreeAdapter,
    RandomForestAdapter.name: RandomForestAdapter,
    SupportVectorMachineAdapter.name: SupportVectorMachineAdapter,
    LogisticRegressionAdapter.name: LogisticRegressionAdapter,
}


class ModelFactory:
    """Factory for creating model adapters."""

    @staticmethod
    def create_adapter(model_name: str, **defaults) -> ModelAdapter:
        """Create an adapter by registered name."""
        adapter_cls = ModelFactory.get_adapter_class(model_name)
        return adapter_cls(**defaults)

    @staticmethod
    def get_adapter_class(model_name: str) -> type:
        name = model_name.lower()
        if name not in ADAPTERS:
            raise ValueError(f"Unknown model: {model_name}. Available: {', '.join(sorted(ADAPTERS))}")
        return ADAPTERS[name]


__all__ = [
    "ModelAdapter",
    "GradientBoostedTreeAdapter",
    "RandomForestAdapter",
    "SupportVectorMachineAdapter",
    "LogisticRegressionAdapter",
    "ADAPTERS",
    "ModelFactory",
]
