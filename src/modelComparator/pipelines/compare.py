"""
Compare pipeline for modelComparator.

Loads a CSV file, builds the experiment data, runs the hyperparameter grid
and writes the comparison table.
"""

import argparse
from functools import partial
from pathlib import Path

import numpy as np
import pandas as pd

from .labels import build_multiclass_labels
from ..config import HYPERPARAMETER_GRIDS, MODEL_CONFIGS
from ..core.base import Direction, PredictionMode
from ..core.grid_search_runner import GridSearchRunner
from ..data.dataset import ExperimentData
from ..evaluation.reporter import ExperimentReport
from ..models import ModelFactory
from ..utils.config import Config, ConfigManager
from ..utils.helpers import ensure_directory, save_object, set_global_seed
from ..utils.logger import get_logger, setup_logging


def handle_compare(args: argparse.Namespace) -> ExperimentReport:
    """Handle the compare command: load data, run the grid, save the report."""
    logger = get_logger("ComparePipeline")

    config_manager = _resolve_config(args)
    config = config_manager.get_config()
    setup_logging(config.log_level, getattr(args, 'log_file', None))
    set_global_seed(config.random_state)

    data_file = Path(config.data_file)
    if not data_file.exists():
        raise FileNotFoundError(f"Data file not found: {data_file}")
    logger.info(f"Loading data from {data_file}")
    frame = pd.read_csv(data_file)

    data = load_experiment_data(frame, config)
    mode = PredictionMode(config.prediction_mode)

    if config.multiclass_quantiles:
        binary_labels = data.labels
        multiclass = build_multiclass_labels(
            data.features, binary_labels, config.multiclass_quantiles, config.random_state
        )
        data = data.with_labels(multiclass.labels)
        if mode is PredictionMode.RAW_SCORE:
            logger.info("Multiclass labels requested; scoring with class_label predictions")
            mode = PredictionMode.CLASS_LABEL

    model_name = config.model_name.lower()
    adapter_cls = ModelFactory.get_adapter_class(model_name)
    defaults = dict(MODEL_CONFIGS.get(model_name, {}))
    if 'random_state' in adapter_cls.param_names:
        defaults['random_state'] = config.random_state
    adapter_factory = partial(adapter_cls, **defaults)

    param_grid = config.param_grid or HYPERPARAMETER_GRIDS[model_name]
    runner = GridSearchRunner(
        mode=mode,
        cutoff=config.cutoff,
        labels=config.labels,
        positive_label=config.positive_label,
        evaluate_train=config.evaluate_train,
        n_jobs=config.n_jobs,
    )
    rows = runner.run_experiment(adapter_factory, param_grid, data)
    report = ExperimentReport(rows)

    output_dir = ensure_directory(config.output_dir)
    report.save_csv(output_dir / "report.csv")
    report.save_json(output_dir / "report.json")
    config_manager.save_to_file(output_dir / "config.yaml")

    with pd.option_context('display.width', 160, 'display.max_columns', None):
        logger.info("Comparison table:\n" + report.to_dataframe().drop(columns=['error']).to_string(index=False))

    best = report.select_best(config.selection_metric, Direction(config.selection_direction))
    if getattr(args, 'save_best_model', False):
        model = runner.refit_best(adapter_factory, best, data.train())
        save_object(model, output_dir / "best_model.joblib")
        logger.info(f"Best model saved: {output_dir / 'best_model.joblib'}")

    return report


def load_experiment_data(frame: pd.DataFrame, config: Config) -> ExperimentData:
    """Split a data frame into features, labels and partition."""
    logger = get_logger("ComparePipeline")

    if config.label_column not in frame.columns:
        raise ValueError(f"Label column '{config.label_column}' not found in data")

    raw_labels = frame[config.label_column]
    if pd.api.types.is_integer_dtype(raw_labels):
        labels = raw_labels.to_numpy()
    else:
        # Non-numeric labels are mapped to 0..k-1 in sorted order
        categories = sorted(raw_labels.astype(str).unique())
        mapping = {category: code for code, category in enumerate(categories)}
        logger.info(f"Label mapping: {mapping}")
        labels = raw_labels.astype(str).map(mapping).to_numpy(dtype=np.int64)

    drop_columns = [config.label_column]
    if config.partition_column:
        if config.partition_column not in frame.columns:
            raise ValueError(f"Partition column '{config.partition_column}' not found in data")
        partition = frame[config.partition_column].astype(bool).to_numpy()
        drop_columns.append(config.partition_column)
    else:
        partition = ExperimentData.random_partition(
            len(frame), test_fraction=config.test_fraction, random_state=config.random_state
        )

    features = frame.drop(columns=drop_columns)
    non_numeric = features.select_dtypes(exclude=[np.number]).columns.tolist()
    if non_numeric:
        raise ValueError(f"Feature columns must be numeric, found: {non_numeric}")

    return ExperimentData.from_arrays(features, labels, partition)


def _resolve_config(args: argparse.Namespace) -> ConfigManager:
    """Defaults, then configuration file, then explicit command line options."""
    config_manager = ConfigManager()
    if getattr(args, 'config', None):
        config_manager.load_from_file(args.config)

    overrides = {
        'data_file': args.data_file,
        'label_column': args.label_column,
        'partition_column': args.partition_column,
        'test_fraction': args.test_fraction,
        'output_dir': args.output,
        'model_name': args.model_name,
        'prediction_mode': args.prediction_mode,
        'cutoff': args.cutoff,
        'multiclass_quantiles': args.multiclass_quantiles,
        'evaluate_train': args.evaluate_train,
        'n_jobs': args.n_jobs,
        'random_state': args.seed,
        'log_level': args.log_level,
    }
    config_manager.update_config(**{key: value for key, value in overrides.items() if value is not None})
    return config_manager
