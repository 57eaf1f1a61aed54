"""
Argument parser for modelComparator.

Options left unset on the command line fall back to the configuration file,
then to the built-in defaults.
"""

import argparse
from typing import List, Optional, Sequence

from ..models import ADAPTERS


def str2bool(v):
    """Convert a string to a boolean."""
    if isinstance(v, bool):
        return v
    if v.lower() in ('yes', 'true', 't', 'y', '1'):
        return True
    elif v.lower() in ('no', 'false', 'f', 'n', '0'):
        return False
    else:
        raise argparse.ArgumentTypeError('Boolean value expected.')


def comma_separated_floats(value: str) -> List[float]:
    """Parse a comma separated string into a list of floats."""
    if not value:
        return []
    try:
        return [float(item.strip()) for item in value.split(',') if item.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected comma separated numbers, got '{value}'") from None


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the CLI parser with its subcommands."""
    parser = argparse.ArgumentParser(
        prog="modelcomparator",
        description="modelComparator - grid search comparison of classification models",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    compare_p = subparsers.add_parser('compare', help='Run a hyperparameter grid and report every configuration')

    # Data
    compare_p.add_argument('--data_file', type=str, required=True,
                           help="CSV file, rows = samples, one column holding the class label")
    compare_p.add_argument('--label_column', type=str, default=None,
                           help="Name of the label column (default: 'label')")
    compare_p.add_argument('--partition_column', type=str, default=None,
                           help="Boolean column marking training rows; a random split is drawn when omitted")
    compare_p.add_argument('--test_fraction', type=float, default=None,
                           help="Held-out fraction for the random split (default: 0.3)")
    compare_p.add_argument('--output', type=str, default=None,
                           help="Directory receiving report.csv and report.json (default: ./results)")

    # Model
    compare_p.add_argument('--model_name', type=str, default=None, choices=sorted(ADAPTERS),
                           help="Model family to evaluate (default: xgboost)")
    compare_p.add_argument('--config', type=str, default=None,
                           help="YAML or JSON configuration file with param_grid and runner settings")

    # Scoring
    compare_p.add_argument('--prediction_mode', type=str, default=None, choices=['raw_score', 'class_label'],
                           help="Score with binned probabilities or with labels predicted by the model")
    compare_p.add_argument('--cutoff', type=float, default=None,
                           help="Probability cutoff for raw scores (default: 0.5)")
    compare_p.add_argument('--multiclass_quantiles', type=comma_separated_floats, default=None,
                           help="Derive multiclass labels from logistic probabilities at these quantiles, e.g. 0.33,0.66")
    compare_p.add_argument('--evaluate_train', type=str2bool, default=None,
                           help="Also report the training misclassification rate")
    compare_p.add_argument('--save_best_model', type=str2bool, default=False,
                           help="Refit the best configuration on the training data and save it with joblib")

    # System
    compare_p.add_argument('--n_jobs', type=int, default=None,
                           help="Grid points evaluated concurrently (default: 1)")
    compare_p.add_argument('--seed', type=int, default=None,
                           help="Random seed for partitioning and models (default: 42)")
    compare_p.add_argument('--log_level', type=str, default=None,
                           choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                           help="Logging level (default: INFO)")
    compare_p.add_argument('--log_file', type=str, default=None,
                           help="Optional log file")

    return parser


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if getattr(args, 'test_fraction', None) is not None and not 0.0 < args.test_fraction < 1.0:
        parser.error(f"--test_fraction must lie in (0, 1), got {args.test_fraction}")

    return args
