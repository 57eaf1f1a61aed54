"""
Configuration management for modelComparator.

This module contains configuration loading and management utilities.
"""

from typing import Any, Dict, List, Optional, Union
import yaml
import json
from pathlib import Path
from dataclasses import dataclass, asdict

from .logger import get_logger


@dataclass
class Config:
    """Configuration class for a model comparison experiment."""

    # Model configuration
    model_name: str = "xgboost"
    param_grid: Dict[str, List[Any]] = None

    # Scoring configuration
    prediction_mode: str = "raw_score"
    cutoff: float = 0.5
    positive_label: int = 1
    labels: Optional[List[int]] = None
    evaluate_train: bool = False

    # Multiclass label construction (quantiles of logistic probabilities)
    multiclass_quantiles: Optional[List[float]] = None

    # Selection configuration
    selection_metric: str = "misclassification_rate"
    selection_direction: str = "minimize"

    # Partition configuration
    test_fraction: float = 0.3
    partition_column: Optional[str] = None
    random_state: int = 42
    n_jobs: int = 1

    # Data configuration
    data_file: Optional[str] = None
    label_column: str = "label"
    output_dir: str = "./results"
    log_level: str = "INFO"

    def __post_init__(self):
        """Initialize default values after dataclass creation."""
        if self.param_grid is None:
            self.param_grid = {}


class ConfigManager:
    """Configuration manager for modelComparator."""

    def __init__(self):
        self.logger = get_logger("ConfigManager")
        self.config = Config()

    def load_from_file(self, config_path: Union[str, Path]) -> 'ConfigManager':
        """
        Load configuration from a file.

        Args:
            config_path: Path to configuration file

        Returns:
            Self for method chaining
        """
        config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        self.logger.info(f"Loading configuration from {config_path}")

        if config_path.suffix.lower() in ('.yaml', '.yml'):
            self._load_yaml(config_path)
        elif config_path.suffix.lower() == '.json':
            self._load_json(config_path)
        else:
            raise ValueError(f"Unsupported configuration file format: {config_path.suffix}")

        return self

    def _load_yaml(self, config_path: Path) -> None:
        """Load configuration from YAML file."""
        with open(config_path, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f) or {}

        self._update_config(config_data)

    def _load_json(self, config_path: Path) -> None:
        """Load configuration from JSON file."""
        with open(config_path, 'r', encoding='utf-8') as f:
            config_data = json.load(f)

        self._update_config(config_data)

    def _update_config(self, config_data: Dict[str, Any]) -> None:
        """Update configuration with loaded data."""
        if not isinstance(config_data, dict):
            raise ValueError("Configuration file must contain a mapping at top level")

        for key, value in config_data.items():
            if hasattr(self.config, key):
                setattr(self.config, key, value)
            else:
                self.logger.warning(f"Unknown configuration key: {key}")

        self._validate()
        self.logger.info("Configuration loaded successfully")

    def _validate(self) -> None:
        """Check value ranges that would otherwise fail deep inside a run."""
        config = self.config
        if not isinstance(config.param_grid, dict):
            raise ValueError("param_grid must be a mapping from parameter name to candidate values")
        for name, values in config.param_grid.items():
            if not isinstance(values, (list, tuple)) or len(values) == 0:
                raise ValueError(f"param_grid['{name}'] must be a non-empty list")
        if config.prediction_mode not in ('raw_score', 'class_label'):
            raise ValueError(f"Unknown prediction_mode: {config.prediction_mode}")
        if config.selection_direction not in ('minimize', 'maximize'):
            raise ValueError(f"Unknown selection_direction: {config.selection_direction}")
        if not 0.0 < config.test_fraction < 1.0:
            raise ValueError(f"test_fraction must lie in (0, 1), got {config.test_fraction}")
        if not 0.0 <= config.cutoff <= 1.0:
            raise ValueError(f"cutoff must lie in [0, 1], got {config.cutoff}")

    def save_to_file(self, config_path: Union[str, Path]) -> None:
        """
        Save configuration to a file.

        Args:
            config_path: Path to save configuration file
        """
        config_path = Path(config_path)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        self.logger.info(f"Saving configuration to {config_path}")

        config_data = asdict(self.config)

        if config_path.suffix.lower() in ('.yaml', '.yml'):
            with open(config_path, 'w', encoding='utf-8') as f:
                yaml.dump(config_data, f, default_flow_style=False, indent=2)
        elif config_path.suffix.lower() == '.json':
            with open(config_path, 'w', encoding='utf-8') as f:
                json.dump(config_data, f, indent=2)
        else:
            raise ValueError(f"Unsupported configuration file format: {config_path.suffix}")

        self.logger.info("Configuration saved successfully")

    def get_config(self) -> Config:
        """Get the current configuration."""
        return self.config

    def update_config(self, **kwargs) -> 'ConfigManager':
        """
        Update configuration with new values.

        Args:
            **kwargs: Configuration parameters to update

        Returns:
            Self for method chaining
        """
        for key, value in kwargs.items():
            if hasattr(self.config, key):
                setattr(self.config, key, value)
            else:
                self.logger.warning(f"Unknown configuration key: {key}")

        self._validate()
        return self
