"""
Utility modules for modelComparator.

This module contains logging, configuration and helper utilities.
"""

from .logger import get_logger, setup_logging
from .config import Config, ConfigManager
from .helpers import ensure_directory, format_time, save_object, load_object, set_global_seed

__all__ = [
    "get_logger",
    "setup_logging",
    "Config",
    "ConfigManager",
    "ensure_directory",
    "format_time",
    "save_object",
    "load_object",
    "set_global_seed",
]
