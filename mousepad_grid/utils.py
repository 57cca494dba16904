"""
utils.py - Shared utilities for the mousepad grid generator.

This module contains the exit codes, logging setup and YAML loading used by
the command-line entry point (generate_mousepad_png.py) and the config layer.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import yaml

# ============================================================================
# Exit codes
# ============================================================================
EXIT_SUCCESS = 0
EXIT_GENERAL_ERROR = 1
EXIT_CONFIG_ERROR = 2  # invalid configuration, nothing was drawn


# ============================================================================
# Logging
# ============================================================================

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

# "fatal" is kept as a level name for the command line
LOG_LEVELS = {
    "fatal": logging.CRITICAL,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def configure_logging(level: str = "info", log_file: Optional[Path] = None) -> None:
    """
    Configure root logging for a command-line run.

    Args:
        level: One of the names in LOG_LEVELS
        log_file: Optional path; when given, records are also appended there
    """
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handlers.append(file_handler)

    logging.basicConfig(
        level=LOG_LEVELS[level],
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )


# ============================================================================
# Configuration loading
# ============================================================================


def load_yaml_config(config_path: Path) -> dict:
    """
    Load a grid configuration from a YAML file.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        Dictionary containing the configuration (empty for an empty file)

    Raises:
        FileNotFoundError: if the file does not exist
        TypeError: if the document is not a mapping
    """
    with open(config_path, "r") as f:
        config = yaml.safe_load(f)
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise TypeError(f"{config_path} must contain a mapping, got {type(config).__name__}")
    return config
