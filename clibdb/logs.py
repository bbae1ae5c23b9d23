"""Contains logging related functionality."""

import logging
import logging.config
import typing
from pathlib import Path

import yaml


def init_logging(filepath: Path, verbose: bool = False) -> dict[str, typing.Any]:
    """Read logging config yaml file from `filepath` and initialize logging by applying it globally.

    :param filepath: Path to the logging configuration yaml file.
    :param verbose: Lower the ``clibdb`` logger to DEBUG, showing sessions and normalization anomalies.
    :returns: The logging configuration as dict.
    """
    config: dict[str, typing.Any] = yaml.safe_load(filepath.read_text(encoding="utf-8"))
    if verbose:
        config.setdefault("loggers", {}).setdefault("clibdb", {})["level"] = "DEBUG"
    logging.config.dictConfig(config)
    return config
