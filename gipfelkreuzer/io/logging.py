"""Logging utilities for Gipfelkreuzer.

Provides timestamped file logging and YAML run records.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Union

import yaml

PathLike = Union[str, Path]

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_timestamped_log_path(log_path: PathLike) -> Path:
    """Generate a timestamped log path from the base log path.

    Example: consensus.log -> consensus_20251209_080530.log

    Parameters
    ----------
    log_path : PathLike
        Base log file path.

    Returns
    -------
    Path
        Timestamped log path.
    """
    log_path = Path(log_path)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    stem = log_path.stem
    suffix = log_path.suffix or ".log"
    return log_path.parent / f"{stem}_{timestamp}{suffix}"


def add_file_handler(
    logger: logging.Logger,
    log_path: PathLike,
    level: int = logging.INFO,
    timestamped: bool = True,
) -> Path:
    """Attach a file handler to the logger.

    Parameters
    ----------
    logger : logging.Logger
        Logger to attach the handler to.
    log_path : PathLike
        Base path for log file.
    level : int
        Level of the file handler (default: INFO).
    timestamped : bool
        If True, add timestamp to filename to preserve previous logs.
        If False, overwrite existing log file.

    Returns
    -------
    Path
        The actual log path.
    """
    log_path = Path(log_path)

    if timestamped:
        actual_log_path = get_timestamped_log_path(log_path)
    else:
        actual_log_path = log_path
        actual_log_path.unlink(missing_ok=True)

    actual_log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(actual_log_path, mode="a", encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    logger.addHandler(handler)
    return actual_log_path


def log_yaml(logger: logging.Logger, record: dict[str, Any], level: int = logging.INFO) -> None:
    """Log a dictionary as a YAML document.

    Parameters
    ----------
    logger : logging.Logger
        Logger to write to.
    record : dict
        Dictionary to serialize as YAML.
    level : int
        Logging level of the message.
    """
    yaml_text = yaml.safe_dump(record, sort_keys=False).rstrip("\n")
    logger.log(level, "%s\n---", yaml_text)
