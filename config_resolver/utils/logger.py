"""Logging setup for the configuration resolver."""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

LOGGER_NAME = "config_resolver"


def setup_logger(
    name: str = LOGGER_NAME,
    level: Union[int, str] = logging.WARNING,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Configure and return the resolver logger.

    Args:
        name: Logger name.
        level: Logging level, as an int or a level name such as "DEBUG".
        log_file: Optional path to log file. If None, logs to stderr only.

    Returns:
        Configured logger. Calling again after handlers exist only adjusts the level.
    """
    log = logging.getLogger(name)
    log.setLevel(_as_level(level))
    if log.handlers:
        return log

    fmt = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    stream = logging.StreamHandler(sys.stderr)
    stream.setFormatter(fmt)
    log.addHandler(stream)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setFormatter(fmt)
        log.addHandler(fh)

    return log


def get_logger(suffix: str = "") -> logging.Logger:
    """Return the package logger, or a child of it (e.g. get_logger("registry"))."""
    if suffix:
        return logging.getLogger(f"{LOGGER_NAME}.{suffix}")
    return logging.getLogger(LOGGER_NAME)


def _as_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    # getLevelName returns "Level X" for unknown names
    return resolved if isinstance(resolved, int) else logging.WARNING
