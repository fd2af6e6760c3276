"""
Logging Configuration Utility

Configures root logging for applications using the calibration map:
a rotating log file plus an optional stdout console handler. Defaults
come from the LoggingConfig settings section.
"""

import logging
import logging.handlers
import sys
import os
from typing import Optional

from ..config.settings import LoggingConfig


DEFAULTS = LoggingConfig()

STANDARD_FORMAT = '%(asctime)s - %(levelname)s - %(name)s - %(message)s'
DETAILED_FORMAT = ('%(asctime)s - %(name)s - %(levelname)s - '
                   '%(filename)s:%(lineno)d - %(funcName)s() - %(message)s')
CONSOLE_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def _file_handler(log_file: str, max_file_size_mb: float, backup_count: int) -> logging.Handler:
    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    return logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=int(max_file_size_mb * 1024 * 1024),
        backupCount=backup_count
    )


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt='%H:%M:%S'))
    return handler


def setup_logging(level: str = DEFAULTS.level,
                  log_file: Optional[str] = DEFAULTS.log_file,
                  max_file_size_mb: float = DEFAULTS.max_file_size_mb,
                  backup_count: int = DEFAULTS.backup_count,
                  console_output: bool = DEFAULTS.console_output,
                  detailed_format: bool = DEFAULTS.detailed_format) -> bool:
    """
    Replace the root logger's handlers with file and console handlers.

    Args:
        level: Logging level name; unknown names fall back to INFO
        log_file: Rotating log file path, empty or None for no file output
        max_file_size_mb: Size in MB at which the log file rotates
        backup_count: Rotated files to keep
        console_output: Also log to stdout
        detailed_format: Include source file, line and function in file records

    Returns:
        bool: True if logging setup successful
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()

    try:
        handlers = []
        if log_file:
            handler = _file_handler(log_file, max_file_size_mb, backup_count)
            handler.setFormatter(logging.Formatter(
                DETAILED_FORMAT if detailed_format else STANDARD_FORMAT,
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
            handlers.append(handler)
        if console_output:
            handlers.append(_console_handler())
    except (OSError, ValueError) as e:
        print(f"Failed to setup logging: {e}")
        return False

    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    root.setLevel(numeric_level)
    for handler in handlers:
        handler.setLevel(numeric_level)
        root.addHandler(handler)

    root.info(f"Logging initialized - Level: {level}, File: {log_file}")
    return True


def setup_logging_from_config(config: LoggingConfig) -> bool:
    """Set up logging from a LoggingConfig settings section."""
    return setup_logging(
        level=config.level,
        log_file=config.log_file,
        max_file_size_mb=config.max_file_size_mb,
        backup_count=config.backup_count,
        console_output=config.console_output,
        detailed_format=config.detailed_format
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger by name, typically __name__."""
    return logging.getLogger(name)


def set_log_level(level: str):
    """
    Change the level of the root logger and all of its handlers.

    Args:
        level: New logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(numeric_level)

    for handler in root.handlers:
        handler.setLevel(numeric_level)

    root.info(f"Log level changed to {level}")
