"""
Utilities package for logging helpers.
"""

from .logging_config import setup_logging, setup_logging_from_config, get_logger, set_log_level

__all__ = ['setup_logging', 'setup_logging_from_config', 'get_logger', 'set_log_level']
