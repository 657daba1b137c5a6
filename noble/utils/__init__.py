"""
noble Utils - Helper functions and utilities.
"""

from noble.utils.logging import get_logger, setup_logging, setup_logging_from_config

__all__ = [
    "setup_logging",
    "setup_logging_from_config",
    "get_logger",
]
