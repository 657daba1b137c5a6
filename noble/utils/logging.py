"""
Logging configuration for noble.

Provides formatted console/file output under the ``noble`` logger
namespace. Nothing is installed on import; applications opt in with
``setup_logging``.
"""

from __future__ import annotations

import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from noble.config import LoggingConfig

ROOT_LOGGER_NAME = "noble"

# Module-level logger cache
_loggers: dict[str, logging.Logger] = {}

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


# ============================================================================
# Custom Formatter
# ============================================================================


class NobleFormatter(logging.Formatter):
    """Custom formatter with color support and structured output."""

    # ANSI color codes for terminal output
    COLORS = {
        "DEBUG": "\033[36m",     # Cyan
        "INFO": "\033[32m",      # Green
        "WARNING": "\033[33m",   # Yellow
        "ERROR": "\033[31m",     # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",      # Reset
    }

    def __init__(
        self,
        use_colors: bool = True,
        include_timestamp: bool = True,
    ):
        """Initialize the formatter.

        Args:
            use_colors: Whether to use ANSI colors (for terminals)
            include_timestamp: Whether to include timestamps
        """
        self.use_colors = use_colors
        self.include_timestamp = include_timestamp
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        parts = []

        if self.include_timestamp:
            timestamp = datetime.fromtimestamp(record.created, UTC).strftime(
                "%Y-%m-%d %H:%M:%S"
            )
            parts.append(f"[{timestamp}]")

        level = record.levelname
        if self.use_colors:
            color = self.COLORS.get(level, "")
            reset = self.COLORS["RESET"]
            parts.append(f"{color}{level:8}{reset}")
        else:
            parts.append(f"{level:8}")

        # Drop the package prefix for readability
        name = record.name
        if name.startswith(f"{ROOT_LOGGER_NAME}."):
            name = name[len(ROOT_LOGGER_NAME) + 1:]
        parts.append(f"[{name:20}]")

        parts.append(record.getMessage())

        if record.exc_info:
            parts.append(self.formatException(record.exc_info))

        return " ".join(parts)


# ============================================================================
# Setup Functions
# ============================================================================


def setup_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO",
    log_dir: str | Path | None = None,
    console_output: bool = True,
    file_output: bool = True,
    log_filename: str = "noble.log",
) -> logging.Logger:
    """Configure the ``noble`` logger hierarchy.

    Args:
        level: Minimum log level to capture
        log_dir: Directory for log files (required if file_output=True)
        console_output: Whether to log to console
        file_output: Whether to log to file
        log_filename: Name of the log file

    Returns:
        The root ``noble`` logger

    Usage:
        setup_logging(level="DEBUG", log_dir="./logs")
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(getattr(logging, level))

    root_logger.handlers = []

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(getattr(logging, level))
        console_handler.setFormatter(NobleFormatter(use_colors=True))
        root_logger.addHandler(console_handler)

    if file_output and log_dir is not None:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(
            log_path / log_filename,
            encoding="utf-8",
        )
        file_handler.setLevel(getattr(logging, level))
        file_handler.setFormatter(NobleFormatter(use_colors=False))
        root_logger.addHandler(file_handler)

    if not root_logger.handlers:
        root_logger.addHandler(logging.NullHandler())

    root_logger.propagate = False
    return root_logger


def setup_logging_from_config(config: "LoggingConfig") -> logging.Logger:
    """Configure logging from a LoggingConfig section."""
    return setup_logging(
        level=config.level,
        log_dir=config.log_dir,
        console_output=config.console_output,
        file_output=config.file_output,
        log_filename=config.log_filename,
    )


def get_logger(name: str) -> logging.Logger:
    """Get or create a logger with the given name.

    Args:
        name: Logger name (will be prefixed with "noble.")

    Returns:
        Logger instance

    Usage:
        logger = get_logger("core.emitter")
        logger.debug("Registered listener")
    """
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        full_name = name
    else:
        full_name = f"{ROOT_LOGGER_NAME}.{name}"

    if full_name not in _loggers:
        _loggers[full_name] = logging.getLogger(full_name)

    return _loggers[full_name]


# ============================================================================
# Convenience Functions
# ============================================================================


def log_operation(
    logger: logging.Logger,
    operation: str,
    details: dict | None = None,
    level: int = logging.DEBUG,
) -> None:
    """Log an operation with optional details.

    Args:
        logger: Logger to use
        operation: Name of the operation
        details: Optional dict of details
        level: Log level, DEBUG by default
    """
    if details:
        detail_str = ", ".join(f"{k}={v}" for k, v in details.items())
        logger.log(level, f"{operation}: {detail_str}")
    else:
        logger.log(level, operation)
