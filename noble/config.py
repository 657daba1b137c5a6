"""
noble Configuration.

Central configuration management for noble: reserved event names and
logging options.
"""

from __future__ import annotations

import json
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

from dotenv import load_dotenv


CONFIG_ENV_VAR = "NOBLE_CONFIG"
LOG_LEVEL_ENV_VAR = "NOBLE_LOG_LEVEL"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


# ============================================================================
# Configuration Classes
# ============================================================================


@dataclass
class EventConfig:
    """Reserved event names and the multi-event separator."""

    separator: str = r"\s+"  # Regex splitting "a b c" into names
    wildcard: str = "*"  # off("*") removes every listener
    all_event: str = "all"  # Fired alongside every emission
    error_event: str = "error"  # Raises when nobody listens
    off_prefix: str = "off:"  # off("x") fires "off:x"

    def __post_init__(self):
        re.compile(self.separator)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EventConfig":
        return cls(**{k: v for k, v in data.items() if hasattr(cls, k)})

    def to_dict(self) -> dict[str, Any]:
        return {
            "separator": self.separator,
            "wildcard": self.wildcard,
            "all_event": self.all_event,
            "error_event": self.error_event,
            "off_prefix": self.off_prefix,
        }


@dataclass
class LoggingConfig:
    """Configuration for noble's loggers."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    log_dir: str | None = None
    console_output: bool = True
    file_output: bool = False
    log_filename: str = "noble.log"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LoggingConfig":
        return cls(**{k: v for k, v in data.items() if hasattr(cls, k)})

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level,
            "log_dir": self.log_dir,
            "console_output": self.console_output,
            "file_output": self.file_output,
            "log_filename": self.log_filename,
        }


@dataclass
class NobleConfig:
    """Main configuration for noble.

    Aggregates all sub-configurations and provides load/save functionality.
    """

    events: EventConfig = field(default_factory=EventConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, config_path: str | Path | None = None) -> "NobleConfig":
        """Load configuration from a JSON file.

        Args:
            config_path: Path to config file. If None, uses $NOBLE_CONFIG
                (a .env file is read first).

        Returns:
            NobleConfig instance

        Raises:
            ValueError: If $NOBLE_LOG_LEVEL is not a known level
        """
        load_dotenv()

        if config_path is None:
            config_path = os.environ.get(CONFIG_ENV_VAR)

        config = cls()
        if config_path is not None and Path(config_path).exists():
            with open(config_path, "r", encoding="utf-8") as f:
                config = cls.from_dict(json.load(f))

        if level := os.environ.get(LOG_LEVEL_ENV_VAR):
            level = level.upper()
            if level not in LOG_LEVELS:
                raise ValueError(f"{LOG_LEVEL_ENV_VAR} must be one of {LOG_LEVELS}, got {level!r}")
            config.logging.level = level

        return config

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NobleConfig":
        """Create config from dictionary."""
        return cls(
            events=EventConfig.from_dict(data.get("events", {})),
            logging=LoggingConfig.from_dict(data.get("logging", {})),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "events": self.events.to_dict(),
            "logging": self.logging.to_dict(),
        }

    def save(self, config_path: str | Path) -> Path:
        """Save configuration to a JSON file.

        Args:
            config_path: Path to save to

        Returns:
            Path to saved file
        """
        config_path = Path(config_path)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)

        return config_path


# ============================================================================
# Global Config Instance
# ============================================================================


_global_config: NobleConfig | None = None


def get_config() -> NobleConfig:
    """Get the global configuration instance.

    Nothing is read from disk or the environment here; until
    ``set_config`` or ``reload_config`` runs, the defaults apply.

    Returns:
        NobleConfig singleton
    """
    global _global_config
    if _global_config is None:
        _global_config = NobleConfig()
    return _global_config


def set_config(config: NobleConfig | None) -> None:
    """Set the global configuration instance.

    Args:
        config: Configuration to set, or None to fall back to the defaults
    """
    global _global_config
    _global_config = config


def reload_config(config_path: str | Path | None = None) -> NobleConfig:
    """Reload configuration from disk and the environment.

    Args:
        config_path: Optional path to load from

    Returns:
        Newly loaded configuration
    """
    global _global_config
    _global_config = NobleConfig.load(config_path)
    return _global_config
