"""Configuration loading for gradetrack."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

CONFIG_FILE_NAME = "gradetrack.yaml"
DEFAULT_DATA_FILE = "students.json"


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


@dataclass
class LoggingConfig:
    """Logging configuration."""

    dir: str = "logs"
    level: str = "INFO"
    console: bool = False


@dataclass
class TrackerConfig:
    """gradetrack configuration.

    Relative paths are resolved against ``root_path``, the directory holding
    the config file (or the working directory when no file was found).
    """

    data_file: str = DEFAULT_DATA_FILE
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    root_path: Path = field(default_factory=Path.cwd)

    @classmethod
    def from_dict(cls, data: dict[str, Any], root_path: Path) -> TrackerConfig:
        """Create config from dictionary.

        Args:
            data: Configuration dictionary from YAML.
            root_path: Root directory containing the config file.

        Returns:
            Parsed configuration object.

        Raises:
            ConfigError: If a section has the wrong shape.
        """
        logging_data = data.get("logging", {})
        if not isinstance(logging_data, dict):
            raise ConfigError("'logging' must be a mapping")

        data_file = data.get("data_file", DEFAULT_DATA_FILE)
        if not isinstance(data_file, str) or not data_file.strip():
            raise ConfigError("'data_file' must be a non-empty string")

        logging_config = LoggingConfig(
            dir=str(logging_data.get("dir", "logs")),
            level=str(logging_data.get("level", "INFO")),
            console=bool(logging_data.get("console", False)),
        )

        return cls(data_file=data_file, logging=logging_config, root_path=root_path)

    def get_data_path(self) -> Path:
        """Get absolute path to the student data file.

        ``GRADETRACK_DATA_FILE`` takes precedence over the configured value.
        """
        data_file = os.environ.get("GRADETRACK_DATA_FILE", self.data_file)
        path = Path(data_file)
        if path.is_absolute():
            return path
        return self.root_path / path

    def get_log_dir(self) -> Path:
        """Get absolute path to the log directory.

        ``GRADETRACK_LOG_DIR`` takes precedence over the configured value.
        """
        path = Path(os.environ.get("GRADETRACK_LOG_DIR", self.logging.dir))
        if path.is_absolute():
            return path
        return self.root_path / path


def load_config(config_path: Path | str) -> TrackerConfig:
    """Load gradetrack configuration from a YAML file.

    Args:
        config_path: Path to gradetrack.yaml file.

    Returns:
        Parsed configuration object.

    Raises:
        ConfigError: If file doesn't exist or is invalid.
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    # An empty file means "all defaults"
    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a YAML mapping, got {type(data).__name__}")

    return TrackerConfig.from_dict(data, config_path.resolve().parent)


def find_config(start_path: Path | str | None = None) -> Path:
    """Find gradetrack.yaml by walking up directory tree.

    Args:
        start_path: Starting directory. Defaults to current directory.

    Returns:
        Path to gradetrack.yaml file.

    Raises:
        ConfigError: If no config file is found.
    """
    start_path = Path.cwd() if start_path is None else Path(start_path)

    current = start_path.resolve()
    for directory in (current, *current.parents):
        config_path = directory / CONFIG_FILE_NAME
        if config_path.exists():
            return config_path

    raise ConfigError(f"No {CONFIG_FILE_NAME} found in {start_path} or any parent directory")
