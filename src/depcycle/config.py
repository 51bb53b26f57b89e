"""Configuration management for depcycle."""

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .observability.logger import LOG_LEVELS
from .utils.exceptions import ConfigurationError

LOG_FORMATS = ("console", "json")


@dataclass
class ValidationConfig:
    """
    Cycle policy and edge file parsing options.
    """

    fail_fast: bool = False  # Raise on first cycle-closing edge
    strict: bool = True  # Parser raises on first invalid row

    def __post_init__(self) -> None:
        for name in ("fail_fast", "strict"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ConfigurationError(
                    f"validation.{name} must be true or false, got {value!r}"
                )


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "console"  # Options: "console", "json"
    file: Path | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.level, str) or self.level.upper() not in LOG_LEVELS:
            raise ConfigurationError(
                f"logging.level must be one of {', '.join(LOG_LEVELS)}, got {self.level!r}"
            )
        if self.format not in LOG_FORMATS:
            raise ConfigurationError(
                f"logging.format must be one of {', '.join(LOG_FORMATS)}, got {self.format!r}"
            )
        if isinstance(self.file, str):
            self.file = Path(self.file) if self.file else None
        elif self.file is not None and not isinstance(self.file, Path):
            raise ConfigurationError(f"logging.file must be a path, got {self.file!r}")


@dataclass
class DepCycleConfig:
    """
    Complete configuration for depcycle.

    This combines all configuration sections.
    """

    validation: ValidationConfig = field(default_factory=ValidationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_file(cls, config_path: Path) -> "DepCycleConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to YAML config file

        Returns:
            DepCycleConfig instance

        Raises:
            ConfigurationError: If the file is not valid YAML, has unknown keys
                or holds values of the wrong type
        """
        try:
            with open(config_path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in configuration file {config_path}: {e}"
            ) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Invalid configuration file structure in {config_path}: "
                f"expected dictionary, got {type(data).__name__}"
            )

        try:
            validation = ValidationConfig(**(data.get("validation") or {}))
            logging = LoggingConfig(**(data.get("logging") or {}))
        except TypeError as e:
            raise ConfigurationError(f"Unknown option in {config_path}: {e}") from e

        return cls(validation=validation, logging=logging)

    def to_file(self, config_path: Path) -> None:
        """
        Save configuration to YAML file.

        Args:
            config_path: Path to save config file
        """
        data = {
            "validation": self.validation.__dict__,
            "logging": {
                k: str(v) if isinstance(v, Path) else v
                for k, v in self.logging.__dict__.items()
                if v is not None
            },
        }

        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    @classmethod
    def from_env(cls) -> "DepCycleConfig":
        """
        Create configuration from environment variables.

        Environment variables:
            DEPCYCLE_LOG_LEVEL: Logging level (default: INFO)
            DEPCYCLE_LOG_FORMAT: console or json (default: console)
            DEPCYCLE_LOG_FILE: Optional log file path
            DEPCYCLE_FAIL_FAST: Raise on first cycle (default: false)
            DEPCYCLE_STRICT: Raise on first invalid row (default: true)

        Returns:
            DepCycleConfig instance

        Raises:
            ConfigurationError: If a variable holds an invalid value
        """
        log_file = os.environ.get("DEPCYCLE_LOG_FILE")

        return cls(
            validation=ValidationConfig(
                fail_fast=_env_flag("DEPCYCLE_FAIL_FAST", False),
                strict=_env_flag("DEPCYCLE_STRICT", True),
            ),
            logging=LoggingConfig(
                level=os.environ.get("DEPCYCLE_LOG_LEVEL", "INFO"),
                format=os.environ.get("DEPCYCLE_LOG_FORMAT", "console"),
                file=Path(log_file) if log_file else None,
            ),
        )


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() not in ("false", "0", "no", "off", "")


def load_config(config_file: Path | None = None) -> DepCycleConfig:
    """
    Load configuration from file or environment variables.

    Args:
        config_file: Optional path to YAML config file

    Returns:
        DepCycleConfig instance

    Raises:
        FileNotFoundError: If config_file is specified but doesn't exist
    """
    if config_file:
        if not config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_file}")
        return DepCycleConfig.from_file(config_file)
    return DepCycleConfig.from_env()
