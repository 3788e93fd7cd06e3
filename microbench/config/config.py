"""Configuration management system for microbench."""

import json
import math
import os
from dataclasses import asdict, fields, is_dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from microbench.utils.errors import ConfigError

from .defaults import ZERO_ELAPSED_POLICIES, CalibrationConfig, ReportConfig, default_config


def _positive_number(section: str, name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ConfigError(f"{section}.{name} must be a finite number, got {value!r}")
    if value <= 0:
        raise ConfigError(f"{section}.{name} must be positive, got {value}")


def _typed(section: str, name: str, value: Any, kind: type) -> None:
    if kind is int and isinstance(value, bool):
        raise ConfigError(f"{section}.{name} must be an integer, got {value!r}")
    if not isinstance(value, kind):
        raise ConfigError(f"{section}.{name} must be of type {kind.__name__}, got {value!r}")


def validate_calibration(calibration: CalibrationConfig) -> None:
    """Check calibration settings are usable.

    Args:
        calibration: Calibration settings to check

    Raises:
        ConfigError: If any setting has the wrong type or is out of range
    """
    _positive_number("calibration", "warmup_seconds", calibration.warmup_seconds)
    _positive_number("calibration", "calibration_seconds", calibration.calibration_seconds)
    _positive_number("calibration", "multiplier", calibration.multiplier)
    _typed("calibration", "min_iterations", calibration.min_iterations, int)
    if calibration.min_iterations < 1:
        raise ConfigError(f"calibration.min_iterations must be at least 1, got {calibration.min_iterations}")
    if calibration.zero_elapsed_policy not in ZERO_ELAPSED_POLICIES:
        raise ConfigError(
            f"calibration.zero_elapsed_policy must be one of {ZERO_ELAPSED_POLICIES}, "
            f"got {calibration.zero_elapsed_policy!r}"
        )
    _typed("calibration", "reset_between_runs", calibration.reset_between_runs, bool)


def validate_report(report: ReportConfig) -> None:
    """Check report settings are usable."""
    _typed("report", "title", report.title, str)
    _typed("report", "show_progress", report.show_progress, bool)
    _typed("report", "float_precision", report.float_precision, int)
    if report.float_precision < 0:
        raise ConfigError(f"report.float_precision must not be negative, got {report.float_precision}")


class Config:
    """Unified configuration container for microbench."""

    def __init__(self, config_dict: Optional[Dict[str, Any]] = None):
        """Initialize configuration.

        Args:
            config_dict: Optional dictionary to override defaults
        """
        self.config = default_config()
        if config_dict:
            self.update(config_dict)

    def update(self, config_dict: Dict[str, Any]) -> None:
        """Update configuration with provided values.

        Sections backed by dataclasses are updated field by field; unknown
        fields in those sections are rejected. Nothing is applied unless the
        whole update is valid.

        Args:
            config_dict: Dictionary with configuration overrides

        Raises:
            ConfigError: If a section receives unknown fields, a non-mapping,
                or values of the wrong type or range
        """
        candidate = {key: dict(value) if isinstance(value, dict) else value for key, value in self.config.items()}
        for key, value in config_dict.items():
            current = candidate.get(key)
            if is_dataclass(current):
                if not isinstance(value, dict):
                    raise ConfigError(f"Section '{key}' must be a mapping, got {type(value).__name__}")
                known = {f.name for f in fields(current)}
                unknown = sorted(set(value) - known)
                if unknown:
                    raise ConfigError(f"Unknown keys for section '{key}': {', '.join(unknown)}")
                candidate[key] = replace(current, **value)
            elif isinstance(current, dict) and isinstance(value, dict):
                current.update(value)
            else:
                candidate[key] = value
        validate_calibration(candidate["calibration"])
        validate_report(candidate["report"])
        self.config = candidate

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key.

        Args:
            key: Configuration key (e.g., 'calibration.multiplier')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        value: Any = self.config
        for k in key.split("."):
            if isinstance(value, dict):
                value = value.get(k)
            elif is_dataclass(value):
                value = getattr(value, k, None)
            else:
                return default
        return value if value is not None else default

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary.

        Returns:
            Configuration as dictionary
        """
        result = {}
        for key, value in self.config.items():
            if is_dataclass(value):
                result[key] = asdict(value)
            else:
                result[key] = value
        return result

    @property
    def calibration(self) -> CalibrationConfig:
        """Get calibration configuration."""
        return self.config.get("calibration")

    @property
    def report(self) -> ReportConfig:
        """Get report configuration."""
        return self.config.get("report")


def _as_mapping(filepath: str, data: Any) -> Dict[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{filepath} must contain a mapping at top level, got {type(data).__name__}")
    return data


def _writable_path(filepath: str) -> Path:
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


class ConfigManager:
    """Manages loading and saving configuration files."""

    @staticmethod
    def load_yaml(filepath: str) -> Config:
        """Load configuration from YAML file.

        Args:
            filepath: Path to YAML configuration file

        Returns:
            Config object

        Raises:
            ConfigError: If the file cannot be read or parsed
        """
        try:
            with open(filepath, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"Cannot read YAML config {filepath}: {exc}") from exc
        return Config(_as_mapping(filepath, data))

    @staticmethod
    def load_json(filepath: str) -> Config:
        """Load configuration from JSON file.

        Args:
            filepath: Path to JSON configuration file

        Returns:
            Config object

        Raises:
            ConfigError: If the file cannot be read or parsed
        """
        try:
            with open(filepath, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise ConfigError(f"Cannot read JSON config {filepath}: {exc}") from exc
        return Config(_as_mapping(filepath, data))

    @staticmethod
    def save_yaml(config: Config, filepath: str) -> None:
        """Save configuration to YAML file."""
        with _writable_path(filepath).open("w", encoding="utf-8") as f:
            yaml.safe_dump(config.to_dict(), f, default_flow_style=False)

    @staticmethod
    def save_json(config: Config, filepath: str) -> None:
        """Save configuration to JSON file."""
        with _writable_path(filepath).open("w", encoding="utf-8") as f:
            json.dump(config.to_dict(), f, indent=2)

    @staticmethod
    def load(filepath: str) -> Config:
        """Load configuration, picking the parser from the file extension.

        Args:
            filepath: Path to a .yaml, .yml or .json file

        Returns:
            Config object

        Raises:
            ConfigError: If the file is missing, unreadable or has an
                unsupported extension
        """
        if not os.path.exists(filepath):
            raise ConfigError(f"Config file not found: {filepath}")
        if filepath.endswith((".yaml", ".yml")):
            return ConfigManager.load_yaml(filepath)
        if filepath.endswith(".json"):
            return ConfigManager.load_json(filepath)
        raise ConfigError(f"Unsupported config format: {filepath}")

    @staticmethod
    def load_or_default(filepath: Optional[str] = None) -> Config:
        """Load configuration from file or return defaults.

        Args:
            filepath: Optional path to configuration file

        Returns:
            Config object (loaded from file or defaults)
        """
        if filepath and os.path.exists(filepath):
            return ConfigManager.load(filepath)
        return Config()
