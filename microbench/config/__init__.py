"""Configuration management for microbench."""

from .config import Config, ConfigManager, validate_calibration, validate_report
from .defaults import DEFAULT_CONFIG, CalibrationConfig, ReportConfig

__all__ = [
    "Config",
    "ConfigManager",
    "validate_calibration",
    "validate_report",
    "DEFAULT_CONFIG",
    "CalibrationConfig",
    "ReportConfig",
]
