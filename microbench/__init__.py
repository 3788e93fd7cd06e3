"""microbench: calibrated throughput benchmarks for sync and async Python functions."""

from microbench.config import CalibrationConfig, Config, ConfigManager
from microbench.core import BenchmarkResult, EstimationOutcome, EventEmitter, TestCase, TimeSource
from microbench.runner import BenchmarkRunner, Suite
from microbench.utils.errors import (
    AsyncDetectionError,
    ClockUnavailableError,
    ConfigError,
    MicrobenchError,
    ZeroElapsedTimeError,
)

__version__ = "1.0"

__all__ = [
    "Suite",
    "BenchmarkRunner",
    "TestCase",
    "BenchmarkResult",
    "EstimationOutcome",
    "EventEmitter",
    "TimeSource",
    "CalibrationConfig",
    "Config",
    "ConfigManager",
    "MicrobenchError",
    "ConfigError",
    "ClockUnavailableError",
    "AsyncDetectionError",
    "ZeroElapsedTimeError",
]
