"""Shared utilities for microbench."""

from .errors import (
    AsyncDetectionError,
    ClockUnavailableError,
    ConfigError,
    MicrobenchError,
    ZeroElapsedTimeError,
)

__all__ = [
    "MicrobenchError",
    "ConfigError",
    "ClockUnavailableError",
    "AsyncDetectionError",
    "ZeroElapsedTimeError",
]
