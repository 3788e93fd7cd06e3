"""Core module for microbench."""

from .base import BenchmarkResult, EstimationOutcome, TestCase
from .events import EventEmitter
from .timer import NS_PER_SEC, TimeSource, Timestamp, hr_to_seconds

__all__ = [
    "BenchmarkResult",
    "EstimationOutcome",
    "TestCase",
    "EventEmitter",
    "NS_PER_SEC",
    "TimeSource",
    "Timestamp",
    "hr_to_seconds",
]
