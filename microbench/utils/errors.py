"""Custom exceptions for microbench.

Errors raised by benchmarked functions are never wrapped; these cover the
harness itself (configuration, clock, async handling, throughput math).
"""


class MicrobenchError(Exception):
    """Base exception for all microbench errors."""

    pass


class ConfigError(MicrobenchError):
    """Raised when configuration is invalid or a required config file is missing."""

    pass


class ClockUnavailableError(MicrobenchError):
    """Raised when no monotonic high-resolution clock is available."""

    pass


class AsyncDetectionError(MicrobenchError):
    """Raised when a function registered as synchronous returns an awaitable."""

    pass


class ZeroElapsedTimeError(MicrobenchError):
    """Raised when a measurement took no measurable time and the policy is ``error``."""

    pass
