"""Monotonic high-resolution time source."""

import time
from collections.abc import Callable
from typing import NamedTuple, Optional

from microbench.utils.errors import ClockUnavailableError

NS_PER_SEC = 1_000_000_000


class Timestamp(NamedTuple):
    """High resolution instant split into whole seconds and a nanosecond remainder."""

    seconds: int
    nanoseconds: int


def hr_to_seconds(hr: Timestamp) -> float:
    """Convert high resolution time to fractional seconds.

    Args:
        hr: High resolution time

    Returns:
        Seconds
    """
    return hr.seconds + hr.nanoseconds / NS_PER_SEC


class TimeSource:
    """Wrap a monotonic nanosecond clock.

    By default the platform ``perf_counter`` clock is used. Tests and callers
    with special needs may pass any callable returning integer nanoseconds.
    """

    def __init__(self, clock: Optional[Callable[[], int]] = None, resolution: Optional[float] = None):
        """Initialize time source.

        Args:
            clock: Callable returning monotonic nanoseconds; defaults to
                ``time.perf_counter_ns``
            resolution: Clock resolution in seconds; read from the platform
                when the default clock is used

        Raises:
            ClockUnavailableError: If the platform has no monotonic clock
        """
        if clock is None:
            try:
                info = time.get_clock_info("perf_counter")
            except ValueError as exc:
                raise ClockUnavailableError(f"perf_counter clock unavailable: {exc}") from exc
            if not info.monotonic:
                raise ClockUnavailableError(f"perf_counter clock ({info.implementation}) is not monotonic")
            clock = time.perf_counter_ns
            if resolution is None:
                resolution = info.resolution
        self._clock = clock
        self.resolution = resolution if resolution is not None else 1.0 / NS_PER_SEC

    def now(self) -> Timestamp:
        """Return the current instant."""
        seconds, nanoseconds = divmod(self._clock(), NS_PER_SEC)
        return Timestamp(seconds, nanoseconds)

    def mark(self) -> Timestamp:
        """Return an opaque instant for a later ``elapsed_since`` call."""
        return self.now()

    def delta(self, start: Timestamp) -> Timestamp:
        """Return the time passed since ``start`` as a high resolution value."""
        end_ns = self._clock()
        start_ns = start.seconds * NS_PER_SEC + start.nanoseconds
        seconds, nanoseconds = divmod(max(0, end_ns - start_ns), NS_PER_SEC)
        return Timestamp(seconds, nanoseconds)

    def elapsed_since(self, start: Timestamp) -> float:
        """Return non-negative seconds elapsed since ``start``."""
        return hr_to_seconds(self.delta(start))
