"""Benchmark suite for microbench.

A :class:`Suite` holds named functions, sync or async, and for each one
runs a two-phase calibration followed by one timed measurement pass:

1. A short warm-up trial (``warmup_seconds``) whose outcome is discarded.
2. A longer trial (``calibration_seconds``) giving a throughput estimate.
3. A measured loop of ``floor(estimate * multiplier)`` calls.

Events:

- ``cycle`` - emitted with ``{"test": TestCase, "result": BenchmarkResult}``
  after each test is measured
- ``complete`` - emitted with the sorted ``list[BenchmarkResult]`` once all
  tests are done
"""

import asyncio
import functools
import inspect
import logging
import math
from collections.abc import Callable, Iterator
from typing import Any, Optional

from microbench.config import CalibrationConfig, validate_calibration
from microbench.core import BenchmarkResult, EstimationOutcome, EventEmitter, TestCase, TimeSource
from microbench.utils.errors import AsyncDetectionError, ZeroElapsedTimeError

LOGGER = logging.getLogger(__name__)


def _layers(func: Callable[..., Any]) -> Iterator[Callable[..., Any]]:
    """Yield ``func`` and every callable under its partials and decorator wrappers."""
    seen: set[int] = set()
    while func is not None and id(func) not in seen:
        seen.add(id(func))
        yield func
        if isinstance(func, functools.partial):
            func = func.func
        else:
            func = getattr(func, "__wrapped__", None)


def _ensure_not_awaitable(test: TestCase, value: Any) -> None:
    """Reject an awaitable returned by a function benchmarked as synchronous."""
    if not inspect.isawaitable(value):
        return
    if inspect.iscoroutine(value):
        value.close()
    raise AsyncDetectionError(
        f"Test '{test.name}' returned an awaitable but was not detected as async; "
        "register it with is_async=True"
    )


class Suite(EventEmitter):
    """Register functions and rank them by measured throughput."""

    def __init__(
        self,
        config: Optional[CalibrationConfig] = None,
        time_source: Optional[TimeSource] = None,
    ):
        """Initialize suite.

        Args:
            config: Calibration settings; defaults to ``CalibrationConfig()``
            time_source: Clock used for every measurement

        Raises:
            ConfigError: If ``config`` holds unusable values
            ClockUnavailableError: If no monotonic clock is available
        """
        super().__init__()
        self.config = config or CalibrationConfig()
        validate_calibration(self.config)
        self.time_source = time_source or TimeSource()
        self._tests: list[TestCase] = []
        self._results: list[BenchmarkResult] = []

    @property
    def tests(self) -> list[TestCase]:
        """Registered tests in registration order."""
        return list(self._tests)

    @property
    def results(self) -> list[BenchmarkResult]:
        """Accumulated results (sorted once a run has completed)."""
        return list(self._results)

    def add(self, name: str, func: Callable[[], Any], *, is_async: Optional[bool] = None) -> "Suite":
        """Add a test for benchmark to the suite.

        Args:
            name: Name of test; duplicates are allowed
            func: Function to call with no arguments
            is_async: Force async handling on or off; ``None`` detects it

        Returns:
            self
        """
        if not isinstance(name, str) or not name:
            raise ValueError("Test name must be a non-empty string")
        if not callable(func):
            raise TypeError(f"Test '{name}' function is not callable: {func!r}")
        self._tests.append(TestCase(name=name, func=func, is_async=is_async))
        return self

    register = add

    def reset(self) -> None:
        """Drop accumulated results; registered tests are kept."""
        self._results.clear()

    @staticmethod
    def detect_async(func: Callable[..., Any]) -> bool:
        """Return True if ``func`` is a coroutine function.

        The function is not called. Callables that merely return an awaitable
        must be registered with ``is_async=True``.
        """
        for layer in _layers(func):
            if inspect.iscoroutinefunction(layer):
                return True
            if not inspect.isfunction(layer) and inspect.iscoroutinefunction(getattr(layer, "__call__", None)):
                return True
        return False

    def _resolve_async(self, test: TestCase) -> bool:
        if test.is_async is not None:
            return test.is_async
        return self.detect_async(test.func)

    async def estimate(
        self,
        test: TestCase,
        is_async: bool,
        limit_time: Optional[float] = None,
    ) -> EstimationOutcome:
        """Do a rough estimate on number of times test can run per second.

        Args:
            test: Test to estimate
            is_async: Await each call before making the next one
            limit_time: How long to run, in seconds; defaults to ``warmup_seconds``

        Returns:
            Estimation outcome
        """
        limit = self.config.warmup_seconds if limit_time is None else limit_time
        clock = self.time_source
        func = test.func
        elapsed = 0.0
        count = 0

        start = clock.mark()
        if is_async:
            while elapsed < limit:
                await func()
                count += 1
                elapsed = clock.elapsed_since(start)
        else:
            _ensure_not_awaitable(test, func())
            count = 1
            elapsed = clock.elapsed_since(start)
            while elapsed < limit:
                func()
                count += 1
                elapsed = clock.elapsed_since(start)

        return EstimationOutcome(
            elapsed_seconds=elapsed,
            iteration_count=count,
            estimated_throughput=math.floor(count / elapsed),
        )

    async def calibrate(self, test: TestCase, is_async: bool) -> int:
        """Pick the number of iterations for the measured run.

        Args:
            test: Test to calibrate
            is_async: Test should be awaited

        Returns:
            Iteration count, never below ``min_iterations``
        """
        await self.estimate(test, is_async, self.config.warmup_seconds)
        outcome = await self.estimate(test, is_async, self.config.calibration_seconds)
        target = math.floor(outcome.estimated_throughput * self.config.multiplier)
        count = max(int(self.config.min_iterations), target)
        LOGGER.debug(
            "Calibrated '%s': %d calls in %.4fs, estimate %d/s, target %d iterations",
            test.name,
            outcome.iteration_count,
            outcome.elapsed_seconds,
            outcome.estimated_throughput,
            count,
        )
        return count

    async def measure(self, func: Callable[[], Any], is_async: bool, count: int) -> float:
        """Measure time taken to execute function ``count`` times.

        Args:
            func: Function to call
            is_async: Function is async (will await on it)
            count: Number of times to call

        Returns:
            Time in seconds
        """
        clock = self.time_source
        start = clock.mark()

        if is_async:
            for _ in range(count):
                await func()
        else:
            for _ in range(count):
                func()

        return clock.elapsed_since(start)

    def _throughput(self, test: TestCase, count: int, elapsed: float) -> float:
        if elapsed > 0:
            return count / elapsed
        if self.config.zero_elapsed_policy == "error":
            raise ZeroElapsedTimeError(
                f"Test '{test.name}' ran {count} iterations in no measurable time"
            )
        LOGGER.warning(
            "Test '%s' ran %d iterations in no measurable time; clamping to clock resolution %.3gs",
            test.name,
            count,
            self.time_source.resolution,
        )
        return count / self.time_source.resolution

    async def run_test(self, test: TestCase, is_async: bool) -> BenchmarkResult:
        """Run benchmark on a test.

        Args:
            test: Test to run
            is_async: Test should be awaited

        Returns:
            Test benchmark result
        """
        count = await self.calibrate(test, is_async)
        elapsed = await self.measure(test.func, is_async, count)
        return BenchmarkResult(
            name=test.name,
            elapsed_seconds=elapsed,
            iteration_count=count,
            throughput_per_second=self._throughput(test, count, elapsed),
        )

    async def run_one(self, test: TestCase) -> BenchmarkResult:
        """Detect whether ``test`` is async, then benchmark it."""
        return await self.run_test(test, self._resolve_async(test))

    async def run_all(self) -> list[BenchmarkResult]:
        """Run benchmark on all tests.

        Results accumulate across calls unless ``reset_between_runs`` is set
        or :meth:`reset` is called.

        Returns:
            Results sorted from fastest to slowest
        """
        if self.config.reset_between_runs:
            self.reset()

        for test in list(self._tests):
            result = await self.run_one(test)
            LOGGER.info(
                "%s: %.2f ops/sec (%d iterations in %.4fs)",
                result.name,
                result.throughput_per_second,
                result.iteration_count,
                result.elapsed_seconds,
            )
            self._results.append(result)
            self.emit("cycle", {"test": test, "result": result})

        self._results.sort(key=lambda r: r.throughput_per_second, reverse=True)
        results = self.results
        self.emit("complete", results)
        return results

    def run(self) -> list[BenchmarkResult]:
        """Run all tests from synchronous code on a fresh event loop."""
        return asyncio.run(self.run_all())
