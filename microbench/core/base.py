"""Core data types for microbench."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class TestCase:
    """A named function registered for benchmarking.

    ``is_async`` of ``None`` means the runner decides by introspecting ``func``.
    """

    __test__ = False  # not a pytest test class

    name: str
    func: Callable[[], Any]
    is_async: Optional[bool] = None


@dataclass(frozen=True)
class BenchmarkResult:
    """Measured throughput of one test.

    Attributes:
        name: Name of the test
        elapsed_seconds: Wall-clock seconds the measured loop took
        iteration_count: Number of calls made in the measured loop
        throughput_per_second: Calls per second
    """

    name: str
    elapsed_seconds: float
    iteration_count: int
    throughput_per_second: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary."""
        return {
            "name": self.name,
            "elapsed_seconds": self.elapsed_seconds,
            "iteration_count": self.iteration_count,
            "throughput_per_second": self.throughput_per_second,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "BenchmarkResult":
        """Build a result from a dictionary produced by ``to_dict``."""
        return cls(
            name=str(payload["name"]),
            elapsed_seconds=float(payload["elapsed_seconds"]),
            iteration_count=int(payload["iteration_count"]),
            throughput_per_second=float(payload["throughput_per_second"]),
        )


@dataclass(frozen=True)
class EstimationOutcome:
    """Outcome of a time-limited trial run used during calibration."""

    elapsed_seconds: float
    iteration_count: int
    estimated_throughput: int
