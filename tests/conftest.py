"""Pytest configuration and fixtures."""

import pytest

from microbench.config import CalibrationConfig
from microbench.core import NS_PER_SEC, TimeSource


class FakeClock:
    """Nanosecond clock that only moves when told to."""

    def __init__(self, start_ns: int = 5 * NS_PER_SEC):
        self.now_ns = start_ns

    def __call__(self) -> int:
        return self.now_ns

    def advance(self, seconds: float) -> None:
        self.now_ns += round(seconds * NS_PER_SEC)


@pytest.fixture
def fake_clock():
    """Provide a manually advanced clock."""
    return FakeClock()


@pytest.fixture
def fake_time_source(fake_clock):
    """Provide a TimeSource reading the fake clock."""
    return TimeSource(clock=fake_clock, resolution=1e-9)


@pytest.fixture
def fast_config():
    """Calibration settings that keep real-clock runs well under a second per test."""
    return CalibrationConfig(warmup_seconds=0.01, calibration_seconds=0.05, multiplier=0.5)


@pytest.fixture
def benchmark_file(tmp_path):
    """Write a benchmark definition file using register(suite)."""
    path = tmp_path / "bench_sample.py"
    path.write_text(
        "import asyncio\n"
        "\n"
        "\n"
        "def register(suite):\n"
        "    data = list(range(100))\n"
        "    suite.add('sum', lambda: sum(data))\n"
        "    suite.add('sorted', lambda: sorted(data, reverse=True))\n"
        "\n"
        "    async def sleeper():\n"
        "        await asyncio.sleep(0.002)\n"
        "\n"
        "    suite.add('sleep', sleeper)\n"
    )
    return path


@pytest.fixture
def fast_config_file(tmp_path):
    """Write a YAML config file with fast calibration windows."""
    path = tmp_path / "microbench.yaml"
    path.write_text(
        "calibration:\n"
        "  warmup_seconds: 0.01\n"
        "  calibration_seconds: 0.05\n"
        "  multiplier: 0.5\n"
        "report:\n"
        "  title: CLI Results\n"
    )
    return path
