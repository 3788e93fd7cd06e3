"""Default configuration for microbench."""

from dataclasses import dataclass

ZERO_ELAPSED_POLICIES = ("clamp", "error")


@dataclass
class CalibrationConfig:
    """Configuration for the calibrate-then-measure procedure."""

    warmup_seconds: float = 0.15
    calibration_seconds: float = 1.0
    # Non-round on purpose; tunable, not derived.
    multiplier: float = 10.1
    min_iterations: int = 1
    zero_elapsed_policy: str = "clamp"  # clamp or error
    reset_between_runs: bool = False


@dataclass
class ReportConfig:
    """Configuration for result reporting."""

    title: str = "Benchmark Results"
    show_progress: bool = True
    float_precision: int = 2


def default_config() -> dict:
    """Return a fresh default configuration mapping."""
    return {
        "calibration": CalibrationConfig(),
        "report": ReportConfig(),
    }


DEFAULT_CONFIG = default_config()
