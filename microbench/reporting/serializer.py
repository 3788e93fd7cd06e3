"""Serialization helpers for benchmark results."""

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Union

from microbench.core import BenchmarkResult
from microbench.utils.errors import MicrobenchError

PathLike = Union[str, Path]


def results_to_payload(results: list[BenchmarkResult]) -> dict:
    """Wrap results in a timestamped JSON-ready document."""
    return {
        "timestamp": datetime.now(UTC).isoformat(),
        "benchmarks": [r.to_dict() for r in results],
    }


def save_results(results: list[BenchmarkResult], path: PathLike) -> Path:
    """Save results to JSON and return the written path."""
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", encoding="utf-8") as handle:
        json.dump(results_to_payload(results), handle, indent=2)
    return out_path


def load_results(path: PathLike) -> list[BenchmarkResult]:
    """Load results written by :func:`save_results`.

    Raises:
        MicrobenchError: If the file is unreadable, is not JSON, or holds
            malformed benchmark entries
    """
    in_path = Path(path)
    try:
        with in_path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except (OSError, json.JSONDecodeError) as exc:
        raise MicrobenchError(f"Cannot read results file {in_path}: {exc}") from exc
    benchmarks = payload.get("benchmarks") if isinstance(payload, dict) else None
    if not isinstance(benchmarks, list):
        raise MicrobenchError(f"{in_path} is not a benchmark results document")
    try:
        return [BenchmarkResult.from_dict(item) for item in benchmarks]
    except (KeyError, TypeError, ValueError) as exc:
        raise MicrobenchError(f"{in_path} has a malformed benchmark entry: {exc!r}") from exc
