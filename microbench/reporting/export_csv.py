"""Tabular export of benchmark results."""

from pathlib import Path

import pandas as pd

from microbench.core import BenchmarkResult

COLUMNS = ["rank", "name", "throughput_per_second", "iteration_count", "elapsed_seconds"]


def results_to_dataframe(results: list[BenchmarkResult]) -> pd.DataFrame:
    """Convert results to a DataFrame, one row per result, ranked in input order."""
    rows = [{"rank": idx, **r.to_dict()} for idx, r in enumerate(results, start=1)]
    return pd.DataFrame(rows, columns=COLUMNS)


def export_csv(results: list[BenchmarkResult], path: str | Path) -> Path:
    """Write results to a CSV file and return its path."""
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    results_to_dataframe(results).to_csv(out_path, index=False)
    return out_path
