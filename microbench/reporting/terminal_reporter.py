"""Terminal reporter using rich output."""

from typing import Any

import numpy as np
from rich.console import Console
from rich.table import Table

from microbench.core import BenchmarkResult, EventEmitter
from microbench.config import ReportConfig


def relative_throughput(results: list[BenchmarkResult]) -> list[float]:
    """Return each result's throughput as a percentage of the fastest one."""
    if not results:
        return []
    values = np.array([r.throughput_per_second for r in results], dtype=float)
    fastest = values.max()
    if fastest <= 0:
        return [0.0] * len(results)
    return (values / fastest * 100.0).tolist()


class TerminalReporter:
    """Print progress lines and a final ranking table for a suite run."""

    def __init__(self, config: ReportConfig | None = None, console: Console | None = None):
        self.config = config or ReportConfig()
        self.console = console or Console()

    def attach(self, emitter: EventEmitter) -> "TerminalReporter":
        """Subscribe to ``cycle`` and ``complete`` events of ``emitter``."""
        if self.config.show_progress:
            emitter.on("cycle", self.on_cycle)
        emitter.on("complete", self.on_complete)
        return self

    def detach(self, emitter: EventEmitter) -> None:
        emitter.off("cycle", self.on_cycle)
        emitter.off("complete", self.on_complete)

    def on_cycle(self, payload: dict[str, Any]) -> None:
        """Print one line for a finished test."""
        result: BenchmarkResult = payload["result"]
        self.console.print(
            f"[bold]{result.name}[/bold] x {self._fmt_rate(result.throughput_per_second)} ops/sec "
            f"({result.iteration_count} runs sampled in {result.elapsed_seconds:.3f}s)"
        )

    def on_complete(self, results: list[BenchmarkResult]) -> None:
        """Render the sorted results table."""
        self.console.print(self.build_table(results))
        if results:
            self.console.print(f"Fastest is [green]{results[0].name}[/green]")

    def build_table(self, results: list[BenchmarkResult]) -> Table:
        """Build a rich table, one row per result in the given order."""
        table = Table(title=self.config.title)
        table.add_column("#", justify="right")
        table.add_column("Test", style="bold")
        table.add_column("ops/sec", justify="right")
        table.add_column("Iterations", justify="right")
        table.add_column("Seconds", justify="right")
        table.add_column("Relative", justify="right")

        for rank, (result, percent) in enumerate(zip(results, relative_throughput(results)), start=1):
            table.add_row(
                str(rank),
                result.name,
                self._fmt_rate(result.throughput_per_second),
                str(result.iteration_count),
                f"{result.elapsed_seconds:.4f}",
                f"{percent:.1f}%",
            )
        return table

    def _fmt_rate(self, value: float) -> str:
        return f"{value:,.{self.config.float_precision}f}"
