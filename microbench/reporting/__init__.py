"""Reporting for microbench results."""

from .export_csv import export_csv, results_to_dataframe
from .serializer import load_results, results_to_payload, save_results
from .terminal_reporter import TerminalReporter, relative_throughput

__all__ = [
    "TerminalReporter",
    "relative_throughput",
    "save_results",
    "load_results",
    "results_to_payload",
    "results_to_dataframe",
    "export_csv",
]
