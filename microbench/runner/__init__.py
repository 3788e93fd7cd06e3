"""Benchmark runner module for microbench."""

from .suite import Suite

BenchmarkRunner = Suite

__all__ = ["Suite", "BenchmarkRunner"]
