"""Command-line interface for microbench."""

import argparse
import importlib.util
import logging
import sys
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as package_version
from pathlib import Path
from types import ModuleType

from microbench.config import ConfigManager
from microbench.reporting import TerminalReporter, export_csv, load_results, save_results
from microbench.runner import Suite
from microbench.utils.errors import MicrobenchError

try:
    MICROBENCH_CLI_VERSION = package_version("microbench")
except PackageNotFoundError:
    MICROBENCH_CLI_VERSION = "1.0"

LOGGER = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def load_benchmark_module(path: str) -> ModuleType:
    """Import a benchmark definition file as a module.

    Raises:
        MicrobenchError: If the file does not exist or cannot be imported
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise MicrobenchError(f"Benchmark file not found: {path}")
    spec = importlib.util.spec_from_file_location(f"microbench_user_{file_path.stem}", file_path)
    if spec is None or spec.loader is None:
        raise MicrobenchError(f"Cannot import benchmark file: {path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[spec.name] = module
    spec.loader.exec_module(module)
    return module


def build_suite(module: ModuleType, suite: Suite) -> Suite:
    """Get the suite a benchmark module defines.

    A module either exposes ``register(suite)``, which fills the suite it is
    given, or a ready-made module-level ``suite``.
    """
    register = getattr(module, "register", None)
    if callable(register):
        register(suite)
        return suite
    defined = getattr(module, "suite", None)
    if isinstance(defined, Suite):
        return defined
    raise MicrobenchError(f"{module.__file__} defines neither register(suite) nor a module-level Suite named 'suite'")


def run_benchmarks(args: argparse.Namespace) -> int:
    """Execute `microbench run`."""
    config = ConfigManager.load(args.config) if args.config else ConfigManager.load_or_default()
    suite = build_suite(load_benchmark_module(args.file), Suite(config=config.calibration))
    if not suite.tests:
        raise MicrobenchError(f"No tests registered by {args.file}")

    if not args.quiet:
        TerminalReporter(config=config.report).attach(suite)
    LOGGER.debug("Running %d tests from %s", len(suite.tests), args.file)
    results = suite.run()

    if args.json:
        path = save_results(results, args.json)
        print(f"[OK] JSON results written to: {path}")
    if args.csv:
        path = export_csv(results, args.csv)
        print(f"[OK] CSV results written to: {path}")
    return 0


def show_results(args: argparse.Namespace) -> int:
    """Execute `microbench show`."""
    results = load_results(args.results)
    reporter = TerminalReporter()
    reporter.on_complete(sorted(results, key=lambda r: r.throughput_per_second, reverse=True))
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build top-level argument parser."""
    parser = argparse.ArgumentParser(
        prog="microbench",
        description="Measure and rank the throughput of Python functions.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"microbench {MICROBENCH_CLI_VERSION}",
        help="Show CLI version and exit",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command")

    run = sub.add_parser("run", help="Benchmark the tests defined in a Python file")
    run.add_argument("file", help="Python file defining register(suite) or a 'suite' object")
    run.add_argument("--config", help="YAML or JSON configuration file")
    run.add_argument("--json", help="Optional output JSON results path")
    run.add_argument("--csv", help="Optional output CSV results path")
    run.add_argument("-q", "--quiet", action="store_true", help="Suppress terminal report")
    run.set_defaults(func=run_benchmarks)

    show = sub.add_parser("show", help="Print a saved JSON results file")
    show.add_argument("results", help="JSON file written by 'run --json'")
    show.set_defaults(func=show_results)
    return parser


def main(argv=None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    if not getattr(args, "command", None):
        parser.print_help()
        return 0
    try:
        return int(args.func(args))
    except MicrobenchError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
