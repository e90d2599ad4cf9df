"""Command-line interface for the transit network analyzer.

Without a subcommand the interactive menu is shown:

    1. Create adjacency list from CSV
    2. Perform Dijkstra's algorithm
    3. Exit

``build`` and ``analyze --start N --trials K`` run the same steps
without prompting, for scripted use.
"""

from __future__ import annotations

import argparse
import sys
from typing import Callable, List, Optional

from .config import AppConfig, get_config
from .container import Container
from .domain.errors import ConfigurationError, ReportWriteError
from .domain.models import AnalysisResult, BuildSummary
from .observability import configure_logging
from .services import NetworkAnalyzerService

MENU = """
===== Transit Network Analyzer =====

1. Create adjacency list from CSV
2. Perform Dijkstra's algorithm
3. Exit"""

InputFn = Callable[[str], str]


def _print_build(summary: BuildSummary) -> None:
    print(
        f"Loaded {summary.records_read} edge records "
        f"({summary.records_skipped} skipped): "
        f"{summary.nodes} nodes, {summary.edges} edges."
    )
    print(f"Adjacency list successfully written to '{summary.output_path}'")


def _print_analysis(analysis: AnalysisResult, config: AppConfig) -> None:
    last = analysis.trials[-1]
    reachable = sum(1 for node in last.nodes if last.is_reachable(node)) - 1
    print(
        f"Ran {len(analysis.trials)} trial(s) from node {analysis.start}: "
        f"{reachable} of {analysis.node_count - 1} nodes reachable."
    )
    print(f"Shortest paths have been saved to {config.report.paths_path}")
    print(f"Performance metrics have been saved to {config.report.performance_path}")
    print(f"Path details have been saved to {config.report.details_path}")


def _read_int(prompt: str, input_fn: InputFn) -> Optional[int]:
    try:
        return int(input_fn(prompt).strip())
    except ValueError:
        print("Invalid input")
        return None


def build(service: NetworkAnalyzerService) -> int:
    """Run the build step, printing the outcome. Returns an exit code."""
    print("\nLoading edges from CSV file...")
    summary, error = service.build_adjacency_safe()
    if summary is None:
        print(error)
        return 1
    _print_build(summary)
    return 0


def analyze(
    service: NetworkAnalyzerService, config: AppConfig, start: int, trials: int
) -> int:
    """Run an analysis, printing the outcome. Returns an exit code."""
    analysis, error = service.analyze_safe(start, trials)
    if analysis is None:
        print(error)
        return 1
    _print_analysis(analysis, config)
    return 0


def analyze_interactive(
    service: NetworkAnalyzerService, config: AppConfig, input_fn: InputFn
) -> None:
    """Prompt for a start node and trial count, then run the analysis."""
    if not service.adjacency_source.exists():
        print(
            "No nodes found in the adjacency list. "
            "Please create the adjacency list first."
        )
        return

    start = _read_int("Enter start node: ", input_fn)
    if start is None:
        return
    error = service.check_start(start)
    if error:
        print(error)
        return
    trials = _read_int("Enter number of trials: ", input_fn)
    if trials is None:
        return

    analyze(service, config, start, trials)


def run_menu(
    service: NetworkAnalyzerService,
    config: AppConfig,
    input_fn: InputFn = input,
) -> int:
    """Show the interactive menu until the user exits.

    Returns:
        0 on exit, 1 if a report could not be written.
    """
    while True:
        print(MENU)
        try:
            raw = input_fn("Enter your choice: ")
        except EOFError:
            print("\nExiting program...")
            return 0

        try:
            choice = int(raw.strip())
        except ValueError:
            print("Invalid input. Please enter a number.")
            continue

        try:
            if choice == 1:
                build(service)
            elif choice == 2:
                analyze_interactive(service, config, input_fn)
            elif choice == 3:
                print("Exiting program...")
                return 0
            else:
                print("Invalid choice. Please try again.")
        except EOFError:
            print("\nExiting program...")
            return 0
        except ReportWriteError as e:
            print(f"Fatal: {e}")
            return 1


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="transit-analyzer",
        description="Shortest-path analysis over a transit network CSV export.",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Override the configured log level",
    )

    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("build", help="Create the adjacency list from the network CSV")

    analyze_parser = subparsers.add_parser(
        "analyze", help="Run shortest-path trials from a start node"
    )
    analyze_parser.add_argument("--start", type=int, required=True, help="Start node id")
    analyze_parser.add_argument(
        "--trials", type=int, default=1, help="Number of trials (default: 1)"
    )
    return parser


def main(argv: Optional[List[str]] = None, input_fn: InputFn = input) -> int:
    """Entry point for the ``transit-analyzer`` command."""
    args = _build_parser().parse_args(argv)

    try:
        config = get_config()
    except ConfigurationError as e:
        print(e.message)
        return 1

    observability = config.observability
    if args.log_level:
        observability = observability.model_copy(update={"level": args.log_level})
    configure_logging(observability)

    container = Container.create_default(config)
    service: NetworkAnalyzerService = container.resolve(NetworkAnalyzerService)

    try:
        if args.command == "build":
            return build(service)
        if args.command == "analyze":
            return analyze(service, config, args.start, args.trials)
        return run_menu(service, config, input_fn)
    except ReportWriteError as e:
        print(f"Fatal: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
