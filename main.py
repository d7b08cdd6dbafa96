#!/usr/bin/env python3
"""
Venue Planner - Event Allocation with Corridor Traffic Safety
============================================================

Finds an allocation of events to venues such that the combined crowd
traffic on every shared corridor stays within its capacity.

Usage:
    python main.py --demo                          # Built-in Brisbane venues
    python main.py --venues venues.json --event Concert:180 --event Expo:100
    python main.py --demo --report                 # Also print corridor usage
    python main.py --test                          # Run the test suite
    python main.py --check                         # Check dependencies

Exit codes: 0 allocation found, 1 no safe allocation, 2 invalid input.

Requirements:
    - Python 3.9+
    - networkx, numpy
    - pytest (for --test)
"""

import sys
import argparse
from typing import List, Optional


EXIT_ALLOCATED = 0
EXIT_INFEASIBLE = 1
EXIT_INVALID = 2


def parse_event(text: str):
    """Parse a NAME:SIZE argument into an Event."""
    from venueplanner.models import Event, InvalidArgumentError

    name, sep, size = text.rpartition(':')
    if not sep or not name:
        raise InvalidArgumentError(f"event {text!r} must look like NAME:SIZE")
    try:
        return Event(name, int(size))
    except ValueError as exc:
        raise InvalidArgumentError(f"event {text!r} has an invalid size") from exc


def run_cli(args: argparse.Namespace) -> int:
    """
    Load venues, run the allocator and print the result.

    Invalid input is reported on stderr with exit code 2; an infeasible
    problem is informational and exits with 1.
    """
    from venueplanner.algorithms import Allocator, AllocatorConfig
    from venueplanner.data import build_sample_network, get_sample_events
    from venueplanner.models import PlannerError, VenueNetwork
    from venueplanner.reporting import build_traffic_report

    try:
        if args.venues:
            network = VenueNetwork.load_from_file(args.venues)
        else:
            network = build_sample_network()

        if args.event:
            events = [parse_event(text) for text in args.event]
        elif args.demo:
            events = get_sample_events()
        else:
            events = []

        config = AllocatorConfig(prune_partial_traffic=not args.no_pruning)
        allocator = Allocator(config)
        result = allocator.solve(events, network.get_venues())
    except (PlannerError, OSError) as exc:
        print(f"Invalid input: {exc}", file=sys.stderr)
        return EXIT_INVALID

    stats = network.get_stats()
    print("Venue Planner")
    print("=" * 50)
    print(f"  Venues: {stats.total_venues}")
    print(f"  Corridors: {stats.total_corridors} ({stats.shared_corridors} shared)")
    print(f"  Events: {len(events)}")

    if not result.found:
        print("\nNo safe allocation exists for these events.")
        print(f"  Assignments tried: {result.metrics.nodes_explored}")
        return EXIT_INFEASIBLE

    print("\nAllocation:")
    for event, venue in result.allocation.items():
        print(f"  {event} -> {venue}")
    print(f"\n  Assignments tried: {result.metrics.nodes_explored}, "
          f"pruned: {result.metrics.branches_pruned}, "
          f"time: {result.metrics.execution_time_seconds:.4f}s")

    if args.report:
        report = build_traffic_report(result.allocation.traffic())
        print("\nCorridor traffic:")
        print(report.format_table())

    return EXIT_ALLOCATED


def run_tests() -> int:
    """Run the test suite with pytest."""
    print("Running tests...")

    import subprocess
    result = subprocess.run(
        [sys.executable, "-m", "pytest", "tests/", "-v", "--tb=short"],
        cwd=sys.path[0] or "."
    )
    return result.returncode


def check_dependencies() -> bool:
    """
    Report which required libraries are installed.
    """
    print("Dependency check")
    print("=" * 50)

    dependencies = [
        ("networkx", "networkx"),
        ("numpy", "numpy"),
        ("pytest", "pytest"),
    ]

    all_ok = True
    for name, package in dependencies:
        try:
            __import__(package)
            status = "OK"
        except ImportError:
            status = "MISSING"
            all_ok = False

        print(f"  {name:15} [{status}]")

    print()
    if all_ok:
        print("All dependencies are installed.")
    else:
        print("Some dependencies are missing. Run:")
        print("  pip install -e .[test]")

    return all_ok


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Venue Planner - allocate events to venues safely",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --demo
  python main.py --venues venues.json --event Concert:180 --event Expo:100
  python main.py --demo --report --log-level INFO
        """
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--venues", metavar="FILE",
        help="JSON file describing venues and their corridors"
    )
    source.add_argument(
        "--demo", action="store_true",
        help="Use the built-in demo venues (and demo events if none are given)"
    )
    parser.add_argument(
        "--event", action="append", metavar="NAME:SIZE",
        help="Event to allocate; repeat for several events"
    )
    parser.add_argument(
        "--report", action="store_true",
        help="Print corridor utilisation for the allocation found"
    )
    parser.add_argument(
        "--no-pruning", action="store_true",
        help="Check traffic safety only on complete allocations"
    )
    parser.add_argument(
        "--log-level", default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: $VENUEPLANNER_LOG_LEVEL or WARNING)"
    )
    parser.add_argument(
        "--test", action="store_true",
        help="Run the test suite"
    )
    parser.add_argument(
        "--check", action="store_true",
        help="Check dependencies"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point: parse arguments and dispatch to the selected mode.
    """
    args = build_parser().parse_args(argv)

    if args.check:
        return 0 if check_dependencies() else 1
    if args.test:
        return run_tests()

    from venueplanner.utils import configure_logging
    configure_logging(args.log_level, force=args.log_level is not None)
    return run_cli(args)


if __name__ == "__main__":
    sys.exit(main())
