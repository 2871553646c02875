import argparse
import sys
import threading
import time
from itertools import cycle

from . import __version__
from .constants import EARTH_RADIUS_KM, GOAL, START
from .errors import OrbitPathError, handle_error
from .models import Graph, PathResult
from .scenario.parser import Scenario, load_scenario
from .search.astar import find_path
from .visibility.builder import BuildStats, build_visibility_graph_with_stats

EXIT_NOT_FOUND = 2


class Spinner:
    """Simple terminal spinner for long-running operations."""

    def __init__(self, message: str):
        self.message = message
        self._stop_event = threading.Event()
        self._spinner_thread = None
        self._chars = cycle(["⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏"])

    def _spin(self):
        while not self._stop_event.is_set():
            char = next(self._chars)
            sys.stdout.write(f"\r{self.message} {char} ")
            sys.stdout.flush()
            time.sleep(0.1)

    def start(self):
        self._stop_event.clear()
        self._spinner_thread = threading.Thread(target=self._spin, daemon=True)
        self._spinner_thread.start()

    def stop(self):
        if self._spinner_thread:
            self._stop_event.set()
            self._spinner_thread.join()
            sys.stdout.write("\r" + " " * (len(self.message) + 3) + "\r")
            sys.stdout.flush()


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="orbitpath",
        description="Find the shortest satellite relay route between two ground terminals.",
    )
    parser.add_argument(
        "scenario",
        type=str,
        help="Scenario file with a #SEED line, satellite lines and a ROUTE line",
    )
    parser.add_argument(
        "--radius",
        type=float,
        default=EARTH_RADIUS_KM,
        help=f"Radius of the occluding sphere in km (default: {EARTH_RADIUS_KM})",
    )
    parser.add_argument(
        "--directed",
        action="store_true",
        help="Test line of sight separately for each direction of a pair",
    )
    parser.add_argument(
        "--no-prefilter",
        action="store_true",
        help="Ray march every pair instead of resolving clear cases geometrically",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print hop count and route distance after the route",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Print detailed internal state while building and searching",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser.parse_args(argv)


def print_verbose_info(
    scenario: Scenario, graph: Graph, stats: BuildStats, result: PathResult
) -> None:
    """Print detailed internal state information for verbose output.

    Args:
        scenario: Parsed scenario
        graph: Built visibility graph
        stats: Graph construction statistics
        result: Search result
    """
    print("=== VERBOSE: Internal State ===")
    print()

    print("Scenario:")
    print(f"  Source: {scenario.source or '<text>'}")
    print(f"  Seed: {scenario.seed if scenario.seed is not None else 'none'}")
    print(f"  Satellites: {len(scenario.satellites)}")
    print(f"  Sphere radius: {scenario.radius:.1f} km")
    print()

    print("Visibility Graph:")
    print(f"  Nodes: {len(graph)}")
    print(f"  Directed edges: {graph.edge_count()}")
    print(f"  Pairs tested: {stats.pairs_tested}")
    print(f"  Pairs ray marched: {stats.pairs_marched}")
    print(f"  {START} links: {len(graph.neighbours(START))}")
    print(f"  {GOAL} links: {len(graph.neighbours(GOAL))}")
    print()

    print("Search:")
    print(f"  Nodes expanded: {result.expanded}")
    if result.found:
        print(f"  Route distance: {result.cost:.3f} km")
        print(f"  Intermediate hops: {len(result.hops)}")
    else:
        print("  Route: not found")
    print("=== END VERBOSE ===")
    print()


def find_route(
    scenario_path: str,
    radius: float = EARTH_RADIUS_KM,
    symmetric: bool = True,
    prefilter: bool = True,
    print_stats: bool = False,
    verbose: bool = False,
) -> int:
    """Load a scenario, build its visibility graph and print the relay route.

    Args:
        scenario_path: Path to the scenario file
        radius: Radius of the occluding sphere in km
        symmetric: Test each unordered pair once and link both directions
        prefilter: Resolve clear cases geometrically before ray marching
        print_stats: If True, print hop count and distance after the route
        verbose: If True, print detailed internal state

    Returns:
        Exit code (0 when a route was found, 2 when none exists, 1 on error)
    """
    try:
        try:
            scenario = load_scenario(scenario_path, radius=radius)
        except OrbitPathError as e:
            return handle_error(e, f"loading scenario {scenario_path}")

        spinner = Spinner("Building visibility graph")
        show_spinner = verbose and sys.stdout.isatty()
        if show_spinner:
            spinner.start()

        try:
            graph, stats = build_visibility_graph_with_stats(
                scenario.positions(),
                sphere_radius=scenario.radius,
                symmetric=symmetric,
                prefilter=prefilter,
            )
        finally:
            if show_spinner:
                spinner.stop()

        result = find_path(graph, START, GOAL)

        if verbose:
            print_verbose_info(scenario, graph, stats, result)

        if not result.found:
            print("Path not found!")
            return EXIT_NOT_FOUND

        print(result.format_hops())

        if print_stats:
            print(f"Hops: {len(result.hops)}")
            print(f"Distance: {result.cost:.3f} km")

        return 0

    except Exception as e:
        return handle_error(e, "finding relay route")


def main(argv=None):
    """CLI entry point."""
    args = parse_args(argv)

    exit_code = find_route(
        scenario_path=args.scenario,
        radius=args.radius,
        symmetric=not args.directed,
        prefilter=not args.no_prefilter,
        print_stats=args.stats,
        verbose=args.verbose,
    )

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
