"""Command-line interface for navgraph."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from time import perf_counter
from typing import Any, List, Optional

from navgraph.config import SEARCH_CONFIG
from navgraph.lib.algorithms.base import NoPathFoundError
from navgraph.lib.graph import RoadGraph
from navgraph.lib.io import load_graph
from navgraph.logging import get_logger, set_verbosity
from navgraph.router import find_route

logger = get_logger(__name__)


def _format_table(headers: List[str], rows: List[List[Any]], min_width: int = 6) -> str:
    """Format rows as a simple ASCII table indented by three spaces.

    Args:
        headers: Column headers
        rows: Data rows
        min_width: Minimum column width

    Returns:
        Formatted table string, or an empty string when there are no rows.
    """
    if not rows:
        return ""

    all_data = [headers] + [[str(item) for item in row] for row in rows]
    col_widths = [
        max(max(len(row[idx]) for row in all_data), min_width)
        for idx in range(len(headers))
    ]

    def format_row(row_data: List[str]) -> str:
        return "   " + " | ".join(
            f"{item:<{col_widths[i]}}" for i, item in enumerate(row_data)
        )

    lines = [format_row(all_data[0])]
    lines.append("   " + "-+-".join("-" * width for width in col_widths))
    lines.extend(format_row(row) for row in all_data[1:])
    return "\n".join(lines)


def _format_duration(seconds: float) -> str:
    """Return a concise duration such as "12.3 ms" or "1.23 s"."""
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f} ms"
    return f"{seconds:.2f} s"


def _load(path: Path, clean: bool) -> RoadGraph:
    logger.info(f"Loading graph from: {path}")
    graph = load_graph(path, clean=clean)
    logger.info(
        f"Graph loaded: {graph.number_of_nodes()} nodes, {graph.number_of_edges()} edges"
    )
    return graph


def _route(
    path: Path,
    start: List[float],
    dest: List[float],
    as_json: bool,
    max_iterations: Optional[int],
) -> None:
    """Find and print the route between two coordinates of a graph file.

    Args:
        path: Graph YAML or JSON file.
        start: Longitude and latitude of the start location.
        dest: Longitude and latitude of the destination location.
        as_json: Print the route as JSON instead of text directions.
        max_iterations: Optional cap on settled nodes.
    """
    _start_time = perf_counter()
    try:
        graph = _load(path, clean=True)
        route = find_route(
            graph,
            start[0],
            start[1],
            dest[0],
            dest[1],
            max_iterations=max_iterations,
        )
    except FileNotFoundError:
        logger.error(f"Graph file not found: {path}")
        print(f"❌ ERROR: Graph file not found: {path}")
        sys.exit(1)
    except NoPathFoundError as e:
        logger.warning(str(e))
        print(f"❌ No route found: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Failed to compute route: {type(e).__name__}: {e}")
        print(f"❌ ERROR: Failed to compute route: {type(e).__name__}: {e}")
        sys.exit(1)

    if as_json:
        print(json.dumps(route.to_dict(), indent=2, default=str))
    else:
        print(f"Route: {len(route)} nodes, {route.cost:.3f} miles")
        for idx, direction in enumerate(route.directions, start=1):
            print(f"  {idx}. {direction}")
        if not route.directions:
            print("  Start and destination are the same place.")

    logger.info(
        f"Route computed successfully in {_format_duration(perf_counter() - _start_time)}"
    )


def _inspect(path: Path) -> None:
    """Print a summary of a graph file."""
    try:
        graph = _load(path, clean=False)
    except FileNotFoundError:
        logger.error(f"Graph file not found: {path}")
        print(f"❌ ERROR: Graph file not found: {path}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Failed to inspect graph: {type(e).__name__}: {e}")
        print(f"❌ ERROR: Failed to inspect graph: {type(e).__name__}: {e}")
        sys.exit(1)

    isolated = sum(1 for n in graph.vertices() if graph.degree(n) == 0)
    print("GRAPH SUMMARY")
    print(f"  Nodes: {graph.number_of_nodes()} ({isolated} isolated)")
    print(f"  Edges: {graph.number_of_edges()}")
    print(f"  Ways: {len(graph.ways())}")

    members: dict = {}
    for u, v, way_id in graph.edges(data="way"):
        if way_id is not None:
            members.setdefault(way_id, set()).update((u, v))
    rows = [
        [way_id, name, len(members.get(way_id, ()))]
        for way_id, name in graph.ways().items()
    ]
    table = _format_table(["Way", "Name", "Nodes"], rows)
    if table:
        print(table)


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``navgraph`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="navgraph",
        description="Find shortest routes and turn-by-turn directions on road graphs.",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{route,inspect}",
        help="Available commands",
    )

    route_parser = subparsers.add_parser("route", help="Route between two locations")
    route_parser.add_argument("graph", type=Path, help="Path to graph YAML or JSON")
    route_parser.add_argument(
        "--start",
        nargs=2,
        type=float,
        required=True,
        metavar=("LON", "LAT"),
        help="Start location",
    )
    route_parser.add_argument(
        "--dest",
        nargs=2,
        type=float,
        required=True,
        metavar=("LON", "LAT"),
        help="Destination location",
    )
    route_parser.add_argument(
        "--json", action="store_true", help="Print the route as JSON"
    )
    route_parser.add_argument(
        "--max-iterations",
        type=int,
        default=SEARCH_CONFIG.max_iterations,
        help="Give up after settling this many nodes",
    )

    inspect_parser = subparsers.add_parser("inspect", help="Summarize a graph file")
    inspect_parser.add_argument("graph", type=Path, help="Path to graph YAML or JSON")

    effective_args = sys.argv[1:] if argv is None else argv

    # If no arguments are provided, show help and exit cleanly
    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    set_verbosity(verbose=args.verbose, quiet=args.quiet)
    logger.debug("Debug logging enabled")

    if args.command == "route":
        _route(args.graph, args.start, args.dest, args.json, args.max_iterations)
    elif args.command == "inspect":
        _inspect(args.graph)


if __name__ == "__main__":
    main()
