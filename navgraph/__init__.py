"""navgraph: shortest routes and turn-by-turn directions on road networks.

navgraph finds the shortest route between two geographic points with an A*
search over a road graph and folds the route into human-readable directions.

Primary API:
    find_route() - Route with cost and directions between two coordinates
    shortest_path() - Node IDs of the shortest path between two coordinates
    route_directions() - Directions for an existing node path
    RoadGraph - Road network model (networkx-based)
    load_graph() - Read a road graph from YAML or JSON

Example:
    from navgraph import RoadGraph, find_route

    g = RoadGraph()
    g.add_node(1, lon=-122.2585, lat=37.8708)
    g.add_node(2, lon=-122.2590, lat=37.8712)
    g.add_way("w1", [1, 2], name="Bancroft Way")

    route = find_route(g, -122.2585, 37.8708, -122.2590, 37.8712)
    for direction in route.directions:
        print(direction)
"""

from __future__ import annotations

from navgraph import cli, logging
from navgraph.config import SEARCH_CONFIG, TURN_POLICY, SearchConfig, TurnPolicy
from navgraph.directions import NavigationDirection, parse_direction, route_directions
from navgraph.lib.algorithms.astar import astar
from navgraph.lib.algorithms.base import (
    UNKNOWN_ROAD,
    DuplicateKeyError,
    EdgeWayAccess,
    EmptyQueueError,
    GraphAccess,
    KeyNotFoundError,
    MalformedDirectionError,
    NoPathFoundError,
    TurnKind,
)
from navgraph.lib.algorithms.priority_queue import IndexedMinPQ
from navgraph.lib.graph import RoadGraph
from navgraph.lib.io import graph_to_dict, load_graph, save_graph
from navgraph.lib.path import Route
from navgraph.router import find_route, node_path, shortest_path

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Model
    "RoadGraph",
    "GraphAccess",
    "EdgeWayAccess",
    "Route",
    "load_graph",
    "save_graph",
    "graph_to_dict",
    # Search
    "IndexedMinPQ",
    "astar",
    "node_path",
    "shortest_path",
    "find_route",
    # Directions
    "TurnKind",
    "NavigationDirection",
    "route_directions",
    "parse_direction",
    "UNKNOWN_ROAD",
    # Configuration
    "TurnPolicy",
    "SearchConfig",
    "TURN_POLICY",
    "SEARCH_CONFIG",
    # Errors
    "DuplicateKeyError",
    "KeyNotFoundError",
    "EmptyQueueError",
    "NoPathFoundError",
    "MalformedDirectionError",
    # Utilities
    "cli",
    "logging",
]
