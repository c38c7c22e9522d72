"""Route queries between geographic coordinates.

The functions here resolve coordinates to graph nodes, run the A* search and
turn the result into a node path, a :class:`~navgraph.lib.path.Route` or
directions.
"""

from __future__ import annotations

from time import perf_counter
from typing import List, Optional

from navgraph.config import SEARCH_CONFIG, TurnPolicy
from navgraph.directions import route_directions
from navgraph.lib.algorithms.astar import Heuristic, astar
from navgraph.lib.algorithms.base import GraphAccess, NodeID
from navgraph.lib.algorithms.path_utils import resolve_to_path
from navgraph.lib.path import Route
from navgraph.logging import get_logger

logger = get_logger(__name__)


def node_path(
    graph: GraphAccess,
    src_node: NodeID,
    dst_node: NodeID,
    heuristic: Optional[Heuristic] = None,
    max_iterations: Optional[int] = None,
) -> Route:
    """
    Shortest route between two nodes of the graph, without directions.

    ``max_iterations`` defaults to ``SEARCH_CONFIG.max_iterations``.

    Raises:
        NoPathFoundError: If the destination is unreachable.
    """
    if max_iterations is None:
        max_iterations = SEARCH_CONFIG.max_iterations
    costs, pred = astar(graph, src_node, dst_node, heuristic, max_iterations)
    return Route(nodes=resolve_to_path(src_node, dst_node, pred), cost=costs[dst_node])


def shortest_path(
    graph: GraphAccess,
    st_lon: float,
    st_lat: float,
    dest_lon: float,
    dest_lat: float,
    heuristic: Optional[Heuristic] = None,
    max_iterations: Optional[int] = None,
) -> List[NodeID]:
    """
    Node IDs of the shortest path from the node closest to the start location
    to the node closest to the destination location.

    Args:
        graph: The graph to use.
        st_lon: The longitude of the start location.
        st_lat: The latitude of the start location.
        dest_lon: The longitude of the destination location.
        dest_lat: The latitude of the destination location.
        heuristic: Optional override of the A* heuristic.
        max_iterations: Optional cap on settled nodes.

    Returns:
        Node IDs in travel order, source and destination included.

    Raises:
        NoPathFoundError: If the destination is unreachable.
    """
    src_node = graph.nearest_vertex(st_lon, st_lat)
    dst_node = graph.nearest_vertex(dest_lon, dest_lat)
    return node_path(graph, src_node, dst_node, heuristic, max_iterations).nodes


def find_route(
    graph: GraphAccess,
    st_lon: float,
    st_lat: float,
    dest_lon: float,
    dest_lat: float,
    policy: Optional[TurnPolicy] = None,
    heuristic: Optional[Heuristic] = None,
    max_iterations: Optional[int] = None,
) -> Route:
    """
    Shortest route between two locations, with turn-by-turn directions.

    Arguments are those of :func:`shortest_path` plus the turn ``policy``
    used for the directions.

    Raises:
        NoPathFoundError: If the destination is unreachable.
    """
    started = perf_counter()
    src_node = graph.nearest_vertex(st_lon, st_lat)
    dst_node = graph.nearest_vertex(dest_lon, dest_lat)
    logger.debug(
        f"Routing ({st_lon}, {st_lat}) -> ({dest_lon}, {dest_lat}) "
        f"as node '{src_node}' -> node '{dst_node}'"
    )

    route = node_path(graph, src_node, dst_node, heuristic, max_iterations)
    route.directions = route_directions(graph, route.nodes, policy)

    logger.debug(
        f"Route of {len(route)} nodes, {route.cost:.3f} miles, "
        f"{len(route.directions)} directions in {perf_counter() - started:.4f} s"
    )
    return route
