from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Set, Tuple

from navgraph.lib.algorithms.base import Cost, GraphAccess, NoPathFoundError, NodeID
from navgraph.lib.algorithms.priority_queue import IndexedMinPQ
from navgraph.logging import get_logger

logger = get_logger(__name__)

INF = float("inf")

#: Estimate of the remaining distance from a node to the destination.
Heuristic = Callable[[NodeID, NodeID], Cost]


@dataclass
class SearchState:
    """
    Mutable state of a single A* search.

    A fresh instance is created for every search so that concurrent or
    consecutive searches over the same graph never share a fringe or maps.

    Attributes:
        fringe: Discovered but not yet settled nodes, keyed by g + h.
        costs: Best known distance from the source (g) for every discovered node.
        pred: Predecessor of every node with a finite distance; the source maps
            to None.
        settled: Nodes whose distance is final.
    """

    fringe: IndexedMinPQ = field(default_factory=IndexedMinPQ)
    costs: Dict[NodeID, Cost] = field(default_factory=dict)
    pred: Dict[NodeID, Optional[NodeID]] = field(default_factory=dict)
    settled: Set[NodeID] = field(default_factory=set)


def _relax_edges_from(
    graph: GraphAccess,
    state: SearchState,
    node_id: NodeID,
    dst_node: NodeID,
    heuristic: Heuristic,
) -> None:
    """Relax every edge leaving a freshly settled node."""
    fringe = state.fringe
    costs = state.costs
    base_cost = costs[node_id]

    for neighbor_id in graph.neighbors(node_id):
        if neighbor_id in state.settled:
            continue
        if neighbor_id not in costs:
            costs[neighbor_id] = INF
            fringe.add(neighbor_id, INF)

        new_cost = base_cost + graph.edge_distance(node_id, neighbor_id)
        if new_cost < costs[neighbor_id]:
            costs[neighbor_id] = new_cost
            state.pred[neighbor_id] = node_id
            fringe.change_priority(neighbor_id, new_cost + heuristic(neighbor_id, dst_node))


def astar(
    graph: GraphAccess,
    src_node: NodeID,
    dst_node: NodeID,
    heuristic: Optional[Heuristic] = None,
    max_iterations: Optional[int] = None,
) -> Tuple[Dict[NodeID, Cost], Dict[NodeID, Optional[NodeID]]]:
    """
    Find the shortest path from src_node to dst_node with A*.

    The fringe is ordered by g + h, where g is the road distance from the
    source and h the heuristic estimate to the destination. h defaults to the
    great-circle distance, which never exceeds the road distance; with an
    admissible, consistent heuristic the returned distance is optimal. The
    search stops as soon as the destination is the smallest entry of the
    fringe.

    Args:
        graph: The road graph (any ``GraphAccess`` implementation).
        src_node: The source node.
        dst_node: The destination node.
        heuristic: Optional override of the remaining-distance estimate.
        max_iterations: Optional cap on the number of settled nodes.

    Returns:
        A tuple of (costs, pred):
          - costs: Maps each discovered node to its best known distance from
            src_node (unsettled, unreached nodes may hold inf). The entry for
            dst_node is its shortest distance.
          - pred: Maps each reached node to its predecessor on the best known
            path; src_node maps to None.

    Raises:
        KeyError: If src_node or dst_node is not in the graph.
        NoPathFoundError: If dst_node is unreachable, or the iteration cap is
            reached first.
    """
    if src_node not in graph:
        raise KeyError(f"Source node '{src_node}' is not in the graph.")
    if dst_node not in graph:
        raise KeyError(f"Destination node '{dst_node}' is not in the graph.")
    if heuristic is None:
        heuristic = graph.great_circle_distance

    state = SearchState()
    state.costs[src_node] = 0.0
    state.pred[src_node] = None
    state.fringe.add(src_node, 0.0)

    while state.fringe and state.fringe.peek_smallest() != dst_node:
        if max_iterations is not None and len(state.settled) >= max_iterations:
            logger.debug(
                f"A* from '{src_node}' to '{dst_node}' stopped after "
                f"{len(state.settled)} settled nodes"
            )
            raise NoPathFoundError(
                src_node, dst_node, f"iteration limit of {max_iterations} reached"
            )
        node_id = state.fringe.remove_smallest()
        state.settled.add(node_id)
        _relax_edges_from(graph, state, node_id, dst_node, heuristic)

    if not state.fringe or state.costs[dst_node] == INF:
        raise NoPathFoundError(src_node, dst_node)

    logger.debug(
        f"A* from '{src_node}' to '{dst_node}': cost {state.costs[dst_node]:.3f}, "
        f"{len(state.settled)} settled, {len(state.fringe)} left in fringe"
    )
    return state.costs, state.pred
