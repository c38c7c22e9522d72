from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from navgraph.lib.algorithms.base import Cost, GraphAccess, NoPathFoundError, NodeID


def resolve_to_path(
    src_node: NodeID,
    dst_node: NodeID,
    pred: Dict[NodeID, Optional[NodeID]],
) -> List[NodeID]:
    """
    Rebuild the source->destination node sequence from a predecessor map.

    Args:
        src_node: Source node ID (the root of the predecessor tree).
        dst_node: Destination node ID.
        pred: Predecessor map from A*; the root maps to None.

    Returns:
        Node IDs from src_node to dst_node inclusive. A node's path to itself
        is a single-element list.

    Raises:
        NoPathFoundError: If dst_node is not in the map or its predecessor
            chain does not lead back to src_node.
    """
    if dst_node not in pred:
        raise NoPathFoundError(src_node, dst_node)

    path = [dst_node]
    seen = {dst_node}
    node = dst_node
    while pred[node] is not None:
        node = pred[node]
        if node in seen or node not in pred:
            raise NoPathFoundError(src_node, dst_node, "broken predecessor chain")
        seen.add(node)
        path.append(node)

    if node != src_node:
        raise NoPathFoundError(
            src_node, dst_node, f"predecessor chain is rooted at '{node}'"
        )
    path.reverse()
    return path


def path_cost(graph: GraphAccess, path: Sequence[NodeID]) -> Cost:
    """Sum of the road distances along consecutive nodes of ``path``."""
    return sum(graph.edge_distance(u, v) for u, v in zip(path, path[1:]))
