from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Iterator, List

from navgraph.lib.algorithms.base import Cost, NodeID

if TYPE_CHECKING:
    from navgraph.directions import NavigationDirection


@dataclass
class Route:
    """
    A resolved route between two nodes.

    Attributes:
        nodes (List[NodeID]):
            Node IDs from the source to the destination, inclusive.
        cost (Cost):
            Total road distance of the route in miles.
        directions (List[NavigationDirection]):
            Turn-by-turn directions; empty when source and destination coincide.
    """

    nodes: List[NodeID]
    cost: Cost
    directions: List["NavigationDirection"] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.nodes:
            raise ValueError("A route must contain at least one node.")

    def __iter__(self) -> Iterator[NodeID]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    @property
    def src_node(self) -> NodeID:
        return self.nodes[0]

    @property
    def dst_node(self) -> NodeID:
        return self.nodes[-1]

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-friendly representation of the route."""
        return {
            "nodes": list(self.nodes),
            "cost": self.cost,
            "directions": [d.to_dict() for d in self.directions],
            "instructions": [str(d) for d in self.directions],
        }
