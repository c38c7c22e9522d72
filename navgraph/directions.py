"""Turn-by-turn directions for a route.

A route (a sequence of node IDs) is folded into one :class:`NavigationDirection`
per way travelled: distances of consecutive edges on the same way are summed,
and each change of way starts a new direction whose turn kind comes from the
change of bearing at the junction.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from math import isfinite
from typing import Dict, List, Optional, Sequence, Tuple

from navgraph.config import TURN_POLICY, TurnPolicy
from navgraph.geo_helpers import relative_bearing
from navgraph.lib.algorithms.base import (
    UNKNOWN_ROAD,
    EdgeWayAccess,
    GraphAccess,
    MalformedDirectionError,
    NodeID,
    TurnKind,
    WayID,
)
from navgraph.logging import get_logger

logger = get_logger(__name__)

#: Text label of every turn kind. The mapping is one-to-one.
TURN_LABELS: Dict[TurnKind, str] = {
    TurnKind.START: "Start",
    TurnKind.STRAIGHT: "Go straight",
    TurnKind.SLIGHT_LEFT: "Slight left",
    TurnKind.SLIGHT_RIGHT: "Slight right",
    TurnKind.LEFT: "Turn left",
    TurnKind.RIGHT: "Turn right",
    TurnKind.SHARP_LEFT: "Sharp left",
    TurnKind.SHARP_RIGHT: "Sharp right",
}
LABEL_TO_TURN: Dict[str, TurnKind] = {label: kind for kind, label in TURN_LABELS.items()}

#: Decimal places of the distance in the text form.
DISTANCE_DIGITS = 3

_DIRECTION_RE = re.compile(
    r"(?P<label>"
    + "|".join(re.escape(label) for label in TURN_LABELS.values())
    + r") on (?P<way>.+) and continue for (?P<distance>\d+(?:\.\d+)?) miles\.",
    re.DOTALL,
)


@dataclass(frozen=True)
class NavigationDirection:
    """
    One instruction of a route: a manoeuvre, the way to take and how far to
    follow it.

    Attributes:
        kind: The manoeuvre.
        way: Name of the way; empty names and None become ``"unknown road"``.
        distance: Miles to travel on the way, rounded to the precision of
            the text form.
    """

    kind: TurnKind = TurnKind.STRAIGHT
    way: str = UNKNOWN_ROAD
    distance: float = 0.0

    def __post_init__(self) -> None:
        distance = float(self.distance)
        if not isfinite(distance) or distance < 0:
            raise ValueError(
                f"Direction distance must be a finite non-negative number, got {self.distance}"
            )
        if self.way is not None and not isinstance(self.way, str):
            raise TypeError(f"Direction way must be a string, got {self.way!r}")
        object.__setattr__(self, "kind", TurnKind(self.kind))
        object.__setattr__(self, "way", self.way or UNKNOWN_ROAD)
        # Adding 0.0 turns -0.0 into 0.0 so the text form never reads "-0.000"
        object.__setattr__(self, "distance", round(distance, DISTANCE_DIGITS) + 0.0)

    @property
    def label(self) -> str:
        return TURN_LABELS[self.kind]

    def __str__(self) -> str:
        return (
            f"{self.label} on {self.way} and continue for "
            f"{self.distance:.{DISTANCE_DIGITS}f} miles."
        )

    @classmethod
    def from_string(cls, text: str) -> Optional[NavigationDirection]:
        """
        Parse the text form produced by ``str()``.

        Returns:
            The direction, or None when ``text`` is not a well-formed direction.
        """
        try:
            return parse_direction(text)
        except MalformedDirectionError:
            return None

    def to_dict(self) -> Dict[str, object]:
        return {"kind": self.kind.name, "way": self.way, "distance": self.distance}


def parse_direction(text: str) -> NavigationDirection:
    """
    Parse ``"<label> on <way> and continue for <miles> miles."``.

    Raises:
        MalformedDirectionError: If the text does not match the format or uses
            an unknown label.
    """
    if not isinstance(text, str):
        raise MalformedDirectionError(f"Expected a string, got {type(text).__name__}")
    match = _DIRECTION_RE.fullmatch(text)
    if match is None:
        raise MalformedDirectionError(f"Not a navigation direction: {text!r}")
    return NavigationDirection(
        kind=LABEL_TO_TURN[match.group("label")],
        way=match.group("way"),
        distance=float(match.group("distance")),
    )


def _leg_ways(graph: GraphAccess, nodes: List[NodeID]) -> List[Tuple[WayID, str]]:
    """Way ID and way name of every edge along ``nodes``.

    Graphs that implement ``EdgeWayAccess`` answer per edge; otherwise an edge
    takes the way of the node it leads to.
    """
    if isinstance(graph, EdgeWayAccess):
        legs = []
        for u, v in zip(nodes, nodes[1:]):
            way_id = graph.edge_way_id(u, v)
            legs.append((way_id, graph.way_name(way_id)))
        return legs
    return [(graph.way_id_of(v), graph.way_name_of(v)) for v in nodes[1:]]


def route_directions(
    graph: GraphAccess,
    route: Sequence[NodeID],
    policy: Optional[TurnPolicy] = None,
) -> List[NavigationDirection]:
    """
    Create the list of directions for a route.

    Consecutive edges on the same way are merged into one direction; when the
    way changes at node ``u`` the turn kind is classified from
    ``bearing(u, next) - bearing(prev, u)``. The first direction is always
    ``START``.

    Args:
        graph: The graph the route was found on.
        route: Node IDs from source to destination.
        policy: Turn thresholds; defaults to ``TURN_POLICY``.

    Returns:
        The directions in travel order; empty for routes of fewer than two nodes.
    """
    if policy is None:
        policy = TURN_POLICY
    nodes = list(route)
    if len(nodes) < 2:
        return []

    legs = _leg_ways(graph, nodes)
    directions: List[NavigationDirection] = []
    kind = TurnKind.START
    current_way, way_name = legs[0]
    travelled = 0.0

    for idx, (next_way, next_name) in enumerate(legs):
        node, next_node = nodes[idx], nodes[idx + 1]
        if idx > 0 and next_way != current_way:
            directions.append(NavigationDirection(kind, way_name, travelled))
            turn = relative_bearing(
                graph.bearing(nodes[idx - 1], node), graph.bearing(node, next_node)
            )
            kind = policy.classify(turn)
            current_way, way_name = next_way, next_name
            travelled = 0.0
        travelled += graph.edge_distance(node, next_node)

    directions.append(NavigationDirection(kind, way_name, travelled))
    logger.debug(f"Folded {len(nodes)} nodes into {len(directions)} directions")
    return directions
