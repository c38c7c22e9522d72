from __future__ import annotations

from enum import IntEnum
from typing import Hashable, Iterable, Optional, Protocol, Union, runtime_checkable

#: Opaque vertex identifier borrowed from the graph (e.g. an OSM node id).
NodeID = Hashable

#: Identity of a way (named road). ``None`` means the vertex is on no way.
WayID = Optional[Hashable]

#: Numeric distance along the network, in miles.
Cost = Union[int, float]

#: Way name used whenever a way has no name.
UNKNOWN_ROAD = "unknown road"


class TurnKind(IntEnum):
    """
    Kinds of manoeuvre a navigation direction can describe.
    """

    START = 0
    STRAIGHT = 1
    SLIGHT_LEFT = 2
    SLIGHT_RIGHT = 3
    RIGHT = 4
    LEFT = 5
    SHARP_LEFT = 6
    SHARP_RIGHT = 7


class DuplicateKeyError(ValueError):
    """A key was added to a priority queue that already holds it."""


class KeyNotFoundError(KeyError):
    """A priority queue operation referenced a key it does not hold."""


class EmptyQueueError(IndexError):
    """The smallest element of an empty priority queue was requested."""


class NoPathFoundError(ValueError):
    """The destination cannot be reached from the source."""

    def __init__(self, src_node: NodeID, dst_node: NodeID, reason: str = "") -> None:
        self.src_node = src_node
        self.dst_node = dst_node
        msg = f"No path from '{src_node}' to '{dst_node}'"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class MalformedDirectionError(ValueError):
    """A string could not be parsed into a navigation direction."""


class GraphAccess(Protocol):
    """
    Read-only view of a spatial road graph consumed by the search and the
    direction builder.

    Distances are in miles, bearings in degrees clockwise from north.
    """

    def __contains__(self, n: object) -> bool: ...

    def nearest_vertex(self, lon: float, lat: float) -> NodeID: ...

    def neighbors(self, n: NodeID) -> Iterable[NodeID]: ...

    def edge_distance(self, u: NodeID, v: NodeID) -> Cost: ...

    def great_circle_distance(self, u: NodeID, v: NodeID) -> Cost: ...

    def bearing(self, u: NodeID, v: NodeID) -> float: ...

    def way_id_of(self, n: NodeID) -> WayID: ...

    def way_name_of(self, n: NodeID) -> str: ...


@runtime_checkable
class EdgeWayAccess(Protocol):
    """
    Optional extension of ``GraphAccess`` for graphs that know which way each
    edge belongs to. A junction node lies on several ways, an edge on one.
    """

    def edge_way_id(self, u: NodeID, v: NodeID) -> WayID: ...

    def way_name(self, way_id: WayID) -> str: ...
