from __future__ import annotations

from math import isfinite
from numbers import Real
from typing import Any, Dict, Hashable, Iterable, Iterator, List, Optional

import networkx as nx

from navgraph import geo_helpers
from navgraph.lib.algorithms.base import UNKNOWN_ROAD, Cost, NodeID, WayID


class RoadGraph(nx.DiGraph):
    """
    A directed road network whose vertices carry geographic coordinates.

    This class enforces:
      - Every node is added with a longitude and a latitude.
      - No duplicate nodes (raising ValueError on duplicates).
      - No automatic creation of missing nodes when adding an edge.
      - No duplicate edges (raising ValueError on duplicates).
      - Attempting to remove a non-existent node raises ValueError.

    Two-way roads are stored as a pair of opposite edges. Each node remembers
    the way it currently belongs to (the last way added through it), and way
    names are kept in the graph attribute ``ways``.

    The graph implements the ``GraphAccess`` protocol used by the A* search
    and the direction builder, plus ``EdgeWayAccess`` so directions follow
    the way of each edge rather than of its nodes. Distances are in miles.

    Inherits from:
        networkx.DiGraph
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.graph.setdefault("ways", {})

    #
    # Node management
    #
    def add_node(self, n: NodeID, lon: float, lat: float, **attr: Any) -> None:
        """
        Add a single node at the given coordinates, disallowing duplicates.

        Args:
            n: The node to add.
            lon: Longitude in degrees.
            lat: Latitude in degrees.
            **attr: Arbitrary attributes for this node.

        Raises:
            ValueError: If the node already exists in the graph.
        """
        if n in self:
            raise ValueError(f"Node '{n}' already exists in this graph.")
        super().add_node(n, lon=float(lon), lat=float(lat), **attr)

    def remove_node(self, n: NodeID) -> None:
        """
        Remove a single node and all incident edges.

        Raises:
            ValueError: If the node does not exist in the graph.
        """
        if n not in self:
            raise ValueError(f"Node '{n}' does not exist.")
        super().remove_node(n)

    def vertices(self) -> Iterator[NodeID]:
        """Iterate over all node IDs in insertion order."""
        return iter(self._node)

    def lon(self, n: NodeID) -> float:
        return self._node[n]["lon"]

    def lat(self, n: NodeID) -> float:
        return self._node[n]["lat"]

    def clean(self) -> int:
        """
        Remove nodes that have no incident edges.

        Returns:
            The number of removed nodes.
        """
        isolated = [n for n in self._node if not self._succ[n] and not self._pred[n]]
        self.remove_nodes_from(isolated)
        return len(isolated)

    #
    # Edge management
    #
    def add_edge(self, u_of_edge: NodeID, v_of_edge: NodeID, **attr: Any) -> None:
        """
        Add a directed edge between two existing nodes.

        Args:
            u_of_edge: The source node.
            v_of_edge: The target node.
            **attr: Edge attributes. A ``distance`` attribute overrides the
                great-circle length of the edge.

        Raises:
            ValueError: If either node does not exist, the edge already exists,
                or ``distance`` is not a finite non-negative number.
        """
        if u_of_edge not in self:
            raise ValueError(f"Source node '{u_of_edge}' does not exist.")
        if v_of_edge not in self:
            raise ValueError(f"Target node '{v_of_edge}' does not exist.")
        if v_of_edge in self._succ[u_of_edge]:
            raise ValueError(f"Edge '{u_of_edge}'->'{v_of_edge}' already exists.")
        length = attr.get("distance")
        if length is not None and (
            isinstance(length, bool)
            or not isinstance(length, Real)
            or not isfinite(length)
            or length < 0
        ):
            raise ValueError(
                f"Edge '{u_of_edge}'->'{v_of_edge}' distance must be a finite "
                f"non-negative number, got {length!r}"
            )
        super().add_edge(u_of_edge, v_of_edge, **attr)

    def add_road(self, u: NodeID, v: NodeID, oneway: bool = False, **attr: Any) -> None:
        """
        Connect two nodes; unless ``oneway`` the road is usable in both directions.
        """
        self.add_edge(u, v, **attr)
        if not oneway:
            self.add_edge(v, u, **attr)

    def add_way(
        self,
        way_id: Hashable,
        nodes: Iterable[NodeID],
        name: Optional[str] = None,
        oneway: bool = False,
        **attr: Any,
    ) -> None:
        """
        Add a way: a road through ``nodes`` in order.

        Consecutive nodes are connected with roads tagged ``way=way_id`` and
        every node on the way is assigned to it.

        Raises:
            ValueError: If fewer than two nodes are given or a node is missing.
        """
        node_list: List[NodeID] = list(nodes)
        if len(node_list) < 2:
            raise ValueError(f"Way '{way_id}' must reference at least two nodes.")
        missing = [n for n in node_list if n not in self]
        if missing:
            raise ValueError(f"Way '{way_id}' references unknown nodes: {missing}")

        if name is not None:
            self.set_way_name(way_id, name)
        for u, v in zip(node_list, node_list[1:]):
            self.add_road(u, v, oneway=oneway, way=way_id, **attr)
        for n in node_list:
            self._node[n]["way"] = way_id

    def set_way_name(self, way_id: Hashable, name: str) -> None:
        """Name a way; ``name`` must be a string."""
        if not isinstance(name, str):
            raise ValueError(f"Name of way '{way_id}' must be a string, got {name!r}")
        self.graph["ways"][way_id] = name

    def ways(self) -> Dict[Hashable, str]:
        """Return the mapping of way IDs to way names."""
        return self.graph["ways"]

    #
    # GraphAccess
    #
    def nearest_vertex(self, lon: float, lat: float) -> NodeID:
        """
        Return the node closest to the given coordinates.

        Closeness is Euclidean distance in longitude/latitude space. Nodes with
        at least one incident edge are preferred; isolated nodes are only
        considered when no connected node exists. Ties go to the node added
        first.

        Raises:
            ValueError: If the graph has no nodes.
        """
        candidates = [n for n in self._node if self._succ[n] or self._pred[n]]
        if not candidates:
            candidates = list(self._node)
        if not candidates:
            raise ValueError("Cannot find the nearest vertex of an empty graph.")

        nodes = self._node
        return min(
            candidates,
            key=lambda n: (nodes[n]["lon"] - lon) ** 2 + (nodes[n]["lat"] - lat) ** 2,
        )

    def edge_distance(self, u: NodeID, v: NodeID) -> Cost:
        """
        Road distance of the edge u->v: its ``distance`` attribute when set,
        otherwise the great-circle distance between its endpoints.

        Raises:
            KeyError: If there is no edge u->v.
        """
        try:
            attr = self._succ[u][v]
        except KeyError:
            raise KeyError(f"No edge '{u}'->'{v}' in the graph.") from None
        length = attr.get("distance")
        if length is None:
            return self.great_circle_distance(u, v)
        return length

    def great_circle_distance(self, u: NodeID, v: NodeID) -> Cost:
        return geo_helpers.distance(self.lon(u), self.lat(u), self.lon(v), self.lat(v))

    def bearing(self, u: NodeID, v: NodeID) -> float:
        return geo_helpers.bearing(self.lon(u), self.lat(u), self.lon(v), self.lat(v))

    def way_id_of(self, n: NodeID) -> WayID:
        return self._node[n].get("way")

    def way_name_of(self, n: NodeID) -> str:
        return self.way_name(self.way_id_of(n))

    #
    # EdgeWayAccess
    #
    def edge_way_id(self, u: NodeID, v: NodeID) -> WayID:
        """
        Return the way of the edge u->v, or None if the edge is on no way.

        Raises:
            KeyError: If there is no edge u->v.
        """
        try:
            return self._succ[u][v].get("way")
        except KeyError:
            raise KeyError(f"No edge '{u}'->'{v}' in the graph.") from None

    def way_name(self, way_id: WayID) -> str:
        if way_id is None:
            return UNKNOWN_ROAD
        return self.graph["ways"].get(way_id) or UNKNOWN_ROAD
