"""Graph, search and I/O building blocks for navgraph."""

from navgraph.lib.graph import RoadGraph
from navgraph.lib.io import dict_to_graph, graph_to_dict, load_graph
from navgraph.lib.path import Route

__all__ = [
    "RoadGraph",
    "Route",
    "dict_to_graph",
    "graph_to_dict",
    "load_graph",
]
