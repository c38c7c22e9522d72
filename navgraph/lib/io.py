"""Loading and saving road graphs.

The document format, in YAML or JSON::

    nodes:
      - {id: 1, lon: -122.2585, lat: 37.8708}
      - {id: 2, lon: -122.2590, lat: 37.8712}
    ways:
      - {id: 10, name: Bancroft Way, nodes: [1, 2], oneway: false}

Node entries may carry extra attributes, which are stored on the node. Way
entries need ``id`` and ``nodes``; ``name`` (a string) and ``oneway`` (a
boolean) are optional. Documents are validated against the packaged JSON
schema ``navgraph/schemas/graph.json``.
"""

from __future__ import annotations

import json
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Dict, List, Union

import jsonschema
import yaml

from navgraph.lib.graph import RoadGraph
from navgraph.logging import get_logger

logger = get_logger(__name__)

_NODE_KEYS = ("id", "lon", "lat")
_RESERVED_NODE_ATTRS = ("lon", "lat", "way")


@lru_cache(maxsize=None)
def _graph_schema() -> Dict[str, Any]:
    schema_file = resources.files("navgraph.schemas").joinpath("graph.json")
    with schema_file.open("r", encoding="utf-8") as f:
        return json.load(f)


def dict_to_graph(data: Dict[str, Any], clean: bool = False) -> RoadGraph:
    """
    Build a RoadGraph from its dict representation.

    Args:
        data: A mapping with ``nodes`` and ``ways`` lists.
        clean: If True, drop nodes that no way references.

    Returns:
        The road graph.

    Raises:
        ValueError: If a section has the wrong shape or a way references an
            unknown node.
        jsonschema.ValidationError: If a field has the wrong type, such as a
            quoted ``oneway`` or a numeric way name.
    """
    if not isinstance(data, dict):
        raise ValueError("A graph document must be a mapping at top level.")
    nodes = data.get("nodes") or []
    ways = data.get("ways") or []
    if not isinstance(nodes, list):
        raise ValueError("'nodes' must be a list")
    if not isinstance(ways, list):
        raise ValueError("'ways' must be a list")

    # Early shape checks for clearer messages than the schema errors
    for entry in nodes:
        if not isinstance(entry, dict) or any(k not in entry for k in _NODE_KEYS):
            raise ValueError(f"Each node must be a mapping with 'id', 'lon' and 'lat': {entry!r}")
    for entry in ways:
        if not isinstance(entry, dict) or "id" not in entry or "nodes" not in entry:
            raise ValueError(f"Each way must be a mapping with 'id' and 'nodes': {entry!r}")
        if not isinstance(entry["nodes"], list):
            raise ValueError(f"'nodes' of way '{entry['id']}' must be a list")

    jsonschema.validate(data, _graph_schema())

    graph = RoadGraph()
    for entry in nodes:
        attrs = {k: v for k, v in entry.items() if k not in _NODE_KEYS}
        graph.add_node(entry["id"], lon=entry["lon"], lat=entry["lat"], **attrs)

    for entry in ways:
        graph.add_way(
            entry["id"],
            entry["nodes"],
            name=entry.get("name"),
            oneway=entry.get("oneway", False),
        )

    if clean:
        removed = graph.clean()
        if removed:
            logger.debug(f"Removed {removed} nodes that belong to no way")

    logger.debug(
        f"Loaded graph with {graph.number_of_nodes()} nodes, "
        f"{graph.number_of_edges()} edges and {len(ways)} ways"
    )
    return graph


def graph_to_dict(graph: RoadGraph) -> Dict[str, Any]:
    """
    Convert a RoadGraph into the dict representation read by dict_to_graph.

    Ways are rebuilt from the ``way`` attribute of the edges: each maximal chain
    of edges with the same way becomes one way entry, so a way that was added
    in one piece comes back in one piece. Edges without a way are emitted as
    two-node ways with a ``None`` id. Edge attributes other than ``way`` are
    not written.
    """
    node_list: List[Dict[str, Any]] = []
    for node_id, attr in graph.nodes(data=True):
        entry = {"id": node_id, "lon": attr["lon"], "lat": attr["lat"]}
        entry.update({k: v for k, v in attr.items() if k not in _RESERVED_NODE_ATTRS})
        node_list.append(entry)

    way_names = graph.ways()
    used = set()
    way_list: List[Dict[str, Any]] = []
    for u, v, attr in graph.edges(data=True):
        if (u, v) in used:
            continue
        way_id = attr.get("way")
        oneway = _is_oneway(graph, u, v, way_id)
        _mark_used(used, u, v, oneway)
        chain = [u, v]
        if way_id is not None:
            # Grow the chain in both directions along edges of the same way
            while True:
                nxt = _continue_way(graph, chain[-1], way_id, oneway, used, forward=True)
                if nxt is None:
                    break
                _mark_used(used, chain[-1], nxt, oneway)
                chain.append(nxt)
            while True:
                prev = _continue_way(graph, chain[0], way_id, oneway, used, forward=False)
                if prev is None:
                    break
                _mark_used(used, prev, chain[0], oneway)
                chain.insert(0, prev)

        entry: Dict[str, Any] = {"id": way_id, "nodes": chain, "oneway": oneway}
        if way_id in way_names:
            entry["name"] = way_names[way_id]
        way_list.append(entry)

    return {"nodes": node_list, "ways": way_list}


def _is_oneway(graph: RoadGraph, u: Any, v: Any, way_id: Any) -> bool:
    return not graph.has_edge(v, u) or graph[v][u].get("way") != way_id


def _mark_used(used: set, u: Any, v: Any, oneway: bool) -> None:
    used.add((u, v))
    if not oneway:
        used.add((v, u))


def _continue_way(graph, node, way_id, oneway, used, forward):
    adjacency = graph.succ[node] if forward else graph.pred[node]
    for nbr, attr in adjacency.items():
        edge = (node, nbr) if forward else (nbr, node)
        if edge in used or attr.get("way") != way_id:
            continue
        if _is_oneway(graph, edge[0], edge[1], way_id) == oneway:
            return nbr
    return None


def load_graph_yaml(yaml_str: str, clean: bool = False) -> RoadGraph:
    """Parse a YAML graph document."""
    data = yaml.safe_load(yaml_str)
    if data is None:
        data = {}
    return dict_to_graph(data, clean=clean)


def load_graph_json(json_str: str, clean: bool = False) -> RoadGraph:
    """Parse a JSON graph document."""
    return dict_to_graph(json.loads(json_str), clean=clean)


def load_graph(path: Union[str, Path], clean: bool = False) -> RoadGraph:
    """
    Load a graph file; ``.json`` files are read as JSON, anything else as YAML.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    logger.debug(f"Loading graph from: {path}")
    if path.suffix.lower() == ".json":
        return load_graph_json(text, clean=clean)
    return load_graph_yaml(text, clean=clean)


def save_graph(graph: RoadGraph, path: Union[str, Path]) -> None:
    """Write a graph as JSON or YAML, chosen by the file suffix like load_graph."""
    path = Path(path)
    data = graph_to_dict(graph)
    if path.suffix.lower() == ".json":
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    else:
        path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
