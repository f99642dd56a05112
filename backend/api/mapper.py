"""
API Mapper
==========

Transforms the session graph and view state into rendering DTOs.
The renderer gets raw structure plus per-node / per-edge view flags;
it never recomputes paths or visibility itself.
"""
import hashlib
import json
from datetime import datetime, timezone
from typing import Any, Dict

from ..contracts.graph import Edge, Graph, Person
from frontend.state import ViewState


def graph_version(graph: Graph) -> str:
    """Stable id of a graph's structure."""
    canonical = json.dumps(graph.to_dict(), sort_keys=True).encode("utf-8")
    return f"g_{hashlib.sha256(canonical).hexdigest()[:8]}"


def map_graph_to_dto(graph: Graph, view: ViewState) -> Dict[str, Any]:
    """
    Map Graph + ViewState to GraphDTO.

    Args:
        graph: The session graph.
        view: Highlight / visibility state over the same graph.
    """
    highlighted = view.highlighted
    hidden_nodes = view.hidden_nodes
    hidden_edges = view.hidden_edges

    return {
        "version_id": graph_version(graph),
        "generated_at": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        "nodes": [_map_node(p, highlighted, hidden_nodes) for p in graph.nodes.values()],
        "edges": [_map_edge(e, hidden_edges) for e in graph.edges],
        "is_3d_mode": view.is_3d_mode,
    }


def _map_node(person: Person, highlighted, hidden_nodes) -> Dict[str, Any]:
    dto = person.to_dict()
    tag = highlighted.get(person.id)
    dto["highlight"] = tag.value if tag is not None else None
    dto["visible"] = person.id not in hidden_nodes
    dto["is_self"] = person.is_self
    return dto


def _map_edge(edge: Edge, hidden_edges) -> Dict[str, Any]:
    dto = edge.to_dict()
    dto["key"] = edge.key
    dto["visible"] = edge.key not in hidden_edges
    return dto
