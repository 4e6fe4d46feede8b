"""
The JSON-graph exchange form::

    {"nodes": [{"id": ..., ...}], "edges": [{"id": ..., "sourceId": ..., "targetId": ...}]}

Plain-dict helpers used by the parsers before a Graph is built. Added
entities are copied; the same dedup rules as the Graph model apply.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Dict, Mapping, Optional, Sequence

from ..constants import GENERIC_LINK_TYPE, UNKNOWN_TYPE
from ..errors import FormatError, InvalidEdgeSpecError, InvalidNodeSpecError
from ..utils import edge_label, is_empty, is_string_or_number, new_id, to_id_string

logger = logging.getLogger(__name__)

JsonGraph = Dict[str, Any]


def empty() -> JsonGraph:
    return {"nodes": [], "edges": []}


def is_json_graph(g: Any) -> bool:
    if not isinstance(g, Mapping):
        return False
    return isinstance(g.get("nodes"), list) and isinstance(g.get("edges", []), list)


def is_node(item: Any) -> bool:
    return isinstance(item, Mapping) and not is_empty(item.get("id"))


def is_edge(item: Any) -> bool:
    return (
        isinstance(item, Mapping)
        and item.get("sourceId") is not None
        and item.get("targetId") is not None
    )


# ------------------------------------------------------------------ #
# Lookups
# ------------------------------------------------------------------ #
def get_node_by_id(g: JsonGraph, node_id: Any) -> Optional[Dict[str, Any]]:
    if node_id is None:
        return None
    key = to_id_string(node_id)
    for node in g.get("nodes", []):
        if to_id_string(node.get("id")) == key:
            return node
    return None


def node_id_exists(g: JsonGraph, node_id: Any) -> bool:
    return get_node_by_id(g, node_id) is not None


def get_edge_by_id(g: JsonGraph, edge_id: Any) -> Optional[Dict[str, Any]]:
    if edge_id is None:
        return None
    key = to_id_string(edge_id)
    for edge in g.get("edges", []):
        if edge.get("id") is not None and to_id_string(edge["id"]) == key:
            return edge
    return None


def get_edge(
    g: JsonGraph, source_id: Any, target_id: Any, label: Optional[str] = None
) -> Optional[Dict[str, Any]]:
    """First edge from `source_id` to `target_id`, optionally with the given label."""
    source = to_id_string(source_id)
    target = to_id_string(target_id)
    wanted = label.strip().lower() if isinstance(label, str) else None
    for edge in g.get("edges", []):
        if to_id_string(edge.get("sourceId")) != source or to_id_string(edge.get("targetId")) != target:
            continue
        if wanted is None or edge_label(edge) == wanted:
            return edge
    return None


def edge_exists(g: JsonGraph, edge: Mapping[str, Any]) -> bool:
    """True when an edge with the same id, or the same endpoints and label, exists."""
    return _find_existing_edge(g, edge) is not None


def _find_existing_edge(g: JsonGraph, edge: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
    if edge.get("id") is not None:
        found = get_edge_by_id(g, edge["id"])
        if found is not None:
            return found
    source = to_id_string(edge.get("sourceId"))
    target = to_id_string(edge.get("targetId"))
    label = edge_label(edge)
    for existing in g.get("edges", []):
        if (
            to_id_string(existing.get("sourceId")) == source
            and to_id_string(existing.get("targetId")) == target
            and edge_label(existing) == label
        ):
            return existing
    return None


# ------------------------------------------------------------------ #
# Mutation
# ------------------------------------------------------------------ #
def add_node(g: JsonGraph, node: Any) -> Dict[str, Any]:
    """
    Add a node (entity mapping, or a string/number used as id and name) and
    return the stored one. An existing id is returned unchanged.
    """
    if is_string_or_number(node):
        node = {"id": to_id_string(node), "name": to_id_string(node)}
    if not isinstance(node, Mapping):
        raise InvalidNodeSpecError(f"Cannot add {type(node).__name__} as a node.")
    stored = dict(node)
    if is_empty(stored.get("id")):
        stored["id"] = new_id()
    else:
        stored["id"] = to_id_string(stored["id"])
    existing = get_node_by_id(g, stored["id"])
    if existing is not None:
        return existing
    if is_empty(stored.get("typeName")):
        stored["typeName"] = UNKNOWN_TYPE
    g.setdefault("nodes", []).append(stored)
    return stored


def add_edge(g: JsonGraph, edge: Any) -> Dict[str, Any]:
    """
    Add an edge given as a mapping or a (source, target) pair. Missing
    endpoints are added as nodes.
    """
    if isinstance(edge, (list, tuple)):
        if len(edge) != 2:
            raise InvalidEdgeSpecError(f"An edge pair needs two items, got {len(edge)}.")
        edge = {"sourceId": edge[0], "targetId": edge[1]}
    if not is_edge(edge):
        raise InvalidEdgeSpecError(f"Not an edge: {edge!r}")
    stored = dict(edge)
    stored["sourceId"] = to_id_string(stored["sourceId"])
    stored["targetId"] = to_id_string(stored["targetId"])
    if stored.get("id") is not None:
        stored["id"] = to_id_string(stored["id"])
    if is_empty(stored.get("typeName")):
        stored["typeName"] = GENERIC_LINK_TYPE
    existing = _find_existing_edge(g, stored)
    if existing is not None:
        return existing
    if is_empty(stored.get("id")):
        stored["id"] = new_id()
    ensure_nodes_are_present(g, stored)
    g.setdefault("edges", []).append(stored)
    return stored


def ensure_nodes_are_present(g: JsonGraph, edge: Mapping[str, Any]) -> None:
    for key in ("sourceId", "targetId"):
        node_id = to_id_string(edge[key])
        if not node_id_exists(g, node_id):
            add_node(g, node_id)


def merge_json_graphs(g: Any, h: Any) -> JsonGraph:
    """
    Union of two exchange-form graphs as a new graph. A None argument counts
    as empty; anything else that is not exchange form raises FormatError.
    """
    for item, label in ((g, "first"), (h, "second")):
        if item is not None and not is_json_graph(item):
            raise FormatError(f"The {label} argument is not a json graph.")
    merged = copy.deepcopy(g) if g is not None else empty()
    merged.setdefault("edges", [])
    if h is None:
        return merged
    for node in h.get("nodes", []):
        add_node(merged, copy.deepcopy(node))
    for edge in h.get("edges", []):
        add_edge(merged, copy.deepcopy(edge))
    logger.debug(
        "Merged json graphs into %d nodes and %d edges",
        len(merged["nodes"]),
        len(merged["edges"]),
    )
    return merged


def from_edges(edges: Sequence[Any]) -> JsonGraph:
    """Exchange form from a sequence of edges (mappings or pairs)."""
    g = empty()
    for edge in edges:
        add_edge(g, edge)
    return g
