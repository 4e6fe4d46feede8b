"""
Node and edge argument normalizer.

Turns the loose argument forms accepted by ``Graph.add_node`` and
``Graph.add_edge`` into canonical entity dicts. Arguments are first
classified into one of the spec variants below, then built by a single
function that handles every variant.

Node forms
----------
- ``()``                       : fresh id, typeName Thing
- ``(value)``                  : number/bool id, pseudo-cypher string, plain name, or entity mapping
- ``(id, name)``               : explicit id and name
- ``(id, name, typeName)``     : explicit id, name and type

Edge forms
----------
- ``("a->b")``, ``((a, b))``, ``({sourceId, targetId, ...})``
- ``(source, target)``           : endpoints as ids or id-bearing mappings
- ``(source, target, extra)``    : extra is the edge name or a dict of attributes
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union

from ..constants import GENERIC_LINK_TYPE, THING_TYPE
from ..cypher.fragments import PseudoCypherNode
from ..errors import InvalidEdgeSpecError, InvalidNodeSpecError
from ..utils import is_empty, is_string_or_number, new_id, to_id_string


# ------------------------------------------------------------------ #
# Node spec variants
# ------------------------------------------------------------------ #
@dataclass(frozen=True, slots=True)
class BlankNodeSpec:
    pass


@dataclass(frozen=True, slots=True)
class IdNodeSpec:
    id: str


@dataclass(frozen=True, slots=True)
class CypherNodeSpec:
    fragment: PseudoCypherNode


@dataclass(frozen=True, slots=True)
class NamedNodeSpec:
    name: str


@dataclass(frozen=True, slots=True)
class EntityNodeSpec:
    entity: Mapping[str, Any]


@dataclass(frozen=True, slots=True)
class ExplicitNodeSpec:
    id: str
    name: Any
    type_name: Optional[str] = None


NodeSpec = Union[
    BlankNodeSpec, IdNodeSpec, CypherNodeSpec, NamedNodeSpec, EntityNodeSpec, ExplicitNodeSpec
]


def _is_scalar(value: Any) -> bool:
    return is_string_or_number(value) or isinstance(value, bool)


def classify_node_args(*args: Any) -> NodeSpec:
    if len(args) == 0:
        return BlankNodeSpec()
    if len(args) == 1:
        value = args[0]
        if isinstance(value, bool) or (is_string_or_number(value) and not isinstance(value, str)):
            return IdNodeSpec(to_id_string(value))
        if isinstance(value, str):
            if is_empty(value):
                raise InvalidNodeSpecError("A node name cannot be empty.")
            fragment = PseudoCypherNode.parse(value)
            if fragment is not None:
                return CypherNodeSpec(fragment)
            return NamedNodeSpec(value)
        if isinstance(value, Mapping):
            return EntityNodeSpec(value)
        raise InvalidNodeSpecError(f"Cannot create a node from {type(value).__name__}.")
    if len(args) in (2, 3):
        node_id = args[0]
        if not _is_scalar(node_id) or is_empty(node_id):
            raise InvalidNodeSpecError("The node id should be a non-empty string or number.")
        type_name = args[2] if len(args) == 3 else None
        if type_name is not None and not isinstance(type_name, str):
            raise InvalidNodeSpecError("The node typeName should be a string.")
        return ExplicitNodeSpec(to_id_string(node_id), args[1], type_name)
    raise InvalidNodeSpecError(f"A node takes at most 3 arguments, got {len(args)}.")


def build_node(spec: NodeSpec) -> Dict[str, Any]:
    if isinstance(spec, BlankNodeSpec):
        return {"id": new_id(), "name": None, "typeName": THING_TYPE}
    if isinstance(spec, IdNodeSpec):
        return {"id": spec.id, "name": None, "typeName": THING_TYPE}
    if isinstance(spec, NamedNodeSpec):
        return {"id": new_id(), "name": spec.name, "typeName": THING_TYPE}
    if isinstance(spec, CypherNodeSpec):
        node = spec.fragment.to_entity()
        node["id"] = new_id() if is_empty(node.get("id")) else to_id_string(node["id"])
        if is_empty(node.get("typeName")):
            node["typeName"] = THING_TYPE
        return node
    if isinstance(spec, EntityNodeSpec):
        node = copy.deepcopy(dict(spec.entity))
        node["id"] = new_id() if is_empty(node.get("id")) else to_id_string(node["id"])
        if not isinstance(node.get("typeName"), str) or is_empty(node.get("typeName")):
            node["typeName"] = THING_TYPE
        return node
    if isinstance(spec, ExplicitNodeSpec):
        return {"id": spec.id, "name": spec.name, "typeName": spec.type_name or THING_TYPE}
    raise InvalidNodeSpecError(f"Unknown node spec {spec!r}.")


def node_from_specs(*args: Any) -> Dict[str, Any]:
    """Canonical node dict for any accepted node argument form."""
    return build_node(classify_node_args(*args))


# ------------------------------------------------------------------ #
# Edge spec variants
# ------------------------------------------------------------------ #
@dataclass(frozen=True, slots=True)
class EndpointsEdgeSpec:
    source_id: str
    target_id: str
    name: Any = None
    extra: Optional[Mapping[str, Any]] = None


@dataclass(frozen=True, slots=True)
class EntityEdgeSpec:
    entity: Mapping[str, Any]


EdgeSpec = Union[EndpointsEdgeSpec, EntityEdgeSpec]


def _endpoint_id(value: Any, role: str) -> str:
    if isinstance(value, Mapping):
        value = value.get("id")
    if not _is_scalar(value) or is_empty(value):
        raise InvalidEdgeSpecError(f"The {role} should be an id or a node with an id.")
    return to_id_string(value)


def classify_edge_args(*args: Any) -> EdgeSpec:
    if len(args) == 1:
        value = args[0]
        if isinstance(value, str):
            parts = value.split("->")
            if len(parts) != 2 or any(is_empty(part) for part in parts):
                raise InvalidEdgeSpecError(f"Expected 'source->target', got {value!r}.")
            return EndpointsEdgeSpec(to_id_string(parts[0]), to_id_string(parts[1]))
        if isinstance(value, (list, tuple)):
            if len(value) != 2:
                raise InvalidEdgeSpecError(f"An edge pair needs two items, got {len(value)}.")
            return EndpointsEdgeSpec(
                _endpoint_id(value[0], "source"), _endpoint_id(value[1], "target")
            )
        if isinstance(value, Mapping):
            for key in ("sourceId", "targetId"):
                if not _is_scalar(value.get(key)) or is_empty(value.get(key)):
                    raise InvalidEdgeSpecError(f"The edge is missing a proper {key}.")
            return EntityEdgeSpec(value)
        raise InvalidEdgeSpecError(f"Cannot create an edge from {type(value).__name__}.")
    if len(args) == 2:
        return EndpointsEdgeSpec(_endpoint_id(args[0], "source"), _endpoint_id(args[1], "target"))
    if len(args) == 3:
        source_id = _endpoint_id(args[0], "source")
        target_id = _endpoint_id(args[1], "target")
        extra = args[2]
        if _is_scalar(extra):
            return EndpointsEdgeSpec(source_id, target_id, name=extra)
        if isinstance(extra, Mapping):
            return EndpointsEdgeSpec(source_id, target_id, extra=extra)
        raise InvalidEdgeSpecError("The third edge argument should be a name or a dict.")
    raise InvalidEdgeSpecError(f"An edge takes 1 to 3 arguments, got {len(args)}.")


def build_edge(spec: EdgeSpec) -> Dict[str, Any]:
    if isinstance(spec, EntityEdgeSpec):
        edge = copy.deepcopy(dict(spec.entity))
        edge["sourceId"] = to_id_string(edge["sourceId"])
        edge["targetId"] = to_id_string(edge["targetId"])
        if edge.get("id") is not None:
            edge["id"] = to_id_string(edge["id"])
        if is_empty(edge.get("typeName")):
            edge["typeName"] = GENERIC_LINK_TYPE
        return edge
    if isinstance(spec, EndpointsEdgeSpec):
        edge: Dict[str, Any] = {
            "sourceId": spec.source_id,
            "targetId": spec.target_id,
            "name": spec.name,
            "typeName": GENERIC_LINK_TYPE,
        }
        if spec.extra is not None:
            edge.update(copy.deepcopy(dict(spec.extra)))
            edge["sourceId"] = spec.source_id
            edge["targetId"] = spec.target_id
            if edge.get("id") is not None:
                edge["id"] = to_id_string(edge["id"])
            if is_empty(edge.get("typeName")):
                edge["typeName"] = GENERIC_LINK_TYPE
        return edge
    raise InvalidEdgeSpecError(f"Unknown edge spec {spec!r}.")


def edge_from_specs(*args: Any) -> Dict[str, Any]:
    """Canonical edge dict for any accepted edge argument form (no id assigned)."""
    return build_edge(classify_edge_args(*args))
