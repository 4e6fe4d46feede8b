from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from ..utils import edge_label, to_id_string
from .core import Graph


@dataclass(frozen=True, slots=True)
class Scalar:
    value: Any


@dataclass(frozen=True, slots=True)
class GraphRef:
    id: str


@dataclass(frozen=True, slots=True)
class NodeRef:
    id: str


@dataclass(frozen=True, slots=True)
class EdgeRef:
    source_id: str
    target_id: str
    label: Optional[str]


@dataclass(frozen=True, slots=True)
class Opaque:
    pass


Comparable = Union[Scalar, GraphRef, NodeRef, EdgeRef, Opaque]


def classify(item: Any) -> Comparable:
    if isinstance(item, (str, int, float, bool)):
        return Scalar(item)
    if isinstance(item, Graph):
        return GraphRef(item.id)
    if isinstance(item, Mapping):
        if item.get("id") is not None:
            return NodeRef(to_id_string(item["id"]))
        if item.get("sourceId") is not None and item.get("targetId") is not None:
            return EdgeRef(
                to_id_string(item["sourceId"]), to_id_string(item["targetId"]), edge_label(item)
            )
    return Opaque()


def are_equal(a: Any, b: Any) -> bool:
    """
    Polymorphic equality.

    - None only equals None.
    - Scalars are equal when type and value match (booleans are not numbers).
    - Graphs are equal by id.
    - Nodes, and edges carrying an id, are equal by id.
    - Edges without id are equal by endpoints and case-insensitive label.
    - Anything else is never equal.
    """
    if a is None or b is None:
        return a is b
    left = classify(a)
    right = classify(b)
    if type(left) is not type(right):
        return False
    if isinstance(left, Scalar):
        return type(left.value) is type(right.value) and left.value == right.value
    if isinstance(left, Opaque):
        return False
    return left == right
