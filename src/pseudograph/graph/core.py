from __future__ import annotations

import copy
import json
import logging
from collections import deque
from typing import Any, Callable, Deque, Dict, Iterable, List, Mapping, Optional, Set, Tuple, TYPE_CHECKING

import numpy as np

from ..config import get_settings
from ..constants import GRAPH_TYPE, THING_TYPE
from ..cypher.parser import PseudoCypher
from ..errors import (
    CyclicGraphError,
    FormatError,
    GraphError,
    InvalidEdgeSpecError,
    InvalidNodeSpecError,
    NodeNotFoundError,
    NotATreeError,
)
from ..formats.arrows import parse_arrows
from ..formats.matrix_market import parse_mtx
from ..utils import edge_label, is_empty, is_string_or_number, new_id, to_id_string
from . import matrix as _matrix
from .specs import edge_from_specs, node_from_specs

if TYPE_CHECKING:
    from graphblas import Matrix

logger = logging.getLogger(__name__)

Node = Dict[str, Any]
Edge = Dict[str, Any]
DftVisitor = Callable[[Node, int, List[str], bool], Any]
BftVisitor = Callable[[Node, int], Any]


class Graph:
    """
    Directed, labeled multigraph held in memory.

    Structure:
      - Nodes: dicts with a unique string ``id``, optional ``name`` and a
        ``typeName``; any other key is a free attribute.
      - Edges: dicts with a unique ``id``, ``sourceId``/``targetId`` of
        nodes in this graph, optional ``name`` and a ``typeName``.
      - Edges are unique per (sourceId, targetId, label) where the label is
        the edge name, or its typeName when unnamed (case-insensitive).
        Self-loops and parallel edges with different labels are allowed.

    Collections keep insertion order. Every accessor returns copies; the
    graph is only changed through its mutation methods.
    """

    __slots__ = (
        "id",
        "name",
        "description",
        "_nodes",       # id -> node
        "_edges",       # id -> edge
        "_outgoing",    # node id -> {edge id: None}
        "_incoming",    # node id -> {edge id: None}
    )

    type_name = GRAPH_TYPE

    # ------------------------------------------------------------------ #
    # Construction
    # ------------------------------------------------------------------ #
    def __init__(
        self,
        name: Optional[str] = None,
        description: Optional[str] = None,
        *,
        id: Optional[str] = None,
    ) -> None:
        self.id: str = to_id_string(id) if id is not None else new_id()
        self.name = name
        self.description = description
        self._nodes: Dict[str, Node] = {}
        self._edges: Dict[str, Edge] = {}
        self._outgoing: Dict[str, Dict[str, None]] = {}
        self._incoming: Dict[str, Dict[str, None]] = {}

    @classmethod
    def empty(cls) -> Graph:
        return cls()

    @classmethod
    def from_json(cls, data: Any) -> Graph:
        """
        Build a graph from the exchange form (a mapping or its JSON text).

        ``id``, ``name`` and ``description`` are taken over when present; a
        ``typeName`` other than "Graph" is rejected.
        """
        if isinstance(data, str):
            try:
                data = json.loads(data)
            except json.JSONDecodeError as exc:
                raise FormatError(f"Invalid graph JSON: {exc}") from exc
        if not isinstance(data, Mapping):
            raise FormatError(f"Cannot build a graph from {type(data).__name__}.")
        type_name = data.get("typeName")
        if type_name is not None and type_name != GRAPH_TYPE:
            raise FormatError(f"Expected typeName '{GRAPH_TYPE}', got {type_name!r}.")
        g = cls(data.get("name"), data.get("description"), id=data.get("id"))
        for node in data.get("nodes") or []:
            g.add_node(node)
        for edge in data.get("edges") or []:
            g.add_edge(edge)
        logger.debug("Graph %s loaded with %d nodes and %d edges", g.id, g.node_count, g.edge_count)
        return g

    from_json_graph = from_json

    @classmethod
    def from_pseudo_cypher(
        cls,
        text: Optional[str],
        entity_creator: Any = None,
        edge_creator: Any = None,
    ) -> Graph:
        """Graph for a multi-line pseudo-cypher text (empty graph for empty input)."""
        data = PseudoCypher(entity_creator, edge_creator).parse(text)
        return cls.empty() if data is None else cls.from_json(data)

    @classmethod
    def parse(cls, line: str, entity_creator: Any = None, edge_creator: Any = None) -> Graph:
        """Graph for a single line of pseudo-cypher."""
        data = PseudoCypher(entity_creator, edge_creator).parse_line(line)
        return cls.empty() if data is None else cls.from_json(data)

    @classmethod
    def from_arrows(cls, source: Any) -> Graph:
        return cls.from_json(parse_arrows(source))

    @classmethod
    def from_mtx(cls, source: Any) -> Graph:
        data = parse_mtx(source)
        g = cls.empty() if data is None else cls.from_json(data)
        g.description = "MTX import"
        return g

    @classmethod
    def from_edge_array(cls, items: Optional[Iterable[Any]]) -> Optional[Graph]:
        if items is None:
            return None
        g = cls()
        for item in items:
            g.add_edge(item)
        return g

    @classmethod
    def from_matrix(cls, matrix: Matrix, ids: Optional[List[str]] = None) -> Graph:
        return _matrix.graph_from_matrix(matrix, ids)

    @classmethod
    def create(cls, name: Optional[str] = None, **options: Any) -> Graph:
        """Named or random graph, see :func:`pseudograph.graph.generators.create`."""
        from .generators import create

        return create(name, **options)

    # ------------------------------------------------------------------ #
    # Basic properties
    # ------------------------------------------------------------------ #
    @property
    def nodes(self) -> List[Node]:
        return copy.deepcopy(list(self._nodes.values()))

    @property
    def edges(self) -> List[Edge]:
        return copy.deepcopy(list(self._edges.values()))

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    @property
    def is_empty(self) -> bool:
        return not self._nodes

    @property
    def has_loops(self) -> bool:
        return any(e["sourceId"] == e["targetId"] for e in self._edges.values())

    @property
    def has_cycles(self) -> bool:
        return self.get_cycle() is not None

    @property
    def is_acyclic(self) -> bool:
        return self.get_cycle() is None

    @property
    def max_degree(self) -> int:
        degrees = self.get_degrees()
        return max(degrees.values()) if degrees else 0

    @property
    def min_degree(self) -> int:
        degrees = self.get_degrees()
        return min(degrees.values()) if degrees else 0

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"Graph(id={self.id!r}, name={self.name!r}, nodes={self.node_count}, edges={self.edge_count})"

    # ------------------------------------------------------------------ #
    # Mutation
    # ------------------------------------------------------------------ #
    def add_node(self, *spec: Any) -> Node:
        """
        Add a node from any accepted node spec and return it.

        An existing node with the same id is returned unchanged.
        """
        node = node_from_specs(*spec)
        existing = self._nodes.get(node["id"])
        if existing is not None:
            return copy.deepcopy(existing)
        self._insert_node(node)
        logger.debug("Graph %s: added node %s", self.id, node["id"])
        return copy.deepcopy(node)

    def add_nodes(self, items: Iterable[Any]) -> List[Node]:
        return [self.add_node(item) for item in items]

    def _insert_node(self, node: Node) -> None:
        self._nodes[node["id"]] = node
        self._outgoing[node["id"]] = {}
        self._incoming[node["id"]] = {}

    def _ensure_node(self, node_id: str) -> None:
        if node_id not in self._nodes:
            self._insert_node({"id": node_id, "name": node_id, "typeName": THING_TYPE})
            logger.debug("Graph %s: implicitly added node %s", self.id, node_id)

    def add_edge(self, *spec: Any) -> Edge:
        """
        Add an edge from any accepted edge spec and return it.

        Missing endpoints are created. An edge with the same id, or the same
        endpoints and label, is returned instead of adding a duplicate.
        """
        edge = edge_from_specs(*spec)
        existing = self._find_existing_edge(edge)
        if existing is not None:
            return copy.deepcopy(existing)
        if is_empty(edge.get("id")):
            edge["id"] = new_id()
        self._ensure_node(edge["sourceId"])
        self._ensure_node(edge["targetId"])
        self._edges[edge["id"]] = edge
        self._outgoing[edge["sourceId"]][edge["id"]] = None
        self._incoming[edge["targetId"]][edge["id"]] = None
        logger.debug(
            "Graph %s: added edge %s (%s -> %s)",
            self.id,
            edge["id"],
            edge["sourceId"],
            edge["targetId"],
        )
        return copy.deepcopy(edge)

    def add_edges(self, items: Iterable[Any]) -> List[Edge]:
        return [self.add_edge(item) for item in items]

    def _find_existing_edge(self, edge: Mapping[str, Any]) -> Optional[Edge]:
        edge_id = edge.get("id")
        if edge_id is not None and edge_id in self._edges:
            return self._edges[edge_id]
        label = edge_label(edge)
        for candidate_id in self._outgoing.get(edge["sourceId"], ()):
            candidate = self._edges[candidate_id]
            if candidate["targetId"] == edge["targetId"] and edge_label(candidate) == label:
                return candidate
        return None

    def _delete_edge(self, edge_id: str) -> Edge:
        edge = self._edges.pop(edge_id)
        self._outgoing[edge["sourceId"]].pop(edge_id, None)
        self._incoming[edge["targetId"]].pop(edge_id, None)
        return edge

    def remove_node(self, node_or_id: Any) -> List[Node]:
        """
        Remove a node and every edge touching it.

        Returns the removed nodes; empty when the id is not in the graph.
        """
        node_id = self._node_reference(node_or_id)
        if node_id not in self._nodes:
            return []
        incident = list(self._outgoing[node_id]) + [
            e for e in self._incoming[node_id] if e not in self._outgoing[node_id]
        ]
        for edge_id in incident:
            self._delete_edge(edge_id)
        node = self._nodes.pop(node_id)
        del self._outgoing[node_id]
        del self._incoming[node_id]
        logger.debug("Graph %s: removed node %s and %d edges", self.id, node_id, len(incident))
        return [node]

    def remove_edge(self, id_or_endpoints: Any) -> List[Edge]:
        """
        Remove an edge by id (string or mapping with ``id``) or every parallel
        edge from a source to a target (mapping with ``sourceId``/``targetId``
        or a two-item sequence). Returns the removed edges.
        """
        item = id_or_endpoints
        if item is None:
            raise InvalidEdgeSpecError("Cannot remove an edge from None.")
        if is_string_or_number(item):
            edge_id = to_id_string(item)
            return [self._delete_edge(edge_id)] if edge_id in self._edges else []
        if isinstance(item, Mapping):
            if item.get("id") is not None:
                edge_id = to_id_string(item["id"])
                if edge_id in self._edges:
                    return [self._delete_edge(edge_id)]
                if item.get("sourceId") is None or item.get("targetId") is None:
                    return []
            if item.get("sourceId") is None or item.get("targetId") is None:
                raise InvalidEdgeSpecError("An edge reference needs an id or sourceId and targetId.")
            return self._remove_between(item["sourceId"], item["targetId"])
        if isinstance(item, (list, tuple)) and len(item) == 2:
            return self._remove_between(item[0], item[1])
        raise InvalidEdgeSpecError(f"Cannot remove an edge using {item!r}.")

    def _remove_between(self, source: Any, target: Any) -> List[Edge]:
        source_id = to_id_string(source)
        target_id = to_id_string(target)
        matching = [
            edge_id
            for edge_id in self._outgoing.get(source_id, ())
            if self._edges[edge_id]["targetId"] == target_id
        ]
        removed = [self._delete_edge(edge_id) for edge_id in matching]
        if removed:
            logger.debug("Graph %s: removed %d edges %s -> %s", self.id, len(removed), source_id, target_id)
        return removed

    def clear(self) -> None:
        self._nodes.clear()
        self._edges.clear()
        self._outgoing.clear()
        self._incoming.clear()

    def merge_graph(self, other: Any) -> Graph:
        """
        Add every node and edge of `other` (a Graph or exchange form) using the
        regular add rules. Returns self.
        """
        if other is None:
            return self
        if isinstance(other, Graph):
            nodes, edges = other._nodes.values(), other._edges.values()
        elif isinstance(other, Mapping):
            nodes, edges = other.get("nodes") or [], other.get("edges") or []
        else:
            raise GraphError(f"Cannot merge {type(other).__name__} into a graph.")
        for node in nodes:
            self.add_node(copy.deepcopy(node))
        for edge in edges:
            self.add_edge(copy.deepcopy(edge))
        logger.info("Graph %s: merged, now %d nodes and %d edges", self.id, self.node_count, self.edge_count)
        return self

    @staticmethod
    def merge_graphs(a: Any, b: Any) -> Optional[Graph]:
        """A new graph holding the union of `a` and `b`; None when both are None."""
        if a is None and b is None:
            return None
        g = Graph()
        g.merge_graph(a)
        g.merge_graph(b)
        return g

    def re_index(self, map_fn: Optional[Callable[[str], Any]] = None) -> Dict[str, str]:
        """
        Replace every node id by ``map_fn(old_id)`` (fresh ids by default),
        rewrite the edge endpoints, give every edge and the graph a fresh id.

        Returns the old -> new id mapping. Raises GraphError, leaving the
        graph untouched, when two nodes would share an id.
        """
        mapping: Dict[str, str] = {}
        for old_id in self._nodes:
            new = map_fn(old_id) if map_fn is not None else new_id()
            if not is_string_or_number(new) or is_empty(new):
                raise GraphError(f"Re-index produced an invalid id {new!r} for {old_id!r}.")
            mapping[old_id] = to_id_string(new)
        if len(set(mapping.values())) != len(mapping):
            raise GraphError("Re-index mapping is not one-to-one.")

        nodes = list(self._nodes.values())
        edges = list(self._edges.values())
        self.clear()
        for node in nodes:
            node["id"] = mapping[node["id"]]
            self._insert_node(node)
        for edge in edges:
            edge["id"] = new_id()
            edge["sourceId"] = mapping[edge["sourceId"]]
            edge["targetId"] = mapping[edge["targetId"]]
            self._edges[edge["id"]] = edge
            self._outgoing[edge["sourceId"]][edge["id"]] = None
            self._incoming[edge["targetId"]][edge["id"]] = None
        self.id = new_id()
        logger.debug("Graph %s: re-indexed %d nodes", self.id, len(mapping))
        return mapping

    def clone(self) -> Graph:
        g = Graph(self.name, self.description)
        for node in self._nodes.values():
            g._insert_node(copy.deepcopy(node))
        for edge_id, edge in self._edges.items():
            g._edges[edge_id] = copy.deepcopy(edge)
            g._outgoing[edge["sourceId"]][edge_id] = None
            g._incoming[edge["targetId"]][edge_id] = None
        return g

    # ------------------------------------------------------------------ #
    # Lookup
    # ------------------------------------------------------------------ #
    @staticmethod
    def _node_reference(node_or_id: Any) -> str:
        if node_or_id is None:
            raise InvalidNodeSpecError("A node reference cannot be None.")
        if isinstance(node_or_id, Mapping):
            if is_empty(node_or_id.get("id")):
                raise InvalidNodeSpecError("A node reference needs an id.")
            return to_id_string(node_or_id["id"])
        if is_string_or_number(node_or_id) or isinstance(node_or_id, bool):
            return to_id_string(node_or_id)
        raise InvalidNodeSpecError(f"Cannot use {type(node_or_id).__name__} as a node reference.")

    def _existing_node_id(self, node_or_id: Any) -> str:
        node_id = self._node_reference(node_or_id)
        if node_id not in self._nodes:
            raise NodeNotFoundError(f"Node {node_id!r} is not in graph {self.id}.")
        return node_id

    def get_node_by_id(self, node_id: Any) -> Optional[Node]:
        if node_id is None:
            return None
        node = self._nodes.get(to_id_string(node_id))
        return copy.deepcopy(node) if node is not None else None

    def get_edge_by_id(self, edge_id: Any) -> Optional[Edge]:
        if edge_id is None:
            return None
        edge = self._edges.get(to_id_string(edge_id))
        return copy.deepcopy(edge) if edge is not None else None

    def get_by_id(self, item_id: Any) -> Optional[Dict[str, Any]]:
        """Node or edge with the given id."""
        node = self.get_node_by_id(item_id)
        return node if node is not None else self.get_edge_by_id(item_id)

    def node_id_exists(self, node_id: Any) -> bool:
        return node_id is not None and to_id_string(node_id) in self._nodes

    def id_exists(self, item_id: Any) -> bool:
        if item_id is None:
            return False
        key = to_id_string(item_id)
        return key in self._nodes or key in self._edges

    def get_nodes_by_name(self, name: Any) -> List[Node]:
        if name is None:
            return []
        wanted = str(name).strip().lower()
        return [
            copy.deepcopy(node)
            for node in self._nodes.values()
            if node.get("name") is not None and str(node["name"]).strip().lower() == wanted
        ]

    def get_node_by_name(self, name: Any) -> Optional[Node]:
        """First node whose name matches, trimmed and case-insensitive."""
        found = self.get_nodes_by_name(name)
        return found[0] if found else None

    def get_by_type_name(self, type_name: str) -> List[Dict[str, Any]]:
        """Nodes and edges with the given typeName."""
        return self.get_nodes_by_type_name(type_name) + [
            copy.deepcopy(e) for e in self._edges.values() if e.get("typeName") == type_name
        ]

    def get_nodes_by_type_name(self, type_name: str) -> List[Node]:
        return [copy.deepcopy(n) for n in self._nodes.values() if n.get("typeName") == type_name]

    def find_node(self, predicate: Callable[[Node], bool]) -> Optional[Node]:
        for node in self._nodes.values():
            candidate = copy.deepcopy(node)
            if predicate(candidate):
                return candidate
        return None

    def filter_nodes(self, predicate: Callable[[Node], bool]) -> List[Node]:
        return [n for n in self.nodes if predicate(n)]

    def filter_edges(self, predicate: Callable[[Edge], bool]) -> List[Edge]:
        return [e for e in self.edges if predicate(e)]

    def edge_exists(self, *spec: Any) -> bool:
        """True when the edge (any edge spec) is present by id or by endpoints and label."""
        return self._find_existing_edge(edge_from_specs(*spec)) is not None

    def get_edge(self, source: Any, target: Any) -> Optional[Edge]:
        """First edge from `source` to `target`."""
        source_id = to_id_string(source)
        target_id = to_id_string(target)
        for edge_id in self._outgoing.get(source_id, ()):
            if self._edges[edge_id]["targetId"] == target_id:
                return copy.deepcopy(self._edges[edge_id])
        return None

    def get_edges_between(self, a: Any, b: Any, any_direction: bool = True) -> List[Edge]:
        a_id = self._node_reference(a)
        b_id = self._node_reference(b)
        found = [
            copy.deepcopy(self._edges[e])
            for e in self._outgoing.get(a_id, ())
            if self._edges[e]["targetId"] == b_id
        ]
        if any_direction and a_id != b_id:
            found += [
                copy.deepcopy(self._edges[e])
                for e in self._outgoing.get(b_id, ())
                if self._edges[e]["targetId"] == a_id
            ]
        return found

    def get_outgoing_edges(self, node_or_id: Any) -> List[Edge]:
        node_id = self._node_reference(node_or_id)
        return [copy.deepcopy(self._edges[e]) for e in self._outgoing.get(node_id, ())]

    def get_incoming_edges(self, node_or_id: Any) -> List[Edge]:
        node_id = self._node_reference(node_or_id)
        return [copy.deepcopy(self._edges[e]) for e in self._incoming.get(node_id, ())]

    def get_edges(self, node_or_id: Any) -> List[Edge]:
        """Every edge touching the node; a self-loop is listed once."""
        node_id = self._existing_node_id(node_or_id)
        edge_ids = dict(self._outgoing[node_id])
        edge_ids.update(self._incoming[node_id])
        return [copy.deepcopy(self._edges[e]) for e in edge_ids]

    def are_connected(self, a: Any, b: Any) -> bool:
        return bool(self.get_edges_between(a, b, any_direction=True))

    def get_neighbors(self, node_or_id: Any) -> List[Node]:
        """Parents and children of the node, de-duplicated."""
        node_id = self._existing_node_id(node_or_id)
        ids = dict.fromkeys(self._parent_ids(node_id))
        ids.update(dict.fromkeys(self._child_ids(node_id)))
        return [copy.deepcopy(self._nodes[i]) for i in ids]

    def get_neighborhood(self, node_or_id: Any) -> Graph:
        """Subgraph of the node, its neighbors and the edges touching the node."""
        node_id = self._existing_node_id(node_or_id)
        g = Graph(name=f"neighborhood of {node_id}")
        g.add_node(copy.deepcopy(self._nodes[node_id]))
        for edge in self.get_edges(node_id):
            g.add_node(copy.deepcopy(self._nodes[edge["sourceId"]]))
            g.add_node(copy.deepcopy(self._nodes[edge["targetId"]]))
            g.add_edge(edge)
        return g

    # ------------------------------------------------------------------ #
    # Hierarchy
    # ------------------------------------------------------------------ #
    def _child_ids(self, node_id: str) -> List[str]:
        return list(dict.fromkeys(self._edges[e]["targetId"] for e in self._outgoing.get(node_id, ())))

    def _parent_ids(self, node_id: str) -> List[str]:
        return list(dict.fromkeys(self._edges[e]["sourceId"] for e in self._incoming.get(node_id, ())))

    def get_children(self, node_or_id: Any) -> List[Node]:
        node_id = self._node_reference(node_or_id)
        return [copy.deepcopy(self._nodes[i]) for i in self._child_ids(node_id)]

    def get_parents(self, node_or_id: Any) -> List[Node]:
        node_id = self._node_reference(node_or_id)
        return [copy.deepcopy(self._nodes[i]) for i in self._parent_ids(node_id)]

    def get_parent(self, node_or_id: Any) -> Optional[Node]:
        """The single parent of a node, None for a root; NotATreeError for several."""
        node_id = self._node_reference(node_or_id)
        parents = self._parent_ids(node_id)
        if len(parents) > 1:
            raise NotATreeError(f"Node {node_id!r} has {len(parents)} parents.")
        return copy.deepcopy(self._nodes[parents[0]]) if parents else None

    def get_parent_hierarchy(self, node_or_id: Any) -> List[Node]:
        """Parent, grandparent, ... up to a root; stops when a parent repeats."""
        node_id = self._node_reference(node_or_id)
        seen: Set[str] = {node_id}
        chain: List[Node] = []
        parent = self.get_parent(node_id)
        while parent is not None and parent["id"] not in seen:
            seen.add(parent["id"])
            chain.append(parent)
            parent = self.get_parent(parent["id"])
        return chain

    # ------------------------------------------------------------------ #
    # Traversal
    # ------------------------------------------------------------------ #
    def dft(self, visitor: DftVisitor, start: Any) -> None:
        """
        Depth-first pre-order traversal from `start`.

        ``visitor(node, depth, path, has_children)`` is called once per
        visit; `path` holds the ids from `start` to the node. A node that
        reappears on its own path raises CyclicGraphError. Shared
        descendants of a DAG are visited once per path reaching them.
        """
        start_id = self._existing_node_id(start)
        stack: List[Tuple[str, int, List[str]]] = [(start_id, 0, [start_id])]
        while stack:
            node_id, depth, path = stack.pop()
            if node_id in path[:-1]:
                raise CyclicGraphError(
                    f"Cycle detected at node {node_id!r} via {' -> '.join(path)}."
                )
            children = self._child_ids(node_id)
            visitor(copy.deepcopy(self._nodes[node_id]), depth, list(path), bool(children))
            for child in reversed(children):
                stack.append((child, depth + 1, path + [child]))

    def bft(self, visitor: BftVisitor, start: Any) -> None:
        """
        Breadth-first (level order) traversal from `start`; ``visitor(node,
        depth)`` per visit. No cycle detection: check ``is_acyclic`` first
        when the reachable part may contain a cycle.
        """
        start_id = self._existing_node_id(start)
        queue: Deque[Tuple[str, int]] = deque([(start_id, 0)])
        while queue:
            node_id, depth = queue.popleft()
            visitor(copy.deepcopy(self._nodes[node_id]), depth)
            for child in self._child_ids(node_id):
                queue.append((child, depth + 1))

    def get_flows(self, start: Any) -> List[List[str]]:
        """Every path of ids from `start` to a node without children."""
        flows: List[List[str]] = []

        def collect(node: Node, depth: int, path: List[str], has_children: bool) -> None:
            if not has_children:
                flows.append(path)

        self.dft(collect, start)
        return flows

    # ------------------------------------------------------------------ #
    # Analysis
    # ------------------------------------------------------------------ #
    def get_cycle(self) -> Optional[List[str]]:
        """
        Globally shortest cycle as ids, first id repeated at the end
        (``["d", "d"]`` for a self-loop), or None when acyclic.

        Paths grow backwards over predecessors from every node at once, one
        step per round, so the first closure found is a shortest one.
        """
        predecessors = {node_id: self._parent_ids(node_id) for node_id in self._nodes}
        paths: List[List[str]] = [[node_id] for node_id in self._nodes]
        reached: Dict[str, Set[str]] = {node_id: {node_id} for node_id in self._nodes}
        while paths:
            extended: List[List[str]] = []
            for path in paths:
                origin = path[0]
                for pred in predecessors[path[-1]]:
                    if pred == origin:
                        return [origin] + path[:0:-1] + [origin]
                    if pred in reached[origin]:
                        continue
                    reached[origin].add(pred)
                    extended.append(path + [pred])
            paths = extended
        return None

    def get_component_of(self, node_or_id: Any) -> List[str]:
        """Ids reachable from the node ignoring edge direction; empty if absent."""
        node_id = self._node_reference(node_or_id)
        if node_id not in self._nodes:
            return []
        return self._flood(node_id)

    def _flood(self, node_id: str) -> List[str]:
        seen = {node_id}
        order = [node_id]
        queue: Deque[str] = deque([node_id])
        while queue:
            current = queue.popleft()
            for neighbor in self._child_ids(current) + self._parent_ids(current):
                if neighbor not in seen:
                    seen.add(neighbor)
                    order.append(neighbor)
                    queue.append(neighbor)
        return order

    def get_components(self) -> List[List[str]]:
        """Weakly connected components; together they hold every node id once."""
        remaining = dict.fromkeys(self._nodes)
        components: List[List[str]] = []
        while remaining:
            start = next(iter(remaining))
            component = self._flood(start)
            for node_id in component:
                remaining.pop(node_id, None)
            components.append(component)
        return components

    def to_adjacency_list(self) -> Dict[str, List[str]]:
        return {node_id: self._child_ids(node_id) for node_id in self._nodes}

    def get_degrees(self) -> Dict[str, int]:
        """In-degree plus out-degree per node id; a self-loop counts twice."""
        return _matrix.degrees(self)

    def get_degree(self, node_or_id: Any) -> int:
        node_id = self._existing_node_id(node_or_id)
        return self.get_degrees()[node_id]

    def degree_histogram(self, bins: int = 10) -> Tuple[np.ndarray, np.ndarray]:
        """``numpy.histogram`` of the node degrees: (counts, bin edges)."""
        values = np.fromiter(self.get_degrees().values(), dtype=np.int64)
        return np.histogram(values, bins=bins)

    def to_matrix(self) -> Tuple[Matrix, List[str]]:
        """Adjacency matrix (parallel-edge counts) and the node id per row."""
        return _matrix.adjacency_matrix(self)

    def sample(self, n: int = 100, *, seed: Optional[int] = None) -> Graph:
        """
        Subgraph of `n` nodes drawn without replacement plus every edge
        between them. All nodes are taken when `n` exceeds the node count.
        """
        if n < 0:
            raise ValueError(f"Sample size should be non-negative, got {n}.")
        ids = list(self._nodes)
        if n >= len(ids):
            chosen = ids
        else:
            if seed is None:
                seed = get_settings().graph.random_seed
            rng = np.random.default_rng(seed)
            picked = np.sort(rng.choice(len(ids), size=n, replace=False))
            chosen = [ids[int(i)] for i in picked]
        keep = set(chosen)
        g = Graph(self.name, self.description)
        for node_id in chosen:
            g._insert_node(copy.deepcopy(self._nodes[node_id]))
        for edge_id, edge in self._edges.items():
            if edge["sourceId"] in keep and edge["targetId"] in keep:
                g._edges[edge_id] = copy.deepcopy(edge)
                g._outgoing[edge["sourceId"]][edge_id] = None
                g._incoming[edge["targetId"]][edge_id] = None
        return g

    # ------------------------------------------------------------------ #
    # Export
    # ------------------------------------------------------------------ #
    def to_json(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "typeName": GRAPH_TYPE,
            "nodes": self.nodes,
            "edges": self.edges,
        }
