from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Union

from ..config import get_settings
from ..constants import GENERIC_LINK_TYPE
from ..errors import ParameterRedefinedError, PseudoCypherSyntaxError
from ..formats import json_graph
from ..utils import is_empty, new_id, to_id_string
from .fragments import (
    PseudoCypherEdge,
    PseudoCypherNode,
    PseudoCypherTriple,
    parse_chain,
)

logger = logging.getLogger(__name__)

EntityCreator = Callable[[Optional[PseudoCypherNode]], Optional[Dict[str, Any]]]
EdgeCreator = Callable[[Optional[PseudoCypherEdge]], Optional[Dict[str, Any]]]


# ------------------------------------------------------------------ #
# Default creators
# ------------------------------------------------------------------ #
def default_entity_creator(type_name: Optional[str] = None) -> EntityCreator:
    """
    Creator turning a node fragment into an entity

        {id, name, description, typeName, **payload}

    The id comes from the payload or is generated; the type from the
    fragment, the payload, or `type_name` (configured default if None).
    """
    fallback_type = type_name or get_settings().parser.default_entity_type

    def create(fragment: Optional[PseudoCypherNode]) -> Dict[str, Any]:
        data = dict(fragment.data or {}) if fragment is not None else {}
        name = fragment.name if fragment is not None else None
        fragment_type = fragment.type_name if fragment is not None else None
        entity: Dict[str, Any] = {
            "id": new_id(),
            "name": name or data.get("name"),
            "description": data.get("description"),
            "typeName": fragment_type or data.get("typeName") or fallback_type,
        }
        entity.update(data)
        if fragment_type:
            entity["typeName"] = fragment_type
        entity["id"] = new_id() if is_empty(entity.get("id")) else to_id_string(entity["id"])
        return entity

    return create


def default_edge_creator(fragment: Optional[PseudoCypherEdge] = None) -> Dict[str, Any]:
    """Edge entity for an edge fragment (or a bare arrow when None)."""
    data = dict(fragment.data or {}) if fragment is not None else {}
    fragment_type = fragment.type_name if fragment is not None else None
    entity: Dict[str, Any] = {
        "id": new_id(),
        "name": (fragment.name if fragment is not None else None) or data.get("name"),
        "description": data.get("description"),
        "typeName": fragment_type or data.get("typeName") or GENERIC_LINK_TYPE,
        "sourceId": None,
        "targetId": None,
    }
    entity.update(data)
    if fragment_type:
        entity["typeName"] = fragment_type
    entity["id"] = new_id() if is_empty(entity.get("id")) else to_id_string(entity["id"])
    return entity


# ------------------------------------------------------------------ #
# Parser
# ------------------------------------------------------------------ #
class PseudoCypher:
    """
    Multi-line pseudo-cypher to json graph.

    Parameters
    ----------
    entity_creator:
        Callable turning a node fragment into an entity dict, or a type name
        used as default typeName by the default creator.
    edge_creator:
        Callable turning an edge fragment (None for a bare arrow) into an edge
        dict. Endpoints are filled in by the parser.
    strict:
        Raise PseudoCypherSyntaxError on lines that do not parse instead of
        skipping them. Defaults to the ``parser.strict`` setting.
    """

    __slots__ = ("_entity_creator", "_edge_creator", "strict")

    def __init__(
        self,
        entity_creator: Union[EntityCreator, str, None] = None,
        edge_creator: Optional[EdgeCreator] = None,
        *,
        strict: Optional[bool] = None,
    ) -> None:
        if entity_creator is None or isinstance(entity_creator, str):
            entity_creator = default_entity_creator(entity_creator)
        if not callable(entity_creator):
            raise TypeError("entity_creator should be a callable or a type name.")
        if edge_creator is None:
            edge_creator = default_edge_creator
        if not callable(edge_creator):
            raise TypeError("edge_creator should be a callable.")
        self._entity_creator: EntityCreator = entity_creator
        self._edge_creator: EdgeCreator = edge_creator
        self.strict = get_settings().parser.strict if strict is None else bool(strict)

    # ------------------------------------------------------------------ #
    # Whole documents
    # ------------------------------------------------------------------ #
    def parse(self, text: Optional[str]) -> Optional[json_graph.JsonGraph]:
        """
        Parse every line of `text` into a single json graph whose
        description is the input. None for empty input.
        """
        if is_empty(text):
            return None
        dictionary = self.create_entity_dictionary(text)
        g = json_graph.empty()
        g["description"] = text
        lines = self.get_lines(text)
        for line in lines:
            h = self.parse_line(line, dictionary)
            if h is not None:
                g = json_graph.merge_json_graphs(g, h)
        logger.info(
            "Parsed %d lines of pseudo-cypher into %d nodes and %d edges",
            len(lines),
            len(g["nodes"]),
            len(g["edges"]),
        )
        return g

    @staticmethod
    def get_lines(text: str) -> List[str]:
        """Non-blank lines with tabs removed and whitespace trimmed."""
        lines = (line.replace("\t", "").strip() for line in text.split("\n"))
        return [line for line in lines if line]

    def create_entity_dictionary(self, text: str) -> Dict[str, Dict[str, Any]]:
        """
        First pass: map every node name to the entity created for its first
        occurrence. Raises ParameterRedefinedError when a name reappears with
        a different type or payload.
        """
        dictionary: Dict[str, Dict[str, Any]] = {}
        first_seen: Dict[str, PseudoCypherNode] = {}
        for line in self.get_lines(text):
            nodes = self._line_nodes(line)
            for node in nodes:
                if not node.name:
                    continue
                previous = first_seen.get(node.name)
                if previous is None:
                    entity = self._entity_creator(node)
                    if entity is None:
                        continue
                    entity["id"] = new_id() if is_empty(entity.get("id")) else to_id_string(entity["id"])
                    first_seen[node.name] = node
                    dictionary[node.name] = entity
                    continue
                if _redefines(previous, node):
                    raise ParameterRedefinedError(node.name)
        return dictionary

    def _line_nodes(self, line: str) -> List[PseudoCypherNode]:
        triple = PseudoCypherTriple.parse(line)
        if triple is None:
            return []
        if triple.is_singleton:
            return [triple.source]
        nodes, _ = parse_chain(line)
        return nodes

    # ------------------------------------------------------------------ #
    # Single lines
    # ------------------------------------------------------------------ #
    def parse_line(
        self, line: str, dictionary: Optional[Dict[str, Dict[str, Any]]] = None
    ) -> Optional[json_graph.JsonGraph]:
        """Parse one line; nodes named in `dictionary` resolve to its entities."""
        if is_empty(line):
            return None
        dictionary = dictionary if dictionary is not None else {}
        line = line.strip()
        g = json_graph.empty()

        single = PseudoCypherNode.parse(line)
        if single is not None:
            entity = self._resolve(single, dictionary)
            if entity is not None:
                json_graph.add_node(g, entity)
            return g

        try:
            nodes, edges = parse_chain(line)
        except PseudoCypherSyntaxError:
            if self.strict:
                raise
            logger.warning("Skipping line that is not pseudo-cypher: %r", line)
            return None

        source = self._resolve(nodes[0], dictionary)
        for fragment, target_fragment in zip(edges, nodes[1:]):
            target = self._resolve(target_fragment, dictionary)
            edge = self._edge_creator(fragment)
            if source is not None and target is not None and edge is not None:
                stored_source = json_graph.add_node(g, source)
                stored_target = json_graph.add_node(g, target)
                edge["sourceId"] = stored_source["id"]
                edge["targetId"] = stored_target["id"]
                json_graph.add_edge(g, edge)
            source = target
        return g

    def _resolve(
        self, fragment: PseudoCypherNode, dictionary: Dict[str, Dict[str, Any]]
    ) -> Optional[Dict[str, Any]]:
        if fragment.name and fragment.name in dictionary:
            return dictionary[fragment.name]
        return self._entity_creator(fragment)

    # ------------------------------------------------------------------ #
    # Single entities
    # ------------------------------------------------------------------ #
    @staticmethod
    def parse_node(text: Any) -> Optional[Dict[str, Any]]:
        """Entity for a single node fragment, with id and typeName filled in."""
        if is_empty(text):
            return None
        fragment = PseudoCypherNode.parse(text)
        if fragment is None:
            return None
        entity = fragment.to_entity()
        entity["id"] = new_id() if is_empty(entity.get("id")) else to_id_string(entity["id"])
        if is_empty(entity.get("typeName")):
            entity["typeName"] = get_settings().parser.default_entity_type
        return entity

    @staticmethod
    def parse_edge(text: Any) -> Optional[Dict[str, Any]]:
        """
        Edge for a hop like ``(a{id: 1})-[:R]->(b{id: 2})``; endpoint ids come
        from the node payloads. None when either id is missing.
        """
        if is_empty(text):
            return None
        triple = PseudoCypherTriple.parse(text)
        if triple is None or triple.target is None:
            return None
        source = triple.source.to_entity()
        target = triple.target.to_entity()
        if is_empty(source.get("id")) or is_empty(target.get("id")):
            return None
        edge: Dict[str, Any] = {
            "id": new_id(),
            "sourceId": to_id_string(source["id"]),
            "targetId": to_id_string(target["id"]),
            "typeName": GENERIC_LINK_TYPE,
        }
        if triple.edge is not None:
            edge["name"] = triple.edge.name
            if not is_empty(triple.edge.type_name):
                edge["typeName"] = triple.edge.type_name
            if triple.edge.data:
                edge.update({k: v for k, v in triple.edge.data.items() if k not in ("sourceId", "targetId")})
                edge["id"] = to_id_string(edge["id"])
        return edge


def _redefines(first: PseudoCypherNode, later: PseudoCypherNode) -> bool:
    if later.type_name and later.type_name != first.type_name:
        return True
    if later.data is not None and later.data != first.data:
        return True
    return False


def parse_pseudo_cypher(
    text: Optional[str],
    entity_creator: Union[EntityCreator, str, None] = None,
    edge_creator: Optional[EdgeCreator] = None,
) -> Optional[json_graph.JsonGraph]:
    """Shortcut for ``PseudoCypher(entity_creator, edge_creator).parse(text)``."""
    return PseudoCypher(entity_creator, edge_creator).parse(text)
