"""
Pseudo-cypher fragments.

- PseudoCypherNode   : ``(name:Type{payload})``, parentheses optional on input.
- PseudoCypherEdge   : ``[name:Type{payload}]``, brackets optional on input.
- PseudoCypherTriple : a singleton node or a ``source -[edge]-> target`` hop.

Lines may chain hops, ``(a)-->(b)-[:R]->(c)``; :func:`parse_chain` returns
every node and edge of such a line.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Tuple

from ..constants import GENERIC_LINK_TYPE
from ..errors import PayloadError, PseudoCypherSyntaxError
from ..utils import is_empty, is_identifier, is_number, to_id_string
from .literals import parse_payload, render_payload, render_value


def find_closing(text: str, start: int, opener: str, closer: str) -> int:
    """
    Index of the `closer` matching the `opener` at `text[start]`, or -1.

    Quoted strings inside payloads are skipped so brackets in values do not
    count.
    """
    if start >= len(text) or text[start] != opener:
        return -1
    depth = 0
    quote: Optional[str] = None
    i = start
    while i < len(text):
        char = text[i]
        if quote is not None:
            if char == "\\":
                i += 2
                continue
            if char == quote:
                quote = None
        elif char in ("'", '"'):
            quote = char
        elif char == opener:
            depth += 1
        elif char == closer:
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return -1


def _read_identifier(text: str, pos: int) -> Tuple[Optional[str], int]:
    if pos >= len(text) or not (text[pos].isascii() and (text[pos].isalpha() or text[pos] == "_")):
        return None, pos
    end = pos + 1
    while end < len(text) and text[end].isascii() and (text[end].isalnum() or text[end] == "_"):
        end += 1
    return text[pos:end], end


def _skip_ws(text: str, pos: int) -> int:
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


def _parse_inner(inner: str) -> Tuple[Optional[str], Optional[str], Optional[Dict[str, Any]]]:
    """Split ``name:Type{payload}`` into its three optional parts."""
    pos = _skip_ws(inner, 0)
    name, pos = _read_identifier(inner, pos)
    pos = _skip_ws(inner, pos)
    type_name = None
    if pos < len(inner) and inner[pos] == ":":
        pos = _skip_ws(inner, pos + 1)
        type_name, pos = _read_identifier(inner, pos)
        pos = _skip_ws(inner, pos)
    data = None
    if pos < len(inner) and inner[pos] == "{":
        end = find_closing(inner, pos, "{", "}")
        if end < 0:
            raise PayloadError(f"Unbalanced payload in {inner!r}")
        data = parse_payload(inner[pos:end + 1])
        pos = _skip_ws(inner, end + 1)
    if pos != len(inner):
        raise PseudoCypherSyntaxError(f"Unexpected {inner[pos:]!r} in fragment {inner!r}")
    return name, type_name, data


# ------------------------------------------------------------------ #
# Node and edge fragments
# ------------------------------------------------------------------ #
@dataclass(slots=True)
class _Fragment:
    name: Optional[str] = None
    type_name: Optional[str] = None
    data: Optional[Dict[str, Any]] = None

    OPEN: ClassVar[str] = "("
    CLOSE: ClassVar[str] = ")"

    @classmethod
    def parse(cls, stuff: Any):
        """
        Interpret `stuff` as a fragment of this kind.

        Accepts a fragment instance (returned as-is), a string with or without
        the enclosing brackets, a number or boolean, or an entity mapping.
        Returns None for anything malformed.
        """
        if stuff is None:
            return None
        if isinstance(stuff, cls):
            return stuff
        if isinstance(stuff, bool) or is_number(stuff):
            stuff = to_id_string(stuff)
        elif isinstance(stuff, Mapping):
            try:
                stuff = cls.entity_to_cypher(stuff)
            except PayloadError:
                return None
        if not isinstance(stuff, str):
            return None
        text = stuff.strip()
        if not text:
            return None
        if not text.startswith(cls.OPEN):
            text = cls.OPEN + text
        if not text.endswith(cls.CLOSE):
            text = text + cls.CLOSE
        if find_closing(text, 0, cls.OPEN, cls.CLOSE) != len(text) - 1:
            return None
        try:
            name, type_name, data = _parse_inner(text[1:-1])
        except (PayloadError, PseudoCypherSyntaxError):
            return None
        return cls(name, type_name, data)

    @classmethod
    def entity_to_cypher(cls, entity: Mapping[str, Any], variable_name: Optional[str] = None) -> str:
        raise NotImplementedError

    def to_entity(self) -> Dict[str, Any]:
        entity: Dict[str, Any] = dict(self.data or {})
        if not is_empty(self.type_name):
            entity["typeName"] = self.type_name
        entity["name"] = (self.data or {}).get("name") or self.name
        return entity

    def to_cypher(self) -> str:
        text = self.name or ""
        if self.type_name is not None:
            text += f":{self.type_name}"
        if self.data is not None:
            text += render_payload(self.data)
        return f"{self.OPEN}{text}{self.CLOSE}"

    def __str__(self) -> str:
        return self.to_cypher()


def _variable_for(entity: Mapping[str, Any], variable_name: Optional[str]) -> str:
    candidate = variable_name if variable_name is not None else entity.get("name")
    return candidate if is_identifier(candidate) else ""


@dataclass(slots=True)
class PseudoCypherNode(_Fragment):
    """A node fragment ``(name:Type{payload})``."""

    OPEN: ClassVar[str] = "("
    CLOSE: ClassVar[str] = ")"

    @classmethod
    def entity_to_cypher(cls, entity: Mapping[str, Any], variable_name: Optional[str] = None) -> str:
        """
        Render a node entity. The name (or `variable_name`) becomes the
        variable when it is a valid identifier; every attribute goes into the
        payload.
        """
        type_name = entity.get("typeName")
        type_part = f":{type_name}" if is_identifier(type_name) else ""
        return f"({_variable_for(entity, variable_name)}{type_part}{render_payload(entity)})"


@dataclass(slots=True)
class PseudoCypherEdge(_Fragment):
    """An edge fragment ``[name:Type{payload}]``."""

    OPEN: ClassVar[str] = "["
    CLOSE: ClassVar[str] = "]"

    @classmethod
    def entity_to_cypher(cls, entity: Mapping[str, Any], variable_name: Optional[str] = None) -> str:
        type_name = entity.get("typeName") or GENERIC_LINK_TYPE
        type_part = f":{type_name}" if is_identifier(type_name) else ""
        payload = {k: v for k, v in entity.items() if k not in ("sourceId", "targetId")}
        return f"[{_variable_for(entity, variable_name)}{type_part}{render_payload(payload)}]"


# ------------------------------------------------------------------ #
# Chains
# ------------------------------------------------------------------ #
def _read_node(line: str, pos: int) -> Tuple[PseudoCypherNode, int]:
    pos = _skip_ws(line, pos)
    end = find_closing(line, pos, "(", ")")
    if end < 0:
        raise PseudoCypherSyntaxError(f"Expected a node at offset {pos} in {line!r}")
    try:
        name, type_name, data = _parse_inner(line[pos + 1:end])
    except PayloadError as exc:
        raise PseudoCypherSyntaxError(str(exc)) from exc
    return PseudoCypherNode(name, type_name, data), end + 1


def _read_connector(line: str, pos: int) -> Tuple[Optional[PseudoCypherEdge], int]:
    pos = _skip_ws(line, pos)
    if line.startswith("-->", pos):
        return None, pos + 3
    if line.startswith("-[", pos):
        end = find_closing(line, pos + 1, "[", "]")
        if end < 0 or not line.startswith("->", end + 1):
            raise PseudoCypherSyntaxError(f"Malformed edge at offset {pos} in {line!r}")
        inner = line[pos + 2:end]
        edge = None
        if inner.strip():
            try:
                edge = PseudoCypherEdge(*_parse_inner(inner))
            except PayloadError as exc:
                raise PseudoCypherSyntaxError(str(exc)) from exc
        return edge, end + 3
    raise PseudoCypherSyntaxError(f"Expected '-->' or '-[...]->' at offset {pos} in {line!r}")


def parse_chain(line: str) -> Tuple[List[PseudoCypherNode], List[Optional[PseudoCypherEdge]]]:
    """
    Parse ``(a)-->(b)-[e]->(c)...`` into its nodes and the edges between them.

    ``edges[i]`` connects ``nodes[i]`` to ``nodes[i + 1]``; an arrow without
    an edge fragment yields None. Raises PseudoCypherSyntaxError.
    """
    text = line.strip()
    nodes: List[PseudoCypherNode] = []
    edges: List[Optional[PseudoCypherEdge]] = []
    node, pos = _read_node(text, 0)
    nodes.append(node)
    pos = _skip_ws(text, pos)
    while pos < len(text):
        edge, pos = _read_connector(text, pos)
        node, pos = _read_node(text, pos)
        edges.append(edge)
        nodes.append(node)
        pos = _skip_ws(text, pos)
    return nodes, edges


# ------------------------------------------------------------------ #
# Triples
# ------------------------------------------------------------------ #
@dataclass(slots=True)
class PseudoCypherTriple:
    source: PseudoCypherNode
    edge: Optional[PseudoCypherEdge] = None
    target: Optional[PseudoCypherNode] = None

    type_name: ClassVar[str] = "PseudoCypherTriple"

    @property
    def is_singleton(self) -> bool:
        return self.target is None

    @property
    def has_edge(self) -> bool:
        return self.edge is not None

    @classmethod
    def create(cls, *parts: Any) -> PseudoCypherTriple:
        """
        Build a triple from one to three parts.

        - (node)               : singleton
        - (node, node)         : edge-less hop
        - (node, edge)         : source with an edge but no target yet
        - (node, edge, node)   : full hop
        """
        if not 1 <= len(parts) <= 3:
            raise PseudoCypherSyntaxError(f"A triple takes 1 to 3 parts, got {len(parts)}.")
        source = PseudoCypherNode.parse(parts[0])
        if source is None:
            raise PseudoCypherSyntaxError("The first part is not a proper node definition.")
        if len(parts) == 1:
            return cls(source)
        if len(parts) == 2:
            second = parts[1]
            if not isinstance(second, PseudoCypherEdge):
                target = PseudoCypherNode.parse(second)
                if target is not None:
                    return cls(source, None, target)
            edge = PseudoCypherEdge.parse(second)
            if edge is None:
                raise PseudoCypherSyntaxError(
                    "The second part is not a proper edge or node definition."
                )
            return cls(source, edge)
        edge = PseudoCypherEdge.parse(parts[1])
        if edge is None:
            raise PseudoCypherSyntaxError("The second part is not a proper edge definition.")
        target = PseudoCypherNode.parse(parts[2])
        if target is None:
            raise PseudoCypherSyntaxError("The third part is not a proper node definition.")
        return cls(source, edge, target)

    @classmethod
    def parse(cls, line: Any) -> Optional[PseudoCypherTriple]:
        """Parse a singleton or the first hop of a line; None if neither."""
        if not isinstance(line, str) or is_empty(line):
            return None
        text = line.strip()
        node = PseudoCypherNode.parse(text)
        if node is not None:
            return cls(node)
        try:
            nodes, edges = parse_chain(text)
        except PseudoCypherSyntaxError:
            return None
        if len(nodes) < 2:
            return cls(nodes[0])
        return cls(nodes[0], edges[0], nodes[1])

    @staticmethod
    def entity_to_cypher(
        entity: Mapping[str, Any],
        source_name: str = "u",
        target_name: str = "v",
        edge_name: str = "r",
    ) -> Optional[str]:
        """
        Render an edge entity as a hop between id-only nodes, e.g.
        ``(u{id: 'a'})-[r:Link{id: 'e1'}]->(v{id: 'b'})``. None when the
        entity lacks `sourceId` or `targetId`.
        """
        source_id = entity.get("sourceId")
        target_id = entity.get("targetId")
        if source_id is None or target_id is None:
            return None
        source = f"({source_name}{{id: {render_value(_scalar_id(source_id))}}})"
        target = f"({target_name}{{id: {render_value(_scalar_id(target_id))}}})"

        rest = {k: v for k, v in entity.items() if k not in ("sourceId", "targetId") and v is not None}
        name = rest.pop("name", None)
        type_name = rest.pop("typeName", None)
        if not rest and name is None and type_name is None:
            return f"{source}-->{target}"

        variable = name if is_identifier(name) and name != edge_name else edge_name
        if name is not None and not is_identifier(name):
            rest["name"] = name
        spec = variable
        if type_name is not None:
            if is_identifier(type_name):
                spec += f":{type_name}"
            else:
                rest["typeName"] = type_name
        if rest:
            spec += render_payload(rest)
        return f"{source}-[{spec}]->{target}"

    def to_cypher(self) -> str:
        if self.target is None:
            if self.edge is None:
                return self.source.to_cypher()
            return f"{self.source.to_cypher()}-{self.edge.to_cypher()}->"
        if self.edge is None:
            return f"{self.source.to_cypher()}-->{self.target.to_cypher()}"
        return f"{self.source.to_cypher()}-{self.edge.to_cypher()}->{self.target.to_cypher()}"

    def __str__(self) -> str:
        return self.to_cypher()


def _scalar_id(value: Any) -> Any:
    return value if isinstance(value, str) or is_number(value) or isinstance(value, bool) else str(value)
