from __future__ import annotations

import pytest

from pseudograph.cypher.fragments import (
    PseudoCypherEdge,
    PseudoCypherNode,
    PseudoCypherTriple,
    find_closing,
    parse_chain,
)
from pseudograph.errors import PseudoCypherSyntaxError


# ---------------------------------------------------------------------------
# Scanner
# ---------------------------------------------------------------------------


def test_find_closing_skips_quoted_brackets() -> None:
    text = "(a{x: ')'})-->(b)"
    assert find_closing(text, 0, "(", ")") == 10
    assert find_closing("(a", 0, "(", ")") == -1
    assert find_closing("x(a)", 0, "(", ")") == -1


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "text, name, type_name, data",
    [
        ("(a:Car)", "a", "Car", None),
        ("a:Car", "a", "Car", None),
        ("(a:Car{u: 2})", "a", "Car", {"u": 2}),
        ("(:Person)", None, "Person", None),
        ("({id: 4})", None, None, {"id": 4}),
        ("agent", "agent", None, None),
        ("()", None, None, None),
    ],
)
def test_node_parse(text, name, type_name, data) -> None:
    node = PseudoCypherNode.parse(text)
    assert node == PseudoCypherNode(name, type_name, data)


@pytest.mark.parametrize(
    "stuff",
    [None, "", "   ", "(a b)", "(1a)", "(a{x: {y: 1}})", "(a)-->(b)", "(a))", object(), [1, 2]],
)
def test_node_parse_rejects(stuff) -> None:
    assert PseudoCypherNode.parse(stuff) is None


def test_node_parse_returns_fragment_unchanged() -> None:
    node = PseudoCypherNode("a", "T", None)
    assert PseudoCypherNode.parse(node) is node


def test_node_parse_coerces_numbers_and_booleans() -> None:
    assert PseudoCypherNode.parse(True) == PseudoCypherNode("true")
    # numbers are not identifiers
    assert PseudoCypherNode.parse(12) is None


def test_node_parse_from_entity() -> None:
    node = PseudoCypherNode.parse({"id": "1", "name": "ann", "typeName": "Person", "age": 4})
    assert node.name == "ann"
    assert node.type_name == "Person"
    assert node.data == {"id": "1", "name": "ann", "typeName": "Person", "age": 4}


def test_node_parse_from_entity_with_nested_value_is_none() -> None:
    assert PseudoCypherNode.parse({"id": "1", "nested": {"a": 1}}) is None


def test_node_to_entity_prefers_payload_name() -> None:
    node = PseudoCypherNode.parse("(a:Person{name: 'Ann', age: 4})")
    assert node.to_entity() == {"name": "Ann", "age": 4, "typeName": "Person"}
    assert PseudoCypherNode.parse("(b)").to_entity() == {"name": "b"}


def test_node_to_cypher() -> None:
    assert PseudoCypherNode("a", "Car", {"u": 34}).to_cypher() == "(a:Car{u: 34})"
    assert PseudoCypherNode("a").to_cypher() == "(a)"
    assert PseudoCypherNode(None, "T", {}).to_cypher() == "(:T{})"


def test_entity_to_cypher_uses_name_only_when_it_is_an_identifier() -> None:
    assert PseudoCypherNode.entity_to_cypher({"id": "1", "name": "my node"}) == "({id: '1', name: 'my node'})"
    assert PseudoCypherNode.entity_to_cypher({"id": "1"}, "v") == "(v{id: '1'})"


@pytest.mark.parametrize(
    "text",
    ["(a:Car{u: 2, tags: ['x', 'y']})", "b", "(:T{flag: true, w: 1.5})", "(q{s: \"it's\"})"],
)
def test_node_render_parse_is_idempotent(text: str) -> None:
    once = PseudoCypherNode.parse(text).to_cypher()
    assert PseudoCypherNode.parse(once).to_cypher() == once
    assert PseudoCypherNode.parse(once).to_entity() == PseudoCypherNode.parse(text).to_entity()


# ---------------------------------------------------------------------------
# Edges
# ---------------------------------------------------------------------------


def test_edge_parse() -> None:
    assert PseudoCypherEdge.parse("l:Link") == PseudoCypherEdge("l", "Link", None)
    assert PseudoCypherEdge.parse("[:Gen{x: 5}]") == PseudoCypherEdge(None, "Gen", {"x": 5})
    assert PseudoCypherEdge.parse("[a b]") is None


def test_edge_entity_to_cypher_defaults_type() -> None:
    text = PseudoCypherEdge.entity_to_cypher({"id": "e", "sourceId": "a", "targetId": "b"})
    assert text == "[:Link{id: 'e'}]"


# ---------------------------------------------------------------------------
# Chains and triples
# ---------------------------------------------------------------------------


def test_parse_chain() -> None:
    nodes, edges = parse_chain("(a)-->(b:T)-[r:R{w: 1}]->(c) -[]-> (d)")
    assert [n.name for n in nodes] == ["a", "b", "c", "d"]
    assert edges[0] is None
    assert edges[1] == PseudoCypherEdge("r", "R", {"w": 1})
    assert edges[2] is None


@pytest.mark.parametrize("line", ["(a)->(b)", "(a)-->", "(a)-[x->(b)", "(a)--(b)", "a-->b", "(a)-->(b{x: {}})"])
def test_parse_chain_errors(line: str) -> None:
    with pytest.raises(PseudoCypherSyntaxError):
        parse_chain(line)


def test_triple_parse_singleton() -> None:
    triple = PseudoCypherTriple.parse("(a:Person)")
    assert triple.is_singleton
    assert not triple.has_edge
    assert triple.source.type_name == "Person"


def test_triple_parse_hops() -> None:
    plain = PseudoCypherTriple.parse("(a)-->(b)")
    assert not plain.is_singleton and not plain.has_edge
    assert plain.target.name == "b"

    labeled = PseudoCypherTriple.parse("(a)-[:KNOWS]->(b)")
    assert labeled.edge.type_name == "KNOWS"

    chained = PseudoCypherTriple.parse("(a)-->(b)-->(c)")
    assert (chained.source.name, chained.target.name) == ("a", "b")


def test_triple_parse_rejects() -> None:
    assert PseudoCypherTriple.parse("") is None
    assert PseudoCypherTriple.parse(42) is None
    assert PseudoCypherTriple.parse("(a)->(b)") is None


def test_triple_to_cypher_round_trip() -> None:
    text = "(a:T{x: 1})-[r:R]->(b)"
    assert PseudoCypherTriple.parse(text).to_cypher() == text
    assert PseudoCypherTriple.parse("(a) --> (b)").to_cypher() == "(a)-->(b)"


def test_triple_create() -> None:
    assert PseudoCypherTriple.create("a").is_singleton
    hop = PseudoCypherTriple.create("a", "b")
    assert hop.target.name == "b" and hop.edge is None
    half = PseudoCypherTriple.create("a", PseudoCypherEdge(None, "R"))
    assert half.target is None and half.edge.type_name == "R"
    full = PseudoCypherTriple.create("a", "[:R]", "b")
    assert full.to_cypher() == "(a)-[:R]->(b)"


@pytest.mark.parametrize(
    "parts",
    [(), ("a", "b", "c", "d"), ("a b",), ("a", "[x y]"), ("a", "x y", "b"), ("a", "[:R]", "b c")],
)
def test_triple_create_errors(parts) -> None:
    with pytest.raises(PseudoCypherSyntaxError):
        PseudoCypherTriple.create(*parts)


def test_triple_entity_to_cypher() -> None:
    assert PseudoCypherTriple.entity_to_cypher({"sourceId": "a", "targetId": "b"}) == "(u{id: 'a'})-->(v{id: 'b'})"
    text = PseudoCypherTriple.entity_to_cypher(
        {"id": "e1", "sourceId": "a", "targetId": "b", "name": "likes", "typeName": "Rel", "w": 2}
    )
    assert text == "(u{id: 'a'})-[likes:Rel{id: 'e1', w: 2}]->(v{id: 'b'})"
    assert PseudoCypherTriple.entity_to_cypher({"sourceId": "a"}) is None


def test_triple_entity_to_cypher_parses_back() -> None:
    text = PseudoCypherTriple.entity_to_cypher({"id": "e1", "sourceId": 1, "targetId": 2, "typeName": "Rel"})
    triple = PseudoCypherTriple.parse(text)
    assert triple.source.data == {"id": 1}
    assert triple.edge == PseudoCypherEdge("r", "Rel", {"id": "e1"})
