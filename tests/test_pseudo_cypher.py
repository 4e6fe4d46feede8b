from __future__ import annotations

import logging

import pytest

from pseudograph.cypher import PseudoCypher, parse_pseudo_cypher
from pseudograph.errors import ParameterRedefinedError, PseudoCypherSyntaxError
from pseudograph.graph import Graph


def _ids_by_name(g: dict) -> dict:
    return {n["name"]: n["id"] for n in g["nodes"]}


def test_empty_input_gives_none() -> None:
    assert parse_pseudo_cypher("") is None
    assert parse_pseudo_cypher(None) is None


def test_get_lines() -> None:
    assert PseudoCypher.get_lines("\t(a)\n\n   \n (b)-->(c) \n") == ["(a)", "(b)-->(c)"]


def test_singletons() -> None:
    g = parse_pseudo_cypher("(a:Person{age: 4})\n(b)")
    assert len(g["nodes"]) == 2
    assert g["edges"] == []
    a = next(n for n in g["nodes"] if n["name"] == "a")
    assert a["typeName"] == "Person"
    assert a["age"] == 4
    b = next(n for n in g["nodes"] if n["name"] == "b")
    assert b["typeName"] == "Unknown"


def test_description_is_the_input() -> None:
    text = "(a)-->(b)"
    assert parse_pseudo_cypher(text)["description"] == text


def test_named_node_with_explicit_id_collapses() -> None:
    """The same name on several lines and positions is one node."""
    g = parse_pseudo_cypher("(T1{id:1})-->(T2)-->(T1)")
    assert len(g["nodes"]) == 2
    assert len(g["edges"]) == 2
    ids = _ids_by_name(g)
    assert ids["T1"] == "1"
    pairs = {(e["sourceId"], e["targetId"]) for e in g["edges"]}
    assert pairs == {("1", ids["T2"]), (ids["T2"], "1")}


def test_names_are_scoped_to_the_whole_input() -> None:
    g = parse_pseudo_cypher("(a:Person)\n(a)-->(b)\n(b)-->(a)")
    assert len(g["nodes"]) == 2
    assert len(g["edges"]) == 2
    a = next(n for n in g["nodes"] if n["name"] == "a")
    assert a["typeName"] == "Person"


def test_labeled_self_loops() -> None:
    g = parse_pseudo_cypher("(a)-[:A]->(a)-[:B]->(a)")
    assert len(g["nodes"]) == 1
    assert sorted(e["typeName"] for e in g["edges"]) == ["A", "B"]


def test_repeated_line_does_not_duplicate_edges() -> None:
    g = parse_pseudo_cypher("(a)-->(b)\n(a)-->(b)")
    assert len(g["edges"]) == 1


def test_edge_payload_and_name() -> None:
    g = parse_pseudo_cypher("(a)-[likes:Rel{weight: 3, id: 'e1'}]->(b)")
    (edge,) = g["edges"]
    assert edge["id"] == "e1"
    assert edge["name"] == "likes"
    assert edge["typeName"] == "Rel"
    assert edge["weight"] == 3


def test_empty_edge_fragment_is_a_plain_arrow() -> None:
    g = parse_pseudo_cypher("(a)-[]->(b)")
    assert g["edges"][0]["typeName"] == "Link"


def test_anonymous_nodes_are_distinct() -> None:
    g = parse_pseudo_cypher("()-->()")
    assert len(g["nodes"]) == 2


def test_redefinition_raises() -> None:
    with pytest.raises(ParameterRedefinedError):
        parse_pseudo_cypher("(a:Person)\n(a:Car)")
    with pytest.raises(ParameterRedefinedError):
        parse_pseudo_cypher("(a{x: 1})-->(a{x: 2})")


def test_identical_repetition_is_allowed() -> None:
    g = parse_pseudo_cypher("(a:Person{x: 1})\n(a:Person{x: 1})-->(b)")
    assert len(g["nodes"]) == 2


def test_invalid_lines_are_skipped_with_a_warning(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="pseudograph.cypher.parser"):
        g = parse_pseudo_cypher("(a)-->(b)\n(c)->(d)")
    assert len(g["nodes"]) == 2
    assert "not pseudo-cypher" in caplog.text


def test_strict_mode_raises() -> None:
    with pytest.raises(PseudoCypherSyntaxError):
        PseudoCypher(strict=True).parse("(a)-->(b)\n(c)->(d)")


def test_entity_creator_as_type_name() -> None:
    g = parse_pseudo_cypher("(a)-->(b:Car)", "Concept")
    types = {n["name"]: n["typeName"] for n in g["nodes"]}
    assert types == {"a": "Concept", "b": "Car"}


def test_custom_creators() -> None:
    def entity_creator(fragment):
        return {"id": f"node-{fragment.name}", "name": fragment.name, "custom": True}

    def edge_creator(fragment):
        return {"typeName": "Custom"}

    g = PseudoCypher(entity_creator, edge_creator).parse("(a)-->(b)")
    assert {n["id"] for n in g["nodes"]} == {"node-a", "node-b"}
    assert all(n["custom"] for n in g["nodes"])
    (edge,) = g["edges"]
    assert (edge["sourceId"], edge["targetId"], edge["typeName"]) == ("node-a", "node-b", "Custom")


def test_invalid_creator_type() -> None:
    with pytest.raises(TypeError):
        PseudoCypher(42)


def test_parse_node() -> None:
    node = PseudoCypher.parse_node("(a:Person{id: 5})")
    assert node == {"id": "5", "name": "a", "typeName": "Person"}
    generated = PseudoCypher.parse_node("b")
    assert generated["typeName"] == "Unknown" and generated["id"]
    assert PseudoCypher.parse_node("") is None
    assert PseudoCypher.parse_node("(a b)") is None


def test_parse_edge() -> None:
    edge = PseudoCypher.parse_edge("(a{id: 1})-[:KNOWS]->(b{id: 2})")
    assert (edge["sourceId"], edge["targetId"], edge["typeName"]) == ("1", "2", "KNOWS")
    assert PseudoCypher.parse_edge("(a)-->(b)") is None
    assert PseudoCypher.parse_edge("(a{id: 1})") is None


def test_parse_line_without_dictionary() -> None:
    g = PseudoCypher().parse_line("(a)-->(b)-->(c)")
    assert len(g["nodes"]) == 3
    assert len(g["edges"]) == 2


def test_graph_from_pseudo_cypher() -> None:
    g = Graph.from_pseudo_cypher("(a:Person)-[:KNOWS]->(b:Person)\n(b)-->(c)")
    assert g.node_count == 3
    assert g.edge_count == 2
    assert g.get_node_by_name("A")["typeName"] == "Person"
