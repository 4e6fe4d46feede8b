from __future__ import annotations

import pytest

from pseudograph.errors import FormatError, InvalidEdgeSpecError, InvalidNodeSpecError
from pseudograph.formats import json_graph


def test_empty_and_predicates() -> None:
    g = json_graph.empty()
    assert json_graph.is_json_graph(g)
    assert not json_graph.is_json_graph({"edges": []})
    assert not json_graph.is_json_graph([])
    assert json_graph.is_node({"id": "a"})
    assert not json_graph.is_node({"name": "a"})
    assert json_graph.is_edge({"sourceId": "a", "targetId": "b"})
    assert not json_graph.is_edge({"sourceId": "a"})


def test_add_node_from_scalar_and_mapping() -> None:
    g = json_graph.empty()
    added = json_graph.add_node(g, 5)
    assert added == {"id": "5", "name": "5", "typeName": "Unknown"}
    entity = {"id": "x", "typeName": "Person"}
    stored = json_graph.add_node(g, entity)
    assert stored is not entity
    assert json_graph.get_node_by_id(g, "x")["typeName"] == "Person"
    assert json_graph.node_id_exists(g, 5)


def test_add_node_is_idempotent() -> None:
    g = json_graph.empty()
    json_graph.add_node(g, {"id": "a", "color": "red"})
    again = json_graph.add_node(g, {"id": "a", "color": "blue"})
    assert again["color"] == "red"
    assert len(g["nodes"]) == 1


def test_add_node_rejects_other_types() -> None:
    with pytest.raises(InvalidNodeSpecError):
        json_graph.add_node(json_graph.empty(), object())


def test_add_edge_creates_endpoints_and_defaults() -> None:
    g = json_graph.empty()
    edge = json_graph.add_edge(g, ("a", "b"))
    assert edge["typeName"] == "Link"
    assert edge["id"]
    assert [n["id"] for n in g["nodes"]] == ["a", "b"]


def test_add_edge_dedup_by_endpoints_and_label() -> None:
    g = json_graph.empty()
    json_graph.add_edge(g, {"sourceId": "a", "targetId": "b", "typeName": "R"})
    json_graph.add_edge(g, {"sourceId": "a", "targetId": "b", "typeName": "r"})
    json_graph.add_edge(g, {"sourceId": "a", "targetId": "b", "typeName": "S"})
    assert len(g["edges"]) == 2
    assert json_graph.edge_exists(g, {"sourceId": "a", "targetId": "b", "typeName": "S"})
    assert not json_graph.edge_exists(g, {"sourceId": "b", "targetId": "a", "typeName": "S"})


def test_get_edge_with_label() -> None:
    g = json_graph.empty()
    json_graph.add_edge(g, {"id": "e1", "sourceId": "a", "targetId": "b", "typeName": "R"})
    json_graph.add_edge(g, {"id": "e2", "sourceId": "a", "targetId": "b", "name": "special"})
    assert json_graph.get_edge(g, "a", "b")["id"] == "e1"
    assert json_graph.get_edge(g, "a", "b", "SPECIAL")["id"] == "e2"
    assert json_graph.get_edge(g, "b", "a") is None
    assert json_graph.get_edge_by_id(g, "e2")["name"] == "special"


@pytest.mark.parametrize("edge", [{"sourceId": "a"}, ("a",), ("a", "b", "c"), "a->b"])
def test_add_edge_rejects(edge) -> None:
    with pytest.raises(InvalidEdgeSpecError):
        json_graph.add_edge(json_graph.empty(), edge)


def test_merge_is_a_deep_copy() -> None:
    g = json_graph.from_edges([("a", "b")])
    h = json_graph.from_edges([("b", "c"), ("a", "b")])
    merged = json_graph.merge_json_graphs(g, h)
    assert len(merged["nodes"]) == 3
    assert len(merged["edges"]) == 2
    merged["nodes"][0]["name"] = "changed"
    assert g["nodes"][0]["name"] == "a"


def test_merge_with_none() -> None:
    g = json_graph.from_edges([("a", "b")])
    assert json_graph.merge_json_graphs(None, g)["nodes"] == g["nodes"]
    assert json_graph.merge_json_graphs(g, None)["edges"] == g["edges"]


def test_merge_rejects_other_input() -> None:
    with pytest.raises(FormatError):
        json_graph.merge_json_graphs(json_graph.empty(), {"foo": 1})
