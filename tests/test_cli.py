from __future__ import annotations

import json

from click.testing import CliRunner

from pseudograph.cli import cli, load_graph


def test_info_on_pseudo_cypher(tmp_path) -> None:
    source = tmp_path / "loop.cypher"
    source.write_text("(a)-->(b)\n(b)-->(a)\n(c)\n", encoding="utf-8")
    result = CliRunner().invoke(cli, ["info", str(source)])
    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert "nodes: 3" in lines
    assert "edges: 2" in lines
    assert "components: 2" in lines
    assert "loops: no" in lines
    assert any(line.startswith("shortest cycle: ") and "none" not in line for line in lines)


def test_info_without_cycle(tmp_path) -> None:
    source = tmp_path / "chain.txt"
    source.write_text("(a)-->(b)-->(c)", encoding="utf-8")
    result = CliRunner().invoke(cli, ["--debug", "info", str(source)])
    assert result.exit_code == 0, result.output
    assert "shortest cycle: none" in result.output


def test_export_json(tmp_path) -> None:
    source = tmp_path / "g.cypher"
    source.write_text("(a:Person{age: 3})-[:KNOWS]->(b)", encoding="utf-8")
    result = CliRunner().invoke(cli, ["export", "--indent", "0", str(source)])
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["typeName"] == "Graph"
    assert {n["name"] for n in data["nodes"]} == {"a", "b"}
    assert data["edges"][0]["typeName"] == "KNOWS"


def test_format_from_suffix(tmp_path) -> None:
    arrows = tmp_path / "g.arrows"
    arrows.write_text("a->b\nb->c", encoding="utf-8")
    assert load_graph(arrows).edge_count == 2

    mtx = tmp_path / "g.mtx"
    mtx.write_text("%%MatrixMarket matrix coordinate pattern general\n3 3 2\n1 2\n2 3\n", encoding="utf-8")
    assert load_graph(mtx).edge_count == 2


def test_explicit_format_overrides_suffix(tmp_path) -> None:
    source = tmp_path / "g.txt"
    source.write_text("x->y", encoding="utf-8")
    result = CliRunner().invoke(cli, ["info", "--format", "arrows", str(source)])
    assert result.exit_code == 0, result.output
    assert "edges: 1" in result.output


def test_bad_file_fails(tmp_path) -> None:
    source = tmp_path / "bad.json"
    source.write_text('{"typeName": "Nope"}', encoding="utf-8")
    result = CliRunner().invoke(cli, ["export", str(source)])
    assert result.exit_code != 0
    assert "bad.json" in result.output


def test_missing_file_fails(tmp_path) -> None:
    result = CliRunner().invoke(cli, ["info", str(tmp_path / "absent.cypher")])
    assert result.exit_code != 0
