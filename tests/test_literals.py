from __future__ import annotations

import pytest

from pseudograph.cypher.literals import parse_payload, render_payload, render_value
from pseudograph.errors import PayloadError


def test_parse_scalars_and_keys() -> None:
    """Identifier and quoted keys, strings in both quote styles, numbers and booleans."""
    data = parse_payload("{id: 1, name: 'Ann', \"full name\": \"Ann Smith\", ok: true, no: false, x: -2.5, e: 1e3}")
    assert data == {
        "id": 1,
        "name": "Ann",
        "full name": "Ann Smith",
        "ok": True,
        "no": False,
        "x": -2.5,
        "e": 1000.0,
    }
    assert isinstance(data["id"], int)


def test_parse_flat_arrays_and_escapes() -> None:
    data = parse_payload(r"{tags: ['a', 'b\'c'], nums: [1, 2.5], empty: []}")
    assert data == {"tags": ["a", "b'c"], "nums": [1, 2.5], "empty": []}


def test_empty_payload() -> None:
    assert parse_payload("{}") == {}
    assert parse_payload("  { }  ") == {}


@pytest.mark.parametrize(
    "text",
    [
        "{a: {b: 1}}",
        "{a: [[1]]}",
        "{a: null}",
        "{a: 1",
        "{a 1}",
        "{a: 'open}",
        "{a: 1} trailing",
        "{1a: 2}",
        "{a: alert(1)}",
        "no braces",
    ],
)
def test_rejects_anything_outside_the_literal_grammar(text: str) -> None:
    with pytest.raises(PayloadError):
        parse_payload(text)


def test_render_values() -> None:
    assert render_value("it's") == "'it\\'s'"
    assert render_value(True) == "true"
    assert render_value(3) == "3"
    assert render_value(0.5) == "0.5"
    assert render_value([1, "a"]) == "[1, 'a']"


def test_render_rejects_nested_objects() -> None:
    with pytest.raises(PayloadError):
        render_payload({"a": {"b": 1}})
    with pytest.raises(PayloadError):
        render_payload({"a": [{"b": 1}]})


def test_render_then_parse_restores_the_data() -> None:
    data = {"id": "n1", "weight": 2.5, "tags": ["x", "y"], "flag": False, "odd key": "q'uote"}
    assert parse_payload(render_payload(data)) == data


def test_render_skips_none_values() -> None:
    assert render_payload({"a": 1, "b": None}) == "{a: 1}"
