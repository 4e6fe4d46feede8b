"""
pseudograph.cypher
==================

The pseudo-cypher notation::

    (a:Person{age: 4})-[:KNOWS]->(b)

Public API:

- PseudoCypher        : multi-line parser producing a json graph.
- PseudoCypherNode    : node fragment ``(name:Type{payload})``.
- PseudoCypherEdge    : edge fragment ``[name:Type{payload}]``.
- PseudoCypherTriple  : singleton or single hop.
- parse_pseudo_cypher : one-shot helper around PseudoCypher.
"""

from __future__ import annotations

from .fragments import PseudoCypherEdge, PseudoCypherNode, PseudoCypherTriple, parse_chain
from .literals import parse_payload, render_payload
from .parser import (
    PseudoCypher,
    default_edge_creator,
    default_entity_creator,
    parse_pseudo_cypher,
)

__all__ = [
    "PseudoCypher",
    "PseudoCypherNode",
    "PseudoCypherEdge",
    "PseudoCypherTriple",
    "parse_chain",
    "parse_payload",
    "render_payload",
    "parse_pseudo_cypher",
    "default_entity_creator",
    "default_edge_creator",
]
