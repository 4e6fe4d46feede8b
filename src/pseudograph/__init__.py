"""
pseudograph
===========

In-memory directed, labeled multigraph plus the pseudo-cypher construction
notation.

Public API:

- Graph          : the graph model (nodes, edges, traversals, analysis).
- PseudoCypher   : multi-line pseudo-cypher parser producing a json graph.
- PseudoCypherNode / PseudoCypherEdge / PseudoCypherTriple : parse fragments.
- node_from_specs / edge_from_specs : node and edge argument normalizer.
- are_equal      : polymorphic equality for graphs, nodes, edges and scalars.
- get_settings   : cached process-wide settings.
"""

from __future__ import annotations

try:
    from ._version import version as __version__  # populated by setuptools-scm
except ModuleNotFoundError:
    __version__ = "0.0.0"

from .config import AppSettings, ConfigError, get_settings
from .errors import (
    CyclicGraphError,
    FormatError,
    GraphError,
    InvalidEdgeSpecError,
    InvalidNodeSpecError,
    NodeNotFoundError,
    NotATreeError,
    ParameterRedefinedError,
    ParseError,
    PayloadError,
    PseudoCypherSyntaxError,
)
from .graph import Graph, are_equal, edge_from_specs, node_from_specs
from .cypher import (
    PseudoCypher,
    PseudoCypherEdge,
    PseudoCypherNode,
    PseudoCypherTriple,
    parse_pseudo_cypher,
)

__all__ = [
    "__version__",
    "AppSettings",
    "ConfigError",
    "get_settings",
    "Graph",
    "are_equal",
    "node_from_specs",
    "edge_from_specs",
    "PseudoCypher",
    "PseudoCypherNode",
    "PseudoCypherEdge",
    "PseudoCypherTriple",
    "parse_pseudo_cypher",
    "GraphError",
    "InvalidNodeSpecError",
    "InvalidEdgeSpecError",
    "NodeNotFoundError",
    "NotATreeError",
    "CyclicGraphError",
    "ParseError",
    "PayloadError",
    "PseudoCypherSyntaxError",
    "ParameterRedefinedError",
    "FormatError",
]
