"""
pseudograph.graph
=================

In-memory graph model.

Public API:

- Graph           : directed labeled multigraph (nodes, edges, traversals, analysis).
- node_from_specs : canonical node dict from the accepted argument forms.
- edge_from_specs : canonical edge dict from the accepted argument forms.
- are_equal       : equality over graphs, nodes, edges and scalars.
- generators      : named and random graphs.

All other modules in this package are considered internal implementation details.
"""

from __future__ import annotations

from . import generators
from .core import Graph
from .equality import are_equal
from .specs import edge_from_specs, node_from_specs

__all__ = [
    "Graph",
    "node_from_specs",
    "edge_from_specs",
    "are_equal",
    "generators",
]
