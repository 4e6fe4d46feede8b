"""
Sparse adjacency views of a Graph backed by python-graphblas.

Row/column ``i`` of the matrix is the node ``ids[i]``; the value at
``(i, j)`` is the number of parallel edges from ``ids[i]`` to ``ids[j]``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Optional, Sequence, Tuple

import graphblas as gb
import numpy as np
from graphblas import Matrix

from ..utils import to_id_string

if TYPE_CHECKING:
    from .core import Graph


def adjacency_matrix(graph: Graph) -> Tuple[Matrix, List[str]]:
    """Return ``(Matrix[INT64], ids)`` for `graph`, ids in insertion order."""
    ids = [node["id"] for node in graph._nodes.values()]
    index = {node_id: i for i, node_id in enumerate(ids)}
    n = len(ids)
    edges = list(graph._edges.values())
    if not edges:
        return gb.Matrix(gb.dtypes.INT64, nrows=n, ncols=n), ids

    rows = np.fromiter((index[e["sourceId"]] for e in edges), dtype=np.int64, count=len(edges))
    cols = np.fromiter((index[e["targetId"]] for e in edges), dtype=np.int64, count=len(edges))
    mat = gb.Matrix.from_coo(
        rows,
        cols,
        np.ones(len(edges), dtype=np.int64),
        dtype=gb.dtypes.INT64,
        nrows=n,
        ncols=n,
        dup_op=gb.binary.plus,
    )
    return mat, ids


def degrees(graph: Graph) -> Dict[str, int]:
    """
    Total degree per node id: out-degree + in-degree.

    A self-loop adds one to both, so it counts twice.
    """
    if not graph._nodes:
        return {}
    mat, ids = adjacency_matrix(graph)
    out_deg = mat.reduce_rowwise(gb.monoid.plus).new()
    in_deg = mat.reduce_columnwise(gb.monoid.plus).new()

    result = np.zeros(len(ids), dtype=np.int64)
    idx, vals = out_deg.to_coo()
    result[idx] += vals
    idx, vals = in_deg.to_coo()
    result[idx] += vals
    return {node_id: int(result[i]) for i, node_id in enumerate(ids)}


def graph_from_matrix(
    matrix: Matrix, ids: Optional[Sequence[str]] = None, graph: Optional[Graph] = None
) -> Graph:
    """
    Build (or extend) a Graph from an adjacency matrix.

    Every stored entry ``(i, j)`` yields one edge; values above one yield
    that many parallel edges, each named after its rank so the edge labels
    stay distinct.
    """
    from .core import Graph

    if matrix.nrows != matrix.ncols:
        raise ValueError(f"Adjacency matrix must be square, got {matrix.nrows}x{matrix.ncols}")
    n = matrix.nrows
    if ids is None:
        ids = [str(i) for i in range(n)]
    elif len(ids) != n:
        raise ValueError(f"Expected {n} ids, got {len(ids)}")
    ids = [to_id_string(i) for i in ids]

    graph = graph if graph is not None else Graph()
    for node_id in ids:
        graph.add_node(node_id, node_id)
    rows, cols, vals = matrix.to_coo()
    for i, j, value in zip(rows, cols, vals):
        count = int(value)
        for rank in range(count):
            name = None if rank == 0 else f"{rank}"
            graph.add_edge(ids[int(i)], ids[int(j)], {"name": name})
    return graph
