"""
Named and random graphs.

Every generator returns a fresh Graph whose node ids are the decimal
strings ``"0" .. "n-1"``. Random generators draw from a numpy Generator
seeded by the `seed` argument, falling back to ``graph.random_seed`` from
the settings (None = fresh entropy).
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional, Set, Tuple

import numpy as np

from ..config import get_settings
from .core import Graph

logger = logging.getLogger(__name__)


def _rng(seed: Optional[int]) -> np.random.Generator:
    if seed is None:
        seed = get_settings().graph.random_seed
    return np.random.default_rng(seed)


def _new_graph(name: str) -> Graph:
    return Graph(name=name)


def _check_size(value: Any, label: str, minimum: int = 0) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise TypeError(f"'{label}' should be an integer, got {type(value).__name__}.")
    if value < minimum:
        raise ValueError(f"'{label}' should be at least {minimum}, got {value}.")
    return int(value)


# ------------------------------------------------------------------ #
# Deterministic graphs
# ------------------------------------------------------------------ #
def complete(size: int = 10) -> Graph:
    """Complete directed graph: an edge in both directions between every pair."""
    size = _check_size(size, "size")
    limit = get_settings().graph.max_complete_size
    if size > limit:
        raise ValueError(f"The complete graph with more than {limit} nodes is too large.")
    g = _new_graph("complete")
    for i in range(size):
        g.add_node(i, str(i))
    for i in range(size):
        for j in range(size):
            if i != j:
                g.add_edge(i, j)
    return g


def path(size: int = 10) -> Graph:
    """Chain ``0 -> 1 -> ... -> size-1``."""
    size = _check_size(size, "size")
    limit = get_settings().graph.max_path_size
    if size > limit:
        raise ValueError(f"The path with more than {limit} nodes is too large.")
    g = _new_graph("path")
    for i in range(size):
        g.add_node(i, str(i))
    for i in range(size - 1):
        g.add_edge(i, i + 1)
    return g


def singletons(size: int = 10) -> Graph:
    """Only nodes, no edges."""
    size = _check_size(size, "size")
    g = _new_graph("singletons")
    for i in range(size):
        g.add_node(i, str(i))
    return g


def balanced_tree(children: int = 2, height: int = 3) -> Graph:
    """Rooted tree where every internal node has `children` children."""
    children = _check_size(children, "children", 1)
    height = _check_size(height, "height")
    g = _new_graph("balanced tree")
    g.add_node(0, "0")
    leaves = [0]
    counter = 1
    for _ in range(height):
        next_leaves = []
        for parent in leaves:
            for _ in range(children):
                g.add_node(counter, str(counter))
                g.add_edge(parent, counter)
                next_leaves.append(counter)
                counter += 1
        leaves = next_leaves
    return g


# ------------------------------------------------------------------ #
# Random graphs
# ------------------------------------------------------------------ #
def erdos_renyi(node_count: int = 30, edge_count: int = 30, *, seed: Optional[int] = None) -> Graph:
    """G(n, m): `edge_count` distinct edges ``i -> j`` (i < j) drawn uniformly."""
    node_count = _check_size(node_count, "node_count")
    edge_count = _check_size(edge_count, "edge_count")
    pairs = [(i, j) for i in range(node_count) for j in range(i + 1, node_count)]
    if edge_count > len(pairs):
        raise ValueError(
            f"Cannot place {edge_count} edges between {node_count} nodes (max {len(pairs)})."
        )
    g = singletons(node_count)
    g.name = "erdos renyi"
    if edge_count:
        chosen = _rng(seed).choice(len(pairs), size=edge_count, replace=False)
        for k in chosen:
            g.add_edge(*pairs[int(k)])
    return g


def erdos_renyi_gilbert(
    node_count: int = 30, probability: float = 0.2, *, seed: Optional[int] = None
) -> Graph:
    """G(n, p): every unordered pair is linked (both directions) with probability p."""
    node_count = _check_size(node_count, "node_count")
    if not 0.0 <= probability <= 1.0:
        raise ValueError(f"'probability' should be in [0, 1], got {probability}.")
    rng = _rng(seed)
    g = singletons(node_count)
    g.name = "erdos renyi gilbert"
    for i in range(node_count):
        for j in range(i):
            if rng.random() < probability:
                g.add_edge(i, j)
                g.add_edge(j, i)
    return g


def barabasi_albert(
    node_count: int = 30, initial: int = 5, links: int = 3, *, seed: Optional[int] = None
) -> Graph:
    """
    Preferential attachment.

    Parameters
    ----------
    node_count:
        Final number of nodes.
    initial:
        Size of the fully connected seed graph.
    links:
        Edges added from every new node to existing nodes, chosen with
        probability proportional to their degree.
    """
    node_count = _check_size(node_count, "node_count")
    initial = _check_size(initial, "initial", 1)
    links = _check_size(links, "links", 1)
    if initial > node_count:
        raise ValueError("'initial' cannot exceed 'node_count'.")
    if links > initial:
        raise ValueError("'links' cannot exceed 'initial'.")
    rng = _rng(seed)
    g = singletons(node_count)
    g.name = "barabasi albert"
    degree = np.zeros(node_count, dtype=np.float64)
    for i in range(initial):
        for j in range(i + 1, initial):
            g.add_edge(i, j)
            degree[i] += 1
            degree[j] += 1
    for i in range(initial, node_count):
        weights = degree[:i].copy()
        if weights.sum() == 0:
            weights[:] = 1.0
        targets = rng.choice(i, size=min(links, i), replace=False, p=weights / weights.sum())
        for j in targets:
            g.add_edge(i, int(j))
            degree[i] += 1
            degree[int(j)] += 1
    return g


def watts_strogatz(
    node_count: int = 30, k: int = 6, beta: float = 0.54, *, seed: Optional[int] = None
) -> Graph:
    """
    Small-world graph: a ring where every node links to its ``k // 2``
    successors, after which every edge is rewired with probability `beta`
    to a random target that is neither the source nor an existing target.
    """
    node_count = _check_size(node_count, "node_count")
    k = _check_size(k, "k")
    if not 0.0 <= beta <= 1.0:
        raise ValueError(f"'beta' should be in [0, 1], got {beta}.")
    half = k // 2
    if node_count and half >= node_count:
        raise ValueError("'k' should be smaller than twice the node count.")
    rng = _rng(seed)
    edges: Set[Tuple[int, int]] = set()
    order = []
    for i in range(node_count):
        for j in range(1, half + 1):
            edge = (i, (i + j) % node_count)
            edges.add(edge)
            order.append(edge)

    rewired = []
    for source, target in order:
        if rng.random() <= beta:
            candidates = [
                t for t in range(node_count)
                if t != source and (source, t) not in edges
            ]
            if candidates:
                new_target = int(rng.choice(candidates))
                edges.discard((source, target))
                edges.add((source, new_target))
                rewired.append((source, new_target))
                continue
        rewired.append((source, target))

    g = singletons(node_count)
    g.name = "watts strogatz"
    for source, target in rewired:
        g.add_edge(source, target)
    return g


# ------------------------------------------------------------------ #
# Dispatch by name
# ------------------------------------------------------------------ #
_GENERATORS: Dict[str, Callable[..., Graph]] = {
    "complete": complete,
    "full": complete,
    "path": path,
    "singletons": singletons,
    "tree": balanced_tree,
    "balancedtree": balanced_tree,
    "erdos": erdos_renyi,
    "erdosrenyi": erdos_renyi,
    "gilbert": erdos_renyi_gilbert,
    "erdosrenyigilbert": erdos_renyi_gilbert,
    "barabasi": barabasi_albert,
    "barabasialbert": barabasi_albert,
    "smallworld": watts_strogatz,
    "wattsstrogatz": watts_strogatz,
}


def _normalize_name(name: str) -> str:
    return "".join(ch for ch in name.lower() if ch.isalnum())


def create(name: Optional[str] = None, **options: Any) -> Graph:
    """
    Create a graph by name, e.g. ``create("path", size=5)`` or
    ``create("erdos-renyi", node_count=20, edge_count=40, seed=1)``.
    Spaces, dashes and case in the name are ignored.
    """
    if name is None or _normalize_name(name) == "empty":
        return _new_graph("empty")
    key = _normalize_name(name)
    if key == "singleton":
        return singletons(1)
    generator = _GENERATORS.get(key)
    if generator is None:
        raise ValueError(f"Unknown graph name {name!r}.")
    logger.debug("Creating %s graph with options %s", key, options)
    return generator(**options)
