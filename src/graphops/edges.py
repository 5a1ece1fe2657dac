"""
Edge-level views over a graph backend: canonical edge enumeration,
adjacency queries and batch insertion.
"""
from typing import Iterable, List, Tuple

import numpy as np

from graphops.graph import GraphBackend, Edge
from graphops.errors import InvalidIndexError


def enumerate_edges(g: GraphBackend) -> List[Edge]:
    """
    List every undirected edge once as ``(u, v)`` with ``u <= v``.

    Vertices are scanned in ascending order and neighbours in the order the
    backend reports them, so the output is deterministic for a given graph.
    Parallel edges are listed once per instance.
    """
    edges: List[Edge] = []
    for u in range(g.num_vertices()):
        for v in g.adjacent(u):
            if u <= v:
                edges.append((u, v))
    return edges


def has_edge(g: GraphBackend, u: int, v: int) -> bool:
    """Linear scan of ``u``'s neighbours, O(degree(u))."""
    n = g.num_vertices()
    if not 0 <= v < n:
        raise InvalidIndexError(v, n)
    for w in g.adjacent(u):
        if w == v:
            return True
    return False


def add_edges(g: GraphBackend, edges: Iterable[Tuple[int, int]]) -> None:
    """Insert every pair in *edges*. Duplicates are not checked."""
    for u, v in edges:
        g.add_edge(u, v)


def remove_self_loops(g: GraphBackend) -> int:
    """
    Remove every edge ``(v, v)`` from *g*.

    :return: Number of removed loops.
    """
    removed = 0
    for v in range(g.num_vertices()):
        loops = sum(1 for w in g.adjacent(v) if w == v)
        for _ in range(loops):
            g.remove_edge(v, v)
        removed += loops
    return removed


def degrees(g: GraphBackend) -> np.ndarray:
    """Degree sequence, counting a self-loop once."""
    return np.array(
        [sum(1 for _ in g.adjacent(v)) for v in range(g.num_vertices())],
        dtype=np.int64,
    )
