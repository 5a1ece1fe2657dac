"""
Induced-subgraph extraction with index compaction.
"""
from typing import Sequence

import numpy as np

from graphops.graph import GraphBackend
from graphops.edges import enumerate_edges
from graphops.errors import InvalidIndexError


def induce(g: GraphBackend, indices: Sequence[int]) -> GraphBackend:
    """
    Create the subgraph of *g* induced by *indices*.

    Vertex ``indices[i]`` of *g* becomes vertex ``i`` of the result, so the
    caller controls the new ordering. Graph, vertex and edge payloads are
    copied by reference. The result has the same backend type as *g*.

    :param g: Source graph, left untouched.
    :param indices: Distinct vertex ids of *g* to keep.
    :return: Newly allocated graph with ``len(indices)`` vertices.
    """
    n = g.num_vertices()

    # old id -> new id, -1 for dropped vertices
    index_map = np.full(n, -1, dtype=np.int64)
    for new, old in enumerate(indices):
        if not 0 <= old < n:
            raise InvalidIndexError(old, n)
        if index_map[old] != -1:
            raise ValueError(f"Vertex {old} appears more than once in indices.")
        index_map[old] = new

    out = type(g)(len(indices))
    out.graph_property = g.graph_property

    for new, old in enumerate(indices):
        out.set_vertex_property(new, g.vertex_property(old))

    for u, v in enumerate_edges(g):
        i, j = index_map[u], index_map[v]
        if i != -1 and j != -1:
            out.add_edge(int(i), int(j), g.edge_property(u, v))

    return out
