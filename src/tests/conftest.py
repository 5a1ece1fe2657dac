import numpy as np
import pytest

from graphops.graph import AdjacencyGraph, NetworkXGraph, graph_from_edges

BACKENDS = [AdjacencyGraph, NetworkXGraph]

# ------------------------------------------------------------------ helpers
def _two_triangles(backend=AdjacencyGraph):
    edges = [(0, 1), (1, 2), (0, 2), (3, 4), (4, 5), (3, 5)]
    return graph_from_edges(6, edges, backend=backend)

def _path_graph(n: int = 5, backend=AdjacencyGraph):
    return graph_from_edges(n, [(i, i + 1) for i in range(n - 1)], backend=backend)

def _star_graph(n_leaves: int = 4, backend=AdjacencyGraph):
    return graph_from_edges(n_leaves + 1, [(0, i) for i in range(1, n_leaves + 1)], backend=backend)

def _complete_graph(n: int = 5, backend=AdjacencyGraph):
    edges = [(i, j) for i in range(n) for j in range(i + 1, n)]
    return graph_from_edges(n, edges, backend=backend)

def _er_graph(n: int = 30, p: float = .2, *, seed: int = 1, backend=AdjacencyGraph):
    """Undirected G(n,p) without self-loops."""
    rng = np.random.default_rng(seed)
    upper = np.triu(rng.random((n, n)) < p, k=1)
    rows, cols = np.nonzero(upper)
    return graph_from_edges(n, zip(rows.tolist(), cols.tolist()), backend=backend)

def _edge_set(g):
    return {
        (min(u, v), max(u, v))
        for u in range(g.num_vertices())
        for v in g.adjacent(u)
    }

# ------------------------------------------------------------------ fixtures
@pytest.fixture(scope="module")
def rng() -> np.random.Generator:
    return np.random.default_rng(0)

@pytest.fixture(params=BACKENDS, ids=lambda b: b.__name__)
def backend(request):
    return request.param
