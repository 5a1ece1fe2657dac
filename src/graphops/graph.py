"""
Undirected graph storage with dense, zero-based vertex indices.

The algorithms in :py:mod:`graphops` only talk to a graph through the
:py:class:`GraphBackend` protocol, so any store providing these methods can
be plugged in. Two stores ship with the package:

* :py:class:`AdjacencyGraph` -- plain list-of-lists adjacency, allows
  duplicate edges (avoiding them is the caller's job).
* :py:class:`NetworkXGraph` -- thin adapter over ``networkx.Graph`` with
  nodes ``0..n-1``; payloads live under the ``"value"`` attribute.

Both raise :py:class:`~graphops.errors.InvalidIndexError` for vertex ids
outside ``[0, n)`` and :py:class:`~graphops.errors.EdgeNotFoundError` when
removing or reading an edge that is not there.
"""
from typing import Any, Dict, Iterable, List, Protocol, Tuple, Type, runtime_checkable

import numpy as np
import networkx as nx
from scipy.sparse import csr_array, coo_matrix, triu

from graphops.errors import InvalidIndexError, EdgeNotFoundError

### Aliases
Edge = Tuple[int, int]
PROPERTY_KEY = "value"  # attribute key used by the networkx adapter


@runtime_checkable
class GraphBackend(Protocol):
    """Capabilities the algorithms need from a graph store."""

    graph_property: Any

    def __init__(self, num_vertices: int = 0) -> None: ...

    def num_vertices(self) -> int: ...

    def num_edges(self) -> int: ...

    def adjacent(self, v: int) -> Iterable[int]: ...

    def add_edge(self, u: int, v: int, prop: Any = None) -> None: ...

    def remove_edge(self, u: int, v: int) -> None: ...

    def vertex_property(self, v: int) -> Any: ...

    def set_vertex_property(self, v: int, value: Any) -> None: ...

    def edge_property(self, u: int, v: int) -> Any: ...

    def set_edge_property(self, u: int, v: int, value: Any) -> None: ...


def _canonical(u: int, v: int) -> Edge:
    return (u, v) if u <= v else (v, u)


###############################################################################
### Custom adjacency store ----------------------------------------------------
###############################################################################
class AdjacencyGraph:
    def __init__(self, num_vertices: int = 0):
        if num_vertices < 0:
            raise ValueError("num_vertices must be a non-negative integer.")

        self._adj: List[List[int]] = [[] for _ in range(num_vertices)]
        self._vertex_props: List[Any] = [None] * num_vertices
        self._edge_props: Dict[Edge, Any] = {}
        self._num_edges = 0
        self.graph_property: Any = None

    def __len__(self) -> int:
        return len(self._adj)

    def __repr__(self) -> str:
        return f"AdjacencyGraph(num_vertices={self.num_vertices()}, num_edges={self._num_edges})"

    def _check(self, v: int) -> int:
        if not 0 <= v < len(self._adj):
            raise InvalidIndexError(v, len(self._adj))
        return int(v)

    def num_vertices(self) -> int:
        return len(self._adj)

    def num_edges(self) -> int:
        return self._num_edges

    def adjacent(self, v: int) -> Tuple[int, ...]:
        # snapshot, so callers may mutate the graph while holding it
        return tuple(self._adj[self._check(v)])

    def add_edge(self, u: int, v: int, prop: Any = None) -> None:
        u, v = self._check(u), self._check(v)
        self._adj[u].append(v)
        if u != v:  # self-loops are stored once
            self._adj[v].append(u)
        self._edge_props[_canonical(u, v)] = prop
        self._num_edges += 1

    def remove_edge(self, u: int, v: int) -> None:
        """Remove one instance of the edge ``(u, v)``."""
        u, v = self._check(u), self._check(v)
        if v not in self._adj[u]:
            raise EdgeNotFoundError(u, v)

        self._adj[u].remove(v)
        if u != v:
            self._adj[v].remove(u)
        self._num_edges -= 1

        if v not in self._adj[u]:  # last parallel instance gone
            self._edge_props.pop(_canonical(u, v), None)

    def vertex_property(self, v: int) -> Any:
        return self._vertex_props[self._check(v)]

    def set_vertex_property(self, v: int, value: Any) -> None:
        self._vertex_props[self._check(v)] = value

    def edge_property(self, u: int, v: int) -> Any:
        key = _canonical(self._check(u), self._check(v))
        if key not in self._edge_props:
            raise EdgeNotFoundError(u, v)
        return self._edge_props[key]

    def set_edge_property(self, u: int, v: int, value: Any) -> None:
        key = _canonical(self._check(u), self._check(v))
        if key not in self._edge_props:
            raise EdgeNotFoundError(u, v)
        self._edge_props[key] = value


###############################################################################
### NetworkX adapter ----------------------------------------------------------
###############################################################################
class NetworkXGraph:
    """
    Adapter exposing a ``networkx.Graph`` through the backend protocol.

    ``networkx.Graph`` cannot hold parallel edges, so adding an existing edge
    only overwrites its payload.
    """
    def __init__(self, num_vertices: int = 0):
        if num_vertices < 0:
            raise ValueError("num_vertices must be a non-negative integer.")
        self.graph = nx.Graph()
        self.graph.add_nodes_from(range(num_vertices))

    @classmethod
    def wrap(cls, graph: nx.Graph) -> "NetworkXGraph":
        """Wrap *graph* without copying. Its nodes must be ``0..n-1``."""
        if graph.is_directed() or graph.is_multigraph():
            raise ValueError("Only simple undirected networkx graphs can be wrapped.")
        n = graph.number_of_nodes()
        if set(graph.nodes) != set(range(n)):
            raise ValueError("Graph nodes must be the integers 0..n-1.")
        obj = cls.__new__(cls)
        obj.graph = graph
        return obj

    def __len__(self) -> int:
        return self.graph.number_of_nodes()

    def __repr__(self) -> str:
        return f"NetworkXGraph(num_vertices={self.num_vertices()}, num_edges={self.num_edges()})"

    @property
    def graph_property(self) -> Any:
        return self.graph.graph.get(PROPERTY_KEY)

    @graph_property.setter
    def graph_property(self, value: Any) -> None:
        self.graph.graph[PROPERTY_KEY] = value

    def _check(self, v: int) -> int:
        n = self.graph.number_of_nodes()
        if not 0 <= v < n:
            raise InvalidIndexError(v, n)
        return int(v)

    def num_vertices(self) -> int:
        return self.graph.number_of_nodes()

    def num_edges(self) -> int:
        return self.graph.number_of_edges()

    def adjacent(self, v: int) -> Iterable[int]:
        return self.graph.adj[self._check(v)]

    def add_edge(self, u: int, v: int, prop: Any = None) -> None:
        self.graph.add_edge(self._check(u), self._check(v), **{PROPERTY_KEY: prop})

    def remove_edge(self, u: int, v: int) -> None:
        u, v = self._check(u), self._check(v)
        if not self.graph.has_edge(u, v):
            raise EdgeNotFoundError(u, v)
        self.graph.remove_edge(u, v)

    def vertex_property(self, v: int) -> Any:
        return self.graph.nodes[self._check(v)].get(PROPERTY_KEY)

    def set_vertex_property(self, v: int, value: Any) -> None:
        self.graph.nodes[self._check(v)][PROPERTY_KEY] = value

    def edge_property(self, u: int, v: int) -> Any:
        u, v = self._check(u), self._check(v)
        if not self.graph.has_edge(u, v):
            raise EdgeNotFoundError(u, v)
        return self.graph.edges[u, v].get(PROPERTY_KEY)

    def set_edge_property(self, u: int, v: int, value: Any) -> None:
        u, v = self._check(u), self._check(v)
        if not self.graph.has_edge(u, v):
            raise EdgeNotFoundError(u, v)
        self.graph.edges[u, v][PROPERTY_KEY] = value


###############################################################################
### Conversions ---------------------------------------------------------------
###############################################################################
def graph_from_edges(
        num_vertices: int,
        edges: Iterable[Edge],
        backend: Type[GraphBackend] = AdjacencyGraph,
    ) -> GraphBackend:
    """Build a graph of *backend* type from an iterable of vertex pairs."""
    g = backend(num_vertices)
    for u, v in edges:
        g.add_edge(u, v)
    return g


def graph_from_csr(
        adj: csr_array,
        backend: Type[GraphBackend] = AdjacencyGraph,
    ) -> GraphBackend:
    """
    Create a graph from a (square) sparse adjacency matrix.

    The matrix is symmetrised first, so a directed adjacency becomes its
    undirected closure. Edges are inserted in row-major order of the upper
    triangle; edge weights are dropped.
    """
    adj = csr_array(adj)
    if adj.shape[0] != adj.shape[1]: # type: ignore
        raise ValueError("Adjacency matrix must be square.")

    adj = csr_array(adj.maximum(adj.T))
    upper = triu(adj, format="coo")
    mask = upper.data != 0
    rows, cols = upper.row[mask], upper.col[mask]
    order = np.lexsort((cols, rows))

    return graph_from_edges(
        adj.shape[0], # type: ignore
        zip(rows[order].tolist(), cols[order].tolist()),
        backend=backend,
    )


def graph_to_csr(g: GraphBackend) -> csr_array:
    """
    Symmetric CSR adjacency of *g*. Parallel edges add up; a self-loop sets
    its diagonal entry to one.
    """
    n = g.num_vertices()
    rows, cols = [], []
    for v in range(n):
        for w in g.adjacent(v):
            rows.append(v)
            cols.append(w)
    data = np.ones(len(rows), dtype=np.int8)
    return csr_array(coo_matrix((data, (rows, cols)), shape=(n, n)).tocsr())


def graph_from_networkx(G: nx.Graph) -> NetworkXGraph:
    """
    Copy *G* into a :py:class:`NetworkXGraph`, relabelling its nodes densely
    in node-iteration order. The original label is kept in the ``"label"``
    node attribute.
    """
    if G.is_directed():
        raise NotImplementedError("Directed graphs are not supported.")
    if G.is_multigraph():
        G = nx.Graph(G)
    relabelled = nx.convert_node_labels_to_integers(
        G, ordering="default", label_attribute="label"
    )
    return NetworkXGraph.wrap(relabelled)


def graph_to_networkx(g: GraphBackend) -> nx.Graph:
    """Simple ``networkx.Graph`` copy of *g* with payloads under ``"value"``."""
    if isinstance(g, NetworkXGraph):
        return g.graph.copy()

    G = nx.Graph()
    G.graph[PROPERTY_KEY] = g.graph_property
    for v in range(g.num_vertices()):
        G.add_node(v, **{PROPERTY_KEY: g.vertex_property(v)})
    for v in range(g.num_vertices()):
        for w in g.adjacent(v):
            if v <= w:
                G.add_edge(v, w, **{PROPERTY_KEY: g.edge_property(v, w)})
    return G
