from typing import Dict, Callable, Type
from pathlib import Path
import gzip

import numpy as np
from scipy.sparse import csr_array, load_npz, coo_matrix
from scipy.io import mmread
import networkx as nx

from graphops.graph import AdjacencyGraph, GraphBackend, graph_from_csr
from graphops.edges import enumerate_edges

# ---------------------------------------------------------------------
#  GraphLoader
# ---------------------------------------------------------------------

class GraphLoader:
    """
    Factory that maps a file *extension* to a loader function and returns
    an undirected graph. Directed input is symmetrised.

    Register new loaders with the `@GraphLoader.register('.ext')`
    decorator.
    """

    # maps extension (lower-case, incl. leading dot) -> callable
    registry: Dict[str, Callable[[Path], csr_array]] = {}

    # ----------------------- decorator -------------------------------
    @classmethod
    def register(cls, *exts: str):
        """
        Use as::

            @GraphLoader.register('.gml', '.graphml')
            def _load_graphml(path): ...
        """
        def decorator(fn: Callable[[Path], csr_array]):
            for ext in exts:
                cls.registry[ext.lower()] = fn
            return fn
        return decorator

    # ----------------------- public API ------------------------------
    @staticmethod
    def load(
        path: Path,
        *,
        backend: Type[GraphBackend] = AdjacencyGraph,
    ) -> GraphBackend:
        """Load graph at *path* into a *backend* graph."""
        path = Path(path)
        ext = path.suffix.lower()
        if ext not in GraphLoader.registry:
            raise ValueError(
                f"GraphLoader: no loader registered for extension '{ext}'."
            )
        if not path.exists():
            raise FileNotFoundError(f"GraphLoader: file {path} does not exist.")

        adj = GraphLoader.registry[ext](path)
        return graph_from_csr(adj, backend=backend)

# ---------------------------------------------------------------------
#  GraphWriter
# ---------------------------------------------------------------------

class GraphWriter:
    @staticmethod
    def save_edgelist(path: Path, g: GraphBackend) -> None:
        """
        Write canonical edges ``u v`` one per line. The vertex count goes in
        a leading comment so isolated trailing vertices survive a reload.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            f.write(f"# vertices {g.num_vertices()}\n")
            for u, v in enumerate_edges(g):
                f.write(f"{u} {v}\n")

# ---------------- default loaders -------------------------------

# 1. compressed / plain .npz containing a CSR adjacency ----------------
@GraphLoader.register(".npz")
def _load_npz(path: Path) -> csr_array:
    return csr_array(load_npz(path))


# 2. Matrix Market -----------------------------------------------------
@GraphLoader.register(".mtx")
def _load_mtx(path: Path) -> csr_array:
    return csr_array(mmread(str(path)), dtype=np.int8)


# 3. Plain edge list (.edges, .edgelist, .txt, optional .gz) -----------
@GraphLoader.register(".edges", ".edgelist", ".txt", ".gz")
def _load_edgelist(path: Path) -> csr_array:
    opener = gzip.open if path.suffix == ".gz" else open
    rows, cols = [], []
    n = 0
    with opener(path, "rt") as f:
        for line in f:
            if line.startswith("# vertices"):
                n = int(line.split()[2])
                continue
            if not line.strip() or line.startswith("#"):
                continue
            u, v = map(int, line.split()[:2])
            rows.append(u)
            cols.append(v)
    n = max([n] + [x + 1 for x in rows + cols])
    data = np.ones(len(rows), dtype=np.int8)
    adj = coo_matrix((data, (rows, cols)), shape=(n, n)).tocsr()
    return csr_array(adj, dtype=np.int8)


# 4. GML / GraphML via NetworkX ---------------------------------------
@GraphLoader.register(".gml", ".graphml")
def _load_graphml(path: Path) -> csr_array:
    G = nx.read_gml(path) if path.suffix == ".gml" else nx.read_graphml(path)
    return csr_array(nx.to_scipy_sparse_array(G, format="csr", dtype=np.int8))
