"""
Connected-component labelling.

Components are numbered ``0, 1, 2, ...`` in the order they are discovered
by scanning vertex ids upwards, so the component holding vertex 0 is always
component 0 and labels form the dense range ``[0, n_components)``.
"""
from typing import Tuple

import numpy as np

from graphops.graph import GraphBackend


def find_components(g: GraphBackend) -> Tuple[int, np.ndarray]:
    """
    Label every vertex of *g* with the id of its connected component.

    Uses an iterative depth-first search with an explicit stack, so the
    recursion limit is never hit regardless of graph diameter.

    :return: ``(n_components, labels)`` with ``labels`` an int array of
        length ``n``.
    """
    n = g.num_vertices()
    labels = np.full(n, -1, dtype=np.int64)
    visited = np.zeros(n, dtype=bool)

    n_components = 0
    covered = 0
    start = 0
    while covered < n:
        # next unvisited vertex opens a new component
        while visited[start]:
            start += 1

        stack = [start]
        while stack:
            v = stack.pop()
            if visited[v]:
                continue  # pushed more than once
            visited[v] = True
            labels[v] = n_components
            covered += 1

            for w in g.adjacent(v):
                if not visited[w]:
                    stack.append(w)

        n_components += 1

    return n_components, labels


def component_sizes(labels: np.ndarray, n_components: int) -> np.ndarray:
    """Number of vertices carrying each label."""
    return np.bincount(labels, minlength=n_components)
