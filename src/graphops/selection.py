"""
Component-based graph reduction: drop small components or keep only the
largest one.
"""
from typing import List

import numpy as np

from graphops.graph import GraphBackend
from graphops.components import find_components, component_sizes
from graphops.subgraph import induce


def filter_components(g: GraphBackend, min_size: int) -> GraphBackend:
    """
    New graph holding only the vertices whose component has at least
    *min_size* vertices. Kept vertices stay in ascending order.
    """
    n_components, labels = find_components(g)
    counts = component_sizes(labels, n_components)

    keep = np.flatnonzero(counts[labels] >= min_size)
    return induce(g, keep.tolist())


def largest_component_indices(g: GraphBackend) -> List[int]:
    """
    Ascending vertex ids of the largest connected component.

    Ties go to the component with the lowest id, i.e. the one discovered
    first. An empty graph gives an empty list.
    """
    n_components, labels = find_components(g)
    if n_components == 0:
        return []
    counts = component_sizes(labels, n_components)

    largest = 0
    for label in range(n_components):
        if counts[label] > counts[largest]:
            largest = label

    return np.flatnonzero(labels == largest).tolist()


def largest_component(g: GraphBackend) -> GraphBackend:
    """New graph containing only the largest connected component of *g*."""
    return induce(g, largest_component_indices(g))
