"""
Degree-preserving randomization by double-edge swaps.

A swap takes two edges ``(a1, a2)`` and ``(b1, b2)`` and rewires them into
``(a1, b2)`` and ``(b1, a2)``. Every vertex keeps its degree while local
structure (triangles, communities, assortativity) is destroyed, which makes
repeated swapping the standard way to build randomized reference graphs
with a fixed degree sequence.

Candidates are drawn by rejection sampling. Since a graph may admit no
valid swap at all (a star, a complete graph), the number of draws is
bounded and exhausting the bound raises
:py:class:`~graphops.errors.UnsatisfiableSwapRequest`.
"""
from dataclasses import dataclass
from time import time
from typing import List, Optional

import numpy as np

from graphops.graph import GraphBackend, Edge
from graphops.edges import enumerate_edges, has_edge
from graphops.errors import EmptyGraphError, UnsatisfiableSwapRequest
from graphops.utils.logger import SwapLogger

# same ratio as networkx.double_edge_swap's defaults
ATTEMPTS_PER_SWAP = 100


@dataclass
class SwapStats:
    accepted: int
    attempts: int
    elapsed_seconds: float

    @property
    def acceptance_rate(self) -> float:
        return self.accepted / self.attempts if self.attempts else 0.0


def _try_swap(
        g: GraphBackend,
        edges: List[Edge],
        e1: int,
        e2: int,
        flip1: bool,
        flip2: bool,
    ) -> bool:
    """
    Attempt one swap of snapshot edges *e1* and *e2*; apply it on success.

    The flips pick which endpoint of each edge plays the ``a1``/``b1`` role.
    """
    a1, a2 = edges[e1][::-1] if flip1 else edges[e1]
    b1, b2 = edges[e2][::-1] if flip2 else edges[e2]

    # loops keep their own degree count, rewiring one would change it
    if a1 == a2 or b1 == b2:
        return False

    # shared endpoint: would create a loop or give back the same edges
    if a1 == b1 or a1 == b2 or a2 == b1 or a2 == b2:
        return False

    # would create a parallel edge
    if has_edge(g, a1, b2) or has_edge(g, b1, a2):
        return False

    g.remove_edge(a1, a2)
    g.remove_edge(b1, b2)
    g.add_edge(a1, b2)
    g.add_edge(b1, a2)

    edges[e1] = (min(a1, b2), max(a1, b2))
    edges[e2] = (min(b1, a2), max(b1, a2))
    return True


def randomize_endpoints(
        g: GraphBackend,
        swap_count: int,
        rng: np.random.Generator,
        *,
        max_attempts: Optional[int] = None,
        logger: Optional[SwapLogger] = None,
    ) -> SwapStats:
    """
    Rewire *g* in place with exactly *swap_count* accepted double-edge swaps.

    New edges are inserted without payload.

    :param g: Graph to randomize. Mutated in place.
    :param swap_count: Number of swaps that must be accepted.
    :param rng: Source of randomness; fix its seed for reproducible output.
    :param max_attempts: Upper bound on the number of draws, counting
        rejected ones. Defaults to ``swap_count * ATTEMPTS_PER_SWAP``.
    :param logger: Optional CSV trace of the acceptance rate.
    :return: Accepted swaps, attempts and wall time.
    :raises EmptyGraphError: *g* has no edges and swaps were requested.
    :raises UnsatisfiableSwapRequest: *max_attempts* draws did not yield
        *swap_count* valid swaps. Swaps accepted so far stay applied.
    """
    if swap_count < 0:
        raise ValueError("swap_count must be a non-negative integer.")
    if swap_count == 0:
        return SwapStats(accepted=0, attempts=0, elapsed_seconds=0.0)

    if max_attempts is None:
        max_attempts = swap_count * ATTEMPTS_PER_SWAP

    # kept in sync with g, so the snapshot is never rebuilt
    edges = enumerate_edges(g)
    n_edges = len(edges)
    if n_edges == 0:
        raise EmptyGraphError("Cannot swap edges of a graph without edges.")

    tic = time()
    swaps = 0
    attempts = 0
    while swaps < swap_count:
        if attempts >= max_attempts:
            if logger is not None:
                logger.log(attempts, swaps, force=True)
            raise UnsatisfiableSwapRequest(
                requested=swap_count, accepted=swaps, attempts=attempts
            )

        attempts += 1
        e1, e2 = rng.integers(0, n_edges, size=2)
        if e1 != e2:
            flip1, flip2 = rng.integers(0, 2, size=2)
            if _try_swap(g, edges, int(e1), int(e2), bool(flip1), bool(flip2)):
                swaps += 1

        if logger is not None:
            logger.log(attempts, swaps)

    if logger is not None:
        logger.log(attempts, swaps, force=True)

    return SwapStats(accepted=swaps, attempts=attempts, elapsed_seconds=time() - tic)
