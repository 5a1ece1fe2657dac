import csv
from collections import Counter

import numpy as np
import pytest

from graphops.graph import AdjacencyGraph, graph_from_edges
from graphops.edges import enumerate_edges, degrees
from graphops.subgraph import induce
from graphops.randomize import randomize_endpoints, ATTEMPTS_PER_SWAP
from graphops.errors import EmptyGraphError, UnsatisfiableSwapRequest
from graphops.utils.logger import SwapLogger
from tests.conftest import _star_graph, _complete_graph, _er_graph, _two_triangles, _edge_set

def _assert_simple(g):
    edges = enumerate_edges(g)
    assert all(u != v for u, v in edges), "self-loop after randomization"
    assert max(Counter(edges).values()) == 1, "parallel edge after randomization"

# ---------------------------------------------------------------------
# 1. invariants
# ---------------------------------------------------------------------
@pytest.mark.parametrize(
    "n,p,swap_count",
    [
        (30, 0.2, 50),
        (80, 0.05, 200),
        (15, 0.5, 100),
    ],
)
def test_degree_sequence_preserved(backend, n, p, swap_count):
    rng = np.random.default_rng(42)
    g = _er_graph(n=n, p=p, seed=1, backend=backend)
    deg_before = degrees(g)
    m_before = g.num_edges()

    stats = randomize_endpoints(g, swap_count, rng)

    assert stats.accepted == swap_count
    assert stats.attempts >= swap_count
    assert np.array_equal(degrees(g), deg_before)
    assert g.num_edges() == m_before
    _assert_simple(g)

def test_structure_changes():
    rng = np.random.default_rng(3)
    g = _er_graph(n=50, p=0.1, seed=2)
    before = _edge_set(g)
    randomize_endpoints(g, 100, rng)
    assert _edge_set(g) != before

def test_two_triangles_can_be_rewired():
    # swapping one edge of each triangle joins them into a 6-cycle
    rng = np.random.default_rng(0)
    g = _two_triangles()
    randomize_endpoints(g, 1, rng)
    assert np.array_equal(degrees(g), [2] * 6)
    assert len(_edge_set(g) & _edge_set(_two_triangles())) == 4
    _assert_simple(g)

def test_same_seed_same_result(backend):
    g1 = _er_graph(n=40, p=0.15, seed=9, backend=backend)
    g2 = induce(g1, range(g1.num_vertices()))

    s1 = randomize_endpoints(g1, 60, np.random.default_rng(123))
    s2 = randomize_endpoints(g2, 60, np.random.default_rng(123))

    assert s1.attempts == s2.attempts
    assert _edge_set(g1) == _edge_set(g2)

def test_self_loops_are_left_in_place(backend):
    rng = np.random.default_rng(0)
    g = graph_from_edges(5, [(0, 0), (1, 2), (3, 4)], backend=backend)
    deg_before = degrees(g)

    randomize_endpoints(g, 5, rng)

    assert np.array_equal(degrees(g), deg_before)
    assert (0, 0) in _edge_set(g)
    assert g.num_edges() == 3

def test_lone_loop_and_edge_is_unsatisfiable(rng):
    g = graph_from_edges(3, [(0, 0), (1, 2)])
    with pytest.raises(UnsatisfiableSwapRequest):
        randomize_endpoints(g, 1, rng, max_attempts=200)
    assert np.array_equal(degrees(g), [1, 1, 1])

# ---------------------------------------------------------------------
# 2. degenerate inputs
# ---------------------------------------------------------------------
def test_zero_swaps_leaves_graph_untouched(backend, rng):
    g = _star_graph(4, backend)
    adjacency = [list(g.adjacent(v)) for v in range(g.num_vertices())]

    stats = randomize_endpoints(g, 0, rng)

    assert stats.accepted == 0 and stats.attempts == 0
    assert [list(g.adjacent(v)) for v in range(g.num_vertices())] == adjacency

def test_zero_swaps_on_edgeless_graph(rng):
    assert randomize_endpoints(AdjacencyGraph(3), 0, rng).accepted == 0

def test_star_is_unsatisfiable(backend, rng):
    g = _star_graph(4, backend)
    before = _edge_set(g)

    with pytest.raises(UnsatisfiableSwapRequest) as exc_info:
        randomize_endpoints(g, 3, rng)

    err = exc_info.value
    assert err.requested == 3
    assert err.accepted == 0
    assert err.attempts == 3 * ATTEMPTS_PER_SWAP
    assert _edge_set(g) == before

def test_complete_graph_is_unsatisfiable(rng):
    g = _complete_graph(5)
    with pytest.raises(UnsatisfiableSwapRequest):
        randomize_endpoints(g, 1, rng, max_attempts=500)
    assert g.num_edges() == 10

def test_single_edge_is_unsatisfiable(rng):
    g = graph_from_edges(2, [(0, 1)])
    with pytest.raises(UnsatisfiableSwapRequest):
        randomize_endpoints(g, 1, rng, max_attempts=50)

def test_edgeless_graph_raises(rng):
    with pytest.raises(EmptyGraphError):
        randomize_endpoints(AdjacencyGraph(5), 1, rng)

def test_negative_swap_count(rng):
    with pytest.raises(ValueError):
        randomize_endpoints(_two_triangles(), -1, rng)

def test_partial_progress_is_kept():
    rng = np.random.default_rng(11)
    g = _er_graph(n=30, p=0.2, seed=4)
    deg_before = degrees(g)

    with pytest.raises(UnsatisfiableSwapRequest) as exc_info:
        randomize_endpoints(g, 1_000, rng, max_attempts=20)

    assert exc_info.value.attempts == 20
    assert 0 < exc_info.value.accepted < 1_000
    assert np.array_equal(degrees(g), deg_before)
    _assert_simple(g)

# ---------------------------------------------------------------------
# 3. logging
# ---------------------------------------------------------------------
def test_logger_writes_rows(tmp_path):
    rng = np.random.default_rng(5)
    g = _er_graph(n=30, p=0.2, seed=4)
    log_path = tmp_path / "logs" / "swaps.csv"

    with SwapLogger(log_path, log_every=10) as logger:
        stats = randomize_endpoints(g, 40, rng, logger=logger)

    with open(log_path, newline="") as f:
        rows = list(csv.reader(f))

    assert rows[0] == SwapLogger.header
    attempts = [int(r[0]) for r in rows[1:]]
    assert attempts == sorted(set(attempts))
    assert attempts[-1] == stats.attempts
    assert int(rows[-1][1]) == 40

def test_logger_records_failure(tmp_path, rng):
    log_path = tmp_path / "star.csv"
    with SwapLogger(log_path, log_every=1_000) as logger:
        with pytest.raises(UnsatisfiableSwapRequest):
            randomize_endpoints(_star_graph(), 1, rng, max_attempts=30, logger=logger)

    rows = log_path.read_text().splitlines()
    assert rows[-1].startswith("30,0,")
