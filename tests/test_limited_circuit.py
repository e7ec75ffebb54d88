from __future__ import annotations

from collections import Counter

import pytest
from hypothesis import given, settings, strategies as st

from tests.test_utils import (
    SCENARIO_POINTS,
    check_candidates,
    check_closed_tour,
    check_length,
    check_partition,
    gen_points_2d,
    rng,
    vertices_2d,
)
from tsp_insertion.circuit import HeapableCircuitLimited
from tsp_insertion.model2d import PerimeterBuilder2D


def _entries_per_vertex(circuit: HeapableCircuitLimited) -> Counter:
    return Counter(id(entry.vertex) for entry in circuit.get_closest_edges())


def test_limit_must_be_positive():
    with pytest.raises(ValueError):
        HeapableCircuitLimited(vertices_2d(SCENARIO_POINTS), PerimeterBuilder2D(), limit=0)


@pytest.mark.parametrize("limit", [1, 2, 3, 10])
def test_seeding_keeps_cheapest_edges_only(limit):
    circuit = HeapableCircuitLimited(vertices_2d(SCENARIO_POINTS), PerimeterBuilder2D(), limit=limit)
    circuit.build_perimeter()
    per_vertex = _entries_per_vertex(circuit)
    assert len(per_vertex) == 3
    assert all(count == min(limit, 5) for count in per_vertex.values())

    edges = circuit.get_attached_edges()
    for entry in circuit.get_closest_edges():
        increases = sorted(e.distance_increase(entry.vertex) for e in edges)
        assert entry.distance <= increases[min(limit, 5) - 1] + 1e-12


def test_first_step_matches_full_variant():
    circuit = HeapableCircuitLimited(vertices_2d(SCENARIO_POINTS), PerimeterBuilder2D(), limit=3)
    circuit.build_perimeter()
    vertex, _ = circuit.find_next_vertex_and_edge()
    assert (vertex.x, vertex.y) == (8, 5)
    assert circuit.clone_and_update() is None
    assert len(circuit.get_unattached_vertices()) == 2
    # The split edge keeps a single replacement per vertex.
    assert all(count <= 3 for count in _entries_per_vertex(circuit).values())


@settings(max_examples=25)
@given(
    st.integers(min_value=0, max_value=10_000),
    st.integers(min_value=4, max_value=16),
    st.integers(min_value=1, max_value=4),
)
def test_random_runs_respect_limit_and_complete(seed, n, limit):
    circuit = HeapableCircuitLimited(vertices_2d(gen_points_2d(rng(seed), n)), PerimeterBuilder2D(), limit=limit)
    circuit.build_perimeter()
    for _ in range(20 * n * limit):
        if circuit.is_complete() and circuit.get_length_with_next() >= circuit.get_length():
            break
        clone = circuit.clone_and_update()
        assert max(_entries_per_vertex(circuit).values(), default=0) <= limit
        check_closed_tour(circuit.get_attached_edges())
        check_partition(circuit)
        check_length(circuit)
        check_candidates(circuit)
        if clone is not None:
            assert max(_entries_per_vertex(clone).values(), default=0) <= limit
            check_length(clone)
            clone.delete()
    assert circuit.is_complete()
    assert len(circuit.get_attached_vertices()) == n
