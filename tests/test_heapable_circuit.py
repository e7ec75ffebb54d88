from __future__ import annotations

import pytest
from hypothesis import given, settings, strategies as st

from tests.test_utils import (
    SCENARIO_POINTS,
    SQUARE_POINTS,
    check_candidates,
    check_closed_tour,
    check_length,
    check_partition,
    coords,
    gen_points_2d,
    gen_points_3d,
    rng,
    vertices_2d,
    vertices_3d,
)
from tsp_insertion.circuit import HeapableCircuit
from tsp_insertion.model import CircuitDesyncError, DistanceToEdge
from tsp_insertion.model2d import Edge2D, PerimeterBuilder2D, Vertex2D, deduplicate_vertices_2d
from tsp_insertion.model3d import PerimeterBuilder3D

SCENARIO_PERIMETER = 95.738634795112368


def _scenario() -> HeapableCircuit:
    circuit = HeapableCircuit(vertices_2d(SCENARIO_POINTS), PerimeterBuilder2D())
    circuit.prepare()
    circuit.build_perimeter()
    return circuit


def _check_all(circuit: HeapableCircuit) -> None:
    check_closed_tour(circuit.get_attached_edges())
    check_partition(circuit)
    check_length(circuit)
    check_candidates(circuit)


def _is_terminal(circuit: HeapableCircuit) -> bool:
    if len(circuit.get_closest_edges()) == 0:
        return True
    return circuit.is_complete() and circuit.get_length_with_next() >= circuit.get_length()


# ---------------------------------------------------------------------------
#  Setup
# ---------------------------------------------------------------------------
def test_build_perimeter_seeds_every_pair():
    circuit = _scenario()
    assert circuit.get_length() == pytest.approx(SCENARIO_PERIMETER)
    assert len(circuit.get_attached_edges()) == 5
    assert len(circuit.get_unattached_vertices()) == 3
    # 3 interior vertices x 5 perimeter edges
    assert len(circuit.get_closest_edges()) == 15
    assert not circuit.is_complete()
    assert {coords(v) for v in circuit.get_perimeter_vertices()} == {
        (-15, -15),
        (15, -15),
        (9, 6),
        (3, 13),
        (-7, 6),
    }
    _check_all(circuit)


def test_next_vertex_and_edge_is_cheapest_insertion():
    circuit = _scenario()
    vertex, edge = circuit.find_next_vertex_and_edge()
    assert coords(vertex) == (8, 5)
    assert (coords(edge.start), coords(edge.end)) == ((15, -15), (9, 6))
    assert circuit.get_length_with_next() == pytest.approx(SCENARIO_PERIMETER + 0.763503994948632)


def test_build_perimeter_without_prepare():
    circuit = HeapableCircuit(vertices_2d(SCENARIO_POINTS), PerimeterBuilder2D())
    circuit.build_perimeter()
    assert len(circuit.get_closest_edges()) == 15


def test_prepare_runs_deduplicator():
    points = SCENARIO_POINTS + [(0, 0), (3, 13)]
    circuit = HeapableCircuit(vertices_2d(points), PerimeterBuilder2D(), deduplicate_vertices_2d)
    circuit.prepare()
    assert len(circuit.vertices) == len(SCENARIO_POINTS)
    circuit.build_perimeter()
    assert len(circuit.get_unattached_vertices()) == 3


def test_prepare_clears_previous_state():
    circuit = _scenario()
    circuit.clone_and_update()
    circuit.prepare()
    assert circuit.get_attached_edges() == []
    assert len(circuit.get_closest_edges()) == 0
    assert circuit.get_length() == 0.0


# ---------------------------------------------------------------------------
#  clone_and_update
# ---------------------------------------------------------------------------
def test_first_update_attaches_in_place():
    circuit = _scenario()
    assert circuit.clone_and_update() is None
    assert len(circuit.get_unattached_vertices()) == 2
    assert len(circuit.get_attached_edges()) == 6
    assert circuit.get_length() == pytest.approx(SCENARIO_PERIMETER + 0.763503994948632)
    assert len(circuit.get_closest_edges()) == 16

    nxt = circuit.get_closest_edges().peek()
    assert coords(nxt.vertex) == (8, 5)
    assert (coords(nxt.edge.start), coords(nxt.edge.end)) == ((9, 6), (3, 13))
    assert nxt.distance == pytest.approx(0.8651462421881799)
    _check_all(circuit)


def test_relocating_a_placed_vertex_forks():
    circuit = _scenario()
    circuit.clone_and_update()
    edges_before = circuit.get_attached_edges()
    length_before = circuit.get_length()

    clone = circuit.clone_and_update()
    assert clone is not None and clone is not circuit

    # The original only lost the consumed candidate.
    assert circuit.get_attached_edges() == edges_before
    assert all(a is b for a, b in zip(circuit.get_attached_edges(), edges_before))
    assert circuit.get_length() == pytest.approx(length_before)
    assert len(circuit.get_closest_edges()) == 15
    nxt = circuit.get_closest_edges().peek()
    assert coords(nxt.vertex) == (3, 0)
    assert (coords(nxt.edge.start), coords(nxt.edge.end)) == ((15, -15), (8, 5))
    assert nxt.distance == pytest.approx(5.09082042374693)

    # The clone has (8, 5) between (9, 6) and (3, 13).
    assert clone.get_length() == pytest.approx(length_before + 0.8651462421881799)
    order = [coords(v) for v in clone.get_attached_vertices()]
    i = order.index((8, 5))
    assert order[i - 1] == (9, 6) and order[(i + 1) % len(order)] == (3, 13)
    clone_next = clone.get_closest_edges().peek()
    assert coords(clone_next.vertex) == (3, 0)
    assert clone.get_attached_edges()[1] is clone_next.edge
    assert (coords(clone_next.edge.start), coords(clone_next.edge.end)) == ((15, -15), (9, 6))
    assert clone_next.distance == pytest.approx(5.854324418695558)

    _check_all(circuit)
    _check_all(clone)


def test_clone_is_independent_of_original():
    circuit = _scenario()
    circuit.clone_and_update()
    clone = circuit.clone_and_update()
    snapshot = circuit.get_attached_edges()
    unattached = circuit.get_unattached_vertices()
    entries = len(circuit.get_closest_edges())

    while not _is_terminal(clone):
        clone.clone_and_update()

    assert clone.is_complete()
    assert circuit.get_attached_edges() == snapshot
    assert circuit.get_unattached_vertices() == unattached
    assert len(circuit.get_closest_edges()) == entries
    # Both share the input vertex objects.
    assert set(map(id, clone.vertices)) == set(map(id, circuit.vertices))


def test_square_sequence():
    circuit = HeapableCircuit(vertices_2d(SQUARE_POINTS), PerimeterBuilder2D())
    circuit.build_perimeter()
    assert circuit.get_length() == pytest.approx(12.0)
    assert len(circuit.get_closest_edges()) == 8
    assert coords(circuit.get_attached_edges()[0].start) == (3, 0)

    assert circuit.clone_and_update() is None
    assert circuit.get_length() == pytest.approx(12.5385336246535)
    assert len(circuit.get_closest_edges()) == 8
    assert circuit.get_closest_edges().peek().distance == pytest.approx(0.1327694499764709)

    clone = circuit.clone_and_update()
    assert clone is not None
    assert circuit.get_length() == pytest.approx(12.5385336246535)
    assert len(circuit.get_closest_edges()) == 7
    assert clone.get_length() == pytest.approx(12.6713030746299724)
    assert len(clone.get_closest_edges()) == 5
    _check_all(circuit)
    _check_all(clone)


def test_complete_circuit_is_terminal():
    circuit = HeapableCircuit(vertices_2d([(0, 0), (4, 0), (4, 4), (0, 4), (2, 1)]), PerimeterBuilder2D())
    circuit.build_perimeter()
    assert circuit.clone_and_update() is None
    assert circuit.is_complete()
    # A single interior vertex has nowhere better to go.
    while not _is_terminal(circuit):
        circuit.clone_and_update()
    entries = len(circuit.get_closest_edges())
    length = circuit.get_length()
    assert circuit.clone_and_update() is None
    assert len(circuit.get_closest_edges()) == entries
    assert circuit.get_length() == length
    assert circuit.get_length_with_next() == length


def test_empty_heap_update_is_noop():
    circuit = HeapableCircuit(vertices_2d([(0, 0), (4, 0), (2, 3)]), PerimeterBuilder2D())
    circuit.build_perimeter()
    assert circuit.is_complete()
    assert len(circuit.get_closest_edges()) == 0
    assert circuit.clone_and_update() is None
    assert circuit.find_next_vertex_and_edge() == (None, None)
    assert circuit.get_length_with_next() == circuit.get_length()


def test_attach_onto_foreign_edge_raises():
    circuit = _scenario()
    vertex = next(iter(circuit.get_unattached_vertices()))
    foreign = Edge2D(Vertex2D(100.0, 100.0), Vertex2D(200.0, 200.0))
    with pytest.raises(CircuitDesyncError) as info:
        circuit._attach_vertex(DistanceToEdge(vertex, foreign, 1.0))
    context = info.value.context()
    assert context["vertex"] == repr(vertex)
    assert context["edge"] == repr(foreign)
    assert len(context["edges"]) == 5


def test_move_onto_foreign_edge_raises():
    circuit = _scenario()
    circuit.clone_and_update()
    placed = next(v for v in circuit.get_attached_vertices() if v not in circuit.get_perimeter_vertices())
    foreign = Edge2D(Vertex2D(100.0, 100.0), Vertex2D(200.0, 200.0))
    with pytest.raises(CircuitDesyncError):
        circuit._move_vertex(DistanceToEdge(placed, foreign, 1.0))


def test_delete_releases_state():
    circuit = _scenario()
    circuit.delete()
    assert circuit.get_attached_edges() == []
    assert len(circuit.get_closest_edges()) == 0
    assert circuit.get_unattached_vertices() == set()
    assert "edges=0" in repr(circuit)


# ---------------------------------------------------------------------------
#  Invariants over random exploration
# ---------------------------------------------------------------------------
def _explore(circuit: HeapableCircuit, steps: int = 150, max_states: int = 6) -> None:
    circuit.build_perimeter()
    _check_all(circuit)
    states = [circuit]
    for _ in range(steps):
        if not states:
            break
        current = states.pop(0)
        if _is_terminal(current):
            assert current.is_complete()
            continue
        clone = current.clone_and_update()
        _check_all(current)
        states.append(current)
        if clone is not None:
            _check_all(clone)
            if len(states) < max_states:
                states.append(clone)


@settings(max_examples=25)
@given(st.integers(min_value=0, max_value=10_000), st.integers(min_value=4, max_value=14))
def test_random_2d_states_stay_consistent(seed, n):
    _explore(HeapableCircuit(vertices_2d(gen_points_2d(rng(seed), n)), PerimeterBuilder2D()))


@settings(max_examples=15)
@given(st.integers(min_value=0, max_value=10_000), st.integers(min_value=4, max_value=12))
def test_random_3d_states_stay_consistent(seed, n):
    _explore(HeapableCircuit(vertices_3d(gen_points_3d(rng(seed), n)), PerimeterBuilder3D()))
