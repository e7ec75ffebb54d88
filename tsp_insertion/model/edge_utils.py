"""Topology operations on a closed tour stored as an ordered list of edges.

The list is a cycle: ``edges[i].end`` is ``edges[i + 1].start`` and the last
edge ends where the first one starts. Functions without a ``_copy`` suffix
mutate the list they are given (and also return it); the ``_copy`` variants
leave the input untouched so that it can still be shared between cloned
circuits. Vertices are located by identity, edges by ``==``.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from tsp_insertion.model.interfaces import CircuitEdge, CircuitVertex

EdgeList = List[CircuitEdge]


def index_of_edge(edges: Sequence[CircuitEdge], edge: CircuitEdge) -> int:
    """Return the position of ``edge`` in ``edges``, or -1 if it is not present."""
    for i, e in enumerate(edges):
        if e == edge:
            return i
    return -1


def index_of_vertex_start(edges: Sequence[CircuitEdge], vertex: CircuitVertex) -> int:
    """Return the index of the edge that starts at ``vertex`` (identity), or -1."""
    for i, e in enumerate(edges):
        if e.start is vertex:
            return i
    return -1


# ---------------------------------------------------------------------------
#  Split
# ---------------------------------------------------------------------------
def split_edge(edges: EdgeList, edge: CircuitEdge, vertex: CircuitVertex) -> Tuple[EdgeList, int]:
    """Replace ``edge`` with ``edge.split(vertex)``, in place.

    Returns ``(edges, index)`` where the two new edges sit at ``index`` and
    ``index + 1``. If ``edge`` is not in the list it is returned unchanged with
    index -1.
    """
    index = index_of_edge(edges, edge)
    if index < 0:
        return edges, -1
    edge_a, edge_b = edge.split(vertex)
    edges[index:index + 1] = [edge_a, edge_b]
    return edges, index


def split_edge_copy(edges: Sequence[CircuitEdge], edge: CircuitEdge, vertex: CircuitVertex) -> Tuple[EdgeList, int]:
    """Copying variant of :func:`split_edge`; ``edges`` is never modified."""
    index = index_of_edge(edges, edge)
    if index < 0:
        return list(edges), -1
    edge_a, edge_b = edge.split(vertex)
    return [*edges[:index], edge_a, edge_b, *edges[index + 1:]], index


# ---------------------------------------------------------------------------
#  Merge
# ---------------------------------------------------------------------------
def merge_edges_by_index(
    edges: EdgeList, vertex_index: int
) -> Tuple[EdgeList, Optional[CircuitEdge], Optional[CircuitEdge]]:
    """Detach the vertex that starts ``edges[vertex_index]``, in place.

    The edge ending at that vertex and the edge starting at it are replaced by
    their merge, which takes the slot of the former (the last slot when
    ``vertex_index`` is 0). Returns the list and the two detached edges. Fewer
    than two edges leaves nothing to merge and yields ``([], None, None)``.
    """
    last = len(edges) - 1
    if last <= 0:
        return [], None, None
    if vertex_index <= 0:
        detached_a, detached_b = edges[last], edges[0]
        del edges[0]
        edges[last - 1] = detached_a.merge(detached_b)
    else:
        vertex_index = min(vertex_index, last)
        detached_a, detached_b = edges[vertex_index - 1], edges[vertex_index]
        del edges[vertex_index]
        edges[vertex_index - 1] = detached_a.merge(detached_b)
    return edges, detached_a, detached_b


def merge_edges_by_vertex(
    edges: EdgeList, vertex: CircuitVertex
) -> Tuple[EdgeList, Optional[CircuitEdge], Optional[CircuitEdge], Optional[CircuitEdge]]:
    """Remove ``vertex`` from the tour, in place.

    Returns ``(edges, detached_a, detached_b, merged)``. When the vertex is not
    attached, or there are fewer than two edges, the list comes back unchanged
    with ``None`` for the other three values.
    """
    index = index_of_vertex_start(edges, vertex)
    if index < 0 or len(edges) < 2:
        return edges, None, None, None
    updated, detached_a, detached_b = merge_edges_by_index(edges, index)
    n = len(updated)
    return updated, detached_a, detached_b, updated[(index - 1 + n) % n]


def merge_edges_copy(
    edges: Sequence[CircuitEdge], vertex: CircuitVertex
) -> Tuple[EdgeList, Optional[CircuitEdge], Optional[CircuitEdge], Optional[CircuitEdge]]:
    """Copying variant of :func:`merge_edges_by_vertex`."""
    return merge_edges_by_vertex(list(edges), vertex)


# ---------------------------------------------------------------------------
#  Move
# ---------------------------------------------------------------------------
def move_vertex(
    edges: EdgeList, vertex: CircuitVertex, edge: CircuitEdge
) -> Tuple[EdgeList, Optional[CircuitEdge], Optional[CircuitEdge], Optional[CircuitEdge]]:
    """Detach ``vertex`` from where it sits and insert it into ``edge``, in place.

    Runs in one O(n) pass without allocating a new list: the two edges around
    the old position become a single merged edge, the destination becomes two
    split edges, and the freed slot is bubbled across to sit next to the
    destination. Returns ``(edges, merged, split_a, split_b)``.

    Nothing changes (and ``None`` is returned for the three edges) when there
    are fewer than three edges, when the vertex or the destination is missing,
    or when the destination already touches the vertex.
    """
    n = len(edges)
    if n < 3 or edge.start is vertex or edge.end is vertex:
        return edges, None, None, None

    merged_index = from_index = to_index = -1
    prev_index = n - 1
    for i, e in enumerate(edges):
        if e.start is vertex:
            merged_index = prev_index
            from_index = i
        elif e == edge:
            to_index = i
        prev_index = i

    if from_index < 0 or to_index < 0:
        return edges, None, None, None

    split_a, split_b = edge.split(vertex)
    merged = edges[merged_index].merge(edges[from_index])
    edges[merged_index] = merged

    if from_index > to_index:
        delta = -1
        edges[to_index] = split_a
        edges[from_index] = split_b
    else:
        delta = 1
        edges[to_index] = split_b
        edges[from_index] = split_a

    current = from_index
    nxt = from_index + delta
    while nxt != to_index:
        edges[current], edges[nxt] = edges[nxt], edges[current]
        current, nxt = nxt, nxt + delta

    return edges, merged, split_a, split_b


def tour_vertices(edges: Sequence[CircuitEdge]) -> List[CircuitVertex]:
    """Vertices in tour order (the start of each edge)."""
    return [e.start for e in edges]


def is_closed_tour(edges: Sequence[CircuitEdge]) -> bool:
    """True if every edge ends where the next one starts (identity), wrapping around."""
    return all(edges[i].end is edges[(i + 1) % len(edges)].start for i in range(len(edges)))


__all__ = [
    "index_of_edge",
    "index_of_vertex_start",
    "split_edge",
    "split_edge_copy",
    "merge_edges_by_index",
    "merge_edges_by_vertex",
    "merge_edges_copy",
    "move_vertex",
    "tour_vertices",
    "is_closed_tour",
]
