from __future__ import annotations

from hypothesis import given, strategies as st

from tsp_insertion.model.heap import Heap


def _drain(heap: Heap) -> list:
    out = []
    while len(heap):
        out.append(heap.pop())
    return out


def _identity_heap(values=()) -> Heap:
    heap: Heap = Heap(lambda x: x)
    heap.push_all(values)
    return heap


def test_empty_heap_returns_none():
    heap = _identity_heap()
    assert heap.pop() is None
    assert heap.peek() is None
    assert len(heap) == 0


def test_push_pop_in_priority_order():
    heap = _identity_heap()
    for v in [5.0, 1.0, 4.0, 2.0, 3.0]:
        heap.push(v)
    assert heap.peek() == 1.0
    assert _drain(heap) == [1.0, 2.0, 3.0, 4.0, 5.0]


def test_ties_pop_in_insertion_order():
    heap: Heap = Heap(lambda item: item[0])
    heap.push_all([(1, "a"), (0, "first"), (1, "b"), (1, "c")])
    assert [item[1] for item in _drain(heap)] == ["first", "a", "b", "c"]


def test_payloads_need_not_be_comparable():
    heap: Heap = Heap(lambda d: d["p"])
    heap.push({"p": 1.0})
    heap.push({"p": 1.0})
    assert len(_drain(heap)) == 2


def test_clone_is_independent():
    heap = _identity_heap([3.0, 1.0, 2.0])
    clone = heap.clone()
    assert clone.pop() == 1.0
    clone.push(0.5)
    assert len(heap) == 3
    assert heap.peek() == 1.0
    assert _drain(clone) == [0.5, 2.0, 3.0]


def test_delete_all_returns_removed_and_keeps_order():
    heap = _identity_heap([1, 2, 3, 4, 5, 6])
    removed = heap.delete_all(lambda x: x % 2 == 0)
    assert sorted(removed) == [2, 4, 6]
    assert _drain(heap) == [1, 3, 5]


def test_replace_all_drops_keeps_and_expands():
    heap = _identity_heap([1, 2, 3])

    def replace(x):
        if x == 1:
            return ()
        if x == 2:
            return (x,)
        return (10, 0)

    heap.replace_all(replace)
    assert _drain(heap) == [0, 2, 10]


def test_any_match():
    heap = _identity_heap([1, 2, 3])
    assert heap.any_match(lambda x: x == 2)
    assert not heap.any_match(lambda x: x > 3)
    assert not _identity_heap().any_match(lambda x: True)


def test_trim_to_smallest():
    heap = _identity_heap([9, 1, 8, 2, 7, 3])
    heap.trim_to_smallest(3)
    assert _drain(heap) == [1, 2, 3]

    short = _identity_heap([2, 1])
    short.trim_to_smallest(5)
    assert _drain(short) == [1, 2]


def test_heapify_recomputes_priorities():
    weights = {"a": 1.0, "b": 2.0}
    heap: Heap = Heap(lambda key: weights[key])
    heap.push_all(["a", "b"])
    weights["a"] = 3.0
    heap.heapify()
    assert _drain(heap) == ["b", "a"]


def test_delete_releases_entries():
    heap = _identity_heap([1, 2])
    heap.delete()
    assert len(heap) == 0
    assert heap.pop() is None


@given(st.lists(st.floats(allow_nan=False, allow_infinity=False), max_size=60))
def test_drain_is_sorted(values):
    heap = _identity_heap(values)
    assert _drain(heap) == sorted(values)


@given(
    st.lists(st.integers(min_value=-50, max_value=50), max_size=40),
    st.integers(min_value=0, max_value=45),
)
def test_trim_matches_sorted_prefix(values, n):
    heap = _identity_heap(values)
    heap.trim_to_smallest(n)
    assert _drain(heap) == sorted(values)[:n]
