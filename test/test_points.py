import pytest

from graph_lab.points import GeometryPoint, LineSegment, PointStore, element_vertices


def test_eleventh_point_is_refused():
    store = PointStore()
    results = [store.add(i, i) for i in range(11)]
    assert results[-1] is None
    assert len(store) == 10
    assert [pt.label for pt in store] == list("ABCDEFGHIJ")
    assert store.is_full


def test_remove_relabels_contiguously_and_keeps_ids():
    store = PointStore()
    for i in range(5):
        store.add(i, -i)
    ids_before = [pt.id for pt in store]

    removed = store.remove_at(2)
    assert removed.label == "C"
    assert [pt.label for pt in store] == ["A", "B", "C", "D"]
    assert [pt.x for pt in store] == [0, 1, 3, 4]
    assert [pt.id for pt in store] == ids_before[:2] + ids_before[3:]


@pytest.mark.parametrize("index", [5, -1, 100])
def test_remove_out_of_range_is_noop(index):
    store = PointStore()
    for i in range(5):
        store.add(i, i)
    assert store.remove_at(index) is None
    assert len(store) == 5


def test_clear_restarts_labels():
    store = PointStore()
    store.add(0, 0)
    store.add(1, 1)
    store.clear()
    assert len(store) == 0
    assert store.add(2, 2).label == "A"


def test_pairwise_distances_are_consecutive():
    store = PointStore()
    a = store.add(0, 0)
    b = store.add(3, 4)
    assert list(store.pairwise_distances()) == [(a, b, 5.0)]

    store.add(3, 0)
    distances = list(store.pairwise_distances())
    assert [(d.start.label, d.end.label) for d in distances] == [("A", "B"), ("B", "C")]
    assert distances[1].distance == pytest.approx(4.0)


def test_pairwise_distances_restart_and_reflect_changes():
    store = PointStore()
    assert list(store.pairwise_distances()) == []
    store.add(0, 0)
    assert list(store.pairwise_distances()) == []
    store.add(1, 0)
    first = list(store.pairwise_distances())
    assert first == list(store.pairwise_distances())
    store.remove_at(0)
    assert list(store.pairwise_distances()) == []


def test_index_of():
    store = PointStore()
    store.add(0, 0)
    second = store.add(1, 1)
    assert store.index_of(second.id) == 1
    assert store.index_of("missing") is None


def test_element_vertices():
    assert element_vertices(GeometryPoint(1.0, 2.0)) == [(1.0, 2.0)]
    segment = LineSegment((0.0, 0.0), (3.0, 4.0))
    assert element_vertices(segment) == [(0.0, 0.0), (3.0, 4.0)]
    assert segment.length == 5.0
    with pytest.raises(TypeError):
        element_vertices(object())


def test_index_at_matches_position():
    store = PointStore()
    store.add(1.0, 1.0)
    store.add(-0.5, 2.0)
    assert store.index_at(-0.5, 2.0) == 1
    assert store.index_at(1.0, 1.0 + 1e-12) == 0
    assert store.index_at(1.0, 1.5) is None
