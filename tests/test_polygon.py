"""Tests for ``polyextrude.polygon`` — the mutation protocol."""

from __future__ import annotations

import pytest

from polyextrude.models import Edge, Point2D
from polyextrude.polygon import Polygon

SQUARE = [Point2D(0, 0), Point2D(0, 1), Point2D(1, 1), Point2D(1, 0)]


@pytest.fixture()
def square():
    """Closed square; returns the polygon and its ids ``a, b, c, d``."""
    polygon = Polygon()
    ids = [polygon.push_vertex(p) for p in SQUARE]
    assert polygon.close()
    return polygon, ids


# ═══════════════════════════════════════════════════════════════════
# push_vertex / close
# ═══════════════════════════════════════════════════════════════════


def test_push_vertex_builds_open_path():
    polygon = Polygon()
    ids = [polygon.push_vertex(p) for p in SQUARE]
    assert len(polygon.vertices) == 4
    assert len(polygon.edges) == 3
    assert polygon.edges == {Edge(ids[0], ids[1]), Edge(ids[1], ids[2]), Edge(ids[2], ids[3])}
    assert not polygon.is_closed()
    assert polygon.validate() == []


def test_first_vertex_adds_no_edge():
    polygon = Polygon()
    polygon.push_vertex(Point2D(0, 0))
    assert len(polygon.edges) == 0


@pytest.mark.parametrize("k", [3, 4, 5, 8, 20])
def test_close_gives_k_edges(k):
    polygon = Polygon()
    for i in range(k):
        polygon.push_vertex(Point2D(float(i), float(i * i % 7)))
    assert polygon.close()
    assert len(polygon.edges) == k
    assert len(polygon.vertices) == k
    assert polygon.is_closed()


@pytest.mark.parametrize("k", [0, 1, 2])
def test_close_with_too_few_vertices(k):
    polygon = Polygon()
    for i in range(k):
        polygon.push_vertex(Point2D(float(i), 0.0))
    edges_before = len(polygon.edges)
    assert polygon.close() is False
    assert len(polygon.edges) == edges_before
    assert not polygon.is_closed()


def test_close_twice_dedupes(square):
    polygon, _ = square
    assert polygon.close()
    assert len(polygon.edges) == 4


def test_closed_square_edges(square):
    polygon, (a, b, c, d) = square
    assert polygon.vertices.get_all_owned() == SQUARE
    assert polygon.edges == {Edge(a, b), Edge(b, c), Edge(c, d), Edge(d, a)}
    assert polygon.validate() == []


def test_from_points_closes():
    polygon = Polygon.from_points([(0, 0), (0, 1), (1, 1), (1, 0)])
    assert len(polygon.vertices) == 4
    assert len(polygon.edges) == 4
    assert polygon.points() == SQUARE


def test_from_points_open():
    polygon = Polygon.from_points(SQUARE, close=False)
    assert len(polygon.edges) == 3


# ═══════════════════════════════════════════════════════════════════
# reverse
# ═══════════════════════════════════════════════════════════════════


def test_reverse_flips_order_and_edges(square):
    polygon, (a, b, c, d) = square
    polygon.reverse()
    assert polygon.vertices.get_all_owned() == list(reversed(SQUARE))
    assert polygon.edges == {Edge(a, d), Edge(d, c), Edge(c, b), Edge(b, a)}
    assert polygon.validate() == []


def test_reverse_is_an_involution(square):
    polygon, _ = square
    original = polygon.copy()
    polygon.reverse()
    assert polygon != original
    polygon.reverse()
    assert polygon == original


def test_reverse_flips_winding(square):
    polygon, _ = square
    assert polygon.vertices.is_order_clockwise()
    polygon.reverse()
    assert polygon.vertices.is_order_counterclockwise()


def test_reverse_open_path():
    polygon = Polygon.from_points(SQUARE, close=False)
    a, b, c, d = polygon.vertices.ids()
    polygon.reverse()
    assert polygon.edges == {Edge(d, c), Edge(c, b), Edge(b, a)}
    assert polygon.validate() == []


# ═══════════════════════════════════════════════════════════════════
# remove_vertex
# ═══════════════════════════════════════════════════════════════════


@pytest.mark.parametrize("victim", range(4))
@pytest.mark.parametrize("reverse_first", [False, True])
def test_remove_vertex_leaves_closed_triangle(square, victim, reverse_first):
    polygon, ids = square
    if reverse_first:
        polygon.reverse()
    removed_id = ids[victim]

    point, added = polygon.remove_vertex(removed_id)

    assert point == SQUARE[victim]
    assert len(added) == 1
    assert len(polygon.vertices) == 3
    assert len(polygon.edges) == 3
    assert polygon.is_closed()
    assert polygon.validate() == []
    assert all(not edge.touches(removed_id) for edge in polygon.edges)


def test_remove_b(square):
    polygon, (a, b, c, d) = square
    point, added = polygon.remove_vertex(b)
    assert point == Point2D(0, 1)
    assert added == [Edge(a, c)]
    assert polygon.vertices.ids() == [a, c, d]
    assert polygon.edges == {Edge(a, c), Edge(c, d), Edge(d, a)}


def test_remove_b_reversed(square):
    polygon, (a, b, c, d) = square
    polygon.reverse()
    polygon.remove_vertex(b)
    assert polygon.vertices.ids() == [d, c, a]
    assert polygon.edges == {Edge(a, d), Edge(d, c), Edge(c, a)}


def test_remove_a_reversed(square):
    polygon, (a, b, c, d) = square
    polygon.reverse()
    polygon.remove_vertex(a)
    assert polygon.vertices.ids() == [d, c, b]
    assert polygon.edges == {Edge(b, d), Edge(d, c), Edge(c, b)}


def test_remove_d(square):
    polygon, (a, b, c, d) = square
    polygon.remove_vertex(d)
    assert polygon.vertices.ids() == [a, b, c]
    assert polygon.edges == {Edge(a, b), Edge(b, c), Edge(c, a)}


def test_remove_end_of_open_path_does_not_stitch():
    polygon = Polygon.from_points(SQUARE, close=False)
    a, b, c, d = polygon.vertices.ids()
    point, added = polygon.remove_vertex(d)
    assert point == SQUARE[3]
    assert added == []
    assert polygon.edges == {Edge(a, b), Edge(b, c)}


def test_remove_stale_vertex_is_noop(square):
    polygon, (a, *_rest) = square
    polygon.remove_vertex(a)
    snapshot = polygon.copy()
    assert polygon.remove_vertex(a) == (None, [])
    assert polygon == snapshot


def test_remove_vertex_with_extra_edges_skips_stitch(square, caplog):
    polygon, (a, b, c, d) = square
    polygon.edges.insert(Edge(b, d))
    with caplog.at_level("WARNING", logger="polyextrude.polygon"):
        point, added = polygon.remove_vertex(b)
    assert point == SQUARE[1]
    assert added == []
    assert polygon.edges == {Edge(c, d), Edge(d, a)}
    assert "skipping re-stitch" in caplog.text


# ═══════════════════════════════════════════════════════════════════
# insert_vertex_on_edge
# ═══════════════════════════════════════════════════════════════════


def test_insert_on_wrap_edge_goes_to_tail(square):
    polygon, (a, b, c, d) = square
    new = polygon.insert_vertex_on_edge(Point2D(0.5, 0), Edge(d, a))
    assert new is not None
    assert polygon.vertices.ids() == [a, b, c, d, new]
    assert polygon.edges == {Edge(a, b), Edge(b, c), Edge(c, d), Edge(d, new), Edge(new, a)}
    assert polygon.validate() == []
    assert polygon.vertices.is_order_clockwise()


def test_insert_on_wrap_edge_after_reverse(square):
    polygon, (a, b, c, d) = square
    polygon.reverse()
    # Order is d, c, b, a; wrap edge runs a → d.
    new = polygon.insert_vertex_on_edge(Point2D(0.5, 0), Edge(a, d))
    assert polygon.vertices.ids() == [d, c, b, a, new]
    assert Edge(a, new) in polygon.edges
    assert Edge(new, d) in polygon.edges
    assert Edge(a, d) not in polygon.edges
    assert polygon.validate() == []


def test_insert_on_inner_edge(square):
    polygon, (a, b, c, d) = square
    new = polygon.insert_vertex_on_edge(Point2D(0.5, 1), Edge(b, c))
    assert polygon.vertices.ids() == [a, b, new, c, d]
    assert polygon.edges == {Edge(a, b), Edge(b, new), Edge(new, c), Edge(c, d), Edge(d, a)}
    assert len(polygon.edges) == len(polygon.vertices)


def test_insert_on_inner_edge_reversed(square):
    polygon, (a, b, c, d) = square
    polygon.reverse()
    new = polygon.insert_vertex_on_edge(Point2D(0.5, 1), Edge(c, b))
    assert polygon.vertices.ids() == [d, c, new, b, a]
    assert polygon.validate() == []


def test_insert_on_stale_edge_returns_none(square):
    polygon, (a, b, c, d) = square
    polygon.remove_vertex(b)
    snapshot = polygon.copy()
    assert polygon.insert_vertex_on_edge(Point2D(0, 0.5), Edge(a, b)) is None
    assert polygon == snapshot


def test_insert_on_two_vertex_path_appends_at_tail():
    polygon = Polygon.from_points(SQUARE[:2], close=False)
    a, b = polygon.vertices.ids()
    new = polygon.insert_vertex_on_edge(Point2D(0, 0.5), Edge(a, b))
    # First and last vertex are joined, so the edge counts as wrap-around
    assert polygon.vertices.ids() == [a, b, new]
    assert polygon.edges == {Edge(a, new), Edge(new, b)}


def test_insert_then_remove_restores_shape(square):
    polygon, _ = square
    before = polygon.copy()
    a, b = polygon.vertices.ids()[:2]
    new = polygon.insert_vertex_on_edge(Point2D(0, 0.5), Edge(a, b))
    polygon.remove_vertex(new)
    assert polygon == before


# ═══════════════════════════════════════════════════════════════════
# move / clear / validate
# ═══════════════════════════════════════════════════════════════════


def test_move_vertex(square):
    polygon, (a, b, c, d) = square
    assert polygon.move_vertex(b, Point2D(-1, 2))
    assert polygon.vertices.get(b) == Point2D(-1, 2)
    assert len(polygon.edges) == 4
    polygon.remove_vertex(b)
    assert polygon.move_vertex(b, Point2D(0, 0)) is False


def test_clear_then_repush_gives_new_ids_same_shape(square):
    polygon, old_ids = square
    clockwise = polygon.vertices.is_order_clockwise()
    polygon.clear()
    new_ids = [polygon.push_vertex(p) for p in SQUARE]
    polygon.close()
    assert not set(old_ids) & set(new_ids)
    assert polygon.vertices.is_order_clockwise() == clockwise
    assert len(polygon.edges) == 4


def test_clear_with_reset_allows_id_reuse(square):
    polygon, old_ids = square
    assert polygon.clear_with_reset() == 4
    assert len(polygon.edges) == 0
    new_ids = [polygon.push_vertex(p) for p in SQUARE]
    polygon.close()
    assert new_ids == old_ids
    assert polygon.validate() == []


def test_validate_reports_dangling_edge(square):
    polygon, (a, b, c, d) = square
    polygon.vertices.remove(b)
    errors = polygon.validate()
    assert any("missing vertex" in e for e in errors)


def test_copy_is_independent(square):
    polygon, (a, b, c, d) = square
    other = polygon.copy()
    other.remove_vertex(a)
    assert len(polygon.vertices) == 4
    assert len(polygon.edges) == 4
    assert polygon.vertices.get(a) == SQUARE[0]


# ═══════════════════════════════════════════════════════════════════
# extrude
# ═══════════════════════════════════════════════════════════════════


def test_extrude_too_few_vertices_returns_none():
    polygon = Polygon.from_points([(0, 0), (1, 0)], close=False)
    assert polygon.extrude(1.0) is None
    assert len(polygon.edges) == 1


def test_extrude_closes_open_polygon():
    polygon = Polygon.from_points(SQUARE, close=False)
    mesh = polygon.extrude(2.0)
    assert mesh is not None
    assert polygon.is_closed()
    assert mesh.triangle_count == 2 + 2 + 2 * 4
    assert mesh.validate() == []


def test_extrude_does_not_mutate_points(square):
    polygon, ids = square
    before = polygon.copy()
    polygon.extrude(1.5, "ear-clipping")
    assert polygon == before
