from polyextrude.models import Point2D
from polyextrude.vertices import VertexSet


SQUARE = [Point2D(0, 0), Point2D(0, 1), Point2D(1, 1), Point2D(1, 0)]


def test_square_is_clockwise():
    vertices = VertexSet.from_values(SQUARE)
    assert vertices.is_order_clockwise()
    assert not vertices.is_order_counterclockwise()


def test_reversed_square_is_counterclockwise():
    vertices = VertexSet.from_values(list(reversed(SQUARE)))
    assert vertices.is_order_counterclockwise()


def test_reversing_the_store_flips_winding():
    vertices = VertexSet.from_values(SQUARE)
    vertices.reverse()
    assert vertices.is_order_counterclockwise()
    vertices.reverse()
    assert vertices.is_order_clockwise()


def test_winding_sum_value():
    vertices = VertexSet.from_values(SQUARE)
    # (0)(1) + (1)(2) + (0)(1) + (-1)(0) = 2
    assert vertices.winding_sum() == 2.0


def test_degenerate_sum_is_counterclockwise():
    collinear = VertexSet.from_values([Point2D(0, 0), Point2D(1, 1), Point2D(2, 2)])
    assert collinear.winding_sum() == 0.0
    assert collinear.is_order_counterclockwise()
    assert VertexSet().is_order_counterclockwise()


def test_winding_ignores_allocation_order():
    vertices = VertexSet()
    vertices.push(Point2D(0, 1))
    vertices.push(Point2D(1, 1))
    vertices.push(Point2D(1, 0))
    vertices.prepend(Point2D(0, 0))
    assert vertices.get_all() == SQUARE
    assert vertices.is_order_clockwise()


def test_push_many_round_trip():
    vertices = VertexSet()
    vertices.push_many(SQUARE)
    assert vertices.get_all_owned() == SQUARE
