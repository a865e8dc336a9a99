"""Geometry helper functions used across the package."""

from __future__ import annotations

from typing import Sequence, Tuple

Coord = Tuple[float, float]


def winding_sum(points: Sequence[Coord]) -> float:
    """Edge sum ``Σ (x2 − x1)(y2 + y1)`` over a ring, wrap-around included.

    Positive for a clockwise ring (x right, y up), negative for a
    counter-clockwise one, and exactly 0 for empty or degenerate input.
    """
    total = 0.0
    n = len(points)
    if n == 0:
        return total
    for i in range(n):
        x1, y1 = points[i]
        x2, y2 = points[(i + 1) % n]
        total += (x2 - x1) * (y2 + y1)
    return total


def signed_area(points: Sequence[Coord]) -> float:
    """Shoelace signed area; positive if the ring is counter-clockwise."""
    area = 0.0
    n = len(points)
    for i in range(n):
        x1, y1 = points[i]
        x2, y2 = points[(i + 1) % n]
        area += x1 * y2 - x2 * y1
    return area / 2.0


def cross(o: Coord, a: Coord, b: Coord) -> float:
    """Z component of ``(a − o) × (b − o)``."""
    return (a[0] - o[0]) * (b[1] - o[1]) - (a[1] - o[1]) * (b[0] - o[0])


def point_in_triangle(p: Coord, a: Coord, b: Coord, c: Coord) -> bool:
    """True if *p* lies inside or on the boundary of triangle *abc*."""
    d1 = cross(a, b, p)
    d2 = cross(b, c, p)
    d3 = cross(c, a, p)
    has_neg = d1 < 0 or d2 < 0 or d3 < 0
    has_pos = d1 > 0 or d2 > 0 or d3 > 0
    return not (has_neg and has_pos)
