"""Ring triangulation — the pluggable capability behind extrusion.

A triangulator turns one simple ring of 2D points into triangles over
the same point buffer.  Any object satisfying :class:`Triangulator` can
be handed to :class:`~polyextrude.extrude.ExtrusionPipeline`, so the
default ``mapbox_earcut`` backend can be swapped without touching
:class:`~polyextrude.polygon.Polygon`.

Implementations
---------------
- :class:`EarcutTriangulator` — ``mapbox_earcut`` (default)
- :class:`EarClippingTriangulator` — plain O(n³) ear clipping
"""

from __future__ import annotations

from typing import Dict, List, Protocol, Type, Union, runtime_checkable

import mapbox_earcut
import numpy as np

from .errors import TriangulationError
from .geometry import cross, point_in_triangle, signed_area


@runtime_checkable
class Triangulator(Protocol):
    """Protocol for a ring triangulator.

    ``triangulate`` receives an ``(N, 2)`` float64 array holding one
    ring (no repeated closing point) and returns an ``(M, 3)`` array of
    indices into it.  It raises :class:`TriangulationError` when the
    ring cannot be triangulated.
    """

    @property
    def name(self) -> str:
        ...

    def triangulate(self, points: np.ndarray) -> np.ndarray:
        ...


def _as_ring(points) -> np.ndarray:
    ring = np.asarray(points, dtype=np.float64)
    if ring.ndim != 2 or ring.shape[1] != 2:
        raise TriangulationError(f"Expected an (N, 2) point array, got shape {ring.shape}")
    if len(ring) < 3:
        raise TriangulationError(f"Ring needs at least 3 points, got {len(ring)}")
    if not np.all(np.isfinite(ring)):
        raise TriangulationError("Ring contains non-finite coordinates")
    return ring


class EarcutTriangulator:
    """Triangulate with the ``mapbox_earcut`` extension."""

    name = "earcut"

    def triangulate(self, points: np.ndarray) -> np.ndarray:
        ring = _as_ring(points)
        ring_ends = np.array([len(ring)], dtype=np.uint32)
        try:
            flat = mapbox_earcut.triangulate_float64(ring, ring_ends)
        except (TypeError, ValueError, RuntimeError) as exc:
            raise TriangulationError(f"earcut rejected ring: {exc}") from exc
        triangles = np.asarray(flat, dtype=np.uint32).reshape(-1, 3)
        if len(triangles) == 0:
            raise TriangulationError(
                f"earcut produced no triangles for a {len(ring)}-point ring"
            )
        return triangles


class EarClippingTriangulator:
    """Textbook ear clipping over a single simple ring.

    The ring is walked counter-clockwise whatever its input winding.
    Collinear vertices are dropped without emitting a triangle.
    """

    name = "ear-clipping"

    def triangulate(self, points: np.ndarray) -> np.ndarray:
        ring = _as_ring(points)
        coords = [(float(x), float(y)) for x, y in ring]
        area = signed_area(coords)
        if area == 0.0:
            raise TriangulationError("Ring has zero area")

        remaining: List[int] = list(range(len(coords)))
        if area < 0.0:
            remaining.reverse()

        triangles: List[tuple[int, int, int]] = []
        while len(remaining) > 3:
            clipped = False
            n = len(remaining)
            for i in range(n):
                ia, ib, ic = remaining[i - 1], remaining[i], remaining[(i + 1) % n]
                a, b, c = coords[ia], coords[ib], coords[ic]
                turn = cross(a, b, c)
                if turn == 0.0:
                    del remaining[i]
                    clipped = True
                    break
                if turn < 0.0:
                    continue
                if self._has_point_inside(coords, remaining, (ia, ib, ic)):
                    continue
                triangles.append((ia, ib, ic))
                del remaining[i]
                clipped = True
                break
            if not clipped:
                raise TriangulationError(
                    f"No ear found with {len(remaining)} vertices left; ring is not simple"
                )

        if len(remaining) == 3:
            ia, ib, ic = remaining
            if cross(coords[ia], coords[ib], coords[ic]) != 0.0:
                triangles.append((ia, ib, ic))

        if not triangles:
            raise TriangulationError("Ring collapsed to no triangles")
        return np.array(triangles, dtype=np.uint32)

    @staticmethod
    def _has_point_inside(coords, remaining, corners) -> bool:
        a, b, c = (coords[i] for i in corners)
        for idx in remaining:
            if idx in corners:
                continue
            p = coords[idx]
            if p in (a, b, c):
                continue
            if point_in_triangle(p, a, b, c):
                return True
        return False


TRIANGULATORS: Dict[str, Type] = {
    EarcutTriangulator.name: EarcutTriangulator,
    EarClippingTriangulator.name: EarClippingTriangulator,
}

DEFAULT_TRIANGULATOR = EarcutTriangulator.name


def get_triangulator(triangulator: Union[str, Triangulator, None] = None) -> Triangulator:
    """Resolve a triangulator from a registry name or pass an instance through."""
    if triangulator is None:
        triangulator = DEFAULT_TRIANGULATOR
    if isinstance(triangulator, str):
        try:
            return TRIANGULATORS[triangulator]()
        except KeyError:
            raise ValueError(
                f"Unknown triangulator {triangulator!r}. "
                f"Available: {sorted(TRIANGULATORS)}"
            ) from None
    if not isinstance(triangulator, Triangulator):
        raise TypeError(f"{triangulator!r} does not implement the Triangulator protocol")
    return triangulator
