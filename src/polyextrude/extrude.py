"""Extrusion pipeline — closed 2D ring → watertight 3D solid.

The ring lies in the XZ plane: a 2D point ``(x, y)`` maps to
``(x, elevation, y)`` with Y up.  The solid is made of three blocks
merged into one :class:`~polyextrude.mesh.MeshBuffer`:

1. **Floor** — the triangulated ring at elevation 0, normal ``-Y``.
2. **Ceiling** — the same triangles at elevation *height*, normal ``+Y``.
3. **Walls** — one quad per boundary edge, wrap-around edge included,
   with normal ``normalize(bottom × rise)``.

Walls face outward only when the ring is clockwise viewed from above
(see :meth:`~polyextrude.vertices.VertexSet.is_order_clockwise`).  The
pipeline does not reorder the ring; callers reverse the polygon first.

Usage
-----
>>> from polyextrude.extrude import extrude_ring
>>> mesh = extrude_ring([(0, 0), (0, 1), (1, 1), (1, 0)], height=2.0)
>>> mesh.triangle_count
12
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple, Union

import numpy as np

from .mesh import MeshBuffer, MeshBuilder
from .models import Point2D
from .triangulate import DEFAULT_TRIANGULATOR, Triangulator, get_triangulator

logger = logging.getLogger(__name__)

PointLike = Union[Point2D, Tuple[float, float], Sequence[float]]

FLOOR_NORMAL = (0.0, -1.0, 0.0)
CEILING_NORMAL = (0.0, 1.0, 0.0)


@dataclass
class ExtrudeConfig:
    """Parameters for :func:`extrude_with_config`.

    Attributes
    ----------
    height : float
        Ceiling elevation; must be positive.
    triangulator : str | Triangulator
        Registry name (see :data:`~polyextrude.triangulate.TRIANGULATORS`)
        or instance of the floor/ceiling triangulator.
    """

    height: float = 2.0
    triangulator: Union[str, Triangulator] = DEFAULT_TRIANGULATOR


DEFAULT_EXTRUDE = ExtrudeConfig()


def ring_coords(points: Iterable[PointLike]) -> np.ndarray:
    """Convert points or ``(x, y)`` pairs to an ``(N, 2)`` float64 array."""
    coords: List[Tuple[float, float]] = []
    for p in points:
        if isinstance(p, Point2D):
            coords.append((float(p.x), float(p.y)))
        else:
            coords.append((float(p[0]), float(p[1])))
    return np.array(coords, dtype=np.float64).reshape(-1, 2)


def _orient_triangles(ring: np.ndarray, triangles: np.ndarray, ccw: bool) -> np.ndarray:
    """Return *triangles* with every triple wound CCW (or CW) in the 2D plane."""
    tris = np.array(triangles, dtype=np.uint32).reshape(-1, 3)
    a = ring[tris[:, 0]]
    b = ring[tris[:, 1]]
    c = ring[tris[:, 2]]
    turn = (b[:, 0] - a[:, 0]) * (c[:, 1] - a[:, 1]) - (b[:, 1] - a[:, 1]) * (c[:, 0] - a[:, 0])
    flip = turn < 0 if ccw else turn > 0
    tris[flip] = tris[flip][:, [0, 2, 1]]
    return tris


class ExtrusionPipeline:
    """Builds floor, ceiling and wall blocks for one ring.

    Parameters
    ----------
    triangulator : str | Triangulator | None
        Registry name or instance; ``None`` selects the default
        (``mapbox_earcut``).
    """

    def __init__(self, triangulator: Union[str, Triangulator, None] = None) -> None:
        self.triangulator = get_triangulator(triangulator)

    @classmethod
    def from_config(cls, config: ExtrudeConfig) -> "ExtrusionPipeline":
        return cls(config.triangulator)

    def run(self, points: Iterable[PointLike], height: float) -> MeshBuffer:
        """Extrude *points* to *height*.

        Raises ``ValueError`` for fewer than 3 points or a non-positive
        height, and :class:`~polyextrude.errors.TriangulationError` when
        the triangulator rejects the ring.
        """
        ring = ring_coords(points)
        if len(ring) < 3:
            raise ValueError(f"Extrusion needs at least 3 points, got {len(ring)}")
        if not height > 0:
            raise ValueError(f"Extrusion height must be positive, got {height}")

        triangles = self.triangulator.triangulate(ring)

        builder = MeshBuilder()
        # A 2D counter-clockwise triangle maps to a downward-facing one in XZ.
        self._add_cap(builder, ring, _orient_triangles(ring, triangles, ccw=True), 0.0, FLOOR_NORMAL)
        self._add_cap(builder, ring, _orient_triangles(ring, triangles, ccw=False), height, CEILING_NORMAL)
        walls = self._add_walls(builder, ring, height)

        mesh = builder.build()
        logger.debug(
            "Extruded %d-point ring to height %s: %d cap triangles, %d walls, %d vertices",
            len(ring), height, len(triangles), walls, mesh.vertex_count,
        )
        return mesh

    @staticmethod
    def _add_cap(builder, ring, triangles, elevation, normal) -> None:
        positions = [(float(x), float(elevation), float(y)) for x, y in ring]
        builder.add_block(positions, triangles, normal)

    @staticmethod
    def _add_walls(builder, ring: np.ndarray, height: float) -> int:
        count = 0
        n = len(ring)
        for i in range(n):
            x1, y1 = ring[i]
            x2, y2 = ring[(i + 1) % n]
            corner1 = np.array([x1, 0.0, y1])
            corner2 = np.array([x2, 0.0, y2])
            corner3 = np.array([x2, height, y2])
            corner4 = np.array([x1, height, y1])

            bottom = corner2 - corner1
            rise = corner3 - corner2
            normal = np.cross(bottom, rise)
            length = float(np.linalg.norm(normal))
            if length == 0.0:
                logger.debug("Skipping zero-length wall at ring index %d", i)
                continue
            normal /= length

            builder.add_quad(
                [tuple(float(v) for v in c) for c in (corner1, corner2, corner3, corner4)],
                tuple(float(v) for v in normal),
            )
            count += 1
        return count


def extrude_ring(
    points: Iterable[PointLike],
    height: float,
    triangulator: Union[str, Triangulator, None] = None,
) -> MeshBuffer:
    """Convenience wrapper around :class:`ExtrusionPipeline`."""
    return ExtrusionPipeline(triangulator).run(points, height)


def extrude_with_config(
    points: Iterable[PointLike],
    config: ExtrudeConfig = DEFAULT_EXTRUDE,
) -> MeshBuffer:
    """Extrude *points* using the height and triangulator in *config*."""
    return ExtrusionPipeline.from_config(config).run(points, config.height)
