"""Headless drawing/editing session.

Routes plain editing events (a clicked point, a clicked edge, a clicked
vertex) to :class:`~polyextrude.polygon.Polygon` and keeps each
finished shape's mesh in sync.  Scene graph, picking and indicator
entities stay with the host application; this module only owns data.

Two modes mirror the interactive tool:

- **create** — :meth:`DrawingSession.add_point` grows a draft polygon;
  clicking back onto the first vertex (or calling
  :meth:`DrawingSession.finish`) closes and extrudes it.
- **edit** — a finished :class:`Shape` accepts vertex insert, remove
  and move operations, regenerating its mesh after each one.

Failed edits are logged and ignored; nothing here raises for stale ids
or degenerate intermediate states.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Union

from .errors import ExtrusionError
from .extrude import ExtrudeConfig
from .mesh import MeshBuffer
from .models import Edge, Point2D, VertexId
from .polygon import Polygon
from .triangulate import DEFAULT_TRIANGULATOR

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════
# Configuration
# ═══════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class DrawingSettings:
    """Tuneable parameters for a :class:`DrawingSession`.

    Attributes
    ----------
    extrude_size : float
        Height of every extruded shape.
    merge_distance_squared : float
        A create-mode click within this squared distance of the first
        vertex closes the polygon instead of adding a vertex.
    min_vertices : int
        Vertex floor; removals that would go below it are refused.
    triangulator : str
        Registry name of the triangulator used for extrusion.
    """

    extrude_size: float = 2.0
    merge_distance_squared: float = 0.1
    min_vertices: int = 3
    triangulator: str = DEFAULT_TRIANGULATOR

    def extrude_config(self) -> ExtrudeConfig:
        return ExtrudeConfig(height=self.extrude_size, triangulator=self.triangulator)


DEFAULT_SETTINGS = DrawingSettings()


def _extrude_clockwise(polygon: Polygon, settings: DrawingSettings) -> Optional[MeshBuffer]:
    """Make *polygon* clockwise (walls face outward) and extrude it."""
    if polygon.vertices.is_order_counterclockwise():
        polygon.reverse()
    try:
        return polygon.extrude_with_config(settings.extrude_config())
    except ExtrusionError as exc:
        logger.error("Could not extrude polygon: %s", exc)
        return None


# ═══════════════════════════════════════════════════════════════════
# Edit mode
# ═══════════════════════════════════════════════════════════════════


@dataclass
class Shape:
    """A finished polygon together with its latest mesh."""

    polygon: Polygon
    mesh: Optional[MeshBuffer] = None
    settings: DrawingSettings = field(default=DEFAULT_SETTINGS)

    def regenerate(self) -> Optional[MeshBuffer]:
        mesh = _extrude_clockwise(self.polygon, self.settings)
        if mesh is not None:
            logger.info(
                "Generated mesh: %d vertices, %d triangles",
                mesh.vertex_count, mesh.triangle_count,
            )
            self.mesh = mesh
        return mesh

    def insert_vertex(self, edge: Edge, point: Point2D) -> Optional[VertexId]:
        """Split *edge* at *point*; ``None`` if the edge is stale."""
        vertex_id = self.polygon.insert_vertex_on_edge(point, edge)
        if vertex_id is None:
            return None
        self.regenerate()
        return vertex_id

    def remove_vertex(self, vertex_id: VertexId) -> Optional[List[Edge]]:
        """Remove a vertex; returns the re-stitch edges or ``None`` if refused."""
        if len(self.polygon.vertices) <= self.settings.min_vertices:
            logger.error(
                "Cannot remove vertex: polygon has only %d vertices",
                len(self.polygon.vertices),
            )
            return None
        point, added = self.polygon.remove_vertex(vertex_id)
        if point is None:
            return None
        self.regenerate()
        return added

    def move_vertex(self, vertex_id: VertexId, point: Point2D) -> bool:
        if not self.polygon.move_vertex(vertex_id, point):
            return False
        self.regenerate()
        return True


# ═══════════════════════════════════════════════════════════════════
# Create mode
# ═══════════════════════════════════════════════════════════════════


class DrawingSession:
    """Owns the in-progress draft polygon and every finished shape."""

    def __init__(self, settings: DrawingSettings = DEFAULT_SETTINGS) -> None:
        self.settings = settings
        self.draft = Polygon()
        self.shapes: List[Shape] = []

    def add_point(self, point: Point2D) -> Union[VertexId, Shape, None]:
        """Handle a create-mode click.

        Returns the new vertex id, or the finished :class:`Shape` when
        the click lands on the first vertex (``None`` if that close
        failed).
        """
        first = self.draft.vertices.first()
        if first is not None and point.distance_squared(first) <= self.settings.merge_distance_squared:
            return self.finish()
        return self.draft.push_vertex(point)

    def finish(self) -> Optional[Shape]:
        """Close and extrude the draft, then start a fresh one.

        The draft is only reset once extrusion succeeds; on failure it is
        left open and unreversed so drawing can continue.
        """
        if len(self.draft.vertices) < 3:
            logger.error(
                "Cannot close polygon: %d vertices, need at least 3",
                len(self.draft.vertices),
            )
            return None
        polygon = self.draft.copy()
        mesh = _extrude_clockwise(polygon, self.settings)
        if mesh is None:
            return None
        shape = Shape(polygon=polygon, mesh=mesh, settings=self.settings)
        self.shapes.append(shape)
        self.draft.clear_with_reset()
        return shape

    def cancel(self) -> int:
        """Discard the draft; returns the number of dropped vertices."""
        return self.draft.clear_with_reset()
