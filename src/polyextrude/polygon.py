from __future__ import annotations

import json
import logging
from typing import Iterable, List, Optional, Tuple, Union

from .edges import EdgeSet
from .extrude import ExtrudeConfig, extrude_with_config
from .mesh import MeshBuffer
from .models import Edge, Point2D, VertexId
from .triangulate import DEFAULT_TRIANGULATOR, Triangulator
from .vertices import VertexSet

logger = logging.getLogger(__name__)


class Polygon:
    """Editable 2D polygon: ordered vertices plus directed edges.

    While open, the edges form a simple path in vertex order.  Once
    closed, they form a single cycle visiting every vertex.  Closedness
    is not stored; see :meth:`is_closed`.  Every structural mutation
    updates both :attr:`vertices` and :attr:`edges` before returning.
    """

    VERSION = "1.0"

    def __init__(self) -> None:
        self.vertices = VertexSet()
        self.edges = EdgeSet()

    @classmethod
    def from_points(
        cls,
        points: Iterable[Union[Point2D, Tuple[float, float]]],
        close: bool = True,
    ) -> "Polygon":
        """Push *points* in order, then close if possible (and requested)."""
        polygon = cls()
        for p in points:
            polygon.push_vertex(p if isinstance(p, Point2D) else Point2D(*p))
        if close:
            polygon.close()
        return polygon

    # ── Queries ─────────────────────────────────────────────────────

    def points(self) -> List[Point2D]:
        """Vertex positions in order."""
        return self.vertices.get_all_owned()

    def is_closed(self) -> bool:
        ids = self.vertices.ids()
        return len(ids) > 2 and Edge(ids[-1], ids[0]) in self.edges

    def validate(self) -> list[str]:
        """Check edge/vertex consistency; returns a list of error strings."""
        errors: list[str] = []
        ids = self.vertices.ids()

        for edge in sorted(self.edges):
            for vertex_id in (edge.from_id, edge.to_id):
                if vertex_id not in self.vertices:
                    errors.append(f"Edge {edge} references missing vertex {vertex_id}")

        outgoing: dict[VertexId, int] = {}
        incoming: dict[VertexId, int] = {}
        for edge in self.edges:
            outgoing[edge.from_id] = outgoing.get(edge.from_id, 0) + 1
            incoming[edge.to_id] = incoming.get(edge.to_id, 0) + 1
        for vertex_id in ids:
            if outgoing.get(vertex_id, 0) > 1 or incoming.get(vertex_id, 0) > 1:
                errors.append(
                    f"Vertex {vertex_id} has {incoming.get(vertex_id, 0)} incoming and "
                    f"{outgoing.get(vertex_id, 0)} outgoing edges"
                )

        expected = {Edge(a, b) for a, b in zip(ids, ids[1:])}
        if self.is_closed():
            expected.add(Edge(ids[-1], ids[0]))
        if self.edges != expected:
            missing = len(expected - set(self.edges))
            extra = len(set(self.edges) - expected)
            errors.append(
                f"Edges do not follow vertex order ({missing} missing, {extra} unexpected)"
            )
        return errors

    # ── Mutation ────────────────────────────────────────────────────

    def push_vertex(self, point: Point2D) -> VertexId:
        """Append a vertex, connecting it to the previous tail."""
        previous = self.vertices.ids()[-1] if len(self.vertices) else None
        vertex_id = self.vertices.push(point)
        if previous is not None:
            self.edges.insert(Edge(previous, vertex_id))
        return vertex_id

    def close(self) -> bool:
        """Connect the last vertex back to the first.

        Needs more than 2 vertices; returns whether the polygon is now
        closed.  Closing twice leaves a single wrap-around edge.
        """
        if len(self.vertices) <= 2:
            return False
        ids = self.vertices.ids()
        self.edges.insert(Edge(ids[-1], ids[0]))
        return True

    def reverse(self) -> None:
        """Reverse vertex order and flip the direction of every edge."""
        self.vertices.reverse()
        flipped = [edge.reversed() for edge in self.edges.get_all_owned()]
        self.edges.clear()
        for edge in flipped:
            self.edges.insert(edge)

    def insert_vertex_on_edge(self, point: Point2D, edge: Edge) -> Optional[VertexId]:
        """Split *edge* with a new vertex at *point*.

        Returns the new id, or ``None`` if either endpoint is stale.

        An edge joining the first and last vertex in order always counts as
        the wrap-around edge, so on an open two-vertex path the new vertex
        lands at the tail while the edges run through it.
        """
        from_idx = self.vertices.index_of(edge.from_id)
        to_idx = self.vertices.index_of(edge.to_id)
        if from_idx is None or to_idx is None:
            logger.debug("Ignoring insert on stale edge %s", edge)
            return None

        length = len(self.vertices)
        if {from_idx, to_idx} == {0, length - 1}:
            # Wrap-around edge: the new vertex goes after the tail.
            insert_idx = length
        else:
            insert_idx = min(from_idx, to_idx) + 1

        vertex_id = self.vertices.insert(insert_idx, point)
        self.edges.remove(edge)
        self.edges.insert(Edge(edge.from_id, vertex_id))
        self.edges.insert(Edge(vertex_id, edge.to_id))
        return vertex_id

    def remove_vertex(self, vertex_id: VertexId) -> Tuple[Optional[Point2D], List[Edge]]:
        """Remove a vertex and re-stitch its neighbours.

        Every edge touching the vertex is dropped.  When exactly one
        incoming and one outgoing edge were found, a single edge joining
        the two neighbours is added.  Returns the removed point (``None``
        for a stale id) and the list of added edges.
        """
        point = self.vertices.remove(vertex_id)
        if point is None:
            logger.debug("Ignoring removal of stale vertex %s", vertex_id)
            return None, []

        orphans = list(self.edges.filter_by_vertex(vertex_id))
        new_from: Optional[VertexId] = None
        new_to: Optional[VertexId] = None
        for edge in orphans:
            if edge.to_id == vertex_id:
                new_from = edge.from_id
            elif edge.from_id == vertex_id:
                new_to = edge.to_id
            self.edges.remove(edge)

        if len(orphans) > 2:
            logger.warning(
                "Vertex %s touched %d edges; skipping re-stitch", vertex_id, len(orphans)
            )
            return point, []

        added: List[Edge] = []
        if new_from is not None and new_to is not None and new_from != new_to:
            stitch = Edge(new_from, new_to)
            self.edges.insert(stitch)
            added.append(stitch)
        return point, added

    def move_vertex(self, vertex_id: VertexId, point: Point2D) -> bool:
        """Reposition a vertex without touching topology."""
        return self.vertices.set(vertex_id, point)

    def clear(self) -> int:
        """Drop all vertices and edges; previously issued ids stay retired."""
        self.edges.clear()
        return self.vertices.clear()

    def clear_with_reset(self) -> int:
        """Drop everything and reset id allocation (start a new polygon)."""
        self.edges.clear()
        return self.vertices.clear_with_reset()

    def copy(self) -> "Polygon":
        """Independent copy that keeps the same vertex ids."""
        other = Polygon()
        other.vertices = self.vertices.copy()
        other.edges = EdgeSet(self.edges)
        return other

    # ── Extrusion ───────────────────────────────────────────────────

    def extrude(
        self,
        height: float,
        triangulator: Union[str, Triangulator, None] = None,
    ) -> Optional[MeshBuffer]:
        """Close the polygon and extrude it into a solid.

        Returns ``None`` when there are fewer than 3 vertices.  Raises
        :class:`~polyextrude.errors.TriangulationError` if the ring is
        degenerate; apart from the implicit :meth:`close` the polygon is
        left untouched either way.
        """
        config = ExtrudeConfig(height=height, triangulator=triangulator or DEFAULT_TRIANGULATOR)
        return self.extrude_with_config(config)

    def extrude_with_config(self, config: ExtrudeConfig) -> Optional[MeshBuffer]:
        """Like :meth:`extrude`, with height and triangulator from *config*."""
        if not self.close():
            return None
        return extrude_with_config(self.points(), config)

    # ── Comparison / serialisation ──────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Polygon):
            return NotImplemented
        return (
            self.vertices.ids() == other.vertices.ids()
            and self.points() == other.points()
            and self.edges == other.edges
        )

    def __len__(self) -> int:
        return len(self.vertices)

    def __repr__(self) -> str:
        state = "closed" if self.is_closed() else "open"
        return f"Polygon({len(self.vertices)} vertices, {len(self.edges)} edges, {state})"

    def to_dict(self) -> dict:
        """Serialise with edges as index pairs into vertex order.

        Vertex ids are runtime handles and are not persisted.
        """
        ids = self.vertices.ids()
        position = {vertex_id: i for i, vertex_id in enumerate(ids)}
        edges_payload = sorted(
            [position[e.from_id], position[e.to_id]]
            for e in self.edges
            if e.from_id in position and e.to_id in position
        )
        return {
            "version": self.VERSION,
            "vertices": [[p.x, p.y] for p in self.vertices.iter()],
            "edges": edges_payload,
        }

    @classmethod
    def from_dict(cls, payload: dict) -> "Polygon":
        polygon = cls()
        ids = polygon.vertices.push_many(
            Point2D(float(x), float(y)) for x, y in payload.get("vertices", [])
        )
        for i, j in payload.get("edges", []):
            if not (0 <= i < len(ids) and 0 <= j < len(ids)):
                raise ValueError(
                    f"Edge [{i}, {j}] references a vertex outside 0..{len(ids) - 1}"
                )
            polygon.edges.insert(Edge(ids[i], ids[j]))
        return polygon

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, sort_keys=True)

    @classmethod
    def from_json(cls, json_data: str) -> "Polygon":
        return cls.from_dict(json.loads(json_data))
