from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Point2D:
    x: float
    y: float

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)

    def distance_squared(self, other: "Point2D") -> float:
        dx = other.x - self.x
        dy = other.y - self.y
        return dx * dx + dy * dy


@dataclass(frozen=True, order=True)
class VertexId:
    """Opaque generation-tagged handle into an :class:`OrderedIdentityStore`.

    *index* is the arena slot, *generation* is bumped every time the slot
    is freed, so a handle to a removed entry never matches a new one.
    """

    index: int
    generation: int

    def __repr__(self) -> str:
        return f"VertexId({self.index}v{self.generation})"


@dataclass(frozen=True, order=True)
class Edge:
    """Directed polygon edge connecting ``from_id`` to ``to_id``.

    ``Edge(a, b)`` and ``Edge(b, a)`` are distinct values.
    """

    from_id: VertexId
    to_id: VertexId

    def reversed(self) -> "Edge":
        return Edge(self.to_id, self.from_id)

    def touches(self, vertex_id: VertexId) -> bool:
        return self.from_id == vertex_id or self.to_id == vertex_id
