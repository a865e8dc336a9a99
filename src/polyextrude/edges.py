from __future__ import annotations

from typing import Iterable, Iterator, List, Set

from .models import Edge, VertexId


class EdgeSet:
    """Unordered set of directed :class:`Edge` values."""

    def __init__(self, edges: Iterable[Edge] = ()) -> None:
        self._edges: Set[Edge] = set(edges)

    @classmethod
    def from_edges(cls, edges: Iterable[Edge]) -> "EdgeSet":
        return cls(edges)

    def insert(self, edge: Edge) -> bool:
        """Add *edge*; True if it was not present before."""
        if edge in self._edges:
            return False
        self._edges.add(edge)
        return True

    def remove(self, edge: Edge) -> bool:
        """Remove *edge*; True if it was present."""
        if edge not in self._edges:
            return False
        self._edges.remove(edge)
        return True

    def contains(self, edge: Edge) -> bool:
        return edge in self._edges

    def filter_by_vertex(self, vertex_id: VertexId) -> Iterator[Edge]:
        """Edges with *vertex_id* at either endpoint."""
        return (edge for edge in self._edges if edge.touches(vertex_id))

    def get_all_owned(self) -> List[Edge]:
        return list(self._edges)

    def clear(self) -> None:
        self._edges.clear()

    def is_empty(self) -> bool:
        return not self._edges

    def __contains__(self, edge: object) -> bool:
        return edge in self._edges

    def __iter__(self) -> Iterator[Edge]:
        return iter(self._edges)

    def __len__(self) -> int:
        return len(self._edges)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, EdgeSet):
            return self._edges == other._edges
        if isinstance(other, (set, frozenset)):
            return self._edges == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"EdgeSet({sorted(self._edges)!r})"
