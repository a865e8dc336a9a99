"""Ordered identity store — a slot arena with an explicit traversal order.

Values live in a dense arena of slots.  Each slot carries a generation
counter that is bumped whenever the slot is freed, so the
:class:`~polyextrude.models.VertexId` handed out for an entry can never
match a later occupant of the same slot.  Stale handles are therefore
detected rather than silently aliased.

Traversal order is kept in a separate list of ids, independent of slot
allocation order, so entries can be inserted anywhere and the whole
sequence can be reversed without touching the arena.

Invariant: every id in the order list refers to an occupied slot, and
every occupied slot's id appears in the order list exactly once.
"""

from __future__ import annotations

import copy
from typing import Generic, Iterable, Iterator, List, Optional, Tuple, TypeVar, cast

from .errors import IndexOutOfRange
from .models import VertexId

V = TypeVar("V")


class OrderedIdentityStore(Generic[V]):
    """Generation-safe id → value mapping with an explicit order."""

    def __init__(self) -> None:
        self._values: List[Optional[V]] = []
        self._generations: List[int] = []
        self._occupied: List[bool] = []
        self._free: List[int] = []
        self._order: List[VertexId] = []

    @classmethod
    def from_values(cls, values: Iterable[V]):
        store = cls()
        store.push_many(values)
        return store

    # ── Arena bookkeeping ───────────────────────────────────────────

    def _allocate(self, value: V) -> VertexId:
        if self._free:
            index = self._free.pop()
            self._values[index] = value
            self._occupied[index] = True
        else:
            index = len(self._values)
            self._values.append(value)
            self._generations.append(0)
            self._occupied.append(True)
        return VertexId(index, self._generations[index])

    def _release(self, index: int) -> V:
        value = self._values[index]
        self._values[index] = None
        self._occupied[index] = False
        self._generations[index] += 1
        self._free.append(index)
        return cast(V, value)

    def _is_live(self, item_id: VertexId) -> bool:
        index = item_id.index
        return (
            0 <= index < len(self._values)
            and self._occupied[index]
            and self._generations[index] == item_id.generation
        )

    def _check_index(self, index: int) -> None:
        if not 0 <= index <= len(self._order):
            raise IndexOutOfRange(index, len(self._order))

    # ── Insertion ───────────────────────────────────────────────────

    def push(self, value: V) -> VertexId:
        """Append *value* at the end of the order and return its id."""
        item_id = self._allocate(value)
        self._order.append(item_id)
        return item_id

    def push_many(self, values: Iterable[V]) -> List[VertexId]:
        return [self.push(value) for value in values]

    def prepend(self, value: V) -> VertexId:
        """Insert *value* at the head of the order and return its id."""
        item_id = self._allocate(value)
        self._order.insert(0, item_id)
        return item_id

    def prepend_many(self, values: Iterable[V]) -> List[VertexId]:
        """Insert *values* at the head, keeping their relative order."""
        return self.insert_many(0, values)

    def insert(self, index: int, value: V) -> VertexId:
        """Insert *value* at order position *index* (``0 <= index <= len``).

        ``index == len`` appends.  Anything else out of range raises
        :class:`IndexOutOfRange` before a slot is allocated.
        """
        self._check_index(index)
        item_id = self._allocate(value)
        self._order.insert(index, item_id)
        return item_id

    def insert_many(self, index: int, values: Iterable[V]) -> List[VertexId]:
        self._check_index(index)
        ids = [self._allocate(value) for value in values]
        self._order[index:index] = ids
        return ids

    # ── Removal ─────────────────────────────────────────────────────

    def remove(self, item_id: VertexId) -> Optional[V]:
        """Remove the entry for *item_id*, returning its value.

        Returns ``None`` for stale or foreign ids.
        """
        if not self._is_live(item_id):
            return None
        self._order.remove(item_id)
        return self._release(item_id.index)

    def remove_many(self, ids: Iterable[VertexId]) -> List[V]:
        removed: List[V] = []
        for item_id in ids:
            if self._is_live(item_id):
                self._order.remove(item_id)
                removed.append(self._release(item_id.index))
        return removed

    def clear(self) -> int:
        """Remove every entry, keeping the id allocator.

        Ids issued before the clear are never issued again.  Returns the
        number of removed entries.
        """
        count = len(self._order)
        for item_id in self._order:
            self._release(item_id.index)
        self._order.clear()
        return count

    def clear_with_reset(self) -> int:
        """Remove every entry and reset the allocator.

        Old ids may be reissued afterwards, so only use this when every
        holder of an old id is discarded too.
        """
        count = len(self._order)
        self._values = []
        self._generations = []
        self._occupied = []
        self._free = []
        self._order = []
        return count

    # ── Lookup ──────────────────────────────────────────────────────

    def get(self, item_id: VertexId) -> Optional[V]:
        if not self._is_live(item_id):
            return None
        return self._values[item_id.index]

    def get_owned(self, item_id: VertexId) -> Optional[V]:
        """Like :meth:`get` but returns a shallow copy of the value."""
        value = self.get(item_id)
        return None if value is None else copy.copy(value)

    def set(self, item_id: VertexId, value: V) -> bool:
        """Replace the value stored for *item_id*; ``False`` if stale."""
        if not self._is_live(item_id):
            return False
        self._values[item_id.index] = value
        return True

    def index_of(self, item_id: VertexId) -> Optional[int]:
        """Position of *item_id* in the order, or ``None``."""
        if not self._is_live(item_id):
            return None
        return self._order.index(item_id)

    def first(self) -> Optional[V]:
        return self.get(self._order[0]) if self._order else None

    def last(self) -> Optional[V]:
        return self.get(self._order[-1]) if self._order else None

    def ids(self) -> List[VertexId]:
        """Copy of the ordered id list."""
        return list(self._order)

    def get_all(self) -> List[V]:
        return list(self.iter())

    def get_all_owned(self) -> List[V]:
        return [copy.copy(value) for value in self.iter()]

    def reverse(self) -> None:
        """Reverse the traversal order; the arena is untouched."""
        self._order.reverse()

    def is_empty(self) -> bool:
        return not self._order

    def copy(self):
        """Copy sharing no state with the original; ids stay valid in both."""
        other = type(self)()
        other._values = list(self._values)
        other._generations = list(self._generations)
        other._occupied = list(self._occupied)
        other._free = list(self._free)
        other._order = list(self._order)
        return other

    # ── Iteration ───────────────────────────────────────────────────

    def iter(self) -> Iterator[V]:
        """Values in order-list order (not allocation order)."""
        for item_id in self._order:
            yield cast(V, self._values[item_id.index])

    def enumerate(self) -> Iterator[Tuple[VertexId, V]]:
        """``(id, value)`` pairs in order-list order."""
        for item_id in self._order:
            yield item_id, cast(V, self._values[item_id.index])

    def __iter__(self) -> Iterator[V]:
        return self.iter()

    def __len__(self) -> int:
        return len(self._order)

    def __contains__(self, item_id: object) -> bool:
        return isinstance(item_id, VertexId) and self._is_live(item_id)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.get_all()!r})"
