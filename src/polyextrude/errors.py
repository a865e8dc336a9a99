"""Exception hierarchy for polyextrude.

Stale ids are never exceptions: lookups return ``None`` instead.  The
classes below cover programmer errors and extrusion failures only.
"""

from __future__ import annotations


class PolyExtrudeError(Exception):
    """Base class for all polyextrude errors."""


class IndexOutOfRange(IndexError, PolyExtrudeError):
    """An order position outside ``[0, len]`` was passed to an insert."""

    def __init__(self, index: int, length: int) -> None:
        super().__init__(f"Index {index} out of range for store of length {length}")
        self.index = index
        self.length = length


class ExtrusionError(PolyExtrudeError):
    """Mesh generation failed for a single extrude call."""


class TriangulationError(ExtrusionError):
    """The triangulator rejected the ring (degenerate or too small)."""
