"""Indexed triangle mesh buffers.

:class:`MeshBuilder` accumulates per-vertex positions and normals plus
triangle indices, block by block, offsetting indices as blocks are
merged.  :meth:`MeshBuilder.build` hands back an immutable-by-convention
:class:`MeshBuffer` of numpy arrays; the builder keeps no reference to
them afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

import numpy as np

Vec3 = Tuple[float, float, float]


@dataclass(frozen=True)
class MeshBuffer:
    """Renderable triangle list.

    Attributes
    ----------
    positions : ndarray, shape (N, 3), float32
    normals : ndarray, shape (N, 3), float32
        Parallel to *positions*.
    indices : ndarray, shape (M, 3), uint32
        Triangles as index triples into *positions*.
    """

    positions: np.ndarray
    normals: np.ndarray
    indices: np.ndarray

    @property
    def vertex_count(self) -> int:
        return int(self.positions.shape[0])

    @property
    def triangle_count(self) -> int:
        return int(self.indices.shape[0])

    def validate(self) -> list[str]:
        errors: list[str] = []
        if self.positions.ndim != 2 or self.positions.shape[1] != 3:
            errors.append(f"positions has shape {self.positions.shape}, expected (N, 3)")
        if self.normals.shape != self.positions.shape:
            errors.append(
                f"normals shape {self.normals.shape} does not match positions {self.positions.shape}"
            )
        if self.indices.ndim != 2 or self.indices.shape[1] != 3:
            errors.append(f"indices has shape {self.indices.shape}, expected (M, 3)")
        elif self.indices.size and int(self.indices.max()) >= self.vertex_count:
            errors.append(
                f"index {int(self.indices.max())} out of bounds for {self.vertex_count} vertices"
            )
        if self.normals.size:
            lengths = np.linalg.norm(self.normals, axis=1)
            if not np.allclose(lengths, 1.0, atol=1e-5):
                errors.append("normals are not unit length")
        return errors

    def to_dict(self) -> Dict[str, list]:
        return {
            "positions": self.positions.tolist(),
            "normals": self.normals.tolist(),
            "indices": self.indices.tolist(),
        }


class MeshBuilder:
    def __init__(self) -> None:
        self._positions: List[Vec3] = []
        self._normals: List[Vec3] = []
        self._indices: List[Tuple[int, int, int]] = []

    def __len__(self) -> int:
        return len(self._positions)

    def add_vertex(self, position: Vec3, normal: Vec3) -> int:
        """Append a vertex and return its index."""
        self._positions.append(position)
        self._normals.append(normal)
        return len(self._positions) - 1

    def add_triangle(self, i1: int, i2: int, i3: int) -> None:
        self._indices.append((i1, i2, i3))

    def add_quad(self, corners: Sequence[Vec3], normal: Vec3) -> None:
        """Add four fresh vertices and triangles ``(c1, c2, c3)``, ``(c3, c4, c1)``."""
        c1, c2, c3, c4 = (self.add_vertex(corner, normal) for corner in corners)
        self.add_triangle(c1, c2, c3)
        self.add_triangle(c3, c4, c1)

    def add_block(
        self,
        positions: Sequence[Vec3],
        triangles: np.ndarray,
        normal: Vec3,
    ) -> None:
        """Append a block of vertices sharing *normal*.

        *triangles* index into *positions* and are offset by the number
        of vertices already in the builder.
        """
        offset = len(self._positions)
        for position in positions:
            self.add_vertex(position, normal)
        for a, b, c in np.asarray(triangles, dtype=np.int64):
            self.add_triangle(offset + int(a), offset + int(b), offset + int(c))

    def build(self) -> MeshBuffer:
        positions = np.array(self._positions, dtype=np.float32).reshape(-1, 3)
        normals = np.array(self._normals, dtype=np.float32).reshape(-1, 3)
        indices = np.array(self._indices, dtype=np.uint32).reshape(-1, 3)
        self._positions = []
        self._normals = []
        self._indices = []
        return MeshBuffer(positions=positions, normals=normals, indices=indices)
