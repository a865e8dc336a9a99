from __future__ import annotations

import json
from pathlib import Path
from typing import Union

from .mesh import MeshBuffer
from .polygon import Polygon


PathLike = Union[str, Path]


def load_json(path: PathLike) -> Polygon:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return Polygon.from_dict(data)


def save_json(polygon: Polygon, path: PathLike) -> None:
    Path(path).write_text(polygon.to_json(), encoding="utf-8")


def save_mesh_json(mesh: MeshBuffer, path: PathLike) -> None:
    Path(path).write_text(json.dumps(mesh.to_dict()), encoding="utf-8")


def save_obj(mesh: MeshBuffer, path: PathLike) -> None:
    """Write *mesh* as Wavefront OBJ (``v``/``vn``/``f``, 1-based indices)."""
    lines = ["# polyextrude mesh"]
    lines.extend(f"v {x:.6f} {y:.6f} {z:.6f}" for x, y, z in mesh.positions.tolist())
    lines.extend(f"vn {x:.6f} {y:.6f} {z:.6f}" for x, y, z in mesh.normals.tolist())
    for a, b, c in (mesh.indices + 1).tolist():
        lines.append(f"f {a}//{a} {b}//{b} {c}//{c}")
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
