"""polyextrude — editable 2D polygons extruded into 3D solids.

Public API is organised into layers:

- **Core** — models, ordered identity store, vertex/edge sets, polygon
- **Extrusion** — triangulators, extrusion pipeline, mesh buffers
- **Editing** — headless create/edit session
- **I/O** — JSON polygons, OBJ/JSON meshes
- **Rendering** — PNG outline plots (requires matplotlib)
"""

# ── Core ────────────────────────────────────────────────────────────
from .errors import (
    PolyExtrudeError,
    IndexOutOfRange,
    ExtrusionError,
    TriangulationError,
)
from .models import Point2D, VertexId, Edge
from .ordered_store import OrderedIdentityStore
from .vertices import VertexSet
from .edges import EdgeSet
from .polygon import Polygon

# ── Extrusion ───────────────────────────────────────────────────────
from .triangulate import (
    Triangulator,
    EarcutTriangulator,
    EarClippingTriangulator,
    TRIANGULATORS,
    get_triangulator,
)
from .mesh import MeshBuffer, MeshBuilder
from .extrude import (
    DEFAULT_EXTRUDE,
    ExtrudeConfig,
    ExtrusionPipeline,
    extrude_ring,
    extrude_with_config,
)

# ── Editing ─────────────────────────────────────────────────────────
from .editing import DrawingSettings, DrawingSession, Shape, DEFAULT_SETTINGS

# ── I/O ─────────────────────────────────────────────────────────────
from .io import load_json, save_json, save_mesh_json, save_obj

__all__ = [
    # Core
    "PolyExtrudeError",
    "IndexOutOfRange",
    "ExtrusionError",
    "TriangulationError",
    "Point2D",
    "VertexId",
    "Edge",
    "OrderedIdentityStore",
    "VertexSet",
    "EdgeSet",
    "Polygon",
    # Extrusion
    "Triangulator",
    "EarcutTriangulator",
    "EarClippingTriangulator",
    "TRIANGULATORS",
    "get_triangulator",
    "MeshBuffer",
    "MeshBuilder",
    "ExtrudeConfig",
    "DEFAULT_EXTRUDE",
    "ExtrusionPipeline",
    "extrude_ring",
    "extrude_with_config",
    # Editing
    "DrawingSettings",
    "DrawingSession",
    "Shape",
    "DEFAULT_SETTINGS",
    # I/O
    "load_json",
    "save_json",
    "save_mesh_json",
    "save_obj",
]
