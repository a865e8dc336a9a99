import sys
from pathlib import Path

ROOT = Path(__file__).parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from polyextrude.editing import DrawingSession
from polyextrude.io import load_json, save_obj
from polyextrude.models import Edge, Point2D


def main() -> None:
    polygon = load_json(ROOT / "examples" / "l_shape.json")
    errors = polygon.validate()
    if errors:
        raise SystemExit("\n".join(errors))

    print("Vertices:", len(polygon.vertices))
    print("Edges:", len(polygon.edges))
    print("Clockwise:", polygon.vertices.is_order_clockwise())

    session = DrawingSession()
    for point in polygon.points():
        session.add_point(point)
    shape = session.add_point(polygon.points()[0])
    if shape is None:
        raise SystemExit("Could not extrude the example polygon")
    print("Triangles:", shape.mesh.triangle_count)

    a, b = shape.polygon.vertices.ids()[:2]
    shape.insert_vertex(Edge(a, b), Point2D(-0.5, 1.0))
    print("Triangles after insert:", shape.mesh.triangle_count)

    out = ROOT / "exports" / "l_shape.obj"
    save_obj(shape.mesh, out)
    print("Saved", out)


if __name__ == "__main__":
    main()
