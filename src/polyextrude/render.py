from __future__ import annotations

from pathlib import Path

from .polygon import Polygon


def render_png(
    polygon: Polygon,
    output_path: str | Path,
    face_alpha: float = 0.15,
    edge_color: str = "#2b2b2b",
    face_color: str = "#5aa9e6",
    vertex_color: str = "#d1495b",
    vertex_size: float = 16.0,
    padding: float = 0.5,
    dpi: int = 150,
    show_direction: bool = True,
) -> None:
    """Render a polygon outline, its vertices and edge directions to PNG.

    Requires matplotlib; imported lazily to keep core package lightweight.
    """
    try:
        import matplotlib

        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        from matplotlib.patches import Polygon as PolygonPatch
    except ImportError as exc:  # pragma: no cover - requires optional dep
        raise RuntimeError(
            "matplotlib is required for rendering. Install with `pip install matplotlib`."
        ) from exc

    points = polygon.points()
    if not points:
        raise ValueError("Cannot render a polygon without vertices.")

    fig, ax = plt.subplots()

    if polygon.is_closed():
        patch = PolygonPatch(
            [p.as_tuple() for p in points], closed=True, facecolor=face_color, alpha=face_alpha
        )
        ax.add_patch(patch)

    for edge in sorted(polygon.edges):
        start = polygon.vertices.get(edge.from_id)
        end = polygon.vertices.get(edge.to_id)
        if start is None or end is None:
            continue
        ax.plot([start.x, end.x], [start.y, end.y], color=edge_color, linewidth=1.0)
        if show_direction:
            _draw_direction(ax, start.as_tuple(), end.as_tuple(), edge_color)

    xs = [p.x for p in points]
    ys = [p.y for p in points]
    ax.scatter(xs, ys, s=vertex_size, c=vertex_color, zorder=3)

    ax.set_aspect("equal", "box")
    ax.set_xlim(min(xs) - padding, max(xs) + padding)
    ax.set_ylim(min(ys) - padding, max(ys) + padding)
    ax.axis("off")

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=dpi, bbox_inches="tight", pad_inches=0)
    plt.close(fig)


def _draw_direction(ax, start: tuple[float, float], end: tuple[float, float], color: str) -> None:
    mx = (start[0] + end[0]) / 2
    my = (start[1] + end[1]) / 2
    dx = (end[0] - start[0]) * 0.1
    dy = (end[1] - start[1]) * 0.1
    ax.annotate(
        "",
        xy=(mx + dx, my + dy),
        xytext=(mx - dx, my - dy),
        arrowprops={"arrowstyle": "->", "color": color, "linewidth": 1.0},
    )
