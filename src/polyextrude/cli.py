"""polyextrude command-line interface."""

from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from .errors import ExtrusionError
from .extrude import ExtrudeConfig
from .io import load_json, save_json, save_mesh_json, save_obj
from .polygon import Polygon
from .triangulate import DEFAULT_TRIANGULATOR, TRIANGULATORS

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="polyextrude CLI")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    validate = sub.add_parser("validate", help="Validate a polygon")
    validate.add_argument("--in", dest="input_path", required=True)
    validate.add_argument("--out", dest="output_path")

    extrude = sub.add_parser("extrude", help="Extrude a polygon into a solid mesh")
    extrude.add_argument("--in", dest="input_path", required=True)
    extrude.add_argument("--out", dest="output_path", required=True)
    extrude.add_argument("--height", type=float, default=2.0)
    extrude.add_argument("--format", choices=["obj", "json"], default="obj")
    extrude.add_argument(
        "--triangulator",
        choices=sorted(TRIANGULATORS),
        default=DEFAULT_TRIANGULATOR,
    )
    extrude.add_argument(
        "--keep-winding",
        action="store_true",
        help="Do not reverse counter-clockwise input before extruding",
    )

    render = sub.add_parser("render", help="Render a polygon to PNG")
    render.add_argument("--in", dest="input_path", required=True)
    render.add_argument("--out", dest="output_path", required=True)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "validate":
        polygon = _load_or_exit(args.input_path)
        errors = polygon.validate()
        if errors:
            for error in errors:
                print(error)
            raise SystemExit(1)
        if args.output_path:
            save_json(polygon, args.output_path)
        print("OK")

    elif args.command == "extrude":
        _cmd_extrude(args)

    elif args.command == "render":
        from .render import render_png
        polygon = _load_or_exit(args.input_path)
        render_png(polygon, args.output_path)
        print(f"Saved {args.output_path}")


def _load_or_exit(path) -> Polygon:
    try:
        return load_json(path)
    except ValueError as exc:
        logger.error("Could not load %s: %s", path, exc)
        raise SystemExit(1)


def _cmd_extrude(args) -> None:
    polygon = _load_or_exit(args.input_path)
    config = ExtrudeConfig(height=args.height, triangulator=args.triangulator)
    if not args.keep_winding and polygon.vertices.is_order_counterclockwise():
        logger.debug("Reversing counter-clockwise polygon before extrusion")
        polygon.reverse()

    try:
        mesh = polygon.extrude_with_config(config)
    except (ExtrusionError, ValueError) as exc:
        logger.error("Extrusion failed: %s", exc)
        raise SystemExit(1)
    if mesh is None:
        logger.error("Polygon has %d vertices; at least 3 are needed", len(polygon))
        raise SystemExit(1)

    if args.format == "obj":
        save_obj(mesh, args.output_path)
    else:
        save_mesh_json(mesh, args.output_path)
    print(
        f"Saved {args.output_path} "
        f"({mesh.vertex_count} vertices, {mesh.triangle_count} triangles)"
    )


if __name__ == "__main__":
    main()
