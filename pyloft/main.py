# Copyright (c) 2026 Kutay Demir.
# Licensed under the PolyForm Shield License 1.0.0. See LICENSE file for details.

"""
Command-line entry point for pyloft.

    pyloft evaluate GRAPH.json [--export OUT.stl] [--validate] [--log-level LEVEL]
    pyloft nodes
    pyloft body [--shape SHAPE] [--steps N] [--holes] [--spine] [--export OUT.stl]
    pyloft shell [--shape cylinder|hexagon] [--export OUT.stl]
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from pyloft.config import setup_logging

logger = logging.getLogger(__name__)


def _print_mesh(label: str, mesh) -> None:
    low, high = mesh.bounds()
    print(f"{label}: {mesh.vertex_count} vertices, {mesh.triangle_count} triangles, "
          f"bounds {low.round(3).tolist()} .. {high.round(3).tolist()}")


def _export(path: Optional[str], mesh) -> int:
    from pyloft.io_manager import MeshExporter

    if not path:
        return 0
    try:
        MeshExporter.export_file(path, mesh)
    except (OSError, ValueError) as e:
        logger.error(f"Export failed: {e}")
        return 1
    print(f"Mesh written to {path}")
    return 0


def _cmd_evaluate(args: argparse.Namespace) -> int:
    from pyloft.graph import GraphEvaluator, GraphValidator
    from pyloft.geometry.mesh import merge_meshes
    from pyloft.io_manager import load_graph

    try:
        graph = load_graph(args.graph)
    except (OSError, ValueError) as e:
        logger.error(f"Could not load graph: {e}")
        return 2

    if args.validate:
        report = GraphValidator().validate(graph)
        for message in report["warnings"]:
            print(f"warning: {message}")
        for message in report["errors"]:
            print(f"error: {message}")
        if report["errors"]:
            return 1

    evaluator = GraphEvaluator(graph)
    meshes = evaluator.get_mesh_outputs()
    for diagnostic in evaluator.diagnostics:
        print(f"{diagnostic.kind.value}: [{diagnostic.node_id}] {diagnostic.message}")

    for index, mesh in enumerate(meshes):
        _print_mesh(f"mesh {index}", mesh)
    if not meshes:
        print("no geometry outputs")

    return _export(args.export, merge_meshes(meshes))


def _cmd_nodes(args: argparse.Namespace) -> int:
    from pyloft.nodes import get_nodes_by_category

    for category, definitions in get_nodes_by_category().items():
        print(category)
        for definition in definitions:
            inputs = ", ".join(port.id for port in definition.inputs)
            outputs = ", ".join(port.id for port in definition.outputs)
            print(f"  {definition.type:<16} {definition.name:<18} ({inputs}) -> ({outputs})")
    return 0


def _cmd_body(args: argparse.Namespace) -> int:
    from pyloft.geometry.fractal_body import build_body_from_params
    from pyloft.geometry.pattern import ShapeKind
    from pyloft.params import PatternParams

    params = PatternParams(
        shape=ShapeKind(args.shape),
        steps=args.steps,
        height=args.height,
        twist=args.twist,
        taper=args.taper,
        easing=args.easing,
        normalize=args.normalize,
        enable_holes=args.holes,
        remove_shapes=args.remove_frequency > 0,
        remove_frequency=max(args.remove_frequency, 1),
        use_spine_mode=args.spine,
    )
    warnings = []
    try:
        mesh = build_body_from_params(params, on_warning=warnings.append, seed=args.seed)
    except ValueError as e:
        logger.error(f"Could not build body: {e}")
        return 1
    for message in warnings:
        print(f"warning: {message}")
    _print_mesh("body", mesh)
    return _export(args.export, mesh)


def _cmd_shell(args: argparse.Namespace) -> int:
    from pyloft.geometry.shells import create_shell
    from pyloft.params import ShellParams, ShellShape

    mesh = create_shell(ShellParams(shape=ShellShape(args.shape), height=args.height,
                                    radius=args.radius, thickness=args.thickness))
    _print_mesh("shell", mesh)
    return _export(args.export, mesh)


def build_parser() -> argparse.ArgumentParser:
    from pyloft.geometry.easing import EASING_FUNCTIONS
    from pyloft.geometry.pattern import ShapeKind
    from pyloft.params import ShellShape

    parser = argparse.ArgumentParser(prog="pyloft", description="Evaluate pyloft node graphs.")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        help="Logging verbosity (default: WARNING)")
    sub = parser.add_subparsers(dest="command", required=True)

    evaluate = sub.add_parser("evaluate", help="Evaluate a graph document")
    evaluate.add_argument("graph", help="Path to the graph JSON document")
    evaluate.add_argument("--export", help="Write the merged mesh to this file (STL, OBJ, PLY, VTK, ...)")
    evaluate.add_argument("--validate", action="store_true",
                          help="Run static validation first and stop on errors")
    evaluate.set_defaults(handler=_cmd_evaluate)

    nodes = sub.add_parser("nodes", help="List the available node types")
    nodes.set_defaults(handler=_cmd_nodes)

    body = sub.add_parser("body", help="Build a lofted body straight from pattern parameters")
    body.add_argument("--shape", default=ShapeKind.CIRCLE.value, choices=[k.value for k in ShapeKind])
    body.add_argument("--steps", type=int, default=10)
    body.add_argument("--height", type=float, default=200.0)
    body.add_argument("--twist", type=float, default=0.0, help="Tip rotation in degrees")
    body.add_argument("--taper", type=float, default=0.0, help="Size reduction at the tip (0..1)")
    body.add_argument("--easing", default="linear", choices=sorted(EASING_FUNCTIONS))
    body.add_argument("--normalize", action="store_true", help="Resample outlines to one vertex count")
    body.add_argument("--holes", action="store_true", help="Add holes to every other section")
    body.add_argument("--remove-frequency", type=int, default=0,
                      help="Open every N-th kept section (0 keeps all)")
    body.add_argument("--spine", action="store_true", help="Use the spine generator instead")
    body.add_argument("--seed", type=int, help="Seed for spine radius variation")
    body.add_argument("--export", help="Write the mesh to this file")
    body.set_defaults(handler=_cmd_body)

    shell = sub.add_parser("shell", help="Build an open hollow shell")
    shell.add_argument("--shape", default=ShellShape.CYLINDER.value, choices=[s.value for s in ShellShape])
    shell.add_argument("--height", type=float, default=200.0)
    shell.add_argument("--radius", type=float, default=50.0)
    shell.add_argument("--thickness", type=float, default=2.0)
    shell.add_argument("--export", help="Write the mesh to this file")
    shell.set_defaults(handler=_cmd_shell)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=getattr(logging, args.log_level))
    return args.handler(args)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
