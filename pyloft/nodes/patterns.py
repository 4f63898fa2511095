# Copyright (c) 2026 Kutay Demir.
# Licensed under the PolyForm Shield License 1.0.0. See LICENSE file for details.

"""Pattern and spine generator nodes."""

from pyloft.geometry.pattern import ShapeKind, generate_pattern
from pyloft.geometry.spine import create_spine_mesh, generate_spine_points
from pyloft.nodes.registry import register_node
from pyloft.nodes.types import DataKind, NodePort

PATTERN_COLOR = "#2196F3"


@register_node(
    type="pattern2D", name="Pattern 2D", category="Pattern",
    inputs=[
        NodePort("shape", "Shape", DataKind.SHAPE_KIND),
        NodePort("steps", "Steps", DataKind.NUMBER, 10),
        NodePort("size", "Size", DataKind.NUMBER, 20),
        NodePort("scaleStart", "Scale Start", DataKind.NUMBER, 1),
        NodePort("scaleFactor", "Scale Factor", DataKind.NUMBER, 1.1),
        NodePort("rotationStart", "Rotation Start", DataKind.NUMBER, 0),
        NodePort("rotationStep", "Rotation Step", DataKind.NUMBER, 15),
        NodePort("driftX", "Drift X", DataKind.NUMBER, 5),
        NodePort("driftY", "Drift Y", DataKind.NUMBER, 5),
        NodePort("spiralAmount", "Spiral", DataKind.NUMBER, 0),
        NodePort("starPoints", "Star Points", DataKind.NUMBER, 5),
        NodePort("crossThickness", "Cross Thickness", DataKind.NUMBER, 0.2),
    ],
    outputs=[NodePort("pattern", "Pattern", DataKind.PATTERN)],
    description="Generate a 2D pattern of shapes", color=PATTERN_COLOR,
)
def pattern_2d_node(inputs, context):
    pattern = generate_pattern(
        shape=inputs["shape"] or ShapeKind.CIRCLE,
        steps=int(inputs["steps"]),
        size=inputs["size"],
        scale_start=inputs["scaleStart"],
        scale_factor=inputs["scaleFactor"],
        rotation_start=inputs["rotationStart"],
        rotation_step=inputs["rotationStep"],
        drift_x=inputs["driftX"],
        drift_y=inputs["driftY"],
        spiral_amount=inputs["spiralAmount"],
        star_points=int(inputs["starPoints"]),
        cross_thickness=inputs["crossThickness"],
    )
    return {"pattern": pattern}


@register_node(
    type="spine", name="Spine", category="Pattern",
    inputs=[
        NodePort("steps", "Steps", DataKind.NUMBER, 20),
        NodePort("startRadius", "Start Radius", DataKind.NUMBER, 15),
        NodePort("endRadius", "End Radius", DataKind.NUMBER, 5),
        NodePort("height", "Height", DataKind.NUMBER, 200),
        NodePort("spiralAmount", "Spiral", DataKind.NUMBER, 0),
        NodePort("driftX", "Drift X", DataKind.NUMBER, 0),
        NodePort("driftY", "Drift Y", DataKind.NUMBER, 0),
        NodePort("segmentLength", "Segment Length", DataKind.NUMBER, 20),
        NodePort("radiusVariation", "Radius Variation", DataKind.NUMBER, 0),
        NodePort("removeFrequency", "Remove Frequency", DataKind.NUMBER, 0),
        NodePort("seed", "Seed", DataKind.NUMBER),
    ],
    outputs=[NodePort("geometry", "Geometry", DataKind.GEOMETRY)],
    description="Generate a spine-based geometry", color=PATTERN_COLOR,
)
def spine_node(inputs, context):
    seed = inputs["seed"]
    points = generate_spine_points(
        steps=int(inputs["steps"]),
        start_radius=inputs["startRadius"],
        end_radius=inputs["endRadius"],
        total_height=inputs["height"],
        spiral_amount=inputs["spiralAmount"],
        drift_x=inputs["driftX"],
        drift_y=inputs["driftY"],
        segment_length=inputs["segmentLength"],
        radius_variation=inputs["radiusVariation"],
        remove_frequency=int(inputs["removeFrequency"]),
        seed=None if seed is None else int(seed),
    )
    if len(points) < 2:
        context.warn(f"Spine kept {len(points)} ring(s); nothing to loft.")
    return {"geometry": create_spine_mesh(points)}
