# Copyright (c) 2026 Kutay Demir.
# Licensed under the PolyForm Shield License 1.0.0. See LICENSE file for details.

"""Nodes that reshape pattern data on its way to the loft."""

from pyloft.config import geometry_config
from pyloft.geometry.cross_sections import generate_cross_sections, pattern_to_shapes
from pyloft.geometry.easing import get_easing_function
from pyloft.geometry.holes import add_holes, fixed_scale_hole_shape, frequency_hole_pattern
from pyloft.nodes.registry import register_node
from pyloft.nodes.types import DataKind, NodePort

TRANSFORM_COLOR = "#FF9800"


@register_node(
    type="patternToShapes", name="Pattern to Shapes", category="Transform",
    inputs=[
        NodePort("pattern", "Pattern", DataKind.PATTERN),
        NodePort("removeShapes", "Remove Shapes", DataKind.BOOLEAN, False),
        NodePort("removeFrequency", "Remove Frequency", DataKind.NUMBER, 2),
        NodePort("inverted", "Inverted", DataKind.BOOLEAN, False),
    ],
    outputs=[NodePort("shapes", "Shapes", DataKind.POINT_2D_LIST)],
    description="Convert pattern instances to interpolatable shapes", color=TRANSFORM_COLOR,
)
def pattern_to_shapes_node(inputs, context):
    if inputs["pattern"] is None:
        return {"shapes": []}
    shapes = pattern_to_shapes(
        inputs["pattern"],
        remove_shapes=inputs["removeShapes"],
        remove_frequency=int(inputs["removeFrequency"]),
        inverted=inputs["inverted"],
    )
    return {"shapes": shapes}


@register_node(
    type="crossSections", name="Cross Sections", category="Transform",
    inputs=[
        NodePort("shapes", "Shapes", DataKind.POINT_2D_LIST),
        NodePort("normalize", "Normalize", DataKind.BOOLEAN, False),
        NodePort("easing", "Easing", DataKind.STRING, "linear"),
        NodePort("sortByArea", "Sort by Area", DataKind.BOOLEAN, False),
    ],
    outputs=[NodePort("crossSections", "Cross Sections", DataKind.CROSS_SECTION_SET)],
    description="Generate cross sections from shapes", color=TRANSFORM_COLOR,
)
def cross_sections_node(inputs, context):
    if inputs["shapes"] is None:
        return {"crossSections": []}
    easing = get_easing_function(inputs["easing"]) if inputs["easing"] else None
    sections = generate_cross_sections(
        inputs["shapes"],
        easing=easing,
        normalize_vertex_count=inputs["normalize"],
        preserve_order=not inputs["sortByArea"],
    )
    return {"crossSections": sections}


@register_node(
    type="addHoles", name="Add Holes", category="Transform",
    inputs=[
        NodePort("crossSections", "Cross Sections", DataKind.CROSS_SECTION_SET),
        NodePort("frequency", "Frequency", DataKind.NUMBER, 2),
        NodePort("scale", "Scale", DataKind.NUMBER, geometry_config.DEFAULT_HOLE_SCALE),
    ],
    outputs=[NodePort("crossSections", "Cross Sections", DataKind.CROSS_SECTION_SET)],
    description="Add holes to cross sections", color=TRANSFORM_COLOR,
)
def add_holes_node(inputs, context):
    if inputs["crossSections"] is None:
        return {"crossSections": []}
    sections = add_holes(
        inputs["crossSections"],
        hole_pattern=frequency_hole_pattern(int(inputs["frequency"])),
        hole_shape=fixed_scale_hole_shape(inputs["scale"]),
    )
    return {"crossSections": sections}
