# Copyright (c) 2026 Kutay Demir.
# Licensed under the PolyForm Shield License 1.0.0. See LICENSE file for details.

"""Value source nodes."""

from pyloft.geometry.pattern import ShapeKind
from pyloft.nodes.registry import register_node
from pyloft.nodes.types import DataKind, NodePort

INPUT_COLOR = "#4CAF50"


@register_node(
    type="number", name="Number", category="Input",
    inputs=[NodePort("value", "Value", DataKind.NUMBER, 0.0)],
    outputs=[NodePort("value", "Value", DataKind.NUMBER, 0.0)],
    description="A numeric value", color=INPUT_COLOR,
)
def number_node(inputs, context):
    value = inputs.get("value")
    return {"value": 0.0 if value is None else value}


@register_node(
    type="boolean", name="Boolean", category="Input",
    inputs=[NodePort("value", "Value", DataKind.BOOLEAN, False)],
    outputs=[NodePort("value", "Value", DataKind.BOOLEAN, False)],
    description="True or false value", color=INPUT_COLOR,
)
def boolean_node(inputs, context):
    value = inputs.get("value")
    return {"value": False if value is None else value}


@register_node(
    type="shapeSelector", name="Shape", category="Input",
    inputs=[NodePort("shape", "Shape", DataKind.SHAPE_KIND, ShapeKind.CIRCLE)],
    outputs=[NodePort("shape", "Shape", DataKind.SHAPE_KIND, ShapeKind.CIRCLE)],
    description="Select a 2D shape type", color=INPUT_COLOR,
)
def shape_selector_node(inputs, context):
    return {"shape": inputs.get("shape") or ShapeKind.CIRCLE}


@register_node(
    type="string", name="Text", category="Input",
    inputs=[NodePort("value", "Value", DataKind.STRING, "")],
    outputs=[NodePort("value", "Value", DataKind.STRING, "")],
    description="A text value, e.g. an easing name", color=INPUT_COLOR,
)
def string_node(inputs, context):
    value = inputs.get("value")
    return {"value": "" if value is None else value}
