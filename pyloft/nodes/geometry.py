# Copyright (c) 2026 Kutay Demir.
# Licensed under the PolyForm Shield License 1.0.0. See LICENSE file for details.

"""Mesh-producing nodes."""

from pyloft.geometry.loft import loft_cross_sections
from pyloft.geometry.mesh import Mesh
from pyloft.nodes.registry import register_node
from pyloft.nodes.types import DataKind, NodePort

GEOMETRY_COLOR = "#9C27B0"


@register_node(
    type="loft", name="Loft", category="Geometry",
    inputs=[
        NodePort("crossSections", "Cross Sections", DataKind.CROSS_SECTION_SET),
        NodePort("height", "Height", DataKind.NUMBER, 200),
        NodePort("twist", "Twist", DataKind.NUMBER, 0),
        NodePort("taper", "Taper", DataKind.NUMBER, 0),
    ],
    outputs=[NodePort("geometry", "Geometry", DataKind.GEOMETRY)],
    description="Loft cross sections into 3D geometry", color=GEOMETRY_COLOR,
)
def loft_node(inputs, context):
    if inputs["crossSections"] is None:
        return {"geometry": Mesh.empty()}
    mesh = loft_cross_sections(
        inputs["crossSections"],
        height=inputs["height"],
        twist=inputs["twist"],
        taper=inputs["taper"],
        smooth_normals=True,
        on_warning=context.warn,
    )
    return {"geometry": mesh}
