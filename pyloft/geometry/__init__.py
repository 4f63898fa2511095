# Copyright (c) 2026 Kutay Demir.
# Licensed under the PolyForm Shield License 1.0.0. See LICENSE file for details.

"""
Geometry pipeline.

Structure:
    geometry/
    ├── easing.py          # t remapping curves
    ├── polygon.py         # 2D polygon helpers
    ├── pattern.py         # Shape placement pattern + primitive outlines
    ├── resample.py        # Arc-length resampling
    ├── cross_sections.py  # Outlines -> cross-sections
    ├── holes.py           # Inner boundaries
    ├── mesh.py            # Mesh value and builder
    ├── loft.py            # Cross-sections -> mesh
    ├── spine.py           # Spine rings -> mesh
    ├── shells.py          # Hollow cylinder / hexagon shells
    └── fractal_body.py    # Direct pattern-panel pipeline
"""

from pyloft.geometry.cross_sections import CrossSection, generate_cross_sections, pattern_to_shapes
from pyloft.geometry.easing import EASING_FUNCTIONS, get_easing_function
from pyloft.geometry.holes import add_holes
from pyloft.geometry.loft import loft_cross_sections
from pyloft.geometry.mesh import Mesh, MeshBuilder, merge_meshes
from pyloft.geometry.pattern import ShapeInstance, ShapeKind, generate_pattern, shape_vertices
from pyloft.geometry.polygon import Point2D
from pyloft.geometry.resample import resample_polygon
from pyloft.geometry.spine import SpinePoint, create_spine_mesh, generate_spine_points

__all__ = [
    "CrossSection",
    "EASING_FUNCTIONS",
    "Mesh",
    "MeshBuilder",
    "Point2D",
    "ShapeInstance",
    "ShapeKind",
    "SpinePoint",
    "add_holes",
    "create_spine_mesh",
    "generate_cross_sections",
    "generate_pattern",
    "generate_spine_points",
    "get_easing_function",
    "loft_cross_sections",
    "merge_meshes",
    "pattern_to_shapes",
    "resample_polygon",
    "shape_vertices",
]
