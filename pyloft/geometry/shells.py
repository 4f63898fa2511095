# Copyright (c) 2026 Kutay Demir.
# Licensed under the PolyForm Shield License 1.0.0. See LICENSE file for details.

"""Hollow shell primitives for the shell parameter panel."""

import math

import numpy as np

from pyloft.config import geometry_config
from pyloft.geometry.mesh import Mesh, MeshBuilder
from pyloft.params import ShellParams, ShellShape


def _ring(radius: float, segments: int, y: float) -> np.ndarray:
    angles = np.arange(segments) * (2.0 * math.pi / segments)
    ring = np.empty((segments, 3), dtype=float)
    ring[:, 0] = np.cos(angles) * radius
    ring[:, 1] = y
    ring[:, 2] = np.sin(angles) * radius
    return ring


def open_shell(height: float, radius: float, thickness: float, segments: int) -> Mesh:
    """
    Two open-ended tubes centered on the origin: an outer wall facing out
    and an inner wall facing in. No end caps.
    """
    inner_radius = max(geometry_config.MIN_SHELL_INNER_RADIUS, radius - thickness)
    half = height / 2.0

    builder = MeshBuilder()
    bottom = builder.add_vertices(_ring(radius, segments, -half))
    top = builder.add_vertices(_ring(radius, segments, half))
    builder.connect_rings(bottom, top, segments)

    inner_bottom = builder.add_vertices(_ring(inner_radius, segments, -half))
    inner_top = builder.add_vertices(_ring(inner_radius, segments, half))
    builder.connect_rings(inner_bottom, inner_top, segments, reverse=True)
    # Facets stay sharp on the hexagon
    return builder.build(smooth=segments > 6)


def create_shell(params: ShellParams) -> Mesh:
    """Build the shell selected by ``params.shape`` (cylinder when unrecognized)."""
    try:
        shape = ShellShape(params.shape)
    except ValueError:
        shape = ShellShape.CYLINDER

    if shape is ShellShape.HEXAGON:
        return open_shell(params.height, params.radius, params.thickness, 6)
    return open_shell(params.height, params.radius, params.thickness,
                      geometry_config.SHELL_CYLINDER_SEGMENTS)
