# Copyright (c) 2026 Kutay Demir.
# Licensed under the PolyForm Shield License 1.0.0. See LICENSE file for details.

"""
Spine-based geometry: rings placed along a drifting, spiralling centerline.

This is an alternative to the cross-section pipeline. Every retained spine
point becomes a horizontal ring and consecutive rings are stitched the same
way the loft stitches its body.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from pyloft.config import geometry_config
from pyloft.geometry.mesh import Mesh, MeshBuilder

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpinePoint:
    """One ring anchor along the spine."""
    position: Tuple[float, float, float]
    radius: float
    length: float
    rotation: float  # degrees about the vertical axis


def generate_spine_points(
    steps: int = 20,
    start_radius: float = 15.0,
    end_radius: float = 5.0,
    total_height: float = 200.0,
    spiral_amount: float = 0.0,
    drift_x: float = 0.0,
    drift_y: float = 0.0,
    segment_length: float = 20.0,
    radius_variation: float = 0.0,
    remove_frequency: int = 0,
    seed: Optional[int] = None,
) -> List[SpinePoint]:
    """
    Walk ``steps`` positions up the spine and return the retained points.

    The radius interpolates linearly from ``start_radius`` to
    ``end_radius``; ``radius_variation`` (0..1) perturbs it by up to
    ``variation * radius / 2`` either way, drawn from a generator seeded with
    ``seed``. Every point whose index is a multiple of ``remove_frequency``
    is left out (0 disables removal). The walk still advances past removed
    points, so they leave a longer segment rather than a shorter body.
    """
    steps = int(steps)
    remove_frequency = int(remove_frequency)
    rng = np.random.default_rng(seed) if radius_variation > 0 else None

    points: List[SpinePoint] = []
    x = y = z = 0.0
    angle = 0.0
    rise = total_height / steps if steps > 0 else 0.0

    for i in range(steps):
        t = i / (steps - 1) if steps > 1 else 0.0

        if not (remove_frequency > 0 and i % remove_frequency == 0):
            base = start_radius + (end_radius - start_radius) * t
            variation = (rng.random() - 0.5) * radius_variation * base if rng is not None else 0.0
            points.append(SpinePoint(
                position=(x, y, z),
                radius=max(geometry_config.MIN_SPINE_RADIUS, base + variation),
                length=segment_length,
                rotation=angle,
            ))

        angle += spiral_amount
        heading = math.radians(angle)
        x += drift_x + math.cos(heading) * segment_length * 0.1
        y += rise
        z += drift_y + math.sin(heading) * segment_length * 0.1

    return points


def spine_ring(point: SpinePoint, segments: Optional[int] = None) -> np.ndarray:
    """Horizontal ring of ``segments`` vertices around a spine point, CCW seen from +Y."""
    if segments is None:
        segments = geometry_config.SPINE_RING_SEGMENTS
    angles = np.arange(segments) * (2.0 * math.pi / segments) + math.radians(point.rotation)
    px, py, pz = point.position
    ring = np.empty((segments, 3), dtype=float)
    ring[:, 0] = px + np.cos(angles) * point.radius
    ring[:, 1] = py
    ring[:, 2] = pz + np.sin(angles) * point.radius
    return ring


def create_spine_mesh(points: Sequence[SpinePoint], segments: Optional[int] = None,
                      smooth_normals: bool = True) -> Mesh:
    """Loft consecutive spine rings into a mesh (empty for fewer than two points)."""
    if len(points) < 2:
        return Mesh.empty()
    if segments is None:
        segments = geometry_config.SPINE_RING_SEGMENTS

    builder = MeshBuilder()
    offsets = [builder.add_vertices(spine_ring(p, segments)) for p in points]
    for lower, upper in zip(offsets, offsets[1:]):
        builder.connect_rings(lower, upper, segments)

    mesh = builder.build(smooth=smooth_normals)
    logger.debug("Spine of %d rings produced %d triangles", len(points), mesh.triangle_count)
    return mesh
