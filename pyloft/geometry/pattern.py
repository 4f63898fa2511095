# Copyright (c) 2026 Kutay Demir.
# Licensed under the PolyForm Shield License 1.0.0. See LICENSE file for details.

"""
Iterative 2D pattern generation.

A pattern is an ordered list of ShapeInstance placements. Each step emits
the current state and then drifts, rotates, scales and spirals it, so the
pattern reads as a growth sequence that later becomes a stack of
cross-sections.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

import numpy as np

from pyloft.config import geometry_config
from pyloft.geometry.polygon import Point2D, ensure_ccw, rotate


class ShapeKind(str, Enum):
    """Primitive polygon generators available to the pattern generator."""
    CIRCLE = "circle"
    SQUARE = "square"
    TRIANGLE = "triangle"
    HEXAGON = "hexagon"
    STAR = "star"
    CROSS = "cross"


@dataclass(frozen=True)
class ShapeInstance:
    """One placement of a primitive shape."""
    center: Point2D
    rotation: float  # radians
    scale: float
    shape: ShapeKind
    size: float
    star_points: int = 5
    cross_thickness: float = 0.2

    def vertices(self, segments: Optional[int] = None) -> np.ndarray:
        return shape_vertices(self, segments)


def generate_pattern(
    shape: ShapeKind = ShapeKind.CIRCLE,
    steps: int = 10,
    size: float = 20.0,
    scale_start: float = 1.0,
    scale_factor: float = 1.1,
    rotation_start: float = 0.0,
    rotation_step: float = 15.0,
    drift_x: float = 5.0,
    drift_y: float = 5.0,
    spiral_amount: float = 0.0,
    star_points: int = 5,
    cross_thickness: float = 0.2,
) -> List[ShapeInstance]:
    """
    Generate ``steps`` shape placements.

    Rotations and the spiral increment are given in degrees; the emitted
    instances carry their rotation in radians. The drift vector is rotated
    by the cumulative spiral angle before it is applied, so a non-zero
    ``spiral_amount`` curls the path.

    Args:
        shape: primitive to place at every step
        steps: number of instances to emit (negative counts emit nothing)
        size: base size of the primitive before scaling
        scale_start: scale of the first instance
        scale_factor: multiplier applied to the scale after every step
        rotation_start: rotation of the first instance (degrees)
        rotation_step: rotation added after every step (degrees)
        drift_x, drift_y: translation applied after every step
        spiral_amount: degrees added to the drift direction after every step
        star_points: tip count for star shapes
        cross_thickness: arm half-thickness for cross shapes, relative to size

    Returns:
        List of ShapeInstance in generation order.
    """
    shape = ShapeKind(shape)
    instances: List[ShapeInstance] = []

    x = 0.0
    y = 0.0
    rotation = rotation_start
    scale = scale_start
    spiral_angle = 0.0

    drift_distance = math.hypot(drift_x, drift_y)
    drift_angle = math.atan2(drift_y, drift_x)

    for _ in range(int(steps)):
        instances.append(ShapeInstance(
            center=Point2D(x, y),
            rotation=math.radians(rotation),
            scale=scale,
            shape=shape,
            size=size,
            star_points=int(star_points),
            cross_thickness=cross_thickness,
        ))

        heading = drift_angle + math.radians(spiral_angle)
        x += drift_distance * math.cos(heading)
        y += drift_distance * math.sin(heading)
        rotation += rotation_step
        scale *= scale_factor
        spiral_angle += spiral_amount

    return instances


def shape_vertices(instance: ShapeInstance, segments: Optional[int] = None) -> np.ndarray:
    """
    Outline of a placed shape as a CCW ``(n, 2)`` array.

    The outline is not explicitly closed. ``segments`` only affects circles.
    """
    if segments is None:
        segments = geometry_config.DEFAULT_CIRCLE_SEGMENTS
    radius = instance.size * instance.scale
    kind = ShapeKind(instance.shape)

    if kind is ShapeKind.CIRCLE:
        local = _regular_outline(max(int(segments), 3), radius, 0.0)
    elif kind is ShapeKind.SQUARE:
        # Corners at +-radius, i.e. radius is the half side length
        local = np.array([
            [radius, radius],
            [-radius, radius],
            [-radius, -radius],
            [radius, -radius],
        ])
    elif kind is ShapeKind.TRIANGLE:
        local = _regular_outline(3, radius, -math.pi / 2.0)
    elif kind is ShapeKind.HEXAGON:
        local = _regular_outline(6, radius, 0.0)
    elif kind is ShapeKind.STAR:
        tips = max(int(instance.star_points), 2)
        angles = np.arange(tips * 2) * (math.pi / tips)
        radii = np.where(np.arange(tips * 2) % 2 == 0,
                         radius, radius * geometry_config.STAR_INNER_RATIO)
        local = np.column_stack([np.cos(angles) * radii, np.sin(angles) * radii])
    elif kind is ShapeKind.CROSS:
        local = _cross_outline(radius, radius * instance.cross_thickness)
    else:  # pragma: no cover - ShapeKind() above rejects anything else
        raise ValueError(f"Unsupported shape kind: {kind}")

    center = np.array(instance.center, dtype=float)
    outline = rotate(local, instance.rotation) + center
    return ensure_ccw(outline)


def _regular_outline(count: int, radius: float, phase: float) -> np.ndarray:
    angles = phase + np.arange(count) * (2.0 * math.pi / count)
    return np.column_stack([np.cos(angles) * radius, np.sin(angles) * radius])


def _cross_outline(half: float, arm: float) -> np.ndarray:
    """Plus-sign outline with arms reaching ``half`` and half-thickness ``arm``."""
    return np.array([
        [half, -arm],
        [half, arm],
        [arm, arm],
        [arm, half],
        [-arm, half],
        [-arm, arm],
        [-half, arm],
        [-half, -arm],
        [-arm, -arm],
        [-arm, -half],
        [arm, -half],
        [arm, -arm],
    ])
