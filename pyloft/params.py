# Copyright (c) 2026 Kutay Demir.
# Licensed under the PolyForm Shield License 1.0.0. See LICENSE file for details.

"""
Flat parameter records used by the direct (graph-less) pipelines.

These mirror the parameter panels of the editor: a shell record and a
pattern record that carries every pattern, loft, hole, removal and spine
setting in one place.
"""

from dataclasses import dataclass
from enum import Enum

from pyloft.geometry.pattern import ShapeKind


class ShellShape(str, Enum):
    CYLINDER = "cylinder"
    HEXAGON = "hexagon"


@dataclass
class ShellParams:
    shape: ShellShape = ShellShape.CYLINDER
    height: float = 200.0
    radius: float = 50.0  # circumscribed radius for the hexagon
    thickness: float = 2.0


@dataclass
class PatternParams:
    """Full parameter set of the pattern panel."""

    # Pattern
    shape: ShapeKind = ShapeKind.CIRCLE
    steps: int = 10
    scale_start: float = 1.0
    scale_factor: float = 1.1
    rotation_start: float = 0.0   # degrees
    rotation_step: float = 15.0   # degrees per step
    drift_x: float = 5.0
    drift_y: float = 5.0
    spiral_amount: float = 0.0    # degrees per step
    size: float = 20.0
    inverted: bool = False
    star_points: int = 5
    cross_thickness: float = 0.2

    # Body
    height: float = 200.0
    twist: float = 0.0            # degrees, tip relative to base
    taper: float = 0.0            # 0..1
    normalize: bool = False
    easing: str = "linear"

    # Holes
    enable_holes: bool = False
    hole_frequency: int = 2
    hole_scale: float = 0.35

    # Openings
    remove_shapes: bool = False
    remove_frequency: int = 2

    # Spine mode
    use_spine_mode: bool = False
    start_radius: float = 15.0
    end_radius: float = 5.0
    segment_length: float = 20.0
    radius_variation: float = 0.0
