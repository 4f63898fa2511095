# Copyright (c) 2026 Kutay Demir.
# Licensed under the PolyForm Shield License 1.0.0. See LICENSE file for details.

"""
Direct pattern-panel pipeline.

Runs pattern -> shapes -> cross-sections -> holes -> loft (or the spine
path) straight from a PatternParams record, with no graph in between.
"""

import logging
from typing import Optional

from pyloft.geometry.cross_sections import generate_cross_sections, pattern_to_shapes
from pyloft.geometry.easing import get_easing_function
from pyloft.geometry.holes import add_holes, fixed_scale_hole_shape, frequency_hole_pattern
from pyloft.geometry.loft import WarningCallback, loft_cross_sections
from pyloft.geometry.mesh import Mesh
from pyloft.geometry.pattern import generate_pattern
from pyloft.geometry.spine import create_spine_mesh, generate_spine_points
from pyloft.params import PatternParams

logger = logging.getLogger(__name__)


def create_fractal_body(params: PatternParams, on_warning: Optional[WarningCallback] = None) -> Mesh:
    """Loft the pattern described by ``params`` into a closed-tip body."""
    instances = generate_pattern(
        shape=params.shape,
        steps=params.steps,
        size=params.size,
        scale_start=params.scale_start,
        scale_factor=params.scale_factor,
        rotation_start=params.rotation_start,
        rotation_step=params.rotation_step,
        drift_x=params.drift_x,
        drift_y=params.drift_y,
        spiral_amount=params.spiral_amount,
        star_points=params.star_points,
        cross_thickness=params.cross_thickness,
    )
    shapes = pattern_to_shapes(
        instances,
        remove_shapes=params.remove_shapes,
        remove_frequency=params.remove_frequency,
        inverted=params.inverted,
    )
    # Openings only survive when the input order is kept
    sections = generate_cross_sections(
        shapes,
        easing=get_easing_function(params.easing),
        normalize_vertex_count=params.normalize,
        preserve_order=params.remove_shapes,
    )
    if params.enable_holes:
        sections = add_holes(
            sections,
            hole_pattern=frequency_hole_pattern(params.hole_frequency),
            hole_shape=fixed_scale_hole_shape(params.hole_scale),
        )

    return loft_cross_sections(
        sections,
        height=params.height,
        twist=params.twist,
        taper=params.taper,
        close_tip=True,
        on_warning=on_warning,
    )


def create_spine_body(params: PatternParams, seed: Optional[int] = None) -> Mesh:
    """Spine-mode body; reuses the pattern step, spiral and drift settings."""
    points = generate_spine_points(
        steps=params.steps,
        start_radius=params.start_radius,
        end_radius=params.end_radius,
        total_height=params.height,
        spiral_amount=params.spiral_amount,
        drift_x=params.drift_x,
        drift_y=params.drift_y,
        segment_length=params.segment_length,
        radius_variation=params.radius_variation,
        remove_frequency=params.remove_frequency if params.remove_shapes else 0,
        seed=seed,
    )
    return create_spine_mesh(points)


def build_body_from_params(params: PatternParams, on_warning: Optional[WarningCallback] = None,
                           seed: Optional[int] = None) -> Mesh:
    """Dispatch to the spine or cross-section pipeline."""
    if params.use_spine_mode:
        logger.debug("Building spine body with %d steps", params.steps)
        return create_spine_body(params, seed=seed)
    logger.debug("Building lofted body with %d steps", params.steps)
    return create_fractal_body(params, on_warning=on_warning)
