# Copyright (c) 2026 Kutay Demir.
# Licensed under the PolyForm Shield License 1.0.0. See LICENSE file for details.

"""Insertion of inner boundaries (holes) into cross-sections."""

from typing import Callable, List, Optional, Sequence

import numpy as np

from pyloft.config import geometry_config
from pyloft.geometry.cross_sections import CrossSection
from pyloft.geometry.polygon import scale_about_centroid

HolePattern = Callable[[int], bool]
HoleShape = Callable[[np.ndarray, float], np.ndarray]


def default_hole_pattern(index: int) -> bool:
    """Every even-indexed section gets a hole."""
    return index % 2 == 0


def default_hole_shape(outer: np.ndarray, t: float) -> np.ndarray:
    """
    Shrink the outer boundary toward its centroid.

    The factor runs linearly from HOLE_SCALE_BASE at the base (t = 0) to
    HOLE_SCALE_TIP at the tip (t = 1). The hole keeps the outer vertex count.
    """
    base = geometry_config.HOLE_SCALE_BASE
    tip = geometry_config.HOLE_SCALE_TIP
    return scale_about_centroid(outer, base - (base - tip) * t)


def fixed_scale_hole_shape(scale: float) -> HoleShape:
    """Hole generator with a constant scale clamped to [HOLE_SCALE_MIN, HOLE_SCALE_MAX]."""
    factor = min(max(float(scale), geometry_config.HOLE_SCALE_MIN), geometry_config.HOLE_SCALE_MAX)

    def hole_shape(outer: np.ndarray, t: float) -> np.ndarray:
        return scale_about_centroid(outer, factor)

    return hole_shape


def frequency_hole_pattern(frequency: int) -> HolePattern:
    """Select every ``frequency``-th section, starting at index 0."""
    frequency = max(int(frequency), 1)
    return lambda index: index % frequency == 0


def add_holes(
    sections: Sequence[CrossSection],
    hole_pattern: Optional[HolePattern] = None,
    hole_shape: Optional[HoleShape] = None,
) -> List[CrossSection]:
    """
    Append one generated hole to every section selected by ``hole_pattern``.

    Gap sections never receive holes. Sections are not modified in place;
    selected ones are replaced by copies carrying the extra hole.
    """
    hole_pattern = hole_pattern or default_hole_pattern
    hole_shape = hole_shape or default_hole_shape

    result: List[CrossSection] = []
    for index, section in enumerate(sections):
        if section.is_gap or not hole_pattern(index):
            result.append(section)
            continue
        hole = hole_shape(section.outer, section.t)
        if len(hole) == 0:
            result.append(section)
            continue
        result.append(section.with_hole(hole))
    return result
