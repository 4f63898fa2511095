# Copyright (c) 2026 Kutay Demir.
# Licensed under the PolyForm Shield License 1.0.0. See LICENSE file for details.

"""
Lofting of cross-sections into a triangle mesh.

Sections are lifted to ``y = t * height`` (the working plane's x/y map to
world X/Z), tapered toward their own centroids and twisted about the
vertical axis. Adjacent non-gap sections with equal vertex counts are
stitched index-for-index; holes are tubed per hole slot with reversed
winding. Gaps and count mismatches leave openings instead of failing.
"""

import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

import numpy as np

from pyloft.config import geometry_config
from pyloft.geometry.cross_sections import CrossSection
from pyloft.geometry.mesh import Mesh, MeshBuilder
from pyloft.geometry.polygon import polygon_area, rotate, scale_about_centroid

logger = logging.getLogger(__name__)

WarningCallback = Callable[[str], None]


@dataclass
class _PlacedSection:
    """A cross-section transformed into world space."""
    outer: np.ndarray         # (n, 3)
    holes: List[np.ndarray]   # each (k, 3)
    outer_2d: np.ndarray      # (n, 2) after taper and twist

    @property
    def is_gap(self) -> bool:
        return len(self.outer) == 0


def _lift(points: np.ndarray, y: float) -> np.ndarray:
    lifted = np.empty((len(points), 3), dtype=float)
    lifted[:, 0] = points[:, 0]
    lifted[:, 1] = y
    lifted[:, 2] = points[:, 1]
    return lifted


def _transform(points: np.ndarray, t: float, taper: float, twist: float) -> np.ndarray:
    if len(points) == 0:
        return points
    if taper != 0:
        points = scale_about_centroid(points, 1.0 - taper * t)
    if twist != 0:
        points = rotate(points, math.radians(twist * t))
    return points


def place_section(section: CrossSection, height: float, taper: float = 0.0,
                  twist: float = 0.0) -> _PlacedSection:
    y = section.t * height
    outer = _transform(section.outer, section.t, taper, twist)
    holes = [_lift(_transform(h, section.t, taper, twist), y) for h in section.holes]
    return _PlacedSection(outer=_lift(outer, y), holes=holes, outer_2d=outer)


def loft_cross_sections(
    sections: Sequence[CrossSection],
    height: float = 200.0,
    twist: float = 0.0,
    taper: float = 0.0,
    smooth_normals: bool = True,
    close_tip: bool = False,
    on_warning: Optional[WarningCallback] = None,
) -> Mesh:
    """
    Loft a sequence of cross-sections into a mesh.

    Args:
        sections: cross-sections ordered base to tip
        height: world height reached at t = 1
        twist: rotation of the tip relative to the base, in degrees
        taper: fractional size reduction at the tip (scale 1 - taper * t)
        smooth_normals: vertex-averaged normals when True, flat otherwise
        close_tip: fan-close the last section if it collapsed to ~zero area
        on_warning: receives a message for every skipped segment or collapsed section

    Returns:
        Mesh; empty when nothing could be stitched.
    """
    if not sections:
        return Mesh.empty()

    def warn(message: str) -> None:
        logger.warning(message)
        if on_warning is not None:
            on_warning(message)

    placed = [place_section(s, height, taper, twist) for s in sections]

    # A collapsed last section is expected when the tip gets fan-closed
    closed_tip = len(placed) - 1 if close_tip else None
    for i, section in enumerate(placed):
        if section.is_gap or i == closed_tip:
            continue
        if polygon_area(section.outer_2d) < geometry_config.TIP_AREA_THRESHOLD:
            warn(f"Section {i} has collapsed to zero area; its walls will be degenerate.")

    builder = MeshBuilder()

    # One vertex block per section, shared by the segments on either side
    outer_offsets: Dict[int, int] = {}

    def outer_offset(index: int) -> int:
        if index not in outer_offsets:
            outer_offsets[index] = builder.add_vertices(placed[index].outer)
        return outer_offsets[index]

    for i in range(len(placed) - 1):
        lower, upper = placed[i], placed[i + 1]
        if lower.is_gap or upper.is_gap:
            continue
        if len(lower.outer) != len(upper.outer):
            warn(f"Sections {i} and {i + 1} have different vertex counts "
                 f"({len(lower.outer)} vs {len(upper.outer)}); leaving an opening.")
            continue
        builder.connect_rings(outer_offset(i), outer_offset(i + 1), len(lower.outer))

    _tube_holes(builder, placed, warn)

    if close_tip:
        last = len(placed) - 1
        tip = placed[last]
        if not tip.is_gap and polygon_area(tip.outer_2d) < geometry_config.TIP_AREA_THRESHOLD:
            builder.add_fan(outer_offset(last), len(tip.outer), tip.outer.mean(axis=0))

    mesh = builder.build(smooth=smooth_normals)
    logger.debug("Lofted %d sections into %d triangles", len(sections), mesh.triangle_count)
    return mesh


def _tube_holes(builder: MeshBuilder, placed: Sequence[_PlacedSection],
                warn: WarningCallback) -> None:
    """Connect hole slot ``k`` of adjacent sections with inward-facing walls."""
    slot_count = max((len(p.holes) for p in placed), default=0)
    for slot in range(slot_count):
        present = [len(p.holes) > slot and len(p.holes[slot]) > 0 for p in placed]
        offsets: Dict[int, int] = {}

        def hole_offset(index: int) -> int:
            if index not in offsets:
                offsets[index] = builder.add_vertices(placed[index].holes[slot])
            return offsets[index]

        for i in range(len(placed) - 1):
            if not (present[i] and present[i + 1]):
                continue
            lower = placed[i].holes[slot]
            upper = placed[i + 1].holes[slot]
            if len(lower) != len(upper):
                warn(f"Hole {slot} of sections {i} and {i + 1} has different vertex counts "
                     f"({len(lower)} vs {len(upper)}); leaving the hole wall open.")
                continue
            builder.connect_rings(hole_offset(i), hole_offset(i + 1), len(lower), reverse=True)
