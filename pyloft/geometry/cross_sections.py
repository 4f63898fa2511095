# Copyright (c) 2026 Kutay Demir.
# Licensed under the PolyForm Shield License 1.0.0. See LICENSE file for details.

"""
Cross-section construction.

Turns an ordered list of 2D outlines into CrossSection values placed at a
normalized height ``t``. Two modes are supported:

- sorted: outlines are ordered by descending area so the largest becomes the
  base (t = 0) and the smallest the tip (t = 1); removed entries are dropped.
- order-preserving: outlines keep their position and removed entries (None)
  become gap sections with an empty outer boundary, which the loft stage
  turns into an opening.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import List, Optional, Sequence, Tuple

import numpy as np

from pyloft.geometry.easing import EasingFunction
from pyloft.geometry.pattern import ShapeInstance, shape_vertices
from pyloft.geometry.polygon import PolygonLike, as_polygon, empty_polygon, ensure_ccw, polygon_area
from pyloft.geometry.resample import resample_polygon

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class CrossSection:
    """
    A 2D outline (with optional holes) placed at normalized height ``t``.

    ``outer`` is CCW. ``holes`` are inner boundaries. An empty ``outer``
    marks an intentional gap.
    """
    outer: np.ndarray
    holes: Tuple[np.ndarray, ...] = field(default_factory=tuple)
    t: float = 0.0

    @property
    def is_gap(self) -> bool:
        return len(self.outer) == 0

    def with_hole(self, hole: PolygonLike) -> 'CrossSection':
        return replace(self, holes=self.holes + (as_polygon(hole),))

    @classmethod
    def gap(cls, t: float) -> 'CrossSection':
        return cls(outer=empty_polygon(), holes=(), t=t)


def pattern_to_shapes(
    instances: Sequence[ShapeInstance],
    remove_shapes: bool = False,
    remove_frequency: int = 2,
    inverted: bool = False,
    segments: Optional[int] = None,
) -> List[Optional[np.ndarray]]:
    """
    Convert pattern instances to outlines ready for cross-section building.

    Only every other instance is kept (even indices, or odd indices when
    ``inverted``), mirroring the alternating fill of the 2D pattern. With
    ``remove_shapes`` set, every retained entry whose index is a multiple of
    ``remove_frequency`` is replaced by None to mark an opening.
    """
    parity = 1 if inverted else 0
    kept = [inst for i, inst in enumerate(instances) if i % 2 == parity]
    frequency = int(remove_frequency)

    shapes: List[Optional[np.ndarray]] = []
    for i, inst in enumerate(kept):
        if remove_shapes and frequency >= 1 and i % frequency == 0:
            shapes.append(None)
        else:
            shapes.append(shape_vertices(inst, segments))
    return shapes


def generate_cross_sections(
    shapes: Sequence[Optional[PolygonLike]],
    easing: Optional[EasingFunction] = None,
    normalize_vertex_count: bool = False,
    preserve_order: bool = False,
) -> List[CrossSection]:
    """
    Build cross-sections from outlines.

    Args:
        shapes: outlines in generation order; None marks a removed shape
        easing: optional curve applied to each linear ``t``
        normalize_vertex_count: resample every outline to the largest
            vertex count among them
        preserve_order: keep input order and turn removed shapes into gaps
            instead of sorting by area

    Returns:
        List of CrossSection with ``t`` in [0, 1].
    """
    if preserve_order:
        entries = [None if s is None else ensure_ccw(as_polygon(s)) for s in shapes]
    else:
        retained = [ensure_ccw(as_polygon(s)) for s in shapes if s is not None]
        if len(retained) != len(shapes):
            logger.debug("Sorted mode dropped %d removed shapes", len(shapes) - len(retained))
        areas = [polygon_area(p) for p in retained]
        # Stable sort: equal areas keep their input order
        order = sorted(range(len(retained)), key=lambda i: -areas[i])
        entries = [retained[i] for i in order]

    if not entries:
        return []

    if normalize_vertex_count:
        present = [p for p in entries if p is not None and len(p) > 0]
        if present:
            target = max(len(p) for p in present)
            entries = [
                p if p is None or len(p) == 0 else resample_polygon(p, target)
                for p in entries
            ]

    n = len(entries)
    sections: List[CrossSection] = []
    for i, outline in enumerate(entries):
        t = i / (n - 1) if n > 1 else 0.0
        if easing is not None:
            t = float(easing(t))
        if outline is None:
            sections.append(CrossSection.gap(t))
        else:
            sections.append(CrossSection(outer=outline, holes=(), t=t))
    return sections
