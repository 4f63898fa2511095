# Copyright (c) 2026 Kutay Demir.
# Licensed under the PolyForm Shield License 1.0.0. See LICENSE file for details.

"""
Planar polygon helpers shared by the cross-section and loft stages.

Polygons are ``(n, 2)`` float arrays listing vertices in order. The closing
edge from the last vertex back to the first is implicit, so a polygon never
repeats its first vertex at the end.
"""

import math
from typing import Iterable, NamedTuple, Sequence, Union

import numpy as np


class Point2D(NamedTuple):
    """A coordinate in the 2D working plane."""
    x: float
    y: float


PolygonLike = Union[np.ndarray, Sequence[Sequence[float]], Iterable[Point2D]]


def as_polygon(points: PolygonLike) -> np.ndarray:
    """Return ``points`` as a float ``(n, 2)`` array (``(0, 2)`` when empty)."""
    if not isinstance(points, np.ndarray):
        points = list(points)
    arr = np.asarray(points, dtype=float)
    if arr.size == 0:
        return np.zeros((0, 2), dtype=float)
    return arr.reshape(-1, 2)


def empty_polygon() -> np.ndarray:
    return np.zeros((0, 2), dtype=float)


def signed_area(points: np.ndarray) -> float:
    """Shoelace area; positive for counter-clockwise winding."""
    if len(points) < 3:
        return 0.0
    x = points[:, 0]
    y = points[:, 1]
    return 0.5 * float(np.sum(x * np.roll(y, -1) - np.roll(x, -1) * y))


def polygon_area(points: np.ndarray) -> float:
    return abs(signed_area(points))


def perimeter(points: np.ndarray) -> float:
    if len(points) < 2:
        return 0.0
    return float(np.sum(edge_lengths(points)))


def edge_lengths(points: np.ndarray) -> np.ndarray:
    """Length of every edge, including the implicit closing edge."""
    deltas = np.roll(points, -1, axis=0) - points
    return np.hypot(deltas[:, 0], deltas[:, 1])


def centroid(points: np.ndarray) -> Point2D:
    """Vertex average of the polygon (origin for an empty polygon)."""
    if len(points) == 0:
        return Point2D(0.0, 0.0)
    cx, cy = points.mean(axis=0)
    return Point2D(float(cx), float(cy))


def scale_about(points: np.ndarray, center: Point2D, factor: float) -> np.ndarray:
    """Scale every vertex toward (factor < 1) or away from ``center``."""
    c = np.array(center, dtype=float)
    return c + (points - c) * factor


def scale_about_centroid(points: np.ndarray, factor: float) -> np.ndarray:
    if len(points) == 0:
        return points.copy()
    return scale_about(points, centroid(points), factor)


def rotate(points: np.ndarray, angle: float, center: Point2D = Point2D(0.0, 0.0)) -> np.ndarray:
    """Rotate counter-clockwise by ``angle`` radians about ``center``."""
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    c = np.array(center, dtype=float)
    d = points - c
    rotated = np.empty_like(d)
    rotated[:, 0] = d[:, 0] * cos_a - d[:, 1] * sin_a
    rotated[:, 1] = d[:, 0] * sin_a + d[:, 1] * cos_a
    return rotated + c


def is_ccw(points: np.ndarray) -> bool:
    return signed_area(points) >= 0.0


def ensure_ccw(points: np.ndarray) -> np.ndarray:
    """Return the polygon wound counter-clockwise, reversing it if needed."""
    if len(points) >= 3 and signed_area(points) < 0.0:
        return points[::-1].copy()
    return points
