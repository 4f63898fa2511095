# Copyright (c) 2026 Kutay Demir.
# Licensed under the PolyForm Shield License 1.0.0. See LICENSE file for details.

"""Arc-length resampling of closed polygons."""

import logging

import numpy as np

from pyloft.geometry.polygon import PolygonLike, as_polygon, edge_lengths

logger = logging.getLogger(__name__)

MIN_VERTEX_COUNT = 3


def resample_polygon(points: PolygonLike, target_count: int) -> np.ndarray:
    """
    Redistribute a closed polygon onto ``target_count`` vertices evenly
    spaced along its perimeter.

    The first output vertex coincides with the first input vertex. Counts
    below 3 are raised to 3. A polygon whose perimeter is zero (every vertex
    at the same location) comes back as that location repeated.

    Args:
        points: polygon vertices, implicitly closed
        target_count: desired vertex count

    Returns:
        ``(max(target_count, 3), 2)`` array; empty input gives an empty array.
    """
    polygon = as_polygon(points)
    count = max(int(target_count), MIN_VERTEX_COUNT)

    if len(polygon) == 0:
        return polygon
    if len(polygon) == count:
        return polygon.copy()

    lengths = edge_lengths(polygon)
    total = float(lengths.sum())
    if total == 0.0:
        logger.warning(f"Resampling a zero-perimeter polygon of {len(polygon)} points; "
                       f"returning {count} copies of its location")
        return np.repeat(polygon[:1], count, axis=0)

    step = total / count
    next_points = np.roll(polygon, -1, axis=0)
    resampled = np.empty((count, 2), dtype=float)

    accumulated = 0.0
    edge = 0
    n_edges = len(lengths)
    for i in range(count):
        target = i * step
        while edge < n_edges and accumulated + lengths[edge] < target:
            accumulated += lengths[edge]
            edge += 1

        if edge >= n_edges:
            resampled[i] = polygon[-1]
            continue

        length = lengths[edge]
        if length == 0.0:
            fraction = 0.0
        else:
            fraction = min(max((target - accumulated) / length, 0.0), 1.0)

        start = polygon[edge]
        resampled[i] = start + fraction * (next_points[edge] - start)

    return resampled
