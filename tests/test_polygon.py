# Copyright (c) 2026 Kutay Demir.
# Licensed under the PolyForm Shield License 1.0.0. See LICENSE file for details.

import math

import numpy as np

from pyloft.geometry.polygon import (
    Point2D, as_polygon, centroid, ensure_ccw, is_ccw, perimeter, polygon_area,
    rotate, scale_about_centroid, signed_area
)

from conftest import square


def test_signed_area_follows_winding():
    sq = square(1.0)
    assert math.isclose(signed_area(sq), 4.0)
    assert math.isclose(signed_area(sq[::-1]), -4.0)
    assert math.isclose(polygon_area(sq[::-1]), 4.0)


def test_degenerate_polygons_have_zero_area():
    assert signed_area(as_polygon([(0, 0), (1, 1)])) == 0.0
    assert signed_area(as_polygon([])) == 0.0


def test_as_polygon_accepts_points():
    poly = as_polygon([Point2D(0, 0), Point2D(1, 0), Point2D(0, 1)])
    assert poly.shape == (3, 2)
    assert as_polygon([]).shape == (0, 2)


def test_ensure_ccw_reverses_clockwise_input():
    cw = square(2.0)[::-1]
    assert not is_ccw(cw)
    fixed = ensure_ccw(cw)
    assert is_ccw(fixed)
    assert math.isclose(polygon_area(fixed), polygon_area(cw))


def test_centroid_and_perimeter():
    sq = square(2.0, cx=5.0, cy=-3.0)
    c = centroid(sq)
    assert math.isclose(c.x, 5.0) and math.isclose(c.y, -3.0)
    assert math.isclose(perimeter(sq), 16.0)
    assert centroid(as_polygon([])) == Point2D(0.0, 0.0)


def test_rotate_quarter_turn():
    rotated = rotate(np.array([[1.0, 0.0]]), math.pi / 2)
    np.testing.assert_allclose(rotated, [[0.0, 1.0]], atol=1e-12)

    about = rotate(np.array([[2.0, 1.0]]), math.pi, center=Point2D(1.0, 1.0))
    np.testing.assert_allclose(about, [[0.0, 1.0]], atol=1e-12)


def test_scale_about_centroid_keeps_center():
    sq = square(10.0, cx=3.0, cy=4.0)
    scaled = scale_about_centroid(sq, 0.5)
    np.testing.assert_allclose(centroid(scaled), centroid(sq))
    assert math.isclose(polygon_area(scaled), polygon_area(sq) * 0.25)
