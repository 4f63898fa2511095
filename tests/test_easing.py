# Copyright (c) 2026 Kutay Demir.
# Licensed under the PolyForm Shield License 1.0.0. See LICENSE file for details.

import math

import pytest

from pyloft.geometry.easing import (
    EASING_FUNCTIONS, ease_in_out, ease_out, get_easing_function, linear
)


def test_endpoints_are_fixed():
    for name, fn in EASING_FUNCTIONS.items():
        assert math.isclose(fn(0.0), 0.0, abs_tol=1e-12), name
        assert math.isclose(fn(1.0), 1.0), name


def test_known_values():
    assert linear(0.3) == 0.3
    assert math.isclose(ease_out(0.5), 0.875)
    assert math.isclose(ease_in_out(0.25), 0.125)
    assert math.isclose(ease_in_out(0.5), 0.5)
    assert math.isclose(ease_in_out(0.75), 0.875)


def test_lookup_by_name():
    assert get_easing_function("easeOut") is ease_out
    assert get_easing_function("easeInOut") is ease_in_out
    assert get_easing_function("linear") is linear


def test_unknown_name_raises():
    with pytest.raises(ValueError, match="Unknown easing"):
        get_easing_function("bounce")
