# Copyright (c) 2026 Kutay Demir.
# Licensed under the PolyForm Shield License 1.0.0. See LICENSE file for details.

"""Easing functions mapping a normalized position in [0, 1] onto [0, 1]."""

from typing import Callable, Dict

EasingFunction = Callable[[float], float]


def linear(t: float) -> float:
    return t


def ease_out(t: float) -> float:
    """Cubic ease-out: fast start, slow approach to 1."""
    return 1.0 - (1.0 - t) ** 3


def ease_in_out(t: float) -> float:
    """Quadratic ease-in-out, symmetric around t = 0.5."""
    if t < 0.5:
        return 2.0 * t * t
    return 1.0 - (-2.0 * t + 2.0) ** 2 / 2.0


EASING_FUNCTIONS: Dict[str, EasingFunction] = {
    'linear': linear,
    'easeOut': ease_out,
    'easeInOut': ease_in_out,
}


def get_easing_function(name: str) -> EasingFunction:
    """Look up an easing function by its name ('linear', 'easeOut', 'easeInOut')."""
    try:
        return EASING_FUNCTIONS[name]
    except KeyError:
        raise ValueError(
            f"Unknown easing '{name}'. Expected one of: {', '.join(EASING_FUNCTIONS)}"
        ) from None
