"""
Coloring for escape-time results.

Escaped points fade from the outside color toward an inner color that
oscillates between two inside colors with a sine of the escape distance.
Bounded points take the oscillating inner color directly.
"""

import math
from typing import Tuple
import logging

from ..core.math_functions import EscapeResult

logger = logging.getLogger(__name__)

ColorTriple = Tuple[int, int, int]

_I16_MIN = -32768
_I16_MAX = 32767


def _blend_channel(c0: int, c1: int, amount: float) -> int:
    """Interpolate one 8-bit channel without clamping `amount`."""
    step = (c1 - c0) * amount
    if math.isnan(step):
        step = 0
    else:
        # Saturating float -> int16 conversion, truncating toward zero
        step = int(max(_I16_MIN, min(_I16_MAX, step)))
    return (c0 + step) & 0xFF


def lerp(c0: ColorTriple, c1: ColorTriple, amount: float) -> ColorTriple:
    """
    Linear interpolation between two RGB colors.

    Amounts outside [0, 1] are not clamped; channels that leave the byte
    range wrap modulo 256.

    Args:
        c0: Color at amount 0
        c1: Color at amount 1
        amount: Blend position

    Returns:
        Interpolated RGB triple
    """
    return (
        _blend_channel(c0[0], c1[0], amount),
        _blend_channel(c0[1], c1[1], amount),
        _blend_channel(c0[2], c1[2], amount),
    )


def cycle_fraction(distance: float, multiplier: float) -> float:
    """Position in the inside-color oscillation for a given distance."""
    product = distance * multiplier
    # sin is undefined at infinity; NaN blends to the first color
    periodic = math.sin(product) if math.isfinite(product) else math.nan
    if periodic > 1.0:
        return 1.0
    return abs(periodic)


class Colorizer:
    """Maps escape results to RGB triples for a fixed color scheme."""

    def __init__(self, outside_color: ColorTriple, inside_color: ColorTriple,
                 second_color: ColorTriple, multiplier: float):
        """
        Initialize the color scheme.

        Args:
            outside_color: Color of points that escape immediately
            inside_color: Inner color at oscillation fraction 0
            second_color: Inner color at oscillation fraction 1
            multiplier: Frequency of the inner color oscillation
        """
        self.outside_color = tuple(outside_color)
        self.inside_color = tuple(inside_color)
        self.second_color = tuple(second_color)
        self.multiplier = multiplier

    @classmethod
    def from_config(cls, config) -> 'Colorizer':
        return cls(config.outside_color, config.inside_color,
                   config.second_color, config.multiplier)

    def inner_color(self, distance: float) -> ColorTriple:
        fraction = cycle_fraction(distance, self.multiplier)
        return lerp(self.inside_color, self.second_color, fraction)

    def colorize(self, result: EscapeResult) -> ColorTriple:
        """Color for a single escape result."""
        bounded, distance = result
        inner = self.inner_color(distance)
        if bounded:
            return inner
        return lerp(self.outside_color, inner, distance)
