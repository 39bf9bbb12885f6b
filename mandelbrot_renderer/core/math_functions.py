"""
Core mathematical functions for Mandelbrot evaluation.

This module provides the pixel-to-plane coordinate mapping and the
escape-time iteration used by every rendering backend.
"""

from typing import NamedTuple, Tuple
import logging

logger = logging.getLogger(__name__)

ESCAPE_RADIUS_SQ = 4.0


class ComplexPlane:
    """Square viewport of the complex plane sampled on a pixel grid."""

    def __init__(self, center_x: float, center_y: float, zoom: float,
                 width: int, height: int):
        """
        Initialize viewport geometry.

        Args:
            center_x, center_y: Plane coordinates of the viewport center
            zoom: Viewport side length in plane units
            width, height: Image resolution in pixels
        """
        if width <= 0 or height <= 0:
            raise ValueError("Width and height must be positive")
        if zoom <= 0:
            raise ValueError("zoom must be positive")

        self.center_x = center_x
        self.center_y = center_y
        self.zoom = zoom
        self.width = width
        self.height = height

        # Both axes span `zoom` regardless of aspect ratio
        self.offset = zoom / 2.0

    def pixel_to_complex(self, px: int, py: int) -> Tuple[float, float]:
        """Convert pixel coordinates to a (real, imag) plane point."""
        x = self.center_x - self.offset + self.zoom * (px / self.width)
        y = self.center_y - self.offset + self.zoom * (py / self.height)
        return x, y

    def row_coordinates(self, py: int) -> Tuple[list, float]:
        """Real coordinates of every column in row `py`, plus the row's imaginary part."""
        xs = [self.center_x - self.offset + self.zoom * (px / self.width)
              for px in range(self.width)]
        y = self.center_y - self.offset + self.zoom * (py / self.height)
        return xs, y

    def __repr__(self) -> str:
        return (f"ComplexPlane(center=({self.center_x}, {self.center_y}), "
                f"zoom={self.zoom}, size={self.width}x{self.height})")


class EscapeResult(NamedTuple):
    """Outcome of iterating a single point.

    ``distance`` is the fraction ``i / max_iter`` of the budget spent before
    escaping, or the final squared magnitude when the orbit stayed bounded.
    """
    bounded: bool
    distance: float


def escape_time(max_iter: int, x: float, y: float) -> EscapeResult:
    """
    Iterate z <- z^2 + c from z = 0 with c = x + iy.

    Args:
        max_iter: Iteration budget
        x, y: Real and imaginary parts of c

    Returns:
        EscapeResult for the point
    """
    zr = 0.0
    zi = 0.0
    mag2 = 0.0

    for i in range(max_iter):
        # Real part must use the previous zi
        new_zr = zr * zr + x - zi * zi
        zi = 2.0 * zr * zi + y
        zr = new_zr

        mag2 = zr * zr + zi * zi
        if mag2 > ESCAPE_RADIUS_SQ:
            return EscapeResult(False, i / max_iter)

    return EscapeResult(True, mag2)
