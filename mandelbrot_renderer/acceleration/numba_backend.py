"""
Numba JIT compilation backend for Mandelbrot rendering.

The kernel evaluates coordinate mapping, escape-time iteration and coloring
for the whole image in compiled code. It follows the operation order of the
pure Python path exactly, so both produce identical bytes.
"""

import logging
import math

import numba
import numpy as np
from numba import njit

logger = logging.getLogger(__name__)
logger.debug(f"Numba available: {numba.__version__}")


@njit(cache=True)
def blend_channel(c0, c1, amount):
    """JIT twin of the colorizer's per-channel interpolation."""
    step = (c1 - c0) * amount
    if math.isnan(step):
        istep = 0
    else:
        istep = int(max(-32768.0, min(32767.0, step)))
    return (c0 + istep) & 0xFF


@njit(cache=True)
def mandelbrot_rgb_kernel(out, center_x, center_y, zoom, max_iter, multiplier,
                          outside, inside, second):
    """
    JIT-compiled Mandelbrot kernel writing RGB values into `out`.

    Args:
        out: uint8 array of shape (height, width, 3)
        center_x, center_y: Viewport center
        zoom: Viewport side length
        max_iter: Iteration budget
        multiplier: Inner color oscillation frequency
        outside, inside, second: int64 arrays of 3 channels each
    """
    height, width, _ = out.shape
    offset = zoom / 2.0

    for py in range(height):
        y = center_y - offset + zoom * (py / height)
        for px in range(width):
            x = center_x - offset + zoom * (px / width)

            zr = 0.0
            zi = 0.0
            mag2 = 0.0
            bounded = True
            distance = 0.0
            for i in range(max_iter):
                new_zr = zr * zr + x - zi * zi
                zi = 2.0 * zr * zi + y
                zr = new_zr
                mag2 = zr * zr + zi * zi
                if mag2 > 4.0:
                    bounded = False
                    distance = i / max_iter
                    break
            if bounded:
                distance = mag2

            product = distance * multiplier
            if math.isfinite(product):
                periodic = math.sin(product)
            else:
                periodic = math.nan
            if periodic > 1.0:
                fraction = 1.0
            else:
                fraction = abs(periodic)

            for ch in range(3):
                inner = blend_channel(inside[ch], second[ch], fraction)
                if bounded:
                    out[py, px, ch] = inner
                else:
                    out[py, px, ch] = blend_channel(outside[ch], inner, distance)


def render_buffer(center_x: float, center_y: float, zoom: float, max_iter: int,
                  width: int, height: int, multiplier: float,
                  outside_color, inside_color, second_color) -> bytes:
    """
    Render the full image with the JIT kernel.

    Returns:
        Row-major RGB bytes of length width * height * 3
    """
    out = np.zeros((height, width, 3), dtype=np.uint8)
    mandelbrot_rgb_kernel(out, float(center_x), float(center_y), float(zoom), int(max_iter),
                          float(multiplier),
                          np.asarray(outside_color, dtype=np.int64),
                          np.asarray(inside_color, dtype=np.int64),
                          np.asarray(second_color, dtype=np.int64))
    return out.tobytes()
