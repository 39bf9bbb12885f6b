"""
Mandelbrot set renderer.

This library maps pixels to points of the complex plane, runs the
escape-time iteration for each one and colors the result with a periodic
blend between two inside colors and a fade toward an outside color.

Example usage:
    >>> from mandelbrot_renderer import RenderConfig, render
    >>> buffer = render(RenderConfig(width=64, height=64))
    >>> len(buffer.data)
    12288
"""

__version__ = "1.0.0"

from mandelbrot_renderer.core.math_functions import ComplexPlane, EscapeResult, escape_time
from mandelbrot_renderer.core.pixel_buffer import PixelBuffer
from mandelbrot_renderer.rendering.coloring import Colorizer, lerp
from mandelbrot_renderer.rendering.image_output import ImageExporter, RenderMetadata
from mandelbrot_renderer.io.config import ConfigManager, parse_color

# Main API
from mandelbrot_renderer.api import MandelbrotRenderer, RenderConfig, render

__all__ = [
    "MandelbrotRenderer",
    "RenderConfig",
    "render",
    "ComplexPlane",
    "EscapeResult",
    "escape_time",
    "PixelBuffer",
    "Colorizer",
    "lerp",
    "ImageExporter",
    "RenderMetadata",
    "ConfigManager",
    "parse_color",
]
