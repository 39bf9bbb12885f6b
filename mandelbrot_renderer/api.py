"""
Main API classes for Mandelbrot rendering.

This module provides the high-level interface, combining coordinate
mapping, escape-time evaluation and coloring into a single render call.
"""

import math
import time
import logging
import dataclasses
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Optional, Dict, Any, Tuple, Callable, Union

from .core.math_functions import ComplexPlane, escape_time
from .core.pixel_buffer import PixelBuffer, BYTES_PER_PIXEL
from .rendering.coloring import Colorizer
from .rendering.image_output import ImageExporter, RenderMetadata
from .acceleration import is_numba_available

logger = logging.getLogger(__name__)

ColorTriple = Tuple[int, int, int]
ProgressCallback = Callable[[int, int], None]

COLOR_FIELDS = ('outside_color', 'inside_color', 'second_color')


def _check_color(name: str, color) -> None:
    if len(color) != 3:
        raise ValueError(f"{name} must have exactly 3 channels, got {len(color)}")
    for channel in color:
        if isinstance(channel, bool) or not isinstance(channel, int):
            raise ValueError(f"{name} channels must be integers, got {channel!r}")
        if not 0 <= channel <= 255:
            raise ValueError(f"{name} channels must be between 0 and 255, got {channel}")


@dataclass(frozen=True)
class RenderConfig:
    """Configuration for a Mandelbrot render."""

    # View
    x: float = -0.75
    y: float = 0.0
    zoom: float = 3.0  # viewport width in plane units

    # Escape-time budget
    max_iterations: int = 100

    # Image
    width: int = 1024
    height: int = 1024

    # Coloring
    multiplier: float = 25.0
    outside_color: ColorTriple = (0, 0, 0)
    inside_color: ColorTriple = (255, 0, 0)
    second_color: ColorTriple = (255, 0, 255)

    # Backend and output; these never change pixel values
    use_numba: bool = False
    save_metadata: bool = True

    def __post_init__(self):
        for name in COLOR_FIELDS:
            object.__setattr__(self, name, tuple(getattr(self, name)))
        self.validate()

    def validate(self):
        """Validate configuration parameters."""
        for name in ('width', 'height', 'max_iterations'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")

        if self.width <= 0 or self.height <= 0:
            raise ValueError("Width and height must be positive")

        if self.max_iterations <= 0:
            raise ValueError("max_iterations must be positive")

        for name in ('x', 'y', 'zoom', 'multiplier'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{name} must be a number, got {value!r}")
            if not math.isfinite(value):
                raise ValueError(f"{name} must be a finite number")

        if self.zoom <= 0:
            raise ValueError("zoom must be positive")

        for name in COLOR_FIELDS:
            _check_color(name, getattr(self, name))

    def replace(self, **overrides) -> 'RenderConfig':
        """Return a validated copy with some fields changed."""
        unknown = set(overrides) - {f.name for f in fields(self)}
        if unknown:
            raise ValueError(f"Unknown configuration parameter(s): {', '.join(sorted(unknown))}")
        return dataclasses.replace(self, **overrides)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        for name in COLOR_FIELDS:
            data[name] = list(data[name])
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RenderConfig':
        return cls().replace(**data)

    @property
    def plane(self) -> ComplexPlane:
        return ComplexPlane(self.x, self.y, self.zoom, self.width, self.height)


def render(config: RenderConfig,
           progress_callback: Optional[ProgressCallback] = None) -> PixelBuffer:
    """
    Render the configured view with the pure Python evaluator.

    Pixels are produced row-major from the top-left, three bytes each.

    Args:
        config: Render configuration
        progress_callback: Called as (rows_done, total_rows) after each row

    Returns:
        Filled PixelBuffer
    """
    plane = config.plane
    colorizer = Colorizer.from_config(config)
    max_iter = config.max_iterations
    row_stride = config.width * BYTES_PER_PIXEL

    data = bytearray(row_stride * config.height)
    pos = 0
    for py in range(config.height):
        xs, y = plane.row_coordinates(py)
        for x in xs:
            data[pos:pos + BYTES_PER_PIXEL] = bytes(colorizer.colorize(escape_time(max_iter, x, y)))
            pos += BYTES_PER_PIXEL

        if progress_callback:
            progress_callback(py + 1, config.height)

    return PixelBuffer(config.width, config.height, bytes(data))


class MandelbrotRenderer:
    """Main Mandelbrot rendering engine."""

    def __init__(self, config: Optional[RenderConfig] = None):
        """
        Initialize renderer.

        Args:
            config: Rendering configuration (uses defaults if None)
        """
        self.config = config or RenderConfig()
        self.image_exporter = ImageExporter()
        self.last_render_time = None
        self.backend = self._select_backend()

        logger.info(f"MandelbrotRenderer initialized: {self.config.width}x{self.config.height}, "
                    f"{self.config.max_iterations} iterations, backend={self.backend}")

    def _select_backend(self) -> str:
        if not self.config.use_numba:
            return 'python'
        if is_numba_available():
            logger.info("Numba acceleration enabled")
            return 'numba'
        logger.warning("Numba requested but not installed, using Python backend")
        return 'python'

    def render(self, progress_callback: Optional[ProgressCallback] = None) -> PixelBuffer:
        """
        Render the configured view.

        Args:
            progress_callback: Optional (rows_done, total_rows) callback

        Returns:
            PixelBuffer with the image
        """
        config = self.config
        start_time = time.time()
        logger.info(f"Starting render at ({config.x}, {config.y}), zoom {config.zoom}")

        if self.backend == 'numba':
            from .acceleration.numba_backend import render_buffer

            data = render_buffer(config.x, config.y, config.zoom, config.max_iterations,
                                 config.width, config.height, config.multiplier,
                                 config.outside_color, config.inside_color, config.second_color)
            buffer = PixelBuffer(config.width, config.height, data)
            if progress_callback:
                progress_callback(config.height, config.height)
        else:
            buffer = render(config, progress_callback)

        self.last_render_time = time.time() - start_time
        logger.info(f"Render complete: {self.last_render_time:.2f}s")
        return buffer

    def render_to_file(self, output_path: Union[str, Path],
                       progress_callback: Optional[ProgressCallback] = None) -> PixelBuffer:
        """Render and save the image, embedding metadata if configured."""
        buffer = self.render(progress_callback)

        metadata = None
        if self.config.save_metadata:
            metadata = RenderMetadata.from_config(self.config, self.last_render_time, self.backend)

        self.image_exporter.save_image(buffer, Path(output_path), metadata)
        return buffer
