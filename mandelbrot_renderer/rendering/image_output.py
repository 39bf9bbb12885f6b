"""
Image export for rendered pixel buffers.

This module hands pixel buffers to Pillow and writes PNG, TIFF, JPEG or BMP
files, embedding render metadata where the container supports it.
"""

import json
import logging
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Dict, Any, Optional, Tuple

from PIL import Image, PngImagePlugin

from .. import __version__
from ..core.pixel_buffer import PixelBuffer

logger = logging.getLogger(__name__)

PNG_METADATA_KEY = "MandelbrotMetadata"
TIFF_DESCRIPTION_TAG = 270
TIFF_SOFTWARE_TAG = 305
TIFF_DATETIME_TAG = 306


@dataclass
class RenderMetadata:
    """Metadata for Mandelbrot renders."""

    # View parameters
    center: Tuple[float, float]
    zoom: float
    resolution: Tuple[int, int]  # width, height
    max_iterations: int

    # Coloring
    multiplier: float
    outside_color: Tuple[int, int, int]
    inside_color: Tuple[int, int, int]
    second_color: Tuple[int, int, int]

    # Timing
    render_time_seconds: float
    backend: str = "python"

    # Generation info
    timestamp: str = ""
    software_version: str = __version__

    def __post_init__(self):
        """Set default timestamp if not provided."""
        if not self.timestamp:
            self.timestamp = datetime.now().isoformat()

    @classmethod
    def from_config(cls, config, render_time: float, backend: str = "python") -> 'RenderMetadata':
        return cls(
            center=(config.x, config.y),
            zoom=config.zoom,
            resolution=(config.width, config.height),
            max_iterations=config.max_iterations,
            multiplier=config.multiplier,
            outside_color=config.outside_color,
            inside_color=config.inside_color,
            second_color=config.second_color,
            render_time_seconds=render_time,
            backend=backend,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert metadata to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RenderMetadata':
        """Create metadata from dictionary."""
        data = dict(data)
        for key in ('center', 'resolution', 'outside_color', 'inside_color', 'second_color'):
            if key in data:
                data[key] = tuple(data[key])
        return cls(**data)

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, json_str: str) -> 'RenderMetadata':
        """Create metadata from JSON string."""
        return cls.from_dict(json.loads(json_str))


class ImageExporter:
    """Writes pixel buffers to image files with optional metadata."""

    def __init__(self):
        self.supported_formats = {
            '.png': self._save_png,
            '.tiff': self._save_tiff,
            '.tif': self._save_tiff,
            '.jpg': self._save_jpeg,
            '.jpeg': self._save_jpeg,
            '.bmp': self._save_bmp,
        }

    def save_image(self, buffer: PixelBuffer, filepath: Path,
                   metadata: Optional[RenderMetadata] = None,
                   quality: int = 95) -> Path:
        """
        Save a pixel buffer to file.

        Args:
            buffer: Rendered RGB pixel buffer
            filepath: Output file path; the suffix selects the format
            metadata: Render metadata to embed
            quality: JPEG quality (1-100)

        Returns:
            Path of the written image
        """
        filepath = Path(filepath)
        suffix = filepath.suffix.lower()

        if suffix not in self.supported_formats:
            supported = ', '.join(self.supported_formats.keys())
            raise ValueError(f"Unsupported format '{suffix}'. Supported: {supported}")

        pil_image = Image.fromarray(buffer.to_array())

        save_method = self.supported_formats[suffix]
        save_method(pil_image, filepath, metadata, quality)

        logger.info(f"Saved image: {filepath} ({pil_image.size[0]}x{pil_image.size[1]})")
        return filepath

    def _save_png(self, pil_image: Image.Image, filepath: Path,
                  metadata: Optional[RenderMetadata], quality: int) -> None:
        """Save as PNG with text-chunk metadata."""
        pnginfo = PngImagePlugin.PngInfo()

        if metadata:
            pnginfo.add_text("Title", f"Mandelbrot at ({metadata.center[0]}, {metadata.center[1]})")
            pnginfo.add_text("Software", f"mandelbrot-renderer v{metadata.software_version}")
            pnginfo.add_text("Creation Time", metadata.timestamp)
            pnginfo.add_text(PNG_METADATA_KEY, metadata.to_json())

        pil_image.save(filepath, "PNG", pnginfo=pnginfo)

    def _save_tiff(self, pil_image: Image.Image, filepath: Path,
                   metadata: Optional[RenderMetadata], quality: int) -> None:
        """Save as uncompressed TIFF; metadata JSON goes in ImageDescription."""
        tiffinfo = {}
        if metadata:
            tiffinfo[TIFF_DESCRIPTION_TAG] = metadata.to_json(indent=None)
            tiffinfo[TIFF_SOFTWARE_TAG] = f"mandelbrot-renderer v{metadata.software_version}"
            tiffinfo[TIFF_DATETIME_TAG] = metadata.timestamp

        pil_image.save(filepath, "TIFF", tiffinfo=tiffinfo)

    def _save_jpeg(self, pil_image: Image.Image, filepath: Path,
                   metadata: Optional[RenderMetadata], quality: int) -> None:
        """Save as JPEG; metadata goes in a companion JSON file."""
        pil_image.save(filepath, "JPEG", quality=quality, optimize=True)

        if metadata:
            json_path = filepath.with_suffix('.json')
            json_path.write_text(metadata.to_json())
            logger.info(f"Saved metadata: {json_path}")

    def _save_bmp(self, pil_image: Image.Image, filepath: Path,
                  metadata: Optional[RenderMetadata], quality: int) -> None:
        if metadata:
            logger.debug("BMP has no metadata support, skipping")
        pil_image.save(filepath, "BMP")

    def extract_metadata(self, filepath: Path) -> Optional[RenderMetadata]:
        """
        Read render metadata back from a saved image.

        Args:
            filepath: Path to image file

        Returns:
            Extracted metadata or None if the file carries none
        """
        filepath = Path(filepath)

        with Image.open(filepath) as img:
            text = getattr(img, 'text', None)
            if text and PNG_METADATA_KEY in text:
                return RenderMetadata.from_json(text[PNG_METADATA_KEY])

            tags = getattr(img, 'tag_v2', None)
            if tags is not None and TIFF_DESCRIPTION_TAG in tags:
                try:
                    return RenderMetadata.from_json(tags[TIFF_DESCRIPTION_TAG])
                except (ValueError, TypeError) as e:
                    logger.warning(f"TIFF description is not render metadata: {e}")
                    return None

        if filepath.suffix.lower() in ('.jpg', '.jpeg'):
            json_path = filepath.with_suffix('.json')
            if json_path.exists():
                return RenderMetadata.from_json(json_path.read_text())

        return None
