"""
Configuration loading for Mandelbrot rendering.

Configurations are assembled from built-in defaults, an optional view
preset and an optional JSON file, in that order of precedence.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional, Union

from ..api import RenderConfig, COLOR_FIELDS

logger = logging.getLogger(__name__)

INT_FIELDS = ('max_iterations', 'width', 'height')
FLOAT_FIELDS = ('x', 'y', 'zoom', 'multiplier')
BOOL_FIELDS = ('use_numba', 'save_metadata')

VIEW_PRESETS: Dict[str, Dict[str, Any]] = {
    'default': {
        '_description': 'Whole set',
    },
    'seahorse_valley': {
        '_description': 'Spirals between the main cardioid and the period-2 bulb',
        'x': -0.745, 'y': 0.1, 'zoom': 0.03, 'max_iterations': 400,
    },
    'elephant_valley': {
        '_description': 'Elephant trunks on the right of the main cardioid',
        'x': 0.3, 'y': 0.0, 'zoom': 0.1, 'max_iterations': 300,
    },
    'triple_spiral': {
        '_description': 'Triple spiral valley near the period-3 bulb',
        'x': -0.088, 'y': 0.654, 'zoom': 0.02, 'max_iterations': 500,
    },
    'mini_mandelbrot': {
        '_description': 'Small copy of the set on the real axis',
        'x': -1.7685, 'y': 0.0, 'zoom': 0.04, 'max_iterations': 300,
    },
}


def parse_color(text: str) -> tuple:
    """
    Parse an "r,g,b" string into an RGB triple.

    Args:
        text: Three comma-separated integers in 0..255

    Returns:
        Tuple of three ints
    """
    parts = [part.strip() for part in text.split(',')]
    if len(parts) != 3:
        raise ValueError(f"expected 3 color values in {text!r}, got {len(parts)}")

    color = []
    for part in parts:
        try:
            value = int(part)
        except ValueError:
            raise ValueError(f"can't parse color value {part!r}") from None
        if not 0 <= value <= 255:
            raise ValueError(f"color value {value} out of range 0-255")
        color.append(value)
    return tuple(color)


def _coerce_value(key: str, value: Any) -> Any:
    if key in COLOR_FIELDS:
        if isinstance(value, str):
            return parse_color(value)
        if not isinstance(value, (list, tuple)):
            raise ValueError(f"{key} must be a list of 3 integers or an 'r,g,b' string")
        return tuple(value)
    if key in INT_FIELDS:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"{key} must be an integer, got {value!r}")
        return value
    if key in FLOAT_FIELDS:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"{key} must be a number, got {value!r}")
        return float(value)
    if key in BOOL_FIELDS:
        if not isinstance(value, bool):
            raise ValueError(f"{key} must be true or false, got {value!r}")
        return value
    raise ValueError(f"Unknown configuration parameter: {key}")


def normalize_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    """Validate and coerce a mapping of RenderConfig field overrides."""
    return {key: _coerce_value(key, value) for key, value in data.items()
            if not key.startswith('_')}


class ConfigManager:
    """Loads, merges and exports render configurations."""

    def __init__(self, presets: Optional[Dict[str, Dict[str, Any]]] = None):
        self.presets = presets if presets is not None else VIEW_PRESETS

    def list_presets(self) -> list:
        return sorted(self.presets)

    def get_preset(self, name: str) -> Dict[str, Any]:
        if name not in self.presets:
            available = ', '.join(self.list_presets())
            raise ValueError(f"Unknown preset '{name}'. Available: {available}")
        return self.presets[name]

    def load_config(self, filepath: Union[str, Path]) -> Dict[str, Any]:
        """
        Load a JSON configuration file.

        Args:
            filepath: Path to a JSON object of RenderConfig fields

        Returns:
            The parsed mapping
        """
        filepath = Path(filepath)
        try:
            data = json.loads(filepath.read_text())
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {filepath}: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Configuration file {filepath} must contain a JSON object")

        logger.debug(f"Loaded configuration from {filepath}: {sorted(data)}")
        return data

    def create_render_config(self, data: Optional[Dict[str, Any]] = None,
                             preset: Optional[str] = None,
                             base: Optional[RenderConfig] = None) -> RenderConfig:
        """
        Build a RenderConfig from a preset and a configuration mapping.

        File values win over preset values, which win over `base`.
        """
        config = base or RenderConfig()
        if preset:
            config = config.replace(**normalize_overrides(self.get_preset(preset)))
            logger.info(f"Using preset: {preset}")
        if data:
            config = config.replace(**normalize_overrides(data))
        return config

    def export_config_template(self, filepath: Union[str, Path],
                               config: Optional[RenderConfig] = None) -> Path:
        """Write a JSON template holding `config` (defaults if None)."""
        filepath = Path(filepath)
        config = config or RenderConfig()
        filepath.write_text(json.dumps(config.to_dict(), indent=2) + "\n")
        logger.info(f"Wrote configuration template: {filepath}")
        return filepath


def load_config_from_args(config_file: Optional[Union[str, Path]] = None,
                          preset: Optional[str] = None) -> RenderConfig:
    """Assemble a RenderConfig from the CLI's --config and --preset options."""
    manager = ConfigManager()
    data = manager.load_config(config_file) if config_file else None
    return manager.create_render_config(data, preset)
