"""
Configuration management for Path Finder.

Settings come from three layers, later ones winning:
1. Built-in defaults (map size and display scale of the reference map)
2. config.json next to the project root
3. Environment variables (PATHFINDER_*), which .env files can provide

Config is stored in config.json next to the executable/project root.
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from src.paths import get_config_path, get_map_path, get_state_path

logger = logging.getLogger(__name__)

# The reference map is a square 1479px image shown at 80% of a 1080px screen
MAP_SIZE = 1479
DISPLAY_SCALE = (1080 * 0.8) / MAP_SIZE

DEFAULT_HIT_RADIUS = 5.0
DEFAULT_PORT = 8081
WINDOW_TITLE = 'Path Finder'

ENV_STATE_FILE = 'PATHFINDER_STATE_FILE'
ENV_MAP_IMAGE = 'PATHFINDER_MAP_IMAGE'
ENV_HIT_RADIUS = 'PATHFINDER_HIT_RADIUS'
ENV_PORT = 'PATHFINDER_PORT'


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings for a session."""
    map_image: Path
    state_file: Path
    map_width: float = MAP_SIZE
    map_height: float = MAP_SIZE
    display_scale: float = DISPLAY_SCALE
    hit_radius: float = DEFAULT_HIT_RADIUS
    port: int = DEFAULT_PORT
    title: str = WINDOW_TITLE

    @property
    def display_size(self) -> tuple[int, int]:
        """Pixel size of the map as shown on screen."""
        return round(self.map_width * self.display_scale), round(self.map_height * self.display_scale)


def load_config(config_path: Optional[Path] = None) -> dict:
    """Load configuration from config.json."""
    config_path = config_path or get_config_path()
    if config_path.exists():
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError):
            logger.warning(f"Ignoring unreadable config file {config_path}")
            return {}
        if isinstance(data, dict):
            return data
        logger.warning(f"Ignoring config file {config_path}: expected a JSON object")
    return {}


def save_config(config: dict, config_path: Optional[Path] = None) -> None:
    """Save configuration to config.json."""
    config_path = config_path or get_config_path()
    with open(config_path, 'w', encoding='utf-8') as f:
        json.dump(config, f, indent=2)


def _as_float(value, fallback: float, name: str) -> float:
    try:
        result = float(value)
    except (TypeError, ValueError):
        logger.warning(f"Invalid value for {name}: {value!r}, using {fallback}")
        return fallback
    if result <= 0:
        logger.warning(f"{name} must be positive, got {result}, using {fallback}")
        return fallback
    return result


def _as_int(value, fallback: int, name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning(f"Invalid value for {name}: {value!r}, using {fallback}")
        return fallback


def get_settings(config_path: Optional[Path] = None) -> Settings:
    """
    Build the session settings.

    Priority:
    1. Environment variables PATHFINDER_*
    2. Stored in config.json
    3. Defaults
    """
    config = load_config(config_path)

    state_file = os.environ.get(ENV_STATE_FILE) or config.get('state_file')
    map_image = os.environ.get(ENV_MAP_IMAGE) or config.get('map_image')
    hit_radius = os.environ.get(ENV_HIT_RADIUS) or config.get('hit_radius', DEFAULT_HIT_RADIUS)
    port = os.environ.get(ENV_PORT) or config.get('port', DEFAULT_PORT)

    map_width = _as_float(config.get('map_width', MAP_SIZE), MAP_SIZE, 'map_width')
    map_height = _as_float(config.get('map_height', MAP_SIZE), MAP_SIZE, 'map_height')

    return Settings(
        map_image=Path(map_image) if map_image else get_map_path(),
        state_file=Path(state_file) if state_file else get_state_path(),
        map_width=map_width,
        map_height=map_height,
        display_scale=_as_float(config.get('display_scale', DISPLAY_SCALE), DISPLAY_SCALE, 'display_scale'),
        hit_radius=_as_float(hit_radius, DEFAULT_HIT_RADIUS, 'hit_radius'),
        port=_as_int(port, DEFAULT_PORT, 'port'),
        title=config.get('title', WINDOW_TITLE),
    )
