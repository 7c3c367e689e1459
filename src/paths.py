"""
Path utilities for Path Finder.

Handles path resolution for both development mode and frozen (PyInstaller) executables.
- In development: paths are relative to the project root
- When frozen: paths are relative to the executable location

External data (db/, map.png, config.json) lives NEXT TO the executable, not bundled inside.
"""

import sys
from pathlib import Path


def get_app_dir() -> Path:
    """
    Get the application directory.

    - In development: the project root (parent of src/)
    - When frozen: the directory containing the executable
    """
    if getattr(sys, 'frozen', False):
        return Path(sys.executable).parent
    else:
        return Path(__file__).parent.parent


def get_db_dir() -> Path:
    """Get the directory holding the persisted graph."""
    return get_app_dir() / "db"


def get_state_path() -> Path:
    """Default location of the saved graph document."""
    return get_db_dir() / "graph.json"


def get_config_path() -> Path:
    """Get the path to the config file."""
    return get_app_dir() / "config.json"


def get_map_path() -> Path:
    """Default reference map image shown behind the graph."""
    return get_app_dir() / "map.png"


def ensure_db_dir() -> Path:
    """
    Ensure the db directory exists, creating it if necessary.
    Returns the path to the db directory.
    """
    db_dir = get_db_dir()
    db_dir.mkdir(parents=True, exist_ok=True)
    return db_dir
