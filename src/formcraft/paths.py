"""
Path utilities for handling dev vs production (frozen) file locations.

Dev mode: Uses local workspace/ directory
Frozen mode: Uses the platform application-data location reported by Qt
"""
from __future__ import annotations

import sys
from pathlib import Path

from PySide6.QtCore import QStandardPaths

APP_DIR_NAME = "FormCraft"


def is_frozen() -> bool:
    """Check if running as a frozen (PyInstaller) application."""
    return getattr(sys, 'frozen', False) or hasattr(sys, '_MEIPASS')


def get_app_data_dir() -> Path:
    """
    Get the application data directory for persisted store slots.

    Frozen: ~/Library/Application Support/FormCraft (macOS)
            or %LOCALAPPDATA%/FormCraft (Windows)
    Dev: workspace/
    """
    if is_frozen():
        location = QStandardPaths.writableLocation(
            QStandardPaths.StandardLocation.AppLocalDataLocation
        )
        app_data = Path(location) if location else Path.home() / f".{APP_DIR_NAME.lower()}"
        app_data.mkdir(parents=True, exist_ok=True)
        return app_data
    # Dev mode: use local workspace
    return Path.cwd() / "workspace"


def get_store_dir() -> Path:
    """Directory holding one JSON slot per store."""
    return get_app_data_dir() / "stores"
