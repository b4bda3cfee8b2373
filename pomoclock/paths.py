"""Where PomoClock keeps its files.

- macOS:   ~/Library/Application Support/PomoClock
- Windows: %APPDATA%/PomoClock
- other:   $XDG_DATA_HOME/pomoclock (default: ~/.local/share/pomoclock)

``POMOCLOCK_HOME`` overrides all of the above.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path


def app_support_dir() -> Path:
    override = os.environ.get("POMOCLOCK_HOME")
    if override:
        return Path(override).expanduser()
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "PomoClock"
    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        base = Path(appdata) if appdata else Path.home() / "AppData" / "Roaming"
        return base / "PomoClock"
    xdg_data = os.environ.get("XDG_DATA_HOME")
    base = Path(xdg_data) if xdg_data else Path.home() / ".local" / "share"
    return base / "pomoclock"


def db_path() -> Path:
    return app_support_dir() / "sessions.db"


def settings_path() -> Path:
    return app_support_dir() / "settings.json"
