"""Application settings with JSON persistence.

Settings are stored next to the session database (see :mod:`pomoclock.paths`)
as ``settings.json``.

Usage::

    settings = load_settings()
    settings.work_minutes = 50
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields

from .paths import app_support_dir, settings_path

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── timer ─────────────────────────────────────────────────────────
    work_minutes: int = 25
    break_minutes: int = 5

    # ── session loop ──────────────────────────────────────────────────
    tick_interval_ms: int = 100
    min_abandoned_seconds: int = 60        # shorter work phases aren't logged on quit

    # ── notifications ─────────────────────────────────────────────────
    notifications_enabled: bool = True

    def __post_init__(self) -> None:
        if self.work_minutes <= 0 or self.break_minutes <= 0:
            raise ValueError("work_minutes and break_minutes must be positive")
        if self.tick_interval_ms <= 0:
            raise ValueError("tick_interval_ms must be positive")


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    path = settings_path()
    try:
        if path.exists():
            data = json.loads(path.read_text(encoding="utf-8"))
            # Only use keys that exist in the dataclass
            valid_keys = {f.name for f in fields(Settings)}
            filtered = {k: v for k, v in data.items() if k in valid_keys}
            return Settings(**filtered)
    except (OSError, ValueError, TypeError, AttributeError):
        logger.warning("Ignoring unreadable settings file %s", path, exc_info=True)
    return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    app_support_dir().mkdir(parents=True, exist_ok=True)
    settings_path().write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
