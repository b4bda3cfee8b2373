"""JSON export of stored session records."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from .database.models import Session
from .database.store import list_sessions

logger = logging.getLogger(__name__)


def session_to_dict(record: Session) -> dict:
    return {
        "id": record.id,
        "start_time": record.start_time.astimezone().isoformat(),
        "end_time": record.end_time.astimezone().isoformat(),
        "pomodoro_count": record.pomodoro_count,
        "completed": bool(record.completed),
        "duration_minutes": record.duration_minutes,
    }


def sessions_to_json() -> str:
    """Every record, newest first, as a pretty-printed JSON array."""
    return json.dumps([session_to_dict(s) for s in list_sessions()], indent=2)


def export_sessions(output: str | Path | None = None) -> str:
    """Build the JSON export and, when *output* is given, write it there.

    The parent directory must already exist.  Returns the JSON text.
    """
    payload = sessions_to_json()
    if output is not None:
        path = Path(output)
        path.write_text(payload, encoding="utf-8")
        logger.info("Exported sessions to %s", path)
    return payload
