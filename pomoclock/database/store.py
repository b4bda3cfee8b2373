"""Read/write helpers for session records."""

from __future__ import annotations

import logging
from datetime import datetime

from .db import get_session
from .models import Session

logger = logging.getLogger(__name__)


def save_session(
    start_time: datetime,
    end_time: datetime,
    pomodoro_count: int,
    completed: bool,
) -> int:
    """Insert one record and return its id."""
    with get_session() as db:
        record = Session(
            start_time=start_time,
            end_time=end_time,
            pomodoro_count=pomodoro_count,
            completed=completed,
        )
        db.add(record)
        db.flush()
        record_id = record.id
    logger.info(
        "Saved session id=%s count=%s completed=%s",
        record_id, pomodoro_count, completed,
    )
    return record_id


def list_sessions() -> list[Session]:
    """All records, newest ``start_time`` first."""
    with get_session() as db:
        return (
            db.query(Session)
            .order_by(Session.start_time.desc(), Session.id.desc())
            .all()
        )
