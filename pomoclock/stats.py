"""Productivity statistics over stored session records.

Durations are summed per record in whole minutes (truncated), then grouped
by the calendar day of ``start_time`` in Python to avoid SQL date function
portability issues.
"""

from __future__ import annotations

import math
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date

from sqlalchemy import func

from .database.db import get_session
from .database.models import Session

TOP_DAYS = 5


# ═══════════════════════════════════════════════════════════════════════════
#  DATA
# ═══════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class DayStats:
    day: date
    sessions: int
    minutes: int


@dataclass
class StatsReport:
    """Snapshot of everything ``pomoclock stats`` prints."""

    total_sessions: int = 0
    completed_sessions: int = 0
    total_minutes: int = 0
    top_days: list[DayStats] = field(default_factory=list)

    @property
    def completion_rate(self) -> int:
        """Percentage of records that were completed, halves rounded up."""
        if self.total_sessions <= 0:
            return 0
        return math.floor(self.completed_sessions / self.total_sessions * 100 + 0.5)


def load_stats(limit_days: int = TOP_DAYS) -> StatsReport:
    """Run all queries in a single session and return a filled report."""
    report = StatsReport()

    with get_session() as db:
        report.total_sessions = db.query(func.count(Session.id)).scalar() or 0
        report.completed_sessions = (
            db.query(func.count(Session.id))
            .filter(Session.completed.is_(True))
            .scalar()
        ) or 0
        rows = db.query(Session).all()

    per_day_sessions: dict[date, int] = defaultdict(int)
    per_day_minutes: dict[date, int] = defaultdict(int)
    for row in rows:
        minutes = row.duration_minutes
        report.total_minutes += minutes
        day = row.start_time.date()
        per_day_sessions[day] += 1
        per_day_minutes[day] += minutes

    days = [
        DayStats(day=day, sessions=per_day_sessions[day], minutes=per_day_minutes[day])
        for day in per_day_sessions
    ]
    days.sort(key=lambda d: (d.minutes, d.day), reverse=True)
    report.top_days = days[:limit_days]
    return report


# ═══════════════════════════════════════════════════════════════════════════
#  FORMAT HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _format_hours_minutes(total_minutes: int) -> str:
    """125 → '2 hours 5 minutes'."""
    hours, mins = divmod(max(0, total_minutes), 60)
    return f"{hours} hours {mins} minutes"


def format_report(report: StatsReport) -> str:
    lines = [
        "Productivity Statistics",
        "==========================",
        f"Total Sessions: {report.total_sessions}",
        f"Completed Sessions: {report.completed_sessions}",
        f"Completion Rate: {report.completion_rate}%",
        f"Total Focus Time: {_format_hours_minutes(report.total_minutes)}",
        "",
        "Most Productive Days:",
        "--------------------",
    ]
    for day in report.top_days:
        lines.append(
            f"{day.day.isoformat()}: {day.sessions} sessions, "
            f"{_format_hours_minutes(day.minutes)}"
        )
    lines.append("")
    lines.append("Tip: Run 'pomoclock export' to get detailed session data")
    return "\n".join(lines)
