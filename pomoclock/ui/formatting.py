"""Pure text helpers for the timer display."""

from __future__ import annotations

import math

from ..timer.engine import Phase, RunState, TimerSnapshot


STATUS_LABELS: dict[RunState, str] = {
    RunState.RUNNING: "Running",
    RunState.PAUSED:  "Paused",
    RunState.STOPPED: "Stopped",
}


def format_countdown(remaining_seconds: float) -> str:
    """1499.2 → '25:00', 0 → '00:00'.  Partial seconds round up."""
    total = max(0, math.ceil(remaining_seconds))
    minutes, seconds = divmod(total, 60)
    return f"{minutes:02d}:{seconds:02d}"


def phase_title(phase: Phase, total_seconds: float) -> str:
    """'Work Session (25m)' / 'Break (5m)'."""
    minutes = int(round(total_seconds / 60))
    if phase == Phase.WORK:
        return f"Work Session ({minutes}m)"
    return f"Break ({minutes}m)"


def progress_percent(snapshot: TimerSnapshot) -> int:
    """Integer 0-100 for a progress bar."""
    return int(snapshot.percent_complete * 100)


def completed_text(count: int) -> str:
    return f"Completed: {count}"


HELP_TEXT = "Press P to pause/resume, R to reset, Q to quit"
