"""Timer package."""

from .engine import (
    IntervalTimer,
    Phase,
    RunState,
    TimerConfig,
    TimerSnapshot,
    TransitionResult,
    DEFAULT_WORK_MINUTES,
    DEFAULT_BREAK_MINUTES,
)
from .session import SessionLoop

__all__ = [
    "IntervalTimer",
    "Phase",
    "RunState",
    "TimerConfig",
    "TimerSnapshot",
    "TransitionResult",
    "DEFAULT_WORK_MINUTES",
    "DEFAULT_BREAK_MINUTES",
    "SessionLoop",
]
