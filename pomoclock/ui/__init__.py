"""UI package."""

from .timer_widget import TimerWidget
from .formatting import format_countdown, phase_title

__all__ = [
    "TimerWidget",
    "format_countdown",
    "phase_title",
]
