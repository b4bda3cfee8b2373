"""Interval timer state machine for PomoClock.

States
------
STOPPED   Created, or reset before ever starting. Clock not advancing.
RUNNING   Active time accumulating for the current phase.
PAUSED    Clock frozen; paused wall time never counts toward the phase.

Transitions
-----------
any     → RUNNING                     (start)
RUNNING → PAUSED                      (pause)
PAUSED  → RUNNING                     (resume)
any     → RUNNING, STOPPED stays put  (reset / switch_to_work / switch_to_break)

Elapsed time
------------
No tick counting.  The timer banks finished running intervals in
``accumulated`` and measures the live interval from ``phase_start``:

    RUNNING   accumulated + (now - phase_start)
    PAUSED    accumulated + (pause_instant - phase_start)
    STOPPED   accumulated

so irregular polling never introduces drift.  The clock is injected
(``time.monotonic`` by default) which lets tests feed fabricated instants.

Invalid transitions (e.g. ``pause()`` while stopped) are not errors: the
command returns a :class:`TransitionResult` with ``applied=False`` and the
state is left untouched.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable


# ── enums ─────────────────────────────────────────────────────────────────


class Phase(Enum):
    WORK = "work"
    BREAK = "break"


class RunState(Enum):
    STOPPED = "stopped"
    RUNNING = "running"
    PAUSED = "paused"


# ── constants ─────────────────────────────────────────────────────────────

DEFAULT_WORK_MINUTES = 25
DEFAULT_BREAK_MINUTES = 5

Clock = Callable[[], float]


# ── value objects ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class TimerConfig:
    """Phase totals in seconds.  Both must be positive."""

    work_total: float = DEFAULT_WORK_MINUTES * 60
    break_total: float = DEFAULT_BREAK_MINUTES * 60

    def __post_init__(self) -> None:
        if self.work_total <= 0 or self.break_total <= 0:
            raise ValueError("Phase durations must be positive")

    @classmethod
    def from_minutes(cls, work_minutes: float, break_minutes: float) -> TimerConfig:
        return cls(work_total=work_minutes * 60, break_total=break_minutes * 60)

    def total_for(self, phase: Phase) -> float:
        return self.work_total if phase == Phase.WORK else self.break_total


@dataclass(frozen=True)
class TransitionResult:
    """Outcome of a timer command.  Truthy when the command took effect."""

    command: str
    applied: bool
    phase: Phase
    run_state: RunState

    def __bool__(self) -> bool:
        return self.applied


@dataclass(frozen=True)
class TimerSnapshot:
    """Everything the presentation layer reads once per tick."""

    phase: Phase
    run_state: RunState
    elapsed: float
    total: float

    @property
    def remaining(self) -> float:
        return max(0.0, self.total - self.elapsed)

    @property
    def percent_complete(self) -> float:
        """0.0 → 1.0 progress through the current phase."""
        return max(0.0, min(1.0, self.elapsed / self.total))

    @property
    def is_complete(self) -> bool:
        return self.elapsed >= self.total


# ── timer ─────────────────────────────────────────────────────────────────


class IntervalTimer:
    """Work/break phase clock that excludes paused time.

    Performs no I/O and schedules nothing; a driving loop polls it.
    """

    def __init__(
        self,
        config: TimerConfig | None = None,
        *,
        clock: Clock = time.monotonic,
    ) -> None:
        self._config: TimerConfig = config or TimerConfig()
        self._clock: Clock = clock

        self._phase: Phase = Phase.WORK
        self._run_state: RunState = RunState.STOPPED
        self._phase_start: float | None = None
        self._pause_instant: float | None = None
        self._accumulated: float = 0.0

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def config(self) -> TimerConfig:
        return self._config

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def run_state(self) -> RunState:
        return self._run_state

    @property
    def phase_start(self) -> float | None:
        """Instant the current running interval began (or last resumed)."""
        return self._phase_start

    @property
    def pause_instant(self) -> float | None:
        return self._pause_instant

    @property
    def accumulated(self) -> float:
        """Active seconds banked before the current running interval."""
        return self._accumulated

    # ══════════════════════════════════════════════════════════════════
    #  COMMANDS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> TransitionResult:
        """Hard-restart the phase clock.  Valid from any state."""
        self._phase_start = self._clock()
        self._pause_instant = None
        self._accumulated = 0.0
        self._run_state = RunState.RUNNING
        return self._result("start", True)

    def pause(self) -> TransitionResult:
        """Freeze the clock.  Only valid while RUNNING."""
        if self._run_state != RunState.RUNNING:
            return self._result("pause", False)
        self._pause_instant = self._clock()
        self._run_state = RunState.PAUSED
        return self._result("pause", True)

    def resume(self) -> TransitionResult:
        """Continue after a pause.  Only valid while PAUSED."""
        if self._run_state != RunState.PAUSED:
            return self._result("resume", False)
        now = self._clock()
        if self._phase_start is not None and self._pause_instant is not None:
            self._accumulated += max(0.0, self._pause_instant - self._phase_start)
        self._phase_start = now
        self._pause_instant = None
        self._run_state = RunState.RUNNING
        return self._result("resume", True)

    def reset(self) -> TransitionResult:
        """Zero the phase clock.

        A STOPPED timer stays STOPPED (its clock fields are still rearmed);
        any other state ends up RUNNING.
        """
        self._rearm()
        return self._result("reset", True)

    def switch_to_work(self) -> TransitionResult:
        self._phase = Phase.WORK
        self._rearm()
        return self._result("switch_to_work", True)

    def switch_to_break(self) -> TransitionResult:
        self._phase = Phase.BREAK
        self._rearm()
        return self._result("switch_to_break", True)

    # ══════════════════════════════════════════════════════════════════
    #  QUERIES
    # ══════════════════════════════════════════════════════════════════

    def elapsed(self) -> float:
        """Active seconds in the current phase."""
        if self._run_state == RunState.RUNNING and self._phase_start is not None:
            return self._accumulated + max(0.0, self._clock() - self._phase_start)
        if (
            self._run_state == RunState.PAUSED
            and self._phase_start is not None
            and self._pause_instant is not None
        ):
            return self._accumulated + max(0.0, self._pause_instant - self._phase_start)
        return self._accumulated

    def total_time(self) -> float:
        return self._config.total_for(self._phase)

    def remaining(self) -> float:
        return max(0.0, self.total_time() - self.elapsed())

    def percent_complete(self) -> float:
        return self.snapshot().percent_complete

    def is_complete(self) -> bool:
        return self.elapsed() >= self.total_time()

    def snapshot(self) -> TimerSnapshot:
        return TimerSnapshot(
            phase=self._phase,
            run_state=self._run_state,
            elapsed=self.elapsed(),
            total=self.total_time(),
        )

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _rearm(self) -> None:
        self._phase_start = self._clock()
        self._pause_instant = None
        self._accumulated = 0.0
        if self._run_state != RunState.STOPPED:
            self._run_state = RunState.RUNNING

    def _result(self, command: str, applied: bool) -> TransitionResult:
        return TransitionResult(
            command=command,
            applied=applied,
            phase=self._phase,
            run_state=self._run_state,
        )

    def __repr__(self) -> str:
        return (
            f"<IntervalTimer phase={self._phase.value} "
            f"state={self._run_state.value} elapsed={self.elapsed():.1f}s>"
        )
