"""Session loop: drives an :class:`IntervalTimer` from the Qt event loop.

Once per tick the loop checks for phase completion, records finished work
phases, flips between work and break, and publishes a snapshot for the
window to render.  Breaks are never recorded.  Quitting during a work phase
that has run long enough stores an abandoned (``completed=False``) record.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from PyQt6.QtCore import QObject, QTimer, pyqtSignal
from sqlalchemy.exc import SQLAlchemyError

from .engine import IntervalTimer, Phase, RunState

logger = logging.getLogger(__name__)

DEFAULT_TICK_INTERVAL_MS = 100
DEFAULT_MIN_ABANDONED_SECONDS = 60


class SessionLoop(QObject):
    """Polls the timer and reports phase changes.

    Signals
    -------
    tick(snapshot: TimerSnapshot)
        Emitted on every poll.
    state_changed(snapshot: TimerSnapshot)
        Emitted after every user command that took effect.
    work_completed(completed_count: int)
        A work phase reached its total; the break has already begun.
    break_completed()
        A break reached its total; the next work phase has already begun.
    finished()
        Emitted once, by :meth:`quit`.
    """

    tick = pyqtSignal(object)
    state_changed = pyqtSignal(object)
    work_completed = pyqtSignal(int)
    break_completed = pyqtSignal()
    finished = pyqtSignal()

    def __init__(
        self,
        timer: IntervalTimer,
        parent: QObject | None = None,
        *,
        db_enabled: bool = True,
        tick_interval_ms: int = DEFAULT_TICK_INTERVAL_MS,
        min_abandoned_seconds: float = DEFAULT_MIN_ABANDONED_SECONDS,
        wall_clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        super().__init__(parent)
        self._timer = timer
        self._db_enabled = db_enabled
        self._min_abandoned_seconds = min_abandoned_seconds
        self._wall_clock = wall_clock

        self._session_start: datetime | None = None
        self._completed_count: int = 0
        self._finished: bool = False

        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(tick_interval_ms)
        self._qt_timer.timeout.connect(self._on_tick)

    # ── properties ────────────────────────────────────────────────────

    @property
    def timer(self) -> IntervalTimer:
        return self._timer

    @property
    def completed_count(self) -> int:
        """Work phases completed since :meth:`begin`."""
        return self._completed_count

    @property
    def session_start(self) -> datetime | None:
        return self._session_start

    @property
    def is_polling(self) -> bool:
        return self._qt_timer.isActive()

    @property
    def is_finished(self) -> bool:
        return self._finished

    # ── commands ──────────────────────────────────────────────────────

    def begin(self) -> None:
        """Start the session: stamp the start time and run the work phase."""
        if self._finished:
            return
        self._session_start = self._wall_clock()
        self._timer.start()
        self._qt_timer.start()
        logger.info(
            "Session started: work=%ss break=%ss",
            self._timer.config.work_total,
            self._timer.config.break_total,
        )
        self.state_changed.emit(self._timer.snapshot())

    def start(self) -> None:
        """Restart the current phase from zero."""
        self._command(self._timer.start)

    def toggle_pause(self) -> None:
        if self._timer.run_state == RunState.RUNNING:
            self._command(self._timer.pause)
        elif self._timer.run_state == RunState.PAUSED:
            self._command(self._timer.resume)

    def reset(self) -> None:
        self._command(self._timer.reset)

    def quit(self) -> None:
        """Stop polling and record an abandoned work phase if it ran long enough."""
        if self._finished:
            return
        self._finished = True
        self._qt_timer.stop()

        elapsed = self._timer.elapsed()
        if (
            self._session_start is not None
            and self._timer.phase == Phase.WORK
            and int(elapsed) > self._min_abandoned_seconds
        ):
            logger.info("Quitting mid-work after %.0fs; recording abandoned session", elapsed)
            self._persist(completed=False)
        else:
            logger.info("Session ended: %s work phases completed", self._completed_count)
        self.finished.emit()

    # ── internal ──────────────────────────────────────────────────────

    def _command(self, action: Callable[[], object]) -> None:
        if self._finished:
            return
        if action():
            self.state_changed.emit(self._timer.snapshot())

    def _on_tick(self) -> None:
        if self._timer.run_state == RunState.RUNNING and self._timer.is_complete():
            if self._timer.phase == Phase.WORK:
                self._completed_count += 1
                logger.info("Work phase %s complete", self._completed_count)
                self._persist(completed=True)
                self._timer.switch_to_break()
                self.work_completed.emit(self._completed_count)
            else:
                logger.info("Break complete")
                self._timer.switch_to_work()
                self.break_completed.emit()

        self.tick.emit(self._timer.snapshot())

    def _persist(self, *, completed: bool) -> None:
        if not self._db_enabled or self._session_start is None:
            return
        from ..database.store import save_session

        try:
            save_session(
                self._session_start,
                self._wall_clock(),
                self._completed_count,
                completed,
            )
        except SQLAlchemyError:
            logger.exception("Could not record session")
