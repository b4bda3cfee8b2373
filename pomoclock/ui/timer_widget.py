"""Main timer display widget.

Layout (top → bottom):
    - Phase title ("Work Session (25m)" / "Break (5m)")
    - Progress bar labelled with the MM:SS countdown
    - Status line (Running / Paused / Stopped)
    - Completed work phase count
    - Key help
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QLabel, QFrame, QProgressBar,
)

from ..timer.engine import Phase, TimerSnapshot
from ..timer.session import SessionLoop
from .formatting import (
    HELP_TEXT, STATUS_LABELS, completed_text, format_countdown,
    phase_title, progress_percent,
)


PHASE_COLORS: dict[Phase, str] = {
    Phase.WORK:  "#E64553",
    Phase.BREAK: "#40A02B",
}


class TimerWidget(QWidget):
    """Renders the loop's snapshots.  Holds no timer state of its own."""

    def __init__(self, loop: SessionLoop, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._loop = loop
        self._build_ui()
        self._connect_signals()
        self.refresh(loop.timer.snapshot())

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.setSpacing(0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(24, 20, 24, 20)
        layout.setSpacing(12)

        self._title = QLabel(card)
        self._title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._title.setStyleSheet("font-size: 20px; font-weight: bold;")
        layout.addWidget(self._title)

        self._gauge = QProgressBar(card)
        self._gauge.setRange(0, 100)
        self._gauge.setTextVisible(True)
        self._gauge.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._gauge.setMinimumHeight(36)
        layout.addWidget(self._gauge)

        self._status = QLabel(card)
        self._status.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._status)

        self._completed = QLabel(card)
        self._completed.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._completed)

        self._help = QLabel(HELP_TEXT, card)
        self._help.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._help.setStyleSheet("color: #7A7A9A;")
        layout.addWidget(self._help)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._loop.tick.connect(self.refresh)
        self._loop.state_changed.connect(self.refresh)

    # ── slots ─────────────────────────────────────────────────────────────

    def refresh(self, snapshot: TimerSnapshot) -> None:
        self._title.setText(phase_title(snapshot.phase, snapshot.total))
        self._gauge.setValue(progress_percent(snapshot))
        self._gauge.setFormat(format_countdown(snapshot.remaining))
        self._gauge.setStyleSheet(
            "QProgressBar::chunk { background-color: %s; }"
            % PHASE_COLORS[snapshot.phase]
        )
        self._status.setText(STATUS_LABELS[snapshot.run_state])
        self._completed.setText(completed_text(self._loop.completed_count))

    # ── read-only accessors (tests) ───────────────────────────────────────

    @property
    def title_text(self) -> str:
        return self._title.text()

    @property
    def countdown_text(self) -> str:
        return self._gauge.format()

    @property
    def status_text(self) -> str:
        return self._status.text()

    @property
    def completed_label_text(self) -> str:
        return self._completed.text()

    @property
    def progress_value(self) -> int:
        return self._gauge.value()
