"""Main application window for PomoClock."""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QColor, QIcon, QPainter, QPixmap
from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QSystemTrayIcon,
)

from .settings import Settings
from .timer.engine import IntervalTimer, TimerConfig
from .timer.session import SessionLoop
from .ui.timer_widget import TimerWidget

logger = logging.getLogger(__name__)


def _make_icon() -> QIcon:
    """Tomato-red circle used for the window and tray icon."""
    pixmap = QPixmap(64, 64)
    pixmap.fill(QColor(0, 0, 0, 0))
    p = QPainter(pixmap)
    p.setRenderHint(QPainter.RenderHint.Antialiasing)
    p.setBrush(QColor("#E64553"))
    p.setPen(QColor("#E64553").darker(120))
    p.drawEllipse(4, 4, 56, 56)
    p.end()
    return QIcon(pixmap)


class PomoClockApp(QMainWindow):
    """Main application window.

    Key bindings: ``P`` pause/resume, ``R`` reset, ``Q`` or ``Esc`` quit.
    Closing the window also quits the session.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        loop: SessionLoop | None = None,
    ) -> None:
        super().__init__()
        self._settings = settings
        self.setWindowTitle("PomoClock")
        self.setMinimumSize(420, 300)

        # ── session loop ──────────────────────────────────────────────
        if loop is None:
            timer = IntervalTimer(
                TimerConfig.from_minutes(settings.work_minutes, settings.break_minutes)
            )
            loop = SessionLoop(
                timer,
                parent=self,
                tick_interval_ms=settings.tick_interval_ms,
                min_abandoned_seconds=settings.min_abandoned_seconds,
            )
        self._loop = loop
        self._loop.work_completed.connect(self._on_work_completed)
        self._loop.break_completed.connect(self._on_break_completed)
        self._loop.finished.connect(self.close)

        # ── layout ────────────────────────────────────────────────────
        central = QWidget(self)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(16, 16, 16, 16)
        self._timer_widget = TimerWidget(self._loop, central)
        layout.addWidget(self._timer_widget)
        self.setCentralWidget(central)

        # ── tray (notifications) ──────────────────────────────────────
        icon = _make_icon()
        self.setWindowIcon(icon)
        self._tray_icon: QSystemTrayIcon | None = None
        if QSystemTrayIcon.isSystemTrayAvailable():
            self._tray_icon = QSystemTrayIcon(icon, self)
            self._tray_icon.setToolTip("PomoClock")
            self._tray_icon.show()

    @property
    def loop(self) -> SessionLoop:
        return self._loop

    @property
    def timer_widget(self) -> TimerWidget:
        return self._timer_widget

    def start_session(self) -> None:
        self._loop.begin()

    # ══════════════════════════════════════════════════════════════════
    #  NOTIFICATIONS
    # ══════════════════════════════════════════════════════════════════

    def _send_notification(self, title: str, body: str) -> None:
        """Show a desktop notification via the tray icon."""
        if not self._settings.notifications_enabled:
            return
        if self._tray_icon is None:
            logger.debug("No system tray; skipping notification %r", title)
            return
        self._tray_icon.showMessage(title, body)

    def _on_work_completed(self, count: int) -> None:
        self._send_notification("Work Session Complete!", "Time for a break!")

    def _on_break_completed(self) -> None:
        self._send_notification("Break Complete!", "Time to get back to work!")

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW EVENTS
    # ══════════════════════════════════════════════════════════════════

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._loop.quit()
        if self._tray_icon is not None:
            self._tray_icon.hide()
        event.accept()

    def keyPressEvent(self, event) -> None:  # type: ignore[override]
        """P pauses/resumes, R resets, Q or Escape quits."""
        key = event.key()
        if key == Qt.Key.Key_P:
            self._loop.toggle_pause()
            event.accept()
            return
        if key == Qt.Key.Key_R:
            self._loop.reset()
            event.accept()
            return
        if key in (Qt.Key.Key_Q, Qt.Key.Key_Escape):
            self._loop.quit()
            event.accept()
            return
        super().keyPressEvent(event)
