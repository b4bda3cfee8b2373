"""Shared pytest fixtures for PomoClock tests."""

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication  # noqa: E402

from pomoclock.database.db import configure_engine, init_db  # noqa: E402
from pomoclock.timer.engine import IntervalTimer, TimerConfig  # noqa: E402
from pomoclock.timer.session import SessionLoop  # noqa: E402

from helpers import FakeClock, FakeWallClock  # noqa: E402


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield


@pytest.fixture(autouse=True)
def app_home(tmp_path, monkeypatch):
    """Keep settings files out of the real home directory."""
    monkeypatch.setenv("POMOCLOCK_HOME", str(tmp_path / "home"))
    yield tmp_path / "home"


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def wall_clock():
    return FakeWallClock()


@pytest.fixture
def timer(clock):
    """25/5 minute timer on a fake clock."""
    return IntervalTimer(TimerConfig.from_minutes(25, 5), clock=clock)


@pytest.fixture
def loop(qapp, clock, wall_clock):
    """SessionLoop over a 60 s / 30 s timer with DB enabled."""
    timer = IntervalTimer(TimerConfig(work_total=60, break_total=30), clock=clock)
    return SessionLoop(timer, db_enabled=True, wall_clock=wall_clock)


@pytest.fixture
def loop_no_db(qapp, clock, wall_clock):
    """SessionLoop with persistence disabled (pure loop tests)."""
    timer = IntervalTimer(TimerConfig(work_total=60, break_total=30), clock=clock)
    return SessionLoop(timer, db_enabled=False, wall_clock=wall_clock)
