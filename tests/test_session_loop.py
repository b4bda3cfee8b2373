"""Tests for the Qt session loop that drives the interval timer.

Ticks are delivered by calling ``_on_tick()`` directly; the QTimer is only
checked for being started/stopped.
"""

import pytest

from pomoclock.database.store import list_sessions
from pomoclock.timer.engine import Phase, RunState, TimerSnapshot

from helpers import SignalCollector, advance_both


# ═══════════════════════════════════════════════════════════════════════════
#  LIFECYCLE
# ═══════════════════════════════════════════════════════════════════════════


class TestLifecycle:

    def test_begin_starts_work_phase(self, loop, wall_clock):
        loop.begin()
        assert loop.timer.run_state == RunState.RUNNING
        assert loop.timer.phase == Phase.WORK
        assert loop.session_start == wall_clock.now
        assert loop.is_polling

    def test_begin_emits_state_changed(self, loop):
        c = SignalCollector()
        loop.state_changed.connect(c)
        loop.begin()
        assert isinstance(c.last, TimerSnapshot)
        assert c.last.run_state == RunState.RUNNING

    def test_quit_stops_polling_and_emits_finished(self, loop):
        c = SignalCollector()
        loop.finished.connect(c)
        loop.begin()
        loop.quit()
        assert not loop.is_polling
        assert loop.is_finished
        assert len(c) == 1

    def test_quit_is_idempotent(self, loop):
        c = SignalCollector()
        loop.finished.connect(c)
        loop.begin()
        loop.quit()
        loop.quit()
        assert len(c) == 1

    def test_commands_ignored_after_quit(self, loop):
        loop.begin()
        loop.quit()
        loop.toggle_pause()
        assert loop.timer.run_state == RunState.RUNNING


# ═══════════════════════════════════════════════════════════════════════════
#  COMMANDS
# ═══════════════════════════════════════════════════════════════════════════


class TestCommands:

    def test_toggle_pause_and_resume(self, loop_no_db):
        loop_no_db.begin()
        loop_no_db.toggle_pause()
        assert loop_no_db.timer.run_state == RunState.PAUSED
        loop_no_db.toggle_pause()
        assert loop_no_db.timer.run_state == RunState.RUNNING

    def test_toggle_pause_noop_when_stopped(self, loop_no_db):
        c = SignalCollector()
        loop_no_db.state_changed.connect(c)
        loop_no_db.toggle_pause()
        assert loop_no_db.timer.run_state == RunState.STOPPED
        assert len(c) == 0

    def test_reset_zeroes_elapsed(self, loop_no_db, clock):
        loop_no_db.begin()
        clock.advance(20)
        loop_no_db.reset()
        assert loop_no_db.timer.elapsed() == 0

    def test_start_restarts_phase(self, loop_no_db, clock):
        loop_no_db.begin()
        clock.advance(20)
        loop_no_db.toggle_pause()
        loop_no_db.start()
        assert loop_no_db.timer.run_state == RunState.RUNNING
        assert loop_no_db.timer.elapsed() == 0

    def test_applied_commands_emit_state_changed(self, loop_no_db):
        loop_no_db.begin()
        c = SignalCollector()
        loop_no_db.state_changed.connect(c)
        loop_no_db.toggle_pause()
        assert c.last.run_state == RunState.PAUSED
        loop_no_db.reset()
        assert c.last.run_state == RunState.RUNNING
        assert len(c) == 2


# ═══════════════════════════════════════════════════════════════════════════
#  TICKS / PHASE FLIPS
# ═══════════════════════════════════════════════════════════════════════════


class TestTicks:

    def test_tick_emits_snapshot(self, loop_no_db, clock):
        c = SignalCollector()
        loop_no_db.tick.connect(c)
        loop_no_db.begin()
        clock.advance(15)
        loop_no_db._on_tick()
        assert c.last.elapsed == pytest.approx(15)
        assert c.last.remaining == pytest.approx(45)

    def test_incomplete_work_does_not_flip(self, loop_no_db, clock):
        loop_no_db.begin()
        clock.advance(59.9)
        loop_no_db._on_tick()
        assert loop_no_db.timer.phase == Phase.WORK
        assert loop_no_db.completed_count == 0

    def test_work_completion_switches_to_break(self, loop_no_db, clock):
        c = SignalCollector()
        loop_no_db.work_completed.connect(c)
        loop_no_db.begin()
        clock.advance(60)
        loop_no_db._on_tick()
        assert loop_no_db.timer.phase == Phase.BREAK
        assert loop_no_db.timer.run_state == RunState.RUNNING
        assert loop_no_db.timer.elapsed() == 0
        assert loop_no_db.completed_count == 1
        assert c.items == [1]

    def test_break_completion_switches_to_work(self, loop_no_db, clock):
        c = SignalCollector()
        loop_no_db.break_completed.connect(c)
        loop_no_db.begin()
        clock.advance(60)
        loop_no_db._on_tick()
        clock.advance(30)
        loop_no_db._on_tick()
        assert loop_no_db.timer.phase == Phase.WORK
        assert loop_no_db.completed_count == 1
        assert len(c) == 1

    def test_paused_complete_timer_does_not_flip(self, loop_no_db, clock):
        loop_no_db.begin()
        clock.advance(60)
        loop_no_db.toggle_pause()
        loop_no_db._on_tick()
        assert loop_no_db.timer.phase == Phase.WORK
        assert loop_no_db.completed_count == 0

    def test_paused_time_delays_completion(self, loop_no_db, clock):
        loop_no_db.begin()
        clock.advance(50)
        loop_no_db.toggle_pause()
        clock.advance(300)
        loop_no_db.toggle_pause()
        clock.advance(9)
        loop_no_db._on_tick()
        assert loop_no_db.timer.phase == Phase.WORK
        clock.advance(1)
        loop_no_db._on_tick()
        assert loop_no_db.timer.phase == Phase.BREAK

    def test_count_is_cumulative(self, loop_no_db, clock):
        loop_no_db.begin()
        for _ in range(3):
            clock.advance(60)
            loop_no_db._on_tick()
            clock.advance(30)
            loop_no_db._on_tick()
        assert loop_no_db.completed_count == 3
        assert loop_no_db.timer.phase == Phase.WORK


# ═══════════════════════════════════════════════════════════════════════════
#  PERSISTENCE
# ═══════════════════════════════════════════════════════════════════════════


class TestPersistence:

    def test_completed_work_is_recorded(self, loop, clock, wall_clock):
        loop.begin()
        start = wall_clock.now
        advance_both(clock, wall_clock, 60)
        loop._on_tick()

        rows = list_sessions()
        assert len(rows) == 1
        assert rows[0].completed is True
        assert rows[0].pomodoro_count == 1
        assert rows[0].start_time == start
        assert rows[0].end_time == wall_clock.now

    def test_breaks_are_not_recorded(self, loop, clock, wall_clock):
        loop.begin()
        advance_both(clock, wall_clock, 60)
        loop._on_tick()
        advance_both(clock, wall_clock, 30)
        loop._on_tick()
        assert len(list_sessions()) == 1

    def test_records_share_session_start(self, loop, clock, wall_clock):
        loop.begin()
        start = wall_clock.now
        for _ in range(2):
            advance_both(clock, wall_clock, 60)
            loop._on_tick()
            advance_both(clock, wall_clock, 30)
            loop._on_tick()
        rows = list_sessions()
        assert {r.start_time for r in rows} == {start}
        assert sorted(r.pomodoro_count for r in rows) == [1, 2]

    def test_quit_mid_work_records_abandoned(self, loop, clock, wall_clock):
        loop.begin()
        advance_both(clock, wall_clock, 61)
        loop.quit()
        rows = list_sessions()
        assert len(rows) == 1
        assert rows[0].completed is False
        assert rows[0].pomodoro_count == 0

    def test_short_work_not_recorded_on_quit(self, loop, clock, wall_clock):
        loop.begin()
        advance_both(clock, wall_clock, 60)
        loop.toggle_pause()
        loop.quit()
        assert list_sessions() == []

    def test_partial_second_past_threshold_not_recorded(self, loop, clock, wall_clock):
        loop.begin()
        advance_both(clock, wall_clock, 60.5)
        loop.toggle_pause()
        loop.quit()
        assert list_sessions() == []

    def test_quit_during_break_not_recorded(self, loop, clock, wall_clock):
        loop.begin()
        advance_both(clock, wall_clock, 60)
        loop._on_tick()
        advance_both(clock, wall_clock, 25)
        loop.quit()
        rows = list_sessions()
        assert len(rows) == 1
        assert rows[0].completed is True

    def test_quit_before_begin_records_nothing(self, loop):
        loop.quit()
        assert list_sessions() == []

    def test_db_disabled_records_nothing(self, loop_no_db, clock, wall_clock):
        loop_no_db.begin()
        advance_both(clock, wall_clock, 60)
        loop_no_db._on_tick()
        advance_both(clock, wall_clock, 61)
        loop_no_db._on_tick()
        assert list_sessions() == []

    def test_storage_failure_does_not_stop_loop(self, loop, clock, wall_clock, monkeypatch):
        from sqlalchemy.exc import OperationalError
        from pomoclock.database import store

        def boom(*args, **kwargs):
            raise OperationalError("INSERT", {}, Exception("disk full"))

        monkeypatch.setattr(store, "save_session", boom)
        loop.begin()
        advance_both(clock, wall_clock, 60)
        loop._on_tick()
        assert loop.timer.phase == Phase.BREAK
        assert loop.completed_count == 1
