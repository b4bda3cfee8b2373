"""Shared test helpers for PomoClock."""

from datetime import datetime, timedelta


class FakeClock:
    """Monotonic clock stand-in; advance it by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeWallClock:
    """``datetime.now`` stand-in that moves in step with tests."""

    def __init__(self, start: datetime = datetime(2024, 3, 4, 9, 0, 0)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


def advance_both(clock: FakeClock, wall_clock: FakeWallClock, seconds: float) -> None:
    """Move the monotonic and wall clocks together."""
    clock.advance(seconds)
    wall_clock.advance(seconds)
