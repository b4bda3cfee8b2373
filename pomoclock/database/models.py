"""SQLAlchemy ORM models for PomoClock."""

from datetime import datetime
from sqlalchemy import Column, Integer, Boolean, DateTime
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class Session(Base):
    """One record per completed or abandoned work phase.

    ``start_time`` is when the app session began, so every record written
    by the same run shares it; ``pomodoro_count`` is cumulative.
    """

    __tablename__ = "sessions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    start_time = Column(DateTime, nullable=False, default=datetime.now)
    end_time = Column(DateTime, nullable=False, default=datetime.now)
    pomodoro_count = Column(Integer, nullable=False, default=0)
    completed = Column(Boolean, nullable=False, default=False)

    @property
    def duration_minutes(self) -> int:
        """Whole minutes between start and end (truncated)."""
        if self.start_time is None or self.end_time is None:
            return 0
        return int((self.end_time - self.start_time).total_seconds() / 60)

    def __repr__(self) -> str:
        return (
            f"<Session id={self.id} count={self.pomodoro_count} "
            f"completed={self.completed}>"
        )
