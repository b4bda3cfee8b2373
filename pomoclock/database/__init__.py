"""Database package."""

from .db import configure_engine, get_session, init_db
from .models import Session
from .store import list_sessions, save_session

__all__ = [
    "configure_engine",
    "get_session",
    "init_db",
    "Session",
    "list_sessions",
    "save_session",
]
