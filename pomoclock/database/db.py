"""SQLite engine for the session store.

The engine is built on first use from :func:`default_url` unless a caller
has already pointed the store elsewhere with :func:`configure_engine`.
"""

import logging
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session as OrmSession

from ..paths import app_support_dir, db_path
from .models import Base

logger = logging.getLogger(__name__)

_engine: Engine | None = None
_SessionFactory: sessionmaker | None = None


def default_url() -> str:
    """``sqlite:///`` URL of ``sessions.db`` in the data directory."""
    app_support_dir().mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{db_path()}"


def configure_engine(url: str | None = None) -> Engine:
    """Bind the store to *url* (the on-disk database when omitted).

    Any previously built session factory is discarded so new sessions use
    the new engine.
    """
    global _engine, _SessionFactory
    _engine = create_engine(
        url or default_url(),
        connect_args={"check_same_thread": False},
    )
    _SessionFactory = sessionmaker(bind=_engine, expire_on_commit=False)
    logger.debug("Session store bound to %s", _engine.url)
    return _engine


def init_db() -> None:
    """Create the sessions table if it is missing."""
    engine = _engine if _engine is not None else configure_engine()
    Base.metadata.create_all(engine)


@contextmanager
def get_session():
    """Yield an ORM session; commit on success, rollback on error."""
    if _SessionFactory is None:
        configure_engine()
    session: OrmSession = _SessionFactory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
