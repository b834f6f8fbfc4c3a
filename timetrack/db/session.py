"""SQLAlchemy engine and session helpers.

Nothing here is created at import time. ``create_app`` builds (or receives) an
engine and stores the session factory on ``app.state``; ``get_db`` pulls it
from there for every request, so tests can hand in their own engine.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from ..core.errors import StorageError

# ``Base`` is the parent class for every SQLAlchemy model defined in timetrack/models.
Base = declarative_base()


def make_engine(url: str) -> Engine:
    # SQLite connections get shared across FastAPI worker threads.
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args, pool_pre_ping=not url.startswith("sqlite"))


def make_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextmanager
def storage_errors(db: Session, action: str) -> Iterator[None]:
    """Roll back and re-raise driver failures as ``StorageError``.

    ``IntegrityError`` is left alone so callers can map constraint violations
    to something more specific.
    """

    try:
        yield
    except IntegrityError:
        db.rollback()
        raise
    except SQLAlchemyError as exc:
        db.rollback()
        raise StorageError(f"{action} failed") from exc


def get_db(request: Request) -> Iterator[Session]:
    """FastAPI dependency that yields a session and guarantees cleanup."""

    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
