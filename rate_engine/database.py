"""Engine and session handling for the exchange-rate audit table."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, scoped_session, sessionmaker


class Base(DeclarativeBase):
    pass


# One session per thread: request handlers and the rate-store worker never share.
SessionLocal = scoped_session(sessionmaker(autoflush=False))

_engine: Optional[Engine] = None


def init_app(app: Any) -> Engine:
    """Bind ``SessionLocal`` to ``SQLALCHEMY_DATABASE_URI``; the engine is created once per process."""

    global _engine

    if _engine is None:
        _engine = create_engine(app.config["SQLALCHEMY_DATABASE_URI"])
        SessionLocal.configure(bind=_engine)

    app.teardown_appcontext(_release_session)
    app.extensions["sqlalchemy_engine"] = _engine
    return _engine


def get_engine() -> Engine:
    if _engine is None:
        raise RuntimeError("Database engine has not been initialized. Call init_app first.")
    return _engine


def get_session() -> scoped_session:
    return SessionLocal


@contextmanager
def worker_session(factory: Any = None) -> Iterator[Session]:
    """Session for a background thread, released when the unit of work ends.

    Worker threads outlive any app context, so the teardown hook never
    removes their thread-local session.
    """

    factory = factory or SessionLocal
    try:
        yield factory()
    finally:
        remove = getattr(factory, "remove", None)
        if callable(remove):
            remove()


def dispose_engine() -> None:
    """Close pooled connections and forget the engine so ``init_app`` can rebind."""

    global _engine

    SessionLocal.remove()
    if _engine is not None:
        _engine.dispose()
        _engine = None


def _release_session(_: Optional[BaseException] = None) -> None:
    SessionLocal.remove()
