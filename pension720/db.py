"""SQLAlchemy engine + session management for the ``sql`` history backend.

Uses a session-per-request pattern inside the Flask app and a plain
``with session_factory() as session`` block in the CLI.
"""

from __future__ import annotations

from flask import Flask, g
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from pension720 import models  # noqa: F401  (registers tables on Base.metadata)
from pension720.models.base import Base


def create_app_engine(database_url: str) -> Engine:
    return create_engine(database_url, pool_pre_ping=True, future=True)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Engine + session factory with all tables created."""

    engine = create_app_engine(database_url)
    # Create tables directly (no migrations for a single table).
    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def init_db(app: Flask) -> None:
    """Initialize database engine and per-request sessions."""

    session_factory = create_session_factory(str(app.config["DATABASE_URL"]))
    app.extensions["session_factory"] = session_factory

    @app.before_request
    def _open_session() -> None:
        g.db = session_factory()  # type: ignore[attr-defined]

    @app.teardown_request
    def _close_session(exc: BaseException | None) -> None:
        session: Session | None = getattr(g, "db", None)
        if session is None:
            return

        try:
            if exc is None:
                session.commit()
            else:
                session.rollback()
        finally:
            session.close()


def get_optional_session() -> Session | None:
    """Current request's session, or None when the json backend is active."""

    return getattr(g, "db", None)
