"""
SQLAlchemy/SQLModel engine construction.

There is no module-level session: the application factory creates one engine
and hands it to the stores explicitly (``IdeaStore(engine)``), so tests can
run each case against its own database file. ``get_engine()`` keeps a lazily
built default engine for scripts and Alembic, resolved from settings.
"""

from __future__ import annotations

import os
from pathlib import Path

from sqlalchemy import event, text
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

_engine: Engine | None = None

_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


def resolve_db_url() -> str:
    """
    Resolve database URL with precedence:
    1. DATABASE_URL environment variable
    2. config/app_config(.local).json  database.url
    3. Fallback: sqlite:///data/database.sqlite
    """
    from config.settings import settings
    return settings.database.url


def make_absolute_sqlite_url(url: str) -> str:
    """
    Resolve relative sqlite:/// paths against the project root so the DB
    lands in <project_root>/data regardless of cwd.
    """
    if not url.startswith("sqlite:///") or url in _MEMORY_URLS:
        return url
    rel_path = url[len("sqlite:///"):]
    if os.path.isabs(rel_path):
        return url
    root = Path(__file__).resolve().parents[2]
    abs_path = (root / rel_path).resolve()
    abs_path.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{abs_path}"


def create_db_engine(url: str | None = None, echo: bool = False) -> Engine:
    """Build a new engine for *url* (defaults to the configured database)."""
    db_url = make_absolute_sqlite_url(url or resolve_db_url())
    is_sqlite = db_url.startswith("sqlite")

    kwargs: dict = {"echo": echo}
    if is_sqlite:
        kwargs["connect_args"] = {"check_same_thread": False, "timeout": 30}
        if db_url in _MEMORY_URLS:
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True

    engine = create_engine(db_url, **kwargs)

    if is_sqlite:
        @event.listens_for(engine, "connect")
        def _set_sqlite_pragmas(dbapi_conn, _connection_record):
            cursor = dbapi_conn.cursor()
            if db_url not in _MEMORY_URLS:
                cursor.execute("PRAGMA journal_mode=WAL")
            cursor.execute("PRAGMA synchronous=NORMAL")
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.execute("PRAGMA busy_timeout=30000")
            cursor.close()

    return engine


def get_engine() -> Engine:
    """Return the default engine, creating it on first call."""
    global _engine
    if _engine is None:
        _engine = create_db_engine()
    return _engine


def init_db(engine: Engine | None = None) -> None:
    """
    Create the tables that are not yet present. Alembic owns real migrations;
    this covers tests and fresh installs.
    """
    from src.db import models as _models  # noqa: F401  register tables on SQLModel.metadata
    SQLModel.metadata.create_all(engine or get_engine())


def ping(engine: Engine) -> bool:
    """Cheap connectivity probe used by /health/detailed."""
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    return True
