"""Database utilities for the application's relational store."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.engine import Engine, make_url
from sqlmodel import Session, SQLModel, create_engine

from .config import resolve_database_url, resolve_sql_echo


def _ensure_parent_directory(url: str) -> None:
    """Create the directory structure for a file-backed SQLite database."""

    database = make_url(url).database
    if database and database != ":memory:":
        Path(database).parent.mkdir(parents=True, exist_ok=True)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores REFERENCES clauses, including ON DELETE CASCADE, unless
    # enabled per connection.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


def create_db_engine(url: str | None = None, *, echo: bool | None = None, **kwargs) -> Engine:
    """Build an engine for ``url`` (defaults to the configured database).

    SQLite engines are created with ``check_same_thread=False`` and foreign key
    enforcement on every new connection.
    """

    database_url = url or resolve_database_url()
    is_sqlite = database_url.startswith("sqlite")
    if is_sqlite:
        _ensure_parent_directory(database_url)
        kwargs.setdefault("connect_args", {"check_same_thread": False})

    engine = create_engine(
        database_url,
        echo=resolve_sql_echo() if echo is None else echo,
        **kwargs,
    )
    if is_sqlite:
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def init_db(engine: Engine) -> None:
    """Create all tables registered on the SQLModel metadata."""

    from . import entities  # noqa: F401

    SQLModel.metadata.create_all(engine)


def get_db_session(request: Request) -> Iterator[Session]:
    """Yield an ORM session bound to the engine the app was created with."""

    with Session(request.app.state.engine) as session:
        yield session
