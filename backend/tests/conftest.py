from __future__ import annotations

from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlmodel import Session

from projecthub.config import SECURITY_CONFIG
from projecthub.db import create_db_engine, init_db
from projecthub.main import create_app


@pytest.fixture(autouse=True)
def set_secret(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure the session secret is configured for every test case."""

    monkeypatch.setenv(SECURITY_CONFIG.session_secret_env_var, "a" * 64)


@pytest.fixture()
def engine(tmp_path: Path) -> Generator[Engine, None, None]:
    """Point the application at an isolated SQLite file for each test."""

    test_engine = create_db_engine(f"sqlite:///{tmp_path / 'app.db'}", echo=False)
    init_db(test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Generator[Session, None, None]:
    """Direct ORM access for seeding rows and inspecting the store."""

    with Session(engine) as session:
        yield session


@pytest.fixture()
def client(engine: Engine) -> Generator[TestClient, None, None]:
    """Provide a FastAPI test client bound to the isolated database."""

    app = create_app(engine=engine)
    with TestClient(app) as test_client:
        yield test_client
