from __future__ import annotations

import os
from typing import Any, Iterable

from fastapi.testclient import TestClient
from sqlmodel import Session

from projecthub.config import SECURITY_CONFIG
from projecthub.entities import Document, Project
from projecthub.security import issue_session_token


def auth_headers(user_id: str) -> dict[str, str]:
    """Return an Authorization header carrying a valid token for ``user_id``."""

    secret = bytes.fromhex(os.environ[SECURITY_CONFIG.session_secret_env_var])
    return {"Authorization": f"Bearer {issue_session_token(secret=secret, user_id=user_id)}"}


def create_project(client: TestClient, user_id: str, name: str) -> dict[str, Any]:
    response = client.post("/projects", json={"name": name}, headers=auth_headers(user_id))
    assert response.status_code == 201
    return response.json()


def seed_project(
    session: Session,
    *,
    owner_id: str,
    name: str,
    project_id: int | None = None,
    document_ids: Iterable[int] = (),
) -> int:
    """Insert a project and its documents directly through the ORM."""

    project = Project(id=project_id, name=name, owner_id=owner_id)
    session.add(project)
    session.commit()
    session.refresh(project)
    key = project.id
    for document_id in document_ids:
        session.add(Document(id=document_id, project_id=key, title=f"Doc {document_id}", content="body"))
    session.commit()
    return key
