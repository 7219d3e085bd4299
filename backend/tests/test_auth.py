from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from projecthub.config import SECURITY_CONFIG, ConfigurationError, load_session_secret
from projecthub.security import (
    AnonymousSession,
    AuthenticatedSession,
    authenticate,
    compute_session_signature,
    issue_session_token,
)

from .helpers import auth_headers

SECRET = b"\xaa" * 32


def test_session_endpoint_returns_user_id(client: TestClient) -> None:
    response = client.get("/auth/session", headers=auth_headers("user-123"))
    assert response.status_code == 200
    assert response.json() == {"user_id": "user-123"}


@pytest.mark.parametrize(
    "authorization",
    [None, "", "Bearer", "Bearer ", "Basic dTE6cHc=", "Bearer u1", "Bearer .abc", "Bearer u1."],
)
def test_session_endpoint_rejects_unusable_headers(client: TestClient, authorization: str | None) -> None:
    headers = {} if authorization is None else {"Authorization": authorization}
    response = client.get("/auth/session", headers=headers)
    assert response.status_code == 401
    assert response.json()["detail"] == "Not authenticated."
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_token_signed_with_another_secret_is_rejected(client: TestClient) -> None:
    token = issue_session_token(secret=b"\xbb" * 32, user_id="u1")
    response = client.get("/auth/session", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_missing_secret_is_a_server_error(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    headers = auth_headers("u1")
    monkeypatch.delenv(SECURITY_CONFIG.session_secret_env_var)
    response = client.get("/projects/1", headers=headers)
    assert response.status_code == 500
    assert response.json()["detail"] == "Session secret not configured."


def test_health_check_needs_no_session(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database": "ok"}


def test_authenticate_round_trip() -> None:
    token = issue_session_token(secret=SECRET, user_id="u1")
    assert token == f"u1.{compute_session_signature(secret=SECRET, user_id='u1')}"
    assert authenticate(f"Bearer {token}", secret=SECRET) == AuthenticatedSession(user_id="u1")


def test_authenticate_rejects_tampered_user_id() -> None:
    signature = compute_session_signature(secret=SECRET, user_id="u1")
    assert authenticate(f"Bearer u2.{signature}", secret=SECRET) == AnonymousSession()


@pytest.mark.parametrize("user_id", ["", "first.last"])
def test_issue_session_token_rejects_unrepresentable_user_ids(user_id: str) -> None:
    with pytest.raises(ValueError):
        issue_session_token(secret=SECRET, user_id=user_id)


@pytest.mark.parametrize(
    ("value", "message"),
    [
        ("zz", "hex-encoded"),
        ("ab" * 8, "at least 32 bytes"),
    ],
)
def test_load_session_secret_validates_value(monkeypatch: pytest.MonkeyPatch, value: str, message: str) -> None:
    monkeypatch.setenv(SECURITY_CONFIG.session_secret_env_var, value)
    with pytest.raises(ConfigurationError, match=message):
        load_session_secret()


def test_load_session_secret_requires_variable(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(SECURITY_CONFIG.session_secret_env_var)
    with pytest.raises(ConfigurationError, match="missing"):
        load_session_secret()
