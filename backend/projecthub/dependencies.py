"""Reusable FastAPI dependency providers."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status
from sqlmodel import Session as DbSession

from .config import ConfigurationError, load_session_secret
from .db import get_db_session
from .errors import UnauthenticatedError
from .repositories.projects import ProjectsRepository
from .security import AnonymousSession, AuthenticatedSession, Session, authenticate

logger = logging.getLogger(__name__)


def get_session_secret() -> bytes:
    """Load the session secret, reporting misconfiguration as a server error."""

    try:
        return load_session_secret()
    except ConfigurationError as exc:
        logger.error("Session secret unavailable: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Session secret not configured.",
        ) from exc


async def current_session(
    secret: Annotated[bytes, Depends(get_session_secret)],
    authorization: Annotated[str | None, Header()] = None,
) -> Session:
    """Resolve the caller's session; never fails for a bad token."""

    return authenticate(authorization, secret=secret)


async def require_user(session: Annotated[Session, Depends(current_session)]) -> AuthenticatedSession:
    """Reject anonymous callers before any store access happens."""

    if isinstance(session, AnonymousSession):
        raise UnauthenticatedError()
    return session


def get_projects_repository(
    db_session: Annotated[DbSession, Depends(get_db_session)],
) -> ProjectsRepository:
    return ProjectsRepository(db_session)
