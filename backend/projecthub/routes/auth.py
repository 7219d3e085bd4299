"""Session introspection endpoint."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from ..dependencies import require_user
from ..models import SessionResponse
from ..security import AuthenticatedSession

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get(
    "/session",
    response_model=SessionResponse,
    summary="Describe the caller's session",
)
async def read_session(user: Annotated[AuthenticatedSession, Depends(require_user)]) -> SessionResponse:
    """Return the identity carried by the bearer token.

    Clients use this to confirm a token is accepted before issuing project
    requests. Anonymous callers receive 401.
    """

    return SessionResponse(user_id=user.user_id)
