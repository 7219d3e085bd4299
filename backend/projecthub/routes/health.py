"""Health check endpoint."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from ..db import get_db_session
from ..models import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse, summary="Service health check")
def health_check(
    response: Response,
    db_session: Annotated[Session, Depends(get_db_session)],
) -> HealthResponse:
    """Report liveness and whether the database answers a trivial query.

    No session token is required, and the payload carries nothing beyond the
    two status strings.
    """

    try:
        db_session.connection().exec_driver_sql("SELECT 1")
    except SQLAlchemyError:
        logger.exception("Database health check failed")
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthResponse(status="degraded", database="unavailable")
    return HealthResponse(status="ok", database="ok")
