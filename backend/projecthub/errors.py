"""HTTP error taxonomy shared by the routes and repositories.

Every failure a handler can report maps to exactly one of these classes. They
subclass :class:`fastapi.HTTPException` so the framework renders them as
``{"detail": "..."}`` with the matching status code.
"""

from __future__ import annotations

from fastapi import HTTPException, status


class UnauthenticatedError(HTTPException):
    """No authenticated identity accompanies the request."""

    def __init__(self, detail: str = "Not authenticated.") -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class BadRequestError(HTTPException):
    def __init__(self, detail: str) -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class NotFoundError(HTTPException):
    """No row matches both the identifier and the requesting owner.

    Used for foreign rows as well, so callers cannot probe for the existence
    of other users' resources.
    """

    def __init__(self, detail: str = "Project not found.") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ConflictError(HTTPException):
    def __init__(self, detail: str) -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class InternalError(HTTPException):
    """Unexpected store or runtime failure; the detail is always generic."""

    def __init__(self, detail: str) -> None:
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)
