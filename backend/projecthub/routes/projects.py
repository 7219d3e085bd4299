"""Project management endpoints, all scoped to the authenticated owner."""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request, status

from ..dependencies import get_projects_repository, require_user
from ..errors import BadRequestError
from ..models import (
    NAME_MAX_LENGTH,
    DocumentCreateRequest,
    DocumentResponse,
    ProjectCreateRequest,
    ProjectDetailResponse,
    ProjectRenameRequest,
    ProjectResponse,
    ProjectSummaryResponse,
)
from ..repositories.projects import ProjectsRepository
from ..security import AuthenticatedSession

router = APIRouter(prefix="/projects", tags=["projects"])

CurrentUser = Annotated[AuthenticatedSession, Depends(require_user)]
Repository = Annotated[ProjectsRepository, Depends(get_projects_repository)]


async def read_rename_body(request: Request) -> Any:
    """Return the decoded JSON body, or ``None`` when it is absent or malformed."""

    try:
        return await request.json()
    except ValueError:
        return None


def validate_new_name(body: Any) -> str:
    """Return the trimmed new name from a rename body or raise 400.

    Anything other than a JSON object with a non-blank string ``name`` is
    rejected the same way, including bodies that are not JSON at all.
    """

    name = body.get("name") if isinstance(body, dict) else None
    name = name.strip() if isinstance(name, str) else ""
    if not name:
        raise BadRequestError("New name is required.")
    if len(name) > NAME_MAX_LENGTH:
        raise BadRequestError(f"Project name must be at most {NAME_MAX_LENGTH} characters.")
    return name


@router.post(
    "",
    response_model=ProjectSummaryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new project",
)
def create_project(
    payload: ProjectCreateRequest,
    user: CurrentUser,
    repository: Repository,
) -> ProjectSummaryResponse:
    return repository.create_project(user.user_id, payload.name)


@router.get(
    "",
    response_model=list[ProjectSummaryResponse],
    summary="List the caller's projects",
)
def list_projects(user: CurrentUser, repository: Repository) -> list[ProjectSummaryResponse]:
    """Return the caller's projects ordered case-insensitively by name."""

    return repository.list_projects(user.user_id)


@router.get(
    "/{project_id}",
    response_model=ProjectDetailResponse,
    summary="Retrieve a project with its documents",
)
def get_project(project_id: str, user: CurrentUser, repository: Repository) -> ProjectDetailResponse:
    """Fetch an owned project, its documents and a document count."""

    return repository.get_project(project_id, user.user_id)


@router.delete(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a project and its documents",
)
def delete_project(project_id: str, user: CurrentUser, repository: Repository) -> None:
    repository.delete_project(project_id, user.user_id)


@router.put(
    "/{project_id}",
    response_model=ProjectResponse,
    summary="Rename a project",
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": ProjectRenameRequest.model_json_schema()}},
        }
    },
)
def rename_project(
    project_id: str,
    user: CurrentUser,
    repository: Repository,
    body: Annotated[Any, Depends(read_rename_body)],
) -> ProjectResponse:
    """Change the project's name; names are unique per owner."""

    new_name = validate_new_name(body)
    return repository.rename_project(project_id, user.user_id, new_name)


@router.post(
    "/{project_id}/documents",
    response_model=DocumentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Attach a document to a project",
)
def add_document(
    project_id: str,
    payload: DocumentCreateRequest,
    user: CurrentUser,
    repository: Repository,
) -> DocumentResponse:
    return repository.add_document(project_id, user.user_id, payload)
