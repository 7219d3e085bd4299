"""ORM-backed repository for owner-scoped project operations.

Every lookup filters on both the project id and the owner id, so a project
owned by someone else behaves exactly like one that does not exist. Store
failures are rolled back, logged with the project id and surfaced as generic
500 responses.
"""

from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import selectinload
from sqlmodel import Session, select

from ..entities import Document, Project
from ..errors import ConflictError, InternalError, NotFoundError
from ..models import (
    DocumentCount,
    DocumentCreateRequest,
    DocumentResponse,
    ProjectDetailResponse,
    ProjectResponse,
    ProjectSummaryResponse,
)

logger = logging.getLogger(__name__)

MAX_PROJECT_ID = 2**63 - 1
UNIQUE_VIOLATION_SQLSTATE = "23505"

DUPLICATE_NAME_DETAIL = "A project with this name already exists."
NOT_FOUND_DETAIL = "Project not found."
NOT_FOUND_OR_NO_ACCESS_DETAIL = "Project not found or you do not have access."


def parse_project_id(raw: str) -> int | None:
    """Return the numeric id for a decimal path segment, or ``None``.

    Anything that is not a plain non-negative decimal within the 64-bit range
    cannot identify a stored project.
    """

    if not raw.isascii() or not raw.isdigit():
        return None
    value = int(raw)
    if value > MAX_PROJECT_ID:
        return None
    return value


def is_unique_violation(exc: IntegrityError) -> bool:
    """Return True when ``exc`` reports a duplicate value for a unique constraint."""

    original = exc.orig
    for attribute in ("sqlstate", "pgcode"):
        if getattr(original, attribute, None) == UNIQUE_VIOLATION_SQLSTATE:
            return True
    return "UNIQUE constraint failed" in str(original)


class ProjectsRepository:
    """Encapsulates project and document operations for one ORM session."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def find_owned_project(self, project_id: int, owner_id: str, *, options: Sequence = ()) -> Project | None:
        statement = select(Project).where(Project.id == project_id, Project.owner_id == owner_id)
        if options:
            statement = statement.options(*options)
        return self._session.exec(statement).first()

    def authorize_project(
        self,
        project_id: str,
        owner_id: str,
        *,
        detail: str = NOT_FOUND_DETAIL,
        options: Sequence = (),
    ) -> Project:
        """Fetch the project only if ``owner_id`` owns it, else raise 404.

        This is the single entry point the handlers use before acting on a
        project; they never address a project by id alone.
        """

        key = parse_project_id(project_id)
        project = None if key is None else self.find_owned_project(key, owner_id, options=options)
        if project is None:
            logger.info("Project %s not found for owner %s", project_id, owner_id)
            raise NotFoundError(detail)
        return project

    def get_project(self, project_id: str, owner_id: str) -> ProjectDetailResponse:
        try:
            project = self.authorize_project(
                project_id,
                owner_id,
                options=(selectinload(Project.documents),),
            )
            documents = [DocumentResponse.model_validate(document) for document in project.documents]
            return ProjectDetailResponse(
                **self._project_fields(project),
                count=DocumentCount(documents=len(documents)),
                documents=documents,
            )
        except SQLAlchemyError as exc:
            raise self._internal_error("fetching", project_id, "Failed to fetch project details.") from exc

    def delete_project(self, project_id: str, owner_id: str) -> None:
        """Delete an owned project; its documents go with it via the store's cascade."""

        try:
            project = self.authorize_project(project_id, owner_id, detail=NOT_FOUND_OR_NO_ACCESS_DETAIL)
            self._session.delete(project)
            self._session.commit()
        except SQLAlchemyError as exc:
            raise self._internal_error("deleting", project_id, "Failed to delete project.") from exc
        logger.info("Deleted project %s for owner %s", project_id, owner_id)

    def rename_project(self, project_id: str, owner_id: str, new_name: str) -> ProjectResponse:
        try:
            project = self.authorize_project(project_id, owner_id, detail=NOT_FOUND_OR_NO_ACCESS_DETAIL)
            project.name = new_name
            self._session.add(project)
            self._session.commit()
            self._session.refresh(project)
        except IntegrityError as exc:
            self._session.rollback()
            if is_unique_violation(exc):
                logger.warning("Rename of project %s rejected: duplicate name", project_id)
                raise ConflictError(DUPLICATE_NAME_DETAIL) from exc
            raise self._internal_error("updating", project_id, "Failed to update project.") from exc
        except SQLAlchemyError as exc:
            raise self._internal_error("updating", project_id, "Failed to update project.") from exc
        return ProjectResponse.model_validate(project)

    def create_project(self, owner_id: str, name: str) -> ProjectSummaryResponse:
        project = Project(name=name, owner_id=owner_id)
        try:
            self._session.add(project)
            self._session.commit()
            self._session.refresh(project)
        except IntegrityError as exc:
            self._session.rollback()
            if is_unique_violation(exc):
                raise ConflictError(DUPLICATE_NAME_DETAIL) from exc
            raise self._internal_error("creating", name, "Failed to create project.") from exc
        except SQLAlchemyError as exc:
            raise self._internal_error("creating", name, "Failed to create project.") from exc
        return ProjectSummaryResponse(**self._project_fields(project), count=DocumentCount(documents=0))

    def list_projects(self, owner_id: str) -> list[ProjectSummaryResponse]:
        statement = (
            select(Project, func.count(Document.id))
            .outerjoin(Document, Document.project_id == Project.id)
            .where(Project.owner_id == owner_id)
            .group_by(Project.id)
            .order_by(func.lower(Project.name), Project.id)
        )
        try:
            rows = self._session.exec(statement).all()
        except SQLAlchemyError as exc:
            raise self._internal_error("listing", f"owner={owner_id}", "Failed to list projects.") from exc
        return [
            ProjectSummaryResponse(**self._project_fields(project), count=DocumentCount(documents=count))
            for project, count in rows
        ]

    def add_document(self, project_id: str, owner_id: str, payload: DocumentCreateRequest) -> DocumentResponse:
        try:
            project = self.authorize_project(project_id, owner_id)
            document = Document(project_id=project.id, title=payload.title, content=payload.content)
            self._session.add(document)
            self._session.commit()
            self._session.refresh(document)
        except SQLAlchemyError as exc:
            raise self._internal_error("adding a document to", project_id, "Failed to add document.") from exc
        return DocumentResponse.model_validate(document)

    def _project_fields(self, project: Project) -> dict[str, object]:
        return {
            "id": project.id,
            "name": project.name,
            "owner_id": project.owner_id,
            "created_at": project.created_at,
            "updated_at": project.updated_at,
        }

    def _internal_error(self, action: str, project_ref: object, detail: str) -> InternalError:
        # Must be called from an ``except`` block so the traceback is logged.
        self._session.rollback()
        logger.exception("Error %s project %s", action, project_ref)
        return InternalError(detail)
