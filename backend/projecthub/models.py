"""Pydantic models used by the API.

Identifiers are 64-bit integers internally. Values of that size are not safe
in every JSON consumer, so all id fields use :data:`StringId`, which renders
them as decimal strings when a response is serialised.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, StringConstraints
from pydantic.alias_generators import to_camel

StringId = Annotated[int, PlainSerializer(str, return_type=str)]

NAME_MAX_LENGTH = 100

NameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=NAME_MAX_LENGTH)]
TitleStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]


class ApiModel(BaseModel):
    """Base for response payloads: camelCase on the wire, built from ORM rows."""

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


class HealthResponse(BaseModel):
    """Response payload for service health checks."""

    status: str = Field(..., description="Human-readable service status message.")
    database: str = Field(..., description="Result of a trivial round trip to the database.")


class SessionResponse(BaseModel):
    """Identity attached to the caller's session token."""

    user_id: str


class ProjectCreateRequest(BaseModel):
    """Payload for creating a new project."""

    name: NameStr = Field(..., description="Project name, unique per owner.")


class ProjectRenameRequest(BaseModel):
    """Documented payload for renaming a project.

    The route reads its body loosely and reports every unusable name as 400,
    so this model only describes the request in the OpenAPI schema.
    """

    name: str | None = None


class DocumentCreateRequest(BaseModel):
    title: TitleStr
    content: str = ""


class DocumentResponse(ApiModel):
    id: StringId
    project_id: StringId
    title: str
    content: str
    created_at: datetime


class DocumentCount(BaseModel):
    documents: int = Field(..., ge=0)


class ProjectResponse(ApiModel):
    """Project record without related documents."""

    id: StringId
    name: str
    owner_id: str
    created_at: datetime
    updated_at: datetime


class ProjectSummaryResponse(ProjectResponse):
    count: DocumentCount = Field(..., alias="_count")


class ProjectDetailResponse(ProjectSummaryResponse):
    """Project record with its documents eagerly loaded."""

    documents: list[DocumentResponse]
