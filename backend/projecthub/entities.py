"""ORM tables for projects and their documents."""

from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import BigInteger, Column, ForeignKey, Integer, Text, UniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

# 64-bit ids everywhere except SQLite, where only INTEGER PRIMARY KEY
# columns autoincrement.
IdType = BigInteger().with_variant(Integer(), "sqlite")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Project(SQLModel, table=True):
    __table_args__ = (
        UniqueConstraint("owner_id", "name", name="uq_project_owner_name"),
    )

    id: Optional[int] = Field(default=None, sa_column=Column(IdType, primary_key=True, autoincrement=True))
    name: str = Field(max_length=100)
    owner_id: str = Field(index=True)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow, sa_column_kwargs={"onupdate": _utcnow})

    # Loaded documents are deleted by the ORM; unloaded ones by ON DELETE CASCADE.
    documents: List["Document"] = Relationship(
        back_populates="project",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "passive_deletes": True,
            "order_by": "Document.id",
        },
    )


class Document(SQLModel, table=True):
    id: Optional[int] = Field(default=None, sa_column=Column(IdType, primary_key=True, autoincrement=True))
    project_id: int = Field(
        sa_column=Column(IdType, ForeignKey("project.id", ondelete="CASCADE"), nullable=False, index=True)
    )
    title: str = Field(max_length=200)
    content: str = Field(default="", sa_column=Column(Text, nullable=False, default=""))
    created_at: datetime = Field(default_factory=_utcnow)

    project: Optional[Project] = Relationship(back_populates="documents")
