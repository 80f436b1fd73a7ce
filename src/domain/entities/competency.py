"""
Competency Entities

Governance taxonomy entries and their mapping to content units.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now

from .enums import CompetencyStatus


class Competency(SQLModel, table=True):
    """Governance taxonomy entry. Only active competencies can be mapped."""

    __tablename__ = "competencies"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    code: str = Field(unique=True, index=True, max_length=64)
    title: str = Field(max_length=255)
    status: CompetencyStatus = Field(default=CompetencyStatus.active)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))


class CompetencyMapping(SQLModel, table=True):
    """
    CompetencyMapping entity - links a content unit to a competency.

    Business Rules:
    - (content_unit_id, competency_id) is unique
    - At least one mapping must exist before a unit can become ACTIVE
    """

    __tablename__ = "competency_mappings"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    content_unit_id: UUID = Field(foreign_key="content_units.id", nullable=False)
    competency_id: UUID = Field(foreign_key="competencies.id", nullable=False)

    created_by: UUID = Field(nullable=False)
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index(
            "idx_mapping_unit_competency",
            "content_unit_id",
            "competency_id",
            unique=True,
        ),
    )
