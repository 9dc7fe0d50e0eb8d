"""SQLAlchemy ORM models — maps to PostgreSQL tables."""

import uuid
from datetime import datetime

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.dialects.postgresql import ARRAY, JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from grip.adapters.persistence.database import Base


def _new_id() -> str:
    return str(uuid.uuid4())


class TeamModel(Base):
    __tablename__ = "teams"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(200), unique=True, nullable=False)
    # 'technical' or 'constant' ('additional' on older rows)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    max_capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    current_size: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    meeting_time: Mapped[str | None] = mapped_column(Text, nullable=True)
    location: Mapped[str | None] = mapped_column(Text, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    members: Mapped[list["ApplicationModel"]] = relationship(back_populates="assigned_team")
    enrollments: Mapped[list["AdditionalEnrollmentModel"]] = relationship(
        back_populates="team"
    )

    __table_args__ = (Index("idx_teams_type", "type"),)


class ApplicationModel(Base):
    __tablename__ = "applications"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    full_name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    ufid: Mapped[str | None] = mapped_column(String(20), nullable=True)
    team_preferences: Mapped[list[str]] = mapped_column(
        ARRAY(String(36)), nullable=False, default=list
    )
    additional_teams: Mapped[list[str]] = mapped_column(
        ARRAY(String(36)), nullable=False, default=list
    )
    skills: Mapped[list[str]] = mapped_column(ARRAY(String(100)), nullable=False, default=list)
    time_availability: Mapped[list[dict]] = mapped_column(JSONB, nullable=False, default=list)
    assigned_team_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("teams.id", ondelete="SET NULL"), nullable=True
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    assignment_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    assigned_team: Mapped["TeamModel | None"] = relationship(back_populates="members")
    enrollments: Mapped[list["AdditionalEnrollmentModel"]] = relationship(
        back_populates="application"
    )

    __table_args__ = (
        Index("idx_applications_status", "status"),
        Index("idx_applications_submitted", "submitted_at"),
    )


class AdditionalEnrollmentModel(Base):
    __tablename__ = "additional_enrollments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    application_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("applications.id", ondelete="CASCADE"), nullable=False
    )
    team_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("teams.id", ondelete="CASCADE"), nullable=False
    )
    enrolled_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    application: Mapped["ApplicationModel"] = relationship(back_populates="enrollments")
    team: Mapped["TeamModel"] = relationship(back_populates="enrollments")

    __table_args__ = (
        UniqueConstraint("application_id", "team_id", name="uq_enrollment_application_team"),
        Index("idx_enrollments_team", "team_id"),
    )
