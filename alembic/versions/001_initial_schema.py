"""Initial schema — teams, applications, additional enrollments.

Revision ID: 001
Revises: None
Create Date: 2026-10-19
"""

from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import ARRAY, JSONB

from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Teams
    op.create_table(
        "teams",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(200), unique=True, nullable=False),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("max_capacity", sa.Integer, nullable=False),
        sa.Column("current_size", sa.Integer, nullable=False, server_default="0"),
        sa.Column("meeting_time", sa.Text, nullable=True),
        sa.Column("location", sa.Text, nullable=True),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), nullable=False,
            server_default=sa.func.now(),
        ),
        sa.CheckConstraint("max_capacity > 0", name="ck_teams_capacity_positive"),
        sa.CheckConstraint(
            "current_size >= 0 AND current_size <= max_capacity",
            name="ck_teams_size_within_capacity",
        ),
    )
    op.create_index("idx_teams_type", "teams", ["type"])

    # Applications
    op.create_table(
        "applications",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("full_name", sa.Text, nullable=False),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("ufid", sa.String(20), nullable=True),
        sa.Column(
            "team_preferences", ARRAY(sa.String(36)), nullable=False, server_default="{}"
        ),
        sa.Column(
            "additional_teams", ARRAY(sa.String(36)), nullable=False, server_default="{}"
        ),
        sa.Column("skills", ARRAY(sa.String(100)), nullable=False, server_default="{}"),
        sa.Column("time_availability", JSONB, nullable=False, server_default="[]"),
        sa.Column(
            "assigned_team_id", sa.String(36),
            sa.ForeignKey("teams.id", ondelete="SET NULL"), nullable=True,
        ),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("assignment_reason", sa.Text, nullable=True),
        sa.Column(
            "submitted_at", sa.DateTime(timezone=True), nullable=False,
            server_default=sa.func.now(),
        ),
    )
    op.create_index("idx_applications_status", "applications", ["status"])
    op.create_index("idx_applications_submitted", "applications", ["submitted_at"])

    # Additional-team enrollments
    op.create_table(
        "additional_enrollments",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "application_id", sa.String(36),
            sa.ForeignKey("applications.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "team_id", sa.String(36),
            sa.ForeignKey("teams.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "enrolled_at", sa.DateTime(timezone=True), nullable=False,
            server_default=sa.func.now(),
        ),
        sa.UniqueConstraint(
            "application_id", "team_id", name="uq_enrollment_application_team"
        ),
    )
    op.create_index("idx_enrollments_team", "additional_enrollments", ["team_id"])


def downgrade() -> None:
    op.drop_table("additional_enrollments")
    op.drop_table("applications")
    op.drop_table("teams")
