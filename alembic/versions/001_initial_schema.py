"""Initial schema: users, profiles, the six sections, stars, admins.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id() -> sa.Column:
    return sa.Column("id", UUID(as_uuid=True), primary_key=True)


def _owner() -> sa.Column:
    return sa.Column(
        "user_id", UUID(as_uuid=True),
        sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True,
    )


def _row_state() -> list[sa.Column]:
    return [
        sa.Column("display_order", sa.Integer, nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def _dates() -> list[sa.Column]:
    return [
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=True),
    ]


def _media() -> list[sa.Column]:
    return [
        sa.Column("icon_name", sa.String(50), nullable=True),
        sa.Column("image_url", sa.Text, nullable=True),
        sa.Column("website_url", sa.Text, nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        _id(),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("username", sa.String(30), nullable=False, unique=True, index=True),
        sa.Column("name", sa.String(100), nullable=False, server_default=""),
        sa.Column("google_id", sa.String(255), nullable=True, unique=True),
        sa.Column("avatar_url", sa.Text, nullable=True),
        sa.Column("email_verified", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("instant_message_subject", sa.String(200), nullable=True),
        sa.Column("instant_message_body", sa.Text, nullable=True),
        sa.Column("total_views", sa.Integer, nullable=False, server_default="0"),
        sa.Column("total_clicks", sa.Integer, nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "user_profiles",
        _id(),
        sa.Column(
            "user_id", UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True,
        ),
        sa.Column("job_title", sa.String(100), nullable=True),
        sa.Column("bio", sa.Text, nullable=True),
        sa.Column("website", sa.Text, nullable=True),
        sa.Column("location", sa.String(100), nullable=True),
        sa.Column("profile_image_url", sa.Text, nullable=True),
        sa.Column("resume_url", sa.Text, nullable=True),
        sa.Column("skills", sa.JSON, nullable=False, server_default="[]"),
        *[
            sa.Column(flag, sa.Boolean, nullable=False, server_default=sa.true())
            for flag in (
                "show_links", "show_experience", "show_portfolio", "show_education",
                "show_achievements", "show_extracurriculars", "show_titles",
            )
        ],
    )

    op.create_table(
        "profile_links",
        _id(),
        _owner(),
        sa.Column("title", sa.String(100), nullable=False),
        sa.Column("url", sa.Text, nullable=False),
        sa.Column("description", sa.String(200), nullable=True),
        sa.Column("icon_name", sa.String(50), nullable=True),
        sa.Column("image_url", sa.Text, nullable=True),
        sa.Column("project_details", sa.String(500), nullable=True),
        *_row_state(),
    )

    op.create_table(
        "portfolio_projects",
        _id(),
        _owner(),
        sa.Column("title", sa.String(100), nullable=False),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column("category", sa.String(50), nullable=True),
        sa.Column("url", sa.Text, nullable=True),
        sa.Column("icon_name", sa.String(50), nullable=True),
        *_row_state(),
    )

    op.create_table(
        "portfolio_images",
        _id(),
        sa.Column(
            "project_id", UUID(as_uuid=True),
            sa.ForeignKey("portfolio_projects.id", ondelete="CASCADE"),
            nullable=False, index=True,
        ),
        sa.Column("url", sa.Text, nullable=False),
        sa.Column("title", sa.String(100), nullable=True),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column("display_order", sa.Integer, nullable=False, server_default="0"),
    )

    op.create_table(
        "work_experiences",
        _id(),
        _owner(),
        sa.Column("company", sa.String(100), nullable=False),
        sa.Column("position", sa.String(100), nullable=False),
        sa.Column("duration", sa.String(100), nullable=True),
        *_dates(),
        sa.Column("location", sa.String(100), nullable=True),
        sa.Column("description", sa.String(1000), nullable=True),
        sa.Column("icon_name", sa.String(50), nullable=True),
        sa.Column("achievements", sa.JSON, nullable=False, server_default="[]"),
        *_row_state(),
    )

    op.create_table(
        "work_projects",
        _id(),
        sa.Column(
            "experience_id", UUID(as_uuid=True),
            sa.ForeignKey("work_experiences.id", ondelete="CASCADE"),
            nullable=False, index=True,
        ),
        sa.Column("title", sa.String(100), nullable=False),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column("technologies", sa.JSON, nullable=False, server_default="[]"),
        sa.Column("display_order", sa.Integer, nullable=False, server_default="0"),
    )

    op.create_table(
        "education",
        _id(),
        _owner(),
        sa.Column("institution", sa.String(100), nullable=False),
        sa.Column("degree", sa.String(100), nullable=False),
        sa.Column("duration", sa.String(50), nullable=True),
        *_dates(),
        sa.Column("location", sa.String(100), nullable=True),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column("education_type", sa.String(20), nullable=False, server_default="degree"),
        sa.Column("gpa", sa.String(10), nullable=True),
        sa.Column("achievements", sa.JSON, nullable=False, server_default="[]"),
        sa.Column("courses", sa.JSON, nullable=False, server_default="[]"),
        *_media(),
        *_row_state(),
    )

    op.create_table(
        "achievements",
        _id(),
        _owner(),
        sa.Column("title", sa.String(120), nullable=False),
        sa.Column("organization", sa.String(80), nullable=False),
        sa.Column("duration", sa.String(25), nullable=True),
        *_dates(),
        sa.Column("location", sa.String(40), nullable=True),
        sa.Column("description", sa.String(300), nullable=True),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("skills_involved", sa.JSON, nullable=False, server_default="[]"),
        sa.Column("key_points", sa.JSON, nullable=False, server_default="[]"),
        *_media(),
        *_row_state(),
    )

    op.create_table(
        "extracurriculars",
        _id(),
        _owner(),
        sa.Column("activity_name", sa.String(100), nullable=False),
        sa.Column("organization", sa.String(80), nullable=False),
        sa.Column("duration", sa.String(25), nullable=True),
        *_dates(),
        sa.Column("location", sa.String(40), nullable=True),
        sa.Column("role", sa.String(60), nullable=True),
        sa.Column("description", sa.String(350), nullable=True),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("responsibilities", sa.JSON, nullable=False, server_default="[]"),
        sa.Column("achievements", sa.JSON, nullable=False, server_default="[]"),
        sa.Column("skills_developed", sa.JSON, nullable=False, server_default="[]"),
        *_media(),
        *_row_state(),
    )

    op.create_table(
        "profile_stars",
        _id(),
        _owner(),
        sa.Column("visitor_ip", sa.String(64), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("user_id", "visitor_ip", name="uq_profile_star_visitor"),
    )

    op.create_table(
        "admins",
        _id(),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("username", sa.String(30), nullable=False, unique=True),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False, server_default="admin"),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("last_login", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_by_admin_id", UUID(as_uuid=True), sa.ForeignKey("admins.id"), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "admin_activity_logs",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "admin_id", UUID(as_uuid=True),
            sa.ForeignKey("admins.id", ondelete="CASCADE"), nullable=False, index=True,
        ),
        sa.Column("action", sa.String(50), nullable=False),
        sa.Column("target_user_id", UUID(as_uuid=True), nullable=True),
        sa.Column("target_admin_id", UUID(as_uuid=True), nullable=True),
        sa.Column("details", sa.JSON, nullable=True),
        sa.Column("ip_address", sa.String(64), nullable=True),
        sa.Column("user_agent", sa.String(500), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )


def downgrade() -> None:
    for table in (
        "admin_activity_logs", "admins", "profile_stars", "extracurriculars",
        "achievements", "education", "work_projects", "work_experiences",
        "portfolio_images", "portfolio_projects", "profile_links",
        "user_profiles", "users",
    ):
        op.drop_table(table)
