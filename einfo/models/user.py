"""User ORM: an E-Info account, created on first Google sign-in.

Invariants:
    - id is UUID primary key
    - email, username and google_id are unique; username is stored lowercase
    - total_views / total_clicks only ever grow, through atomic UPDATEs
    - is_active=False hides the public profile and blocks authentication

Design Decisions:
    - Counters live on the user row, no separate analytics table
    - Only the profile is a relationship; resource sections are queried separately
      so the aggregate can filter and order each one
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from einfo.db.base import Base


class User(Base):
    """Account row owning every profile section."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    email: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True,
    )
    username: Mapped[str] = mapped_column(
        String(30), nullable=False, unique=True, index=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    google_id: Mapped[str | None] = mapped_column(
        String(255), nullable=True, unique=True,
    )
    avatar_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    email_verified: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True,
    )
    instant_message_subject: Mapped[str | None] = mapped_column(
        String(200), nullable=True,
    )
    instant_message_body: Mapped[str | None] = mapped_column(
        Text, nullable=True,
    )
    total_views: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    total_clicks: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    profile: Mapped["UserProfile | None"] = relationship(
        "UserProfile", back_populates="user", uselist=False,
        cascade="all, delete-orphan", lazy="selectin",
    )
