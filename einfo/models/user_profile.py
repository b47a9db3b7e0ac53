"""UserProfile ORM: the free-text part of a profile plus section visibility flags.

Invariants:
    - At most one profile per user (user_id unique)
    - skills is a JSON list of strings, never NULL
    - Every show_* flag defaults to True
"""

import uuid

from sqlalchemy import String, Text, Boolean, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from einfo.db.base import Base


class UserProfile(Base):
    __tablename__ = "user_profiles"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False, unique=True,
    )
    job_title: Mapped[str | None] = mapped_column(String(100), nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    website: Mapped[str | None] = mapped_column(Text, nullable=True)
    location: Mapped[str | None] = mapped_column(String(100), nullable=True)
    profile_image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    resume_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    skills: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    show_links: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    show_experience: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    show_portfolio: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    show_education: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    show_achievements: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    show_extracurriculars: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True,
    )
    show_titles: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    user: Mapped["User"] = relationship("User", back_populates="profile")
