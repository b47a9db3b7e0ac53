"""WorkProject ORM: a project listed under a work experience.

Invariants:
    - Always belongs to a WorkExperience (experience_id FK)
    - technologies is a JSON list of strings
    - Hard-deleted; ordering is per experience
"""

import uuid

from sqlalchemy import String, Integer, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from einfo.db.base import Base


class WorkProject(Base):
    __tablename__ = "work_projects"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    experience_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("work_experiences.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    technologies: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    display_order: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )

    experience: Mapped["WorkExperience"] = relationship(
        "WorkExperience", back_populates="projects",
    )
