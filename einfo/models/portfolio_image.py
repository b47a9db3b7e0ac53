"""PortfolioImage ORM: an image attached to a portfolio project.

Invariants:
    - Always belongs to a PortfolioProject (project_id FK)
    - Hard-deleted; ordering is per project
"""

import uuid

from sqlalchemy import String, Text, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from einfo.db.base import Base


class PortfolioImage(Base):
    __tablename__ = "portfolio_images"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    project_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("portfolio_projects.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    url: Mapped[str] = mapped_column(Text, nullable=False)
    title: Mapped[str | None] = mapped_column(String(100), nullable=True)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    display_order: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )

    project: Mapped["PortfolioProject"] = relationship(
        "PortfolioProject", back_populates="images",
    )
