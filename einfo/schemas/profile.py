"""Profile Schemas: account, profile block, visibility and bulk section bodies.

Invariants:
    - ProfileUpdate is partial: only fields present in the body change
    - BasicProfileUpdate is a full replace: absent text becomes "", absent skills []
    - VisibilityUpdate resets absent flags to True
    - Bulk section bodies reuse the section BatchItem models, keyed the way the
      profile editor sends them (links, experiences, portfolio, education...)
"""

from pydantic import Field, field_validator

from einfo.schemas.common import CamelModel, OptionalUrl, StrList, Text
from einfo.schemas.resources import (
    AchievementBatchItem, EducationBatchItem, ExperienceBatchItem,
    ExtracurricularBatchItem, LinkBatchItem, PortfolioBatchItem,
)


class ProfileUpdate(CamelModel):
    name: Text(100, 1) | None = None
    job_title: str | None = Field(None, max_length=100)
    bio: str | None = Field(None, max_length=500)
    website: OptionalUrl = None
    location: str | None = Field(None, max_length=100)
    skills: StrList(30, 30) = []
    show_links: bool | None = None
    show_experience: bool | None = None
    show_portfolio: bool | None = None
    show_education: bool | None = None
    show_achievements: bool | None = None
    show_extracurriculars: bool | None = None
    show_titles: bool | None = None


class AccountUpdate(CamelModel):
    name: Text(100, 1) | None = None
    username: str | None = None


class InstantMessageUpdate(CamelModel):
    # The editor posts these two keys in snake_case
    instant_message_subject: str | None = Field(None, max_length=200)
    instant_message_body: str | None = Field(None, max_length=2000)


class BasicProfileUpdate(CamelModel):
    name: str | None = Field(None, max_length=100)
    job_title: str | None = Field(None, max_length=100)
    bio: str | None = Field(None, max_length=500)
    website: OptionalUrl = None
    location: str | None = Field(None, max_length=100)
    profile_image: str | None = Field(None, max_length=2048)
    resume_url: str | None = Field(None, max_length=2048)
    skills: StrList(30, 30) = []


class VisibilityUpdate(CamelModel):
    show_links: bool = True
    show_experience: bool = True
    show_portfolio: bool = True
    show_education: bool = True
    show_achievements: bool = True
    show_extracurriculars: bool = True
    show_titles: bool = True


def _is_blank(value) -> bool:
    return not (isinstance(value, str) and value.strip())


class ProfileLinks(CamelModel):
    links: list[LinkBatchItem] = []

    @field_validator("links", mode="before")
    @classmethod
    def drop_blank_links(cls, v):
        """Editor rows with no title or url are placeholders, not links."""
        if not isinstance(v, list):
            return [] if v is None else v
        return [
            item for item in v
            if not isinstance(item, dict)
            or not (_is_blank(item.get("title")) or _is_blank(item.get("url")))
        ]


class ProfileExperiences(CamelModel):
    experiences: list[ExperienceBatchItem] = []


class ProfilePortfolio(CamelModel):
    portfolio: list[PortfolioBatchItem] = []


class ProfileEducation(CamelModel):
    education: list[EducationBatchItem] = []


class ProfileAchievements(CamelModel):
    achievements: list[AchievementBatchItem] = []


class ProfileExtracurriculars(CamelModel):
    extracurriculars: list[ExtracurricularBatchItem] = []
