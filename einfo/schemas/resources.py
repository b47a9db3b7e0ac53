"""Section Schemas: request bodies for the six profile sections and their children.

Invariants:
    - <X>Create: required fields enforced, everything else optional
    - <X>Update: every field optional; only fields present in the body are applied
    - <X>Update fields backing NOT NULL columns default to None but reject an explicit null
    - Child items may carry the id of an existing child; absent = new child
    - <X>BatchItem: a Create plus an optional id (absent = new row)
    - Reorder bodies carry one id list named after the section (linkIds, projectIds...)
    - Nested children (experience projects, portfolio images) are never column values;
      CHILD_FIELDS names them so services can split them off

Design Decisions:
    - Field names match ORM column names, so model_dump(exclude_unset=True) is the update set
"""

from uuid import UUID

from pydantic import Field

from einfo.core.domain_types import (
    AchievementType, EducationType, ExtracurricularType,
)
from einfo.schemas.common import (
    CamelModel, OptionalDate, OptionalUrl, RequiredUrl, StrList, Text,
)

CHILD_FIELDS = frozenset({"projects", "images"})


# --- Child collections -------------------------------------------------------

class WorkProjectIn(CamelModel):
    id: UUID | None = None
    title: Text(100, 1)
    description: str | None = Field(None, max_length=500)
    technologies: StrList(20, 50) = []


class WorkProjectUpdate(CamelModel):
    title: Text(100, 1) = None
    description: str | None = Field(None, max_length=500)
    technologies: StrList(20, 50) = []


class PortfolioImageIn(CamelModel):
    id: UUID | None = None
    url: RequiredUrl
    title: str | None = Field(None, max_length=100)
    description: str | None = Field(None, max_length=500)


class WorkProjectReorder(CamelModel):
    project_ids: list[UUID]


class PortfolioImageReorder(CamelModel):
    image_ids: list[UUID]


# --- Links -------------------------------------------------------------------

class LinkUpdate(CamelModel):
    title: Text(100, 1) = None
    url: RequiredUrl = None
    description: str | None = Field(None, max_length=200)
    icon_name: str | None = Field(None, max_length=50)
    image_url: str | None = Field(None, max_length=2048)
    project_details: str | None = Field(None, max_length=500)


class LinkCreate(LinkUpdate):
    title: Text(100, 1)
    url: RequiredUrl


class LinkBatchItem(LinkCreate):
    id: UUID | None = None


class LinkReorder(CamelModel):
    link_ids: list[UUID]


class LinkBatch(CamelModel):
    links: list[LinkBatchItem]


# --- Portfolio ---------------------------------------------------------------

class PortfolioUpdate(CamelModel):
    title: Text(100, 1) = None
    description: str | None = Field(None, max_length=500)
    category: str | None = Field(None, max_length=50)
    url: OptionalUrl = None
    icon_name: str | None = Field(None, max_length=50)
    images: list[PortfolioImageIn] | None = Field(None, max_length=20)


class PortfolioCreate(PortfolioUpdate):
    title: Text(100, 1)


class PortfolioBatchItem(PortfolioCreate):
    id: UUID | None = None


class PortfolioReorder(CamelModel):
    project_ids: list[UUID]


class PortfolioBatch(CamelModel):
    projects: list[PortfolioBatchItem]


# --- Work experience ---------------------------------------------------------

class ExperienceUpdate(CamelModel):
    company: Text(100, 1) = None
    position: Text(100, 1) = None
    duration: str | None = Field(None, max_length=100)
    start_date: OptionalDate = None
    end_date: OptionalDate = None
    location: str | None = Field(None, max_length=100)
    description: str | None = Field(None, max_length=1000)
    icon_name: str | None = Field(None, max_length=50)
    achievements: StrList(10, 200) = []
    projects: list[WorkProjectIn] | None = Field(None, max_length=20)


class ExperienceCreate(ExperienceUpdate):
    company: Text(100, 1)
    position: Text(100, 1)


class ExperienceBatchItem(ExperienceCreate):
    id: UUID | None = None


class ExperienceReorder(CamelModel):
    experience_ids: list[UUID]


class ExperienceBatch(CamelModel):
    experiences: list[ExperienceBatchItem]


# --- Education ---------------------------------------------------------------

class EducationUpdate(CamelModel):
    institution: Text(100, 1) = None
    degree: Text(100, 1) = None
    duration: str | None = Field(None, max_length=50)
    start_date: OptionalDate = None
    end_date: OptionalDate = None
    location: str | None = Field(None, max_length=100)
    description: str | None = Field(None, max_length=500)
    education_type: EducationType = None
    gpa: str | None = Field(None, max_length=10)
    achievements: StrList(10, 200) = []
    courses: StrList(20, 100) = []
    icon_name: str | None = Field(None, max_length=50)
    image_url: str | None = Field(None, max_length=2048)
    website_url: OptionalUrl = None


class EducationCreate(EducationUpdate):
    institution: Text(100, 1)
    degree: Text(100, 1)
    education_type: EducationType = EducationType.DEGREE


class EducationBatchItem(EducationCreate):
    id: UUID | None = None


class EducationReorder(CamelModel):
    education_ids: list[UUID]


class EducationBatch(CamelModel):
    educations: list[EducationBatchItem]


# --- Achievements ------------------------------------------------------------

class AchievementUpdate(CamelModel):
    title: Text(120, 1) = None
    organization: Text(80, 1) = None
    duration: str | None = Field(None, max_length=25)
    start_date: OptionalDate = None
    end_date: OptionalDate = None
    location: str | None = Field(None, max_length=40)
    description: str | None = Field(None, max_length=300)
    type: AchievementType = None
    skills_involved: StrList(15, 40) = []
    key_points: StrList(10, 200) = []
    icon_name: str | None = Field(None, max_length=50)
    image_url: str | None = Field(None, max_length=2048)
    website_url: OptionalUrl = None


class AchievementCreate(AchievementUpdate):
    title: Text(120, 1)
    organization: Text(80, 1)
    type: AchievementType


class AchievementBatchItem(AchievementCreate):
    id: UUID | None = None


class AchievementReorder(CamelModel):
    achievement_ids: list[UUID]


class AchievementBatch(CamelModel):
    achievements: list[AchievementBatchItem]


# --- Extracurriculars --------------------------------------------------------

class ExtracurricularUpdate(CamelModel):
    activity_name: Text(100, 1) = None
    organization: Text(80, 1) = None
    duration: str | None = Field(None, max_length=25)
    start_date: OptionalDate = None
    end_date: OptionalDate = None
    location: str | None = Field(None, max_length=40)
    role: str | None = Field(None, max_length=60)
    description: str | None = Field(None, max_length=350)
    type: ExtracurricularType = None
    responsibilities: StrList(10, 150) = []
    achievements: StrList(8, 150) = []
    skills_developed: StrList(12, 40) = []
    icon_name: str | None = Field(None, max_length=50)
    image_url: str | None = Field(None, max_length=2048)
    website_url: OptionalUrl = None


class ExtracurricularCreate(ExtracurricularUpdate):
    activity_name: Text(100, 1)
    organization: Text(80, 1)
    type: ExtracurricularType


class ExtracurricularBatchItem(ExtracurricularCreate):
    id: UUID | None = None


class ExtracurricularReorder(CamelModel):
    extracurricular_ids: list[UUID]


class ExtracurricularBatch(CamelModel):
    extracurriculars: list[ExtracurricularBatchItem]
