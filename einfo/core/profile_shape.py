"""Profile Shaping: turn ORM rows into the camelCase JSON the frontend reads.

Invariants:
    - All functions are PURE: rows in, dicts out, no IO
    - Missing strings render as "", missing lists as [], missing dates as None
    - iconName falls back to the section default (DEFAULT_ICONS)
    - "order" is the row's display_order
    - Public views empty every hidden section and mask titles when show_titles is off
    - Private views ignore visibility flags

Design Decisions:
    - Shapers take rows duck-typed (attribute access) so tests can pass simple objects
    - Child collections are sorted here by display_order, not trusted from load order
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from einfo.core.domain_types import (
    DEFAULT_ICONS, ResourceKind, HIDDEN_POSITION_LABEL, HIDDEN_DEGREE_LABEL,
)

VISIBILITY_FLAGS = {
    "showLinks": "show_links",
    "showExperience": "show_experience",
    "showPortfolio": "show_portfolio",
    "showEducation": "show_education",
    "showAchievements": "show_achievements",
    "showExtracurriculars": "show_extracurriculars",
    "showTitles": "show_titles",
}


@dataclass
class ProfileSections:
    """Active rows of every section, each list already in display order."""
    links: list = field(default_factory=list)
    portfolio: list = field(default_factory=list)
    experiences: list = field(default_factory=list)
    education: list = field(default_factory=list)
    achievements: list = field(default_factory=list)
    extracurriculars: list = field(default_factory=list)


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _text(value: str | None) -> str:
    return value or ""


def _items(value: list | None) -> list:
    return list(value or [])


def _by_order(children) -> list:
    return sorted(children or [], key=lambda c: c.display_order)


def _icon(row, kind: ResourceKind) -> str:
    return row.icon_name or DEFAULT_ICONS[kind]


# --- Section rows ------------------------------------------------------------

def shape_link(link) -> dict:
    return {
        "id": str(link.id),
        "title": link.title,
        "description": _text(link.description),
        "url": link.url,
        "iconName": _icon(link, ResourceKind.LINKS),
        "imageUrl": _text(link.image_url),
        "projectDetails": _text(link.project_details),
        "order": link.display_order,
    }


def shape_portfolio_image(image) -> dict:
    return {
        "id": str(image.id),
        "url": image.url,
        "title": _text(image.title),
        "description": _text(image.description),
        "order": image.display_order,
    }


def shape_portfolio(project) -> dict:
    return {
        "id": str(project.id),
        "title": project.title,
        "description": _text(project.description),
        "category": _text(project.category),
        "url": _text(project.url),
        "iconName": _icon(project, ResourceKind.PORTFOLIO),
        "images": [shape_portfolio_image(i) for i in _by_order(project.images)],
        "order": project.display_order,
    }


def shape_work_project(project) -> dict:
    return {
        "id": str(project.id),
        "title": project.title,
        "description": _text(project.description),
        "technologies": _items(project.technologies),
        "order": project.display_order,
    }


def shape_experience(exp, show_titles: bool = True) -> dict:
    return {
        "id": str(exp.id),
        "company": exp.company,
        "position": exp.position if show_titles else HIDDEN_POSITION_LABEL,
        "duration": _text(exp.duration),
        "startDate": _iso(exp.start_date),
        "endDate": _iso(exp.end_date),
        "location": _text(exp.location),
        "description": _text(exp.description),
        "iconName": _icon(exp, ResourceKind.EXPERIENCE),
        "achievements": _items(exp.achievements),
        "projects": [shape_work_project(p) for p in _by_order(exp.projects)],
        "order": exp.display_order,
    }


def shape_education(edu, show_titles: bool = True) -> dict:
    return {
        "id": str(edu.id),
        "institution": edu.institution,
        "degree": edu.degree if show_titles else HIDDEN_DEGREE_LABEL,
        "duration": _text(edu.duration),
        "startDate": _iso(edu.start_date),
        "endDate": _iso(edu.end_date),
        "location": _text(edu.location),
        "description": _text(edu.description),
        "educationType": edu.education_type,
        "gpa": _text(edu.gpa),
        "achievements": _items(edu.achievements),
        "courses": _items(edu.courses),
        "iconName": _icon(edu, ResourceKind.EDUCATION),
        "imageUrl": _text(edu.image_url),
        "websiteUrl": _text(edu.website_url),
        "order": edu.display_order,
    }


def shape_achievement(item) -> dict:
    return {
        "id": str(item.id),
        "title": item.title,
        "organization": item.organization,
        "duration": _text(item.duration),
        "startDate": _iso(item.start_date),
        "endDate": _iso(item.end_date),
        "location": _text(item.location),
        "description": _text(item.description),
        "type": item.type,
        "skillsInvolved": _items(item.skills_involved),
        "keyPoints": _items(item.key_points),
        "iconName": _icon(item, ResourceKind.ACHIEVEMENTS),
        "imageUrl": _text(item.image_url),
        "websiteUrl": _text(item.website_url),
        "order": item.display_order,
    }


def shape_extracurricular(item) -> dict:
    return {
        "id": str(item.id),
        "activityName": item.activity_name,
        "organization": item.organization,
        "duration": _text(item.duration),
        "startDate": _iso(item.start_date),
        "endDate": _iso(item.end_date),
        "location": _text(item.location),
        "role": _text(item.role),
        "description": _text(item.description),
        "type": item.type,
        "responsibilities": _items(item.responsibilities),
        "achievements": _items(item.achievements),
        "skillsDeveloped": _items(item.skills_developed),
        "iconName": _icon(item, ResourceKind.EXTRACURRICULARS),
        "imageUrl": _text(item.image_url),
        "websiteUrl": _text(item.website_url),
        "order": item.display_order,
    }


# --- Profile blocks ----------------------------------------------------------

def shape_user(user) -> dict:
    """Account block returned by auth endpoints."""
    return {
        "id": str(user.id),
        "email": user.email,
        "username": user.username,
        "name": user.name,
        "avatarUrl": user.avatar_url,
        "emailVerified": user.email_verified,
        "instantMessageSubject": user.instant_message_subject,
        "instantMessageBody": user.instant_message_body,
    }


def shape_visibility(profile) -> dict:
    return {
        key: (getattr(profile, attr) if profile is not None else True)
        for key, attr in VISIBILITY_FLAGS.items()
    }


def profile_image_of(user, profile) -> str:
    return (profile.profile_image_url if profile else None) or user.avatar_url or ""


def shape_profile_block(user, profile, show_titles: bool = True) -> dict:
    job_title = _text(profile.job_title) if profile else ""
    return {
        "name": user.name,
        "jobTitle": job_title if show_titles else "",
        "bio": _text(profile.bio) if profile else "",
        "website": _text(profile.website) if profile else "",
        "location": _text(profile.location) if profile else "",
        "profileImage": profile_image_of(user, profile),
        "resumeUrl": _text(profile.resume_url) if profile else "",
        "skills": _items(profile.skills) if profile else [],
    }


def build_private_profile(
    user, profile, sections: ProfileSections, star_count: int,
) -> dict[str, Any]:
    """Owner's view: every active row, visibility flags reported but not applied."""
    return {
        "user": {
            "id": str(user.id),
            "name": user.name,
            "username": user.username,
            "email": user.email,
            "avatar": user.avatar_url or "",
            "instant_message_subject": user.instant_message_subject or "",
            "instant_message_body": user.instant_message_body or "",
        },
        "profile": shape_profile_block(user, profile),
        "visibilitySettings": shape_visibility(profile),
        "links": [shape_link(r) for r in sections.links],
        "portfolio": [shape_portfolio(r) for r in sections.portfolio],
        "experiences": [shape_experience(r) for r in sections.experiences],
        "education": [shape_education(r) for r in sections.education],
        "achievements": [shape_achievement(r) for r in sections.achievements],
        "extracurriculars": [shape_extracurricular(r) for r in sections.extracurriculars],
        "stats": {
            "stars": star_count,
            "totalViews": user.total_views,
            "totalClicks": user.total_clicks,
        },
    }


def build_public_profile(
    user, profile, sections: ProfileSections, star_count: int,
) -> dict[str, Any]:
    """Visitor's view: hidden sections are [], titles masked when show_titles is off."""
    visibility = shape_visibility(profile)
    show_titles = visibility["showTitles"]

    def section(flag: str, rows: list, shaper) -> list:
        return [shaper(r) for r in rows] if visibility[flag] else []

    return {
        "user": {
            "id": str(user.id),
            "name": user.name,
            "username": user.username,
            "avatar": profile_image_of(user, profile),
            "instantMessage": user.instant_message_body or "",
        },
        "profile": shape_profile_block(user, profile, show_titles),
        "visibilitySettings": visibility,
        "links": section("showLinks", sections.links, shape_link),
        "portfolio": section("showPortfolio", sections.portfolio, shape_portfolio),
        "experiences": section(
            "showExperience", sections.experiences,
            lambda r: shape_experience(r, show_titles),
        ),
        "education": section(
            "showEducation", sections.education,
            lambda r: shape_education(r, show_titles),
        ),
        "achievements": section(
            "showAchievements", sections.achievements, shape_achievement,
        ),
        "extracurriculars": section(
            "showExtracurriculars", sections.extracurriculars, shape_extracurricular,
        ),
        "stats": {"stars": star_count},
    }
