"""Domain Types: enums and defaults shared by schemas, models and shaping.

Invariants:
    - All closed vocabularies (education type, achievement type, admin role...) are str Enums
    - Default icon names live here and nowhere else
    - ResourceKind is the single registry of list-type resources

Design Decisions:
    - str Enums serialize to JSON without custom encoders
"""

from enum import Enum


# ─── Enums ───────────────────────────────────────────────────────

class ResourceKind(str, Enum):
    """The six list-type sections of a profile."""
    LINKS = "links"
    PORTFOLIO = "portfolio"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    ACHIEVEMENTS = "achievements"
    EXTRACURRICULARS = "extracurriculars"


class EducationType(str, Enum):
    DEGREE = "degree"
    CERTIFICATION = "certification"
    CERTIFICATE = "certificate"
    COURSE = "course"


class AchievementType(str, Enum):
    COMPETITION = "competition"
    RECOGNITION = "recognition"
    CONTRIBUTION = "contribution"


class ExtracurricularType(str, Enum):
    LEADERSHIP = "leadership"
    VOLUNTEERING = "volunteering"
    CREATIVE = "creative"
    ADVOCACY = "advocacy"
    SPORTS = "sports"
    ACADEMIC = "academic"


class AdminRole(str, Enum):
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"


class AdminAction(str, Enum):
    """Actions recorded in the admin activity log."""
    LOGIN = "login"
    LOGOUT = "logout"
    VIEW_DASHBOARD = "view_dashboard"
    VIEW_USERS = "view_users"
    VIEW_USER_DETAILS = "view_user_details"
    ACTIVATE_USER = "activate_user"
    DEACTIVATE_USER = "deactivate_user"
    CREATE_ADMIN = "create_admin"


class TokenType(str, Enum):
    """JWT namespaces. A token of one type is rejected by the other's guard."""
    USER = "user"
    ADMIN = "admin"


# ─── Defaults ────────────────────────────────────────────────────

DEFAULT_ICONS: dict[ResourceKind, str] = {
    ResourceKind.LINKS: "Link",
    ResourceKind.PORTFOLIO: "FolderOpen",
    ResourceKind.EXPERIENCE: "Building",
    ResourceKind.EDUCATION: "GraduationCap",
    ResourceKind.ACHIEVEMENTS: "Trophy",
    ResourceKind.EXTRACURRICULARS: "Users",
}

HIDDEN_POSITION_LABEL = "Position"
HIDDEN_DEGREE_LABEL = "Degree"
