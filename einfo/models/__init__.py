"""ORM Models: SQLAlchemy declarative models for every E-Info entity.

Invariants:
    - All models inherit from Base (db/base.py)
    - User is the owner of every profile section; sections are scoped by user_id
    - Admin and AdminActivityLog form a separate namespace with no FK to users

Design Decisions:
    - One file per entity
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from einfo.models.user import User  # noqa: F401
from einfo.models.user_profile import UserProfile  # noqa: F401
from einfo.models.profile_link import ProfileLink  # noqa: F401
from einfo.models.portfolio_project import PortfolioProject  # noqa: F401
from einfo.models.portfolio_image import PortfolioImage  # noqa: F401
from einfo.models.work_experience import WorkExperience  # noqa: F401
from einfo.models.work_project import WorkProject  # noqa: F401
from einfo.models.education import Education  # noqa: F401
from einfo.models.achievement import Achievement  # noqa: F401
from einfo.models.extracurricular import Extracurricular  # noqa: F401
from einfo.models.profile_star import ProfileStar  # noqa: F401
from einfo.models.admin import Admin  # noqa: F401
from einfo.models.admin_activity_log import AdminActivityLog  # noqa: F401
