"""Admin Schemas: login, admin creation and user status bodies.

Invariants:
    - Emails and usernames are lowercased before they reach the database
    - New admin passwords need 8+ chars with a lowercase, an uppercase and a digit
"""

import re

from pydantic import EmailStr, Field, field_validator

from einfo.core.domain_types import AdminRole
from einfo.schemas.common import CamelModel

_PASSWORD_RULE = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d).+$")


class AdminLogin(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=6)

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.lower()


class CreateAdmin(CamelModel):
    email: EmailStr
    username: str = Field(..., min_length=3, max_length=30, pattern=r"^[A-Za-z0-9_]+$")
    name: str = Field(..., min_length=2, max_length=50)
    password: str = Field(..., min_length=8)
    role: AdminRole = AdminRole.ADMIN

    @field_validator("email", "username")
    @classmethod
    def lower(cls, v: str) -> str:
        return v.lower()

    @field_validator("password")
    @classmethod
    def password_strength(cls, v: str) -> str:
        if not _PASSWORD_RULE.match(v):
            raise ValueError(
                "Password must contain at least one lowercase letter, "
                "one uppercase letter, and one number",
            )
        return v


class UserStatusUpdate(CamelModel):
    is_active: bool
