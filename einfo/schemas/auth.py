"""Auth Schemas: Google sign-in body."""

from pydantic import Field

from einfo.schemas.common import CamelModel


class GoogleLogin(CamelModel):
    """Google ID token from the frontend; username only matters on first sign-in."""
    google_token: str = Field(..., min_length=1)
    username: str | None = Field(None, max_length=30)
