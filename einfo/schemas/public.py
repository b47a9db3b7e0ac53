"""Public Schemas: visitor-facing request bodies (message, star)."""

from pydantic import EmailStr, Field

from einfo.schemas.common import CamelModel


class MessageRequest(CamelModel):
    message: str = Field(..., min_length=1, max_length=1000)
    sender_email: EmailStr
    sender_name: str | None = Field(None, max_length=100)


class StarRequest(CamelModel):
    visitor_ip: str | None = Field(None, max_length=64)
