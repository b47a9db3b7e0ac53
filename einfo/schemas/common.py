"""Shared Schema Pieces: camelCase base model, bounded text/list types, URL checks.

Invariants:
    - Every request model accepts both camelCase aliases and snake_case names
    - Strings are whitespace-stripped before length checks
    - Enum fields dump as plain strings (use_enum_values)
    - A URL field keeps the caller's original string once it validates
"""

from datetime import datetime
from typing import Annotated

from pydantic import (
    BaseModel, BeforeValidator, ConfigDict, Field, HttpUrl,
    StringConstraints, TypeAdapter, ValidationError,
)
from pydantic.alias_generators import to_camel

_HTTP_URL = TypeAdapter(HttpUrl)


class CamelModel(BaseModel):
    """Base for request bodies sent by the frontend."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        use_enum_values=True,
    )


def _blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v


def _none_to_list(v):
    return [] if v is None else v


def check_url(v):
    """Validate a web address, accepting bare hosts like example.com."""
    v = _blank_to_none(v)
    if v is None:
        return None
    if not isinstance(v, str) or len(v) > 2048:
        raise ValueError("Please provide a valid URL")
    v = v.strip()
    candidate = v if "://" in v else f"https://{v}"
    try:
        _HTTP_URL.validate_python(candidate)
    except ValidationError:
        raise ValueError("Please provide a valid URL")
    return v


def Text(max_length: int, min_length: int = 0):
    """Required, stripped string within bounds."""
    return Annotated[
        str, StringConstraints(
            strip_whitespace=True, min_length=min_length, max_length=max_length,
        ),
    ]


def StrList(max_items: int, max_item_length: int):
    """List of short strings; null becomes []."""
    return Annotated[
        list[Annotated[str, StringConstraints(
            strip_whitespace=True, max_length=max_item_length,
        )]],
        Field(max_length=max_items),
        BeforeValidator(_none_to_list),
    ]


OptionalDate = Annotated[datetime | None, BeforeValidator(_blank_to_none)]
OptionalUrl = Annotated[str | None, BeforeValidator(check_url)]
RequiredUrl = Annotated[str, BeforeValidator(check_url)]
