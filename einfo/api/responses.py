"""Success envelope shared by every route: {"success": true, "message"?, "data"?}."""

from typing import Any


def ok(data: Any = None, message: str | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {"success": True}
    if message is not None:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return body
