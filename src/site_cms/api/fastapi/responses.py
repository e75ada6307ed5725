from __future__ import annotations

from typing import Any, Optional


def ok(data: Any = None, *, count: bool = False, message: Optional[str] = None) -> dict[str, Any]:
    """The success envelope every route returns: ``{"success": true, "data", "count"?, "message"?}``."""
    body: dict[str, Any] = {"success": True}
    if count:
        body["count"] = len(data or [])
    if data is not None:
        body["data"] = data
    if message is not None:
        body["message"] = message
    return body
