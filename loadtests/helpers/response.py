"""Response error extraction for load test observability.

Parses Kamisori API error responses into human-readable messages.
Handles three response shapes:

- Pydantic validation (422): {"detail": [{"loc": [...], "msg": "...", "type": "..."}]}
- Field validation (400): {"error": {"code": "invalid_argument", "messages": {"field": ["msg"]}}}
- Domain errors (401/403/404/409/422): {"error": {"code": "...", "message": "..."}}
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response


def extract_error_detail(response: Response) -> str:
    """Extract a human-readable error message from an API error response.

    Returns a compact string suitable for Locust failure messages and log lines.
    Gracefully handles unparseable bodies and missing fields.
    """
    try:
        body = response.json()
    except Exception:
        # Not JSON: return raw text, truncated
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    # Pydantic validation errors: {"detail": [{"loc": [...], "msg": "..."}]}
    if "detail" in body and isinstance(body["detail"], list):
        parts = []
        for err in body["detail"]:
            loc = ".".join(str(p) for p in err.get("loc", []))
            msg = err.get("msg", str(err))
            parts.append(f"{loc}: {msg}" if loc else msg)
        return " | ".join(parts)

    if isinstance(body.get("error"), dict):
        error = body["error"]
        code = error.get("code", "error")
        if isinstance(error.get("messages"), dict):
            fields = " | ".join(f"{k}: {', '.join(map(str, v))}" for k, v in error["messages"].items())
            return f"{code}: {fields}"
        return f"{code}: {error.get('message', '')}"

    # Unknown shape: stringify and truncate
    return str(body)[:300]
