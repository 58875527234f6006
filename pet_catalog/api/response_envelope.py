# This file builds response envelopes for API endpoints in a consistent format.
# Success bodies carry a context message and data; list bodies add a pagination block.
# Error bodies share one shape so clients can handle every failure the same way.

from __future__ import annotations

from typing import Any


def build_list_envelope(
    *,
    message: str,
    data: list[dict[str, Any]],
    pagination: dict[str, int],
) -> dict[str, Any]:
    """Build standard list response envelope."""

    return {
        "message": message,
        "data": data,
        "pagination": pagination,
    }


def build_object_envelope(*, message: str, data: dict[str, Any]) -> dict[str, Any]:
    """Build standard single-record response envelope."""

    return {"message": message, "data": data}


def build_error_envelope(
    *,
    status_code: int,
    message: str,
    request_id: str | None = None,
    errors: list[dict[str, str]] | None = None,
) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "status": "error",
        "statusCode": status_code,
        "message": message,
    }
    if errors:
        payload["errors"] = errors
    if request_id is not None:
        payload["requestId"] = request_id
    return payload
