# This file builds response envelopes for API endpoints in a consistent format.
# It exists so every endpoint answers with the same `{success, message, data, error}` shape.
# The helpers return plain dictionaries that Pydantic response models validate at runtime.
# This keeps endpoint functions focused on service calls instead of repetitive envelope assembly.

from __future__ import annotations

from typing import Any


def build_success_envelope(*, message: str, data: dict[str, Any] | None = None) -> dict[str, Any]:
    """Build the success envelope; `data` is omitted for message-only responses."""

    payload: dict[str, Any] = {"success": True, "message": message}
    if data is not None:
        payload["data"] = data
    return payload


def build_error_envelope(*, error: str, message: str) -> dict[str, Any]:
    """Build the failure envelope."""

    return {"success": False, "error": error, "message": message}
