"""Centralized error payload helpers and domain exceptions.

The engine itself only raises for one condition: a named format pattern that does
not exist. Everything else degrades to a defined value.
"""
from __future__ import annotations

import time
from typing import Any, Dict

ERROR_CODES = {
    "validation": "VALIDATION_ERROR",
    "not_found": "NOT_FOUND",
    "unknown_pattern": "UNKNOWN_PATTERN",
    "http": "HTTP_ERROR",
    "internal": "INTERNAL_SERVER_ERROR",
}


def error_payload(code: str, message: str, details: Any | None = None, path: str | None = None) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "status": "error",
        "error": {
            "code": code,
            "message": message,
        },
        "timestamp": time.time(),
    }
    if details is not None:
        payload["error"]["details"] = details
    if path:
        payload["path"] = path
    return payload


class DomainError(Exception):
    """Base domain error storing standardized fields."""

    def __init__(self, code: str, message: str, details: Any | None = None):  # noqa: D401
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details


class UnknownPatternError(DomainError, LookupError):
    def __init__(self, name: str, available: list[str] | None = None):
        super().__init__(
            ERROR_CODES["unknown_pattern"],
            f"Unknown format pattern: {name}",
            details={"name": name, "available": available} if available else {"name": name},
        )
        self.name = name


__all__ = [
    "ERROR_CODES",
    "error_payload",
    "DomainError",
    "UnknownPatternError",
]
