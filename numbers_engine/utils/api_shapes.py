"""Shared API shape helpers.

Every successful endpoint wraps its payload with :func:`success`; error bodies are
built by :func:`numbers_engine.utils.errors.error_payload` in the exception handlers.
"""
from __future__ import annotations

import time
from typing import Any


def success(data: Any, **meta) -> dict:
    return {"status": "success", "data": data, "meta": meta or None, "timestamp": time.time()}


__all__ = ["success"]
