"""Application settings module.

Centralized configuration using environment variables with sane defaults. The
formatting engine never reads these; only the HTTP layer uses them to build the
base ``FormatConfig`` applied underneath each request's overrides.
"""
from __future__ import annotations

from functools import lru_cache
import os

from pydantic import BaseModel

from ..models.config import FormatConfig, RoundingMode


class Settings(BaseModel):
    # Logging
    LOG_LEVEL: str = "INFO"

    # Base formatting defaults for the HTTP API
    DEFAULT_DECIMAL_PLACES: int = 2
    DEFAULT_ROUNDING_METHOD: RoundingMode = RoundingMode.HALF_UP_SYMMETRIC

    # Requests slower than this are logged at warning level
    SLOW_REQUEST_MS: float = 200.0

    @classmethod
    def load(cls) -> "Settings":
        """Load settings from environment with type coercion and defaults.

        Malformed values fall back to the default instead of failing startup.
        """
        def _get_int(name: str, default: int) -> int:
            raw = os.getenv(name)
            if raw is None:
                return default
            try:
                return int(raw)
            except ValueError:
                return default

        def _get_float(name: str, default: float) -> float:
            raw = os.getenv(name)
            if raw is None:
                return default
            try:
                return float(raw)
            except ValueError:
                return default

        def _get_rounding(name: str, default: RoundingMode) -> RoundingMode:
            raw = os.getenv(name)
            if raw is None:
                return default
            try:
                return RoundingMode(raw.strip())
            except ValueError:
                return default

        return cls(
            LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO").upper(),
            DEFAULT_DECIMAL_PLACES=max(0, _get_int("DEFAULT_DECIMAL_PLACES", 2)),
            DEFAULT_ROUNDING_METHOD=_get_rounding("DEFAULT_ROUNDING_METHOD", RoundingMode.HALF_UP_SYMMETRIC),
            SLOW_REQUEST_MS=_get_float("SLOW_REQUEST_MS", 200.0),
        )

    def default_format_config(self) -> FormatConfig:
        return FormatConfig(
            decimal_places=self.DEFAULT_DECIMAL_PLACES,
            rounding_method=self.DEFAULT_ROUNDING_METHOD,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached Settings instance (singleton pattern)."""
    return Settings.load()


__all__ = ["Settings", "get_settings"]
