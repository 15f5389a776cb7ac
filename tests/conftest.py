"""Test configuration and fixtures.

Engine tests under ``tests/unit`` are plain synchronous functions. HTTP tests
under ``tests/integration`` drive the FastAPI app in-process through
``httpx.AsyncClient`` over ``ASGITransport``; no server is started.
"""

import os
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Keep request logs quiet and deterministic for the test session
os.environ.setdefault("LOG_LEVEL", "WARNING")

from numbers_engine.config.settings import get_settings  # noqa: E402
from numbers_engine.main import app  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Settings are cached per process; tests that patch the environment need a reload."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest_asyncio.fixture
async def async_client() -> AsyncGenerator[AsyncClient, None]:  # noqa: D401
    """Async HTTP client for tests."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
