"""Fixtures for API tests against the in-memory store with real cookie auth."""

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from portal.interface.api.app import create_app
from tests.di import build_test_container


@pytest_asyncio.fixture
async def container():
    """App container: in-memory persistence, production authentication."""
    test_container = build_test_container(unmock={"auth"})
    yield test_container
    await test_container.close()


@pytest_asyncio.fixture
async def client(container):
    """HTTP client talking to an app wired to ``container``."""
    app_instance = create_app(container)
    transport = ASGITransport(app=app_instance)
    async with AsyncClient(transport=transport, base_url="http://test") as http:
        yield http
