"""Pytest configuration and fixtures for API integration tests."""

from typing import AsyncGenerator, Callable, Dict

import httpx
import pytest
import pytest_asyncio

from apps.api import deps
from apps.api.main import app
from core.domain.entities import User
from core.infrastructure.security import create_access_token
from core.settings import AppSettings
from core.settings.sections.auth import AuthSettings


@pytest.fixture
def app_settings() -> AppSettings:
    settings = AppSettings()
    settings.auth = AuthSettings(secret_key="integration-secret", algorithm="HS256")
    return settings


@pytest_asyncio.fixture
async def client(session_factory, event_bus, app_settings) -> AsyncGenerator[httpx.AsyncClient, None]:
    """HTTP client bound to the app, with the test database and settings injected."""
    app.dependency_overrides[deps.get_session_factory] = lambda: session_factory
    app.dependency_overrides[deps.get_bus] = lambda: event_bus
    app.dependency_overrides[deps.get_settings] = lambda: app_settings

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
        yield http

    app.dependency_overrides.clear()


@pytest.fixture
def auth(app_settings) -> Callable[[User], Dict[str, str]]:
    """Authorization headers for a seeded user."""

    def headers(user: User) -> Dict[str, str]:
        token = create_access_token(user.id, user.role, app_settings.auth)
        return {"Authorization": f"Bearer {token}"}

    return headers
