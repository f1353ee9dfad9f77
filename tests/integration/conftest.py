"""Integration test fixtures.

Runs the full application in-process over ASGI. Outbound recipe page
fetches are mocked with respx, so no network is needed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient

from recipe_importer.core.events import lifespan
from recipe_importer.factory import create_app


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI

    from recipe_importer.core.config import Settings


pytestmark = pytest.mark.integration

API_PREFIX = "/api/v1/recipe-import"


@pytest.fixture
async def app(settings: Settings) -> AsyncGenerator[FastAPI]:
    """Application with startup and shutdown events run."""
    application = create_app(settings)
    async with lifespan(application):
        yield application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Async HTTP client talking to the application over ASGI."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://testserver",
    ) as ac:
        yield ac
