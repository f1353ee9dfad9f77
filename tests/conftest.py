"""Shared test fixtures for the recipe import service tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from recipe_importer.core.config import Settings, get_settings
from recipe_importer.services.importing.models import ImportContext


if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture(autouse=True)
def _test_environment(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Load the test YAML overrides and give every test fresh settings."""
    # Set APP_ENV before Settings loads YAML files
    monkeypatch.setenv("APP_ENV", "test")
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Settings loaded for the test environment."""
    return Settings()


@pytest.fixture
def import_context() -> ImportContext:
    """Caller origin used to resolve images."""
    return ImportContext(base_url="https://app.example.com")
