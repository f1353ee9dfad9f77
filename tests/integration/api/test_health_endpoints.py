"""Integration tests for health API endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest


if TYPE_CHECKING:
    from fastapi import FastAPI
    from httpx import AsyncClient


pytestmark = pytest.mark.integration


class TestHealthEndpoint:
    """Tests for GET /health."""

    async def test_health_returns_healthy(self, client: AsyncClient) -> None:
        """Should return healthy status."""
        response = await client.get("/api/v1/recipe-import/health")

        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert data["environment"] == "test"
        assert "version" in data
        assert "timestamp" in data


class TestReadinessEndpoint:
    """Tests for GET /ready."""

    async def test_ready_with_pipeline(self, client: AsyncClient) -> None:
        """Should report ready with the AI fallback disabled."""
        response = await client.get("/api/v1/recipe-import/ready")

        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "ready"
        assert data["components"] == {
            "import_pipeline": "healthy",
            "ai_fallback": "disabled",
        }

    async def test_degraded_without_pipeline(
        self,
        app: FastAPI,
        client: AsyncClient,
    ) -> None:
        """Should report degraded when the pipeline is missing."""
        await app.state.import_pipeline.shutdown()
        app.state.import_pipeline = None

        response = await client.get("/api/v1/recipe-import/ready")

        data = response.json()
        assert data["status"] == "degraded"
        assert data["components"]["import_pipeline"] == "unavailable"
