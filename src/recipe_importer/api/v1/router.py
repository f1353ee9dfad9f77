"""API v1 router aggregating all endpoint routers.

All endpoints are mounted under the configured ``api.v1_prefix``.
"""

from __future__ import annotations

from fastapi import APIRouter

from recipe_importer.api.v1.endpoints import health, imports


router = APIRouter()

router.include_router(health.router)
router.include_router(imports.router)
