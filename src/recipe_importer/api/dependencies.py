"""FastAPI dependencies for service access.

Services are initialized during application startup and stored in
app.state; these dependencies hand them to route handlers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Request

from recipe_importer.core.config import get_settings
from recipe_importer.core.exceptions import ServiceUnavailableException


if TYPE_CHECKING:
    from recipe_importer.core.config import Settings
    from recipe_importer.services.importing.pipeline import RecipeImportPipeline


async def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    settings: Settings | None = getattr(request.app.state, "settings", None)
    return settings or get_settings()


async def get_import_pipeline(request: Request) -> RecipeImportPipeline:
    """Get the recipe import pipeline from app state.

    Raises:
        ServiceUnavailableException: 503 if the pipeline is not initialized.
    """
    pipeline: RecipeImportPipeline | None = getattr(
        request.app.state, "import_pipeline", None
    )
    if pipeline is None:
        msg = "Recipe import service not available"
        raise ServiceUnavailableException(msg)
    return pipeline
