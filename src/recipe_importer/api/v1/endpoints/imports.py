"""Recipe import endpoint."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from recipe_importer.api.dependencies import get_import_pipeline
from recipe_importer.core.exceptions import ErrorResponse
from recipe_importer.observability.logging import bind_context, get_logger
from recipe_importer.schemas.recipe import ImportRecipeRequest, ImportRecipeResponse
from recipe_importer.services.importing.models import ImportContext
from recipe_importer.services.importing.pipeline import RecipeImportPipeline


logger = get_logger(__name__)

router = APIRouter(prefix="/recipes", tags=["recipes"])


@router.post(
    "/import",
    response_model=ImportRecipeResponse,
    summary="Import a recipe from a URL",
    description=(
        "Fetches the page and runs the extraction strategies in order "
        "(structured data, recipe-scrapers, site profiles, generic heuristics, "
        "AI fallback) until one finds a recipe."
    ),
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_408_REQUEST_TIMEOUT: {"model": ErrorResponse},
        status.HTTP_413_REQUEST_ENTITY_TOO_LARGE: {"model": ErrorResponse},
        status.HTTP_422_UNPROCESSABLE_ENTITY: {"model": ErrorResponse},
        status.HTTP_502_BAD_GATEWAY: {"model": ErrorResponse},
        status.HTTP_503_SERVICE_UNAVAILABLE: {"model": ErrorResponse},
    },
)
async def import_recipe(
    body: ImportRecipeRequest,
    request: Request,
    pipeline: Annotated[RecipeImportPipeline, Depends(get_import_pipeline)],
) -> ImportRecipeResponse:
    """Import one recipe.

    Relative image references and the placeholder image are resolved
    against the origin this request arrived on.
    """
    bind_context(import_url=body.url)
    context = ImportContext(base_url=str(request.base_url))

    result = await pipeline.import_recipe(body.url, context)
    return ImportRecipeResponse(recipe=result.recipe, source=result.source)
