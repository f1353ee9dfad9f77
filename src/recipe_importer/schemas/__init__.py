"""Pydantic schemas for request/response validation."""

from recipe_importer.schemas.base import APIRequest, APIResponse
from recipe_importer.schemas.health import (
    HealthResponse,
    ReadinessResponse,
    RootResponse,
)
from recipe_importer.schemas.recipe import (
    ImportRecipeRequest,
    ImportRecipeResponse,
    NormalizedRecipe,
)


__all__ = [
    "APIRequest",
    "APIResponse",
    "HealthResponse",
    "ImportRecipeRequest",
    "ImportRecipeResponse",
    "NormalizedRecipe",
    "ReadinessResponse",
    "RootResponse",
]
