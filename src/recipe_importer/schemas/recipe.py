"""Recipe import schemas.

NormalizedRecipe is the single canonical record produced by the import
pipeline. Its field constraints mirror the normalizer's guarantees so a
record that violates them can never leave the service.
"""

from __future__ import annotations

from pydantic import Field

from recipe_importer.schemas.base import APIRequest, APIResponse
from recipe_importer.services.importing.constants import (
    MAX_COOKING_TIME,
    MAX_SERVINGS_EXCLUSIVE,
    MAX_TAG_LENGTH,
    MAX_TAGS,
    MIN_COOKING_TIME,
)


class NormalizedRecipe(APIResponse):
    """Schema-valid recipe produced by an import."""

    id: str = Field(..., min_length=1, description="Timestamp-based import id")
    title: str = Field(..., min_length=1, description="Recipe title")
    cooking_time: int = Field(
        ...,
        ge=MIN_COOKING_TIME,
        le=MAX_COOKING_TIME,
        description="Cooking time in minutes",
    )
    difficulty: str = Field(..., min_length=1, description="Free-text difficulty")
    servings: int = Field(
        ...,
        gt=0,
        lt=MAX_SERVINGS_EXCLUSIVE,
        description="Number of servings",
    )
    cost: str = Field(..., description="Cost bracket")
    ingredients: list[str] = Field(
        ..., min_length=1, description="Cleaned ingredient lines"
    )
    steps: list[str] = Field(..., min_length=1, description="Cleaned step lines")
    tags: list[str] = Field(
        default_factory=list,
        max_length=MAX_TAGS,
        description=f"Capitalized tags, each at most {MAX_TAG_LENGTH} characters",
    )
    image: str = Field(..., min_length=1, description="Absolute image URL")
    created_at: str = Field(..., description="ISO-8601 normalization timestamp")


class ImportRecipeRequest(APIRequest):
    """Request body for importing a recipe from a URL."""

    url: str = Field(
        ...,
        min_length=1,
        max_length=2048,
        description="Absolute http(s) URL of the recipe page",
        examples=["https://www.bbcgoodfood.com/recipes/easy-pancakes"],
    )


class ImportRecipeResponse(APIResponse):
    """Response body for a successful import."""

    recipe: NormalizedRecipe = Field(..., description="The imported recipe")
    source: str = Field(
        ...,
        description="Name of the extraction strategy that produced the recipe",
        examples=["structured_data", "site_specific"],
    )
