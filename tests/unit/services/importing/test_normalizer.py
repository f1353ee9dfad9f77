"""Unit tests for recipe normalization.

Tests cover:
- Schema.org field mapping
- Cooking time and servings bounds
- Ingredient and step cleaning with placeholders
- Tag and image normalization
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

import pytest

from recipe_importer.services.importing.constants import (
    DEFAULT_COOKING_TIME,
    DEFAULT_DIFFICULTY,
    DEFAULT_SERVINGS,
    DEFAULT_TITLE,
    IMPORTED_COST,
    NO_INGREDIENTS_PLACEHOLDER,
    NO_STEPS_PLACEHOLDER,
)
from recipe_importer.services.importing.normalizer import (
    has_content,
    ingredient_lines,
    normalize_recipe,
    step_lines,
)


if TYPE_CHECKING:
    from recipe_importer.services.importing.models import ImportContext


pytestmark = pytest.mark.unit


@pytest.fixture
def jsonld_recipe() -> dict[str, Any]:
    """Recipe shaped like a schema.org JSON-LD object."""
    return {
        "@type": "Recipe",
        "name": "Pancakes &amp; Syrup",
        "recipeIngredient": ["200g flour", "2 eggs", "300ml milk"],
        "recipeInstructions": [
            {"@type": "HowToStep", "text": "Whisk everything."},
            {"@type": "HowToStep", "text": "Fry in a hot pan."},
        ],
        "totalTime": "PT1H20M",
        "recipeYield": "Serves 4",
        "keywords": "breakfast, Easy, breakfast",
        "image": "https://cdn.example.com/pancakes.jpg",
    }


class TestNormalizeRecipe:
    """Tests for the JSON-LD happy path."""

    def test_maps_schema_org_fields(
        self,
        jsonld_recipe: dict[str, Any],
        import_context: ImportContext,
    ) -> None:
        """Should map every schema.org field to the normalized record."""
        recipe = normalize_recipe(jsonld_recipe, import_context)

        assert recipe.title == "Pancakes & Syrup"
        assert recipe.cooking_time == 80
        assert recipe.servings == 4
        assert recipe.ingredients == ["200g flour", "2 eggs", "300ml milk"]
        assert recipe.steps == ["Whisk everything.", "Fry in a hot pan."]
        assert recipe.tags == ["Breakfast", "Easy"]
        assert recipe.image == "https://cdn.example.com/pancakes.jpg"
        assert recipe.difficulty == DEFAULT_DIFFICULTY
        assert recipe.cost == IMPORTED_COST

    def test_id_and_timestamp(
        self,
        jsonld_recipe: dict[str, Any],
        import_context: ImportContext,
    ) -> None:
        """Should stamp a numeric id and an ISO UTC timestamp."""
        recipe = normalize_recipe(jsonld_recipe, import_context)

        assert recipe.id.isdigit()
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", recipe.created_at)

    def test_serializes_in_camel_case(
        self,
        jsonld_recipe: dict[str, Any],
        import_context: ImportContext,
    ) -> None:
        """Should serialize cookingTime and createdAt in camelCase."""
        data = normalize_recipe(jsonld_recipe, import_context).model_dump()

        assert data["cookingTime"] == 80
        assert "createdAt" in data

    def test_idempotent_except_id_and_timestamp(
        self,
        jsonld_recipe: dict[str, Any],
        import_context: ImportContext,
    ) -> None:
        """Should produce identical output for the same input."""
        first = normalize_recipe(jsonld_recipe, import_context)
        second = normalize_recipe(jsonld_recipe, import_context)

        exclude = {"id", "created_at"}
        assert first.model_dump(exclude=exclude) == second.model_dump(exclude=exclude)

    @pytest.mark.parametrize("scraped", [{}, {"name": None, "ingredients": "nope"}, []])
    def test_garbage_input_still_valid(
        self,
        scraped: Any,
        import_context: ImportContext,
    ) -> None:
        """Should fall back to defaults for every field."""
        recipe = normalize_recipe(scraped, import_context)

        assert recipe.title == DEFAULT_TITLE
        assert recipe.cooking_time == DEFAULT_COOKING_TIME
        assert recipe.servings == DEFAULT_SERVINGS
        assert recipe.steps == [NO_STEPS_PLACEHOLDER]
        assert recipe.tags == []
        assert recipe.image == "https://app.example.com/assets/default_recipe.png"


class TestCookingTime:
    """Tests for cooking time selection."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("PT1H20M", 80),
            ("5 hours 15 minutes", 315),
            ("90", 90),
            ("abc", DEFAULT_COOKING_TIME),
            (3, DEFAULT_COOKING_TIME),
            ("PT11H", DEFAULT_COOKING_TIME),
            (600, 600),
            (5, 5),
        ],
    )
    def test_total_time(
        self,
        value: Any,
        expected: int,
        import_context: ImportContext,
    ) -> None:
        """Should parse totalTime and apply the 5-600 bounds."""
        recipe = normalize_recipe({"totalTime": value}, import_context)
        assert recipe.cooking_time == expected

    def test_out_of_range_total_falls_through_to_cook_time(
        self,
        import_context: ImportContext,
    ) -> None:
        """Should try cookTime when totalTime is out of range."""
        recipe = normalize_recipe(
            {"totalTime": "PT0M", "cookTime": "PT25M", "prepTime": "PT10M"},
            import_context,
        )
        assert recipe.cooking_time == 25

    def test_prep_time_is_last_candidate(self, import_context: ImportContext) -> None:
        """Should use prepTime when nothing else parses."""
        recipe = normalize_recipe({"prepTime": "PT15M"}, import_context)
        assert recipe.cooking_time == 15


class TestServings:
    """Tests for servings selection."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("Serves 4", 4),
            ("8 porções", 8),
            ("N/A", DEFAULT_SERVINGS),
            (6, 6),
            (["2", "2 servings"], 2),
            ("0 servings", DEFAULT_SERVINGS),
            ("1000 servings", DEFAULT_SERVINGS),
            ("999", 999),
        ],
    )
    def test_recipe_yield(
        self,
        value: Any,
        expected: int,
        import_context: ImportContext,
    ) -> None:
        """Should read recipeYield within the 1-999 bounds."""
        recipe = normalize_recipe({"recipeYield": value}, import_context)
        assert recipe.servings == expected

    def test_yield_takes_precedence(self, import_context: ImportContext) -> None:
        """Should prefer yield over recipeYield."""
        recipe = normalize_recipe({"yield": "3", "recipeYield": "10"}, import_context)
        assert recipe.servings == 3


class TestIngredients:
    """Tests for ingredient cleaning."""

    def test_drops_link_and_inline_data_lines(self, import_context: ImportContext) -> None:
        """Should drop lines containing http or base64."""
        recipe = normalize_recipe(
            {
                "recipeIngredient": [
                    "1 cup sugar",
                    "see https://example.com/flour",
                    "data:image/png;base64,AAAA",
                ]
            },
            import_context,
        )
        assert recipe.ingredients == ["1 cup sugar"]

    def test_only_links_yields_placeholder(self, import_context: ImportContext) -> None:
        """Should fall back to the placeholder when every line is dropped."""
        recipe = normalize_recipe(
            {"recipeIngredient": ["https://example.com/shop"]},
            import_context,
        )
        assert recipe.ingredients == [NO_INGREDIENTS_PLACEHOLDER]

    def test_ingredients_key_wins(self, import_context: ImportContext) -> None:
        """Should prefer ingredients over recipeIngredient."""
        recipe = normalize_recipe(
            {"ingredients": ["2 tbsp tbsp sugar"], "recipeIngredient": ["salt"]},
            import_context,
        )
        assert recipe.ingredients == ["2 tbsp sugar"]


class TestSteps:
    """Tests for step cleaning."""

    def test_strips_markup_from_steps(self, import_context: ImportContext) -> None:
        """Should strip tags and decode entities."""
        recipe = normalize_recipe(
            {"recipeInstructions": "<p>Bake at 180&deg;C</p>"},
            import_context,
        )
        assert recipe.steps == ["Bake at 180°C"]

    def test_drops_link_steps(self, import_context: ImportContext) -> None:
        """Should drop steps that contain links."""
        recipe = normalize_recipe(
            {"instructions": ["Watch https://video.example.com", "Serve"]},
            import_context,
        )
        assert recipe.steps == ["Serve"]


class TestTags:
    """Tests for tag normalization."""

    def test_limits_to_five_tags(self, import_context: ImportContext) -> None:
        """Should keep at most five tags."""
        recipe = normalize_recipe({"keywords": "a, b, c, d, e, f, g"}, import_context)
        assert recipe.tags == ["A", "B", "C", "D", "E"]

    def test_drops_long_tags(self, import_context: ImportContext) -> None:
        """Should drop tags longer than fifty characters."""
        recipe = normalize_recipe({"keywords": ["x" * 51, "quick"]}, import_context)
        assert recipe.tags == ["Quick"]


class TestImage:
    """Tests for image resolution."""

    def test_relative_image_resolved_against_origin(
        self,
        import_context: ImportContext,
    ) -> None:
        """Should resolve a root-relative path against the caller origin."""
        recipe = normalize_recipe({"image": "/img/cake.jpg"}, import_context)
        assert recipe.image == "https://app.example.com/img/cake.jpg"

    def test_image_object_and_list(self, import_context: ImportContext) -> None:
        """Should read ImageObject urls and the first usable list entry."""
        recipe = normalize_recipe(
            {"image": [{"@type": "ImageObject", "url": "https://cdn.example.com/a.jpg"}]},
            import_context,
        )
        assert recipe.image == "https://cdn.example.com/a.jpg"

    def test_custom_default_image_path(self, import_context: ImportContext) -> None:
        """Should build the placeholder from the configured path."""
        recipe = normalize_recipe(
            {},
            import_context,
            default_image_path="/static/placeholder.png",
        )
        assert recipe.image == "https://app.example.com/static/placeholder.png"


class TestHasContent:
    """Tests for the stage success check."""

    def test_ingredients_only(self) -> None:
        """Should accept a recipe with ingredients and no steps."""
        assert has_content({"recipeIngredient": ["1 egg"]})

    def test_steps_only(self) -> None:
        """Should accept a recipe with steps and no ingredients."""
        assert has_content({"instructions": ["Boil"]})

    @pytest.mark.parametrize(
        "scraped",
        [
            None,
            [],
            {"name": "Pancakes", "ingredients": [], "instructions": []},
            {"recipeIngredient": ["http://spam.example/x"]},
            {"recipeIngredient": ["data:image/png;base64,AAAA"]},
            {"recipeIngredient": ["&nbsp;"], "recipeInstructions": ["<p> </p>"]},
            {"instructions": ["Watch https://video.example.com"]},
        ],
    )
    def test_lines_dropped_by_cleaning_are_not_content(self, scraped: Any) -> None:
        """Should reject extractions whose every line is dropped or cleans to nothing."""
        assert not has_content(scraped)

    def test_lines_match_normalized_record(self, import_context: ImportContext) -> None:
        """Should check the same lines the normalized record carries."""
        scraped = {
            "recipeIngredient": ["http://spam.example/x", "2 eggs"],
            "recipeInstructions": ["&nbsp;", "Fry"],
        }

        recipe = normalize_recipe(scraped, import_context)

        assert ingredient_lines(scraped) == recipe.ingredients == ["2 eggs"]
        assert step_lines(scraped) == recipe.steps == ["Fry"]
