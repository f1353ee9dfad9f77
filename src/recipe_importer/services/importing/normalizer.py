"""Normalization of raw extractions into the canonical recipe record.

Every extraction strategy feeds ``normalize_recipe``. The function accepts
any mapping, including garbage, and always returns a NormalizedRecipe
whose fields satisfy the schema bounds.
"""

from __future__ import annotations

import time
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any
from urllib.parse import urljoin

from recipe_importer.schemas.recipe import NormalizedRecipe
from recipe_importer.services.importing.constants import (
    DEFAULT_COOKING_TIME,
    DEFAULT_DIFFICULTY,
    DEFAULT_SERVINGS,
    DEFAULT_TITLE,
    IMPORTED_COST,
    INGREDIENT_BLOCKLIST,
    MAX_COOKING_TIME,
    MAX_SERVINGS_EXCLUSIVE,
    MAX_TAG_LENGTH,
    MAX_TAGS,
    MIN_COOKING_TIME,
    NO_INGREDIENTS_PLACEHOLDER,
    NO_STEPS_PLACEHOLDER,
    STEP_BLOCKLIST,
)
from recipe_importer.services.importing.models import as_text, as_text_list
from recipe_importer.services.importing.text import (
    clean_ingredient,
    clean_step,
    contains_any,
    decode_entities,
    dedupe,
    extract_servings,
    normalize_tag,
    parse_duration,
)


if TYPE_CHECKING:
    from recipe_importer.services.importing.models import ImportContext, ScrapedRecipe


DEFAULT_IMAGE_PATH = "/assets/default_recipe.png"

_TIME_KEYS = ("totalTime", "cookTime", "prepTime")
_YIELD_KEYS = ("yield", "recipeYield")
_INGREDIENT_KEYS = ("ingredients", "recipeIngredient")
_STEP_KEYS = ("recipeInstructions", "instructions")


def normalize_recipe(
    scraped: ScrapedRecipe,
    context: ImportContext,
    *,
    default_image_path: str = DEFAULT_IMAGE_PATH,
) -> NormalizedRecipe:
    """Convert a raw extraction into a schema-valid recipe.

    Args:
        scraped: Raw extraction. Any shape is tolerated.
        context: Caller origin used for image resolution.
        default_image_path: Path of the placeholder image on the caller origin.

    Returns:
        NormalizedRecipe with every field within bounds.
    """
    if not isinstance(scraped, dict):
        scraped = {}

    return NormalizedRecipe(
        id=str(time.time_ns()),
        title=_normalize_title(scraped),
        cooking_time=_normalize_cooking_time(scraped),
        difficulty=as_text(scraped.get("difficulty")) or DEFAULT_DIFFICULTY,
        servings=_normalize_servings(scraped),
        cost=IMPORTED_COST,
        ingredients=ingredient_lines(scraped) or [NO_INGREDIENTS_PLACEHOLDER],
        steps=step_lines(scraped) or [NO_STEPS_PLACEHOLDER],
        tags=_normalize_tags(scraped.get("keywords")),
        image=_normalize_image(scraped.get("image"), context, default_image_path),
        created_at=datetime.now(UTC).isoformat(timespec="milliseconds").replace(
            "+00:00", "Z"
        ),
    )


def _normalize_title(scraped: ScrapedRecipe) -> str:
    for key in ("name", "title"):
        value = scraped.get(key)
        if isinstance(value, str) and value.strip():
            title = decode_entities(value.strip()).strip()
            if title:
                return title
    return DEFAULT_TITLE


def _normalize_cooking_time(scraped: ScrapedRecipe) -> int:
    """First candidate within the accepted range wins."""
    for key in _TIME_KEYS:
        minutes = parse_duration(scraped.get(key))
        if minutes is not None and MIN_COOKING_TIME <= minutes <= MAX_COOKING_TIME:
            return minutes
    return DEFAULT_COOKING_TIME


def _normalize_servings(scraped: ScrapedRecipe) -> int:
    for key in _YIELD_KEYS:
        servings = extract_servings(scraped.get(key))
        if servings is not None:
            if 0 < servings < MAX_SERVINGS_EXCLUSIVE:
                return servings
            break
    return DEFAULT_SERVINGS


def ingredient_lines(scraped: ScrapedRecipe) -> list[str]:
    """Cleaned ingredient lines the record will carry, without the placeholder.

    ``ingredients`` wins over ``recipeIngredient`` when it keeps any line.
    """
    for key in _INGREDIENT_KEYS:
        lines = [
            clean_ingredient(line)
            for line in as_text_list(scraped.get(key))
            if not contains_any(line, INGREDIENT_BLOCKLIST)
        ]
        lines = [line for line in lines if line]
        if lines:
            return lines
    return []


def step_lines(scraped: ScrapedRecipe) -> list[str]:
    """Cleaned step lines the record will carry, without the placeholder."""
    for key in _STEP_KEYS:
        lines = [
            clean_step(line)
            for line in as_text_list(scraped.get(key))
            if not contains_any(line, STEP_BLOCKLIST)
        ]
        lines = [line for line in lines if line]
        if lines:
            return lines
    return []


def has_content(scraped: ScrapedRecipe | None) -> bool:
    """Whether an extraction keeps at least one ingredient or step once cleaned.

    Lines the normalizer drops (links, inline data, markup or entities that
    clean to nothing) do not count, so such an extraction never wins a stage.
    """
    if not isinstance(scraped, dict):
        return False
    return bool(ingredient_lines(scraped) or step_lines(scraped))


def _normalize_tags(keywords: Any) -> list[str]:
    if isinstance(keywords, str):
        raw = keywords.split(",")
    else:
        raw = as_text_list(keywords)

    tags = dedupe([tag for tag in (normalize_tag(t) for t in raw) if tag])
    return [tag for tag in tags if len(tag) <= MAX_TAG_LENGTH][:MAX_TAGS]


def _normalize_image(value: Any, context: ImportContext, default_path: str) -> str:
    origin = context.base_url.rstrip("/") + "/"

    candidates: list[Any] = value if isinstance(value, list) else [value]
    for candidate in candidates:
        if isinstance(candidate, dict):
            candidate = candidate.get("url")
        if not isinstance(candidate, str) or not candidate.strip():
            continue
        resolved = _resolve_image(candidate.strip(), origin)
        if resolved:
            return resolved

    return urljoin(origin, default_path)


def _resolve_image(reference: str, origin: str) -> str | None:
    if reference.lower().startswith(("http://", "https://")):
        return reference
    try:
        resolved = urljoin(origin, reference)
    except ValueError:
        return None
    if resolved.lower().startswith(("http://", "https://")):
        return resolved
    return None
