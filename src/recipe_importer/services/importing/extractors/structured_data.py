"""JSON-LD recipe extractor.

Extracts schema.org/Recipe objects embedded in
``<script type="application/ld+json">`` blocks. The objects are returned
untouched; the normalizer reads the schema.org property names directly.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import orjson

from recipe_importer.observability.logging import get_logger
from recipe_importer.services.importing.extractors.dom import parse_html


if TYPE_CHECKING:
    from bs4 import BeautifulSoup

    from recipe_importer.services.importing.models import ScrapedRecipe


logger = get_logger(__name__)


def extract_jsonld_recipes(
    html: str,
    *,
    soup: BeautifulSoup | None = None,
) -> list[ScrapedRecipe]:
    """Collect every Recipe object from the page's JSON-LD blocks.

    Handles the three observed block shapes:
    - a single object
    - an array of objects
    - an object with an ``@graph`` array

    Blocks that are not valid JSON are skipped.

    Args:
        html: HTML content to parse.
        soup: Already parsed document; ``html`` is parsed when omitted.

    Returns:
        Recipe objects in document order.
    """
    if soup is None:
        soup = parse_html(html)
    recipes: list[ScrapedRecipe] = []

    for script in soup.find_all("script", attrs={"type": "application/ld+json"}):
        raw = script.string or script.get_text()
        if not raw or not raw.strip():
            continue
        try:
            data = orjson.loads(raw.strip())
        except orjson.JSONDecodeError:
            logger.debug("Skipping invalid JSON-LD block")
            continue
        recipes.extend(_recipes_in_block(data))

    return recipes


def extract_structured_data(
    html: str,
    url: str,
    *,
    soup: BeautifulSoup | None = None,
) -> ScrapedRecipe | None:
    """Return the first JSON-LD recipe on the page, if any."""
    recipes = extract_jsonld_recipes(html, soup=soup)
    if not recipes:
        return None
    logger.debug("Found JSON-LD recipes", url=url, count=len(recipes))
    return recipes[0]


def _recipes_in_block(data: Any) -> list[ScrapedRecipe]:
    if isinstance(data, list):
        return [item for item in data if _is_recipe(item)]
    if isinstance(data, dict):
        graph = data.get("@graph")
        if isinstance(graph, list):
            return [item for item in graph if _is_recipe(item)]
        if _is_recipe(data):
            return [data]
    return []


def _is_recipe(item: Any) -> bool:
    """Check ``@type`` (string or list) for "recipe", case-insensitively."""
    if not isinstance(item, dict):
        return False
    schema_type = item.get("@type")
    if isinstance(schema_type, str):
        return "recipe" in schema_type.lower()
    if isinstance(schema_type, list):
        return any(isinstance(t, str) and "recipe" in t.lower() for t in schema_type)
    return False
