"""Generic multilingual DOM heuristics for pages no other strategy handled."""

from __future__ import annotations

from typing import TYPE_CHECKING

from recipe_importer.observability.logging import get_logger
from recipe_importer.services.importing.extractors.dom import (
    element_text,
    page_title,
    parse_html,
    select_texts,
)
from recipe_importer.services.importing.text import clean_ingredient, clean_step, dedupe


if TYPE_CHECKING:
    from bs4 import BeautifulSoup

    from recipe_importer.services.importing.models import ScrapedRecipe


logger = get_logger(__name__)

INGREDIENT_SELECTOR = ", ".join(
    (
        "[itemprop='recipeIngredient']",
        ".ingredients li",
        ".ingredientes li",
        ".ingredient-list li",
        ".zutaten li",
        ".ingrédients li",
        ".ingredienti li",
    )
)

STEP_SELECTOR = ", ".join(
    (
        "[itemprop='recipeInstructions']",
        ".method li",
        ".instructions li",
        ".directions li",
        ".preparation li",
        ".preparacion li",
        ".preparo li",
        ".modo-preparo li",
        ".zubereitung li",
        ".préparation li",
        ".procedimento li",
    )
)


def extract_generic_heuristic(
    html: str,
    url: str,
    *,
    soup: BeautifulSoup | None = None,
) -> ScrapedRecipe | None:
    """Extract a recipe with broad, language-agnostic selectors.

    Falls back to the loose check: the first ``<h1>`` plus every list item
    mentioning "ingred", accepted only when both exist.
    """
    if soup is None:
        soup = parse_html(html)

    ingredients = dedupe(
        [line for line in map(clean_ingredient, select_texts(soup, INGREDIENT_SELECTOR)) if line]
    )
    steps = dedupe([line for line in map(clean_step, select_texts(soup, STEP_SELECTOR)) if line])
    if ingredients or steps:
        logger.debug(
            "Generic heuristics matched",
            url=url,
            ingredients=len(ingredients),
            steps=len(steps),
        )
        return {"name": page_title(soup), "ingredients": ingredients, "instructions": steps}

    return _loose_fallback(soup, url)


def _loose_fallback(soup: BeautifulSoup, url: str) -> ScrapedRecipe | None:
    heading = soup.find("h1")
    title = element_text(heading) if heading is not None else ""
    items = [
        text
        for text in (element_text(li) for li in soup.find_all("li"))
        if "ingred" in text.lower()
    ]
    if not title or not items:
        return None

    logger.debug("Loose ingredient heuristic matched", url=url, items=len(items))
    return {"title": title, "ingredients": items, "instructions": []}
