"""Adapter over the recipe-scrapers library.

recipe-scrapers knows 400+ sites and, outside of them, falls back to
schema.org and microdata parsing. The adapter runs it on the HTML the
fetcher already downloaded and maps its accessors into a ScrapedRecipe.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from recipe_scrapers import WebsiteNotImplementedError, scrape_html

from recipe_importer.observability.logging import get_logger


if TYPE_CHECKING:
    from collections.abc import Callable

    from recipe_importer.services.importing.models import ScrapedRecipe


logger = get_logger(__name__)


def extract_with_recipe_scrapers(html: str, url: str) -> ScrapedRecipe | None:
    """Extract a recipe using recipe-scrapers.

    Args:
        html: Page HTML.
        url: Original URL, used for site detection.

    Returns:
        ScrapedRecipe, or None when the library cannot handle the page.
    """
    try:
        scraper = scrape_html(html, org_url=url, supported_only=False)
    except WebsiteNotImplementedError:
        logger.debug("Site not supported by recipe-scrapers", url=url)
        return None
    except Exception as e:
        # recipe-scrapers raises a variety of errors for malformed markup
        logger.debug("recipe-scrapers could not load page", url=url, error=str(e))
        return None

    recipe: ScrapedRecipe = {
        "name": _safe_call(scraper.title),
        "ingredients": _safe_call_list(scraper.ingredients),
        "instructions": _safe_call_list(scraper.instructions_list),
        "image": _safe_call(scraper.image),
        "totalTime": _safe_call(scraper.total_time),
        "cookTime": _safe_call(scraper.cook_time),
        "prepTime": _safe_call(scraper.prep_time),
        "yield": _safe_call(scraper.yields),
        "keywords": _safe_call(scraper.keywords),
    }
    return {key: value for key, value in recipe.items() if value not in (None, "", [])}


def _safe_call(func: Callable[[], Any]) -> Any:
    """Call a scraper accessor, returning None if it raises."""
    try:
        return func()
    except Exception:
        return None


def _safe_call_list(func: Callable[[], Any]) -> list[str]:
    result = _safe_call(func)
    if not isinstance(result, list):
        return []
    return [item.strip() for item in result if isinstance(item, str) and item.strip()]
