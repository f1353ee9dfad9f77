"""Data models for the recipe import pipeline.

Extractors produce a ScrapedRecipe: a loose mapping shaped like
schema.org/Recipe whose values are never trusted. The accessor helpers
below are the only way the rest of the pipeline reads it, so every field
tolerates absence or the wrong shape.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from recipe_importer.services.importing.extractors.dom import parse_html


if TYPE_CHECKING:
    from bs4 import BeautifulSoup

    from recipe_importer.schemas.recipe import NormalizedRecipe


type ScrapedRecipe = dict[str, Any]


class ImportStage(StrEnum):
    """Pipeline states, in the order an import walks through them."""

    FETCHING = "fetching"
    TRYING_STRUCTURED_DATA = "trying_structured_data"
    TRYING_GENERIC_SCRAPER = "trying_generic_scraper"
    TRYING_SITE_SPECIFIC = "trying_site_specific"
    TRYING_GENERIC_HEURISTIC = "trying_generic_heuristic"
    TRYING_AI_FALLBACK = "trying_ai_fallback"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class ImportContext:
    """Caller information the normalizer needs.

    Attributes:
        base_url: Origin (scheme://host[:port]) used to resolve relative
            image references and to build the default image URL.
    """

    base_url: str


@dataclass(frozen=True, slots=True)
class ImportResult:
    """Outcome of a successful import."""

    recipe: NormalizedRecipe
    stage: ImportStage
    source: str


@dataclass
class FetchedPage:
    """A downloaded page shared by every extraction stage.

    The HTML is parsed on first access to ``soup`` and the tree is reused,
    so the DOM-based stages of one import parse the page once. Extractors
    only read the tree.
    """

    url: str
    html: str
    _soup: BeautifulSoup | None = field(default=None, init=False, repr=False)

    @property
    def soup(self) -> BeautifulSoup:
        if self._soup is None:
            self._soup = parse_html(self.html)
        return self._soup


def as_text(value: Any) -> str | None:
    """Return a stripped string for scalar values, else None.

    Lists yield their first usable element. Booleans are rejected so a
    stray ``true`` is never read as text.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, str):
        text = value.strip()
        return text or None
    if isinstance(value, int | float):
        return str(value)
    if isinstance(value, list):
        for item in value:
            text = as_text(item)
            if text:
                return text
    return None


def as_text_list(value: Any) -> list[str]:
    """Flatten a field into a list of non-empty strings.

    Accepts a single string, a list of strings, or objects carrying
    ``text`` or ``name`` (schema.org HowToStep, ingredient dicts). Sections
    with ``itemListElement`` are flattened in order.
    """
    if value is None or isinstance(value, bool):
        return []
    if isinstance(value, str):
        text = value.strip()
        return [text] if text else []
    if isinstance(value, int | float):
        return [str(value)]
    if isinstance(value, dict):
        if "itemListElement" in value:
            return as_text_list(value["itemListElement"])
        for key in ("text", "name"):
            text = as_text(value.get(key))
            if text:
                return [text]
        return []
    if isinstance(value, list | tuple):
        items: list[str] = []
        for item in value:
            items.extend(as_text_list(item))
        return items
    return []

