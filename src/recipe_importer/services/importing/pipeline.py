"""Recipe import pipeline.

Fetches a page once, then runs the extraction strategies in order and
normalizes the first result that still has an ingredient or a step once
its lines are cleaned:

1. JSON-LD structured data
2. recipe-scrapers
3. Site-specific profiles
4. Generic multilingual heuristics
5. AI fallback (when enabled)

The DOM-based strategies share one parsed tree per import and, like
recipe-scrapers, run in worker threads to keep parsing off the event loop.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from recipe_importer.core.config import get_settings
from recipe_importer.observability.logging import get_logger
from recipe_importer.services.importing.exceptions import (
    AiFallbackParseError,
    UnrecognizedStructureError,
)
from recipe_importer.services.importing.extractors.ai import AiFallbackExtractor
from recipe_importer.services.importing.extractors.heuristic import (
    extract_generic_heuristic,
)
from recipe_importer.services.importing.extractors.scraper_library import (
    extract_with_recipe_scrapers,
)
from recipe_importer.services.importing.extractors.sites import extract_site_specific
from recipe_importer.services.importing.extractors.structured_data import (
    extract_structured_data,
)
from recipe_importer.services.importing.fetcher import HtmlFetcher
from recipe_importer.services.importing.models import (
    FetchedPage,
    ImportContext,
    ImportResult,
    ImportStage,
)
from recipe_importer.services.importing.normalizer import has_content, normalize_recipe


if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from bs4 import BeautifulSoup

    from recipe_importer.core.config import Settings
    from recipe_importer.llm.client.protocol import LLMClientProtocol
    from recipe_importer.services.importing.models import ScrapedRecipe


logger = get_logger(__name__)

type StageRunner = Callable[[FetchedPage], Awaitable[ScrapedRecipe | None]]
type HtmlExtractor = Callable[[str, str], ScrapedRecipe | None]


@dataclass(frozen=True, slots=True)
class ExtractionStage:
    """One strategy in the fall-through chain."""

    state: ImportStage
    source: str
    run: StageRunner


class DocumentExtractor(Protocol):
    """Extractor that can read an already parsed page."""

    def __call__(
        self,
        html: str,
        url: str,
        *,
        soup: BeautifulSoup | None = None,
    ) -> ScrapedRecipe | None: ...


def _document_stage(extractor: DocumentExtractor) -> StageRunner:
    """Run a DOM extractor in a worker thread on the page's shared tree."""

    def extract(page: FetchedPage) -> ScrapedRecipe | None:
        return extractor(page.html, page.url, soup=page.soup)

    async def run(page: FetchedPage) -> ScrapedRecipe | None:
        return await asyncio.to_thread(extract, page)

    return run


def _html_stage(extractor: HtmlExtractor) -> StageRunner:
    """Run an extractor that parses the raw HTML itself in a worker thread."""

    async def run(page: FetchedPage) -> ScrapedRecipe | None:
        return await asyncio.to_thread(extractor, page.html, page.url)

    return run


def _ai_stage(extractor: AiFallbackExtractor) -> StageRunner:
    async def run(page: FetchedPage) -> ScrapedRecipe | None:
        return await extractor.extract(page.html, page.url)

    return run


class RecipeImportPipeline:
    """Imports a recipe from a URL into a NormalizedRecipe.

    Example:
        ```python
        pipeline = RecipeImportPipeline()
        await pipeline.initialize()

        result = await pipeline.import_recipe("https://example.com/recipe")
        print(result.source, result.recipe.title)

        await pipeline.shutdown()
        ```
    """

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        fetcher: HtmlFetcher | None = None,
        llm_client: LLMClientProtocol | None = None,
        stages: list[ExtractionStage] | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            settings: Settings override; defaults to the cached settings.
            fetcher: HTML fetcher; one is created from settings if omitted.
            llm_client: Client for the AI fallback. The stage only runs
                when this is given and the fallback is enabled.
            stages: Explicit stage list, replacing the default chain.
        """
        self._settings = settings or get_settings()
        self._fetcher = fetcher or HtmlFetcher(
            timeout=self._settings.importing.fetch_timeout,
            max_bytes=self._settings.importing.max_response_bytes,
        )
        self._llm_client = llm_client
        self._stages = stages if stages is not None else self._default_stages()

    @property
    def stages(self) -> list[ExtractionStage]:
        return list(self._stages)

    def _default_stages(self) -> list[ExtractionStage]:
        stages = [
            ExtractionStage(
                ImportStage.TRYING_STRUCTURED_DATA,
                "structured_data",
                _document_stage(extract_structured_data),
            ),
            ExtractionStage(
                ImportStage.TRYING_GENERIC_SCRAPER,
                "recipe_scrapers",
                _html_stage(extract_with_recipe_scrapers),
            ),
            ExtractionStage(
                ImportStage.TRYING_SITE_SPECIFIC,
                "site_specific",
                _document_stage(extract_site_specific),
            ),
            ExtractionStage(
                ImportStage.TRYING_GENERIC_HEURISTIC,
                "generic_heuristic",
                _document_stage(extract_generic_heuristic),
            ),
        ]

        ai_settings = self._settings.importing.ai_fallback
        if ai_settings.enabled and self._llm_client is not None:
            extractor = AiFallbackExtractor(
                self._llm_client,
                max_html_chars=ai_settings.max_html_chars,
            )
            stages.append(
                ExtractionStage(
                    ImportStage.TRYING_AI_FALLBACK,
                    "ai_fallback",
                    _ai_stage(extractor),
                )
            )
        return stages

    async def initialize(self) -> None:
        """Initialize the fetcher's HTTP client."""
        await self._fetcher.initialize()
        logger.info(
            "RecipeImportPipeline initialized",
            stages=[stage.source for stage in self._stages],
        )

    async def shutdown(self) -> None:
        """Release resources."""
        await self._fetcher.shutdown()
        logger.debug("RecipeImportPipeline shutdown")

    async def import_recipe(
        self,
        url: str,
        context: ImportContext | None = None,
    ) -> ImportResult:
        """Import one recipe.

        Args:
            url: Absolute http(s) URL of the recipe page.
            context: Caller origin for image resolution. Defaults to the
                configured public base URL.

        Returns:
            ImportResult with the normalized recipe and the winning stage.

        Raises:
            InvalidUrlError: If the URL is malformed.
            UnsupportedProtocolError: If the scheme is not http(s).
            RecipeFetchError: If the page cannot be fetched (or a subclass:
                FetchTimeoutError, ResponseTooLargeError, UpstreamResponseError).
            UnrecognizedStructureError: If no stage found a recipe.
            AiFallbackParseError: If the AI fallback answered with invalid JSON.
        """
        context = context or ImportContext(base_url=self._settings.importing.public_base_url)

        logger.debug("Import stage", stage=ImportStage.FETCHING, url=url)
        page = FetchedPage(url=url, html=await self._fetcher.fetch(url))

        for stage in self._stages:
            logger.debug("Import stage", stage=stage.state, url=url)
            scraped = await self._run_stage(stage, page)
            if scraped is None or not has_content(scraped):
                continue

            recipe = normalize_recipe(
                scraped,
                context,
                default_image_path=self._settings.importing.default_image_path,
            )
            logger.info(
                "Recipe imported",
                url=url,
                source=stage.source,
                stage=ImportStage.SUCCEEDED,
                title=recipe.title,
            )
            return ImportResult(recipe=recipe, stage=stage.state, source=stage.source)

        logger.warning("Could not detect recipe structure", url=url, stage=ImportStage.FAILED)
        msg = f"Could not detect recipe structure at {url}"
        raise UnrecognizedStructureError(msg)

    async def _run_stage(
        self,
        stage: ExtractionStage,
        page: FetchedPage,
    ) -> ScrapedRecipe | None:
        try:
            return await stage.run(page)
        except AiFallbackParseError:
            logger.warning("AI fallback returned unparseable output", url=page.url)
            raise
        except Exception as e:
            logger.warning(
                "Extraction stage failed",
                stage=stage.source,
                url=page.url,
                error=str(e),
            )
            return None
