"""Application lifespan event handlers.

Startup configures logging, the optional LLM client and the import
pipeline; shutdown releases them in reverse order.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from recipe_importer.core.config import Settings, get_settings
from recipe_importer.llm.client.openai import OpenAIClient
from recipe_importer.observability.logging import get_logger, setup_logging
from recipe_importer.services.importing.pipeline import RecipeImportPipeline


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI

    from recipe_importer.llm.client.protocol import LLMClientProtocol


logger = get_logger(__name__)


# Container for global LLM client (avoids global statement)
class _LLMClientHolder:
    client: LLMClientProtocol | None = None


async def _startup(app: FastAPI, settings: Settings) -> None:
    """Initialize all application services during startup."""
    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
    )
    logger.info(
        "Starting application",
        app_name=settings.app.name,
        environment=settings.APP_ENV,
        debug=settings.app.debug,
    )

    # LLM client is optional; without it the AI fallback stage is skipped
    if settings.ai_fallback_available:
        try:
            await _init_llm_client(settings)
        except Exception:
            logger.exception("Failed to initialize LLM client - AI fallback unavailable")
    elif settings.importing.ai_fallback.enabled:
        logger.warning(
            "AI fallback enabled but LLM is disabled or OPENAI_API_KEY is not set"
        )

    await _init_import_pipeline(app, settings)

    logger.info("Application startup complete")


async def _init_llm_client(settings: Settings) -> None:
    """Create and initialize the OpenAI-compatible client."""
    openai_settings = settings.llm.openai
    client = OpenAIClient(
        api_key=settings.OPENAI_API_KEY,
        model=openai_settings.model,
        base_url=openai_settings.url,
        timeout=openai_settings.timeout,
        max_retries=openai_settings.max_retries,
        temperature=openai_settings.temperature,
        requests_per_minute=openai_settings.requests_per_minute,
    )
    await client.initialize()
    _LLMClientHolder.client = client
    logger.info("LLM client initialized", model=openai_settings.model)


async def _init_import_pipeline(app: FastAPI, settings: Settings) -> None:
    """Initialize the recipe import pipeline."""
    try:
        pipeline = RecipeImportPipeline(
            settings=settings,
            llm_client=_LLMClientHolder.client,
        )
        await pipeline.initialize()
        app.state.import_pipeline = pipeline
    except Exception:
        logger.exception(
            "Failed to initialize RecipeImportPipeline - recipe import unavailable"
        )
        app.state.import_pipeline = None


async def _shutdown(app: FastAPI) -> None:
    """Shutdown all application services."""
    logger.info("Shutting down application")

    pipeline = getattr(app.state, "import_pipeline", None)
    if pipeline is not None:
        await pipeline.shutdown()
        app.state.import_pipeline = None

    await _shutdown_llm_client()

    logger.info("Application shutdown complete")


async def _shutdown_llm_client() -> None:
    """Shutdown the LLM client."""
    if _LLMClientHolder.client is not None:
        await _LLMClientHolder.client.shutdown()
        _LLMClientHolder.client = None
        logger.debug("LLM client shutdown")


def get_llm_client() -> LLMClientProtocol | None:
    """Get the initialized LLM client, or None when AI fallback is off."""
    return _LLMClientHolder.client


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None - control returns to the application to handle requests.
    """
    settings = getattr(app.state, "settings", None) or get_settings()
    await _startup(app, settings)
    yield
    await _shutdown(app)
