"""Application lifecycle events."""

from recipe_importer.core.events.lifespan import get_llm_client, lifespan


__all__ = ["get_llm_client", "lifespan"]
