"""LLM prompt templates."""

from recipe_importer.llm.prompts.base import BasePrompt
from recipe_importer.llm.prompts.recipe_extraction import RecipeExtractionPrompt


__all__ = ["BasePrompt", "RecipeExtractionPrompt"]
