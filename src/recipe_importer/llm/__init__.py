"""LLM integration module.

Provides an OpenAI-compatible chat completion client and the prompts the
recipe import pipeline sends through it.
"""

from recipe_importer.llm.client.openai import OpenAIClient
from recipe_importer.llm.exceptions import (
    LLMError,
    LLMRateLimitError,
    LLMResponseError,
    LLMTimeoutError,
    LLMUnavailableError,
    LLMValidationError,
)
from recipe_importer.llm.models import LLMCompletionResult
from recipe_importer.llm.prompts.base import BasePrompt


__all__ = [
    "BasePrompt",
    "LLMCompletionResult",
    "LLMError",
    "LLMRateLimitError",
    "LLMResponseError",
    "LLMTimeoutError",
    "LLMUnavailableError",
    "LLMValidationError",
    "OpenAIClient",
]
