"""LLM client implementations."""

from recipe_importer.llm.client.openai import OpenAIClient
from recipe_importer.llm.client.protocol import LLMClientProtocol


__all__ = ["LLMClientProtocol", "OpenAIClient"]
