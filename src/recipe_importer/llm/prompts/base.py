"""Base class for LLM prompts.

Keeps prompt text, system context and generation options together so
callers never build prompt strings inline.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar


class BasePrompt(ABC):
    """Base class for all LLM prompts.

    Example:
        ```python
        class SummaryPrompt(BasePrompt):
            system_prompt = "You summarize recipes."

            def format(self, **kwargs: Any) -> str:
                return f"Summarize:\\n\\n{kwargs['text']}"
        ```
    """

    system_prompt: ClassVar[str | None] = None
    """Optional system prompt to set context for the LLM."""

    temperature: ClassVar[float] = 0.1
    """Temperature for generation (low = more deterministic)."""

    max_tokens: ClassVar[int | None] = None
    """Maximum tokens to generate (None = model default)."""

    json_mode: ClassVar[bool] = False
    """Whether the response must be a single JSON object."""

    @abstractmethod
    def format(self, **kwargs: Any) -> str:
        """Format the prompt template with input variables.

        Raises:
            ValueError: If required variables are missing.
        """
        ...

    @property
    def name(self) -> str:
        """Prompt identifier for logging."""
        return self.__class__.__name__

    def get_options(self) -> dict[str, Any]:
        """Get generation options for this prompt."""
        options: dict[str, Any] = {"temperature": self.temperature}
        if self.max_tokens is not None:
            options["max_tokens"] = self.max_tokens
        return options
