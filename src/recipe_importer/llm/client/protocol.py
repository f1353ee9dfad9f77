"""LLM client protocol definition."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable


if TYPE_CHECKING:
    from recipe_importer.llm.models import LLMCompletionResult


@runtime_checkable
class LLMClientProtocol(Protocol):
    """Interface the AI fallback extractor depends on.

    Any chat completion backend can be plugged in as long as it exposes
    this lifecycle and a text ``generate`` call.
    """

    async def initialize(self) -> None:
        """Initialize client resources (HTTP connections, etc.)."""
        ...

    async def shutdown(self) -> None:
        """Release client resources."""
        ...

    async def generate(
        self,
        prompt: str,
        *,
        model: str | None = None,
        system: str | None = None,
        json_mode: bool = False,
        options: dict[str, Any] | None = None,
    ) -> LLMCompletionResult:
        """Generate a text completion.

        Args:
            prompt: Input prompt text.
            model: Model override (uses client default if None).
            system: Optional system prompt.
            json_mode: Ask the service for a JSON object response.
            options: Generation options (temperature, max_tokens).

        Returns:
            LLMCompletionResult with the raw response text.

        Raises:
            LLMUnavailableError: Service unreachable.
            LLMTimeoutError: Request timed out.
            LLMResponseError: HTTP error from service.
            LLMRateLimitError: Service rate limited the request.
            LLMValidationError: Response body was malformed.
        """
        ...
