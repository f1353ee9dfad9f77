"""HTTP client for OpenAI-compatible chat completion services.

Speaks the ``/chat/completions`` wire format directly over httpx, so any
compatible provider (OpenAI, Groq, a local gateway) can be targeted by
changing the base URL.
"""

from __future__ import annotations

from typing import Any

import httpx
from aiolimiter import AsyncLimiter
from pydantic import ValidationError

from recipe_importer.llm.exceptions import (
    LLMRateLimitError,
    LLMResponseError,
    LLMTimeoutError,
    LLMUnavailableError,
    LLMValidationError,
)
from recipe_importer.llm.models import (
    ChatMessage,
    ChatRequest,
    ChatResponse,
    LLMCompletionResult,
)
from recipe_importer.observability.logging import get_logger


logger = get_logger(__name__)


class OpenAIClient:
    """Async client for an OpenAI-compatible chat completions API.

    Attributes:
        base_url: API base URL.
        model: Default model (e.g., gpt-4o-mini).
        timeout: HTTP request timeout in seconds.
        max_retries: Maximum retry attempts for transient failures.
    """

    DEFAULT_BASE_URL = "https://api.openai.com/v1"

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        max_retries: int = 1,
        temperature: float = 0.3,
        requests_per_minute: float = 60.0,
        rate_limiter: AsyncLimiter | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: API key sent as a bearer token.
            model: Default model name.
            base_url: API base URL.
            timeout: HTTP request timeout in seconds (default: 10).
            max_retries: Retries for timeouts and connection errors (default: 1).
            temperature: Default sampling temperature.
            requests_per_minute: Request rate when no limiter is injected.
            rate_limiter: Shared limiter; overrides ``requests_per_minute``.
            transport: Optional httpx transport (used by tests).
        """
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self.temperature = temperature
        self._transport = transport
        self._http_client: httpx.AsyncClient | None = None
        # One request per (60/rpm) seconds, no initial burst
        self._rate_limiter = rate_limiter or AsyncLimiter(1, 60.0 / requests_per_minute)

    @property
    def chat_url(self) -> str:
        """Get the chat completions endpoint URL."""
        return f"{self.base_url}/chat/completions"

    async def initialize(self) -> None:
        """Initialize the HTTP client with auth headers."""
        if self._http_client is not None:
            return

        self._http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            limits=httpx.Limits(
                max_keepalive_connections=5,
                max_connections=10,
            ),
            transport=self._transport,
        )
        logger.info(
            "OpenAIClient initialized",
            model=self.model,
            timeout=self.timeout,
        )

    async def shutdown(self) -> None:
        """Close the HTTP client and release connections."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
            logger.debug("OpenAIClient shutdown")

    async def _execute_with_retry(self, request: ChatRequest) -> ChatResponse:
        """Execute request with retry logic for transient failures."""
        if self._http_client is None:
            await self.initialize()

        assert self._http_client is not None

        last_exception: Exception | None = None

        for attempt in range(self.max_retries + 1):
            await self._rate_limiter.acquire()

            try:
                response = await self._http_client.post(
                    self.chat_url,
                    json=request.model_dump(exclude_none=True),
                )

                if response.status_code == 429:
                    retry_after = response.headers.get("retry-after", "60")
                    msg = f"LLM rate limit exceeded, retry after {retry_after}s"
                    raise LLMRateLimitError(msg)

                response.raise_for_status()
                return ChatResponse.model_validate(response.json())

            except httpx.TimeoutException as e:
                last_exception = e
                logger.warning(
                    "LLM request timeout",
                    attempt=attempt + 1,
                    max_retries=self.max_retries,
                    timeout=self.timeout,
                )
                if attempt < self.max_retries:
                    continue
                msg = f"LLM timeout after {self.timeout}s"
                raise LLMTimeoutError(msg) from e

            except httpx.HTTPStatusError as e:
                logger.warning(
                    "LLM request failed",
                    status_code=e.response.status_code,
                    url=self.chat_url,
                )
                msg = f"LLM service returned {e.response.status_code}"
                raise LLMResponseError(msg) from e

            except httpx.RequestError as e:
                last_exception = e
                logger.warning(
                    "LLM connection error",
                    attempt=attempt + 1,
                    max_retries=self.max_retries,
                    error=str(e),
                )
                if attempt < self.max_retries:
                    continue
                msg = f"Cannot connect to LLM service: {e}"
                raise LLMUnavailableError(msg) from e

            except (ValidationError, ValueError) as e:
                msg = f"Malformed chat completion response: {e}"
                raise LLMValidationError(msg) from e

        msg = "Max retries exceeded"
        raise LLMUnavailableError(msg) from last_exception

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
            model: Model to use (defaults to client's default model).
            system: Optional system prompt for context.
            json_mode: Request ``{"type": "json_object"}`` output.
            options: ``temperature`` and ``max_tokens`` overrides.

        Returns:
            LLMCompletionResult with the raw response text.

        Raises:
            LLMUnavailableError: If the service cannot be reached.
            LLMTimeoutError: If the request times out.
            LLMResponseError: If the service returns an error.
            LLMRateLimitError: If the service rate limits the request.
            LLMValidationError: If the response body is malformed.
        """
        options = options or {}
        messages: list[ChatMessage] = []
        if system:
            messages.append(ChatMessage(role="system", content=system))
        messages.append(ChatMessage(role="user", content=prompt))

        request = ChatRequest(
            model=model or self.model,
            messages=messages,
            response_format={"type": "json_object"} if json_mode else None,
            temperature=options.get("temperature", self.temperature),
            max_tokens=options.get("max_tokens"),
        )

        response = await self._execute_with_retry(request)
        content = response.choices[0].message.content
        if content is None:
            msg = "Chat completion returned no content"
            raise LLMValidationError(msg)

        usage = response.usage
        return LLMCompletionResult(
            raw_response=content,
            model=response.model,
            prompt_tokens=usage.prompt_tokens if usage else None,
            completion_tokens=usage.completion_tokens if usage else None,
        )
