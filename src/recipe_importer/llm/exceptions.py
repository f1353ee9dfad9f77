"""LLM client exceptions.

These exceptions are caught by the AI fallback extractor, which treats
every one of them as "the stage found nothing".
"""

from __future__ import annotations


class LLMError(Exception):
    """Base exception for LLM client errors."""


class LLMUnavailableError(LLMError):
    """Raised when the LLM service cannot be reached.

    This includes connection errors and exhausted retries.
    """


class LLMTimeoutError(LLMUnavailableError):
    """Raised when an LLM request times out."""


class LLMResponseError(LLMError):
    """Raised when the LLM returns an error response (HTTP 4xx/5xx)."""


class LLMValidationError(LLMError):
    """Raised when the LLM response body is not the expected shape."""


class LLMRateLimitError(LLMError):
    """Raised when the LLM service rate limits the request."""
