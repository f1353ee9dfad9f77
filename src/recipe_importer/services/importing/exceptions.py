"""Recipe import exceptions.

Every failure an import can surface to its caller derives from
RecipeImportError. Extraction-stage errors never appear here: stages
recover them locally and the pipeline moves on to the next strategy.
"""

from __future__ import annotations


class RecipeImportError(Exception):
    """Base exception for recipe import failures."""


class InvalidUrlError(RecipeImportError):
    """Raised when the URL cannot be parsed or has no host."""


class UnsupportedProtocolError(RecipeImportError):
    """Raised when the URL scheme is not http or https."""

    def __init__(self, scheme: str) -> None:
        self.scheme = scheme
        super().__init__(f"Only http:// or https:// URLs are supported, got {scheme!r}")


class RecipeFetchError(RecipeImportError):
    """Raised when fetching the recipe page fails.

    Covers connection errors and unreadable bodies. The subclasses below
    describe the specific transport failures.
    """


class FetchTimeoutError(RecipeFetchError):
    """Raised when the fetch exceeds its wall-clock budget."""


class ResponseTooLargeError(RecipeFetchError):
    """Raised when the page is larger than the configured limit."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"Response too large (>{limit} bytes)")


class UpstreamResponseError(RecipeFetchError):
    """Raised when the recipe site answers with a non-2xx status."""

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"Upstream responded with {status_code}")


class UnrecognizedStructureError(RecipeImportError):
    """Raised when no extraction strategy found a recipe on the page."""


class AiFallbackParseError(RecipeImportError):
    """Raised when the language model's answer is not a JSON object.

    The AI fallback is the last strategy, so this is terminal for the
    import rather than a silent fall-through.
    """
