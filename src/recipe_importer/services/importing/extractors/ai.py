"""LLM-backed last-resort recipe extraction."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

import orjson

from recipe_importer.llm.exceptions import LLMError
from recipe_importer.llm.prompts.recipe_extraction import RecipeExtractionPrompt
from recipe_importer.observability.logging import get_logger
from recipe_importer.services.importing.exceptions import AiFallbackParseError


if TYPE_CHECKING:
    from recipe_importer.llm.client.protocol import LLMClientProtocol
    from recipe_importer.services.importing.models import ScrapedRecipe


logger = get_logger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)

# Model output key -> ScrapedRecipe key
_FIELD_MAP = {
    "title": "title",
    "name": "name",
    "difficulty": "difficulty",
    "ingredients": "ingredients",
    "steps": "instructions",
    "cookingTime": "totalTime",
    "servings": "yield",
    "tags": "keywords",
    "image": "image",
}


def strip_code_fences(raw: str) -> str:
    """Remove Markdown code fences the model wraps around JSON."""
    text = raw.strip()
    if text.startswith("```"):
        text = _FENCE_RE.sub("", text).strip()
    return text


def parse_ai_recipe(raw: str) -> ScrapedRecipe:
    """Parse the model's answer into a ScrapedRecipe.

    Raises:
        AiFallbackParseError: If the answer is not a JSON object.
    """
    try:
        data: Any = orjson.loads(strip_code_fences(raw))
    except orjson.JSONDecodeError as e:
        msg = "Could not extract recipe, even with AI fallback"
        raise AiFallbackParseError(msg) from e

    if not isinstance(data, dict):
        msg = "Could not extract recipe, even with AI fallback"
        raise AiFallbackParseError(msg)

    return {target: data[source] for source, target in _FIELD_MAP.items() if source in data}


class AiFallbackExtractor:
    """Sends truncated page HTML to an LLM and parses its JSON answer.

    LLM transport failures mean "nothing found" so the pipeline can fail
    with an unrecognized structure; an unparseable answer is raised.
    """

    def __init__(
        self,
        client: LLMClientProtocol,
        *,
        max_html_chars: int = 6000,
        prompt: RecipeExtractionPrompt | None = None,
    ) -> None:
        self._client = client
        self._max_html_chars = max_html_chars
        self._prompt = prompt or RecipeExtractionPrompt()

    async def extract(self, html: str, url: str) -> ScrapedRecipe | None:
        """Ask the LLM for a recipe.

        Args:
            html: Page HTML; only the first ``max_html_chars`` are sent.
            url: Page URL, for logging.

        Returns:
            ScrapedRecipe, or None when the LLM could not be used.

        Raises:
            AiFallbackParseError: If the LLM answered with something other
                than a JSON object.
        """
        prompt = self._prompt.format(html_content=html[: self._max_html_chars])
        try:
            result = await self._client.generate(
                prompt,
                system=self._prompt.system_prompt,
                json_mode=self._prompt.json_mode,
                options=self._prompt.get_options(),
            )
        except LLMError as e:
            logger.warning(
                "AI fallback unavailable",
                url=url,
                prompt=self._prompt.name,
                error=str(e),
            )
            return None

        recipe = parse_ai_recipe(result.raw_response)
        logger.info(
            "AI fallback produced recipe",
            url=url,
            model=result.model,
            completion_tokens=result.completion_tokens,
        )
        return recipe
