"""Prompt for extracting a recipe from raw HTML as a last resort."""

from __future__ import annotations

from typing import Any, ClassVar

from .base import BasePrompt


class RecipeExtractionPrompt(BasePrompt):
    """Ask the model for one recipe as a strict JSON object.

    Example output:
        {
            "title": "Pão de queijo",
            "cookingTime": 40,
            "difficulty": "Easy",
            "servings": 6,
            "cost": "Cheap",
            "ingredients": ["500 g polvilho", "2 ovos"],
            "steps": ["Misture tudo.", "Asse por 25 minutos."],
            "tags": ["Brazilian", "Snack"]
        }
    """

    system_prompt: ClassVar[str | None] = (
        "You are a chef assistant. Output valid JSON only."
    )
    temperature: ClassVar[float] = 0.3
    json_mode: ClassVar[bool] = True

    def format(self, **kwargs: Any) -> str:
        """Format the prompt with the truncated page HTML.

        Args:
            **kwargs: Must contain 'html_content'.

        Returns:
            Formatted prompt string.

        Raises:
            ValueError: If 'html_content' is missing.
        """
        html_content = kwargs.get("html_content")
        if html_content is None:
            msg = "Missing required 'html_content' argument"
            raise ValueError(msg)

        return f'''Extract a recipe from the following HTML. Return ONLY valid JSON:

{{
  "title": "string",
  "cookingTime": number,
  "difficulty": "Easy" | "Moderate" | "Challenging",
  "servings": number,
  "cost": "Cheap" | "Medium" | "Expensive",
  "ingredients": ["..."],
  "steps": ["..."],
  "tags": ["..."]
}}

HTML (truncated):
"""
{html_content}
"""'''
