"""Constants for the recipe import pipeline."""

from __future__ import annotations

from typing import Final


# Cooking time bounds (minutes)
MIN_COOKING_TIME: Final = 5
MAX_COOKING_TIME: Final = 600
DEFAULT_COOKING_TIME: Final = 30

# Servings bounds; the upper bound is exclusive
MAX_SERVINGS_EXCLUSIVE: Final = 1000
DEFAULT_SERVINGS: Final = 4

MAX_TAGS: Final = 5
MAX_TAG_LENGTH: Final = 50

DEFAULT_TITLE: Final = "Untitled Recipe"
DEFAULT_DIFFICULTY: Final = "Moderate"
IMPORTED_COST: Final = "Medium"
NO_INGREDIENTS_PLACEHOLDER: Final = "No ingredients provided"
NO_STEPS_PLACEHOLDER: Final = "No steps provided"

# Substrings that disqualify a scraped line (stray links, inline binary data)
INGREDIENT_BLOCKLIST: Final = ("http", "base64")
STEP_BLOCKLIST: Final = ("http",)
