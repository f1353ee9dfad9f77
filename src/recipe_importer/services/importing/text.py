"""Text helpers shared by the extractors and the normalizer."""

from __future__ import annotations

import html
import re
from typing import Any


_WHITESPACE_RE = re.compile(r"\s+")
_TAG_RE = re.compile(r"<[^>]+>")
_DOUBLED_UNIT_RE = re.compile(r"\b(tbsp|tsp|cups|cup|g|kg|ml|l)\s+\1\b", re.IGNORECASE)
_TBSP_RE = re.compile(r"\btbsp\b", re.IGNORECASE)
_TSP_RE = re.compile(r"\btsp\b", re.IGNORECASE)
_CUP_RE = re.compile(r"\bcups?\b", re.IGNORECASE)

_ISO_DURATION_RE = re.compile(
    r"^P(?:(\d+)D)?(?:T(?:(\d+)H)?(?:(\d+)M)?(?:(\d+(?:\.\d+)?)S)?)?$",
    re.IGNORECASE,
)
_HOURS_RE = re.compile(r"(\d+)\s*(?:h|hr|hour)s?", re.IGNORECASE)
_MINUTES_RE = re.compile(r"(\d+)\s*(?:m|min|minute|minutes)", re.IGNORECASE)
_FIRST_NUMBER_RE = re.compile(r"(\d+)")

_SERVINGS_PATTERNS = (
    re.compile(
        r"\b(\d{1,4})\s*(?:servings?|people|persons?|porções|porção|porcoes|porcao"
        r"|doses?|comensales|comensais|raciones|ración|racion)\b",
        re.IGNORECASE,
    ),
    re.compile(r"\b(?:serves?|makes?)\s+(\d{1,4})\b", re.IGNORECASE),
    re.compile(r"\bfor\s+(\d{1,4})\b", re.IGNORECASE),
)
_ANY_SERVINGS_NUMBER_RE = re.compile(r"(\d{1,4})")

_TAG_STRIP_RE = re.compile(r"[^\w\s]|_")


def decode_entities(text: str) -> str:
    """Decode HTML entities (``&amp;``, ``&#39;``, ``&eacute;``)."""
    return html.unescape(text)


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def strip_tags(text: str) -> str:
    """Remove markup left inside scraped text."""
    return _TAG_RE.sub(" ", text)


def clean_ingredient(text: str) -> str:
    """Normalize one ingredient line.

    Decodes entities, collapses whitespace, collapses doubled units
    (``"2 tbsp tbsp sugar"``) and lowercases tbsp/tsp/cup(s).
    """
    out = collapse_whitespace(decode_entities(text))
    out = _DOUBLED_UNIT_RE.sub(r"\1", out)
    out = _TBSP_RE.sub("tbsp", out)
    out = _TSP_RE.sub("tsp", out)
    return _CUP_RE.sub(lambda m: m.group(0).lower(), out)


def clean_step(text: str) -> str:
    return collapse_whitespace(decode_entities(strip_tags(text)))


def parse_duration(value: Any) -> int | None:
    """Convert a duration in any observed shape to whole minutes.

    Handles numbers (already minutes), ISO-8601 durations (``PT1H20M``,
    ``P1DT2H``), free text with repeated hour/minute groups
    (``"1 hr 20 mins"``, ``"2h 15m"``) and bare numbers in text.

    Returns:
        Minutes, or None when nothing numeric is found.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int | float):
        return int(value) if value == value and abs(value) != float("inf") else None
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    match = _ISO_DURATION_RE.match(text)
    if match and any(match.groups()):
        days, hours, minutes, seconds = match.groups()
        total = int(days or 0) * 24 * 60 + int(hours or 0) * 60 + int(minutes or 0)
        total += int(float(seconds or 0) // 60)
        return total

    total = sum_time_units(text)
    if total > 0:
        return total

    match = _FIRST_NUMBER_RE.search(text)
    if match:
        return int(match.group(1))
    return None


def sum_time_units(text: str) -> int:
    """Add up every hour and minute group in free text (0 when none)."""
    total = sum(int(m) * 60 for m in _HOURS_RE.findall(text))
    return total + sum(int(m) for m in _MINUTES_RE.findall(text))


def extract_servings(value: Any) -> int | None:
    """Pull a servings count out of a yield value.

    Keyworded patterns are tried first (``"8 porções"``, ``"Serves 4"``,
    ``"for 6"``); otherwise the first 1-4 digit number is used.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, list):
        return next(
            (servings for servings in map(extract_servings, value) if servings is not None),
            None,
        )
    if not isinstance(value, str):
        return None

    for pattern in _SERVINGS_PATTERNS:
        match = pattern.search(value)
        if match:
            return int(match.group(1))
    match = _ANY_SERVINGS_NUMBER_RE.search(value)
    if match:
        return int(match.group(1))
    return None


def normalize_tag(tag: str) -> str:
    """Lowercase, strip punctuation, then capitalize the first letter."""
    text = _TAG_STRIP_RE.sub("", decode_entities(tag).strip().lower()).strip()
    return text[:1].upper() + text[1:]


def dedupe(items: list[str]) -> list[str]:
    """Remove duplicates while preserving first-seen order."""
    return list(dict.fromkeys(items))


def contains_any(text: str, needles: tuple[str, ...]) -> bool:
    lowered = text.lower()
    return any(needle in lowered for needle in needles)
