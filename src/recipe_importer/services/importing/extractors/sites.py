"""Site-specific heuristic extraction.

Each supported site is described by a SiteProfile: plain data naming the
selectors and fallbacks that work for that site's markup. One engine
interprets every profile, so adding a site means adding a profile to
``site_profiles``, not code.

Ingredient and step sources are tried in order and the first that yields
any lines wins. A source is one of:

- a CSS selector string
- SectionWalk: a header element and the siblings that follow it
- ChildrenScan: a container's children between a start and a stop marker
- RawSectionSlice: a regex slice over a container's raw HTML
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from recipe_importer.observability.logging import get_logger
from recipe_importer.services.importing.extractors.dom import (
    element_text,
    find_image,
    first_text,
    parse_html,
    select_texts,
)
from recipe_importer.services.importing.text import (
    clean_ingredient,
    clean_step,
    dedupe,
    extract_servings,
    parse_duration,
    strip_tags,
    sum_time_units,
)


if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from bs4 import BeautifulSoup

    from recipe_importer.services.importing.models import ScrapedRecipe


logger = get_logger(__name__)

_BR_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)
_STEP_NUMBER_RE = re.compile(r"^\s*\d+[\).\s-]*")


@dataclass(frozen=True, slots=True)
class SectionWalk:
    """Collect the siblings following a header until the next header.

    Attributes:
        header_selector: Candidate header elements.
        stop_tags: Sibling tags that end the section.
        header_pattern: Text a header must contain to start the walk.
        item_tags: Sibling tags whose text is collected. Lists among the
            siblings contribute their ``<li>`` items.
    """

    header_selector: str
    header_pattern: re.Pattern[str]
    stop_tags: tuple[str, ...] = ("h2", "h3")
    item_tags: tuple[str, ...] = ("p", "li")


@dataclass(frozen=True, slots=True)
class ChildrenScan:
    """Scan a container's direct children for a marked section.

    Children after the first one whose text matches ``start`` are split on
    ``<br>`` into lines, until a child matches ``stop``.
    """

    container_selector: str
    start: re.Pattern[str]
    stop: re.Pattern[str]


@dataclass(frozen=True, slots=True)
class RawSectionSlice:
    """Slice a section out of a container's raw HTML.

    The section runs from the first ``start`` match to the nearest ``end``
    match at least ``min_length`` characters later. Tags in
    ``line_break_tags`` become line breaks; an empty tuple means every tag
    does. Lines matching ``drop`` (section headings) are discarded.
    """

    container_selector: str
    start: re.Pattern[str]
    end: re.Pattern[str]
    drop: re.Pattern[str]
    line_break_tags: tuple[str, ...] = ()
    min_length: int = 10


type LineSource = str | SectionWalk | ChildrenScan | RawSectionSlice


@dataclass(frozen=True, slots=True)
class SiteProfile:
    """Declarative description of one site's recipe markup."""

    name: str
    host: str
    ingredients: tuple[LineSource, ...]
    steps: tuple[LineSource, ...]
    title_selectors: tuple[str, ...] = ("h1",)
    servings_selectors: tuple[str, ...] = ()
    servings_pattern: re.Pattern[str] | None = None
    time_selectors: tuple[str, ...] = ()
    sum_times: bool = False
    image_selectors: tuple[str, ...] = ()
    strip_step_numbers: bool = False
    number_steps: bool = False

    def matches(self, url: str) -> bool:
        return self.host in url.lower()


def find_profile(url: str, profiles: Iterable[SiteProfile]) -> SiteProfile | None:
    """First profile whose host appears in the URL."""
    return next((profile for profile in profiles if profile.matches(url)), None)


def extract_site_specific(
    html: str,
    url: str,
    profiles: Iterable[SiteProfile] | None = None,
    *,
    soup: BeautifulSoup | None = None,
) -> ScrapedRecipe | None:
    """Run the matching site profile against the page.

    Args:
        html: Page HTML.
        url: Page URL; selects the profile and resolves relative images.
        profiles: Profiles to consider. Defaults to the built-in registry.
        soup: Already parsed document; ``html`` is parsed when omitted.

    Returns:
        ScrapedRecipe with at least one ingredient or step, else None.
    """
    if profiles is None:
        from recipe_importer.services.importing.extractors.site_profiles import (
            SITE_PROFILES,
        )

        profiles = SITE_PROFILES

    profile = find_profile(url, profiles)
    if profile is None:
        return None

    if soup is None:
        soup = parse_html(html)
    recipe = run_profile(profile, soup, url)
    if recipe is None:
        logger.debug("Site profile found nothing", site=profile.name, url=url)
        return None

    logger.debug(
        "Site profile extracted recipe",
        site=profile.name,
        url=url,
        ingredients=len(recipe.get("ingredients", [])),
        steps=len(recipe.get("instructions", [])),
    )
    return recipe


def run_profile(profile: SiteProfile, soup: BeautifulSoup, url: str) -> ScrapedRecipe | None:
    ingredients = _collect(soup, profile.ingredients, clean_ingredient)
    steps = _collect(soup, profile.steps, clean_step)

    if profile.strip_step_numbers:
        steps = dedupe([s for s in (_STEP_NUMBER_RE.sub("", s).strip() for s in steps) if s])
    if profile.number_steps:
        steps = [f"{i}. {step}" for i, step in enumerate(steps, start=1)]

    if not ingredients and not steps:
        return None

    recipe: ScrapedRecipe = {
        "name": first_text(soup, profile.title_selectors),
        "ingredients": ingredients,
        "instructions": steps,
    }

    servings = _servings(soup, profile)
    if servings is not None:
        recipe["yield"] = str(servings)

    minutes = _cooking_time(soup, profile)
    if minutes is not None:
        recipe["totalTime"] = minutes

    image = find_image(soup, url, profile.image_selectors)
    if image:
        recipe["image"] = image

    return recipe


def _collect(
    soup: BeautifulSoup,
    sources: tuple[LineSource, ...],
    clean: Callable[[str], str],
) -> list[str]:
    for source in sources:
        match source:
            case str():
                lines = select_texts(soup, source)
            case SectionWalk():
                lines = _walk_section(soup, source)
            case ChildrenScan():
                lines = _scan_children(soup, source)
            case RawSectionSlice():
                lines = _slice_raw_section(soup, source)
        cleaned = dedupe([line for line in (clean(raw) for raw in lines) if line])
        if cleaned:
            return cleaned
    return []


def _walk_section(soup: BeautifulSoup, walk: SectionWalk) -> list[str]:
    header = next(
        (
            el
            for el in soup.select(walk.header_selector)
            if walk.header_pattern.search(element_text(el))
        ),
        None,
    )
    if header is None:
        return []

    lines: list[str] = []
    for sibling in header.find_next_siblings():
        if sibling.name in walk.stop_tags:
            break
        if sibling.name in walk.item_tags:
            lines.append(element_text(sibling))
        elif sibling.name in ("ul", "ol"):
            lines.extend(element_text(li) for li in sibling.find_all("li"))
    return lines


def _scan_children(soup: BeautifulSoup, scan: ChildrenScan) -> list[str]:
    lines: list[str] = []
    for container in soup.select(scan.container_selector):
        found = False
        for child in container.find_all(recursive=False):
            text = element_text(child)
            if scan.start.search(text):
                found = True
                continue
            if not found:
                continue
            if scan.stop.search(text):
                break
            lines.extend(_BR_RE.split(child.decode_contents()))
    return [strip_tags(line) for line in lines]


def _slice_raw_section(soup: BeautifulSoup, raw: RawSectionSlice) -> list[str]:
    markup = "".join(c.decode_contents() for c in soup.select(raw.container_selector))
    markup = _BR_RE.sub("\n", markup)

    start = raw.start.search(markup)
    if start is None:
        return []
    end = raw.end.search(markup, start.start() + raw.min_length)
    block = markup[start.start() : end.start() if end else len(markup)]

    if raw.line_break_tags:
        tags = "|".join(raw.line_break_tags)
        block = re.sub(rf"</?(?:{tags})\b[^>]*>", "\n", block, flags=re.IGNORECASE)
        block = re.sub(r"<[^>]+>", "", block)
    else:
        block = re.sub(r"<[^>]+>", "\n", block)

    lines = (line.strip() for line in block.split("\n"))
    return [line for line in lines if line and not raw.drop.search(line)]


def _servings(soup: BeautifulSoup, profile: SiteProfile) -> int | None:
    for selector in profile.servings_selectors:
        element = soup.select_one(selector)
        if element is None:
            continue
        text = element_text(element)
        if profile.servings_pattern is not None:
            match = profile.servings_pattern.search(text)
            servings = int(match.group(1)) if match else None
        else:
            servings = extract_servings(text)
        if servings is not None and servings > 0:
            return servings
    return None


def _cooking_time(soup: BeautifulSoup, profile: SiteProfile) -> int | None:
    if not profile.time_selectors:
        return None
    elements = soup.select(", ".join(profile.time_selectors))
    if profile.sum_times:
        # Only entries carrying an hour or minute unit count toward the total
        total = sum(sum_time_units(element_text(el)) for el in elements)
        return total or None
    for element in elements:
        minutes = parse_duration(element_text(element))
        if minutes:
            return minutes
    return None
