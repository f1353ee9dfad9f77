"""BeautifulSoup helpers shared by the DOM-based extractors."""

from __future__ import annotations

from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from recipe_importer.services.importing.text import collapse_whitespace, dedupe


IMAGE_ATTRIBUTES = ("src", "data-src", "data-lazy-src", "data-original", "srcset")


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


def element_text(element: Tag) -> str:
    """Visible text of an element with whitespace collapsed."""
    return collapse_whitespace(element.get_text(" ", strip=True))


def select_texts(soup: BeautifulSoup | Tag, selector: str) -> list[str]:
    """Non-empty texts of every element matching a CSS selector, deduplicated."""
    texts = [element_text(el) for el in soup.select(selector)]
    return dedupe([text for text in texts if text])


def first_text(soup: BeautifulSoup | Tag, selectors: tuple[str, ...]) -> str:
    """Text of the first element matched by the first productive selector."""
    for selector in selectors:
        element = soup.select_one(selector)
        if element is not None:
            text = element_text(element)
            if text:
                return text
    return ""


def page_title(soup: BeautifulSoup) -> str:
    """First ``<h1>``, else the document ``<title>``."""
    return first_text(soup, ("h1", "title"))


def find_image(
    soup: BeautifulSoup,
    page_url: str,
    selectors: tuple[str, ...] = (),
) -> str | None:
    """Locate the main recipe image.

    Open Graph ``og:image`` wins, then the given ``<img>`` selectors, then
    the first image on the page. Lazy-loading attributes and ``srcset`` are
    read; relative references are resolved against the page URL.
    """
    meta = soup.select_one("meta[property='og:image']")
    if meta is not None:
        content = meta.get("content")
        if isinstance(content, str) and content.strip():
            return _absolute(content.strip(), page_url)

    for selector in (*selectors, "img"):
        element = soup.select_one(selector)
        if element is None:
            continue
        reference = _image_reference(element)
        if reference:
            return _absolute(reference, page_url)
    return None


def _image_reference(element: Tag) -> str | None:
    for attribute in IMAGE_ATTRIBUTES:
        value = element.get(attribute)
        if not isinstance(value, str) or not value.strip():
            continue
        value = value.strip()
        if attribute == "srcset":
            # srcset: "url1 200w, url2 400w"
            value = value.split(",")[0].split()[0]
        return value
    return None


def _absolute(reference: str, page_url: str) -> str:
    if reference.lower().startswith(("http://", "https://")):
        return reference
    return urljoin(page_url, reference)
