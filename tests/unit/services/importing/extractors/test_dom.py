"""Unit tests for the shared DOM helpers."""

from __future__ import annotations

import pytest

from recipe_importer.services.importing.extractors.dom import (
    find_image,
    first_text,
    page_title,
    parse_html,
    select_texts,
)


pytestmark = pytest.mark.unit

PAGE_URL = "https://recipes.example.com/desserts/flan"


class TestTextHelpers:
    """Tests for text selection helpers."""

    def test_select_texts_dedupes_and_collapses(self) -> None:
        """Should collapse whitespace and drop duplicates and blanks."""
        soup = parse_html("<ul><li> 2\n eggs </li><li></li><li>2 eggs</li><li>milk</li></ul>")

        assert select_texts(soup, "li") == ["2 eggs", "milk"]

    def test_first_text_uses_first_productive_selector(self) -> None:
        """Should skip selectors that match nothing or only blanks."""
        soup = parse_html("<h2></h2><div class='title'>Flan</div>")

        assert first_text(soup, ("h1", "h2", ".title")) == "Flan"

    def test_page_title_falls_back_to_document_title(self) -> None:
        """Should use <title> when there is no <h1>."""
        soup = parse_html("<html><head><title>Flan</title></head><body></body></html>")

        assert page_title(soup) == "Flan"


class TestFindImage:
    """Tests for main image detection."""

    def test_open_graph_wins(self) -> None:
        """Should prefer og:image over page images."""
        soup = parse_html(
            '<meta property="og:image" content="https://cdn.example.com/og.jpg">'
            '<img src="/img/other.jpg">'
        )

        assert find_image(soup, PAGE_URL) == "https://cdn.example.com/og.jpg"

    def test_lazy_loaded_image_resolved_against_page(self) -> None:
        """Should read data-src and resolve it against the page URL."""
        soup = parse_html('<div class="hero"><img data-src="../img/flan.jpg"></div>')

        assert find_image(soup, PAGE_URL, (".hero img",)) == (
            "https://recipes.example.com/img/flan.jpg"
        )

    def test_srcset_first_candidate(self) -> None:
        """Should use the first srcset URL."""
        soup = parse_html('<img srcset="/a-200.jpg 200w, /a-400.jpg 400w">')

        assert find_image(soup, PAGE_URL) == "https://recipes.example.com/a-200.jpg"

    def test_no_image(self) -> None:
        """Should return None when the page has no image."""
        assert find_image(parse_html("<p>text</p>"), PAGE_URL) is None
