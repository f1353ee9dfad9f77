"""Registry of supported recipe sites."""

from __future__ import annotations

import re
from typing import Final

from recipe_importer.services.importing.extractors.sites import (
    ChildrenScan,
    RawSectionSlice,
    SectionWalk,
    SiteProfile,
)


_I = re.IGNORECASE

# SaborIntenso posts are free-form forum threads
_SI_NOTES = r"observaç|nota|notas|dica|dicas"
_SI_INGREDIENTS = re.compile(r"ingrediente", _I)
_SI_PREPARATION = re.compile(r"preparaç|modo de preparo", _I)


BBC_GOOD_FOOD: Final = SiteProfile(
    name="bbcgoodfood",
    host="bbcgoodfood.com",
    ingredients=("#recipe-ingredients li",),
    steps=("#method li, #method p",),
    servings_selectors=("section.recipe-details__item--servings",),
    servings_pattern=re.compile(r"(\d+)"),
)

CONTINENTE: Final = SiteProfile(
    name="continente",
    host="feed.continente.pt",
    ingredients=("[class*='ingredient' i] li, li[class*='ingredient' i]",),
    steps=(
        "[class*='step' i] li, [class*='step' i] p, "
        "li[class*='step' i], p[class*='step' i]",
    ),
)

TUDO_GOSTOSO: Final = SiteProfile(
    name="tudogostoso",
    host="tudogostoso.com.br",
    ingredients=(
        "li[class*='ingrediente' i], span[class*='ingrediente' i], "
        "p[class*='ingrediente' i], div[class*='ingrediente' i]",
    ),
    steps=(
        SectionWalk(
            header_selector="h2, h3",
            header_pattern=re.compile(r"modo de preparo", _I),
        ),
        "#preparoModo li, #preparoModo p",
        "[class*='preparo' i] li, [class*='preparo' i] p",
    ),
    image_selectors=(".recipe-content img", ".container img"),
)

SABOR_INTENSO: Final = SiteProfile(
    name="saborintenso",
    host="saborintenso.com",
    title_selectors=(".threadtitle h1", "h1"),
    ingredients=(
        ".ingredients li",
        ".postcontent li",
        ChildrenScan(
            container_selector=".postcontent",
            start=_SI_INGREDIENTS,
            stop=re.compile(_SI_NOTES, _I),
        ),
        RawSectionSlice(
            container_selector=".postcontent",
            start=_SI_INGREDIENTS,
            end=re.compile(rf"preparaç|modo de preparo|{_SI_NOTES}|preparation", _I),
            drop=re.compile(r"ingrediente|preparaç|modo de preparo|observaç|nota|dica", _I),
        ),
    ),
    steps=(
        ".preparation p, .preparation li",
        ".postcontent p, .postcontent li",
        ChildrenScan(
            container_selector=".postcontent",
            start=_SI_PREPARATION,
            stop=re.compile(rf"{_SI_NOTES}|ingrediente", _I),
        ),
        RawSectionSlice(
            container_selector=".postcontent",
            start=_SI_PREPARATION,
            end=re.compile(rf"ingrediente|{_SI_NOTES}|ingredients", _I),
            drop=re.compile(r"preparaç|modo de preparo|ingrediente|observaç|nota|dica", _I),
            line_break_tags=("p", "li"),
        ),
    ),
    servings_selectors=(".postcontent", "body"),
    servings_pattern=re.compile(r"Doses:\s*(\d+)", _I),
    image_selectors=(".recipeimage img", ".postcontent img"),
)

FOOD_NETWORK_UK: Final = SiteProfile(
    name="foodnetwork_uk",
    host="foodnetwork.co.uk",
    ingredients=(
        ".ingredients__list li, [data-element-type='ingredients'] li, "
        ".recipe-ingredients li",
    ),
    steps=(
        ".method__list li, .method__list p, [data-element-type='method-step'], "
        ".method__steps li, .recipe-method li, .method p, "
        ".instructions li, .instructions p, "
        "[itemprop='recipeInstructions'] li, [itemprop='recipeInstructions'] p, "
        "[itemprop='recipeInstructions'] span, "
        ".directions li, .directions p",
        "ol li, ul li",
    ),
    time_selectors=(".recipe-meta li",),
    sum_times=True,
)

CYBERCOOK: Final = SiteProfile(
    name="cybercook",
    host="cybercook.com.br",
    ingredients=(".ingredientes li, .ingredientes-item, [itemprop='recipeIngredient']",),
    steps=(
        ".preparo li, .preparo-item, [itemprop='recipeInstructions']",
        ".preparo p, .modo-preparo p",
    ),
    servings_selectors=(
        ".yield",
        "[itemprop='recipeYield']",
        "[class*='porc']",
        "[class*='dose']",
        "[class*='serve']",
    ),
    image_selectors=(
        ".recipe-photo img",
        ".foto-receita img",
        "img[itemprop='image']",
        ".card-recipe img",
        ".recipe-image img",
    ),
)

RECEITAS_NESTLE: Final = SiteProfile(
    name="receitasnestle",
    host="receitasnestle.com.br",
    ingredients=(".recipe-ingredients li, .ingredients__list li, [itemprop='recipeIngredient']",),
    steps=(
        "#cook .cookSteps__item li .text, #cook .cookSteps__item li, "
        "#cook .cookSteps__item p",
    ),
    servings_selectors=(
        ".recipeDetail__infoItem--serving span",
        ".recipeDetail__infoItem--serving",
    ),
    servings_pattern=re.compile(r"(\d{1,4})"),
    time_selectors=(".recipe-info__time", ".recipe-time"),
    image_selectors=("img[loading='eager']",),
    strip_step_numbers=True,
)

RECETAS_GRATIS: Final = SiteProfile(
    name="recetasgratis",
    host="recetasgratis.net",
    ingredients=(".ingredientes li, .ingredientes-item, [itemprop='recipeIngredient']",),
    steps=(".preparacion li, .preparacion p, [itemprop='recipeInstructions']",),
    servings_selectors=(".property.comensales",),
    servings_pattern=re.compile(r"(\d+)"),
    number_steps=True,
)

SITE_PROFILES: Final[tuple[SiteProfile, ...]] = (
    BBC_GOOD_FOOD,
    CONTINENTE,
    TUDO_GOSTOSO,
    SABOR_INTENSO,
    FOOD_NETWORK_UK,
    CYBERCOOK,
    RECEITAS_NESTLE,
    RECETAS_GRATIS,
)
