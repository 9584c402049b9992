"""HTML heuristic extraction.

Fallback for pages without structured data: common recipe-plugin class names,
microdata attributes and test ids, tried in order per field.
"""

import logging
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from cuisinons.recipe_import.errors import ImportErrorType, RecipeImportError
from cuisinons.recipe_import.extractors.base import RecipeExtractor
from cuisinons.recipe_import.models import (
    ExtractionMethod,
    ExtractionStatus,
    ExtractorInput,
    ExtractorResult,
    PartialRecipe,
)
from cuisinons.recipe_import.normalizer import (
    iso8601_to_minutes,
    parse_servings,
    parse_time_text,
)
from cuisinons.recipe_import.scoring import calculate_confidence, find_missing_fields

logger = logging.getLogger(__name__)

# First selector with non-empty content wins
SELECTORS: dict[str, list[str]] = {
    "title": [
        '[itemprop="name"]',
        ".recipe-title",
        ".entry-title",
        "h1.recipe-name",
        "h1",
        ".recipe-header h1",
        '[data-testid="recipe-title"]',
    ],
    "description": [
        '[itemprop="description"]',
        ".recipe-description",
        ".recipe-summary",
        '[data-testid="recipe-description"]',
    ],
    "prep_time": [
        '[itemprop="prepTime"]',
        ".prep-time",
        ".recipe-prep-time",
        '[data-testid="prep-time"]',
    ],
    "cook_time": [
        '[itemprop="cookTime"]',
        ".cook-time",
        ".recipe-cook-time",
        '[data-testid="cook-time"]',
    ],
    "total_time": [
        '[itemprop="totalTime"]',
        ".total-time",
        ".recipe-total-time",
        '[data-testid="total-time"]',
    ],
    "servings": [
        '[itemprop="recipeYield"]',
        ".recipe-yield",
        ".servings",
        ".recipe-servings",
        '[data-testid="servings"]',
    ],
    "ingredients": [
        '[itemprop="recipeIngredient"]',
        ".recipe-ingredient",
        ".ingredients li",
        ".recipe-ingredients li",
        '[data-testid="recipe-ingredient"]',
    ],
    "instructions": [
        '[itemprop="recipeInstructions"]',
        '[itemprop="recipeInstruction"]',
        ".recipe-instruction",
        ".instructions li",
        ".recipe-instructions li",
        ".directions li",
        ".recipe-directions li",
        '[data-testid="recipe-instruction"]',
    ],
    "image": [
        '[itemprop="image"]',
        ".recipe-image img",
        ".recipe-photo img",
        ".hero-image img",
        '[data-testid="recipe-image"]',
    ],
}


class HtmlScraperExtractor(RecipeExtractor):
    """Tier 2: CSS selector heuristics over the page markup."""

    name = "html-scraper"
    priority = 2
    method = ExtractionMethod.HTML_SCRAPING

    def can_handle(self, input: ExtractorInput) -> bool:
        return bool(input.html and input.html.strip())

    async def _extract(self, input: ExtractorInput) -> ExtractorResult:
        recipe = scrape_recipe_html(input.html or "", input.url)
        missing = find_missing_fields(recipe)
        return ExtractorResult(
            status=ExtractionStatus.SUCCESS,
            recipe=recipe,
            confidence=calculate_confidence(recipe),
            missing_fields=missing,
            warnings=[f"Missing optional fields: {', '.join(missing)}"] if missing else [],
            extraction_method=self.method,
        )


def scrape_recipe_html(html: str, url: str) -> PartialRecipe:
    """
    Build a recipe from page markup.

    Raises:
        RecipeImportError: if the title, ingredients or instructions are missing
    """
    soup = BeautifulSoup(html, "html.parser")

    title = _select_text(soup, SELECTORS["title"])
    if not title:
        raise RecipeImportError("Could not find recipe title", ImportErrorType.EXTRACTION_ERROR)

    ingredients = _select_text_list(soup, SELECTORS["ingredients"])
    if not ingredients:
        raise RecipeImportError("Could not find recipe ingredients", ImportErrorType.EXTRACTION_ERROR)

    instructions = _select_text_list(soup, SELECTORS["instructions"])
    if not instructions:
        raise RecipeImportError("Could not find recipe instructions", ImportErrorType.EXTRACTION_ERROR)

    return PartialRecipe(
        name=title,
        description=_select_text(soup, SELECTORS["description"]),
        image=_select_image(soup, SELECTORS["image"], url),
        preparation_time=_select_minutes(soup, SELECTORS["prep_time"]),
        cooking_time=_select_minutes(soup, SELECTORS["cook_time"]),
        total_time=_select_minutes(soup, SELECTORS["total_time"]),
        servings=parse_servings(_select_text(soup, SELECTORS["servings"])),
        instructions=instructions,
        ingredients_raw=ingredients,
        is_private=True,
        source_url=url,
    )


def _element_text(element: Tag) -> str:
    # <meta itemprop="name" content="..."> carries its value in an attribute
    text = element.get_text(" ", strip=True) or element.get("content") or ""
    return " ".join(str(text).split())


def _belongs_to_recipe(element: Tag) -> bool:
    # A nested author/publisher item has its own itemprop="name"
    scope = element.find_parent(attrs={"itemscope": True})
    return scope is None or "recipe" in str(scope.get("itemtype", "")).lower()


def _candidates(soup: BeautifulSoup, selector: str) -> list[Tag]:
    elements = soup.select(selector)
    if selector.startswith("[itemprop"):
        elements = [element for element in elements if _belongs_to_recipe(element)]
    return elements


def _select_text(soup: BeautifulSoup, selectors: list[str]) -> str | None:
    for selector in selectors:
        for element in _candidates(soup, selector):
            text = _element_text(element)
            if text:
                return text
    return None


def _select_text_list(soup: BeautifulSoup, selectors: list[str]) -> list[str]:
    for selector in selectors:
        items = [_element_text(element) for element in _candidates(soup, selector)]
        items = [item for item in items if item]
        if items:
            return items
    return []


def _select_minutes(soup: BeautifulSoup, selectors: list[str]) -> int | None:
    for selector in selectors:
        for element in _candidates(soup, selector)[:1]:
            minutes = parse_time_text(element.get_text(" ", strip=True))
            if minutes is None:
                # <time itemprop="prepTime" datetime="PT10M"> or <meta content="PT10M">
                iso_value = element.get("datetime") or element.get("content")
                if isinstance(iso_value, str) and iso_value.upper().startswith("P"):
                    minutes = iso8601_to_minutes(iso_value)
            if minutes is not None:
                return minutes
    return None


def _select_image(soup: BeautifulSoup, selectors: list[str], base_url: str) -> str | None:
    for selector in selectors:
        for element in _candidates(soup, selector)[:1]:
            src = element.get("src") or element.get("data-src") or element.get("content")
            if isinstance(src, str) and src.strip():
                return urljoin(base_url, src.strip())
    return None
