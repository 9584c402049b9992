"""Tests for the HTML heuristic extractor."""

import asyncio

from cuisinons.recipe_import.extractors.html import HtmlScraperExtractor
from cuisinons.recipe_import.models import ExtractionMethod, ExtractionStatus, ExtractorInput

URL = "https://example.com/recipes/chili"


def _extract(html: str):
    return asyncio.run(HtmlScraperExtractor().extract(ExtractorInput(url=URL, html=html)))


class TestCanHandle:
    def test_needs_html(self):
        extractor = HtmlScraperExtractor()
        assert extractor.can_handle(ExtractorInput(url=URL, html="<p>hi</p>"))
        assert not extractor.can_handle(ExtractorInput(url=URL, html="   "))
        assert not extractor.can_handle(ExtractorInput(url=URL, content="plain text"))


class TestExtract:
    """Tests for selector-based extraction."""

    def test_recipe_plugin_markup(self, html_only_page):
        result = _extract(html_only_page)

        assert result.status == ExtractionStatus.SUCCESS
        assert result.extraction_method == ExtractionMethod.HTML_SCRAPING

        recipe = result.recipe
        assert recipe.name == "Grandma's Chili"
        assert recipe.description == "A hearty weeknight chili."
        assert recipe.preparation_time == 15
        assert recipe.cooking_time == 90
        assert recipe.servings == 6
        assert recipe.image == "https://example.com/images/chili.jpg"
        assert recipe.ingredients_raw == ["1 lb ground beef", "1 onion, chopped", "2 cans kidney beans"]
        assert recipe.instructions == ["Brown the beef with the onion.", "Add the beans and simmer."]
        assert recipe.is_private is True

        # name 30 + instructions 25 + description 10 + times 16 + servings 7 + image 5
        assert result.confidence == 93
        assert set(result.missing_fields) == {"recipe_category", "recipe_cuisine", "calories"}

    def test_microdata(self):
        html = """
        <div itemscope itemtype="https://schema.org/Recipe">
          <h2 itemprop="name">Iced Tea</h2>
          <time itemprop="prepTime" datetime="PT5M">Five minutes</time>
          <span itemprop="recipeIngredient">4 tea bags</span>
          <span itemprop="recipeIngredient">1 l water</span>
          <div itemprop="recipeInstructions">Steep and chill.</div>
        </div>
        """
        result = _extract(html)

        assert result.status == ExtractionStatus.SUCCESS
        assert result.recipe.name == "Iced Tea"
        assert result.recipe.preparation_time == 5
        assert result.recipe.ingredients_raw == ["4 tea bags", "1 l water"]
        assert result.recipe.instructions == ["Steep and chill."]

    def test_microdata_author_name_ignored(self):
        html = """
        <div itemscope itemtype="https://schema.org/Recipe">
          <span itemprop="author" itemscope itemtype="https://schema.org/Person">
            <span itemprop="name">Jane Cook</span>
          </span>
          <h1 itemprop="name">Tomato Soup</h1>
          <span itemprop="recipeIngredient">6 tomatoes</span>
          <div itemprop="recipeInstructions">Roast and blend.</div>
        </div>
        """
        result = _extract(html)

        assert result.status == ExtractionStatus.SUCCESS
        assert result.recipe.name == "Tomato Soup"

    def test_first_matching_selector_wins(self):
        html = """
        <h1>Site Name</h1>
        <div class="recipe-title">Real Recipe</div>
        <ul class="ingredients"><li>1 egg</li></ul>
        <ul class="directions"><li>Boil</li></ul>
        """
        result = _extract(html)
        assert result.recipe.name == "Real Recipe"

    def test_missing_title_fails(self):
        result = _extract("<ul class='ingredients'><li>1 egg</li></ul>")
        assert result.status == ExtractionStatus.FAILED
        assert result.warnings == ["html-scraper extraction failed: Could not find recipe title"]

    def test_missing_ingredients_fails(self):
        result = _extract("<h1>Eggs</h1><ol class='instructions'><li>Boil</li></ol>")
        assert result.status == ExtractionStatus.FAILED
        assert "Could not find recipe ingredients" in result.warnings[0]

    def test_missing_instructions_fails(self):
        result = _extract("<h1>Eggs</h1><ul class='ingredients'><li>2 eggs</li></ul>")
        assert result.status == ExtractionStatus.FAILED
        assert "Could not find recipe instructions" in result.warnings[0]
