"""
Pytest configuration and fixtures for Cuisinons tests.
"""

import json
import os

import pytest

# Set test environment before importing cuisinons modules
os.environ["CUISINONS_ENV"] = "development"
os.environ["CUISINONS_LOG_PROMPTS"] = "0"

from cuisinons.db.recipes import InMemoryRecipeStore  # noqa: E402
from cuisinons.recipe_import.service import ImportContext  # noqa: E402
from cuisinons.tools.ingredient_lookup import InMemoryIngredientLookup  # noqa: E402


class FakeGenerator:
    """TextGenerator returning canned replies and recording every call."""

    def __init__(self, reply: str = "", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.calls: list[dict] = []

    async def generate(self, system_prompt, user_message, *, max_tokens, temperature, timeout=None):
        self.calls.append(
            {
                "system_prompt": system_prompt,
                "user_message": user_message,
                "max_tokens": max_tokens,
                "temperature": temperature,
                "timeout": timeout,
            }
        )
        if self.error:
            raise self.error
        return self.reply


PANCAKES_RECIPE = {
    "@context": "https://schema.org",
    "@type": "Recipe",
    "name": "Pancakes",
    "description": "Fluffy buttermilk pancakes",
    "image": ["https://example.com/pancakes.jpg"],
    "prepTime": "PT10M",
    "cookTime": "PT15M",
    "totalTime": "PT25M",
    "recipeYield": "4 servings",
    "recipeCategory": "Breakfast",
    "recipeCuisine": "American",
    "keywords": "breakfast, quick",
    "recipeIngredient": [
        "2 cups flour",
        "1 1/2 cups buttermilk",
        "2 eggs",
        "1 tbsp sugar",
        "salt to taste",
    ],
    "recipeInstructions": [
        {"@type": "HowToStep", "text": "Mix dry ingredients"},
        {"@type": "HowToStep", "text": "Whisk in buttermilk and eggs"},
        {"@type": "HowToStep", "text": "Cook on a hot griddle"},
    ],
    "nutrition": {
        "@type": "NutritionInformation",
        "calories": "320 calories",
        "fatContent": "9.5 g",
        "proteinContent": "11g",
    },
}


def json_ld_page(*blocks: str | dict | list, body: str = "") -> str:
    """Build an HTML page with one script tag per JSON-LD block."""
    scripts = "\n".join(
        '<script type="application/ld+json">'
        + (block if isinstance(block, str) else json.dumps(block))
        + "</script>"
        for block in blocks
    )
    return f"<html><head>{scripts}</head><body>{body}</body></html>"


HTML_ONLY_PAGE = """
<html>
  <head><title>Grandma's Chili</title></head>
  <body>
    <nav><a href="/">Home</a></nav>
    <article class="recipe">
      <h1 class="recipe-title">Grandma's Chili</h1>
      <p class="recipe-description">A hearty weeknight chili.</p>
      <span class="prep-time">Prep: 15 mins</span>
      <span class="cook-time">1 hour 30 mins</span>
      <span class="recipe-yield">Serves 6</span>
      <div class="recipe-image"><img src="/images/chili.jpg"></div>
      <ul class="ingredients">
        <li>1 lb ground beef</li>
        <li>1 onion, chopped</li>
        <li>2 cans kidney beans</li>
      </ul>
      <ol class="instructions">
        <li>Brown the beef with the onion.</li>
        <li>Add the beans and simmer.</li>
      </ol>
    </article>
  </body>
</html>
"""


@pytest.fixture
def pancakes_html():
    """Recipe page with a complete schema.org Recipe in JSON-LD."""
    return json_ld_page(PANCAKES_RECIPE)


@pytest.fixture
def html_only_page():
    """Recipe page with recipe-plugin markup but no structured data."""
    return HTML_ONLY_PAGE


@pytest.fixture
def llm_reply():
    """A well-formed LLM reply wrapped in a fenced code block."""
    data = {
        "title": "Lemon Rice",
        "description": "Bright, quick side dish",
        "prepTime": 5,
        "cookTime": 20,
        "servings": 2,
        "ingredients": ["1 cup rice", "1 lemon", "2 cups water"],
        "instructions": ["Rinse the rice", "Simmer with water", "Stir in lemon juice"],
    }
    return f"Here is the recipe:\n```json\n{json.dumps(data, indent=2)}\n```"


@pytest.fixture
def fake_generator():
    """Factory for FakeGenerator instances."""
    return FakeGenerator


@pytest.fixture
def import_context():
    """Import context backed by in-memory persistence."""
    return ImportContext(
        user_id="user-1",
        store=InMemoryRecipeStore(),
        ingredient_lookup=InMemoryIngredientLookup(),
    )
