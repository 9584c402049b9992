"""
Cuisinons - Extraction tiers.

Ordered by priority: cheap, specific signals first; the paid, generic LLM
tier last.
"""

from cuisinons.recipe_import.extractors.base import RecipeExtractor
from cuisinons.recipe_import.extractors.html import HtmlScraperExtractor
from cuisinons.recipe_import.extractors.json_ld import SchemaOrgExtractor
from cuisinons.recipe_import.extractors.llm import LlmExtractor

# Shared, stateless instances
DEFAULT_EXTRACTORS: tuple[RecipeExtractor, ...] = (
    SchemaOrgExtractor(),
    HtmlScraperExtractor(),
    LlmExtractor(),
)

__all__ = [
    "DEFAULT_EXTRACTORS",
    "HtmlScraperExtractor",
    "LlmExtractor",
    "RecipeExtractor",
    "SchemaOrgExtractor",
]
