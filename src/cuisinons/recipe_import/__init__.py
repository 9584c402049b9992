"""
Cuisinons - Recipe Import.

Three-tier extraction cascade (schema.org JSON-LD, HTML heuristics, LLM)
behind two entry points: import_recipe_from_url and import_recipe_from_text.
"""

from cuisinons.recipe_import.models import (
    ExtractionMethod,
    ExtractorInput,
    ExtractorOptions,
    ExtractorResult,
    ImportResult,
    ImportStatus,
    PartialRecipe,
    RecipeIngredient,
)
from cuisinons.recipe_import.orchestrator import ExtractionOrchestrator
from cuisinons.recipe_import.service import (
    ImportContext,
    import_recipe_from_text,
    import_recipe_from_url,
)

__all__ = [
    "ExtractionMethod",
    "ExtractionOrchestrator",
    "ExtractorInput",
    "ExtractorOptions",
    "ExtractorResult",
    "ImportContext",
    "ImportResult",
    "ImportStatus",
    "PartialRecipe",
    "RecipeIngredient",
    "import_recipe_from_text",
    "import_recipe_from_url",
]
