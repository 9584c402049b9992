"""JSON-LD/Schema.org extraction.

Pages that publish schema.org Recipe markup get the most reliable import.
The script blocks are pulled out with a regex rather than a DOM parse;
JSON-LD is self-contained, so nothing else on the page matters.
"""

import html
import json
import logging
import re
from typing import Any

from cuisinons.recipe_import.extractors.base import RecipeExtractor
from cuisinons.recipe_import.models import (
    ExtractionMethod,
    ExtractionStatus,
    ExtractorInput,
    ExtractorResult,
    PartialRecipe,
)
from cuisinons.recipe_import.normalizer import (
    coerce_string_list,
    extract_image_url,
    extract_instructions_text,
    first_string,
    iso8601_to_minutes,
    normalize_ingredients,
    parse_nutrition_grams,
    parse_nutrition_value,
    parse_servings,
)
from cuisinons.recipe_import.scoring import calculate_confidence, find_missing_fields

logger = logging.getLogger(__name__)

_JSON_LD_BLOCK = re.compile(
    r"<script[^>]*type=[\"']application/ld\+json[\"'][^>]*>(.*?)</script>",
    re.IGNORECASE | re.DOTALL,
)

# schema.org NutritionInformation property -> PartialRecipe field (grams)
_NUTRITION_FIELDS = {
    "fatContent": "fat",
    "proteinContent": "protein",
    "carbohydrateContent": "carbohydrates",
    "fiberContent": "fiber",
    "sugarContent": "sugar",
    "sodiumContent": "sodium",
}


class SchemaOrgExtractor(RecipeExtractor):
    """Tier 1: schema.org Recipe objects in JSON-LD script blocks."""

    name = "schema-org"
    priority = 1
    method = ExtractionMethod.SCHEMA_ORG

    def can_handle(self, input: ExtractorInput) -> bool:
        return bool(input.html) and "application/ld+json" in input.html.lower()

    async def _extract(self, input: ExtractorInput) -> ExtractorResult:
        blocks = _JSON_LD_BLOCK.findall(input.html or "")
        if not blocks:
            return ExtractorResult.failed("No JSON-LD data found", method=self.method)

        for block in blocks:
            try:
                data = json.loads(block.strip())
            except json.JSONDecodeError as e:
                logger.debug(f"Skipping unparseable JSON-LD block on {input.url}: {e}")
                continue

            recipe_data = find_recipe_in_json_ld(data)
            if recipe_data is None:
                continue

            recipe = schema_org_to_recipe(recipe_data, input.url)
            missing = find_missing_fields(recipe)
            return ExtractorResult(
                status=ExtractionStatus.SUCCESS,
                recipe=recipe,
                confidence=calculate_confidence(recipe),
                missing_fields=missing,
                warnings=[f"Missing optional fields: {', '.join(missing)}"] if missing else [],
                extraction_method=self.method,
            )

        return ExtractorResult.failed("No recipe found in JSON-LD data", method=self.method)


def _is_recipe_type(value: Any) -> bool:
    if isinstance(value, list):
        return "Recipe" in value
    return value == "Recipe"


def find_recipe_in_json_ld(data: Any) -> dict | None:
    """
    Depth-first search for a schema.org Recipe object.

    Handles a single object, arrays, `@graph` containers and recipes nested
    under arbitrary keys (e.g. `mainEntity`).
    """
    if isinstance(data, dict):
        if _is_recipe_type(data.get("@type")):
            return data

        if "@graph" in data:
            found = find_recipe_in_json_ld(data["@graph"])
            if found is not None:
                return found

        for value in data.values():
            if isinstance(value, (dict, list)):
                found = find_recipe_in_json_ld(value)
                if found is not None:
                    return found

    elif isinstance(data, list):
        for item in data:
            found = find_recipe_in_json_ld(item)
            if found is not None:
                return found

    return None


def _text(value: Any) -> str | None:
    text = first_string(value)
    return html.unescape(text) if text else None


def schema_org_to_recipe(data: dict, source_url: str | None = None) -> PartialRecipe:
    """Convert a schema.org Recipe object to a PartialRecipe."""
    recipe = PartialRecipe(
        name=_text(data.get("name")),
        description=_text(data.get("description")),
        image=extract_image_url(data.get("image")),
        preparation_time=iso8601_to_minutes(data.get("prepTime")),
        cooking_time=iso8601_to_minutes(data.get("cookTime")),
        total_time=iso8601_to_minutes(data.get("totalTime")),
        servings=parse_servings(data.get("recipeYield")),
        recipe_category=_text(data.get("recipeCategory")),
        recipe_cuisine=_text(data.get("recipeCuisine")),
        keywords=coerce_string_list(data.get("keywords")),
        suitable_for_diet=[_diet_name(diet) for diet in coerce_string_list(data.get("suitableForDiet"))],
        recipe_equipment=coerce_string_list(data.get("tool")),
        instructions=[html.unescape(step) for step in extract_instructions_text(data.get("recipeInstructions"))],
        ingredients_raw=[html.unescape(line) for line in normalize_ingredients(data.get("recipeIngredient"))],
        estimated_cost=_monetary_value(data.get("estimatedCost")),
        is_private=True,
        source_url=source_url,
    )

    nutrition = data.get("nutrition")
    if isinstance(nutrition, dict):
        calories = parse_nutrition_value(nutrition.get("calories"))
        recipe.calories = round(calories) if calories is not None else None
        for schema_key, field_name in _NUTRITION_FIELDS.items():
            setattr(recipe, field_name, parse_nutrition_grams(nutrition.get(schema_key)))

    return recipe


def _diet_name(diet: str) -> str:
    # "https://schema.org/GlutenFreeDiet" -> "GlutenFreeDiet"
    return diet.rstrip("/").rsplit("/", 1)[-1]


def _monetary_value(cost: Any) -> float | None:
    if isinstance(cost, dict):
        cost = cost.get("value")
    if cost is None or isinstance(cost, (dict, list)):
        return None
    return parse_nutrition_value(cost)
