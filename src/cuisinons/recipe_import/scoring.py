"""Confidence scoring by weighted field completeness."""

from cuisinons.recipe_import.models import PartialRecipe

# Confidence a result needs before the cascade stops at it
CONFIDENCE_THRESHOLD = 60

ESSENTIAL_FIELDS = {"name": 30, "instructions": 25}
IMPORTANT_FIELDS = {
    "description": 10,
    "cooking_time": 8,
    "preparation_time": 8,
    "servings": 7,
    "image": 5,
}
OPTIONAL_FIELDS = {"recipe_category": 2, "recipe_cuisine": 2, "calories": 3}

FIELD_WEIGHTS: dict[str, int] = {**ESSENTIAL_FIELDS, **IMPORTANT_FIELDS, **OPTIONAL_FIELDS}
MAX_WEIGHT = sum(FIELD_WEIGHTS.values())


def is_present(value: object) -> bool:
    """Defined, non-empty string, non-empty list."""
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple, dict)):
        return len(value) > 0
    return True


def calculate_confidence(recipe: PartialRecipe) -> int:
    """
    Score a recipe 0-100 by which weighted fields it has.

    A recipe with only a name and instructions scores 55.
    """
    earned = sum(
        weight for field_name, weight in FIELD_WEIGHTS.items()
        if is_present(getattr(recipe, field_name))
    )
    return round(100 * earned / MAX_WEIGHT)


def find_missing_fields(recipe: PartialRecipe) -> list[str]:
    """Important and optional fields the recipe lacks, heaviest first."""
    candidates = {**IMPORTANT_FIELDS, **OPTIONAL_FIELDS}
    missing = [name for name in candidates if not is_present(getattr(recipe, name))]
    return sorted(missing, key=lambda name: -candidates[name])
