"""Turn raw ingredient lines into resolved recipe-ingredient associations."""

import logging
import re

from cuisinons.recipe_import.models import RecipeIngredient
from cuisinons.tools.ingredient_lookup import IngredientLookup
from cuisinons.tools.normalize import extract_quantity_unit
from cuisinons.tools.units import convert_quantity, resolve_unit

logger = logging.getLogger(__name__)

MAX_QUANTITY = 1000

# Phrases that stand in for a measured quantity
_SPECIAL_PHRASES = {
    "to taste": "taste",
    "as needed": "needed",
}

# Larger unit to fall back to when a quantity is out of range
_LARGER_UNIT = {"mg": "g", "g": "kg", "ml": "l"}


def parse_ingredient_line(line: str) -> tuple[float, str, str]:
    """
    Split an ingredient line into (quantity, unit id, ingredient name).

    Missing quantities default to 1 and unknown units to "none".

    Examples:
        "2 cups flour" -> (2.0, "cup", "flour")
        "1 1/2 tbsp olive oil, divided" -> (1.5, "tbsp", "olive oil")
        "salt to taste" -> (1.0, "taste", "salt")
    """
    text = " ".join(line.split())

    special_unit = None
    for phrase, unit_id in _SPECIAL_PHRASES.items():
        if phrase in text.lower():
            special_unit = unit_id
            text = re.sub(rf",?\s*{phrase}", "", text, flags=re.IGNORECASE).strip()

    quantity, unit, rest = extract_quantity_unit(text)

    unit_id = special_unit or resolve_unit(unit) or "none"
    if quantity is None or quantity <= 0:
        quantity = 1.0

    if quantity > MAX_QUANTITY and unit_id in _LARGER_UNIT:
        converted = convert_quantity(quantity, unit_id, _LARGER_UNIT[unit_id])
        if converted is not None:
            quantity, unit_id = converted, _LARGER_UNIT[unit_id]

    return quantity, unit_id, _clean_ingredient_name(rest)


def _clean_ingredient_name(text: str) -> str:
    # "butter (softened)" -> "butter"; "onion, finely chopped" -> "onion"
    name = re.sub(r"\([^)]*\)", "", text)
    name = name.split(",", 1)[0]
    return " ".join(name.split()).strip(" -.;:")


async def build_recipe_ingredients(
    lines: list[str], lookup: IngredientLookup
) -> tuple[list[RecipeIngredient], list[str]]:
    """
    Resolve raw ingredient lines against the ingredient table.

    Lines are resolved one at a time so a newly created ingredient is
    reused by later lines naming it again.

    Returns:
        Tuple of (resolved ingredients, warnings for lines that were dropped)
    """
    resolved: list[RecipeIngredient] = []
    warnings: list[str] = []
    seen: set[str] = set()

    for line in lines:
        quantity, unit, name = parse_ingredient_line(line)
        if not name:
            warnings.append(f"Could not read ingredient: {line}")
            continue

        if quantity > MAX_QUANTITY:
            warnings.append(f"Quantity out of range for ingredient: {line}")
            continue

        match = await lookup.resolve(name)
        if match is None:
            warnings.append(f"Could not match ingredient: {line}")
            continue

        if match.id in seen:
            logger.debug(f"Skipping duplicate ingredient '{match.name}'")
            continue
        seen.add(match.id)

        resolved.append(
            RecipeIngredient(
                ingredient_id=match.id,
                name=match.name,
                quantity=quantity,
                unit=unit,
                raw_text=line,
            )
        )

    return resolved, warnings
