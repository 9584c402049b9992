"""
Cuisinons - Unit Handling.

Static table of measurement units used to validate and convert ingredient
quantities. Base units are ml for volume and g for weight; count units only
convert among themselves and special units never convert.
"""

from dataclasses import dataclass
from enum import Enum

from cuisinons.tools.normalize import clean_unit


class UnitCategory(str, Enum):
    """Category a unit belongs to."""

    VOLUME = "volume"
    WEIGHT = "weight"
    COUNT = "count"
    SPECIAL = "special"


@dataclass(frozen=True)
class UnitDefinition:
    """A measurement unit and its factor to the category base unit."""

    id: str
    name: str
    abbreviation: str
    category: UnitCategory
    base_conversion_factor: float


def _unit(
    id: str, name: str, abbreviation: str, category: UnitCategory, factor: float
) -> tuple[str, UnitDefinition]:
    return id, UnitDefinition(id, name, abbreviation, category, factor)


UNIT_DEFINITIONS: dict[str, UnitDefinition] = dict(
    [
        # Volume (base: ml)
        _unit("ml", "milliliters", "ml", UnitCategory.VOLUME, 1),
        _unit("l", "liters", "l", UnitCategory.VOLUME, 1000),
        _unit("tsp", "teaspoons", "tsp", UnitCategory.VOLUME, 4.92892),
        _unit("tbsp", "tablespoons", "tbsp", UnitCategory.VOLUME, 14.7868),
        _unit("cup", "cups", "cup", UnitCategory.VOLUME, 236.588),
        _unit("pint", "pints", "pt", UnitCategory.VOLUME, 473.176),
        _unit("quart", "quarts", "qt", UnitCategory.VOLUME, 946.353),
        _unit("gallon", "gallons", "gal", UnitCategory.VOLUME, 3785.41),
        _unit("floz", "fluid ounces", "fl oz", UnitCategory.VOLUME, 29.5735),
        # Weight (base: g)
        _unit("mg", "milligrams", "mg", UnitCategory.WEIGHT, 0.001),
        _unit("g", "grams", "g", UnitCategory.WEIGHT, 1),
        _unit("kg", "kilograms", "kg", UnitCategory.WEIGHT, 1000),
        _unit("oz", "ounces", "oz", UnitCategory.WEIGHT, 28.3495),
        _unit("lb", "pounds", "lb", UnitCategory.WEIGHT, 453.592),
        # Count
        _unit("piece", "pieces", "pc", UnitCategory.COUNT, 1),
        _unit("whole", "whole", "whole", UnitCategory.COUNT, 1),
        _unit("each", "each", "each", UnitCategory.COUNT, 1),
        _unit("dozen", "dozen", "dz", UnitCategory.COUNT, 12),
        # Special (no conversion)
        _unit("pinch", "pinch", "pinch", UnitCategory.SPECIAL, 1),
        _unit("dash", "dash", "dash", UnitCategory.SPECIAL, 1),
        _unit("taste", "to taste", "to taste", UnitCategory.SPECIAL, 1),
        _unit("needed", "as needed", "as needed", UnitCategory.SPECIAL, 1),
        # No unit
        _unit("none", "none", "none", UnitCategory.COUNT, 1),
    ]
)

UNIT_OPTIONS: list[dict[str, str]] = [
    {
        "value": unit.id,
        "label": unit.name,
        "abbreviation": unit.abbreviation,
        "category": unit.category.value,
    }
    for unit in UNIT_DEFINITIONS.values()
]


def get_unit_definition(unit_id: str) -> UnitDefinition | None:
    """Look up a unit by its table id."""
    return UNIT_DEFINITIONS.get(unit_id)


def get_units_by_category(category: UnitCategory) -> list[UnitDefinition]:
    """All units of a category, in table order."""
    return [unit for unit in UNIT_DEFINITIONS.values() if unit.category == category]


def resolve_unit(raw: str | None) -> str | None:
    """
    Map a unit as written in a recipe to a table id.

    Accepts ids, abbreviations, display names and common aliases
    ("Cups", "tablespoons", "fl oz", "lbs").

    Returns:
        The unit id, or None if the unit is not in the table
    """
    if not raw:
        return None

    cleaned = clean_unit(raw)
    if cleaned in UNIT_DEFINITIONS:
        return cleaned

    for unit in UNIT_DEFINITIONS.values():
        if cleaned in (unit.abbreviation, unit.name):
            return unit.id

    return None


def can_convert_units(from_unit: str, to_unit: str) -> bool:
    """
    Check if a quantity can be converted between two units.

    Units convert only within the same category, and special units
    (pinch, dash, to taste, as needed) never convert.
    """
    source = get_unit_definition(from_unit)
    target = get_unit_definition(to_unit)

    if source is None or target is None:
        return False

    return source.category == target.category and source.category != UnitCategory.SPECIAL


def convert_quantity(quantity: float, from_unit: str, to_unit: str) -> float | None:
    """
    Convert a quantity between units through the category base unit.

    Returns:
        The converted quantity rounded to 3 decimals, or None if the
        units are not convertible
    """
    if not can_convert_units(from_unit, to_unit):
        return None

    source = UNIT_DEFINITIONS[from_unit]
    target = UNIT_DEFINITIONS[to_unit]

    base_quantity = quantity * source.base_conversion_factor
    return round(base_quantity / target.base_conversion_factor, 3)


def format_quantity(value: float, unit: str) -> str:
    """
    Format a quantity for display.

    Returns:
        Formatted string like "2 cup" or "1.5 lb"; "3" for unit "none" and
        "to taste" / "as needed" without a number
    """
    if unit in ("taste", "needed"):
        return UNIT_DEFINITIONS[unit].abbreviation

    number = str(int(value)) if value == int(value) else f"{value:.2f}".rstrip("0").rstrip(".")
    return number if unit == "none" else f"{number} {unit}"
