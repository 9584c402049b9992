"""
Cuisinons - Name Normalization.

Utilities for normalizing ingredient text for consistent matching.
"""

import re


def normalize_name(name: str) -> str:
    """
    Normalize a name for consistent matching.

    Operations:
    - Lowercase
    - Strip leading/trailing whitespace
    - Collapse multiple spaces to single space

    Examples:
        normalize_name("  Chicken Thighs  ") -> "chicken thighs"
        normalize_name("green   pepper") -> "green pepper"
    """
    return " ".join(name.lower().strip().split())


# Common unit spellings mapped to unit table ids
UNIT_ALIASES = {
    "pounds": "lb",
    "pound": "lb",
    "lbs": "lb",
    "ounces": "oz",
    "ounce": "oz",
    "grams": "g",
    "gram": "g",
    "gr": "g",
    "kilograms": "kg",
    "kilogram": "kg",
    "milligrams": "mg",
    "milligram": "mg",
    "liters": "l",
    "liter": "l",
    "litres": "l",
    "litre": "l",
    "milliliters": "ml",
    "milliliter": "ml",
    "millilitres": "ml",
    "millilitre": "ml",
    "cups": "cup",
    "c": "cup",
    "tablespoons": "tbsp",
    "tablespoon": "tbsp",
    "tbs": "tbsp",
    "tbsps": "tbsp",
    "teaspoons": "tsp",
    "teaspoon": "tsp",
    "tsps": "tsp",
    "pints": "pint",
    "pt": "pint",
    "quarts": "quart",
    "qt": "quart",
    "gallons": "gallon",
    "gal": "gallon",
    "fl oz": "floz",
    "fl. oz": "floz",
    "fluid ounce": "floz",
    "fluid ounces": "floz",
    "pieces": "piece",
    "pc": "piece",
    "pcs": "piece",
    "dozens": "dozen",
    "pinches": "pinch",
    "dashes": "dash",
}

# Single-word tokens recognised as units when splitting an ingredient line
_UNIT_WORDS = set(UNIT_ALIASES) | {
    "lb",
    "oz",
    "g",
    "kg",
    "mg",
    "ml",
    "l",
    "cup",
    "tbsp",
    "tsp",
    "pint",
    "quart",
    "gallon",
    "piece",
    "whole",
    "each",
    "dozen",
    "pinch",
    "dash",
}

_UNICODE_FRACTIONS = {
    "½": 0.5,
    "⅓": 0.333,
    "⅔": 0.667,
    "¼": 0.25,
    "¾": 0.75,
    "⅛": 0.125,
    "⅜": 0.375,
    "⅝": 0.625,
    "⅞": 0.875,
}

_QUANTITY_PATTERN = re.compile(
    r"^(?P<qty>\d+\s+\d+/\d+|\d+/\d+|\d+(?:[.,]\d+)?\s*[½⅓⅔¼¾⅛⅜⅝⅞]?|[½⅓⅔¼¾⅛⅜⅝⅞])\s*"
)


def clean_unit(unit: str) -> str:
    """
    Clean and normalize a unit string.

    Args:
        unit: Raw unit input (e.g., "LBS", "Pounds", "fl oz")

    Returns:
        Normalized unit (lowercase, singular form where applicable)
    """
    unit = " ".join(unit.lower().strip().rstrip(".").split())
    return UNIT_ALIASES.get(unit, unit)


def parse_quantity(text: str) -> float | None:
    """
    Parse a quantity token.

    Handles integers, decimals ("2.5", "2,5"), fractions ("1/2"), mixed
    numbers ("1 1/2") and unicode fractions ("½", "2½").
    """
    text = text.strip()
    if not text:
        return None

    try:
        for char, value in _UNICODE_FRACTIONS.items():
            if char in text:
                whole = text.replace(char, "").strip()
                return (float(whole) if whole else 0.0) + value

        if "/" in text:
            total = 0.0
            for part in text.split():
                if "/" in part:
                    numerator, denominator = part.split("/", 1)
                    total += float(numerator) / float(denominator)
                else:
                    total += float(part)
            return total

        return float(text.replace(",", "."))
    except (ValueError, ZeroDivisionError):
        return None


def extract_quantity_unit(text: str) -> tuple[float | None, str | None, str]:
    """
    Extract quantity and unit from an ingredient line.

    Args:
        text: Text like "3 lbs of chicken" or "2 cups flour"

    Returns:
        Tuple of (quantity, unit, remaining_text)
        Returns (None, None, text) if no quantity found

    Examples:
        "3 lbs chicken" -> (3.0, "lb", "chicken")
        "1/2 cup flour" -> (0.5, "cup", "flour")
        "250g butter" -> (250.0, "g", "butter")
        "chicken" -> (None, None, "chicken")
    """
    text = text.strip()

    match = _QUANTITY_PATTERN.match(text)
    if not match:
        return (None, None, text)

    quantity = parse_quantity(match.group("qty"))
    remaining = text[match.end() :].strip()

    # Two-word units first ("fl oz"), then single words
    two_words = " ".join(remaining.split()[:2]).lower().rstrip(".")
    if two_words in UNIT_ALIASES:
        rest = " ".join(remaining.split()[2:])
        return (quantity, clean_unit(two_words), _strip_of(rest))

    unit_match = re.match(r"^([A-Za-z]+)\.?\s*(.*)$", remaining)
    if unit_match and unit_match.group(1).lower() in _UNIT_WORDS:
        return (quantity, clean_unit(unit_match.group(1)), _strip_of(unit_match.group(2)))

    return (quantity, None, remaining)


def _strip_of(text: str) -> str:
    return re.sub(r"^of\s+", "", text.strip(), flags=re.IGNORECASE)
