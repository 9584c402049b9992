"""Normalization utilities for recipe data.

Every extractor converts through these functions so results stay comparable
across tiers. None of them raise on bad input; they return None (or an empty
list) instead.
"""

import re
from typing import Any

_ISO_DURATION = re.compile(r"^P(?:(\d+)D)?T(?:(\d+)H)?(?:(\d+)M)?")

_TIME_PREFIX = re.compile(r"^(?:prep|cook|total)(?:\s*time)?[\s:]+", re.IGNORECASE)

# Order matters: the first matching pattern wins
_TIME_PATTERNS: list[tuple[re.Pattern[str], bool]] = [
    (re.compile(r"(\d+)\s*hours?\s*(\d+)?\s*min", re.IGNORECASE), True),
    (re.compile(r"(\d+)\s*hrs?\s*(\d+)?\s*min", re.IGNORECASE), True),
    (re.compile(r"(\d+)\s*h\s*(\d+)?\s*m", re.IGNORECASE), True),
    (re.compile(r"(\d+)\s*min", re.IGNORECASE), False),
    (re.compile(r"(\d+)\s*hours?", re.IGNORECASE), True),
    (re.compile(r"(\d+)\s*hrs?", re.IGNORECASE), True),
    (re.compile(r"(\d+)\s*h$", re.IGNORECASE), True),
    (re.compile(r"^(\d+)$"), False),
]


def iso8601_to_minutes(duration: str | int | float | None) -> int | None:
    """
    Parse ISO 8601 duration to minutes.

    Examples:
        PT30M -> 30
        PT1H -> 60
        PT1H30M -> 90
        "45 minutes" -> 45 (bare-digit fallback)
    """
    if duration is None or isinstance(duration, bool):
        return None

    # Already a minute count (JSON numbers may arrive as 30.0)
    if isinstance(duration, (int, float)):
        return round(duration) if duration >= 0 else None

    text = str(duration).strip()
    if not text:
        return None

    match = _ISO_DURATION.match(text.upper())
    if match:
        days = int(match.group(1) or 0)
        hours = int(match.group(2) or 0)
        minutes = int(match.group(3) or 0)
        return days * 1440 + hours * 60 + minutes

    # Not ISO 8601 - treat the digits as minutes
    digits = re.sub(r"\D", "", text)
    return int(digits) if digits else None


def minutes_to_iso8601(minutes: int) -> str:
    """
    Format minutes as an ISO 8601 duration.

    Examples:
        45 -> PT45M
        60 -> PT1H
        90 -> PT1H30M
    """
    if minutes < 60:
        return f"PT{minutes}M"

    hours, remainder = divmod(minutes, 60)
    if remainder == 0:
        return f"PT{hours}H"
    return f"PT{hours}H{remainder}M"


def parse_time_text(text: str | None) -> int | None:
    """
    Parse a free-text duration ("Prep: 1 hour 15 mins", "20 min") to minutes.

    Hours-bearing patterns return hours*60 + minutes; the others return
    the number as minutes. Unrecognised text gives None.
    """
    if not text:
        return None

    cleaned = _TIME_PREFIX.sub("", " ".join(text.split()))

    for pattern, has_hours in _TIME_PATTERNS:
        match = pattern.search(cleaned)
        if not match:
            continue
        if has_hours:
            hours = int(match.group(1))
            extra = match.group(2) if pattern.groups > 1 else None
            return hours * 60 + int(extra or 0)
        return int(match.group(1))

    return None


def parse_servings(yield_value: str | int | float | list | None) -> int | None:
    """
    Parse recipe yield/servings to integer.

    All non-digit characters are dropped before parsing, so ranges collapse:

    Examples:
        "4 servings" -> 4
        "Serves 6" -> 6
        "4-6 servings" -> 46
    """
    if yield_value is None or isinstance(yield_value, bool):
        return None

    # schema.org allows a list of yields ("4", "4 servings") - take the first
    if isinstance(yield_value, list):
        return parse_servings(yield_value[0]) if yield_value else None

    if isinstance(yield_value, (int, float)):
        servings = int(yield_value)
        return servings if servings > 0 else None

    digits = re.sub(r"\D", "", str(yield_value))
    if not digits:
        return None

    servings = int(digits)
    return servings if servings > 0 else None


def parse_nutrition_value(value: str | int | float | None) -> float | None:
    """
    Parse a nutrition value such as "12.5g" or "240 kcal" to a number.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        return float(value)

    cleaned = re.sub(r"[^\d.]", "", str(value))
    try:
        return float(cleaned)
    except ValueError:
        return None


def parse_nutrition_grams(value: str | int | float | None) -> float | None:
    """
    Parse a nutrient mass to grams.

    Bare numbers are taken as grams; "560 mg" -> 0.56.
    """
    amount = parse_nutrition_value(value)
    if amount is None:
        return None
    if isinstance(value, str) and re.search(r"\d\s*mg\b", value, re.IGNORECASE):
        return round(amount / 1000, 3)
    return amount


def extract_instructions_text(instructions: list | dict | str | None) -> list[str]:
    """
    Extract instruction text from various formats.

    Handles:
        - Plain strings (split by newlines/numbers)
        - List of strings
        - List of HowToStep dicts with 'text' field
        - HowToSection dicts grouping steps under 'itemListElement'
    """
    if not instructions:
        return []

    if isinstance(instructions, dict):
        instructions = [instructions]

    if isinstance(instructions, list):
        result = []
        for item in instructions:
            if isinstance(item, str):
                text = item.strip()
                if text:
                    result.append(text)
            elif isinstance(item, dict):
                if "itemListElement" in item:
                    result.extend(extract_instructions_text(item["itemListElement"]))
                    continue
                # HowToStep format
                text = item.get("text") or item.get("@text") or item.get("name") or ""
                if isinstance(text, str) and text.strip():
                    result.append(text.strip())
        return result

    if isinstance(instructions, str):
        # Try splitting by numbered patterns like "1." or "1)"
        steps = re.split(r"(?:^|\n)\s*\d+[\.\)]\s*", instructions)
        if len([s for s in steps if s.strip()]) > 1:
            return [s.strip() for s in steps if s.strip()]

        # Fall back to splitting by newlines
        steps = instructions.split("\n")
        if len(steps) > 1:
            return [s.strip() for s in steps if s.strip()]

        return [instructions.strip()] if instructions.strip() else []

    return []


def normalize_ingredients(ingredients: list | str | None) -> list[str]:
    """
    Normalize ingredients to list of strings.

    Handles:
        - List of strings
        - List of dicts with 'name' or 'text' field
    """
    if not ingredients:
        return []

    if isinstance(ingredients, str):
        ingredients = [ingredients]

    result = []
    for item in ingredients:
        if isinstance(item, str):
            text = " ".join(item.split())
            if text:
                result.append(text)
        elif isinstance(item, dict):
            text = item.get("text") or item.get("name") or ""
            if isinstance(text, str) and text.strip():
                result.append(" ".join(text.split()))

    return result


def extract_image_url(image: str | dict | list | None) -> str | None:
    """
    Extract image URL from various formats.

    Handles:
        - Plain URL string
        - Dict with 'url' field (ImageObject)
        - List of images (take first)
    """
    if not image:
        return None

    if isinstance(image, str):
        image = image.strip()
        return image if image.startswith(("http://", "https://", "//")) else None

    if isinstance(image, dict):
        url = image.get("url") or image.get("@url") or image.get("contentUrl")
        return extract_image_url(url) if isinstance(url, str) else None

    if isinstance(image, list):
        for candidate in image:
            url = extract_image_url(candidate)
            if url:
                return url

    return None


def coerce_string_list(value: Any) -> list[str]:
    """
    Flatten a list-like schema.org field (keywords, diets, tools) to strings.

    "quick, easy" -> ["quick", "easy"]
    [{"name": "whisk"}, "pan"] -> ["whisk", "pan"]
    """
    if not value:
        return []

    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]

    if isinstance(value, dict):
        value = [value]

    result = []
    if isinstance(value, list):
        for item in value:
            if isinstance(item, dict):
                item = item.get("name") or item.get("text") or ""
            if isinstance(item, str) and item.strip():
                result.append(item.strip())
    return result


def first_string(value: Any) -> str | None:
    """First non-empty string of a scalar-or-list field (recipeCategory, recipeCuisine)."""
    if isinstance(value, list):
        for item in value:
            text = first_string(item)
            if text:
                return text
        return None
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None
