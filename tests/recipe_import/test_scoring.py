"""Tests for confidence scoring."""

from cuisinons.recipe_import.models import PartialRecipe
from cuisinons.recipe_import.scoring import (
    CONFIDENCE_THRESHOLD,
    FIELD_WEIGHTS,
    MAX_WEIGHT,
    calculate_confidence,
    find_missing_fields,
    is_present,
)


class TestConfidence:
    """Tests for weighted field completeness."""

    def test_weights_total_100(self):
        assert MAX_WEIGHT == 100
        assert FIELD_WEIGHTS["name"] == 30
        assert FIELD_WEIGHTS["instructions"] == 25

    def test_name_and_instructions_only_is_below_threshold(self):
        recipe = PartialRecipe(name="Toast", instructions=["Toast the bread"])
        assert calculate_confidence(recipe) == 55
        assert calculate_confidence(recipe) < CONFIDENCE_THRESHOLD

    def test_complete_recipe_scores_100(self):
        recipe = PartialRecipe(
            name="Soup",
            instructions=["Simmer"],
            description="Warm soup",
            cooking_time=30,
            preparation_time=10,
            servings=4,
            image="https://example.com/soup.jpg",
            recipe_category="Main",
            recipe_cuisine="French",
            calories=200,
        )
        assert calculate_confidence(recipe) == 100

    def test_empty_values_do_not_count(self):
        recipe = PartialRecipe(name="  ", instructions=[], description="")
        assert calculate_confidence(recipe) == 0

    def test_zero_minutes_counts_as_present(self):
        recipe = PartialRecipe(name="Salad", instructions=["Toss"], cooking_time=0)
        assert calculate_confidence(recipe) == 63


class TestMissingFields:
    def test_heaviest_first(self):
        recipe = PartialRecipe(name="Toast", instructions=["Toast"], servings=2)
        missing = find_missing_fields(recipe)
        assert missing[0] == "description"
        assert "servings" not in missing
        assert "name" not in missing
        assert missing[-1] in ("recipe_category", "recipe_cuisine")


class TestIsPresent:
    def test_values(self):
        assert is_present("x")
        assert is_present(0)
        assert is_present(["a"])
        assert not is_present(None)
        assert not is_present("")
        assert not is_present([])
