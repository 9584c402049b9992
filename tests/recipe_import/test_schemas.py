"""Tests for the recipe row schema."""

import pytest
from pydantic import ValidationError

from cuisinons.recipe_import.models import PartialRecipe, RecipeIngredient
from cuisinons.recipe_import.schemas import (
    MAX_INSTRUCTIONS,
    RecipeCreate,
    RecipeIngredientCreate,
    describe_validation_error,
)


def _recipe(**overrides):
    fields = {"name": "Soup", "instructions": ["Simmer"], "is_private": False}
    fields.update(overrides)
    return PartialRecipe(**fields)


class TestFromRecipe:
    """Tests for building rows from extracted recipes."""

    def test_private_forced(self):
        row, warnings = RecipeCreate.from_recipe(_recipe(), "user-1")
        assert row.is_private is True
        assert row.user_id == "user-1"
        assert warnings == []

    def test_trims_to_column_limits(self):
        row, _ = RecipeCreate.from_recipe(
            _recipe(
                description="x" * 1500,
                keywords=[f"k{i}" for i in range(40)],
                recipe_equipment=[f"tool {i}" for i in range(40)],
            ),
            "user-1",
        )
        assert len(row.description) == 1000
        assert len(row.keywords) == 20
        assert len(row.recipe_equipment) == 30

    def test_blank_steps_dropped(self):
        row, _ = RecipeCreate.from_recipe(_recipe(instructions=["Simmer", "  ", "Serve "]), "user-1")
        assert row.instructions == ["Simmer", "Serve"]

    def test_long_instructions_capped(self):
        steps = [f"Step {i}" for i in range(1, 61)]

        row, warnings = RecipeCreate.from_recipe(_recipe(instructions=steps), "user-1")

        assert len(row.instructions) == MAX_INSTRUCTIONS == 50
        assert row.instructions[-1] == "Step 50"
        assert warnings == ["Only the first 50 of 60 instructions were kept"]

    def test_ingredients_carried(self):
        recipe = _recipe(
            recipe_ingredients=[RecipeIngredient(ingredient_id="ing-1", name="leek", quantity=2, unit="none")]
        )
        row, _ = RecipeCreate.from_recipe(recipe, "user-1")
        assert row.ingredients == [RecipeIngredientCreate(ingredient_id="ing-1", quantity=2, unit="none")]
        assert "ingredients" not in row.to_row()


class TestOutOfRangeValues:
    """Optional numbers outside the column bounds are dropped, not fatal."""

    @pytest.mark.parametrize(
        "overrides, field_name, warning",
        [
            ({"servings": 1216}, "servings", "Dropped out-of-range servings: 1216"),
            ({"servings": 0}, "servings", "Dropped out-of-range servings: 0"),
            ({"cooking_time": 1441}, "cooking_time", "Dropped out-of-range cooking time: 1441"),
            ({"total_time": 3000}, "total_time", "Dropped out-of-range total time: 3000"),
            ({"calories": 20000}, "calories", "Dropped out-of-range calories: 20000"),
            ({"sodium": 560.0}, "sodium", "Dropped out-of-range sodium: 560"),
            ({"estimated_cost": 5000.0}, "estimated_cost", "Dropped out-of-range estimated cost: 5000"),
        ],
    )
    def test_dropped_with_warning(self, overrides, field_name, warning):
        row, warnings = RecipeCreate.from_recipe(_recipe(**overrides), "user-1")
        assert getattr(row, field_name) is None
        assert warnings == [warning]

    def test_in_range_values_kept(self):
        row, warnings = RecipeCreate.from_recipe(
            _recipe(servings=100, cooking_time=0, sodium=0.56, calories=320), "user-1"
        )
        assert (row.servings, row.cooking_time, row.sodium, row.calories) == (100, 0, 0.56, 320)
        assert warnings == []


class TestRejected:
    @pytest.mark.parametrize("overrides", [{"name": "   "}, {"name": "x" * 256}, {"instructions": []}])
    def test_rejected(self, overrides):
        with pytest.raises(ValidationError):
            RecipeCreate.from_recipe(_recipe(**overrides), "user-1")

    def test_error_summary_is_one_line(self):
        with pytest.raises(ValidationError) as exc_info:
            RecipeCreate.from_recipe(_recipe(name="x" * 256), "user-1")

        summary = describe_validation_error(exc_info.value)

        assert summary.startswith("name: ")
        assert "255" in summary
        assert "\n" not in summary

    def test_quantity_range(self):
        with pytest.raises(ValidationError):
            RecipeIngredientCreate(ingredient_id="ing-1", quantity=0)
        with pytest.raises(ValidationError):
            RecipeIngredientCreate(ingredient_id="ing-1", quantity=1001)
