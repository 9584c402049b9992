"""
Cuisinons - Recipe persistence schemas.

Imported recipes are checked against the column bounds before anything is
written. Optional numbers that fall outside them are dropped with a warning;
only a missing or oversized name, or no instructions at all, rejects the row.
"""

from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from cuisinons.recipe_import.models import PartialRecipe, RecipeIngredient

MAX_INSTRUCTIONS = 50

# Dropped individually when out of bounds
OPTIONAL_NUMERIC_FIELDS = (
    "preparation_time",
    "cooking_time",
    "total_time",
    "servings",
    "calories",
    "fat",
    "protein",
    "carbohydrates",
    "fiber",
    "sugar",
    "sodium",
    "estimated_cost",
)


class RecipeIngredientCreate(BaseModel):
    """A recipe-ingredient row."""

    ingredient_id: str = Field(min_length=1)
    quantity: float = Field(gt=0, le=1000)
    unit: str | None = None

    @classmethod
    def from_ingredient(cls, ingredient: RecipeIngredient) -> "RecipeIngredientCreate":
        return cls(
            ingredient_id=ingredient.ingredient_id,
            quantity=ingredient.quantity,
            unit=ingredient.unit,
        )


class RecipeCreate(BaseModel):
    """
    A recipe row as written on import.

    Mirrors the columns of the `recipes` table. Times are in minutes.
    """

    user_id: str
    name: str = Field(min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=1000)
    image: str | None = None
    source_url: str | None = None
    is_private: bool = True

    preparation_time: int | None = Field(default=None, ge=0, le=1440)
    cooking_time: int | None = Field(default=None, ge=0, le=1440)
    total_time: int | None = Field(default=None, ge=0, le=2880)
    servings: int | None = Field(default=None, ge=1, le=100)

    # Nutrition
    calories: int | None = Field(default=None, ge=0, le=10000)
    fat: float | None = Field(default=None, ge=0, le=500)
    protein: float | None = Field(default=None, ge=0, le=500)
    carbohydrates: float | None = Field(default=None, ge=0, le=1000)
    fiber: float | None = Field(default=None, ge=0, le=100)
    sugar: float | None = Field(default=None, ge=0, le=500)
    sodium: float | None = Field(default=None, ge=0, le=50)

    recipe_category: str | None = None
    recipe_cuisine: str | None = None
    difficulty: str | None = None
    skill_level: str | None = None
    keywords: list[str] = Field(default_factory=list, max_length=20)
    suitable_for_diet: list[str] = Field(default_factory=list, max_length=15)
    recipe_equipment: list[str] = Field(default_factory=list, max_length=30)
    estimated_cost: float | None = Field(default=None, ge=0, le=1000)

    instructions: list[str] = Field(min_length=1, max_length=MAX_INSTRUCTIONS)
    ingredients: list[RecipeIngredientCreate] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Recipe name is required")
        return value

    @field_validator("instructions")
    @classmethod
    def instructions_not_blank(cls, value: list[str]) -> list[str]:
        if any(not step.strip() for step in value):
            raise ValueError("Instructions cannot be empty")
        return value

    @classmethod
    def from_recipe(cls, recipe: PartialRecipe, user_id: str) -> tuple["RecipeCreate", list[str]]:
        """
        Build the row from an extracted recipe.

        Privacy is always forced on. Free-text lists, the description and the
        instructions are trimmed to the column limits. Optional numbers outside
        their column bounds are dropped rather than failing the import.

        Returns:
            Tuple of (row, warnings for every value that was dropped or trimmed)
        """
        warnings: list[str] = []

        numbers = {}
        for field_name in OPTIONAL_NUMERIC_FIELDS:
            value = getattr(recipe, field_name)
            if value is not None and not cls._in_bounds(field_name, value):
                warnings.append(f"Dropped out-of-range {field_name.replace('_', ' ')}: {value:g}")
                value = None
            numbers[field_name] = value

        instructions = [step.strip() for step in recipe.instructions if step.strip()]
        if len(instructions) > MAX_INSTRUCTIONS:
            warnings.append(f"Only the first {MAX_INSTRUCTIONS} of {len(instructions)} instructions were kept")
            instructions = instructions[:MAX_INSTRUCTIONS]

        row = cls(
            user_id=user_id,
            name=recipe.name or "",
            description=recipe.description[:1000] if recipe.description else None,
            image=recipe.image,
            source_url=recipe.source_url,
            is_private=True,
            recipe_category=recipe.recipe_category,
            recipe_cuisine=recipe.recipe_cuisine,
            difficulty=recipe.difficulty,
            skill_level=recipe.skill_level,
            keywords=recipe.keywords[:20],
            suitable_for_diet=recipe.suitable_for_diet[:15],
            recipe_equipment=recipe.recipe_equipment[:30],
            instructions=instructions,
            ingredients=[
                RecipeIngredientCreate.from_ingredient(ingredient)
                for ingredient in recipe.recipe_ingredients
            ],
            **numbers,
        )
        return row, warnings

    @classmethod
    def _in_bounds(cls, field_name: str, value: float) -> bool:
        for constraint in cls.model_fields[field_name].metadata:
            lower = getattr(constraint, "ge", None)
            upper = getattr(constraint, "le", None)
            if lower is not None and value < lower:
                return False
            if upper is not None and value > upper:
                return False
        return True

    def to_row(self) -> dict[str, Any]:
        """Column values for the `recipes` insert."""
        return self.model_dump(exclude={"ingredients"})


def describe_validation_error(error: ValidationError) -> str:
    """One-line summary of a pydantic error: "name: String should have at most 255 characters"."""
    return "; ".join(
        f"{'.'.join(str(part) for part in detail['loc'])}: {detail['msg']}"
        for detail in error.errors()
    )
