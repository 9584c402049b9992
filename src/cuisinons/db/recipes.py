"""
Cuisinons - Recipe persistence.

The import service only needs two writes: the recipe row and its
ingredient rows. Both stores below implement that narrow interface.
"""

import logging
import uuid
from typing import Any, Protocol

from supabase import Client

from cuisinons.db.client import RECIPE_INGREDIENTS_TABLE, RECIPES_TABLE, get_client

logger = logging.getLogger(__name__)


class RecipeStore(Protocol):
    """Persistence capability used by the import service."""

    async def insert_recipe(self, fields: dict[str, Any]) -> str: ...

    async def insert_recipe_ingredient(
        self,
        recipe_id: str,
        ingredient_id: str,
        quantity: float,
        unit: str | None,
        user_id: str,
    ) -> None: ...


class SupabaseRecipeStore:
    """Writes imported recipes to the Supabase `recipes` tables."""

    def __init__(self, client: Client | None = None) -> None:
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = get_client()
        return self._client

    async def insert_recipe(self, fields: dict[str, Any]) -> str:
        """Insert a recipe row and return its id."""
        response = self.client.table(RECIPES_TABLE).insert(fields).execute()

        if not response.data:
            raise RuntimeError("Failed to save imported recipe")

        recipe_id = str(response.data[0]["id"])
        logger.info(f"Saved imported recipe {recipe_id}")
        return recipe_id

    async def insert_recipe_ingredient(
        self,
        recipe_id: str,
        ingredient_id: str,
        quantity: float,
        unit: str | None,
        user_id: str,
    ) -> None:
        """Insert one recipe-ingredient row."""
        row = {
            "recipe_id": recipe_id,
            "ingredient_id": ingredient_id,
            "quantity": quantity,
            "unit": unit,
            "user_id": user_id,
        }
        response = self.client.table(RECIPE_INGREDIENTS_TABLE).insert(row).execute()
        if not response.data:
            logger.warning(f"Failed to create ingredient {ingredient_id} for recipe {recipe_id}")


class InMemoryRecipeStore:
    """Keeps recipes in process memory (dry runs, tests)."""

    def __init__(self) -> None:
        self.recipes: dict[str, dict[str, Any]] = {}
        self.recipe_ingredients: list[dict[str, Any]] = []

    async def insert_recipe(self, fields: dict[str, Any]) -> str:
        recipe_id = str(uuid.uuid4())
        self.recipes[recipe_id] = {"id": recipe_id, **fields}
        return recipe_id

    async def insert_recipe_ingredient(
        self,
        recipe_id: str,
        ingredient_id: str,
        quantity: float,
        unit: str | None,
        user_id: str,
    ) -> None:
        if recipe_id not in self.recipes:
            raise KeyError(f"Unknown recipe {recipe_id}")
        self.recipe_ingredients.append(
            {
                "recipe_id": recipe_id,
                "ingredient_id": ingredient_id,
                "quantity": quantity,
                "unit": unit,
                "user_id": user_id,
            }
        )
