"""Tests for the Supabase-backed store and lookup, with a mocked client."""

import asyncio
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from cuisinons.db.recipes import SupabaseRecipeStore
from cuisinons.tools.ingredient_lookup import SupabaseIngredientLookup


def _response(*rows):
    return SimpleNamespace(data=list(rows))


class TestSupabaseRecipeStore:
    def test_insert_recipe_returns_id(self):
        client = MagicMock()
        client.table.return_value.insert.return_value.execute.return_value = _response({"id": 42})

        recipe_id = asyncio.run(SupabaseRecipeStore(client).insert_recipe({"name": "Soup"}))

        assert recipe_id == "42"
        client.table.assert_called_with("recipes")
        client.table.return_value.insert.assert_called_with({"name": "Soup"})

    def test_insert_recipe_without_data_raises(self):
        client = MagicMock()
        client.table.return_value.insert.return_value.execute.return_value = _response()

        with pytest.raises(RuntimeError):
            asyncio.run(SupabaseRecipeStore(client).insert_recipe({"name": "Soup"}))

    def test_insert_ingredient_row(self):
        client = MagicMock()
        client.table.return_value.insert.return_value.execute.return_value = _response({"id": 1})

        asyncio.run(SupabaseRecipeStore(client).insert_recipe_ingredient("r1", "i1", 2.0, "cup", "user-1"))

        client.table.assert_called_with("recipe_ingredients")
        client.table.return_value.insert.assert_called_with(
            {"recipe_id": "r1", "ingredient_id": "i1", "quantity": 2.0, "unit": "cup", "user_id": "user-1"}
        )


class TestSupabaseIngredientLookup:
    """Tests for exact match, then creation of a user ingredient."""

    def _client(self, found=(), created=()):
        client = MagicMock()
        table = client.table.return_value
        table.select.return_value.ilike.return_value.limit.return_value.execute.return_value = _response(*found)
        table.insert.return_value.execute.return_value = _response(*created)
        return client

    def test_exact_match(self):
        client = self._client(found=[{"id": 7, "name": "flour"}])

        match = asyncio.run(SupabaseIngredientLookup("user-1", client).resolve("  Flour "))

        assert (match.id, match.name, match.match_type) == ("7", "flour", "exact")
        client.table.return_value.select.return_value.ilike.assert_called_with("name", "flour")
        client.table.return_value.insert.assert_not_called()

    def test_creates_user_ingredient(self):
        client = self._client(created=[{"id": 9, "name": "sumac"}])

        match = asyncio.run(SupabaseIngredientLookup("user-1", client).resolve("Sumac"))

        assert (match.id, match.match_type) == ("9", "created")
        client.table.return_value.insert.assert_called_with(
            {"name": "sumac", "type": "user", "created_by_id": "user-1"}
        )

    def test_no_create(self):
        client = self._client()
        lookup = SupabaseIngredientLookup("user-1", client, create_missing=False)
        assert asyncio.run(lookup.resolve("sumac")) is None

    def test_blank_name(self):
        client = self._client()
        assert asyncio.run(SupabaseIngredientLookup("user-1", client).resolve("   ")) is None
        client.table.assert_not_called()
