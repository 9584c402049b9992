"""
Cuisinons - Ingredient Lookup Layer.

Resolves ingredient names found during import to stable ingredient ids:
1. Exact (case-insensitive) match on the ingredient name
2. Otherwise create a user-owned ingredient, when allowed

Fuzzy and semantic matching are left to the recipe editor, where the user
can pick a better match after import.
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Literal, Protocol

from supabase import Client

from cuisinons.db.client import INGREDIENTS_TABLE, get_client
from cuisinons.tools.normalize import normalize_name

logger = logging.getLogger(__name__)


@dataclass
class IngredientMatch:
    """Result of an ingredient lookup."""

    id: str
    name: str
    match_type: Literal["exact", "created"]
    confidence: float  # 0.0 to 1.0

    def __repr__(self) -> str:
        return f"IngredientMatch({self.name}, type={self.match_type}, conf={self.confidence:.2f})"


class IngredientLookup(Protocol):
    """Ingredient-lookup capability used while building recipe ingredients."""

    async def resolve(self, name: str) -> IngredientMatch | None: ...


class SupabaseIngredientLookup:
    """Looks ingredients up in the Supabase `ingredients` table."""

    def __init__(
        self,
        user_id: str,
        client: Client | None = None,
        create_missing: bool = True,
    ) -> None:
        self.user_id = user_id
        self.create_missing = create_missing
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = get_client()
        return self._client

    async def resolve(self, name: str) -> IngredientMatch | None:
        normalized = normalize_name(name)
        if not normalized:
            return None

        response = (
            self.client.table(INGREDIENTS_TABLE)
            .select("id, name")
            .ilike("name", normalized)
            .limit(1)
            .execute()
        )
        if response.data:
            row = response.data[0]
            return IngredientMatch(id=str(row["id"]), name=row["name"], match_type="exact", confidence=1.0)

        if not self.create_missing:
            return None

        created = (
            self.client.table(INGREDIENTS_TABLE)
            .insert({"name": normalized, "type": "user", "created_by_id": self.user_id})
            .execute()
        )
        if not created.data:
            logger.warning(f"Failed to create ingredient '{normalized}'")
            return None

        logger.info(f"Created user ingredient '{normalized}'")
        row = created.data[0]
        return IngredientMatch(id=str(row["id"]), name=row["name"], match_type="created", confidence=1.0)


class InMemoryIngredientLookup:
    """Dictionary-backed lookup (dry runs, tests)."""

    def __init__(self, known: dict[str, str] | None = None, create_missing: bool = True) -> None:
        self.ingredients: dict[str, str] = {
            normalize_name(name): ingredient_id for name, ingredient_id in (known or {}).items()
        }
        self.create_missing = create_missing

    async def resolve(self, name: str) -> IngredientMatch | None:
        normalized = normalize_name(name)
        if not normalized:
            return None

        if normalized in self.ingredients:
            return IngredientMatch(
                id=self.ingredients[normalized], name=normalized, match_type="exact", confidence=1.0
            )

        if not self.create_missing:
            return None

        ingredient_id = str(uuid.uuid4())
        self.ingredients[normalized] = ingredient_id
        return IngredientMatch(id=ingredient_id, name=normalized, match_type="created", confidence=1.0)
