"""
Cuisinons - Database Package.

Persistence for imported recipes (Supabase in production, in-memory for
dry runs and tests).
"""

from cuisinons.db.client import get_client
from cuisinons.db.recipes import InMemoryRecipeStore, RecipeStore, SupabaseRecipeStore

__all__ = [
    "get_client",
    "InMemoryRecipeStore",
    "RecipeStore",
    "SupabaseRecipeStore",
]
