"""
Cuisinons - Supabase Client.

Low-level database access. All queries go through here.
"""

from supabase import Client, create_client

from cuisinons.config import ConfigurationError, settings

RECIPES_TABLE = "recipes"
RECIPE_INGREDIENTS_TABLE = "recipe_ingredients"
INGREDIENTS_TABLE = "ingredients"

# Singleton client instance
_client: Client | None = None


def get_client() -> Client:
    """
    Get the Supabase client.

    Uses singleton pattern to reuse connection. Imports write on behalf of
    an already-authenticated user, so the service role key is used.
    """
    global _client

    if _client is None:
        if not settings.supabase_url or not settings.supabase_service_role_key:
            raise ConfigurationError(
                "SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set to persist recipes"
            )
        _client = create_client(
            settings.supabase_url,
            settings.supabase_service_role_key,
        )

    return _client
