"""
Cuisinons - Recipe Import Service.

The two public entry points: import from a URL and import from pasted text.
Both always return an ImportResult; every error is folded into a `failed`
result with the message as its only warning.

URL import:
1. Fetch the page (bounded time and size)
2. Run the extraction cascade
3. On success, validate, resolve ingredients and persist

One deadline covers the whole call, so a slow fetch or LLM reply cannot
hold the request open indefinitely.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from pydantic import ValidationError

from cuisinons.config import settings
from cuisinons.db.recipes import RecipeStore, SupabaseRecipeStore
from cuisinons.recipe_import.errors import ImportErrorType, RecipeImportError
from cuisinons.recipe_import.extractors import DEFAULT_EXTRACTORS
from cuisinons.recipe_import.fetcher import FetchedPage, fetch_webpage_content
from cuisinons.recipe_import.ingredients import build_recipe_ingredients
from cuisinons.recipe_import.models import ExtractorOptions, ImportResult, ImportStatus
from cuisinons.recipe_import.orchestrator import ExtractionOrchestrator
from cuisinons.recipe_import.schemas import (
    OPTIONAL_NUMERIC_FIELDS,
    RecipeCreate,
    RecipeIngredientCreate,
    describe_validation_error,
)
from cuisinons.tools.ingredient_lookup import IngredientLookup, SupabaseIngredientLookup

logger = logging.getLogger(__name__)

TEXT_INPUT_URL = "text-input"

Fetcher = Callable[[str], Awaitable[FetchedPage]]


@dataclass
class ImportContext:
    """Who is importing, and where the result goes."""

    user_id: str
    store: RecipeStore
    ingredient_lookup: IngredientLookup

    @classmethod
    def from_settings(cls, user_id: str) -> "ImportContext":
        """Supabase-backed context for the given user."""
        return cls(
            user_id=user_id,
            store=SupabaseRecipeStore(),
            ingredient_lookup=SupabaseIngredientLookup(user_id),
        )


def default_orchestrator() -> ExtractionOrchestrator:
    return ExtractionOrchestrator(DEFAULT_EXTRACTORS, threshold=settings.confidence_threshold)


def _extractor_options() -> ExtractorOptions:
    return ExtractorOptions(
        max_tokens=settings.llm_max_tokens,
        temperature=settings.llm_temperature,
    )


async def import_recipe_from_url(
    url: str,
    context: ImportContext,
    skip_direct_fetch: bool = False,
    *,
    orchestrator: ExtractionOrchestrator | None = None,
    fetch: Fetcher = fetch_webpage_content,
) -> ImportResult:
    """
    Import a recipe from a web page.

    Args:
        url: Recipe page URL
        context: Importing user, recipe store and ingredient lookup
        skip_direct_fetch: Go straight to manual import without network I/O
        orchestrator: Extraction cascade (default tiers if None)
        fetch: Page fetcher

    Returns:
        ImportResult; `recipe_id` is set when the recipe was saved
    """
    if skip_direct_fetch:
        return ImportResult(
            status=ImportStatus.MANUAL_REQUIRED,
            warnings=["Direct fetch skipped - manual import required"],
            source_url=url,
        )

    orchestrator = orchestrator or default_orchestrator()
    deadline = settings.import_deadline_seconds

    try:
        return await asyncio.wait_for(
            _import_from_url(url, context, orchestrator, fetch), deadline
        )
    except asyncio.TimeoutError:
        logger.warning(f"Import of {url} exceeded {deadline:g}s")
        return _failed("Import failed", f"timed out after {deadline:g} seconds", url)
    except Exception as e:
        logger.exception(f"Import of {url} failed")
        return _failed("Import failed", str(e), url)


async def _import_from_url(
    url: str,
    context: ImportContext,
    orchestrator: ExtractionOrchestrator,
    fetch: Fetcher,
) -> ImportResult:
    page = await fetch(url)
    result = await orchestrator.run(page.url, html=page.html, options=_extractor_options())

    if result.status == ImportStatus.SUCCESS:
        return await _persist(result, context)
    return result


async def import_recipe_from_text(
    content: str,
    context: ImportContext,
    source_url: str | None = None,
    *,
    orchestrator: ExtractionOrchestrator | None = None,
) -> ImportResult:
    """
    Import a recipe from pasted text.

    Only tiers that work on plain text are tried (in practice the LLM tier).
    """
    if not content or not content.strip():
        return ImportResult(
            status=ImportStatus.FAILED,
            warnings=["No content provided"],
            source_url=source_url,
        )

    orchestrator = (orchestrator or default_orchestrator()).text_only()
    deadline = settings.import_deadline_seconds

    try:
        return await asyncio.wait_for(
            _import_from_text(content, context, source_url, orchestrator), deadline
        )
    except asyncio.TimeoutError:
        logger.warning(f"Text import exceeded {deadline:g}s")
        return _failed("Text import failed", f"timed out after {deadline:g} seconds", source_url)
    except Exception as e:
        logger.exception("Text import failed")
        return _failed("Text import failed", str(e), source_url)


async def _import_from_text(
    content: str,
    context: ImportContext,
    source_url: str | None,
    orchestrator: ExtractionOrchestrator,
) -> ImportResult:
    result = await orchestrator.run(
        source_url or TEXT_INPUT_URL,
        content=content,
        options=_extractor_options(),
    )
    result.source_url = source_url
    if result.recipe is not None:
        result.recipe.source_url = source_url

    if result.status == ImportStatus.SUCCESS:
        return await _persist(result, context)
    return result


async def _persist(result: ImportResult, context: ImportContext) -> ImportResult:
    """Validate, resolve ingredients and save a successful extraction."""
    recipe = result.recipe
    if recipe is None or not recipe.is_complete():
        # Confident but unusable: hand it to the manual form instead of saving
        result.status = ImportStatus.MANUAL_REQUIRED
        result.warnings.append("Recipe is missing a name or instructions. Please complete it manually.")
        return result

    recipe.is_private = True
    try:
        row, row_warnings = RecipeCreate.from_recipe(recipe, context.user_id)
    except ValidationError as e:
        raise RecipeImportError(
            f"Invalid recipe: {describe_validation_error(e)}", ImportErrorType.VALIDATION_FAILED
        ) from e

    # The returned recipe matches what is stored
    for field_name in OPTIONAL_NUMERIC_FIELDS:
        setattr(recipe, field_name, getattr(row, field_name))
    recipe.instructions = list(row.instructions)

    # Lookups may create ingredients, so they run only once the row is valid
    ingredients, ingredient_warnings = await build_recipe_ingredients(
        recipe.ingredients_raw, context.ingredient_lookup
    )
    recipe.recipe_ingredients = ingredients
    row.ingredients = [RecipeIngredientCreate.from_ingredient(ingredient) for ingredient in ingredients]

    recipe_id = await context.store.insert_recipe(row.to_row())

    # Child rows are independent of each other
    await asyncio.gather(
        *(
            context.store.insert_recipe_ingredient(
                recipe_id,
                ingredient.ingredient_id,
                ingredient.quantity,
                ingredient.unit,
                context.user_id,
            )
            for ingredient in row.ingredients
        )
    )

    logger.info(
        f"Imported recipe {recipe_id} via {result.extraction_method} "
        f"with {len(row.ingredients)} ingredients"
    )
    result.recipe_id = recipe_id
    result.warnings.extend(row_warnings + ingredient_warnings)
    return result


def _failed(prefix: str, message: str, source_url: str | None) -> ImportResult:
    return ImportResult(
        status=ImportStatus.FAILED,
        warnings=[f"{prefix}: {message}"],
        source_url=source_url,
    )
