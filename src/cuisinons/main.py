"""
Cuisinons - CLI Entry Point.

Usage:
    cuisinons import-url URL       Import a recipe from a web page
    cuisinons import-text FILE     Import a recipe from a text file ("-" for stdin)
    cuisinons units                Show the unit table
    cuisinons health               Check configuration
    cuisinons --help               Show help
"""

import asyncio
import logging
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.spinner import Spinner
from rich.table import Table

app = typer.Typer(
    name="cuisinons",
    help="Cuisinons - import recipes from the web into your recipe manager.",
    add_completion=False,
)
console = Console()

DEFAULT_USER_ID = "local-user"


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging and quiet the HTTP/LLM client libraries."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(message)s",
    )
    for noisy in ("httpx", "httpcore", "openai"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def _build_context(user_id: str, dry_run: bool):
    from cuisinons.db.recipes import InMemoryRecipeStore
    from cuisinons.recipe_import import ImportContext
    from cuisinons.tools.ingredient_lookup import InMemoryIngredientLookup

    if dry_run:
        return ImportContext(
            user_id=user_id,
            store=InMemoryRecipeStore(),
            ingredient_lookup=InMemoryIngredientLookup(),
        )
    return ImportContext.from_settings(user_id)


def _print_result(result) -> None:
    from cuisinons.recipe_import import ImportStatus

    colors = {
        ImportStatus.SUCCESS: "green",
        ImportStatus.PARTIAL: "yellow",
        ImportStatus.MANUAL_REQUIRED: "yellow",
        ImportStatus.FAILED: "red",
    }
    color = colors.get(result.status, "white")

    lines = [f"[bold {color}]{result.status.value}[/bold {color}]"]
    if result.extraction_method:
        lines.append(f"Method: {result.extraction_method.value}")
    if result.confidence is not None:
        lines.append(f"Confidence: {result.confidence}")
    if result.recipe_id:
        lines.append(f"Saved as: {result.recipe_id}")
    console.print(Panel.fit("\n".join(lines), title="Import", border_style=color))

    recipe = result.recipe
    if recipe:
        console.print(f"\n[bold]{recipe.name or '(untitled)'}[/bold]")
        if recipe.description:
            console.print(f"[dim]{recipe.description}[/dim]")

        facts = []
        if recipe.preparation_time is not None:
            facts.append(f"prep {recipe.preparation_time} min")
        if recipe.cooking_time is not None:
            facts.append(f"cook {recipe.cooking_time} min")
        if recipe.servings is not None:
            facts.append(f"serves {recipe.servings}")
        if facts:
            console.print(" · ".join(facts))

        if recipe.recipe_ingredients:
            from cuisinons.tools.units import format_quantity

            console.print("\n[bold]Ingredients[/bold]")
            for ingredient in recipe.recipe_ingredients:
                console.print(f"  • {format_quantity(ingredient.quantity, ingredient.unit)} {ingredient.name}")
        elif recipe.ingredients_raw:
            console.print("\n[bold]Ingredients[/bold]")
            for line in recipe.ingredients_raw:
                console.print(f"  • {line}")

        if recipe.instructions:
            console.print("\n[bold]Instructions[/bold]")
            for i, step in enumerate(recipe.instructions, 1):
                console.print(f"  {i}. {step}")

    if result.warnings:
        console.print("\n[bold yellow]Warnings[/bold yellow]")
        for warning in result.warnings:
            console.print(f"  [yellow]•[/yellow] {warning}")


@app.command("import-url")
def import_url(
    url: str = typer.Argument(..., help="Recipe page URL"),
    user_id: str = typer.Option(DEFAULT_USER_ID, "--user-id", "-u", help="Owner of the imported recipe"),
    skip_fetch: bool = typer.Option(False, "--skip-fetch", help="Skip fetching and go to manual import"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Keep the recipe in memory instead of saving it"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs"),
    log_prompts: bool = typer.Option(False, "--log-prompts", "-l", help="Log all LLM prompts to prompt_logs/"),
) -> None:
    """Import a recipe from a web page."""
    from cuisinons.config import settings
    from cuisinons.llm.prompt_logger import enable_prompt_logging, get_session_log_dir
    from cuisinons.recipe_import import ImportStatus, import_recipe_from_url

    setup_logging("DEBUG" if verbose else settings.log_level)
    log_prompts = log_prompts or settings.cuisinons_log_prompts
    if log_prompts:
        enable_prompt_logging(True)

    context = _build_context(user_id, dry_run)

    with Live(Spinner("dots", text="Importing..."), console=console, transient=True):
        result = asyncio.run(import_recipe_from_url(url, context, skip_direct_fetch=skip_fetch))

    _print_result(result)

    if log_prompts:
        log_dir = get_session_log_dir()
        if log_dir:
            console.print(f"\n[dim]📝 Prompts logged to: {log_dir}[/dim]")

    if result.status == ImportStatus.FAILED:
        raise typer.Exit(1)


@app.command("import-text")
def import_text(
    file: str = typer.Argument(..., help="Text file with the recipe, or - for stdin"),
    source_url: str | None = typer.Option(None, "--source-url", help="Where the text came from"),
    user_id: str = typer.Option(DEFAULT_USER_ID, "--user-id", "-u", help="Owner of the imported recipe"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Keep the recipe in memory instead of saving it"),
    log_prompts: bool = typer.Option(False, "--log-prompts", "-l", help="Log all LLM prompts to prompt_logs/"),
) -> None:
    """Import a recipe from pasted text."""
    from cuisinons.config import settings
    from cuisinons.llm.prompt_logger import enable_prompt_logging
    from cuisinons.recipe_import import ImportStatus, import_recipe_from_text

    setup_logging(settings.log_level)
    if log_prompts or settings.cuisinons_log_prompts:
        enable_prompt_logging(True)

    if file == "-":
        content = sys.stdin.read()
    else:
        path = Path(file)
        if not path.is_file():
            console.print(f"[red]❌ File not found: {file}[/red]")
            raise typer.Exit(1)
        content = path.read_text(encoding="utf-8")

    context = _build_context(user_id, dry_run)

    with Live(Spinner("dots", text="Importing..."), console=console, transient=True):
        result = asyncio.run(import_recipe_from_text(content, context, source_url=source_url))

    _print_result(result)

    if result.status == ImportStatus.FAILED:
        raise typer.Exit(1)


@app.command()
def units() -> None:
    """Show the unit table."""
    from cuisinons.tools.units import UNIT_DEFINITIONS

    table = Table(title="Units")
    table.add_column("Id", style="bold")
    table.add_column("Name")
    table.add_column("Abbreviation")
    table.add_column("Category")
    table.add_column("Base factor", justify="right")

    for unit in UNIT_DEFINITIONS.values():
        table.add_row(
            unit.id,
            unit.name,
            unit.abbreviation,
            unit.category.value,
            f"{unit.base_conversion_factor:g}",
        )

    console.print(table)


@app.command()
def health() -> None:
    """Check configuration."""
    from cuisinons.config import get_settings

    console.print("\n[bold]Cuisinons Health Check[/bold]\n")

    try:
        settings = get_settings()
        console.print("✅ Configuration loaded")
        console.print(f"   Environment: {settings.cuisinons_env}")
        console.print(f"   Log level: {settings.log_level}")

        if settings.openai_api_key:
            console.print(f"✅ LLM API key configured (model: {settings.llm_model})")
        else:
            console.print("⚠️  OPENAI_API_KEY not set - LLM extraction disabled")

        if settings.supabase_url and settings.supabase_service_role_key:
            console.print("✅ Supabase configured")
        else:
            console.print("⚠️  Supabase not configured - use --dry-run")

    except Exception as e:
        console.print(f"\n[red]❌ Configuration error: {e}[/red]")
        console.print("[dim]Make sure you have a .env file with required variables.[/dim]")
        raise typer.Exit(1)


@app.command()
def version() -> None:
    """Show version information."""
    from cuisinons import __version__

    console.print(f"Cuisinons version {__version__}")


if __name__ == "__main__":
    app()
