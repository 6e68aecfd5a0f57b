"""
Recipe Ingest - CLI Entry Point.

Usage:
    recipe-ingest fetch URL          Extract a recipe and print it
    recipe-ingest fetch URL --json   Print the API response shape
    recipe-ingest serve              Run the HTTP functions
    recipe-ingest health             Check configuration
"""

import json
import os

import typer
from rich.console import Console
from rich.panel import Panel
from rich.spinner import Spinner
from rich.live import Live

app = typer.Typer(
    name="recipe-ingest",
    help="Recipe Ingest - schema.org Recipe extraction from web pages.",
    add_completion=False,
)
console = Console()


@app.command()
def fetch(
    url: str = typer.Argument(..., help="Recipe page URL"),
    as_json: bool = typer.Option(False, "--json", "-j", help="Print the API response JSON"),
    fallback: str | None = typer.Option(None, "--fallback", "-f", help="Fallback tier: firecrawl, browser, none"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show strategy progress"),
) -> None:
    """Fetch a page and extract its recipe without storing it."""
    from recipe_ingest.config import get_settings
    from recipe_ingest.observability import configure_logging
    from recipe_ingest.recipe_import import (
        RecipeImportError,
        build_executor,
        extract_recipe,
        flatten_instructions,
        to_recipe_response,
    )

    configure_logging("INFO" if verbose else "WARNING", "text")

    settings = get_settings()
    if fallback:
        if fallback not in ("firecrawl", "browser", "none"):
            console.print(f"[red]Invalid fallback: {fallback}. Options: firecrawl, browser, none[/red]")
            raise typer.Exit(2)
        settings = settings.model_copy(update={"fallback_strategy": fallback})

    try:
        executor = build_executor(settings)
        with Live(Spinner("dots", text="Fetching..."), console=console, transient=True):
            recipe = extract_recipe(url, executor=executor)
    except RecipeImportError as e:
        console.print(f"[red]FAIL {e}[/red]")
        raise typer.Exit(1)

    if recipe is None:
        console.print("[yellow]No Recipe structured data found on the page[/yellow]")
        raise typer.Exit(1)

    if as_json:
        console.print_json(json.dumps(to_recipe_response(url, recipe), ensure_ascii=False))
        return

    details = [f"[bold green]{recipe.name}[/bold green]"]
    if recipe.description:
        details.append(recipe.description)
    if recipe.author:
        details.append(f"[dim]By {recipe.author.name}[/dim]")
    times = [
        f"{label}: {value}"
        for label, value in (("Prep", recipe.prep_time), ("Cook", recipe.cook_time), ("Total", recipe.total_time))
        if value
    ]
    if times:
        details.append(f"[dim]{' | '.join(times)}[/dim]")
    if recipe.recipe_yield:
        details.append(f"[dim]Yield: {', '.join(recipe.recipe_yield)}[/dim]")
    console.print(Panel.fit("\n".join(details), title="Recipe", border_style="green"))

    console.print(f"\n[bold]Ingredients ({len(recipe.ingredients)}):[/bold]")
    for ingredient in recipe.ingredients:
        console.print(f"  • {ingredient}")

    steps = flatten_instructions(recipe.instructions)
    console.print(f"\n[bold]Instructions ({len(steps)}):[/bold]")
    for i, step in enumerate(steps, 1):
        console.print(f"  {i}. {step}")


@app.command()
def health() -> None:
    """Check configuration."""
    from recipe_ingest.config import get_settings

    console.print("\n[bold]Recipe Ingest Health Check[/bold]\n")

    try:
        settings = get_settings()
    except Exception as e:
        console.print(f"\n[red]FAIL Configuration error: {e}[/red]")
        console.print("[dim]Make sure you have a .env file with required variables.[/dim]")
        raise typer.Exit(1)

    console.print("[green]OK[/green] Configuration loaded")
    console.print(f"   Environment: {settings.recipe_ingest_env}")
    console.print(f"   Log level: {settings.log_level}")
    console.print(f"   Fallback strategy: {settings.fallback_strategy}")

    failed = False

    if settings.supabase_url and settings.supabase_url.startswith("https://") and settings.supabase_service_role_key:
        console.print("[green]OK[/green] Supabase configured")
    else:
        console.print("[red]FAIL[/red] SUPABASE_URL / SUPABASE_SERVICE_ROLE_KEY missing or invalid")
        failed = True

    if settings.fallback_strategy == "firecrawl":
        if settings.firecrawl_api_key:
            console.print("[green]OK[/green] Firecrawl API key configured")
        else:
            console.print("[yellow]WARN[/yellow] FIRECRAWL_API_KEY not set; fallback tier will fail")
    elif settings.fallback_strategy == "browser":
        try:
            import playwright  # noqa: F401

            console.print("[green]OK[/green] Playwright installed")
        except ImportError:
            console.print("[yellow]WARN[/yellow] Playwright not installed (pip install recipe-ingest[browser])")
    else:
        console.print("[dim]INFO[/dim] No fallback tier configured")

    if failed:
        raise typer.Exit(1)
    console.print("\n[green]All checks passed![/green]")


@app.command()
def version() -> None:
    """Show version information."""
    from recipe_ingest import __version__

    console.print(f"Recipe Ingest version {__version__}")


@app.command()
def serve(
    port: int = typer.Option(8000, "--port", "-p", help="Port to run on"),
    reload: bool = typer.Option(False, "--reload", "-r", help="Enable auto-reload for development"),
) -> None:
    """Start the HTTP functions server."""
    import uvicorn

    # Hosting platforms set PORT
    actual_port = int(os.environ.get("PORT", port))

    console.print("\n[bold green]Recipe Ingest[/bold green]")
    console.print(f"Starting server on http://localhost:{actual_port}")
    console.print("[dim]Press Ctrl+C to stop[/dim]\n")

    uvicorn.run(
        "recipe_ingest.web.app:app",
        host="0.0.0.0",
        port=actual_port,
        reload=reload,
    )


if __name__ == "__main__":
    app()
