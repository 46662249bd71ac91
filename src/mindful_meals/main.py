"""
Mindful Meals - CLI Entry Point.

Usage:
    mindful-meals serve                    Run the API server
    mindful-meals seed                     Seed the ingredient catalog
    mindful-meals onboard --user-id ID --email EMAIL
                                           Set up a profile in the terminal
    mindful-meals health                   Check the API is reachable
    mindful-meals --help                   Show help
"""

import asyncio
import logging
import sys

import httpx
import typer
from rich.console import Console
from rich.panel import Panel

app = typer.Typer(
    name="mindful-meals",
    help="Mindful Meals - your personal meal planning assistant.",
    add_completion=False,
)
console = Console()

DEFAULT_API_URL = "http://localhost:6000"


def setup_logging(level: str = "INFO") -> None:
    """Send log records to stderr and quiet down noisy libraries."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


@app.command()
def serve(
    host: str = typer.Option(None, "--host", help="Bind address (default: HOST setting)"),
    port: int = typer.Option(None, "--port", "-p", help="Port (default: PORT setting)"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
) -> None:
    """Run the Mindful Meals API server."""
    import uvicorn

    from mindful_meals.config import MissingConfiguration, get_settings

    try:
        settings = get_settings()
    except MissingConfiguration as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)

    setup_logging(settings.log_level)
    uvicorn.run(
        "mindful_meals.web.app:create_app",
        factory=True,
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


@app.command()
def seed(
    merge: bool = typer.Option(False, "--merge", help="Upsert by name instead of replacing the catalog"),
) -> None:
    """Seed the ingredient catalog."""
    from mindful_meals.config import MissingConfiguration
    from mindful_meals.seed import seed_ingredients

    setup_logging()
    try:
        count = asyncio.run(seed_ingredients(replace=not merge))
    except MissingConfiguration as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)

    console.print(f"[green]✓[/green] Seeded {count} ingredients")


@app.command()
def onboard(
    user_id: str = typer.Option(..., "--user-id", help="Signed-in user id"),
    email: str = typer.Option(..., "--email", help="Signed-in user email"),
    api_url: str = typer.Option(DEFAULT_API_URL, "--api-url", envvar="MINDFUL_MEALS_API_URL", help="API base URL"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs"),
) -> None:
    """Set up your profile step by step."""
    from onboarding.console import run_console_wizard
    from onboarding.ingredients import IngredientCatalog
    from onboarding.service import ProfileClient, start_onboarding
    from onboarding.session import sign_in, sign_out

    setup_logging("DEBUG" if verbose else "WARNING")

    console.print(
        Panel.fit(
            "[bold green]Mindful Meals[/bold green]\n"
            "Let's set up your profile.\n\n"
            "[dim]Commands: /back, /skip, /quit. Press enter to continue.[/dim]",
            title="Welcome",
            border_style="green",
        )
    )

    sign_in(user_id, email)
    try:
        catalog = IngredientCatalog(api_url)
        sequencer = start_onboarding(ProfileClient(api_url))

        async def _run():
            await catalog.load()
            return await run_console_wizard(sequencer, catalog, console)

        result = asyncio.run(_run())
    except KeyboardInterrupt:
        console.print("\n\n[dim]Profile setup interrupted. Nothing was saved.[/dim]")
        raise typer.Exit(code=130)
    finally:
        sign_out()

    if result is None:
        raise typer.Exit(code=1)


@app.command()
def health(
    api_url: str = typer.Option(DEFAULT_API_URL, "--api-url", envvar="MINDFUL_MEALS_API_URL", help="API base URL"),
) -> None:
    """Check the API is reachable."""
    try:
        response = httpx.get(f"{api_url.rstrip('/')}/health", timeout=5.0)
        response.raise_for_status()
    except httpx.HTTPError as e:
        console.print(f"[red]✗[/red] API unreachable at {api_url}: {e}")
        raise typer.Exit(code=1)

    console.print(f"[green]✓[/green] {response.json().get('message', 'ok')}")


if __name__ == "__main__":
    app()
