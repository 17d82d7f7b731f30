"""
Command Line Interface for the Notes service.
"""

from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import print as rprint

from ..config import Environment, get_settings
from ..logging_config import configure_logging


app = typer.Typer(help="Notes service - API server, migrations and seeding")
console = Console()


@app.command()
def serve(
    port: Optional[int] = typer.Option(None, help="Port to run the API server on"),
    host: Optional[str] = typer.Option(None, help="Host to bind the server to"),
):
    """Start the Notes API server."""
    import uvicorn

    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port

    rprint(Panel.fit(f"📝 Starting Notes API ({settings.environment.value})", style="bold blue"))
    uvicorn.run(
        "notes_service.main:build_app",
        factory=True,
        host=host,
        port=port,
        reload=settings.debug,
        workers=1 if settings.debug else settings.api_workers,
    )


@app.command()
def migrate(
    revision: str = typer.Option("head", help="Target Alembic revision"),
):
    """Apply database migrations to DATABASE_URL."""
    from ..db.migrate import upgrade_database

    settings = get_settings()
    console.print(f"🔧 Running database migrations to [bold]{revision}[/bold]...")
    upgrade_database(settings.database_url, revision)
    console.print("✅ Migrations applied")


@app.command()
def seed(
    count: Optional[int] = typer.Option(None, help="Number of notes to insert"),
    environment: Optional[str] = typer.Option(
        None, help="development, staging or production (default: ENVIRONMENT)"
    ),
):
    """Populate the notes table with generated notes."""
    from ..seed.seeder import run_seed

    settings = get_settings()
    if environment:
        settings = settings.model_copy(
            update={"environment": Environment.parse(environment)}
        )
    configure_logging(settings.log_level, settings.log_format)

    exit_code = run_seed(settings, count=count)
    if exit_code:
        console.print("❌ Seeding failed")
    raise typer.Exit(code=exit_code)


@app.command()
def config():
    """Show the resolved runtime configuration."""
    settings = get_settings()

    table = Table(title="Notes Service Configuration", show_header=True, header_style="bold magenta")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Environment", settings.environment.value)
    table.add_row("API", f"{settings.api_host}:{settings.api_port}")
    table.add_row("Database", _mask_password(settings.database_url))
    table.add_row("Seed count", str(settings.seed_count))
    table.add_row("Log level", settings.log_level)
    table.add_row("Digest", settings.digest or "-")

    console.print(table)


def _mask_password(database_url: str) -> str:
    from sqlalchemy.engine.url import make_url

    return make_url(database_url).render_as_string(hide_password=True)


def main():
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
