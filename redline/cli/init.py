"""Init command implementation."""

import asyncio
from pathlib import Path
from typing import List

import typer
from psycopg import Error as DatabaseError
from rich.console import Console
from rich.panel import Panel

from ..config import (
    Config,
    ConfigModel,
    PostgresConfig,
    SourceConfig,
    default_config_path,
    save_config,
    save_sources,
)
from ..db import SourceManager, init_database, open_pool, validate_connection
from ..scraping.adapters import ADAPTERS

console = Console()


def create_default_sources() -> List[SourceConfig]:
    """One source per registered outlet adapter."""
    return [
        SourceConfig(
            name=adapter.name,
            base_url=adapter.base_url,
            adapter=key,
            language=adapter.language,
            enabled=True,
        )
        for key, adapter in ADAPTERS.items()
    ]


async def _prepare_database(db_config: PostgresConfig, sources: List[SourceConfig]) -> int:
    async with open_pool(db_config) as pool:
        if not await validate_connection(pool):
            return -1
        console.print("✅ Database connection successful")

        console.print("\n[bold]Initializing database schema...[/bold]")
        await init_database(pool)
        console.print("✅ Database schema initialized")

        source_map = await SourceManager(pool).sync_sources(sources)
        return len(source_map)


def init_command(
    config_dir: Path = typer.Option(
        default_config_path().parent,
        "--config-dir",
        "-c",
        help="Configuration directory",
    ),
    db_host: str = typer.Option("localhost", "--db-host", help="Postgres host"),
    db_port: int = typer.Option(5432, "--db-port", help="Postgres port"),
    db_name: str = typer.Option("redline_db", "--db-name", help="Database name"),
    db_user: str = typer.Option("postgres", "--db-user", help="Database user"),
    seed_sources: bool = typer.Option(
        True,
        "--seed-sources/--no-seed-sources",
        help="Seed the built-in news sources",
    ),
) -> None:
    """Initialize Redline configuration and database."""
    console.print(Panel.fit("Redline - Initialization", style="bold blue"))

    config_dir.mkdir(parents=True, exist_ok=True)
    config_path = config_dir / "config.yaml"
    sources_path = config_dir / "sources.yaml"

    config = ConfigModel(
        postgres={
            "host": db_host,
            "port": db_port,
            "database": db_name,
            "user": db_user,
            "password_env": "DB_PASSWORD",
        },
    )

    save_config(config, config_path)
    console.print(f"✅ Created config: {config_path}")

    sources = create_default_sources() if seed_sources else []
    save_sources(sources, sources_path)
    console.print(f"✅ Created sources: {sources_path} ({len(sources)} sources)")

    console.print("\n[bold]Testing database connection...[/bold]")
    try:
        db_config = Config(config_path).get_db_config()
    except ValueError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)

    try:
        synced = asyncio.run(_prepare_database(db_config, sources))
    except DatabaseError as e:
        console.print(f"[red]❌ Failed to initialize database: {e}[/red]")
        raise typer.Exit(1)

    if synced < 0:
        console.print(
            "[red]❌ Database connection failed![/red]\n"
            "Please ensure Postgres (with PostGIS) is running and credentials are correct.\n"
            "Set the password via environment variable: [bold]export DB_PASSWORD=your_password[/bold]"
        )
        raise typer.Exit(1)

    location_hint = ""
    if config_path.resolve() != default_config_path().resolve():
        location_hint = (
            f"Other commands read {default_config_path()}; point them here with:\n"
            f"[bold]export REDLINE_CONFIG={config_path}[/bold]\n\n"
        )

    console.print(
        Panel(
            f"[green]✅ Redline initialized successfully![/green]\n\n"
            f"Configuration: {config_path}\n"
            f"Sources: {sources_path} ({synced} synced to database)\n\n"
            f"{location_hint}"
            f"Next steps:\n"
            f"1. Set an AI key: [bold]export GEMINI_API_KEY=...[/bold] or [bold]OPENAI_API_KEY=sk-...[/bold]\n"
            f"2. Scrape: [bold]redline scrape \"The Daily Star\" --limit 10[/bold]\n"
            f"3. Enrich: [bold]redline classify[/bold] and [bold]redline locations[/bold]",
            style="green",
        )
    )
