"""Sources management commands."""

import asyncio
from typing import List, Optional

import typer
from psycopg import Error as DatabaseError
from rich.console import Console
from rich.table import Table

from ..config import Config, SourceConfig, load_sources
from ..db import SourceManager, open_pool
from ..exceptions import FetchError
from ..scraping import FetchClient

console = Console()
sources_app = typer.Typer(help="Manage news sources")


def load_cli_config() -> Config:
    """Load config.yaml plus environment overrides, exiting on invalid values."""
    config = Config()
    try:
        config.config
    except ValueError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)
    return config


def read_sources(config: Config) -> List[SourceConfig]:
    """Load sources.yaml or exit with a hint."""
    try:
        return load_sources(config.sources_path)
    except FileNotFoundError:
        console.print("[red]Sources file not found. Run 'redline init' first.[/red]")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)


def find_source(sources: List[SourceConfig], name: str) -> SourceConfig:
    """Match a source by name or adapter key, case-insensitively."""
    wanted = name.strip().lower()
    for source in sources:
        if source.name.lower() == wanted or source.adapter.lower() == wanted:
            return source
    console.print(f"[red]Source '{name}' not found in sources.yaml.[/red]")
    raise typer.Exit(1)


@sources_app.command("list")
def sources_list() -> None:
    """List all configured sources."""
    config = load_cli_config()
    sources = read_sources(config)

    if not sources:
        console.print("[yellow]No sources configured.[/yellow]")
        return

    table = Table(title="Configured Sources")
    table.add_column("Name", style="cyan")
    table.add_column("Adapter", style="magenta")
    table.add_column("Language", style="green")
    table.add_column("Enabled", style="yellow")
    table.add_column("URL", style="blue")

    for source in sources:
        table.add_row(
            source.name,
            source.adapter,
            source.language,
            "✓" if source.enabled else "✗",
            source.base_url,
        )

    console.print(table)


@sources_app.command("sync")
def sources_sync() -> None:
    """Upsert sources.yaml into the database."""
    config = load_cli_config()
    sources = read_sources(config)

    async def sync() -> dict:
        async with open_pool(config.get_db_config()) as pool:
            return await SourceManager(pool).sync_sources(sources)

    try:
        source_map = asyncio.run(sync())
    except DatabaseError as e:
        console.print(f"[red]❌ Failed to sync sources: {e}[/red]")
        raise typer.Exit(1)

    for name, source_id in source_map.items():
        console.print(f"[green]✅ {name} (id {source_id})[/green]")


@sources_app.command("test")
def sources_test(
    name: Optional[str] = typer.Argument(None, help="Source name to test (or test all)"),
) -> None:
    """Test outlet homepage connectivity."""
    config = load_cli_config()
    sources = read_sources(config)

    if name:
        sources = [find_source(sources, name)]

    fetcher = FetchClient.from_config(config.config.scraping)

    async def check(source: SourceConfig) -> None:
        if not source.enabled:
            console.print(f"[yellow]⚠️  {source.name}: Disabled[/yellow]")
            return
        try:
            response = await fetcher.fetch(source.base_url, max_retries=1)
            console.print(f"[green]✅ {source.name}: OK ({response.status_code})[/green]")
        except FetchError as e:
            console.print(f"[red]❌ {source.name}: Failed - {e.last_error or e}[/red]")

    async def check_all() -> None:
        for source in sources:
            await check(source)

    asyncio.run(check_all())
