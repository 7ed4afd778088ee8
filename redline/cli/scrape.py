"""Scrape command implementation."""

import asyncio
from typing import Optional

import typer
from psycopg import Error as DatabaseError
from rich.console import Console

from ..db import ArticleStore, SourceManager, open_pool
from ..exceptions import RedlineError
from ..pipeline import ScrapeOrchestrator
from ..scraping import FetchClient, ScrapeRunResult, get_adapter
from .sources import find_source, load_cli_config, read_sources

console = Console()


def scrape_command(
    source_name: str = typer.Argument(..., help="Source name or adapter key, e.g. 'The Daily Star'"),
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        "-l",
        help="Maximum article URLs to process",
        min=1,
    ),
) -> None:
    """Scrape one news source and store new articles."""
    config = load_cli_config()
    source = find_source(read_sources(config), source_name)
    if not source.enabled:
        console.print(f"[yellow]Source '{source.name}' is disabled.[/yellow]")
        raise typer.Exit(1)

    scraping = config.config.scraping
    if limit is None:
        limit = scraping.default_limit

    try:
        adapter = get_adapter(
            source.adapter,
            FetchClient.from_config(scraping),
            listing_delay=scraping.listing_delay_ms / 1000,
        )
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    async def run() -> ScrapeRunResult:
        async with open_pool(config.get_db_config()) as pool:
            orchestrator = ScrapeOrchestrator(
                adapter,
                ArticleStore(pool),
                SourceManager(pool),
                delay=scraping.delay_ms / 1000,
                source_name=source.name,
            )
            return await orchestrator.run(limit)

    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        console.print("\n[yellow]Scrape interrupted by user[/yellow]")
        raise typer.Exit(1)
    except (RedlineError, DatabaseError) as e:
        console.print(f"[red]Scraper run failed: {e}[/red]")
        raise typer.Exit(1)
