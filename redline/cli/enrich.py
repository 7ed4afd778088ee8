"""AI enrichment commands."""

import asyncio

import typer
from psycopg import Error as DatabaseError
from rich.console import Console
from rich.panel import Panel
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from ..db import ArticleStore, EnrichmentStore, open_pool
from ..enrichment import BatchProgress, BatchReport, EnrichmentService, ProviderSelector, build_providers
from ..exceptions import RedlineError
from .sources import load_cli_config

console = Console()


def _print_report(title: str, report: BatchReport) -> None:
    style = "green" if report.failed == 0 else "yellow"
    lines = [
        f"Total: {report.total}",
        f"Successful: {report.successful}",
        f"Failed: {report.failed}",
    ]
    for error in report.errors[:10]:
        lines.append(f"• article {error.item_id}: {error.error}")
    console.print(Panel("\n".join(lines), title=title, style=style))


def _run_enrichment(stage: str, limit: int) -> BatchReport:
    config = load_cli_config()
    ai_config = config.get_ai_config()
    selector = ProviderSelector(build_providers(ai_config))

    with Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
    ) as progress:
        task = progress.add_task(stage.title(), total=None)

        def on_progress(update: BatchProgress) -> None:
            progress.update(task, completed=update.processed, total=update.total)

        async def run() -> BatchReport:
            async with open_pool(config.get_db_config()) as pool:
                service = EnrichmentService(
                    selector,
                    ArticleStore(pool),
                    EnrichmentStore(pool),
                    ai_config=ai_config,
                    on_progress=on_progress,
                )
                if stage == "classification":
                    return await service.classify_pending(limit)
                return await service.extract_pending_locations(limit)

        return asyncio.run(run())


def classify_command(
    limit: int = typer.Option(50, "--limit", "-l", help="Maximum articles to classify", min=1),
) -> None:
    """Classify stored articles for political violence."""
    try:
        report = _run_enrichment("classification", limit)
    except (RedlineError, DatabaseError) as e:
        console.print(f"[red]Classification failed: {e}[/red]")
        raise typer.Exit(1)
    _print_report("Classification Summary", report)


def locations_command(
    limit: int = typer.Option(20, "--limit", "-l", help="Maximum articles to process", min=1),
) -> None:
    """Extract location mentions from unprocessed articles."""
    try:
        report = _run_enrichment("location extraction", limit)
    except (RedlineError, DatabaseError) as e:
        console.print(f"[red]Location extraction failed: {e}[/red]")
        raise typer.Exit(1)
    _print_report("Location Extraction Summary", report)


def providers_command() -> None:
    """Show which AI providers are configured."""
    selector = ProviderSelector(build_providers(load_cli_config().get_ai_config()))
    status = selector.status()

    table = Table(title="AI Providers")
    table.add_column("Provider", style="cyan")
    table.add_column("Configured", style="bold")
    table.add_column("Model", style="magenta")

    for provider in selector.providers:
        info = status[provider.name]
        table.add_row(
            provider.name,
            "[green]✓[/green]" if info["configured"] else "[red]✗[/red]",
            info["model"],
        )

    console.print(table)
    if status["any_configured"]:
        console.print(f"Active provider: [bold]{status['active_provider']}[/bold]")
    else:
        console.print("[yellow]No AI provider configured. Set GEMINI_API_KEY or OPENAI_API_KEY.[/yellow]")
