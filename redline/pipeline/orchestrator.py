"""Scrape orchestrator that runs one source end to end."""

import asyncio
import time
from typing import TYPE_CHECKING, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..scraping.base import SourceAdapter
from ..scraping.models import ArticleDraft, ArticleSummary, FailedUrl, ScrapeRunResult

if TYPE_CHECKING:
    from ..db.articles import ArticleStore
    from ..db.sources import SourceManager

console = Console()


class ScrapeOrchestrator:
    """Discover, scrape, validate and store articles for one source."""

    def __init__(
        self,
        adapter: SourceAdapter,
        articles: "ArticleStore",
        sources: "SourceManager",
        delay: float = 2.0,
        min_content_length: Optional[int] = None,
        source_name: Optional[str] = None,
    ) -> None:
        """
        Initialize orchestrator.

        Args:
            adapter: Outlet adapter to scrape with
            articles: Article persistence
            sources: Source lookup and bookkeeping
            delay: Seconds to wait before each article request
            min_content_length: Override for the adapter's minimum content length
            source_name: Name of the source row, defaults to the adapter's name
        """
        self.adapter = adapter
        self.articles = articles
        self.sources = sources
        self.delay = delay
        self.min_content_length = (
            min_content_length if min_content_length is not None else adapter.min_content_length
        )
        self.source_name = source_name or adapter.name

    def validate(self, draft: ArticleDraft) -> Optional[str]:
        """Reason a draft cannot be stored, or None when it is fine."""
        if not draft.title or not draft.content:
            return "Missing title or content"
        if len(draft.content) < self.min_content_length:
            return (
                f"Content too short ({len(draft.content)} < {self.min_content_length} characters)"
            )
        return None

    async def run(self, limit: int = 10) -> ScrapeRunResult:
        """
        Run one scrape of the adapter's source.

        URLs are processed one at a time in discovery order. A failure on
        one URL is recorded and the run moves on.

        Raises:
            SourceNotFoundError: When the source has no database row; raised
                before anything is fetched.
            FetchError: When discovery falls back to the homepage and that
                fetch fails.
        """
        started = time.time()
        console.print(f"[bold]Starting {self.source_name} scraper...[/bold]")

        source_id = await self.sources.get_source_id(self.source_name)
        urls = await self.adapter.discover_urls(limit)

        result = ScrapeRunResult(source_name=self.source_name, total=len(urls))

        for url in urls:
            try:
                if await self.articles.exists(url):
                    console.print(f"[dim]Skipping existing article: {url}[/dim]")
                    result.skipped += 1
                    continue

                if self.delay > 0:
                    await asyncio.sleep(self.delay)

                draft = await self.adapter.scrape_article(url)

                problem = self.validate(draft)
                if problem:
                    console.print(f"[yellow]Skipping article with missing data: {url} ({problem})[/yellow]")
                    result.failed += 1
                    result.failures.append(FailedUrl(url=url, error=problem))
                    continue

                article_id = await self.articles.upsert(draft, source_id)

                result.successful += 1
                result.articles.append(
                    ArticleSummary(
                        id=article_id,
                        title=draft.title,
                        url=draft.url,
                        content_length=len(draft.content),
                    )
                )
                console.print(f"[green]Saved: {draft.title[:80]}[/green]")

            except Exception as e:
                console.print(f"[red]Failed to process {url}: {e}[/red]")
                result.failed += 1
                result.failures.append(FailedUrl(url=url, error=str(e)))

        self._print_summary(result, time.time() - started)

        try:
            await self.sources.mark_scraped(source_id)
        except Exception as e:
            console.print(f"[yellow]Could not record scrape time for {self.source_name}: {e}[/yellow]")

        return result

    def _print_summary(self, result: ScrapeRunResult, duration: float) -> None:
        table = Table(title=f"{result.source_name} Scrape Summary")
        table.add_column("Metric", style="cyan")
        table.add_column("Count", style="bold")

        table.add_row("Total URLs", str(result.total))
        table.add_row("Successful", f"[green]{result.successful}[/green]")
        table.add_row("Failed", f"[red]{result.failed}[/red]" if result.failed else "0")
        table.add_row("Skipped", str(result.skipped))

        console.print()
        console.print(table)

        if result.failed == 0:
            console.print(Panel(
                f"[green]{result.source_name} scraper completed[/green]\n"
                f"Duration: {duration:.1f} seconds",
                style="green",
            ))
        else:
            lines = "\n".join(f"• {f.url}: {f.error}" for f in result.failures[:10])
            console.print(Panel(
                f"[yellow]{result.source_name} scraper completed with {result.failed} failures[/yellow]\n"
                f"Duration: {duration:.1f} seconds\n\n{lines}",
                style="yellow",
            ))
