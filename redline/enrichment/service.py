"""Enrichment runs over stored articles."""

from typing import TYPE_CHECKING, Optional

from rich.console import Console

from ..config.models import AIConfig
from ..models import Article
from .batch import BatchRunner, ProgressCallback
from .classifier import ViolenceClassifier
from .locations import LocationExtractor
from .models import BatchReport, ClassificationResult, LocationExtraction
from .selector import ProviderSelector

if TYPE_CHECKING:
    from ..db.articles import ArticleStore
    from ..db.enrichment import EnrichmentStore

console = Console()


class EnrichmentService:
    """Classify pending articles and extract their locations."""

    def __init__(
        self,
        selector: ProviderSelector,
        articles: "ArticleStore",
        store: "EnrichmentStore",
        ai_config: Optional[AIConfig] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> None:
        self.selector = selector
        self.articles = articles
        self.store = store
        self.ai_config = ai_config or AIConfig()
        self.on_progress = on_progress

    async def classify_pending(self, limit: int = 50) -> BatchReport:
        """
        Classify articles that have no classification from the active model.

        Raises:
            NoProviderConfiguredError: Before any work, when no provider is usable.
        """
        provider = self.selector.select()
        console.print(f"[cyan]Using AI provider: {provider.name} ({provider.model})[/cyan]")

        classifier = ViolenceClassifier(
            provider,
            max_tokens=self.ai_config.classification_max_tokens,
            max_content_chars=self.ai_config.max_content_chars,
        )
        pending = await self.articles.fetch_unclassified(provider.model, limit)
        console.print(f"Found {len(pending)} articles to classify")

        async def classify_and_save(article: Article) -> ClassificationResult:
            result = await classifier.classify(article)
            await self.store.save_classification(article.id, result)
            label = "VIOLENCE" if result.is_political_violence else "NON-VIOLENCE"
            console.print(
                f"[green]Classified article {article.id}: {label} ({result.confidence:.0%})[/green]"
            )
            return result

        runner = BatchRunner(
            batch_size=self.ai_config.classification_batch_size,
            delay=self.ai_config.classification_delay_ms / 1000,
            concurrent=True,
            on_progress=self.on_progress,
        )
        return await runner.run(pending, classify_and_save)

    async def extract_pending_locations(self, limit: int = 50) -> BatchReport:
        """
        Extract locations for articles not yet processed, one at a time.

        Raises:
            NoProviderConfiguredError: Before any work, when no provider is usable.
        """
        provider = self.selector.select()
        console.print(f"[cyan]Using AI provider: {provider.name} ({provider.model})[/cyan]")

        extractor = LocationExtractor(
            provider,
            max_tokens=self.ai_config.location_max_tokens,
            max_content_chars=self.ai_config.max_content_chars,
        )
        pending = await self.articles.fetch_unprocessed(
            limit, self.ai_config.min_content_length
        )
        console.print(f"Found {len(pending)} articles to process")

        async def extract_and_save(article: Article) -> LocationExtraction:
            extraction = await extractor.extract(article)
            await self.store.save_locations(article.id, extraction)
            console.print(
                f"[green]Extracted {len(extraction.locations)} locations from article {article.id}[/green]"
            )
            return extraction

        runner = BatchRunner(
            batch_size=self.ai_config.location_batch_size,
            delay=self.ai_config.location_delay_ms / 1000,
            concurrent=False,
            on_progress=self.on_progress,
        )
        return await runner.run(pending, extract_and_save)
