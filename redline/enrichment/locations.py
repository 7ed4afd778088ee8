"""Location mention extraction from articles."""

import time

import pendulum
from pydantic import ValidationError
from rich.console import Console

from ..exceptions import LocationExtractionError
from ..models import Article
from .models import LocationExtraction, LocationMention, LocationSummary
from .parsing import parse_json_object
from .prompts import LOCATION_PROMPT, LOCATION_SYSTEM, truncate
from .providers import AIProvider

console = Console()


class LocationExtractor:
    """Extract Bangladeshi place mentions with approximate coordinates."""

    temperature = 0.2

    def __init__(
        self,
        provider: AIProvider,
        max_tokens: int = 2000,
        max_content_chars: int = 8000,
    ) -> None:
        self.provider = provider
        self.max_tokens = max_tokens
        self.max_content_chars = max_content_chars

    def build_prompt(self, article: Article) -> str:
        return LOCATION_PROMPT.format(
            title=article.title or "",
            content=truncate(article.content or "", self.max_content_chars),
        )

    async def extract(self, article: Article) -> LocationExtraction:
        """
        Extract location mentions from one article.

        Raises:
            LocationExtractionError: When the reply is not JSON or has no
                ``locations`` list.
        """
        started = time.perf_counter()
        reply = await self.provider.complete(
            LOCATION_SYSTEM,
            self.build_prompt(article),
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        elapsed_ms = int((time.perf_counter() - started) * 1000)

        try:
            data = parse_json_object(reply)
        except ValueError:
            console.print(f"[red]Failed to parse AI response for article {article.id}[/red]")
            raise LocationExtractionError("Invalid AI response format")

        raw_locations = data.get("locations")
        if not isinstance(raw_locations, list):
            raise LocationExtractionError("Invalid extraction response structure")

        try:
            locations = [LocationMention.model_validate(item) for item in raw_locations]
            summary = (
                LocationSummary.model_validate(data["summary"])
                if isinstance(data.get("summary"), dict)
                else None
            )
        except ValidationError:
            raise LocationExtractionError("Invalid extraction response structure")

        return LocationExtraction(
            locations=locations,
            summary=summary,
            model_version=self.provider.model,
            provider=self.provider.name,
            processing_time_ms=elapsed_ms,
            processed_at=pendulum.now("UTC"),
        )
