"""Political-violence classification of articles."""

import time

import pendulum
from pydantic import ValidationError
from rich.console import Console

from ..exceptions import ClassificationError
from ..models import Article
from .models import ClassificationPayload, ClassificationResult
from .parsing import parse_json_object
from .prompts import CLASSIFICATION_PROMPT, CLASSIFICATION_SYSTEM, truncate
from .providers import AIProvider

console = Console()


class ViolenceClassifier:
    """Classify whether an article reports political violence."""

    temperature = 0.1

    def __init__(
        self,
        provider: AIProvider,
        max_tokens: int = 500,
        max_content_chars: int = 8000,
    ) -> None:
        self.provider = provider
        self.max_tokens = max_tokens
        self.max_content_chars = max_content_chars

    def build_prompt(self, article: Article) -> str:
        return CLASSIFICATION_PROMPT.format(
            title=article.title or "",
            content=truncate(article.content or "", self.max_content_chars),
            source=article.source_name or "",
            date=article.published_at.isoformat() if article.published_at else "",
        )

    async def classify(self, article: Article) -> ClassificationResult:
        """
        Classify one article.

        Raises:
            ClassificationError: When the reply is not JSON or has the wrong shape.
        """
        started = time.perf_counter()
        reply = await self.provider.complete(
            CLASSIFICATION_SYSTEM,
            self.build_prompt(article),
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        elapsed_ms = int((time.perf_counter() - started) * 1000)

        try:
            data = parse_json_object(reply)
        except ValueError:
            console.print(f"[red]Failed to parse AI response for article {article.id}[/red]")
            raise ClassificationError("Invalid AI response format")

        try:
            payload = ClassificationPayload.model_validate(data)
        except ValidationError:
            raise ClassificationError("Invalid classification response structure")

        return ClassificationResult(
            **payload.model_dump(),
            model_version=self.provider.model,
            provider=self.provider.name,
            processing_time_ms=elapsed_ms,
            processed_at=pendulum.now("UTC"),
        )
