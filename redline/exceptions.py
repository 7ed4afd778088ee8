"""Error types raised across the scraping and enrichment pipeline."""

from typing import Optional


class RedlineError(Exception):
    """Base class for all pipeline errors."""


class FetchError(RedlineError):
    """Raised when a URL could not be fetched after all retries."""

    def __init__(self, url: str, last_error: Optional[BaseException] = None) -> None:
        self.url = url
        self.last_error = last_error
        detail = f": {last_error}" if last_error else ""
        super().__init__(f"Failed to fetch {url}{detail}")


class SourceNotFoundError(RedlineError):
    """Raised when a configured source has no row in the sources table."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"News source '{name}' not found in database")


class NoProviderConfiguredError(RedlineError):
    """Raised when no AI provider has usable credentials."""

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(
            message
            or "No AI provider configured. Please set GEMINI_API_KEY or OPENAI_API_KEY"
        )


class EnrichmentError(RedlineError):
    """Base class for AI response parsing and validation failures."""


class ClassificationError(EnrichmentError):
    """Raised when a classification response is malformed or out of range."""


class LocationExtractionError(EnrichmentError):
    """Raised when a location extraction response is malformed."""
