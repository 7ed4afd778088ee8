"""Article discovery and extraction for news outlets."""

from .adapters import available_adapters, get_adapter
from .base import SourceAdapter
from .fetcher import FetchClient
from .models import ArticleDraft, ArticleSummary, FailedUrl, RawResponse, ScrapeRunResult
from .urls import ArticleUrlHeuristic

__all__ = [
    "ArticleDraft",
    "ArticleSummary",
    "ArticleUrlHeuristic",
    "FailedUrl",
    "FetchClient",
    "RawResponse",
    "ScrapeRunResult",
    "SourceAdapter",
    "available_adapters",
    "get_adapter",
]
