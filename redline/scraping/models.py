"""Data models for scraping."""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class RawResponse(BaseModel):
    """A fetched HTTP response."""

    url: str = Field(..., description="Final URL after redirects")
    status_code: int = Field(..., description="HTTP status code")
    text: str = Field(..., description="Decoded response body")
    headers: Dict[str, str] = Field(default_factory=dict, description="Response headers")


class ArticleDraft(BaseModel):
    """Article scraped from one URL, before persistence."""

    url: str = Field(..., description="Article URL")
    title: str = Field("", description="Article title")
    content: str = Field("", description="Paragraphs joined with blank lines")
    author: str = Field("", description="Byline, empty when not found")
    published_at: datetime = Field(..., description="Publication time, fetch time if unparseable")
    language: str = Field("en", description="Article language code")
    content_hash: Optional[str] = Field(None, description="Hash of normalized content")


class ArticleSummary(BaseModel):
    """Summary record of a persisted article."""

    id: int = Field(..., description="Article database ID")
    title: str = Field(..., description="Article title")
    url: str = Field(..., description="Article URL")
    content_length: int = Field(0, description="Characters of content stored")


class FailedUrl(BaseModel):
    """A URL that could not be scraped or persisted."""

    url: str = Field(..., description="Article URL")
    error: str = Field(..., description="Why the URL failed")


class ScrapeRunResult(BaseModel):
    """Aggregate outcome of one scrape run."""

    source_name: str = Field(..., description="Source that was scraped")
    total: int = Field(0, description="URLs discovered")
    successful: int = Field(0, description="Articles persisted")
    failed: int = Field(0, description="URLs that failed scraping, validation or persistence")
    skipped: int = Field(0, description="URLs already stored")
    articles: List[ArticleSummary] = Field(default_factory=list, description="Persisted articles")
    failures: List[FailedUrl] = Field(default_factory=list, description="Per-URL failures")
