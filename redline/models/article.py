"""Article model for stored scraped articles."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from .base import DBModel


class Article(DBModel):
    """Article model."""

    source_id: int = Field(..., description="Foreign key to sources table")
    url: str = Field(..., description="Article URL (unique)")
    title: str = Field(..., description="Article title")
    content: str = Field(..., description="Plain text, paragraphs separated by blank lines")
    author: Optional[str] = Field(None, description="Byline")
    published_at: Optional[datetime] = Field(None, description="Publication timestamp")
    scraped_at: Optional[datetime] = Field(None, description="When the article was first scraped")
    language: Optional[str] = Field(None, description="Article language code")
    content_hash: Optional[str] = Field(None, description="Hash of normalized article text")
    is_processed: bool = Field(False, description="Whether AI location enrichment has run")
    processed_at: Optional[datetime] = Field(None, description="When AI enrichment completed")
    source_name: Optional[str] = Field(None, description="Joined source name, when selected")
