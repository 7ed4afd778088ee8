"""Source model for news outlets."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from .base import DBModel


class Source(DBModel):
    """News outlet source model."""

    name: str = Field(..., description="Source name")
    base_url: str = Field(..., description="Outlet homepage")
    language: str = Field("en", description="Article language code")
    is_active: bool = Field(True, description="Whether the source is scraped")
    last_scraped_at: Optional[datetime] = Field(None, description="When the last scrape run finished")
