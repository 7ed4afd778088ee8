"""Stored political-violence classification."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .base import DBModel


class Classification(DBModel):
    """One classification per (article, model_version)."""

    article_id: int = Field(..., description="Foreign key to articles table")
    is_political_violence: bool = Field(..., description="Violence flag")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Model confidence")
    reasoning: Optional[str] = Field(None, description="Model explanation")
    key_indicators: Optional[List[str]] = Field(None, description="Indicator phrases")
    violence_type: Optional[str] = Field(None, description="Kind of violence")
    location_mentioned: Optional[str] = Field(None, description="Primary location")
    political_actors: Optional[List[str]] = Field(None, description="Parties or figures mentioned")
    provider: Optional[str] = Field(None, description="Provider that produced the row")
    model_version: str = Field(..., description="Provider model that produced the row")
    processing_time_ms: Optional[int] = Field(None, description="Provider call duration")
    processed_at: Optional[datetime] = Field(None, description="When the classification was made")
