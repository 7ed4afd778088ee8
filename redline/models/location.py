"""Stored location mentions extracted from articles."""

from typing import Optional

from pydantic import Field

from .base import DBModel

HIGH_CONFIDENCE = 0.7
MEDIUM_CONFIDENCE = 0.4


def confidence_bucket(score: Optional[float]) -> str:
    """Map a 0-1 confidence score to high/medium/low."""
    if score is None:
        return "low"
    if score >= HIGH_CONFIDENCE:
        return "high"
    if score >= MEDIUM_CONFIDENCE:
        return "medium"
    return "low"


class ExtractedLocation(DBModel):
    """A single location mention; immutable once written."""

    article_id: int = Field(..., description="Foreign key to articles table")
    extracted_text: str = Field(..., description="Exact span from the article")
    normalized_name: Optional[str] = Field(None, description="Standardized place name")
    location_type: Optional[str] = Field(None, description="division, district, city, ...")
    latitude: Optional[float] = Field(None, description="Point latitude")
    longitude: Optional[float] = Field(None, description="Point longitude")
    confidence: str = Field("low", description="Confidence bucket (high, medium, low)")
    extraction_method: str = Field("ai", description="How the mention was found")
    context: str = Field("", description="Surrounding text")
