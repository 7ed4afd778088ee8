"""Data models for AI enrichment."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator


def _require_number(value: Any) -> Any:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("must be a number")
    return value


class ClassificationPayload(BaseModel):
    """Classification fields as returned by the model."""

    model_config = ConfigDict(extra="ignore")

    is_political_violence: StrictBool = Field(..., description="Violence flag")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Model confidence")
    reasoning: str = Field("", description="Explanation of the decision")
    key_indicators: List[str] = Field(default_factory=list, description="Indicator phrases")
    violence_type: Optional[str] = Field(None, description="Kind of violence, when applicable")
    location_mentioned: Optional[str] = Field(None, description="Primary location in the article")
    political_actors: List[str] = Field(default_factory=list, description="Parties or figures mentioned")

    @field_validator("confidence", mode="before")
    @classmethod
    def confidence_is_number(cls, value: Any) -> Any:
        return _require_number(value)

    @field_validator("reasoning", mode="before")
    @classmethod
    def reasoning_or_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("key_indicators", "political_actors", mode="before")
    @classmethod
    def list_or_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class ClassificationResult(ClassificationPayload):
    """A validated classification plus provenance."""

    model_version: str = Field(..., description="Model that produced the classification")
    provider: str = Field(..., description="Provider name")
    processing_time_ms: int = Field(0, description="Provider call duration")
    processed_at: datetime = Field(..., description="When the classification was made")


class Coordinates(BaseModel):
    """Approximate point for a location mention."""

    lat: Optional[float] = Field(None, description="Latitude")
    lng: Optional[float] = Field(None, description="Longitude")
    confidence: Optional[float] = Field(None, description="Confidence in the coordinates")

    def to_wkt(self) -> Optional[str]:
        """Well-known-text point, or None unless both axes are present."""
        if self.lat is None or self.lng is None:
            return None
        return f"POINT({self.lng} {self.lat})"


class LocationMention(BaseModel):
    """One location mention returned by the model."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    extracted_text: str = Field(..., description="Exact text from the article")
    normalized_name: Optional[str] = Field(None, description="Standardized place name")
    location_type: Optional[str] = Field(None, alias="type", description="division, district, city, ...")
    confidence: Optional[float] = Field(None, description="Model confidence, 0-1")
    context: str = Field("", description="Surrounding text")
    coordinates: Optional[Coordinates] = Field(None, description="Approximate coordinates")
    administrative_hierarchy: Dict[str, Optional[str]] = Field(
        default_factory=dict, description="Division, district and upazila names"
    )

    @field_validator("context", mode="before")
    @classmethod
    def context_or_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("administrative_hierarchy", mode="before")
    @classmethod
    def hierarchy_or_empty(cls, value: Any) -> Any:
        return {} if value is None else value


class LocationSummary(BaseModel):
    """Article-level geography summary."""

    total_locations: Optional[int] = Field(None, description="Number of mentions")
    primary_location: Optional[str] = Field(None, description="Most relevant location")
    geographic_scope: Optional[str] = Field(None, description="local, regional, national, international")


class LocationExtraction(BaseModel):
    """Validated location extraction for one article."""

    locations: List[LocationMention] = Field(default_factory=list, description="Location mentions")
    summary: Optional[LocationSummary] = Field(None, description="Geography summary")
    model_version: str = Field(..., description="Model that produced the extraction")
    provider: str = Field(..., description="Provider name")
    processing_time_ms: int = Field(0, description="Provider call duration")
    processed_at: datetime = Field(..., description="When the extraction was made")


class BatchProgress(BaseModel):
    """Progress snapshot reported after each batch group."""

    processed: int = Field(..., description="Items attempted so far")
    total: int = Field(..., description="Items in the run")
    successful: int = Field(0, description="Items that succeeded so far")
    failed: int = Field(0, description="Items that failed so far")


class BatchItemError(BaseModel):
    """A single item failure."""

    item_id: Any = Field(..., description="Item key")
    error: str = Field(..., description="Error message")


class BatchReport(BaseModel):
    """Outcome of a batch run."""

    total: int = Field(0, description="Items in the run")
    successful: int = Field(0, description="Items that succeeded")
    failed: int = Field(0, description="Items that failed")
    results: List[Any] = Field(default_factory=list, description="Worker results, in input order")
    errors: List[BatchItemError] = Field(default_factory=list, description="Per-item failures")
