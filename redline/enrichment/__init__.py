"""AI enrichment: classification and location extraction."""

from .batch import BatchRunner
from .classifier import ViolenceClassifier
from .locations import LocationExtractor
from .models import (
    BatchItemError,
    BatchProgress,
    BatchReport,
    ClassificationPayload,
    ClassificationResult,
    Coordinates,
    LocationExtraction,
    LocationMention,
    LocationSummary,
)
from .providers import (
    AIProvider,
    GeminiProvider,
    MockProvider,
    OpenAIProvider,
    UnconfiguredProvider,
    build_providers,
)
from .selector import ProviderSelector
from .service import EnrichmentService

__all__ = [
    "AIProvider",
    "BatchItemError",
    "BatchProgress",
    "BatchReport",
    "BatchRunner",
    "ClassificationPayload",
    "ClassificationResult",
    "Coordinates",
    "EnrichmentService",
    "GeminiProvider",
    "LocationExtraction",
    "LocationExtractor",
    "LocationMention",
    "LocationSummary",
    "MockProvider",
    "OpenAIProvider",
    "ProviderSelector",
    "UnconfiguredProvider",
    "ViolenceClassifier",
    "build_providers",
]
