"""Data models for the Redline tracker."""

from .article import Article
from .classification import Classification
from .location import ExtractedLocation, confidence_bucket
from .source import Source

__all__ = ["Article", "Classification", "ExtractedLocation", "Source", "confidence_bucket"]
