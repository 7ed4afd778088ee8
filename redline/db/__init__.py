"""Database access for the Redline tracker."""

from .articles import ArticleStore
from .connection import create_pool, open_pool
from .enrichment import EnrichmentStore
from .init import init_database, validate_connection
from .sources import SourceManager

__all__ = [
    "ArticleStore",
    "EnrichmentStore",
    "SourceManager",
    "create_pool",
    "init_database",
    "open_pool",
    "validate_connection",
]
