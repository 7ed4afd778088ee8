"""Pipeline orchestration."""

from .orchestrator import ScrapeOrchestrator

__all__ = ["ScrapeOrchestrator"]
