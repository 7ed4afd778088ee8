"""Registered per-outlet adapters."""

from typing import Dict, List, Type

from ..base import SourceAdapter
from ..fetcher import FetchClient
from .amardesh import AmarDeshAdapter
from .dailystar import DailyStarAdapter
from .prothomalo import ProthomAloAdapter

ADAPTERS: Dict[str, Type[SourceAdapter]] = {
    adapter.key: adapter
    for adapter in (DailyStarAdapter, ProthomAloAdapter, AmarDeshAdapter)
}


def available_adapters() -> List[str]:
    """Registered adapter keys."""
    return sorted(ADAPTERS)


def get_adapter(key: str, fetcher: FetchClient, listing_delay: float = 1.0) -> SourceAdapter:
    """Instantiate the adapter registered under ``key``."""
    try:
        adapter_cls = ADAPTERS[key]
    except KeyError:
        raise ValueError(
            f"Unknown scraper adapter '{key}'. Available: {', '.join(available_adapters())}"
        )
    return adapter_cls(fetcher, listing_delay=listing_delay)


__all__ = [
    "ADAPTERS",
    "AmarDeshAdapter",
    "DailyStarAdapter",
    "ProthomAloAdapter",
    "available_adapters",
    "get_adapter",
]
