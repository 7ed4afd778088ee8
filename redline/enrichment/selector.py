"""Priority-ordered AI provider selection."""

from typing import Any, Dict, List, Optional, Sequence

from ..exceptions import NoProviderConfiguredError
from .providers import AIProvider


class ProviderSelector:
    """Pick the first configured provider from a fixed priority list."""

    def __init__(self, providers: Sequence[AIProvider]) -> None:
        self.providers: List[AIProvider] = list(providers)

    def active(self) -> Optional[AIProvider]:
        for provider in self.providers:
            if provider.is_configured:
                return provider
        return None

    def select(self) -> AIProvider:
        """
        Return the highest-priority configured provider.

        Raises:
            NoProviderConfiguredError: When no provider has usable credentials.
        """
        provider = self.active()
        if provider is None:
            names = " or ".join(f"{p.name.upper()}_API_KEY" for p in self.providers)
            raise NoProviderConfiguredError(
                f"No AI provider configured. Please set {names}" if names else None
            )
        return provider

    def status(self) -> Dict[str, Any]:
        """Configured state and model of every provider, plus the active one."""
        active = self.active()
        report: Dict[str, Any] = {
            provider.name: {"configured": provider.is_configured, "model": provider.model}
            for provider in self.providers
        }
        report["active_provider"] = active.name if active else "none"
        report["any_configured"] = active is not None
        return report
