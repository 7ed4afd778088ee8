"""HTTP fetch client with retry and backoff."""

import asyncio
from typing import Dict, Optional

import httpx
from rich.console import Console

from ..config.models import DEFAULT_USER_AGENT, ScrapingConfig
from ..exceptions import FetchError
from .models import RawResponse

console = Console()


def browser_headers(user_agent: str = DEFAULT_USER_AGENT) -> Dict[str, str]:
    """Header set sent with every request."""
    return {
        "User-Agent": user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.5",
        "Accept-Encoding": "gzip, deflate",
        "Connection": "keep-alive",
        "Upgrade-Insecure-Requests": "1",
    }


class FetchClient:
    """Fetch HTML pages with browser-like headers."""

    def __init__(
        self,
        timeout: float = 10.0,
        max_retries: int = 3,
        backoff: float = 1.0,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        """
        Initialize fetch client.

        Args:
            timeout: Per-request timeout in seconds
            max_retries: Total attempts per URL
            backoff: Seconds to wait after attempt n, multiplied by n
            user_agent: User-Agent header value
        """
        self.timeout = timeout
        self.max_retries = max_retries
        self.backoff = backoff
        self.headers = browser_headers(user_agent)

    @classmethod
    def from_config(cls, config: ScrapingConfig) -> "FetchClient":
        """Build a client from scraping settings."""
        return cls(
            timeout=config.request_timeout_ms / 1000,
            max_retries=config.max_retries,
            backoff=config.retry_backoff_ms / 1000,
            user_agent=config.user_agent,
        )

    async def _get(self, url: str) -> RawResponse:
        async with httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            headers=self.headers,
        ) as client:
            response = await client.get(url)
            response.raise_for_status()
            return RawResponse(
                url=str(response.url),
                status_code=response.status_code,
                text=response.text,
                headers=dict(response.headers),
            )

    async def fetch(self, url: str, max_retries: Optional[int] = None) -> RawResponse:
        """
        GET a URL, retrying with linearly increasing backoff.

        Raises:
            FetchError: When every attempt failed; carries the last error.
        """
        attempts = max_retries if max_retries is not None else self.max_retries
        attempts = max(1, attempts)
        last_error: Optional[Exception] = None

        for attempt in range(1, attempts + 1):
            try:
                return await self._get(url)
            except httpx.HTTPError as e:
                last_error = e
                console.print(
                    f"[yellow]Request failed (attempt {attempt}/{attempts}): {url} - {e}[/yellow]"
                )
                if attempt < attempts:
                    await asyncio.sleep(self.backoff * attempt)

        raise FetchError(url, last_error)
