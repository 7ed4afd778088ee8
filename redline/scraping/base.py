"""Base class for per-outlet source adapters."""

import asyncio
from abc import ABC, abstractmethod
from typing import Callable, List, Sequence

from bs4 import BeautifulSoup
from rich.console import Console

from ..exceptions import FetchError
from .extractor import (
    FieldChain,
    attribute,
    compute_content_hash,
    extract_field,
    extract_published_at,
    first_text,
    joined_paragraphs,
    longer_than,
    main_text,
    min_paragraphs,
    non_empty,
    parse_document,
)
from .fetcher import FetchClient
from .models import ArticleDraft
from .urls import ArticleUrlHeuristic, absolutize, same_site

console = Console()

DEFAULT_TITLE_SELECTORS = ["h1", ".headline", ".title"]
DEFAULT_CONTENT_SELECTORS = [
    ".story-content p",
    ".article-content p",
    ".news-content p",
    "article p",
    ".content p",
]
DEFAULT_AUTHOR_SELECTORS = [".author", ".byline", ".writer", '[class*="author"]']
DEFAULT_DATE_SELECTORS = [
    ".publish-date",
    ".date",
    ".published",
    "[datetime]",
    "time",
    'meta[property="article:published_time"]',
]


class SourceAdapter(ABC):
    """
    Outlet-specific URL discovery and article extraction.

    Subclasses describe an outlet declaratively: where its listing pages
    are, which URLs are articles, and which selectors hold each field.
    """

    key: str = ""
    name: str = ""
    base_url: str = ""
    language: str = "en"
    listing_paths: Sequence[str] = ("",)
    fallback_selectors: Sequence[str] = ("a[href]",)
    title_selectors: Sequence[str] = DEFAULT_TITLE_SELECTORS
    title_suffixes: Sequence[str] = ()
    content_selectors: Sequence[str] = DEFAULT_CONTENT_SELECTORS
    author_selectors: Sequence[str] = DEFAULT_AUTHOR_SELECTORS
    date_selectors: Sequence[str] = DEFAULT_DATE_SELECTORS
    min_content_length: int = 0

    def __init__(self, fetcher: FetchClient, listing_delay: float = 1.0) -> None:
        """
        Initialize adapter.

        Args:
            fetcher: HTTP client used for listing and article pages
            listing_delay: Seconds to pause between listing page requests
        """
        self.fetcher = fetcher
        self.listing_delay = listing_delay

    @property
    @abstractmethod
    def url_heuristic(self) -> ArticleUrlHeuristic:
        """Article-URL heuristic for this outlet."""

    def listing_urls(self) -> List[str]:
        return [f"{self.base_url.rstrip('/')}{path}" for path in self.listing_paths]

    def title_chain(self) -> FieldChain:
        chain = [
            (first_text(selector, self.title_suffixes), longer_than(10))
            for selector in self.title_selectors
        ]
        chain.append((attribute('meta[property="og:title"]', "content"), longer_than(10)))
        chain.append((first_text("title", self.title_suffixes), non_empty))
        return chain

    def content_chain(self) -> FieldChain:
        chain = [
            (joined_paragraphs(selector), min_paragraphs(3, 200))
            for selector in self.content_selectors
        ]
        chain.append((main_text(), min_paragraphs(1, 200)))
        chain.append((joined_paragraphs("p"), min_paragraphs(3, 200)))
        return chain

    def author_chain(self) -> FieldChain:
        chain = [(first_text(selector), non_empty) for selector in self.author_selectors]
        chain.append((attribute('meta[name="author"]', "content"), non_empty))
        return chain

    def _harvest(
        self,
        document: BeautifulSoup,
        page_url: str,
        selectors: Sequence[str],
        accept: Callable[[str], bool],
    ) -> List[str]:
        found = []
        for selector in selectors:
            for anchor in document.select(selector):
                href = anchor.get("href")
                url = absolutize(href if isinstance(href, str) else None, page_url)
                if url and same_site(url, self.base_url) and accept(url):
                    found.append(url)
        return found

    async def discover_urls(self, limit: int) -> List[str]:
        """
        Collect up to ``limit`` article URLs from the outlet's listing pages.

        A listing page that cannot be fetched is skipped. When the listing
        pages yield nothing, the homepage is scanned broadly instead.
        """
        urls: List[str] = []
        heuristic = self.url_heuristic
        listing_urls = self.listing_urls()

        for index, listing_url in enumerate(listing_urls):
            console.print(f"[dim]Fetching articles from {listing_url}...[/dim]")
            try:
                response = await self.fetcher.fetch(listing_url)
            except FetchError as e:
                console.print(f"[yellow]Error fetching from {listing_url}: {e}[/yellow]")
                continue

            document = parse_document(response.text)
            for url in self._harvest(document, response.url, ["a[href]"], heuristic.is_article_url):
                if url not in urls:
                    urls.append(url)

            if len(urls) >= limit:
                break

            if index < len(listing_urls) - 1 and self.listing_delay > 0:
                await asyncio.sleep(self.listing_delay)

        if not urls:
            urls = await self._scan_homepage(limit)

        urls = urls[:limit]
        console.print(f"Found {len(urls)} potential article URLs for {self.name}")
        return urls

    async def _scan_homepage(self, limit: int) -> List[str]:
        console.print(f"[dim]Trying {self.base_url} for any article links...[/dim]")
        response = await self.fetcher.fetch(self.base_url)
        document = parse_document(response.text)
        heuristic = self.url_heuristic

        urls: List[str] = []
        candidates = self._harvest(
            document,
            response.url,
            self.fallback_selectors,
            lambda url: not heuristic.is_excluded(url),
        )
        for url in candidates:
            if url not in urls:
                urls.append(url)
            if len(urls) >= limit:
                break
        return urls

    async def scrape_article(self, url: str) -> ArticleDraft:
        """
        Fetch one article and extract its fields.

        Missing fields come back as empty strings; only a failed fetch raises.

        Raises:
            FetchError: When the article page could not be fetched.
        """
        console.print(f"[dim]Scraping article: {url}[/dim]")
        response = await self.fetcher.fetch(url)
        document = parse_document(response.text)

        content = extract_field(document, self.content_chain())

        return ArticleDraft(
            url=url,
            title=extract_field(document, self.title_chain()),
            content=content,
            author=extract_field(document, self.author_chain()),
            published_at=extract_published_at(document, self.date_selectors),
            language=self.language,
            content_hash=compute_content_hash(content) if content else None,
        )
