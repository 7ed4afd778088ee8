"""Tests for the scrape orchestrator with in-memory collaborators."""

from typing import Dict, List, Optional, Set

import pendulum
import pytest

from redline.exceptions import FetchError, SourceNotFoundError
from redline.pipeline import ScrapeOrchestrator
from redline.scraping.models import ArticleDraft

GOOD_CONTENT = "Police fired tear gas as rival activists clashed outside the party office. " * 3


class FakeAdapter:
    name = "The Daily Star"
    min_content_length = 100

    def __init__(self, urls: List[str], drafts: Dict[str, object], discover_error: Optional[Exception] = None) -> None:
        self.urls = urls
        self.drafts = drafts
        self.discover_error = discover_error
        self.discover_calls = 0
        self.scraped: List[str] = []

    async def discover_urls(self, limit: int) -> List[str]:
        self.discover_calls += 1
        if self.discover_error:
            raise self.discover_error
        return self.urls[:limit]

    async def scrape_article(self, url: str) -> ArticleDraft:
        self.scraped.append(url)
        outcome = self.drafts[url]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class FakeArticleStore:
    def __init__(self, existing: Set[str] = frozenset(), failing: Set[str] = frozenset()) -> None:
        self.existing = set(existing)
        self.failing = set(failing)
        self.saved: List[ArticleDraft] = []

    async def exists(self, url: str) -> bool:
        return url in self.existing

    async def upsert(self, draft: ArticleDraft, source_id: int) -> int:
        if draft.url in self.failing:
            raise RuntimeError("insert failed")
        self.saved.append(draft)
        return 100 + len(self.saved)


class FakeSourceManager:
    def __init__(self, ids: Dict[str, int], mark_error: Optional[Exception] = None) -> None:
        self.ids = ids
        self.mark_error = mark_error
        self.marked: List[int] = []

    async def get_source_id(self, name: str) -> int:
        if name not in self.ids:
            raise SourceNotFoundError(name)
        return self.ids[name]

    async def mark_scraped(self, source_id: int) -> None:
        if self.mark_error:
            raise self.mark_error
        self.marked.append(source_id)


def make_draft(url: str, title: str = "Clash outside party office", content: str = GOOD_CONTENT) -> ArticleDraft:
    return ArticleDraft(url=url, title=title, content=content, published_at=pendulum.now("UTC"))


@pytest.mark.asyncio
class TestScrapeOrchestrator:
    async def test_unknown_source_aborts_before_fetching(self) -> None:
        adapter = FakeAdapter(["https://x.example/a"], {})
        orchestrator = ScrapeOrchestrator(adapter, FakeArticleStore(), FakeSourceManager({}), delay=0)

        with pytest.raises(SourceNotFoundError):
            await orchestrator.run(10)

        assert adapter.discover_calls == 0
        assert adapter.scraped == []

    async def test_discovery_failure_is_fatal(self) -> None:
        adapter = FakeAdapter([], {}, discover_error=FetchError("https://x.example/"))
        orchestrator = ScrapeOrchestrator(
            adapter, FakeArticleStore(), FakeSourceManager({"The Daily Star": 1}), delay=0
        )

        with pytest.raises(FetchError):
            await orchestrator.run(10)

    async def test_per_url_outcomes(self) -> None:
        urls = [
            "https://x.example/existing",
            "https://x.example/good",
            "https://x.example/short",
            "https://x.example/untitled",
            "https://x.example/unreachable",
            "https://x.example/db-error",
        ]
        adapter = FakeAdapter(
            urls,
            {
                "https://x.example/good": make_draft("https://x.example/good"),
                "https://x.example/short": make_draft("https://x.example/short", content="Too short."),
                "https://x.example/untitled": make_draft("https://x.example/untitled", title=""),
                "https://x.example/unreachable": FetchError("https://x.example/unreachable"),
                "https://x.example/db-error": make_draft("https://x.example/db-error"),
            },
        )
        articles = FakeArticleStore(
            existing={"https://x.example/existing"}, failing={"https://x.example/db-error"}
        )
        sources = FakeSourceManager({"The Daily Star": 1})

        result = await ScrapeOrchestrator(adapter, articles, sources, delay=0).run(10)

        assert (result.total, result.successful, result.failed, result.skipped) == (6, 1, 4, 1)
        assert [a.url for a in result.articles] == ["https://x.example/good"]
        assert result.articles[0].id == 101
        assert {f.url for f in result.failures} == {
            "https://x.example/short",
            "https://x.example/untitled",
            "https://x.example/unreachable",
            "https://x.example/db-error",
        }
        assert "https://x.example/existing" not in adapter.scraped
        assert adapter.scraped == urls[1:]
        assert sources.marked == [1]

    async def test_min_content_length_override(self) -> None:
        url = "https://x.example/brief"
        adapter = FakeAdapter([url], {url: make_draft(url, content="A brief but valid report.")})

        result = await ScrapeOrchestrator(
            adapter,
            FakeArticleStore(),
            FakeSourceManager({"The Daily Star": 1}),
            delay=0,
            min_content_length=10,
        ).run(5)

        assert result.successful == 1

    async def test_bookkeeping_failure_is_not_raised(self) -> None:
        url = "https://x.example/good"
        adapter = FakeAdapter([url], {url: make_draft(url)})
        sources = FakeSourceManager({"The Daily Star": 1}, mark_error=RuntimeError("db down"))

        result = await ScrapeOrchestrator(adapter, FakeArticleStore(), sources, delay=0).run(5)

        assert result.successful == 1

    async def test_source_name_override(self) -> None:
        adapter = FakeAdapter([], {})
        sources = FakeSourceManager({"Daily Star (EN)": 4})

        result = await ScrapeOrchestrator(
            adapter, FakeArticleStore(), sources, delay=0, source_name="Daily Star (EN)"
        ).run(5)

        assert result.source_name == "Daily Star (EN)"
        assert result.total == 0
        assert sources.marked == [4]
