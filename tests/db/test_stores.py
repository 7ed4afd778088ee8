"""Tests for the persistence layer against an in-memory pool."""

import pendulum
import psycopg
import pytest

from redline.config import SourceConfig
from redline.db import ArticleStore, EnrichmentStore, SourceManager
from redline.enrichment.models import ClassificationResult, LocationExtraction
from redline.exceptions import SourceNotFoundError
from redline.models import confidence_bucket
from redline.scraping.models import ArticleDraft


def draft(**overrides) -> ArticleDraft:
    values = dict(
        url="https://www.thedailystar.net/city/clash-3612345",
        title="Clash in Dhaka",
        content="Paragraph one.\n\nParagraph two.",
        author="",
        published_at=pendulum.datetime(2024, 5, 10, tz="UTC"),
        content_hash="abc123",
    )
    values.update(overrides)
    return ArticleDraft(**values)


@pytest.mark.asyncio
class TestArticleStore:
    async def test_exists_true_when_row_found(self, make_pool) -> None:
        pool = make_pool(rows=[{"?column?": 1}])
        assert await ArticleStore(pool).exists("https://x.example/a") is True
        assert pool.cursor.executed[0][1] == ("https://x.example/a",)

    async def test_exists_false_when_missing(self, make_pool) -> None:
        assert await ArticleStore(make_pool()).exists("https://x.example/a") is False

    async def test_exists_false_on_database_error(self, make_pool) -> None:
        pool = make_pool(error=psycopg.OperationalError("connection refused"))
        assert await ArticleStore(pool).exists("https://x.example/a") is False

    async def test_upsert_returns_id(self, make_pool) -> None:
        pool = make_pool(rows=[{"id": 42}])

        article_id = await ArticleStore(pool).upsert(draft(), source_id=7)

        query, params = pool.cursor.executed[0]
        assert article_id == 42
        assert "ON CONFLICT (url) DO UPDATE" in query
        assert "RETURNING id" in query
        assert params[0] == 7
        assert params[1] == "https://www.thedailystar.net/city/clash-3612345"
        assert params[4] is None

    async def test_upsert_errors_propagate(self, make_pool) -> None:
        pool = make_pool(error=psycopg.OperationalError("down"))
        with pytest.raises(psycopg.OperationalError):
            await ArticleStore(pool).upsert(draft(), source_id=7)

    async def test_count(self, make_pool) -> None:
        pool = make_pool(rows=[{"total": 12}])
        assert await ArticleStore(pool).count() == 12
        assert "COUNT(*)" in pool.cursor.executed[0][0]

    async def test_fetch_unprocessed_builds_articles(self, make_pool) -> None:
        pool = make_pool(
            rows=[
                {
                    "id": 1,
                    "source_id": 2,
                    "url": "https://x.example/a",
                    "title": "A",
                    "content": "Body",
                    "source_name": "The Daily Star",
                    "is_processed": False,
                }
            ]
        )

        articles = await ArticleStore(pool).fetch_unprocessed(limit=5, min_content_length=100)

        assert [a.source_name for a in articles] == ["The Daily Star"]
        assert pool.cursor.executed[0][1] == (100, 5)


@pytest.mark.asyncio
class TestSourceManager:
    async def test_get_source_id(self, make_pool) -> None:
        assert await SourceManager(make_pool(rows=[{"id": 3}])).get_source_id("Prothom Alo") == 3

    async def test_unknown_source(self, make_pool) -> None:
        with pytest.raises(SourceNotFoundError) as exc_info:
            await SourceManager(make_pool()).get_source_id("Unknown Times")
        assert str(exc_info.value) == "News source 'Unknown Times' not found in database"

    async def test_sync_sources(self, make_pool) -> None:
        pool = make_pool(rows=[{"id": 1}, {"id": 2}])
        sources = [
            SourceConfig(name="The Daily Star", base_url="https://www.thedailystar.net", adapter="dailystar"),
            SourceConfig(name="Prothom Alo", base_url="https://www.prothomalo.com", adapter="prothomalo", language="bn"),
        ]

        source_map = await SourceManager(pool).sync_sources(sources)

        assert source_map == {"The Daily Star": 1, "Prothom Alo": 2}
        assert all("ON CONFLICT (name)" in query for query, _ in pool.cursor.executed)


def extraction(locations) -> LocationExtraction:
    return LocationExtraction(
        locations=locations,
        model_version="gpt-4o-mini",
        provider="openai",
        processed_at=pendulum.now("UTC"),
    )


@pytest.mark.asyncio
class TestEnrichmentStore:
    async def test_save_locations_buckets_and_points(self, make_pool) -> None:
        pool = make_pool(rows=[{"id": 10}, {"id": 11}, {"id": 12}])
        result = extraction(
            [
                {
                    "extracted_text": "Dhaka",
                    "normalized_name": "Dhaka",
                    "type": "city",
                    "confidence": 0.9,
                    "coordinates": {"lat": 23.81, "lng": 90.41},
                },
                {"extracted_text": "Savar", "confidence": 0.5, "coordinates": {"lat": 23.85, "lng": None}},
                {"extracted_text": "the old bridge", "confidence": None},
            ]
        )

        ids = await EnrichmentStore(pool).save_locations(99, result)

        assert ids == [10, 11, 12]
        inserts = [params for query, params in pool.cursor.executed if "INSERT" in query]
        assert [p[4] for p in inserts] == ["POINT(90.41 23.81)", None, None]
        assert [p[5] for p in inserts] == ["high", "medium", "low"]
        assert inserts[0][3] == "city"
        update_query, update_params = pool.cursor.executed[-1]
        assert "is_processed = TRUE" in update_query
        assert update_params == (99,)
        assert pool.conn.transactions == 1

    async def test_zero_locations_still_marks_processed(self, make_pool) -> None:
        pool = make_pool()

        ids = await EnrichmentStore(pool).save_locations(5, extraction([]))

        assert ids == []
        assert len(pool.cursor.executed) == 1
        assert "UPDATE articles" in pool.cursor.executed[0][0]

    async def test_save_classification(self, make_pool) -> None:
        pool = make_pool(rows=[{"id": 8}])
        result = ClassificationResult(
            is_political_violence=True,
            confidence=0.85,
            reasoning="Clash between party activists",
            key_indicators=["clash", "activists"],
            model_version="gemini-1.5-flash",
            provider="gemini",
            processing_time_ms=120,
            processed_at=pendulum.now("UTC"),
        )

        classification_id = await EnrichmentStore(pool).save_classification(3, result)

        query, params = pool.cursor.executed[0]
        assert classification_id == 8
        assert "ON CONFLICT (article_id, model_version) DO UPDATE" in query
        assert params[:3] == (3, True, 0.85)
        assert params[9] == "gemini-1.5-flash"

    async def test_get_classification(self, make_pool) -> None:
        pool = make_pool(
            rows=[
                {
                    "id": 4,
                    "article_id": 3,
                    "is_political_violence": True,
                    "confidence": 0.6,
                    "model_version": "gpt-4o-mini",
                    "provider": "openai",
                }
            ]
        )

        classification = await EnrichmentStore(pool).get_classification(3, "gpt-4o-mini")

        assert classification.confidence == 0.6
        assert classification.provider == "openai"
        assert pool.cursor.executed[0][1] == (3, "gpt-4o-mini")

    async def test_get_classification_missing(self, make_pool) -> None:
        assert await EnrichmentStore(make_pool()).get_classification(3, "m1") is None


@pytest.mark.parametrize(
    "confidence, bucket",
    [(1.0, "high"), (0.7, "high"), (0.6999, "medium"), (0.4, "medium"), (0.3999, "low"), (0.0, "low"), (None, "low")],
)
def test_confidence_bucket_thresholds(confidence, bucket) -> None:
    assert confidence_bucket(confidence) == bucket
