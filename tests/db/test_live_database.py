"""Round trips against a real PostgreSQL + PostGIS database.

Set REDLINE_TEST_DATABASE_URL to run these; they are skipped otherwise.
"""

import os
import uuid

import pendulum
import psycopg
import pytest

from redline.config import PostgresConfig, SourceConfig
from redline.db import ArticleStore, EnrichmentStore, SourceManager, init_database, open_pool
from redline.enrichment.models import ClassificationResult, LocationExtraction
from redline.scraping.models import ArticleDraft

DATABASE_URL = os.environ.get("REDLINE_TEST_DATABASE_URL")

pytestmark = [
    pytest.mark.asyncio,
    pytest.mark.skipif(not DATABASE_URL, reason="REDLINE_TEST_DATABASE_URL not set"),
]


def make_draft(url: str, title: str) -> ArticleDraft:
    return ArticleDraft(
        url=url,
        title=title,
        content="Activists clashed with police.\n\nSeveral people were injured.",
        published_at=pendulum.now("UTC"),
        content_hash=uuid.uuid4().hex,
    )


async def setup_source(pool) -> int:
    await init_database(pool)
    source_map = await SourceManager(pool).sync_sources(
        [SourceConfig(name="Test Outlet", base_url="https://test.example", adapter="dailystar")]
    )
    return source_map["Test Outlet"]


async def test_reupsert_keeps_one_row_with_latest_title() -> None:
    url = f"https://test.example/news/{uuid.uuid4().hex}"
    async with open_pool(PostgresConfig(url=DATABASE_URL)) as pool:
        source_id = await setup_source(pool)
        store = ArticleStore(pool)

        first = await store.upsert(make_draft(url, "First title"), source_id)
        assert await store.exists(url) is True
        second = await store.upsert(make_draft(url, "Second title"), source_id)

        assert first == second
        stored = await store.get_by_url(url)
        assert stored.title == "Second title"


async def test_zero_locations_marks_article_processed() -> None:
    url = f"https://test.example/news/{uuid.uuid4().hex}"
    async with open_pool(PostgresConfig(url=DATABASE_URL)) as pool:
        source_id = await setup_source(pool)
        article_id = await ArticleStore(pool).upsert(make_draft(url, "Quiet day"), source_id)

        saved = await EnrichmentStore(pool).save_locations(
            article_id,
            LocationExtraction(
                locations=[], model_version="mock", provider="mock", processed_at=pendulum.now("UTC")
            ),
        )

        assert saved == []
        stored = await ArticleStore(pool).get_by_url(url)
        assert stored.is_processed is True
        assert stored.processed_at is not None


async def test_locations_round_trip_coordinates() -> None:
    url = f"https://test.example/news/{uuid.uuid4().hex}"
    async with open_pool(PostgresConfig(url=DATABASE_URL)) as pool:
        source_id = await setup_source(pool)
        article_id = await ArticleStore(pool).upsert(make_draft(url, "Clash in Dhaka"), source_id)
        store = EnrichmentStore(pool)

        await store.save_locations(
            article_id,
            LocationExtraction(
                locations=[
                    {"extracted_text": "Dhaka", "confidence": 0.95, "coordinates": {"lat": 23.8, "lng": 90.4}},
                    {"extracted_text": "somewhere", "confidence": 0.1},
                ],
                model_version="mock",
                provider="mock",
                processed_at=pendulum.now("UTC"),
            ),
        )

        locations = await store.list_locations(article_id)
        assert [(l.confidence, l.latitude, l.longitude) for l in locations] == [
            ("high", pytest.approx(23.8), pytest.approx(90.4)),
            ("low", None, None),
        ]


async def test_confidence_check_constraint() -> None:
    url = f"https://test.example/news/{uuid.uuid4().hex}"
    async with open_pool(PostgresConfig(url=DATABASE_URL)) as pool:
        source_id = await setup_source(pool)
        article_id = await ArticleStore(pool).upsert(make_draft(url, "Out of range"), source_id)
        invalid = ClassificationResult.model_construct(
            is_political_violence=True,
            confidence=1.5,
            reasoning="",
            key_indicators=[],
            violence_type=None,
            location_mentioned=None,
            political_actors=[],
            model_version="mock",
            provider="mock",
            processing_time_ms=0,
            processed_at=pendulum.now("UTC"),
        )

        with pytest.raises(psycopg.errors.CheckViolation):
            await EnrichmentStore(pool).save_classification(article_id, invalid)


def classification(model_version: str, confidence: float) -> ClassificationResult:
    return ClassificationResult(
        is_political_violence=True,
        confidence=confidence,
        reasoning="Party activists clashed",
        key_indicators=["clashed"],
        model_version=model_version,
        provider="mock",
        processing_time_ms=5,
        processed_at=pendulum.now("UTC"),
    )


async def test_one_classification_per_model_version() -> None:
    url = f"https://test.example/news/{uuid.uuid4().hex}"
    async with open_pool(PostgresConfig(url=DATABASE_URL)) as pool:
        source_id = await setup_source(pool)
        articles = ArticleStore(pool)
        article_id = await articles.upsert(make_draft(url, "Clash in Bogura"), source_id)
        store = EnrichmentStore(pool)

        first = await store.save_classification(article_id, classification("m1", 0.4))
        second = await store.save_classification(article_id, classification("m1", 0.9))
        other = await store.save_classification(article_id, classification("m2", 0.2))

        assert first == second
        assert other != first
        assert (await store.get_classification(article_id, "m1")).confidence == pytest.approx(0.9)
        assert (await store.get_classification(article_id, "m2")).confidence == pytest.approx(0.2)

        async with pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    "SELECT COUNT(*) AS total FROM classifications WHERE article_id = %s",
                    (article_id,),
                )
                assert (await cur.fetchone())["total"] == 2


async def test_reupsert_does_not_add_articles() -> None:
    url = f"https://test.example/news/{uuid.uuid4().hex}"
    async with open_pool(PostgresConfig(url=DATABASE_URL)) as pool:
        source_id = await setup_source(pool)
        store = ArticleStore(pool)

        await store.upsert(make_draft(url, "First title"), source_id)
        before = await store.count()
        await store.upsert(make_draft(url, "Second title"), source_id)

        assert await store.count() == before
