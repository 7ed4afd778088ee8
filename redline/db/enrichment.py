"""Storage of AI enrichment results."""

from typing import List, Optional

from psycopg_pool import AsyncConnectionPool

from ..enrichment.models import ClassificationResult, LocationExtraction
from ..models import Classification, ExtractedLocation, confidence_bucket


class EnrichmentStore:
    """Write classifications and location mentions, and flip the processed flag."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self.pool = pool

    async def save_classification(self, article_id: int, result: ClassificationResult) -> int:
        """
        Upsert a classification for (article, model version).

        Returns:
            Classification row id
        """
        async with self.pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    """
                    INSERT INTO classifications (
                        article_id, is_political_violence, confidence, reasoning,
                        key_indicators, violence_type, location_mentioned,
                        political_actors, provider, model_version,
                        processing_time_ms, processed_at
                    ) VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                    ON CONFLICT (article_id, model_version) DO UPDATE SET
                        is_political_violence = EXCLUDED.is_political_violence,
                        confidence = EXCLUDED.confidence,
                        reasoning = EXCLUDED.reasoning,
                        key_indicators = EXCLUDED.key_indicators,
                        violence_type = EXCLUDED.violence_type,
                        location_mentioned = EXCLUDED.location_mentioned,
                        political_actors = EXCLUDED.political_actors,
                        provider = EXCLUDED.provider,
                        processing_time_ms = EXCLUDED.processing_time_ms,
                        processed_at = EXCLUDED.processed_at
                    RETURNING id
                    """,
                    (
                        article_id,
                        result.is_political_violence,
                        result.confidence,
                        result.reasoning,
                        result.key_indicators,
                        result.violence_type,
                        result.location_mentioned,
                        result.political_actors,
                        result.provider,
                        result.model_version,
                        result.processing_time_ms,
                        result.processed_at,
                    ),
                )
                row = await cur.fetchone()
                return row["id"]

    async def save_locations(self, article_id: int, extraction: LocationExtraction) -> List[int]:
        """
        Store every extracted location and mark the article processed.

        Runs in one transaction. The article is marked processed even when
        the extraction found no locations.

        Returns:
            Ids of the inserted article_locations rows
        """
        saved: List[int] = []

        async with self.pool.connection() as conn:
            async with conn.transaction():
                async with conn.cursor() as cur:
                    for location in extraction.locations:
                        point = location.coordinates.to_wkt() if location.coordinates else None
                        await cur.execute(
                            """
                            INSERT INTO article_locations (
                                article_id, extracted_text, normalized_name, location_type,
                                coordinates, confidence, extraction_method, context
                            ) VALUES (
                                %s, %s, %s, %s,
                                ST_GeomFromText(%s, 4326), %s, %s, %s
                            )
                            RETURNING id
                            """,
                            (
                                article_id,
                                location.extracted_text,
                                location.normalized_name,
                                location.location_type,
                                point,
                                confidence_bucket(location.confidence),
                                "ai",
                                location.context,
                            ),
                        )
                        row = await cur.fetchone()
                        saved.append(row["id"])

                    await cur.execute(
                        """
                        UPDATE articles
                        SET is_processed = TRUE,
                            processed_at = CURRENT_TIMESTAMP,
                            updated_at = CURRENT_TIMESTAMP
                        WHERE id = %s
                        """,
                        (article_id,),
                    )

        return saved

    async def get_classification(
        self, article_id: int, model_version: str
    ) -> Optional[Classification]:
        async with self.pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    """
                    SELECT * FROM classifications
                    WHERE article_id = %s AND model_version = %s
                    """,
                    (article_id, model_version),
                )
                row = await cur.fetchone()
                return Classification.model_validate(row) if row else None

    async def list_locations(self, article_id: int) -> List[ExtractedLocation]:
        """Location mentions stored for an article, in insertion order."""
        async with self.pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    """
                    SELECT
                        id, article_id, extracted_text, normalized_name, location_type,
                        ST_Y(coordinates) AS latitude,
                        ST_X(coordinates) AS longitude,
                        confidence, extraction_method, context, created_at
                    FROM article_locations
                    WHERE article_id = %s
                    ORDER BY id
                    """,
                    (article_id,),
                )
                rows = await cur.fetchall()
                return [ExtractedLocation.model_validate(row) for row in rows]
