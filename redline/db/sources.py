"""Source management in database."""

from typing import Dict, List

from psycopg_pool import AsyncConnectionPool

from ..config import SourceConfig
from ..exceptions import SourceNotFoundError
from ..models import Source


class SourceManager:
    """Manage sources in database."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self.pool = pool

    async def get_source_id(self, name: str) -> int:
        """
        Look up a source by name.

        Raises:
            SourceNotFoundError: When no source row has this name.
        """
        async with self.pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute("SELECT id FROM sources WHERE name = %s", (name,))
                row = await cur.fetchone()
        if row is None:
            raise SourceNotFoundError(name)
        return row["id"]

    async def sync_sources(self, sources: List[SourceConfig]) -> Dict[str, int]:
        """
        Sync sources from config to database.

        Returns:
            Mapping of source name to database ID
        """
        source_map = {}

        async with self.pool.connection() as conn:
            async with conn.cursor() as cur:
                for source in sources:
                    await cur.execute(
                        """
                        INSERT INTO sources (name, base_url, language, scraper_config, is_active)
                        VALUES (%s, %s, %s, jsonb_build_object('adapter', %s::text), %s)
                        ON CONFLICT (name) DO UPDATE SET
                            base_url = EXCLUDED.base_url,
                            language = EXCLUDED.language,
                            scraper_config = EXCLUDED.scraper_config,
                            is_active = EXCLUDED.is_active,
                            updated_at = CURRENT_TIMESTAMP
                        RETURNING id
                        """,
                        (
                            source.name,
                            source.base_url,
                            source.language,
                            source.adapter,
                            source.enabled,
                        ),
                    )
                    row = await cur.fetchone()
                    source_map[source.name] = row["id"]

        return source_map

    async def list_sources(self) -> List[Source]:
        """Get all sources from database."""
        async with self.pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute("SELECT * FROM sources ORDER BY name")
                rows = await cur.fetchall()
                return [Source.model_validate(row) for row in rows]

    async def mark_scraped(self, source_id: int) -> None:
        """Record that a scrape run of this source finished."""
        async with self.pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    """
                    UPDATE sources
                    SET last_scraped_at = CURRENT_TIMESTAMP
                    WHERE id = %s
                    """,
                    (source_id,),
                )
