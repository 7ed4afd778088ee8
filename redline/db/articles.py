"""Article storage and deduplication."""

from typing import List, Optional

from psycopg import Error as DatabaseError
from psycopg_pool import AsyncConnectionPool
from rich.console import Console

from ..models import Article
from ..scraping.models import ArticleDraft

console = Console()


class ArticleStore:
    """Persist scraped articles keyed by URL."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        """Initialize article store."""
        self.pool = pool

    async def exists(self, url: str) -> bool:
        """
        Check whether an article with this URL is already stored.

        A database error is reported and treated as "not stored", so the
        caller re-scrapes and the upsert keeps the table consistent.
        """
        try:
            async with self.pool.connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute("SELECT 1 FROM articles WHERE url = %s LIMIT 1", (url,))
                    return await cur.fetchone() is not None
        except DatabaseError as e:
            console.print(f"[yellow]Error checking article existence for {url}: {e}[/yellow]")
            return False

    async def upsert(self, draft: ArticleDraft, source_id: int) -> int:
        """
        Insert an article or refresh the stored copy of the same URL.

        Returns:
            The article id, whether it was inserted or updated
        """
        async with self.pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    """
                    INSERT INTO articles (
                        source_id, url, title, content, author,
                        published_at, language, content_hash, scraped_at
                    ) VALUES (%s, %s, %s, %s, %s, %s, %s, %s, CURRENT_TIMESTAMP)
                    ON CONFLICT (url) DO UPDATE SET
                        title = EXCLUDED.title,
                        content = EXCLUDED.content,
                        author = EXCLUDED.author,
                        published_at = EXCLUDED.published_at,
                        content_hash = EXCLUDED.content_hash,
                        updated_at = CURRENT_TIMESTAMP
                    RETURNING id
                    """,
                    (
                        source_id,
                        draft.url,
                        draft.title,
                        draft.content,
                        draft.author or None,
                        draft.published_at,
                        draft.language,
                        draft.content_hash,
                    ),
                )
                row = await cur.fetchone()
                return row["id"]

    async def get_by_url(self, url: str) -> Optional[Article]:
        async with self.pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute("SELECT * FROM articles WHERE url = %s", (url,))
                row = await cur.fetchone()
                return Article.model_validate(row) if row else None

    async def count(self) -> int:
        async with self.pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute("SELECT COUNT(*) AS total FROM articles")
                row = await cur.fetchone()
                return row["total"] if row else 0

    async def fetch_unprocessed(
        self,
        limit: int = 50,
        min_content_length: int = 100,
    ) -> List[Article]:
        """Articles still waiting for location extraction, newest first."""
        async with self.pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    """
                    SELECT a.*, s.name AS source_name
                    FROM articles a
                    JOIN sources s ON a.source_id = s.id
                    WHERE a.is_processed = FALSE
                      AND LENGTH(a.content) >= %s
                    ORDER BY a.published_at DESC NULLS LAST, a.id DESC
                    LIMIT %s
                    """,
                    (min_content_length, limit),
                )
                rows = await cur.fetchall()
                return [Article.model_validate(row) for row in rows]

    async def fetch_unclassified(self, model_version: str, limit: int = 50) -> List[Article]:
        """Articles without a classification from ``model_version``."""
        async with self.pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    """
                    SELECT a.*, s.name AS source_name
                    FROM articles a
                    JOIN sources s ON a.source_id = s.id
                    WHERE NOT EXISTS (
                        SELECT 1 FROM classifications c
                        WHERE c.article_id = a.id AND c.model_version = %s
                    )
                    ORDER BY a.published_at DESC NULLS LAST, a.id DESC
                    LIMIT %s
                    """,
                    (model_version, limit),
                )
                rows = await cur.fetchall()
                return [Article.model_validate(row) for row in rows]
