"""Database connection management."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool

from ..config.models import PostgresConfig


def create_pool(db_config: PostgresConfig) -> AsyncConnectionPool:
    """Create an unopened connection pool."""
    return AsyncConnectionPool(
        db_config.connection_string,
        min_size=db_config.min_pool_size,
        max_size=db_config.max_pool_size,
        kwargs={"row_factory": dict_row},
        open=False,
    )


@asynccontextmanager
async def open_pool(db_config: PostgresConfig) -> AsyncIterator[AsyncConnectionPool]:
    """Open a connection pool for the duration of the block."""
    pool = create_pool(db_config)
    await pool.open()
    try:
        yield pool
    finally:
        await pool.close()
