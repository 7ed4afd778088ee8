"""Shared fixtures: in-memory stand-ins for the psycopg pool."""

from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional, Tuple

import pytest


class FakeCursor:
    """Records executed statements and serves queued rows."""

    def __init__(self, rows: Optional[List[Dict[str, Any]]] = None) -> None:
        self.rows = list(rows or [])
        self.executed: List[Tuple[str, Any]] = []

    async def __aenter__(self) -> "FakeCursor":
        return self

    async def __aexit__(self, *exc_info: Any) -> bool:
        return False

    async def execute(self, query: str, params: Any = None) -> None:
        self.executed.append((query, params))

    async def fetchone(self) -> Optional[Dict[str, Any]]:
        return self.rows.pop(0) if self.rows else None

    async def fetchall(self) -> List[Dict[str, Any]]:
        rows, self.rows = self.rows, []
        return rows


class FakeConnection:
    def __init__(self, cursor: FakeCursor) -> None:
        self._cursor = cursor
        self.transactions = 0
        self.commits = 0

    def cursor(self) -> FakeCursor:
        return self._cursor

    @asynccontextmanager
    async def transaction(self):
        self.transactions += 1
        yield

    async def commit(self) -> None:
        self.commits += 1


class FakePool:
    """Mimics ``AsyncConnectionPool.connection()``; optionally fails on checkout."""

    def __init__(self, cursor: Optional[FakeCursor] = None, error: Optional[Exception] = None) -> None:
        self.cursor = cursor or FakeCursor()
        self.conn = FakeConnection(self.cursor)
        self.error = error

    @asynccontextmanager
    async def connection(self):
        if self.error is not None:
            raise self.error
        yield self.conn


@pytest.fixture
def make_pool():
    def factory(rows: Optional[List[Dict[str, Any]]] = None, error: Optional[Exception] = None) -> FakePool:
        return FakePool(FakeCursor(rows), error=error)

    return factory
