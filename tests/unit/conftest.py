"""
In-memory stand-ins for the database and the rendering collaborators.

`FakeDatabase` mirrors the `Database` helper methods the query and action
layers use, records every call, and answers from a per-method queue (or a
custom responder). Setting `error` makes every call raise it.
"""

from __future__ import annotations

from collections import defaultdict, deque
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable, Deque, Dict, List, Optional, Tuple

import pytest

Call = Tuple[str, str, Any]


class FakeDatabase:
    def __init__(self) -> None:
        self.calls: List[Call] = []
        self.queued: Dict[str, Deque[Any]] = defaultdict(deque)
        self.responder: Optional[Callable[[str, str, Any], Any]] = None
        self.error: Optional[BaseException] = None

    def queue(self, method: str, *results: Any) -> None:
        self.queued[method].extend(results)

    def _respond(self, method: str, query: Any, params: Any, default: Any) -> Any:
        self.calls.append((method, str(query), params))
        if self.error is not None:
            raise self.error
        if self.responder is not None:
            return self.responder(method, str(query), params)
        if self.queued[method]:
            return self.queued[method].popleft()
        return default

    async def fetch_all(self, query: Any, params: Any = None) -> List[Dict[str, Any]]:
        return self._respond("fetch_all", query, params, [])

    async def fetch_one(self, query: Any, params: Any = None) -> Optional[Dict[str, Any]]:
        return self._respond("fetch_one", query, params, None)

    async def fetch_value(self, query: Any, params: Any = None) -> Any:
        return self._respond("fetch_value", query, params, None)

    async def execute(self, query: Any, params: Any = None) -> int:
        return self._respond("execute", query, params, 1)


class RecordingCache:
    def __init__(self) -> None:
        self.paths: List[str] = []

    def revalidate_path(self, path: str) -> None:
        self.paths.append(path)


class RecordingNavigator:
    def __init__(self) -> None:
        self.locations: List[str] = []

    def redirect(self, path: str) -> None:
        self.locations.append(path)


class FakeCursor:
    def __init__(self, conn: "FakeConnection") -> None:
        self._conn = conn
        self.rowcount = -1

    async def __aenter__(self) -> "FakeCursor":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        del exc_type, exc, tb
        return False

    async def executemany(self, query: Any, rows: List[Dict[str, Any]]) -> None:
        self._conn.batches.append((query, list(rows)))
        self.rowcount = self._conn.rowcount_for(query, rows)


class FakeConnection:
    """Connection double for the seed loader: records DDL and batched inserts."""

    def __init__(self) -> None:
        self.statements: List[str] = []
        self.batches: List[Tuple[Any, List[Dict[str, Any]]]] = []
        self.existing_keys: set = set()

    async def execute(self, query: Any, params: Any = None) -> None:
        del params
        self.statements.append(str(query))

    def cursor(self) -> FakeCursor:
        return FakeCursor(self)

    def rowcount_for(self, query: Any, rows: List[Dict[str, Any]]) -> int:
        del query
        inserted = 0
        for row in rows:
            key = (tuple(sorted(row)), row.get("id", row.get("month")))
            if key not in self.existing_keys:
                self.existing_keys.add(key)
                inserted += 1
        return inserted


class FakeSeedDatabase:
    def __init__(self) -> None:
        self.conn = FakeConnection()
        self.transactions = 0

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[FakeConnection]:
        self.transactions += 1
        yield self.conn


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def recording_cache() -> RecordingCache:
    return RecordingCache()


@pytest.fixture
def recording_navigator() -> RecordingNavigator:
    return RecordingNavigator()


@pytest.fixture
def fake_seed_db() -> FakeSeedDatabase:
    return FakeSeedDatabase()
