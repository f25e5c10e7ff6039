"""Shared test fixtures."""

from __future__ import annotations

import uuid
from collections import defaultdict
from collections.abc import AsyncGenerator
from datetime import datetime, timezone
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from ecopulse.auth.jwt import create_access_token
from ecopulse.config import get_settings
from ecopulse.dependencies import get_store
from ecopulse.main import create_app
from ecopulse.store.base import RecordNotFoundError, StoreError

MODERATOR_ID = "moderator-0001"


class FakeRecordStore:
    """In-memory RecordStore with switchable read/write failures."""

    def __init__(self) -> None:
        self.collections: dict[str, list[dict[str, Any]]] = defaultdict(list)
        self.fail_reads: set[str] = set()
        self.fail_writes: set[str] = set()
        self.writes: list[tuple[str, str]] = []

    def seed(self, collection: str, *rows: dict[str, Any]) -> list[dict[str, Any]]:
        stored = []
        for row in rows:
            record = dict(row)
            record.setdefault("id", str(uuid.uuid4()))
            self.collections[collection].append(record)
            stored.append(dict(record))
        return stored

    async def select(
        self,
        collection: str,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        ascending: bool = True,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        if collection in self.fail_reads:
            raise StoreError(collection, "select", "simulated outage")
        rows = [
            dict(row)
            for row in self.collections[collection]
            if all(row.get(key) == value for key, value in (filters or {}).items())
        ]
        if order_by:
            rows.sort(key=lambda row: row[order_by], reverse=not ascending)
        if limit is not None:
            rows = rows[:limit]
        return rows

    async def insert(self, collection: str, row: dict[str, Any]) -> dict[str, Any]:
        if collection in self.fail_writes:
            raise StoreError(collection, "insert", "simulated outage")
        record = dict(row)
        record.setdefault("id", str(uuid.uuid4()))
        record.setdefault("created_at", datetime.now(timezone.utc))
        self.collections[collection].append(record)
        self.writes.append(("insert", collection))
        return dict(record)

    async def update(self, collection: str, record_id: str, patch: dict[str, Any]) -> dict[str, Any]:
        if collection in self.fail_writes:
            raise StoreError(collection, "update", "simulated outage")
        for record in self.collections[collection]:
            if record["id"] == record_id:
                record.update(patch)
                self.writes.append(("update", collection))
                return dict(record)
        raise RecordNotFoundError(collection, record_id)


@pytest.fixture
def store() -> FakeRecordStore:
    return FakeRecordStore()


@pytest.fixture
def settings_env(monkeypatch):
    """Configure a moderator and fresh cached settings for the test."""
    monkeypatch.setenv("ECO_MODERATOR_USER_IDS", f'["{MODERATOR_ID}"]')
    monkeypatch.setenv("ECO_LOG_FORMAT", "console")
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


def auth_headers(user_id: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


@pytest_asyncio.fixture
async def client(store: FakeRecordStore, settings_env) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client against the app with the record store swapped for the fake."""
    app = create_app()
    app.dependency_overrides[get_store] = lambda: store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
