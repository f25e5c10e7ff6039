"""Record store contract consumed by the core.

The core never talks to a database directly: every read and write goes
through ``select`` / ``insert`` / ``update`` on a named collection and rows
travel as plain dicts. Timeouts and retries belong to the implementation.
"""

from __future__ import annotations

from typing import Any, Protocol

Row = dict[str, Any]


class StoreError(Exception):
    """A record-store call failed (network, auth, validation, ...)."""

    def __init__(self, collection: str, operation: str, reason: str) -> None:
        self.collection = collection
        self.operation = operation
        self.reason = reason
        super().__init__(f"{operation} on {collection} failed: {reason}")


class RecordNotFoundError(StoreError):
    """``update`` targeted an id that does not exist."""

    def __init__(self, collection: str, record_id: str) -> None:
        self.record_id = record_id
        super().__init__(collection, "update", f"no record with id {record_id!r}")


class RecordStore(Protocol):
    """Generic async access to the record collections."""

    async def select(
        self,
        collection: str,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        ascending: bool = True,
        limit: int | None = None,
    ) -> list[Row]:
        """Return rows matching every equality filter, optionally ordered and capped."""
        ...

    async def insert(self, collection: str, row: Row) -> Row:
        """Insert a row and return it as stored (with generated fields)."""
        ...

    async def update(self, collection: str, record_id: str, patch: Row) -> Row:
        """Apply ``patch`` to the row with ``record_id`` and return the updated row."""
        ...
