"""Record store backed by async SQLAlchemy."""

from __future__ import annotations

from typing import Any

import structlog
from sqlalchemy import inspect, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ecopulse.db.base import Base
from ecopulse.db.models import CommunityReport, EnvironmentalData, Prediction, UserAction, UserProfile
from ecopulse.store.base import RecordNotFoundError, Row, StoreError
from ecopulse.taxonomy import (
    COMMUNITY_REPORTS,
    ENVIRONMENTAL_DATA,
    PREDICTIONS,
    USER_ACTIONS,
    USER_PROFILES,
)

logger = structlog.get_logger()

COLLECTION_MODELS: dict[str, type[Base]] = {
    ENVIRONMENTAL_DATA: EnvironmentalData,
    COMMUNITY_REPORTS: CommunityReport,
    PREDICTIONS: Prediction,
    USER_ACTIONS: UserAction,
    USER_PROFILES: UserProfile,
}


def _to_row(obj: Base) -> Row:
    """Flatten an ORM instance into a plain dict of its column attributes."""
    return {attr.key: getattr(obj, attr.key) for attr in inspect(obj).mapper.column_attrs}


class SqlRecordStore:
    """``RecordStore`` over one ``AsyncSession``.

    Every write commits on its own: two writes are never grouped into a
    transaction, which keeps the store's semantics identical to a plain
    REST-style record service.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _model(self, collection: str, operation: str) -> type[Base]:
        model = COLLECTION_MODELS.get(collection)
        if model is None:
            raise StoreError(collection, operation, "unknown collection")
        return model

    def _column(self, model: type[Base], collection: str, operation: str, name: str) -> Any:  # noqa: ANN401
        if name not in inspect(model).columns:
            raise StoreError(collection, operation, f"unknown column {name!r}")
        return getattr(model, name)

    async def select(
        self,
        collection: str,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        ascending: bool = True,
        limit: int | None = None,
    ) -> list[Row]:
        """Run a filtered, ordered, limited SELECT."""
        model = self._model(collection, "select")
        query = select(model)
        for name, value in (filters or {}).items():
            query = query.where(self._column(model, collection, "select", name) == value)
        if order_by:
            column = self._column(model, collection, "select", order_by)
            query = query.order_by(column.asc() if ascending else column.desc())
        if limit is not None:
            query = query.limit(limit)

        try:
            result = await self.session.execute(query)
        except SQLAlchemyError as exc:
            await self.session.rollback()
            raise StoreError(collection, "select", str(exc)) from exc
        return [_to_row(obj) for obj in result.scalars().all()]

    async def insert(self, collection: str, row: Row) -> Row:
        """INSERT one row and commit."""
        model = self._model(collection, "insert")
        try:
            obj = model(**row)
        except TypeError as exc:
            raise StoreError(collection, "insert", str(exc)) from exc

        self.session.add(obj)
        try:
            await self.session.commit()
            await self.session.refresh(obj)
        except SQLAlchemyError as exc:
            await self.session.rollback()
            raise StoreError(collection, "insert", str(exc)) from exc

        logger.debug("store_insert", collection=collection, record_id=obj.id)
        return _to_row(obj)

    async def update(self, collection: str, record_id: str, patch: Row) -> Row:
        """Patch one row by primary key and commit."""
        model = self._model(collection, "update")
        for name in patch:
            self._column(model, collection, "update", name)

        try:
            obj = await self.session.get(model, record_id)
            if obj is None:
                raise RecordNotFoundError(collection, record_id)
            for name, value in patch.items():
                setattr(obj, name, value)
            await self.session.commit()
            await self.session.refresh(obj)
        except SQLAlchemyError as exc:
            await self.session.rollback()
            raise StoreError(collection, "update", str(exc)) from exc

        return _to_row(obj)
