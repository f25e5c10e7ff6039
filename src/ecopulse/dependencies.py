"""Shared FastAPI dependencies."""

from collections.abc import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ecopulse.database import get_session
from ecopulse.store.base import RecordStore
from ecopulse.store.sql import SqlRecordStore


async def get_store(
    session: AsyncSession = Depends(get_session),
) -> AsyncGenerator[RecordStore, None]:
    """Yield a record store bound to the request's database session."""
    yield SqlRecordStore(session)
