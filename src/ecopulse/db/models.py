"""ORM models for the five record-store collections.

Table names are the collection names the core queries through the
record store, so a row dict produced here is what the services consume.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime, timezone
from typing import Any

from sqlalchemy import JSON, Boolean, Date, DateTime, Float, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from ecopulse.db.base import Base

JSONType = JSON().with_variant(JSONB(), "postgresql")


def _uuid() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Environmental data (immutable, ingested externally)
# ---------------------------------------------------------------------------


class EnvironmentalData(Base):
    """Maps to the 'environmental_data' collection."""

    __tablename__ = "environmental_data"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    data_type: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    location: Mapped[Any] = mapped_column(JSONType, nullable=True)
    region_name: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    metrics: Mapped[dict[str, Any]] = mapped_column(JSONType, default=dict)
    severity_level: Mapped[str] = mapped_column(String(16), nullable=False, default="low")
    source: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    confidence_score: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    recorded_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_now, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_now)


# ---------------------------------------------------------------------------
# Community reports
# ---------------------------------------------------------------------------


class CommunityReport(Base):
    """Maps to the 'community_reports' collection."""

    __tablename__ = "community_reports"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    report_type: Mapped[str] = mapped_column(String(32), nullable=False)
    location: Mapped[Any] = mapped_column(JSONType, nullable=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    photo_urls: Mapped[list[str]] = mapped_column(JSONType, default=list)
    severity: Mapped[str] = mapped_column(String(16), nullable=False, default="medium")
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="pending")
    verified_by_ai: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    ai_analysis: Mapped[str | None] = mapped_column(Text, nullable=True)
    upvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_now)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_now, onupdate=_now)


# ---------------------------------------------------------------------------
# Predictions (immutable, produced by external models)
# ---------------------------------------------------------------------------


class Prediction(Base):
    """Maps to the 'predictions' collection."""

    __tablename__ = "predictions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    prediction_type: Mapped[str] = mapped_column(String(64), nullable=False)
    location: Mapped[Any] = mapped_column(JSONType, nullable=True)
    region_name: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    probability: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    predicted_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    impact_level: Mapped[str] = mapped_column(String(16), nullable=False, default="low")
    model_used: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    confidence_score: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    recommendations: Mapped[dict[str, Any]] = mapped_column(JSONType, default=dict)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_now)


# ---------------------------------------------------------------------------
# User action ledger (append-only)
# ---------------------------------------------------------------------------


class UserAction(Base):
    """Maps to the 'user_actions' collection."""

    __tablename__ = "user_actions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    action_type: Mapped[str] = mapped_column(String(64), nullable=False)
    action_details: Mapped[dict[str, Any]] = mapped_column(JSONType, default=dict)
    impact_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    location: Mapped[Any] = mapped_column(JSONType, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_now, index=True)


# ---------------------------------------------------------------------------
# User profiles
# ---------------------------------------------------------------------------


class UserProfile(Base):
    """Maps to the 'user_profiles' collection. ``id`` is the user identity."""

    __tablename__ = "user_profiles"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    full_name: Mapped[str | None] = mapped_column(String(128), nullable=True)
    organization: Mapped[str | None] = mapped_column(String(128), nullable=True)
    role: Mapped[str] = mapped_column(String(32), nullable=False, default="citizen")
    regions_of_interest: Mapped[list[str]] = mapped_column(JSONType, default=list)
    notification_preferences: Mapped[dict[str, Any]] = mapped_column(JSONType, default=dict)
    total_impact_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_now)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_now, onupdate=_now)
