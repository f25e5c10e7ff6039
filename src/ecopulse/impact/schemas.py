"""Pydantic response models for impact endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel


class ProfileResponse(BaseModel):
    id: str
    full_name: str | None = None
    organization: str | None = None
    role: str
    regions_of_interest: list[str] = []
    notification_preferences: dict[str, Any] = {}
    total_impact_score: int


class ActionResponse(BaseModel):
    id: str
    action_type: str
    action_details: dict[str, Any] = {}
    impact_score: int
    icon: str
    created_at: datetime | str | None = None


class AchievementResponse(BaseModel):
    id: int
    slug: str
    name: str
    description: str
    icon: str
    earned: bool


class ScoreResponse(BaseModel):
    user_id: str
    total_impact_score: int


class ImpactSummaryResponse(BaseModel):
    profile: ProfileResponse
    action_count: int
    ledger_available: bool = True
    recent_actions: list[ActionResponse]
    achievements: list[AchievementResponse]
