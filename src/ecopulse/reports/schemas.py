"""Community report Pydantic schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

ReportType = Literal["pollution", "deforestation", "wildlife", "water", "other"]
Severity = Literal["low", "medium", "high", "critical"]
ReportStatus = Literal["pending", "investigating", "verified", "resolved"]


class ReportView(BaseModel):
    """A community report as the dashboard renders it."""

    id: str
    user_id: str
    report_type: str
    description: str
    severity: str
    status: ReportStatus
    status_icon: str
    status_color: str
    lat: float | None = None
    lng: float | None = None
    location: Any = None
    photo_urls: list[str] = []
    verified_by_ai: bool = False
    ai_analysis: str | None = None
    upvotes: int = 0
    created_at: datetime | str | None = None
    updated_at: datetime | str | None = None


class ReportCreateRequest(BaseModel):
    report_type: ReportType = "pollution"
    severity: Severity = "medium"
    description: str = Field(min_length=1, max_length=5000)
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    photo_urls: list[str] = []


class ReportSubmissionResponse(BaseModel):
    report: ReportView
    action_recorded: bool
    impact_score: int
    reports: list[ReportView]


class StatusUpdateRequest(BaseModel):
    status: ReportStatus


class AIVerificationRequest(BaseModel):
    analysis: str = Field(min_length=1)
