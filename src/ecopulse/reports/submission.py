"""Report submission as an explicit two-phase command.

Phase one inserts the community report; phase two appends the submitter's
``report_submitted`` ledger entry. The two writes are not atomic: the
action is only attempted after the report insert succeeded, and if it
fails the report stays in place with no compensating delete. The outcome
of phase two is reported on the result instead of being raised.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import structlog

from ecopulse.geo.geometry import LocationParseError, point, validate_coordinates
from ecopulse.store.base import RecordStore, Row, StoreError
from ecopulse.taxonomy import (
    ACTION_REPORT_SUBMITTED,
    COMMUNITY_REPORTS,
    DEFAULT_STATUS,
    REPORT_TYPES,
    SEVERITIES,
    USER_ACTIONS,
)

logger = structlog.get_logger()

REPORT_SUBMISSION_IMPACT = 10


class InvalidReportError(ValueError):
    """Submitted report fields fall outside the allowed vocabularies or ranges."""


@dataclass
class SubmissionResult:
    """What ended up in the store after a submission."""

    report: Row
    action: Row | None = None
    action_error: str | None = None

    @property
    def fully_recorded(self) -> bool:
        return self.action is not None


@dataclass
class ReportSubmission:
    """A user's new community report, validated on construction."""

    user_id: str
    report_type: str
    severity: str
    description: str
    lat: float
    lng: float
    photo_urls: list[str] = field(default_factory=list)
    impact_score: int = REPORT_SUBMISSION_IMPACT

    def __post_init__(self) -> None:
        if not self.user_id:
            raise InvalidReportError("user_id is required")
        if self.report_type not in REPORT_TYPES:
            raise InvalidReportError(f"unknown report type: {self.report_type!r}")
        if self.severity not in SEVERITIES:
            raise InvalidReportError(f"unknown severity: {self.severity!r}")
        self.description = self.description.strip()
        if not self.description:
            raise InvalidReportError("description must not be empty")
        try:
            self.lat, self.lng = validate_coordinates(self.lat, self.lng)
        except LocationParseError as exc:
            raise InvalidReportError(str(exc)) from exc
        if self.impact_score < 0:
            raise InvalidReportError("impact score must be non-negative")

    @property
    def location(self) -> dict[str, Any]:
        return point(self.lat, self.lng)

    def report_row(self) -> Row:
        return {
            "user_id": self.user_id,
            "report_type": self.report_type,
            "location": self.location,
            "description": self.description,
            "photo_urls": list(self.photo_urls),
            "severity": self.severity,
            "status": DEFAULT_STATUS,
            "verified_by_ai": False,
            "upvotes": 0,
        }

    def action_row(self) -> Row:
        return {
            "user_id": self.user_id,
            "action_type": ACTION_REPORT_SUBMITTED,
            "action_details": {"report_type": self.report_type},
            "impact_score": self.impact_score,
            "location": self.location,
        }

    async def execute(self, store: RecordStore) -> SubmissionResult:
        """Insert the report, then append the ledger entry.

        A failed report insert raises StoreError and nothing is written.
        A failed action append is logged and returned on the result.
        """
        report = await store.insert(COMMUNITY_REPORTS, self.report_row())
        logger.info(
            "report_submitted",
            report_id=report.get("id"),
            user_id=self.user_id,
            report_type=self.report_type,
        )

        try:
            action = await store.insert(USER_ACTIONS, self.action_row())
        except StoreError as exc:
            logger.warning(
                "report_action_append_failed",
                report_id=report.get("id"),
                user_id=self.user_id,
                error=str(exc),
            )
            return SubmissionResult(report=report, action_error=str(exc))

        return SubmissionResult(report=report, action=action)
