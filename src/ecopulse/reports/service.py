"""Community report reads and mutations.

Every mutation is followed by a full re-fetch of the report list so the
caller renders store-confirmed state, including concurrent edits by other
users, never an optimistic local patch.
"""

from __future__ import annotations

import structlog

from ecopulse.geo.geometry import LocationParseError, parse_location
from ecopulse.reports.lifecycle import affordance_for, normalize_status, validate_transition
from ecopulse.reports.schemas import ReportView
from ecopulse.reports.submission import REPORT_SUBMISSION_IMPACT, ReportSubmission, SubmissionResult
from ecopulse.store.base import RecordStore, Row, StoreError
from ecopulse.taxonomy import COMMUNITY_REPORTS

logger = structlog.get_logger()


class ReportNotFoundError(LookupError):
    """No community report with the given id."""

    def __init__(self, report_id: str) -> None:
        self.report_id = report_id
        super().__init__(f"Report {report_id} not found")


def to_view(row: Row) -> ReportView:
    """Render a stored row, normalising status and resolving its affordance."""
    status = normalize_status(row.get("status"))
    affordance = affordance_for(status)
    try:
        lat, lng = parse_location(row.get("location"))
    except LocationParseError:
        lat = lng = None

    return ReportView(
        id=str(row["id"]),
        user_id=str(row.get("user_id") or ""),
        report_type=row.get("report_type") or "other",
        description=row.get("description") or "",
        severity=row.get("severity") or "",
        status=status,
        status_icon=affordance.icon,
        status_color=affordance.color,
        lat=lat,
        lng=lng,
        location=row.get("location"),
        photo_urls=row.get("photo_urls") or [],
        verified_by_ai=bool(row.get("verified_by_ai")),
        ai_analysis=row.get("ai_analysis"),
        upvotes=int(row.get("upvotes") or 0),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


async def list_reports(store: RecordStore) -> list[ReportView]:
    """All reports, newest first. A failed read yields an empty list."""
    try:
        rows = await store.select(COMMUNITY_REPORTS, order_by="created_at", ascending=False)
    except StoreError:
        logger.warning("report_list_fetch_failed", exc_info=True)
        return []
    return [to_view(row) for row in rows]


async def get_report(store: RecordStore, report_id: str) -> Row:
    """Fetch one report row. Raises ReportNotFoundError."""
    rows = await store.select(COMMUNITY_REPORTS, filters={"id": report_id}, limit=1)
    if not rows:
        raise ReportNotFoundError(report_id)
    return rows[0]


async def upvote_report(store: RecordStore, report_id: str) -> list[ReportView]:
    """Add one upvote and return the re-fetched report list.

    Read-then-write with no lock: two callers reading the same count both
    write count + 1 and one upvote is lost (last write wins).
    """
    row = await get_report(store, report_id)
    current = max(int(row.get("upvotes") or 0), 0)
    await store.update(COMMUNITY_REPORTS, report_id, {"upvotes": current + 1})
    logger.info("report_upvoted", report_id=report_id, upvotes=current + 1)
    return await list_reports(store)


async def submit_report(
    store: RecordStore,
    user_id: str,
    report_type: str,
    severity: str,
    description: str,
    lat: float,
    lng: float,
    photo_urls: list[str] | None = None,
    impact_score: int | None = None,
) -> SubmissionResult:
    """Validate and execute a ReportSubmission."""
    submission = ReportSubmission(
        user_id=user_id,
        report_type=report_type,
        severity=severity,
        description=description,
        lat=lat,
        lng=lng,
        photo_urls=photo_urls or [],
        impact_score=REPORT_SUBMISSION_IMPACT if impact_score is None else impact_score,
    )
    return await submission.execute(store)


async def transition_report(store: RecordStore, report_id: str, target_status: str) -> ReportView:
    """Apply a moderation status change allowed by the state machine."""
    row = await get_report(store, report_id)
    validate_transition(row.get("status"), target_status)
    updated = await store.update(COMMUNITY_REPORTS, report_id, {"status": target_status})
    logger.info(
        "report_status_changed",
        report_id=report_id,
        old_status=normalize_status(row.get("status")),
        new_status=target_status,
    )
    return to_view(updated)


async def record_ai_verification(store: RecordStore, report_id: str, analysis: str) -> ReportView:
    """Flag a report as verified by the external analyzer and keep its analysis text."""
    await get_report(store, report_id)
    updated = await store.update(
        COMMUNITY_REPORTS,
        report_id,
        {"verified_by_ai": True, "ai_analysis": analysis},
    )
    return to_view(updated)
