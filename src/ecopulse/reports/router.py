"""Community report endpoints: list, submit, upvote, moderate."""

from fastapi import APIRouter, Depends, status

from ecopulse.auth.dependencies import get_current_user_id, require_moderator
from ecopulse.config import get_settings
from ecopulse.dependencies import get_store
from ecopulse.reports.schemas import (
    AIVerificationRequest,
    ReportCreateRequest,
    ReportSubmissionResponse,
    ReportView,
    StatusUpdateRequest,
)
from ecopulse.reports.service import (
    list_reports,
    record_ai_verification,
    submit_report,
    to_view,
    transition_report,
    upvote_report,
)
from ecopulse.store.base import RecordStore

router = APIRouter(prefix="/api/v1/reports", tags=["Community Reports"])


@router.get("", response_model=list[ReportView])
async def reports(
    _user_id: str = Depends(get_current_user_id),
    store: RecordStore = Depends(get_store),
) -> list[ReportView]:
    """All community reports, newest first."""
    return await list_reports(store)


@router.post("", response_model=ReportSubmissionResponse, status_code=status.HTTP_201_CREATED)
async def create_report(
    body: ReportCreateRequest,
    user_id: str = Depends(get_current_user_id),
    store: RecordStore = Depends(get_store),
) -> ReportSubmissionResponse:
    """Submit a report; credits the submitter with a report_submitted action."""
    result = await submit_report(
        store,
        user_id=user_id,
        report_type=body.report_type,
        severity=body.severity,
        description=body.description,
        lat=body.latitude,
        lng=body.longitude,
        photo_urls=body.photo_urls,
        impact_score=get_settings().report_submission_impact,
    )
    return ReportSubmissionResponse(
        report=to_view(result.report),
        action_recorded=result.fully_recorded,
        impact_score=result.action.get("impact_score", 0) if result.action else 0,
        reports=await list_reports(store),
    )


@router.post("/{report_id}/upvote", response_model=list[ReportView])
async def upvote(
    report_id: str,
    _user_id: str = Depends(get_current_user_id),
    store: RecordStore = Depends(get_store),
) -> list[ReportView]:
    """Add one upvote; returns the refreshed report list."""
    return await upvote_report(store, report_id)


@router.patch("/{report_id}/status", response_model=ReportView)
async def change_status(
    report_id: str,
    body: StatusUpdateRequest,
    _moderator_id: str = Depends(require_moderator),
    store: RecordStore = Depends(get_store),
) -> ReportView:
    """Moderation: move a report along pending -> investigating -> verified | resolved."""
    return await transition_report(store, report_id, body.status)


@router.post("/{report_id}/ai-verification", response_model=ReportView)
async def ai_verification(
    report_id: str,
    body: AIVerificationRequest,
    _moderator_id: str = Depends(require_moderator),
    store: RecordStore = Depends(get_store),
) -> ReportView:
    """Record the external analyzer's verdict on a report."""
    return await record_ai_verification(store, report_id, body.analysis)
