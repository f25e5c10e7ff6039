"""ReportSubmission command tests: validation and best-effort chaining."""

from __future__ import annotations

import pytest

from ecopulse.reports.submission import InvalidReportError, ReportSubmission
from ecopulse.store.base import StoreError


def _submission(**overrides) -> ReportSubmission:
    fields = {
        "user_id": "user-1",
        "report_type": "pollution",
        "severity": "high",
        "description": "Oil slick near the pier",
        "lat": 40.7128,
        "lng": -74.006,
    }
    fields.update(overrides)
    return ReportSubmission(**fields)


class TestValidation:
    @pytest.mark.parametrize(
        "overrides",
        [
            {"user_id": ""},
            {"report_type": "noise"},
            {"severity": "extreme"},
            {"description": "   "},
            {"lat": 91.0},
            {"lng": -181.0},
            {"lat": "north"},
            {"impact_score": -1},
        ],
    )
    def test_rejects_bad_fields(self, overrides):
        with pytest.raises(InvalidReportError):
            _submission(**overrides)

    def test_description_is_trimmed(self):
        assert _submission(description="  smoke  ").description == "smoke"

    def test_location_is_geojson_lng_lat(self):
        assert _submission().location == {"type": "Point", "coordinates": [-74.006, 40.7128]}


class TestExecute:
    @pytest.mark.asyncio
    async def test_writes_pending_report_and_action(self, store):
        result = await _submission().execute(store)

        report = result.report
        assert report["status"] == "pending"
        assert report["upvotes"] == 0
        assert report["verified_by_ai"] is False
        assert report["user_id"] == "user-1"

        assert result.fully_recorded
        action = result.action
        assert action["user_id"] == "user-1"
        assert action["action_type"] == "report_submitted"
        assert action["impact_score"] == 10
        assert action["action_details"] == {"report_type": "pollution"}

        assert store.writes == [("insert", "community_reports"), ("insert", "user_actions")]

    @pytest.mark.asyncio
    async def test_action_failure_keeps_report(self, store):
        store.fail_writes.add("user_actions")

        result = await _submission().execute(store)

        assert result.fully_recorded is False
        assert result.action is None
        assert "user_actions" in result.action_error
        assert len(store.collections["community_reports"]) == 1
        assert store.collections["user_actions"] == []

    @pytest.mark.asyncio
    async def test_report_failure_raises_and_skips_action(self, store):
        store.fail_writes.add("community_reports")

        with pytest.raises(StoreError):
            await _submission().execute(store)

        assert store.collections["user_actions"] == []
