"""Map, analytics, impact, prediction and health endpoint tests."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from conftest import auth_headers

POINT = {"type": "Point", "coordinates": [-62.0, -3.0]}


def _env(record_id, data_type, severity, location=POINT):
    return {
        "id": record_id,
        "data_type": data_type,
        "severity_level": severity,
        "location": location,
        "recorded_at": datetime.now(timezone.utc),
    }


class TestHealth:
    @pytest.mark.asyncio
    async def test_health(self, client):
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "healthy"}

    @pytest.mark.asyncio
    async def test_version(self, client):
        resp = await client.get("/version")
        assert resp.json()["version"] == "0.1.0"

    @pytest.mark.asyncio
    async def test_ready_degraded_without_redis(self, client):
        resp = await client.get("/ready")
        body = resp.json()
        assert body["checks"]["record_store"] == "ok"
        assert body["status"] == "degraded"

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, client):
        resp = await client.get("/health", headers={"X-Request-ID": "abc-123"})
        assert resp.headers["X-Request-ID"] == "abc-123"


class TestMap:
    @pytest.mark.asyncio
    async def test_layer_catalogue(self, client):
        resp = await client.get("/api/v1/map/layers")
        assert resp.json()[0] == {"id": "all", "label": "All Data"}

    @pytest.mark.asyncio
    async def test_markers_filtered(self, client, store):
        store.seed(
            "environmental_data",
            _env("a", "deforestation", "critical"),
            _env("b", "air_quality", "low"),
            _env("c", "deforestation", "low", location="not-json"),
        )
        resp = await client.get(
            "/api/v1/map/markers",
            params={"layers": ["deforestation"]},
            headers=auth_headers("user-1"),
        )
        data = resp.json()
        assert [m["id"] for m in data["markers"]] == ["a"]
        assert data["markers"][0]["color"] == "#ef4444"
        assert data["skipped"] == 1

    @pytest.mark.asyncio
    async def test_markers_explicit_empty_selection(self, client, store):
        store.seed("environmental_data", _env("a", "deforestation", "critical"))
        resp = await client.get(
            "/api/v1/map/markers?layers=",
            headers=auth_headers("user-1"),
        )
        assert resp.json()["markers"] == []


class TestAnalytics:
    @pytest.mark.asyncio
    async def test_summary(self, client, store):
        store.seed(
            "environmental_data",
            _env("a", "deforestation", "critical"),
            _env("b", "air_quality", "low"),
        )
        resp = await client.get("/api/v1/analytics/summary", headers=auth_headers("user-1"))
        data = resp.json()
        assert data["total_records"] == 2
        assert data["critical_alerts"] == 1
        assert len(data["trend"]) == 7
        assert data["trend"][-1]["total_count"] == 2


class TestImpact:
    @pytest.mark.asyncio
    async def test_new_user_gets_profile(self, client, store):
        resp = await client.get("/api/v1/impact/me", headers=auth_headers("fresh-user"))
        data = resp.json()
        assert data["profile"]["id"] == "fresh-user"
        assert data["profile"]["total_impact_score"] == 0
        assert data["profile"]["role"] == "citizen"
        assert not any(a["earned"] for a in data["achievements"])
        assert store.collections["user_profiles"][0]["id"] == "fresh-user"

    @pytest.mark.asyncio
    async def test_score_with_unreadable_ledger(self, client, store):
        store.fail_reads.add("user_actions")
        resp = await client.get("/api/v1/impact/me/score", headers=auth_headers("user-1"))
        assert resp.status_code == 200
        assert resp.json()["total_impact_score"] == 0

    @pytest.mark.asyncio
    async def test_summary_with_profile_store_down(self, client, store):
        store.seed("user_actions", {"user_id": "user-1", "action_type": "report_submitted",
                                    "impact_score": 10, "created_at": "2026-10-18T00:00:00+00:00"})
        store.fail_reads.add("user_profiles")
        store.fail_writes.add("user_profiles")
        resp = await client.get("/api/v1/impact/me", headers=auth_headers("user-1"))
        assert resp.status_code == 200
        assert resp.json()["profile"]["total_impact_score"] == 10

    @pytest.mark.asyncio
    async def test_drifted_cache_with_failed_refresh(self, client, store):
        store.seed("user_profiles", {"id": "user-1", "role": "citizen", "total_impact_score": 7})
        store.seed("user_actions", {"user_id": "user-1", "action_type": "report_submitted",
                                    "impact_score": 10, "created_at": "2026-10-18T00:00:00+00:00"})
        store.fail_writes.add("user_profiles")
        resp = await client.get("/api/v1/impact/me", headers=auth_headers("user-1"))
        assert resp.status_code == 200
        assert resp.json()["profile"]["total_impact_score"] == 10


class TestPredictions:
    @pytest.mark.asyncio
    async def test_list(self, client, store):
        store.seed(
            "predictions",
            {
                "id": "p1",
                "prediction_type": "flood",
                "impact_level": "high",
                "probability": 0.4,
                "created_at": "2026-10-18T00:00:00+00:00",
            },
        )
        resp = await client.get("/api/v1/predictions", headers=auth_headers("user-1"))
        (prediction,) = resp.json()
        assert prediction["icon"] == "cloud"


class TestAssistant:
    @pytest.mark.asyncio
    async def test_chat_relays_reply(self, client, monkeypatch):
        async def fake_ask(message: str, context: str) -> str:
            return f"echo: {message} ({context})"

        monkeypatch.setattr("ecopulse.assistant.router.ask_assistant", fake_ask)
        resp = await client.post(
            "/api/v1/assistant/chat",
            json={"message": "Is the river safe?"},
            headers=auth_headers("user-1"),
        )
        assert resp.status_code == 200
        assert resp.json() == {"response": "echo: Is the river safe? (environmental analysis)"}

    @pytest.mark.asyncio
    async def test_empty_message_rejected(self, client):
        resp = await client.post(
            "/api/v1/assistant/chat", json={"message": ""}, headers=auth_headers("user-1"),
        )
        assert resp.status_code == 422
