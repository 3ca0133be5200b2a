"""API endpoint tests for the sensor routes."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest
from httpx import AsyncClient

from app.schemas.sensors import CodebaseAgeResult
from app.services.sensors.common import now_ms

DEMO = {"X-Demo-Mode": "true"}
DAY_MS = 24 * 60 * 60 * 1000


async def _ingest(api_client: AsyncClient, events: list[dict]) -> None:
    with patch("app.api.v1.internal.settings.internal_api_secret", "s3cret"):
        resp = await api_client.post(
            "/api/v1/internal/ingest",
            json={
                "repo": {"id": 42, "name": "web", "fullName": "acme/web", "private": False},
                "events": events,
            },
            headers={"X-Internal-Secret": "s3cret"},
        )
    assert resp.status_code == 200


def _touch(pr_id: int, path: str, ts: int) -> dict:
    return {"type": "file_change", "prId": pr_id, "payload": {"file": path}, "timestamp": ts}


# ═══════════════════════════════════════════════════════════════════════════
# Event-based sensors
# ═══════════════════════════════════════════════════════════════════════════


class TestEventSensors:
    @pytest.mark.asyncio
    async def test_unknown_repository_returns_zeros(self, api_client: AsyncClient):
        resp = await api_client.get(
            "/api/v1/sensors/time-sink", params={"github_repo_id": 999, "timeframe_days": 7}
        )

        assert resp.status_code == 200
        assert resp.json() == {
            "score": 0,
            "previousScore": 0,
            "totalTouches": 0,
            "reworkTouches": 0,
            "churnFiles": [],
        }

    @pytest.mark.asyncio
    async def test_time_sink_from_ingested_events(self, api_client: AsyncClient):
        now = now_ms()
        await _ingest(
            api_client,
            [_touch(1, "src/a.ts", now - 2 * DAY_MS), _touch(2, "src/a.ts", now - DAY_MS)],
        )

        resp = await api_client.get(
            "/api/v1/sensors/time-sink", params={"github_repo_id": 42, "timeframe_days": 7}
        )

        body = resp.json()
        assert body["score"] == 50
        assert body["churnFiles"] == [{"file": "src/a.ts", "prCount": 2}]

    @pytest.mark.asyncio
    async def test_truck_factor_shape(self, api_client: AsyncClient):
        resp = await api_client.get(
            "/api/v1/sensors/truck-factor", params={"github_repo_id": 999, "timeframe_days": 30}
        )

        assert resp.status_code == 200
        assert set(resp.json()) == {"riskScore", "previousRiskScore", "heroes", "totalFiles"}

    @pytest.mark.asyncio
    async def test_pulse_series_length(self, api_client: AsyncClient):
        resp = await api_client.get(
            "/api/v1/sensors/pulse", params={"github_repo_id": 999, "timeframe_days": 14}
        )

        body = resp.json()
        assert body["status"] == "Stagnant"
        assert len(body["dailyActivity"]) == 14

    @pytest.mark.asyncio
    @pytest.mark.parametrize("days", [0, 366])
    async def test_timeframe_bounds(self, api_client: AsyncClient, days: int):
        resp = await api_client.get(
            "/api/v1/sensors/pulse", params={"github_repo_id": 1, "timeframe_days": days}
        )

        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_demo_mode(self, api_client: AsyncClient):
        resp = await api_client.get(
            "/api/v1/sensors/truck-factor",
            params={"github_repo_id": 301, "timeframe_days": 30},
            headers=DEMO,
        )

        assert resp.json()["riskScore"] == 25


# ═══════════════════════════════════════════════════════════════════════════
# Codebase age
# ═══════════════════════════════════════════════════════════════════════════


class TestCodebaseAge:
    @pytest.mark.asyncio
    async def test_without_token_returns_placeholder(self, api_client: AsyncClient):
        resp = await api_client.get(
            "/api/v1/sensors/codebase-age",
            params={"github_repo_id": 2345, "timeframe_days": 30, "repo_name": "acme/web"},
        )

        assert resp.status_code == 200
        assert resp.json()["year"] == 2023

    @pytest.mark.asyncio
    async def test_timeframe_is_optional_but_still_bounded(self, api_client: AsyncClient):
        ok = await api_client.get(
            "/api/v1/sensors/codebase-age", params={"github_repo_id": 2345}
        )
        bad = await api_client.get(
            "/api/v1/sensors/codebase-age", params={"github_repo_id": 2345, "timeframe_days": 0}
        )

        assert ok.status_code == 200
        assert ok.json()["year"] == 2023
        assert bad.status_code == 422

    @pytest.mark.asyncio
    async def test_passes_token_and_repo_name(self, api_client: AsyncClient):
        result = CodebaseAgeResult(year=2025, status="Modern Stack", points=[])
        with patch(
            "app.api.v1.sensors.compute_codebase_age", new_callable=AsyncMock
        ) as mock_compute:
            mock_compute.return_value = result

            resp = await api_client.get(
                "/api/v1/sensors/codebase-age",
                params={"github_repo_id": 42, "timeframe_days": 30, "repo_name": "acme/web"},
                headers={"Authorization": "Bearer ghp_fake"},
            )

        assert resp.json() == {"year": 2025, "status": "Modern Stack", "points": []}
        mock_compute.assert_awaited_once_with(42, "ghp_fake", "acme/web")

    @pytest.mark.asyncio
    async def test_demo_mode(self, api_client: AsyncClient):
        resp = await api_client.get(
            "/api/v1/sensors/codebase-age",
            params={"github_repo_id": 201, "timeframe_days": 30},
            headers=DEMO,
        )

        assert resp.json()["status"] == "Bleeding Edge"
