"""API endpoint tests for the internal ingestion route."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from httpx import AsyncClient

from app.domain import event_ops, repository_ops

PAYLOAD = {
    "repo": {"id": 42, "name": "web", "fullName": "acme/web", "private": True},
    "events": [
        {
            "type": "pr_merged",
            "prId": 7,
            "payload": {"mergedAt": "2024-06-14T12:00:00Z", "author": "alice"},
            "timestamp": 1_718_366_400_000,
        },
        {
            "type": "file_change",
            "prId": 7,
            "payload": {"file": "src/a.ts", "additions": 3, "deletions": 1},
            "timestamp": 1_718_366_400_000,
        },
    ],
}


@pytest.fixture
def internal_secret():
    with patch("app.api.v1.internal.settings.internal_api_secret", "s3cret"):
        yield "s3cret"


class TestIngest:
    @pytest.mark.asyncio
    async def test_ingests_batch(self, api_client: AsyncClient, db_session, internal_secret):
        resp = await api_client.post(
            "/api/v1/internal/ingest",
            json=PAYLOAD,
            headers={"X-Internal-Secret": internal_secret},
        )

        assert resp.status_code == 200
        assert resp.json()["inserted"] == 2

        repo = await repository_ops.get_by_github_id(db_session, 42)
        assert str(repo.id) == resp.json()["repository_id"]
        assert repo.is_private is True
        events = await event_ops.get_since(db_session, repo.id, 0)
        assert events[1].data == {"prId": 7, "file": "src/a.ts", "additions": 3, "deletions": 1}

    @pytest.mark.asyncio
    async def test_duplicate_batch_duplicates_events(
        self, api_client: AsyncClient, db_session, internal_secret
    ):
        headers = {"X-Internal-Secret": internal_secret}
        await api_client.post("/api/v1/internal/ingest", json=PAYLOAD, headers=headers)
        await api_client.post("/api/v1/internal/ingest", json=PAYLOAD, headers=headers)

        repo = await repository_ops.get_by_github_id(db_session, 42)
        events = await event_ops.get_since(db_session, repo.id, 0)
        assert len(events) == 4

    @pytest.mark.asyncio
    async def test_wrong_secret_is_forbidden(self, api_client: AsyncClient, internal_secret):
        resp = await api_client.post(
            "/api/v1/internal/ingest", json=PAYLOAD, headers={"X-Internal-Secret": "nope"}
        )

        assert resp.status_code == 403
        assert resp.json()["detail"] == "Invalid internal secret"

    @pytest.mark.asyncio
    async def test_missing_secret_header_is_rejected(self, api_client: AsyncClient, internal_secret):
        resp = await api_client.post("/api/v1/internal/ingest", json=PAYLOAD)

        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_unconfigured_secret_is_unavailable(self, api_client: AsyncClient):
        with patch("app.api.v1.internal.settings.internal_api_secret", ""):
            resp = await api_client.post(
                "/api/v1/internal/ingest", json=PAYLOAD, headers={"X-Internal-Secret": "x"}
            )

        assert resp.status_code == 503

    @pytest.mark.asyncio
    async def test_unknown_event_type_is_rejected(self, api_client: AsyncClient, internal_secret):
        bad = {**PAYLOAD, "events": [{**PAYLOAD["events"][0], "type": "push"}]}

        resp = await api_client.post(
            "/api/v1/internal/ingest", json=bad, headers={"X-Internal-Secret": internal_secret}
        )

        assert resp.status_code == 422
