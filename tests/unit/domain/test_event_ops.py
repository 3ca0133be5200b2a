"""EventOperations tests against a SQLite database."""

from __future__ import annotations

import pytest

from app.domain import event_ops, repository_ops
from app.models.repository import RepositoryUpsert


async def _repo(db_session, github_id: int = 42):
    return await repository_ops.upsert(
        db_session,
        RepositoryUpsert(github_id=github_id, name="web", full_name="acme/web"),
    )


class TestBulkCreate:
    @pytest.mark.asyncio
    async def test_returns_inserted_count(self, db_session):
        repo = await _repo(db_session)

        inserted = await event_ops.bulk_create(
            db_session,
            repo.id,
            [("pr_merged", 100, {"prId": 1}), ("file_change", 100, {"prId": 1, "file": "a"})],
        )

        assert inserted == 2

    @pytest.mark.asyncio
    async def test_same_batch_twice_is_stored_twice(self, db_session):
        repo = await _repo(db_session)
        batch = [("file_change", 100, {"prId": 1, "file": "a.ts"})]

        await event_ops.bulk_create(db_session, repo.id, batch)
        await event_ops.bulk_create(db_session, repo.id, batch)
        await db_session.commit()

        events = await event_ops.get_since(db_session, repo.id, 0)
        assert len(events) == 2


class TestGetInWindow:
    @pytest.mark.asyncio
    async def test_half_open_range(self, db_session):
        repo = await _repo(db_session)
        await event_ops.bulk_create(
            db_session,
            repo.id,
            [("file_change", ts, {"prId": ts, "file": "a"}) for ts in (99, 100, 150, 200)],
        )
        await db_session.commit()

        events = await event_ops.get_in_window(db_session, repo.id, 100, 200)

        assert [e.ts for e in events] == [100, 150]

    @pytest.mark.asyncio
    async def test_ties_keep_insertion_order(self, db_session):
        repo = await _repo(db_session)
        await event_ops.bulk_create(
            db_session,
            repo.id,
            [
                ("pr_merged", 100, {"prId": 7}),
                ("file_change", 100, {"prId": 7, "file": "z.ts"}),
                ("file_change", 100, {"prId": 7, "file": "a.ts"}),
            ],
        )
        await db_session.commit()

        events = await event_ops.get_in_window(db_session, repo.id, 0, 1000)

        assert [e.type for e in events] == ["pr_merged", "file_change", "file_change"]
        assert [e.file for e in events] == [None, "z.ts", "a.ts"]

    @pytest.mark.asyncio
    async def test_scoped_to_repository(self, db_session):
        repo_a = await _repo(db_session, github_id=1)
        repo_b = await _repo(db_session, github_id=2)
        await event_ops.bulk_create(db_session, repo_a.id, [("pr_merged", 100, {"prId": 1})])
        await event_ops.bulk_create(db_session, repo_b.id, [("pr_merged", 100, {"prId": 2})])
        await db_session.commit()

        events = await event_ops.get_in_window(db_session, repo_a.id, 0, 1000)

        assert [e.pr_id for e in events] == [1]


class TestRepositoryUpsertStored:
    @pytest.mark.asyncio
    async def test_upsert_twice_keeps_one_row(self, db_session):
        first = await _repo(db_session)
        await db_session.commit()
        second = await repository_ops.upsert(
            db_session,
            RepositoryUpsert(github_id=42, name="web2", full_name="acme/web2", is_private=True),
        )
        await db_session.commit()

        assert first.id == second.id
        stored = await repository_ops.get_by_github_id(db_session, 42)
        assert stored.full_name == "acme/web2"
        assert stored.is_private is True
