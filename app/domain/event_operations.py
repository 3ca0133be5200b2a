"""Event store queries.

Events are append-only: there is no update or delete path here.
"""

import uuid as uuid_pkg
from collections.abc import Iterable
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.event import Event


class EventOperations:
    """Read and append operations for the events table."""

    async def get_since(
        self,
        db: AsyncSession,
        repository_id: uuid_pkg.UUID,
        start_ms: int,
    ) -> list[Event]:
        """Get every event of a repository with ts >= start_ms.

        No upper bound and no pagination: the whole window is loaded.
        """
        statement = (
            select(Event)
            .where(Event.repository_id == repository_id, Event.ts >= start_ms)
            .order_by(Event.ts, Event.id)
        )
        result = await db.execute(statement)
        return list(result.scalars().all())

    async def get_in_window(
        self,
        db: AsyncSession,
        repository_id: uuid_pkg.UUID,
        start_ms: int,
        end_ms: int,
    ) -> list[Event]:
        """Get events with start_ms <= ts < end_ms, oldest first.

        Served by the (repository_id, ts) index; events sharing a timestamp
        come back in insertion order.
        """
        statement = (
            select(Event)
            .where(
                Event.repository_id == repository_id,
                Event.ts >= start_ms,
                Event.ts < end_ms,
            )
            .order_by(Event.ts, Event.id)
        )
        result = await db.execute(statement)
        return list(result.scalars().all())

    async def bulk_create(
        self,
        db: AsyncSession,
        repository_id: uuid_pkg.UUID,
        events: Iterable[tuple[str, int, dict[str, Any]]],
    ) -> int:
        """Append (type, ts, data) rows for a repository in one flush.

        No deduplication: the same batch ingested twice is stored twice.
        """
        rows = [
            Event(repository_id=repository_id, type=event_type, ts=ts, data=data)
            for event_type, ts, data in events
        ]
        db.add_all(rows)
        await db.flush()
        return len(rows)


event_ops = EventOperations()
