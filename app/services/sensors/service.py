"""
Sensor orchestration: resolve the repository, load both windows, compute.

Sensors for a repository that has never been ingested return zero results
rather than 404, so the dashboard can render an empty state.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.domain import event_ops, repository_ops
from app.models.event import Event
from app.schemas.sensors import PulseResult, TimeSinkResult, TruckFactorResult
from app.services.sensors.common import build_windows, now_ms
from app.services.sensors.pulse import compute_pulse
from app.services.sensors.time_sink import compute_time_sink
from app.services.sensors.truck_factor import compute_truck_factor

logger = logging.getLogger(__name__)


class SensorService:
    """Runs the event-based sensors against the stored event log."""

    async def _load_windows(
        self,
        db: AsyncSession,
        github_repo_id: int,
        timeframe_days: int,
        now: int,
    ) -> tuple[list[Event], list[Event]] | None:
        """(current, previous) events, or None if the repository is unknown."""
        repo = await repository_ops.get_by_github_id(db, github_repo_id)
        if repo is None:
            logger.debug(f"No repository for GitHub id {github_repo_id}")
            return None

        current_window, previous_window = build_windows(timeframe_days, now)
        current = await event_ops.get_in_window(
            db, repo.id, current_window.start_ms, current_window.end_ms
        )
        previous = await event_ops.get_in_window(
            db, repo.id, previous_window.start_ms, previous_window.end_ms
        )
        return current, previous

    async def time_sink(
        self,
        db: AsyncSession,
        github_repo_id: int,
        timeframe_days: int,
        now: int | None = None,
    ) -> TimeSinkResult:
        loaded = await self._load_windows(db, github_repo_id, timeframe_days, now or now_ms())
        if loaded is None:
            return compute_time_sink([], [])
        return compute_time_sink(*loaded)

    async def truck_factor(
        self,
        db: AsyncSession,
        github_repo_id: int,
        timeframe_days: int,
        now: int | None = None,
    ) -> TruckFactorResult:
        loaded = await self._load_windows(db, github_repo_id, timeframe_days, now or now_ms())
        if loaded is None:
            return compute_truck_factor([], [])
        return compute_truck_factor(*loaded)

    async def pulse(
        self,
        db: AsyncSession,
        github_repo_id: int,
        timeframe_days: int,
        now: int | None = None,
    ) -> PulseResult:
        """Pulse; an unknown repository still gets a zero-filled daily series."""
        now = now or now_ms()
        loaded = await self._load_windows(db, github_repo_id, timeframe_days, now)
        current, previous = loaded if loaded is not None else ([], [])
        return compute_pulse(current, previous, timeframe_days, now)


sensor_service = SensorService()
