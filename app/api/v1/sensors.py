"""
Sensor endpoints.

Each sensor is recomputed on every request from the stored events; in demo
mode the archetype data is returned instead.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import Session
from app.core.database import get_db
from app.schemas.sensors import (
    CodebaseAgeResult,
    PulseResult,
    TimeSinkResult,
    TruckFactorResult,
)
from app.services.sensors import compute_codebase_age, demo, now_ms, sensor_service

router = APIRouter(prefix="/sensors", tags=["sensors"])

GithubRepoId = Annotated[int, Query(description="GitHub repository id")]
TimeframeDays = Annotated[int, Query(ge=1, le=365, description="Window length in days")]


@router.get("/time-sink", response_model=TimeSinkResult)
async def get_time_sink(
    session: Session,
    github_repo_id: GithubRepoId,
    timeframe_days: TimeframeDays = 30,
    db: AsyncSession = Depends(get_db),
) -> TimeSinkResult:
    """Share of file touches that rework files already touched by another PR."""
    if session.is_demo:
        return demo.demo_time_sink(github_repo_id, timeframe_days)
    return await sensor_service.time_sink(db, github_repo_id, timeframe_days)


@router.get("/truck-factor", response_model=TruckFactorResult)
async def get_truck_factor(
    session: Session,
    github_repo_id: GithubRepoId,
    timeframe_days: TimeframeDays = 30,
    db: AsyncSession = Depends(get_db),
) -> TruckFactorResult:
    """Share of significant files dominated by a single author."""
    if session.is_demo:
        return demo.demo_truck_factor(github_repo_id, timeframe_days)
    return await sensor_service.truck_factor(db, github_repo_id, timeframe_days)


@router.get("/pulse", response_model=PulseResult)
async def get_pulse(
    session: Session,
    github_repo_id: GithubRepoId,
    timeframe_days: TimeframeDays = 30,
    db: AsyncSession = Depends(get_db),
) -> PulseResult:
    """Development cadence, with a per-day activity series for the heatmap."""
    if session.is_demo:
        return demo.demo_pulse(github_repo_id, timeframe_days, now_ms())
    return await sensor_service.pulse(db, github_repo_id, timeframe_days)


@router.get("/codebase-age", response_model=CodebaseAgeResult)
async def get_codebase_age(
    session: Session,
    github_repo_id: GithubRepoId,
    # Not used by the analysis; accepted so every sensor takes the same query
    timeframe_days: TimeframeDays = 30,
    repo_name: str | None = Query(None, description='Repository in "owner/repo" form'),
) -> CodebaseAgeResult:
    """
    Effective year of the JavaScript/TypeScript stack.

    Reads the repository's config files live from GitHub; without a token or
    repository name a placeholder result is returned.
    """
    if session.is_demo:
        return demo.demo_codebase_age(github_repo_id)
    return await compute_codebase_age(github_repo_id, session.access_token, repo_name)
