"""Pydantic schemas for API request/response validation."""

from app.schemas.ingest import IngestEvent, IngestPayload, IngestRepo, IngestRequest, IngestResponse
from app.schemas.sensors import (
    AgeMarker,
    ChurnFile,
    CodebaseAgeResult,
    DailyActivity,
    Hero,
    PulseResult,
    PulseStatus,
    TimeSinkResult,
    TruckFactorResult,
)

__all__ = [
    "AgeMarker",
    "ChurnFile",
    "CodebaseAgeResult",
    "DailyActivity",
    "Hero",
    "IngestEvent",
    "IngestPayload",
    "IngestRepo",
    "IngestRequest",
    "IngestResponse",
    "PulseResult",
    "PulseStatus",
    "TimeSinkResult",
    "TruckFactorResult",
]
