"""Pydantic schemas for sensor results.

Results are ephemeral: recomputed on every request and never stored.
Fields serialize in camelCase to match the dashboard's expectations.
"""

from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model that reads snake_case or camelCase and writes camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ChurnFile(CamelModel):
    """A file reworked across several pull requests."""

    file: str
    pr_count: int = Field(description="Distinct PRs that touched the file in the window")


class TimeSinkResult(CamelModel):
    score: int = Field(ge=0, le=100, description="Rework touches as a percentage of all touches")
    previous_score: int = Field(ge=0, le=100)
    total_touches: int = 0
    rework_touches: int = 0
    churn_files: list[ChurnFile] = Field(default_factory=list)


class Hero(CamelModel):
    """An author who dominates one or more files."""

    author: str
    file_count: int
    top_files: list[str] = Field(default_factory=list, description="Up to 5 example paths")


class TruckFactorResult(CamelModel):
    risk_score: int = Field(ge=0, le=100)
    previous_risk_score: int = Field(ge=0, le=100)
    heroes: list[Hero] = Field(default_factory=list)
    total_files: int = Field(default=0, description="Significant files (>= 3 touches)")


class PulseStatus(StrEnum):
    STAGNANT = "Stagnant"
    LOW_ACTIVITY = "Low Activity"
    SPORADIC = "Sporadic"
    CONSISTENT = "Consistent"
    HIGH_CADENCE = "High Cadence"


class DailyActivity(CamelModel):
    date: str = Field(description="UTC calendar day, YYYY-MM-DD")
    count: int


class PulseResult(CamelModel):
    score: int = Field(ge=0, le=100)
    previous_score: int = Field(ge=0, le=100)
    status: PulseStatus
    daily_activity: list[DailyActivity] = Field(default_factory=list)


MarkerStatus = Literal["modern", "legacy", "neutral"]


class AgeMarker(CamelModel):
    """One signal that moved the effective year, e.g. "React 18" / "+2 years"."""

    marker: str
    impact: str
    status: MarkerStatus


class CodebaseAgeResult(CamelModel):
    year: int = Field(description="Effective technology year of the stack")
    status: str = Field(description="Modern Stack, Legacy Stack or Unknown")
    points: list[AgeMarker] = Field(default_factory=list)
