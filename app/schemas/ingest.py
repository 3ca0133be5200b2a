"""Request schema for the direct ingestion entry point.

Mirrors what sync produces: repository identity plus a batch of typed
events, each with a millisecond timestamp.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field

from app.schemas.sensors import CamelModel


class IngestRepo(CamelModel):
    id: int = Field(description="GitHub repository id")
    name: str
    full_name: str
    private: bool = False


class IngestPayload(CamelModel):
    """Type-specific fields; file_change uses the first three, pr_merged the last two."""

    file: str | None = None
    additions: int | None = None
    deletions: int | None = None
    merged_at: str | None = None
    author: str | None = None

    def to_event_data(self, pr_id: int) -> dict[str, Any]:
        """Stored payload: {prId, **fields that were set}."""
        return {"prId": pr_id, **self.model_dump(by_alias=True, exclude_none=True)}


class IngestEvent(CamelModel):
    type: Literal["pr_merged", "file_change"]
    pr_id: int = Field(description="Pull request number")
    payload: IngestPayload = Field(default_factory=IngestPayload)
    timestamp: int = Field(description="Epoch milliseconds")


class IngestRequest(BaseModel):
    repo: IngestRepo
    events: list[IngestEvent]


class IngestResponse(BaseModel):
    repository_id: str
    inserted: int
