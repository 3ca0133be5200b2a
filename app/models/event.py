"""Normalized activity events ingested from GitHub."""

import uuid as uuid_pkg
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from sqlalchemy import JSON, BigInteger, Column, DateTime, Index, Integer, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlmodel import Field, SQLModel


class EventType(StrEnum):
    """Kinds of events the sensors consume."""

    PR_MERGED = "pr_merged"
    FILE_CHANGE = "file_change"


class Event(SQLModel, table=True):
    """
    A single append-only activity event.

    Payload shape depends on the type:
    - pr_merged: {"prId", "author", "mergedAt"}
    - file_change: {"prId", "file", "additions", "deletions"}

    `ts` is epoch milliseconds and is authoritative for windowing and ordering.
    The integer id breaks ties between events sharing a timestamp, so a batch
    reads back in the order it was inserted.
    """

    __tablename__ = "events"
    __table_args__ = (
        Index("ix_events_repo_ts", "repository_id", "ts"),
        Index("ix_events_repo_type_ts", "repository_id", "type", "ts"),
    )

    id: int | None = Field(
        default=None,
        sa_column=Column(
            BigInteger().with_variant(Integer, "sqlite"),
            primary_key=True,
            autoincrement=True,
        ),
    )
    repository_id: uuid_pkg.UUID = Field(
        foreign_key="repositories.id",
        nullable=False,
    )
    type: str = Field(max_length=32, nullable=False)
    ts: int = Field(sa_column=Column(BigInteger, nullable=False))
    data: dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JSON().with_variant(JSONB, "postgresql"), nullable=False),
    )
    created_at: datetime = Field(  # type: ignore[call-overload]
        default_factory=lambda: datetime.now(UTC),
        nullable=False,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={"server_default": func.now()},
    )

    @property
    def pr_id(self) -> int | None:
        return self.data.get("prId")

    @property
    def file(self) -> str | None:
        return self.data.get("file")

    @property
    def author(self) -> str | None:
        return self.data.get("author")
