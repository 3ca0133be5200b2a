from sqlalchemy import BigInteger, Column
from sqlmodel import Field, SQLModel

from app.models.base import TimestampMixin, UUIDMixin


class RepositoryBase(SQLModel):
    """Base fields for Repository."""

    name: str = Field(max_length=255, index=True)
    full_name: str = Field(max_length=500)
    is_private: bool = Field(default=False)


class RepositoryUpsert(SQLModel):
    """Repository identity and metadata as sent by sync or the ingest endpoint."""

    github_id: int
    name: str
    full_name: str
    is_private: bool = False


class Repository(RepositoryBase, UUIDMixin, TimestampMixin, table=True):
    """GitHub repository whose activity has been ingested.

    Rows are created on first ingestion and their name/visibility refreshed
    on every later ingestion. Nothing in the service deletes them.
    """

    __tablename__ = "repositories"

    # Provider-assigned and stable across renames
    github_id: int = Field(
        sa_column=Column(BigInteger, nullable=False, unique=True, index=True),
    )
