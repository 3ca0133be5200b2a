"""
Event ingestion: the direct batch entry point and the GitHub pull request sync.

Sync turns each recently merged PR into one pr_merged event plus one
file_change event per changed file, all stamped with the merge time, and then
goes through the same batch path as direct ingestion.
"""

import logging
from dataclasses import dataclass
from datetime import datetime

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.domain import event_ops, repository_ops
from app.models.event import EventType
from app.models.repository import Repository, RepositoryUpsert
from app.schemas.ingest import IngestEvent, IngestPayload, IngestRepo, IngestRequest
from app.services.github import GitHubAPIError, GitHubService

logger = logging.getLogger(__name__)


@dataclass
class SyncResult:
    """Outcome of a sync: events produced and merged PRs seen."""

    count: int
    prs: int


def iso_to_ms(value: str) -> int:
    """Epoch milliseconds for a GitHub ISO-8601 timestamp like 2024-05-01T12:00:00Z."""
    return int(datetime.fromisoformat(value.replace("Z", "+00:00")).timestamp() * 1000)


async def ingest_events(db: AsyncSession, request: IngestRequest) -> tuple[Repository, int]:
    """
    Upsert the repository, then append the batch of events.

    Args:
        db: Database session (the caller owns the transaction)
        request: Repository identity plus events

    Returns:
        Tuple of (repository row, number of events inserted)
    """
    repo = await repository_ops.upsert(
        db,
        RepositoryUpsert(
            github_id=request.repo.id,
            name=request.repo.name,
            full_name=request.repo.full_name,
            is_private=request.repo.private,
        ),
    )
    inserted = await event_ops.bulk_create(
        db,
        repo.id,
        ((e.type, e.timestamp, e.payload.to_event_data(e.pr_id)) for e in request.events),
    )
    logger.info(f"Ingested {inserted} events for {repo.full_name}")
    return repo, inserted


async def collect_pull_request_events(
    github: GitHubService,
    repo_name: str,
    limit: int,
) -> tuple[list[IngestEvent], int]:
    """
    Build ingestion events from the repository's recently merged PRs.

    Files are fetched one PR at a time; a PR whose files cannot be fetched
    keeps its pr_merged event and contributes no file events.

    Returns:
        Tuple of (events, merged PR count)
    """
    pulls = await github.get_merged_pull_requests(repo_name, limit=limit)
    events: list[IngestEvent] = []

    for pr in pulls:
        merged_ts = iso_to_ms(pr.merged_at)
        events.append(
            IngestEvent(
                type=EventType.PR_MERGED.value,
                pr_id=pr.number,
                payload=IngestPayload(merged_at=pr.merged_at, author=pr.author),
                timestamp=merged_ts,
            )
        )

        try:
            files = await github.get_pull_request_files(repo_name, pr.number)
        except (GitHubAPIError, httpx.HTTPError) as e:
            logger.warning(f"Failed to fetch files for {repo_name}#{pr.number}: {e}")
            continue

        events.extend(
            IngestEvent(
                type=EventType.FILE_CHANGE.value,
                pr_id=pr.number,
                payload=IngestPayload(
                    file=f.filename,
                    additions=f.additions,
                    deletions=f.deletions,
                ),
                timestamp=merged_ts,
            )
            for f in files
        )

    return events, len(pulls)


async def sync_repository(
    db: AsyncSession,
    github: GitHubService,
    github_repo_id: int,
    repo_name: str,
    full_name: str,
    is_private: bool,
    limit: int | None = None,
) -> SyncResult:
    """
    Pull recent merged PRs from GitHub into the event store.

    Args:
        db: Database session
        github: GitHub client authenticated as the caller
        github_repo_id: GitHub repository id
        repo_name: Repository in "owner/repo" form, used for API paths
        full_name: Display name stored on the repository row
        is_private: Repository visibility
        limit: Closed PRs to request; settings.sync_default_pr_limit when omitted

    Returns:
        SyncResult with the event and merged PR counts

    Raises:
        GitHubAPIError: If the pull request list cannot be fetched
    """
    limit = limit or settings.sync_default_pr_limit
    logger.info(f"Syncing {repo_name}, limit: {limit}")

    events, pr_count = await collect_pull_request_events(github, repo_name, limit)

    if events:
        await ingest_events(
            db,
            IngestRequest(
                repo=IngestRepo(
                    id=github_repo_id,
                    name=repo_name.split("/")[-1] or repo_name,
                    full_name=full_name,
                    private=is_private,
                ),
                events=events,
            ),
        )

    return SyncResult(count=len(events), prs=pr_count)
