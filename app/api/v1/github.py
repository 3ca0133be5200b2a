"""
GitHub integration endpoints: repository browsing and pull request sync.
"""

import logging
import time
from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import RequiredSession
from app.core.database import get_db
from app.services.github import GitHubAPIError, GitHubService
from app.services.ingestion import sync_repository
from app.services.sensors.demo import get_demo_installations, get_demo_repos

router = APIRouter(prefix="/github", tags=["github"])
logger = logging.getLogger(__name__)


# --- Response Models ---


class AccountResponse(BaseModel):
    login: str
    avatar_url: str | None
    type: str


class InstallationResponse(BaseModel):
    """An installation, or the user's personal scope when listing installations is not possible."""

    id: int
    account: AccountResponse


class RepoResponse(BaseModel):
    id: int
    name: str
    full_name: str
    private: bool
    default_branch: str


class SyncRequest(BaseModel):
    """Repository to sync; repo_name is the "owner/repo" path used against the API."""

    repo_id: int = Field(description="GitHub repository id")
    repo_name: str
    repo_full_name: str
    repo_private: bool = False
    limit: int | None = Field(None, ge=1, le=100, description="Closed PRs to request")


class SyncResponse(BaseModel):
    count: int = Field(description="Events ingested")
    prs: int = Field(description="Merged pull requests seen")


# --- Helper Functions ---


def github_http_error(e: GitHubAPIError) -> HTTPException:
    """Translate a GitHub error into an HTTP error carrying the upstream status."""
    detail = e.message
    if e.rate_limit_reset:
        reset_in = max(0, e.rate_limit_reset - int(time.time()))
        minutes = reset_in // 60
        detail = f"{e.message}. Rate limit resets in {minutes} minutes."
    return HTTPException(
        status_code=e.status_code or status.HTTP_502_BAD_GATEWAY,
        detail=detail,
    )


# --- Endpoints ---


@router.get("/installations", response_model=list[InstallationResponse])
async def list_installations(session: RequiredSession) -> list[InstallationResponse]:
    """
    List GitHub App installations visible to the caller.

    OAuth tokens cannot list installations; for them the caller's own account
    is returned as a single personal installation.
    """
    if session.is_demo:
        installations = get_demo_installations()
    else:
        github = GitHubService(session.access_token)
        try:
            installations = await github.get_installations()
        except GitHubAPIError as e:
            raise github_http_error(e) from None

    return [InstallationResponse(**asdict(inst)) for inst in installations]


@router.get(
    "/installations/{installation_id}/repositories",
    response_model=list[RepoResponse],
)
async def list_installation_repos(
    installation_id: int,
    session: RequiredSession,
) -> list[RepoResponse]:
    """
    List repositories of one installation.

    Falls back to the caller's own repositories when the installation cannot
    be read (personal scope, or an OAuth token).
    """
    if session.is_demo:
        repos = get_demo_repos(installation_id)
    else:
        github = GitHubService(session.access_token)
        try:
            repos = await github.get_installation_repos(installation_id)
        except GitHubAPIError as e:
            raise github_http_error(e) from None

    return [RepoResponse(**asdict(repo)) for repo in repos]


@router.post("/sync", response_model=SyncResponse)
async def sync_repo(
    data: SyncRequest,
    session: RequiredSession,
    db: AsyncSession = Depends(get_db),
) -> SyncResponse:
    """
    Ingest the repository's recently merged pull requests as events.

    Demo mode never touches GitHub or the database and reports nothing synced.
    """
    if session.is_demo:
        return SyncResponse(count=0, prs=0)

    github = GitHubService(session.access_token)
    try:
        result = await sync_repository(
            db,
            github,
            github_repo_id=data.repo_id,
            repo_name=data.repo_name,
            full_name=data.repo_full_name,
            is_private=data.repo_private,
            limit=data.limit,
        )
    except GitHubAPIError as e:
        raise github_http_error(e) from None

    logger.info(f"Synced {data.repo_name}: {result.count} events from {result.prs} PRs")
    return SyncResponse(count=result.count, prs=result.prs)
