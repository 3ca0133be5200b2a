"""
GitHub API service for the SignalKit flows.

Handles all GitHub REST API interactions including:
- The authenticated user's profile
- GitHub App installations and their repositories (with OAuth fallbacks)
- Closed pull requests and their changed files, for ingestion
- Raw file contents, for the codebase age heuristic
"""

import base64
import logging
from typing import Any

from app.services.github.exceptions import GitHubAPIError
from app.services.github.helpers import handle_error_response
from app.services.github.http_client import get_github_client
from app.services.github.types import (
    GitHubAccount,
    GitHubInstallation,
    GitHubRepo,
    GitHubUser,
    PullRequest,
    PullRequestFile,
    RepoFile,
)

logger = logging.getLogger(__name__)

USER_REPOS_AFFILIATION = "owner,collaborator,organization_member"


class GitHubService:
    """Service for interacting with GitHub REST API on behalf of one user token."""

    BASE_URL = "https://api.github.com"
    API_VERSION = "2022-11-28"

    def __init__(self, token: str):
        self.token = token
        self._headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": self.API_VERSION,
        }

    def _normalize_repo(self, data: dict[str, Any]) -> GitHubRepo:
        """Convert GitHub API response to GitHubRepo dataclass."""
        return GitHubRepo(
            id=data["id"],
            name=data["name"],
            full_name=data["full_name"],
            private=data.get("private", False),
            default_branch=data.get("default_branch", "main"),
        )

    async def get_authenticated_user(self) -> GitHubUser:
        """Fetch the profile of the user the token belongs to."""
        client = get_github_client()
        response = await client.get(f"{self.BASE_URL}/user", headers=self._headers)
        handle_error_response(response, "user")

        data = response.json()
        if not data.get("id"):
            raise GitHubAPIError("Failed to fetch GitHub user profile", 502)
        return GitHubUser(
            id=data["id"],
            login=data["login"],
            name=data.get("name"),
            avatar_url=data.get("avatar_url"),
        )

    async def get_installations(self) -> list[GitHubInstallation]:
        """
        List GitHub App installations accessible to the user.

        OAuth App tokens cannot list installations. When the call fails the
        authenticated user is returned as a single personal-scope
        installation, using the user id as the installation id.

        Raises:
            GitHubAPIError: If both the installations call and the fallback fail
        """
        client = get_github_client()
        response = await client.get(
            f"{self.BASE_URL}/user/installations",
            headers=self._headers,
        )

        if response.is_success:
            return [
                GitHubInstallation(
                    id=inst["id"],
                    account=GitHubAccount(
                        login=inst["account"]["login"],
                        avatar_url=inst["account"].get("avatar_url"),
                        type=inst["account"].get("type", "User"),
                    ),
                )
                for inst in response.json().get("installations", [])
            ]

        logger.warning(
            f"Failed to fetch installations ({response.status_code}), "
            "falling back to personal user scope"
        )
        try:
            user = await self.get_authenticated_user()
        except GitHubAPIError as e:
            raise GitHubAPIError(
                f"Failed to fetch installations or user: {e.message}",
                e.status_code,
                rate_limit_reset=e.rate_limit_reset,
            ) from e

        return [
            GitHubInstallation(
                id=user.id,
                account=GitHubAccount(login=user.login, avatar_url=user.avatar_url, type="User"),
            )
        ]

    async def get_installation_repos(self, installation_id: int) -> list[GitHubRepo]:
        """
        List repositories of one installation.

        Falls back to the user's own repositories when the installation
        endpoint fails (OAuth mode, where the "installation" is the user).
        """
        client = get_github_client()
        response = await client.get(
            f"{self.BASE_URL}/user/installations/{installation_id}/repositories",
            headers=self._headers,
        )

        if response.is_success:
            return [self._normalize_repo(r) for r in response.json().get("repositories", [])]

        logger.warning(
            f"Failed to fetch repos for installation {installation_id} "
            f"({response.status_code}), falling back to user repos"
        )
        return await self.get_user_repos()

    async def get_user_repos(self, per_page: int = 100) -> list[GitHubRepo]:
        """Fetch the authenticated user's repositories, most recently updated first."""
        params: dict[str, str | int] = {
            "sort": "updated",
            "per_page": min(per_page, 100),
            "affiliation": USER_REPOS_AFFILIATION,
        }

        client = get_github_client()
        response = await client.get(
            f"{self.BASE_URL}/user/repos",
            headers=self._headers,
            params=params,
        )
        handle_error_response(response, "user repositories")

        return [self._normalize_repo(r) for r in response.json()]

    async def get_merged_pull_requests(
        self,
        full_name: str,
        limit: int = 20,
    ) -> list[PullRequest]:
        """
        Fetch the most recently updated closed PRs and keep the merged ones.

        Args:
            full_name: Repository in "owner/repo" form
            limit: How many closed PRs to request (max 100)

        Returns:
            Merged pull requests, in GitHub's updated-desc order
        """
        params: dict[str, str | int] = {
            "state": "closed",
            "sort": "updated",
            "direction": "desc",
            "per_page": min(limit, 100),
        }

        client = get_github_client()
        response = await client.get(
            f"{self.BASE_URL}/repos/{full_name}/pulls",
            headers=self._headers,
            params=params,
        )
        handle_error_response(response, full_name)

        pulls = []
        for pr in response.json():
            if not pr.get("merged_at"):
                continue
            user = pr.get("user") or {}
            pulls.append(
                PullRequest(
                    number=pr["number"],
                    author=user.get("login"),
                    merged_at=pr["merged_at"],
                    updated_at=pr.get("updated_at"),
                )
            )
        return pulls

    async def get_pull_request_files(
        self,
        full_name: str,
        number: int,
    ) -> list[PullRequestFile]:
        """Fetch the files changed by one pull request (first page, up to 100)."""
        client = get_github_client()
        response = await client.get(
            f"{self.BASE_URL}/repos/{full_name}/pulls/{number}/files",
            headers=self._headers,
            params={"per_page": 100},
        )
        handle_error_response(response, f"{full_name}#{number}")

        return [
            PullRequestFile(
                filename=f["filename"],
                additions=f.get("additions", 0),
                deletions=f.get("deletions", 0),
            )
            for f in response.json()
        ]

    async def get_file_content(
        self,
        full_name: str,
        path: str,
        ref: str | None = None,
    ) -> RepoFile | None:
        """
        Fetch the content of a file from a repository.

        Args:
            full_name: Repository in "owner/repo" form
            path: File path within the repository
            ref: Branch or SHA; the default branch when omitted

        Returns:
            RepoFile with decoded content, or None if the file does not exist,
            is a directory, or is not base64 UTF-8 text
        """
        client = get_github_client()
        response = await client.get(
            f"{self.BASE_URL}/repos/{full_name}/contents/{path}",
            headers=self._headers,
            params={"ref": ref} if ref else None,
        )

        if response.status_code == 404:
            return None

        handle_error_response(response, full_name)

        data = response.json()
        if not isinstance(data, dict) or data.get("type", "file") != "file":
            return None

        content_b64 = data.get("content")
        if not content_b64 or data.get("encoding") != "base64":
            return None

        try:
            content = base64.b64decode(content_b64).decode("utf-8")
        except (ValueError, UnicodeDecodeError):
            return None

        return RepoFile(
            path=path,
            content=content,
            size=data.get("size", 0),
            sha=data.get("sha", ""),
            encoding=data["encoding"],
        )
