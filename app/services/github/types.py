"""Data types for GitHub API responses."""

from dataclasses import dataclass


@dataclass
class GitHubUser:
    """Authenticated GitHub user profile."""

    id: int
    login: str
    name: str | None
    avatar_url: str | None


@dataclass
class GitHubAccount:
    """Account (user or organization) an installation belongs to."""

    login: str
    avatar_url: str | None
    type: str  # "User" or "Organization"


@dataclass
class GitHubInstallation:
    """A GitHub App installation visible to the user.

    In the OAuth fallback the authenticated user stands in as a personal
    installation whose id is the user's id.
    """

    id: int
    account: GitHubAccount


@dataclass
class GitHubRepo:
    """Normalized GitHub repository data for the repo picker."""

    id: int
    name: str
    full_name: str
    private: bool
    default_branch: str


@dataclass
class PullRequest:
    """A closed pull request; merged_at is None when it was closed unmerged."""

    number: int
    author: str | None
    merged_at: str | None
    updated_at: str | None


@dataclass
class PullRequestFile:
    """One file changed by a pull request."""

    filename: str
    additions: int
    deletions: int


@dataclass
class RepoFile:
    """Contents of a single file from a repository."""

    path: str
    content: str  # Decoded text content
    size: int
    sha: str
    encoding: str  # Original encoding (usually "base64")
