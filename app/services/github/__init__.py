"""
GitHub service package.

Usage: `from app.services.github import GitHubService, GitHubAPIError`

Module structure:
- service.py: GitHubService (REST reads on behalf of a user token)
- oauth.py: Authorize URL and code-for-token exchange
- helpers.py: Rate limit handling and error utilities
- http_client.py: Shared connection-pooled httpx client
- types.py: Data types and response models
- exceptions.py: Custom exceptions
"""

from app.services.github.exceptions import GitHubAPIError, GitHubOAuthError
from app.services.github.helpers import RateLimitInfo, handle_error_response
from app.services.github.http_client import close_github_client
from app.services.github.oauth import build_authorize_url, exchange_code_for_token
from app.services.github.service import GitHubService
from app.services.github.types import (
    GitHubAccount,
    GitHubInstallation,
    GitHubRepo,
    GitHubUser,
    PullRequest,
    PullRequestFile,
    RepoFile,
)

__all__ = [
    # Service (main entry point)
    "GitHubService",
    # OAuth
    "build_authorize_url",
    "exchange_code_for_token",
    # HTTP client lifecycle
    "close_github_client",
    # Utilities
    "handle_error_response",
    "RateLimitInfo",
    # Exceptions
    "GitHubAPIError",
    "GitHubOAuthError",
    # Types
    "GitHubAccount",
    "GitHubInstallation",
    "GitHubRepo",
    "GitHubUser",
    "PullRequest",
    "PullRequestFile",
    "RepoFile",
]
