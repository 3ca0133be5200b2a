"""Exceptions for GitHub service."""


class GitHubAPIError(Exception):
    """Error from GitHub API."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        rate_limit_reset: int | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.rate_limit_reset = rate_limit_reset  # Unix timestamp when rate limit resets
        super().__init__(message)


class GitHubOAuthError(GitHubAPIError):
    """The OAuth code exchange or profile lookup failed.

    Also raised before any request is made when the client credentials for
    the requested auth type are not configured.
    """

    def __init__(self, message: str, status_code: int | None = 400):
        super().__init__(message, status_code=status_code)
