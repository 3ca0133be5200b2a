"""
GitHub OAuth code exchange.

Both the OAuth App ("oauth") and the GitHub App user-to-server flow ("app")
use the same web flow endpoints; they differ only in client credentials and
requested scopes.
"""

import logging
from urllib.parse import urlencode

from app.config import settings
from app.services.github.exceptions import GitHubOAuthError
from app.services.github.http_client import get_github_client

logger = logging.getLogger(__name__)

AUTHORIZE_URL = "https://github.com/login/oauth/authorize"
ACCESS_TOKEN_URL = "https://github.com/login/oauth/access_token"

AUTH_TYPE_OAUTH = "oauth"
AUTH_TYPE_APP = "app"

# OAuth App needs repo + org scopes to see private and org repositories.
# GitHub App permissions come from the installation instead.
SCOPES: dict[str, str] = {
    AUTH_TYPE_OAUTH: "repo read:org read:user user:email",
    AUTH_TYPE_APP: "read:user user:email",
}


def get_client_credentials(auth_type: str) -> tuple[str, str]:
    """Return (client_id, client_secret) for an auth type.

    Raises:
        GitHubOAuthError: If the credentials are not configured
    """
    if auth_type == AUTH_TYPE_APP:
        client_id = settings.github_app_client_id
        client_secret = settings.github_app_client_secret
    else:
        client_id = settings.github_oauth_client_id
        client_secret = settings.github_oauth_client_secret

    if not client_id or not client_secret:
        raise GitHubOAuthError(
            f"Missing GitHub auth configuration for {auth_type or AUTH_TYPE_OAUTH}",
            status_code=503,
        )
    return client_id, client_secret


def build_authorize_url(auth_type: str, redirect_uri: str) -> str:
    """Build the GitHub authorize URL the browser should be sent to."""
    client_id, _ = get_client_credentials(auth_type)
    params = {
        "client_id": client_id,
        "redirect_uri": redirect_uri,
        "scope": SCOPES.get(auth_type, SCOPES[AUTH_TYPE_OAUTH]),
    }
    return f"{AUTHORIZE_URL}?{urlencode(params)}"


async def exchange_code_for_token(code: str, redirect_uri: str, auth_type: str) -> str:
    """
    Exchange a temporary OAuth code for an access token.

    GitHub reports most exchange failures with a 200 response carrying an
    "error" field, so both the status and the body are checked.

    Raises:
        GitHubOAuthError: If GitHub rejects the code or returns no token
    """
    client_id, client_secret = get_client_credentials(auth_type)

    client = get_github_client()
    response = await client.post(
        ACCESS_TOKEN_URL,
        headers={"Accept": "application/json"},
        json={
            "client_id": client_id,
            "client_secret": client_secret,
            "code": code,
            "redirect_uri": redirect_uri,
        },
    )

    if not response.is_success:
        raise GitHubOAuthError(
            f"GitHub Token Error: HTTP {response.status_code}",
            status_code=502,
        )

    data = response.json()
    if data.get("error") or not data.get("access_token"):
        logger.warning(f"GitHub token exchange rejected: {data.get('error')}")
        raise GitHubOAuthError(
            f"GitHub Token Error: {data.get('error_description') or 'Unknown error'}"
        )

    return data["access_token"]
