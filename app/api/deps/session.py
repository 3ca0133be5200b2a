"""GitHub session dependencies.

The caller's GitHub access token travels as a bearer token on every request;
nothing about the session is stored server-side.
"""

from dataclasses import dataclass
from typing import Annotated, Literal

from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.exceptions import UnauthorizedError

security = HTTPBearer(auto_error=False)

AuthType = Literal["oauth", "app"]


@dataclass
class SessionContext:
    """Per-request view of the caller's GitHub session.

    auth_type is informational: it reports which sign-in flow issued the
    token, and GitHub calls behave the same for both.
    """

    access_token: str | None
    auth_type: AuthType = "oauth"
    is_demo: bool = False


async def get_session(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    x_auth_type: AuthType = Header("oauth"),
    x_demo_mode: bool = Header(False),
) -> SessionContext:
    """Build the session from the Authorization, X-Auth-Type and X-Demo-Mode headers."""
    return SessionContext(
        access_token=credentials.credentials if credentials else None,
        auth_type=x_auth_type,
        is_demo=x_demo_mode,
    )


async def require_session(
    session: SessionContext = Depends(get_session),
) -> SessionContext:
    """Session that can reach GitHub: a token is required unless in demo mode."""
    if not session.access_token and not session.is_demo:
        raise UnauthorizedError()
    return session


Session = Annotated[SessionContext, Depends(get_session)]
RequiredSession = Annotated[SessionContext, Depends(require_session)]
