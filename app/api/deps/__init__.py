"""API dependencies - re-exports from submodules."""

from .session import (
    AuthType,
    RequiredSession,
    Session,
    SessionContext,
    get_session,
    require_session,
    security,
)

__all__ = [
    "security",
    "AuthType",
    "SessionContext",
    "get_session",
    "require_session",
    "Session",
    "RequiredSession",
]
