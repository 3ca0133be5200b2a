"""Unit tests for the GitHub session dependencies."""

import pytest
from fastapi.security import HTTPAuthorizationCredentials

from app.api.deps.session import SessionContext, get_session, require_session
from app.core.exceptions import UnauthorizedError


class TestGetSession:
    @pytest.mark.asyncio
    async def test_reads_token_auth_type_and_demo_flag(self):
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials="ghu_app")

        session = await get_session(credentials=credentials, x_auth_type="app", x_demo_mode=True)

        assert session == SessionContext(access_token="ghu_app", auth_type="app", is_demo=True)

    @pytest.mark.asyncio
    async def test_defaults_without_headers(self):
        session = await get_session(credentials=None, x_auth_type="oauth", x_demo_mode=False)

        assert session.access_token is None
        assert session.auth_type == "oauth"
        assert session.is_demo is False


class TestRequireSession:
    @pytest.mark.asyncio
    async def test_auth_type_does_not_affect_requirement(self):
        for auth_type in ("oauth", "app"):
            session = SessionContext(access_token="tok", auth_type=auth_type)
            assert await require_session(session) is session

    @pytest.mark.asyncio
    async def test_missing_token_is_unauthorized(self):
        with pytest.raises(UnauthorizedError) as exc_info:
            await require_session(SessionContext(access_token=None, auth_type="app"))

        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_demo_mode_needs_no_token(self):
        session = SessionContext(access_token=None, is_demo=True)

        assert await require_session(session) is session
