"""
GitHub sign-in endpoints.

The browser is sent to GitHub's authorize page, comes back to the frontend
with a temporary code, and the frontend posts that code here. The access
token is returned to the caller and sent back as a bearer token afterwards.
"""

import logging

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import AuthType
from app.api.v1.github import github_http_error
from app.config import settings
from app.core.database import get_db
from app.core.exceptions import NotFoundError
from app.domain import user_ops
from app.schemas.sensors import CamelModel
from app.services.github import (
    GitHubAPIError,
    GitHubService,
    build_authorize_url,
    exchange_code_for_token,
)

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


class AuthorizeResponse(BaseModel):
    url: str


class CallbackRequest(CamelModel):
    code: str
    redirect_uri: str
    auth_type: AuthType = "oauth"


class CallbackResponse(CamelModel):
    user_id: str
    login: str
    access_token: str


class UserResponse(CamelModel):
    id: str
    github_user_id: str
    login: str
    name: str | None
    avatar_url: str | None


@router.get("/github/authorize", response_model=AuthorizeResponse)
async def github_authorize(
    redirect_uri: str | None = Query(None, description="Callback URL registered with GitHub"),
    auth_type: AuthType = Query("oauth"),
) -> AuthorizeResponse:
    """Build the GitHub authorize URL for the OAuth App or the GitHub App.

    The redirect defaults to the frontend's /auth/github/callback route.
    """
    redirect_uri = redirect_uri or f"{settings.frontend_url}/auth/github/callback"
    try:
        url = build_authorize_url(auth_type, redirect_uri)
    except GitHubAPIError as e:
        raise github_http_error(e) from None
    return AuthorizeResponse(url=url)


@router.post("/github/callback", response_model=CallbackResponse)
async def github_callback(
    data: CallbackRequest,
    db: AsyncSession = Depends(get_db),
) -> CallbackResponse:
    """
    Exchange the temporary code for a token and record the user.

    Returns the access token so the frontend can use it for later calls.
    """
    try:
        access_token = await exchange_code_for_token(data.code, data.redirect_uri, data.auth_type)
        profile = await GitHubService(access_token).get_authenticated_user()
    except GitHubAPIError as e:
        raise github_http_error(e) from None

    user = await user_ops.upsert_from_github(
        db,
        github_user_id=str(profile.id),
        login=profile.login,
        name=profile.name,
        avatar_url=profile.avatar_url,
    )
    logger.info(f"GitHub sign-in for {profile.login} ({data.auth_type})")

    return CallbackResponse(user_id=str(user.id), login=user.login, access_token=access_token)


@router.get("/users/{github_user_id}", response_model=UserResponse)
async def get_user(
    github_user_id: str,
    db: AsyncSession = Depends(get_db),
) -> UserResponse:
    """Look up a signed-in user by GitHub user id."""
    user = await user_ops.get_by_github_user_id(db, github_user_id)
    if user is None:
        raise NotFoundError("User")
    return UserResponse(
        id=str(user.id),
        github_user_id=user.github_user_id,
        login=user.login,
        name=user.name,
        avatar_url=user.avatar_url,
    )
