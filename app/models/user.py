from sqlmodel import Field

from app.models.base import TimestampMixin, UUIDMixin


class User(UUIDMixin, TimestampMixin, table=True):
    """
    GitHub user who has signed in.

    Records are upserted by GitHub user id on every successful OAuth callback,
    so login, name and avatar always reflect the latest profile.
    """

    __tablename__ = "users"

    github_user_id: str = Field(max_length=50, unique=True, index=True, nullable=False)
    login: str = Field(max_length=255, nullable=False)
    name: str | None = Field(default=None, max_length=255)
    avatar_url: str | None = Field(default=None, max_length=500)
