from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User


class UserOperations:
    """Operations for User model."""

    async def get_by_github_user_id(
        self,
        db: AsyncSession,
        github_user_id: str,
    ) -> User | None:
        """Get a user by their GitHub user ID."""
        statement = select(User).where(User.github_user_id == github_user_id)
        result = await db.execute(statement)
        return result.scalar_one_or_none()

    async def upsert_from_github(
        self,
        db: AsyncSession,
        github_user_id: str,
        login: str,
        name: str | None = None,
        avatar_url: str | None = None,
    ) -> User:
        """Store a signed-in GitHub user, refreshing the profile if already known."""
        user = await self.get_by_github_user_id(db, github_user_id)
        if user is None:
            user = User(github_user_id=github_user_id, login=login)
        user.login = login
        user.name = name
        user.avatar_url = avatar_url
        db.add(user)
        await db.flush()
        await db.refresh(user)
        return user


user_ops = UserOperations()
