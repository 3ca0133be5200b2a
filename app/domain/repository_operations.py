"""Repository operations keyed by the GitHub repository id.

The GitHub id is the only stable identity: names change on rename or
transfer, so lookups and upserts never go through full_name.
"""

import logging
from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.repository import Repository, RepositoryUpsert

logger = logging.getLogger(__name__)


class RepositoryOperations:
    """Lookup and upsert for the Repository model."""

    async def get_by_github_id(
        self,
        db: AsyncSession,
        github_id: int,
    ) -> Repository | None:
        """Find the repository row for a GitHub repository ID."""
        statement = select(Repository).where(Repository.github_id == github_id).limit(1)
        result = await db.execute(statement)
        return result.scalar_one_or_none()

    async def upsert(
        self,
        db: AsyncSession,
        obj_in: RepositoryUpsert,
    ) -> Repository:
        """Create the repository or refresh its name and visibility.

        Not isolated against a concurrent ingestion of the same repository:
        the last write wins.
        """
        db_obj = await self.get_by_github_id(db, obj_in.github_id)
        if db_obj is None:
            db_obj = Repository(
                github_id=obj_in.github_id,
                name=obj_in.name,
                full_name=obj_in.full_name,
                is_private=obj_in.is_private,
            )
            logger.info(f"Registering repository {obj_in.full_name} ({obj_in.github_id})")
        else:
            db_obj.name = obj_in.name
            db_obj.full_name = obj_in.full_name
            db_obj.is_private = obj_in.is_private
            db_obj.updated_at = datetime.now(UTC)
        db.add(db_obj)
        await db.flush()
        await db.refresh(db_obj)
        return db_obj


repository_ops = RepositoryOperations()
