"""Internal API endpoints: protected by shared secret, not user auth.

Called by trusted producers (backfill jobs, webhook relays) that already
hold normalized events. They bypass the GitHub session and instead validate
a shared secret via the X-Internal-Secret header.
"""

import logging
import secrets

from fastapi import APIRouter, Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.config.settings import settings
from app.core.database import get_db
from app.core.exceptions import ForbiddenError
from app.schemas.ingest import IngestRequest, IngestResponse
from app.services.ingestion import ingest_events

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/internal", tags=["internal"])


def verify_internal_secret(x_internal_secret: str = Header(...)) -> None:
    """Validate the X-Internal-Secret header against the configured secret."""
    if not settings.internal_api_secret:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Internal API secret not configured",
        )
    if not secrets.compare_digest(x_internal_secret, settings.internal_api_secret):
        raise ForbiddenError("Invalid internal secret")


@router.post(
    "/ingest",
    response_model=IngestResponse,
    dependencies=[Depends(verify_internal_secret)],
)
async def ingest(
    data: IngestRequest,
    db: AsyncSession = Depends(get_db),
) -> IngestResponse:
    """
    Upsert a repository by GitHub id and append a batch of events.

    Events are not deduplicated: posting the same batch twice stores it twice.
    """
    repo, inserted = await ingest_events(db, data)
    return IngestResponse(repository_id=str(repo.id), inserted=inserted)
