from app.models.event import Event, EventType
from app.models.repository import Repository, RepositoryUpsert
from app.models.user import User

__all__ = [
    "Event",
    "EventType",
    "Repository",
    "RepositoryUpsert",
    "User",
]
