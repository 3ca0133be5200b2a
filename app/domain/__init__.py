from app.domain.event_operations import event_ops
from app.domain.repository_operations import repository_ops
from app.domain.user_operations import user_ops

__all__ = [
    "event_ops",
    "repository_ops",
    "user_ops",
]
