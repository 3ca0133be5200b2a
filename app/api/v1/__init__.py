from app.api.v1 import auth, github, internal, sensors

__all__ = [
    "auth",
    "github",
    "sensors",
    "internal",
]
