"""API endpoint modules."""

from .auth import router as auth_router
from .feed import router as feed_router
from .profile import router as profile_router
from .sects import router as sects_router
from .system import router as system_router

__all__ = [
    "auth_router",
    "feed_router",
    "profile_router",
    "sects_router",
    "system_router",
]
