"""HTTP routes for the forum."""

from .endpoints import (
    auth_router,
    feed_router,
    profile_router,
    sects_router,
    system_router,
)

__all__ = [
    "auth_router",
    "feed_router",
    "profile_router",
    "sects_router",
    "system_router",
]
