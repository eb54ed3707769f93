"""Business logic services for the Seekers of Dao forum."""

from .feed import FeedService
from .google_identity import GoogleIdentityProvider
from .identity import IdentityResolver, ResolvedIdentity
from .sects import SectMembershipService
from .session_context import SessionContext

__all__ = [
    "FeedService",
    "GoogleIdentityProvider",
    "IdentityResolver", "ResolvedIdentity",
    "SectMembershipService",
    "SessionContext",
]
