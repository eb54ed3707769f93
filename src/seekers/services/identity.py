"""Identity resolution: mapping provider accounts and usernames to users."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from seekers.core.security import (
    LOCAL_PROVIDER,
    derive_identity_hash,
    new_local_subject,
)
from seekers.core.settings import Settings, settings as default_settings
from seekers.db.time import utcnow
from seekers.models import User
from seekers.services.errors import (
    IdentityAlreadyBoundError,
    UserNotFoundError,
    UsernameTakenError,
)
from seekers.services.feed import clean_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedIdentity:
    """Outcome of resolving an external account.

    ``user`` is None when the identity has never been seen; the caller should
    then ask for a username and call :meth:`IdentityResolver.register_username`
    with ``identity_hash``.
    """

    identity_hash: str
    user: User | None

    @property
    def is_known(self) -> bool:
        return self.user is not None


class IdentityResolver:
    """Find or create users for provider logins and username registrations."""

    def __init__(self, db: Session, settings: Settings | None = None) -> None:
        self.db = db
        self.settings = settings or default_settings

    def identity_hash(self, provider: str, subject: str) -> str:
        return derive_identity_hash(provider, subject, self.settings.identity_key)

    def get_user(self, user_id: int) -> User | None:
        return self.db.get(User, user_id)

    def find_by_username(self, username: str) -> User | None:
        return self.db.scalar(select(User).where(User.username == username))

    def find_by_identity_hash(self, identity_hash: str) -> User | None:
        return self.db.scalar(select(User).where(User.identity_hash == identity_hash))

    def resolve(self, provider: str, subject: str) -> ResolvedIdentity:
        """Look up the user bound to ``subject`` at ``provider``."""
        identity_hash = self.identity_hash(provider, subject)
        user = self.find_by_identity_hash(identity_hash)
        return ResolvedIdentity(identity_hash=identity_hash, user=user)

    def register_username(self, username: str | None, identity_hash: str) -> User:
        """Create a user binding ``username`` to ``identity_hash``.

        Raises:
            ValidationError: If the username is empty or too long.
            UsernameTakenError: If the username is already in use.
            IdentityAlreadyBoundError: If the identity already has a user.
        """
        username = clean_text(username, "Username", self.settings.username_max_length)
        if self.find_by_username(username) is not None:
            raise UsernameTakenError(username)
        if self.find_by_identity_hash(identity_hash) is not None:
            raise IdentityAlreadyBoundError()

        avatars = self.settings.avatar_choices
        user = User(
            username=username,
            identity_hash=identity_hash,
            avatar_img=avatars[0] if avatars else None,
            avatar_frame=None,
            member_since=utcnow(),
            sect_name=None,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as exc:
            # A concurrent registration won; report whichever column collided.
            self.db.rollback()
            if self.find_by_identity_hash(identity_hash) is not None:
                raise IdentityAlreadyBoundError() from exc
            raise UsernameTakenError(username) from exc

        logger.info("Registered user %s (id=%s)", user.username, user.id)
        return user

    def register_local(self, username: str | None) -> User:
        """Register a user without an external provider."""
        identity_hash = self.identity_hash(LOCAL_PROVIDER, new_local_subject())
        return self.register_username(username, identity_hash)

    def login_local(self, username: str | None) -> User:
        """Return the user named ``username``.

        Raises:
            UserNotFoundError: If no such user exists.
        """
        name = (username or "").strip()
        user = self.find_by_username(name) if name else None
        if user is None:
            raise UserNotFoundError(name)
        return user
