"""Server-side session state referenced by an opaque cookie value."""
from __future__ import annotations

import hmac
import logging
from collections.abc import MutableMapping
from typing import Any

from sqlalchemy.orm import Session

from seekers.core.security import new_oauth_state, new_session_id
from seekers.models import User, WebSession

logger = logging.getLogger(__name__)

SESSION_KEY = "sid"


class SessionContext:
    """Per-request view of the caller's session.

    ``cookie`` is the signed cookie mapping maintained by Starlette's
    ``SessionMiddleware``; it only ever holds the opaque session id. Everything
    else lives in the ``web_sessions`` table.
    """

    def __init__(self, cookie: MutableMapping[str, Any], db: Session) -> None:
        self.cookie = cookie
        self.db = db
        self._record: WebSession | None = None
        self._loaded = False

    @property
    def record(self) -> WebSession | None:
        if not self._loaded:
            session_id = self.cookie.get(SESSION_KEY)
            self._record = self.db.get(WebSession, session_id) if session_id else None
            if session_id and self._record is None:
                # Cookie outlived its server-side row.
                self.cookie.pop(SESSION_KEY, None)
            self._loaded = True
        return self._record

    def _ensure_record(self) -> WebSession:
        record = self.record
        if record is None:
            record = WebSession(id=new_session_id())
            self.db.add(record)
            self.cookie[SESSION_KEY] = record.id
            self._record = record
        return record

    @property
    def user_id(self) -> int | None:
        record = self.record
        return record.user_id if record else None

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    def current_user(self) -> User | None:
        """Return the logged-in user, or None for anonymous or stale sessions."""
        user_id = self.user_id
        if user_id is None:
            return None
        return self.db.get(User, user_id)

    def login(self, user: User) -> None:
        """Bind ``user`` to a fresh session id."""
        old = self.record
        if old is not None:
            self.db.delete(old)
        record = WebSession(id=new_session_id(), user_id=user.id)
        self.db.add(record)
        self.db.commit()
        self.cookie[SESSION_KEY] = record.id
        self._record = record
        self._loaded = True
        logger.info("User %s logged in", user.username)

    def logout(self) -> None:
        """Drop the server-side row and the cookie."""
        record = self.record
        if record is not None:
            self.db.delete(record)
            self.db.commit()
        self.cookie.clear()
        self._record = None

    def begin_oauth(self) -> str:
        """Store and return a new OAuth ``state`` value."""
        record = self._ensure_record()
        record.oauth_state = new_oauth_state()
        self.db.commit()
        return record.oauth_state

    def consume_oauth_state(self, state: str | None) -> bool:
        """Return True if ``state`` matches the stored value; the stored value is cleared."""
        record = self.record
        if record is None or not record.oauth_state or not state:
            return False
        expected = record.oauth_state
        record.oauth_state = None
        self.db.commit()
        return hmac.compare_digest(expected, state)

    @property
    def pending_identity(self) -> str | None:
        record = self.record
        return record.pending_identity_hash if record else None

    def set_pending_identity(self, identity_hash: str | None) -> None:
        record = self._ensure_record()
        record.pending_identity_hash = identity_hash
        self.db.commit()
