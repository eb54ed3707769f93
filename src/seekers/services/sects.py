"""Sect membership: joining existing sects and founding new ones."""
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from seekers.core.settings import Settings, settings as default_settings
from seekers.models import Sect, User
from seekers.services.errors import SectAlreadyExistsError, SectNotFoundError, ValidationError
from seekers.services.feed import clean_text

logger = logging.getLogger(__name__)


class SectMembershipService:
    """Gate which sect feed a user may post to.

    A user belongs to at most one sect; joining or founding replaces the
    previous affiliation.
    """

    def __init__(self, db: Session, settings: Settings | None = None) -> None:
        self.db = db
        self.settings = settings or default_settings

    def _clean_name(self, sect_name: str | None) -> str:
        name = clean_text(sect_name, "Sect name", self.settings.sect_name_max_length)
        # Sect names are a single URL path segment.
        if "/" in name:
            raise ValidationError('Sect name cannot contain "/"')
        return name

    def list_sects(self) -> list[Sect]:
        """Return all registered sects, oldest first."""
        stmt = select(Sect).order_by(Sect.founded_at.asc(), Sect.name.asc())
        return list(self.db.scalars(stmt))

    def join(self, user: User, sect_name: str | None) -> Sect:
        """Join an existing sect.

        Raises:
            SectNotFoundError: If no sect with that name is registered.
        """
        name = self._clean_name(sect_name)
        sect = self.db.get(Sect, name)
        if sect is None:
            raise SectNotFoundError(name)

        user.sect_name = sect.name
        self.db.add(user)
        self.db.commit()
        logger.info("%s joined sect %s", user.username, sect.name)
        return sect

    def found(self, user: User, sect_name: str | None) -> Sect:
        """Register a new sect and make ``user`` its first member.

        Raises:
            SectAlreadyExistsError: If the name is already registered.
        """
        name = self._clean_name(sect_name)
        if self.db.get(Sect, name) is not None:
            raise SectAlreadyExistsError(name)

        sect = Sect(name=name, founder_id=user.id)
        self.db.add(sect)
        try:
            self.db.flush()
        except IntegrityError as exc:
            # Lost a race with a concurrent founder; the primary key decides.
            self.db.rollback()
            raise SectAlreadyExistsError(name) from exc

        user.sect_name = sect.name
        self.db.add(user)
        self.db.commit()
        logger.info("%s founded sect %s", user.username, sect.name)
        return sect
