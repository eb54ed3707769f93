"""Profile customisation helpers."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from seekers.core.settings import Settings, settings as default_settings
from seekers.models import User
from seekers.services.errors import ValidationError

logger = logging.getLogger(__name__)

__all__ = ["choose_avatar", "choose_frame"]


def _pick(choice: str | None, catalogue: list[str], label: str) -> str:
    choice = (choice or "").strip()
    if choice not in catalogue:
        raise ValidationError(f"Unknown {label}")
    return choice


def choose_avatar(
    db: Session,
    user: User,
    avatar_img: str | None,
    settings: Settings | None = None,
) -> User:
    """Set the user's avatar image to an entry from the configured catalogue."""
    settings = settings or default_settings
    user.avatar_img = _pick(avatar_img, settings.avatar_choices, "avatar")
    db.add(user)
    db.commit()
    logger.debug("%s picked avatar %s", user.username, user.avatar_img)
    return user


def choose_frame(
    db: Session,
    user: User,
    avatar_frame: str | None,
    settings: Settings | None = None,
) -> User:
    """Set the user's avatar frame to an entry from the configured catalogue."""
    settings = settings or default_settings
    user.avatar_frame = _pick(avatar_frame, settings.frame_choices, "frame")
    db.add(user)
    db.commit()
    logger.debug("%s picked frame %s", user.username, user.avatar_frame)
    return user
