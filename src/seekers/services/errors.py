"""Exceptions raised by the forum services.

Handlers map these onto HTTP responses: form routes redirect back with an
``error`` query parameter, JSON routes translate them to status codes.
"""

from __future__ import annotations


class ForumError(RuntimeError):
    """Base class for expected, user-facing failures."""

    status_code = 400


class NotFoundError(ForumError):
    """A post or user lookup missed."""

    status_code = 404


class PostNotFoundError(NotFoundError):
    def __init__(self, post_id: int) -> None:
        super().__init__("Post not found")
        self.post_id = post_id


class UserNotFoundError(NotFoundError):
    def __init__(self, username: str) -> None:
        super().__init__("Username doesn't exist")
        self.username = username


class ConflictError(ForumError):
    """The request clashes with existing state."""

    status_code = 409


class UsernameTakenError(ConflictError):
    def __init__(self, username: str) -> None:
        super().__init__("Username already exists")
        self.username = username


class IdentityAlreadyBoundError(ConflictError):
    def __init__(self) -> None:
        super().__init__("This account is already registered")


class SectNotFoundError(ConflictError):
    def __init__(self, sect_name: str) -> None:
        super().__init__("Sect doesn't exist")
        self.sect_name = sect_name


class SectAlreadyExistsError(ConflictError):
    def __init__(self, sect_name: str) -> None:
        super().__init__("Sect already exists")
        self.sect_name = sect_name


class PermissionDeniedError(ForumError):
    """The caller is authenticated but not allowed to act on the resource."""

    status_code = 403


class NotPostOwnerError(PermissionDeniedError):
    def __init__(self, post_id: int) -> None:
        super().__init__("You can only delete your own posts")
        self.post_id = post_id


class NotSectMemberError(PermissionDeniedError):
    def __init__(self, sect_name: str) -> None:
        super().__init__("You are not a member of this sect")
        self.sect_name = sect_name


class ValidationError(ForumError):
    """Submitted form data failed validation."""


class UpstreamError(ForumError):
    """An external dependency failed."""

    status_code = 502


class IdentityProviderError(UpstreamError):
    """The identity provider could not resolve the login."""
