"""Google OAuth 2.0 client used by the sign-in callback.

Only the authorization-code exchange and the userinfo lookup are needed: the
forum stores nothing from Google except a keyed hash of the ``sub`` claim.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from urllib.parse import urlencode

import httpx

from seekers.core.security import GOOGLE_PROVIDER
from seekers.core.settings import settings
from seekers.services.errors import IdentityProviderError

logger = logging.getLogger(__name__)

AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
TOKEN_URL = "https://oauth2.googleapis.com/token"
USERINFO_URL = "https://openidconnect.googleapis.com/v1/userinfo"

HTTP_OK = 200


class GoogleIdentityProvider:
    """Resolve an authorization code into a stable Google account subject."""

    name = GOOGLE_PROVIDER

    def __init__(
        self,
        client_id: str | None,
        client_secret: str | None,
        redirect_uri: str,
        *,
        timeout_seconds: float = 10.0,
    ) -> None:
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.timeout_seconds = timeout_seconds
        self._client: httpx.AsyncClient | None = None
        self._client_lock = asyncio.Lock()

    @property
    def enabled(self) -> bool:
        return bool(self.client_id and self.client_secret)

    async def _ensure_client(self) -> httpx.AsyncClient:
        async with self._client_lock:
            if self._client is None:
                self._client = httpx.AsyncClient(timeout=httpx.Timeout(self.timeout_seconds))
        return self._client

    def authorization_url(self, state: str) -> str:
        """Return the consent-screen URL the browser should be sent to."""
        if not self.enabled:
            raise IdentityProviderError("Google sign-in is not configured")
        query = urlencode(
            {
                "client_id": self.client_id,
                "redirect_uri": self.redirect_uri,
                "response_type": "code",
                "scope": "openid",
                "state": state,
                "prompt": "select_account",
            }
        )
        return f"{AUTHORIZE_URL}?{query}"

    async def fetch_subject(self, code: str) -> str:
        """Exchange ``code`` for tokens and return the account's ``sub`` claim.

        Raises:
            IdentityProviderError: On network failures, non-200 answers or a
                payload without a subject.
        """
        if not self.enabled:
            raise IdentityProviderError("Google sign-in is not configured")

        client = await self._ensure_client()
        try:
            token_response = await client.post(
                TOKEN_URL,
                data={
                    "code": code,
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "redirect_uri": self.redirect_uri,
                    "grant_type": "authorization_code",
                },
            )
            token_payload = self._json_or_raise(token_response, "token exchange")
            access_token = token_payload.get("access_token")
            if not access_token:
                raise IdentityProviderError("Google did not return an access token")

            userinfo_response = await client.get(
                USERINFO_URL,
                headers={"Authorization": f"Bearer {access_token}"},
            )
            userinfo = self._json_or_raise(userinfo_response, "userinfo")
        except httpx.HTTPError as exc:
            logger.warning("Google sign-in request failed: %s", exc)
            raise IdentityProviderError("Could not reach Google") from exc

        subject = userinfo.get("sub")
        if not subject:
            raise IdentityProviderError("Google did not return an account id")
        return str(subject)

    @staticmethod
    def _json_or_raise(response: httpx.Response, step: str) -> dict[str, Any]:
        if response.status_code != HTTP_OK:
            logger.warning("Google %s failed with HTTP %s", step, response.status_code)
            raise IdentityProviderError(f"Google {step} failed")
        try:
            payload = response.json()
        except ValueError as exc:
            raise IdentityProviderError(f"Google {step} returned invalid JSON") from exc
        if not isinstance(payload, dict):
            raise IdentityProviderError(f"Google {step} returned an unexpected payload")
        return payload

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        async with self._client_lock:
            if self._client is not None:
                await self._client.aclose()
                self._client = None


_provider: GoogleIdentityProvider | None = None


def get_identity_provider() -> GoogleIdentityProvider:
    """Return the process-wide Google provider configured from settings."""
    global _provider
    if _provider is None:
        _provider = GoogleIdentityProvider(
            settings.google_client_id,
            settings.google_client_secret,
            settings.google_redirect_uri,
            timeout_seconds=settings.google_http_timeout_seconds,
        )
    return _provider
