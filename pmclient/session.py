"""Signed-in session state.

The store only holds what sign-in returned. Reading the subject id out of the
access token does not verify the signature; the API does that on every call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import jwt

from pmclient.errors import NotAuthenticatedError
from pmclient.models import CurrentUser

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Tokens:
    access_token: str
    refresh_token: str | None = None


@dataclass(frozen=True)
class AuthSession:
    tokens: Tokens | None = None
    user_sub: str | None = None


class SessionStore:
    """Holds the token pair of the signed-in user."""

    def __init__(self, tokens: Tokens | None = None):
        self._tokens = tokens

    @property
    def tokens(self) -> Tokens | None:
        return self._tokens

    def set_tokens(self, access_token: str, refresh_token: str | None = None) -> None:
        self._tokens = Tokens(access_token=access_token, refresh_token=refresh_token)

    def clear(self) -> None:
        self._tokens = None

    def _claims(self) -> dict:
        if self._tokens is None:
            return {}
        try:
            return jwt.decode(self._tokens.access_token, options={"verify_signature": False})
        except jwt.InvalidTokenError as e:
            logger.warning(f"Could not read claims from access token: {e}")
            return {}

    async def fetch_auth_session(self) -> AuthSession:
        """Current tokens and subject id; both None when signed out."""
        if self._tokens is None:
            return AuthSession()
        return AuthSession(tokens=self._tokens, user_sub=self._claims().get("sub"))

    async def get_current_user(self) -> CurrentUser:
        claims = self._claims()
        if not claims.get("sub"):
            raise NotAuthenticatedError()
        return CurrentUser(username=claims.get("username", ""), user_id=claims["sub"])
