"""Sign-up and sign-in against the identity endpoints.

After a successful sign-up the adapter forwards a minimal user record
(username, email, subject id) to the user directory so the new account has
an application user to own tasks.
"""

from __future__ import annotations

import logging
from typing import Any

from pmclient.client import ApiClient, MutationResult
from pmclient.errors import ApiError, CUSTOM_ERROR

logger = logging.getLogger(__name__)


class IdentityAdapter:
    def __init__(self, client: ApiClient):
        self.client = client

    async def sign_in(self, username: str, password: str) -> dict[str, Any]:
        data = await self.client.request(
            "POST",
            "/auth/login",
            json={"username": username, "password": password},
            skip_auth=True,
        )
        self.client.session.set_tokens(data["access"], data.get("refresh"))
        # cached results belong to whoever was signed in before
        self.client.cache.reset()
        logger.info(f"Signed in as {username}")
        return data

    async def sign_up(
        self,
        username: str,
        email: str,
        password: str,
        profile_picture_url: str | None = None,
        team_id: int | None = None,
    ) -> MutationResult:
        """Register, sign in, then create the application user record.

        Registration and sign-in failures raise ApiError; the user-record step
        comes back as a MutationResult like any other mutation.
        """
        registration = await self.client.request(
            "POST",
            "/auth/register",
            json={"username": username, "email": email, "password": password},
            skip_auth=True,
        )
        await self.sign_in(username, password)

        user_sub = registration.get("userSub")
        if not user_sub:
            raise ApiError(CUSTOM_ERROR, "Sign-up response did not include a subject id", registration)

        record: dict[str, Any] = {"username": username, "email": email, "cognitoId": user_sub}
        if profile_picture_url:
            record["profilePictureUrl"] = profile_picture_url
        if team_id:
            record["teamId"] = team_id
        result = await self.client.create_user(record)
        if result.is_error:
            logger.error(f"Could not create user record for {username}: {result.error.message}")
        return result

    async def sign_out(self) -> None:
        tokens = self.client.session.tokens
        if tokens is not None:
            try:
                await self.client.request("POST", "/auth/logout", json={"refresh_token": tokens.refresh_token})
            except ApiError as e:
                logger.warning(f"Logout request failed, clearing local session anyway: {e.message}")
        self.client.session.clear()
        self.client.cache.reset()
