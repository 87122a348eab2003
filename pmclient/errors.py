"""Error types surfaced by the client."""

from __future__ import annotations

from typing import Any

import httpx

FETCH_ERROR = "FETCH_ERROR"
CUSTOM_ERROR = "CUSTOM_ERROR"


class ApiError(Exception):
    """Structured failure handed back to the calling component.

    ``status`` is the HTTP status code, or ``FETCH_ERROR`` when no response
    arrived, or ``CUSTOM_ERROR`` for failures raised inside the client.
    """

    def __init__(self, status: int | str, message: str, data: Any = None):
        super().__init__(message)
        self.status = status
        self.message = message
        self.data = data

    def __repr__(self) -> str:
        return f"ApiError(status={self.status!r}, message={self.message!r})"

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ApiError":
        try:
            data = response.json()
        except ValueError:
            data = response.text
        message = None
        if isinstance(data, dict):
            message = data.get("message") or data.get("error") or data.get("detail")
        if not message:
            message = f"Request failed with status {response.status_code}"
        return cls(response.status_code, str(message), data)

    @classmethod
    def from_request_error(cls, exc: httpx.RequestError) -> "ApiError":
        return cls(FETCH_ERROR, str(exc) or exc.__class__.__name__)


class NotAuthenticatedError(ApiError):
    """No signed-in user in the session."""

    def __init__(self, message: str = "The user is not authenticated"):
        super().__init__(CUSTOM_ERROR, message)
