"""Client configuration.

Values are read from the environment (after loading a local ``.env``) so the
same code points at a dev server or a deployed API without edits.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

DEFAULT_BASE_URL = "http://localhost:8000"


class ClientConfig(BaseModel):
    """Settings for talking to the project management API."""

    base_url: str = Field(default=DEFAULT_BASE_URL)
    timeout: float = Field(default=30.0)
    timezone: str = Field(default="UTC")


def load_config() -> ClientConfig:
    """Build a ClientConfig from PM_API_BASE_URL, PM_API_TIMEOUT and PM_TIMEZONE."""
    load_dotenv()
    return ClientConfig(
        base_url=os.getenv("PM_API_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
        timeout=float(os.getenv("PM_API_TIMEOUT", "30")),
        timezone=os.getenv("PM_TIMEZONE", "UTC"),
    )
