"""Configuration for the Story Spoiler suite.

Settings come from environment variables with literal fallbacks:
- `BASE_URL`            root of the API under test
- `TEST_USER_NAME`      account used for the JWT bootstrap
- `TEST_USER_PASSWORD`  password for that account

Blank values count as unset. Validation is done by a Pydantic model so a bad
base URL is reported before any request leaves the process. Entry points call
`load_dotenv_files()` first so a local `.env` can supply the variables.
"""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError as PydanticValidationError, field_validator

from story_spoiler.models.story import Credentials


DEFAULT_BASE_URL = "https://d3s5nxhwblsjbi.cloudfront.net"
DEFAULT_USER_NAME = "DenisTestUser"
DEFAULT_USER_PASSWORD = "DenisTestUser123"

logger = logging.getLogger(__name__)


class Settings(BaseModel):
    base_url: str = DEFAULT_BASE_URL
    user_name: str = DEFAULT_USER_NAME
    password: str = DEFAULT_USER_PASSWORD

    @field_validator("base_url")
    @classmethod
    def base_url_must_be_http(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if not (v.startswith("http://") or v.startswith("https://")):
            raise ValueError("BASE_URL must start with http:// or https://")
        return v

    @field_validator("user_name")
    @classmethod
    def user_name_must_be_non_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("TEST_USER_NAME must be a non-empty string")
        return v.strip()

    @property
    def credentials(self) -> Credentials:
        return Credentials(userName=self.user_name, password=self.password)


def _env(env: Mapping[str, str], key: str, default: str) -> str:
    value = env.get(key)
    if value is None or not str(value).strip():
        return default
    return str(value)


def load_dotenv_files() -> None:
    """Load `.env` without overriding variables that are already exported."""
    load_dotenv(override=False)


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Build validated settings from `env` (defaults to `os.environ`)."""
    source: Mapping[str, str] = os.environ if env is None else env
    try:
        return Settings(
            base_url=_env(source, "BASE_URL", DEFAULT_BASE_URL),
            user_name=_env(source, "TEST_USER_NAME", DEFAULT_USER_NAME),
            password=_env(source, "TEST_USER_PASSWORD", DEFAULT_USER_PASSWORD),
        )
    except PydanticValidationError as e:
        logger.error("Invalid suite configuration: %s", e)
        raise


__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_USER_NAME",
    "DEFAULT_USER_PASSWORD",
    "Settings",
    "load_dotenv_files",
    "load_settings",
]
