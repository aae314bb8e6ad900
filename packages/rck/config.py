"""Client configuration for the RCK SDK."""

from __future__ import annotations

import logging
import os

from pydantic import BaseModel, Field, field_validator

from rck._version import __version__

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://relatioe-kernel-zdibtqjzxm.us-west-1.fcapp.run"
DEFAULT_TIMEOUT_S = 60.0
API_KEY_HEADER = "topos-api-key"


class ClientConfig(BaseModel):
    """Configuration for Client / AsyncClient.

    All settings are fixed once the client is built.

    Args:
        api_key: Service API key, sent under the ``topos-api-key`` header
        base_url: Base URL prepended to every endpoint path
        timeout_s: Deadline for each call in seconds, covering connect
            through reading the whole response body
        follow_redirects: Follow HTTP redirects
        user_agent: Client-identification header value
        redact_headers: Headers to redact in debug logs (case-insensitive)
    """

    model_config = {"frozen": True}

    api_key: str = Field(repr=False)  # Don't leak secrets in repr
    base_url: str = DEFAULT_BASE_URL
    timeout_s: float = Field(default=DEFAULT_TIMEOUT_S, gt=0)
    follow_redirects: bool = True
    user_agent: str = f"RCK-Python-SDK/{__version__}"
    redact_headers: tuple[str, ...] = (
        API_KEY_HEADER,
        "authorization",
        "cookie",
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Ensure base_url is a valid URL."""
        if not v:
            raise ValueError("base_url cannot be empty")
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return v

    @classmethod
    def from_env(cls, **overrides: object) -> ClientConfig:
        """Build a config from ``RCK_*`` environment variables.

        Reads RCK_API_KEY, RCK_BASE_URL and RCK_TIMEOUT. Keyword overrides
        take precedence over the environment.

        Example:
            >>> config = ClientConfig.from_env(timeout_s=10)
        """
        values: dict[str, object] = {"api_key": os.getenv("RCK_API_KEY", "")}

        base_url = os.getenv("RCK_BASE_URL")
        if base_url:
            values["base_url"] = base_url

        timeout = os.getenv("RCK_TIMEOUT")
        if timeout:
            values["timeout_s"] = timeout

        values.update(overrides)
        logger.debug("Loaded client config from environment", extra={"keys": sorted(values)})
        return cls.model_validate(values)
