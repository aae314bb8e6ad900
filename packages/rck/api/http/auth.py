from __future__ import annotations

from collections.abc import AsyncGenerator, Generator

import httpx
from pydantic import BaseModel, Field

from rck.config import API_KEY_HEADER


class ApiKeyAuth(httpx.Auth, BaseModel):
    """Static API key header authentication.

    Supports both sync and async requests.

    Args:
        api_key: API key value
        header_name: Header name for the API key (defaults to ``topos-api-key``)

    Example:
        >>> auth = ApiKeyAuth(api_key="secret")
    """

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    api_key: str = Field(repr=False)  # Don't leak secrets in repr
    header_name: str = API_KEY_HEADER

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        """Apply API key to request (sync).

        Args:
            request: Request to authenticate

        Yields:
            Request with API key header
        """
        request.headers[self.header_name] = self.api_key
        yield request

    async def async_auth_flow(
        self, request: httpx.Request
    ) -> AsyncGenerator[httpx.Request, httpx.Response]:
        """Apply API key to request (async).

        Args:
            request: Request to authenticate

        Yields:
            Request with API key header
        """
        request.headers[self.header_name] = self.api_key
        yield request
