"""RCK client facade.

Owns one transport and exposes the compute and image builders built on it,
plus a connectivity self-test.

Example:
    >>> from rck import Client, AnalyzeParams
    >>> with Client("my-api-key") as client:
    ...     result = client.compute.analyze(
    ...         AnalyzeParams(text="...", task="...", output_format="basic_analysis")
    ...     )
    ...     print(result["emotion"])
"""

from __future__ import annotations

import logging

import httpx

from rck.api.http.transport import AsyncTransport, Transport
from rck.compute.kernel import AsyncComputeKernel, ComputeKernel
from rck.compute.params import AnalyzeParams
from rck.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_S, ClientConfig
from rck.errors import APIKeyRequiredError, ConnectionTestError, RCKError
from rck.image.generator import AsyncImageGenerator, ImageGenerator

logger = logging.getLogger(__name__)

# Minimal analyze call used by test_connection
_CONNECTION_TEST_PARAMS = AnalyzeParams(
    text="test",
    task="simple analysis",
    output_format="basic_analysis",
)


def _build_config(api_key: str | None, base_url: str, timeout: float) -> ClientConfig:
    if not api_key:
        raise APIKeyRequiredError()
    return ClientConfig(api_key=api_key, base_url=base_url, timeout_s=timeout)


class Client:
    """Blocking client for the RCK service.

    Safe for concurrent use from multiple threads; all state is fixed at
    construction.

    Args:
        api_key: Service API key (required)
        base_url: Base URL override
        timeout: Request timeout in seconds
        transport: Optional custom HTTPX transport (useful for testing)
        config: Full configuration; when given, api_key, base_url and
            timeout are ignored

    Attributes:
        compute: Text computation operations
        image: Image generation operations

    Raises:
        APIKeyRequiredError: If api_key is empty
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_S,
        transport: httpx.BaseTransport | None = None,
        config: ClientConfig | None = None,
    ) -> None:
        if config is None:
            config = _build_config(api_key, base_url, timeout)
        self.config = config
        self._transport = Transport(self.config, transport=transport)
        self.compute = ComputeKernel(self._transport)
        self.image = ImageGenerator(self._transport)

    @classmethod
    def from_config(
        cls, config: ClientConfig, *, transport: httpx.BaseTransport | None = None
    ) -> Client:
        """Build a client from an explicit configuration."""
        return cls(config=config, transport=transport)

    @classmethod
    def from_env(cls, *, transport: httpx.BaseTransport | None = None) -> Client:
        """Build a client from ``RCK_*`` environment variables."""
        return cls.from_config(ClientConfig.from_env(), transport=transport)

    def close(self) -> None:
        """Release pooled connections."""
        self._transport.close()

    def __enter__(self) -> Client:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def test_connection(self, *, timeout: float | None = None) -> None:
        """Verify the API key and network path with a trivial analysis.

        Raises:
            ConnectionTestError: Wrapping the underlying error as ``cause``
        """
        try:
            self.compute.analyze(_CONNECTION_TEST_PARAMS, timeout=timeout)
        except RCKError as e:
            raise ConnectionTestError(e) from e
        logger.debug("Connection test passed", extra={"base_url": self.config.base_url})


class AsyncClient:
    """Async client for the RCK service. Mirrors Client.

    Example:
        >>> async with AsyncClient("my-api-key") as client:
        ...     result = await client.image.generate(params)
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_S,
        transport: httpx.AsyncBaseTransport | None = None,
        config: ClientConfig | None = None,
    ) -> None:
        if config is None:
            config = _build_config(api_key, base_url, timeout)
        self.config = config
        self._transport = AsyncTransport(self.config, transport=transport)
        self.compute = AsyncComputeKernel(self._transport)
        self.image = AsyncImageGenerator(self._transport)

    @classmethod
    def from_config(
        cls, config: ClientConfig, *, transport: httpx.AsyncBaseTransport | None = None
    ) -> AsyncClient:
        """Build a client from an explicit configuration."""
        return cls(config=config, transport=transport)

    @classmethod
    def from_env(cls, *, transport: httpx.AsyncBaseTransport | None = None) -> AsyncClient:
        """Build a client from ``RCK_*`` environment variables."""
        return cls.from_config(ClientConfig.from_env(), transport=transport)

    async def aclose(self) -> None:
        """Release pooled connections."""
        await self._transport.aclose()

    async def __aenter__(self) -> AsyncClient:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def test_connection(self, *, timeout: float | None = None) -> None:
        """Verify the API key and network path with a trivial analysis.

        Raises:
            ConnectionTestError: Wrapping the underlying error as ``cause``
        """
        try:
            await self.compute.analyze(_CONNECTION_TEST_PARAMS, timeout=timeout)
        except RCKError as e:
            raise ConnectionTestError(e) from e
        logger.debug("Connection test passed", extra={"base_url": self.config.base_url})
