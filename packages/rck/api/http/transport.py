"""Authenticated JSON-over-HTTP transport built on HTTPX.

Provides:
- One POST operation per call, no retries
- An overall deadline per call, covering connect through body read
- Structured error classification (auth / API / network / decode)
- Request/response debug logging with header redaction
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from collections.abc import Mapping
from typing import Any

import httpx

from rck.api.http.auth import ApiKeyAuth
from rck.api.http.utils import (
    default_request_id,
    error_message_from_body,
    join_url,
    parse_json_object,
    redact_headers,
    safe_snippet,
)
from rck.config import ClientConfig
from rck.errors import (
    APIError,
    APIKeyRequiredError,
    AuthenticationError,
    DecodeError,
    NetworkError,
    SerializationError,
)

logger = logging.getLogger(__name__)


def encode_payload(payload: Mapping[str, Any]) -> bytes:
    """Serialize a wire payload to JSON bytes.

    Raises:
        SerializationError: If the payload holds values JSON cannot represent
    """
    try:
        return json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise SerializationError(f"failed to marshal request payload: {e}", cause=e) from e


def error_for_status(status_code: int, content: bytes) -> APIError | AuthenticationError:
    """Map an error response (status >= 400) to an SDK exception.

    401/403 become AuthenticationError without looking at the body. Every
    other status becomes APIError, using the body's ``error`` string as the
    message when the body is a JSON object carrying one.

    Args:
        status_code: HTTP status code
        content: Raw response body

    Returns:
        Exception instance to raise
    """
    if status_code in (401, 403):
        return AuthenticationError(status_code=status_code)

    body = parse_json_object(content)
    return APIError(
        error_message_from_body(body),
        status_code=status_code,
        response_data=body,
    )


def decode_response(status_code: int, content: bytes) -> dict[str, Any]:
    """Classify a received response and decode a successful body.

    Args:
        status_code: HTTP status code
        content: Complete response body

    Returns:
        Decoded JSON object

    Raises:
        AuthenticationError: On 401/403
        APIError: On any other status >= 400
        DecodeError: If a successful body is not a JSON object
    """
    if status_code >= 400:
        raise error_for_status(status_code, content)

    try:
        data = json.loads(content)
    except ValueError as e:
        raise DecodeError(
            f"failed to unmarshal successful response: {e} "
            f"(body: {safe_snippet(content)!r})",
            cause=e,
        ) from e

    if not isinstance(data, dict):
        raise DecodeError(
            f"failed to unmarshal successful response: expected a JSON object, "
            f"got {type(data).__name__}"
        )
    return data


def _check_deadline(request: httpx.Request, deadline: float, budget: float) -> None:
    if time.monotonic() > deadline:
        raise httpx.ReadTimeout(f"request exceeded its {budget:g}s deadline", request=request)


def _read_body(response: httpx.Response, deadline: float, budget: float) -> bytes:
    """Read a streamed body chunk by chunk, stopping once the deadline passes."""
    chunks: list[bytes] = []
    for chunk in response.iter_bytes():
        chunks.append(chunk)
        _check_deadline(response.request, deadline, budget)
    _check_deadline(response.request, deadline, budget)
    return b"".join(chunks)


class _TransportBase:
    """State and request preparation shared by the sync and async transports."""

    def __init__(self, config: ClientConfig) -> None:
        if not config.api_key:
            raise APIKeyRequiredError()
        self.config = config
        self.auth = ApiKeyAuth(api_key=config.api_key)

    def _client_options(self) -> dict[str, Any]:
        return {
            "base_url": self.config.base_url,
            "headers": {"User-Agent": self.config.user_agent},
            "timeout": httpx.Timeout(self.config.timeout_s),
            "follow_redirects": self.config.follow_redirects,
            "auth": self.auth,
        }

    def _prepare(
        self, endpoint: str, payload: Mapping[str, Any], base_headers: Mapping[str, str]
    ) -> tuple[str, bytes, dict[str, str]]:
        url = join_url(self.config.base_url, endpoint)
        body = encode_payload(payload)
        req_id = default_request_id()
        headers = {"Content-Type": "application/json", "X-Request-Id": req_id}

        logger.debug(
            "HTTP request",
            extra={
                "endpoint": endpoint,
                "url": url,
                "request_id": req_id,
                "body_bytes": len(body),
                "headers": redact_headers(
                    {**base_headers, **headers}, self.config.redact_headers
                ),
            },
        )
        return url, body, headers

    def _budget(self, timeout: float | None) -> float:
        return timeout if timeout is not None else self.config.timeout_s

    def _log_response(
        self,
        endpoint: str,
        headers: Mapping[str, str],
        status_code: int,
        content: bytes,
        start: float,
    ) -> None:
        logger.debug(
            "HTTP response",
            extra={
                "endpoint": endpoint,
                "request_id": headers["X-Request-Id"],
                "status_code": status_code,
                "body_bytes": len(content),
                "elapsed_ms": int((time.monotonic() - start) * 1000),
            },
        )


class Transport(_TransportBase):
    """Synchronous transport to the RCK service.

    Built on httpx.Client. Safe to share between threads; it holds no
    per-call state.

    Args:
        config: Client configuration
        transport: Optional custom HTTPX transport (useful for testing)

    Example:
        >>> config = ClientConfig(api_key="secret")
        >>> with Transport(config) as t:
        ...     data = t.post("/compute/execute", payload)
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        super().__init__(config)
        self._client = httpx.Client(transport=transport, **self._client_options())

    def close(self) -> None:
        """Close the underlying HTTP client and release pooled connections."""
        self._client.close()

    def __enter__(self) -> Transport:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def post(
        self,
        endpoint: str,
        payload: Mapping[str, Any],
        *,
        timeout: float | None = None,
    ) -> dict[str, Any]:
        """POST a JSON payload and return the decoded JSON object.

        The body is streamed so the deadline also covers a slow body read;
        each network phase is additionally capped by the same value.

        Args:
            endpoint: Endpoint path appended to the base URL
            payload: Wire payload (JSON-serializable mapping)
            timeout: Per-call deadline override in seconds

        Returns:
            Decoded response object

        Raises:
            SerializationError: If the payload cannot be encoded
            NetworkError: If no complete response arrived before the deadline
            AuthenticationError: On 401/403
            APIError: On other error statuses
            DecodeError: If the success body is not a JSON object
        """
        url, body, headers = self._prepare(endpoint, payload, self._client.headers)
        budget = self._budget(timeout)
        start = time.monotonic()
        deadline = start + budget

        try:
            with self._client.stream(
                "POST", url, content=body, headers=headers, timeout=httpx.Timeout(budget)
            ) as resp:
                status_code = resp.status_code
                content = _read_body(resp, deadline, budget)
        except httpx.RequestError as e:
            raise NetworkError(e) from e

        self._log_response(endpoint, headers, status_code, content, start)
        return decode_response(status_code, content)


class AsyncTransport(_TransportBase):
    """Asynchronous transport to the RCK service.

    Built on httpx.AsyncClient. Cancelling the awaiting task aborts the
    in-flight request and propagates ``asyncio.CancelledError``.

    Args:
        config: Client configuration
        transport: Optional custom HTTPX async transport (useful for testing)

    Example:
        >>> async with AsyncTransport(ClientConfig(api_key="secret")) as t:
        ...     data = await t.post("/compute/execute", payload)
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(config)
        self._client = httpx.AsyncClient(transport=transport, **self._client_options())

    async def aclose(self) -> None:
        """Close the underlying HTTP client and release pooled connections."""
        await self._client.aclose()

    async def __aenter__(self) -> AsyncTransport:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def post(
        self,
        endpoint: str,
        payload: Mapping[str, Any],
        *,
        timeout: float | None = None,
    ) -> dict[str, Any]:
        """POST a JSON payload and return the decoded JSON object (async).

        The whole exchange, body read included, runs under one deadline.
        See Transport.post for arguments and raised errors.
        """
        url, body, headers = self._prepare(endpoint, payload, self._client.headers)
        budget = self._budget(timeout)
        start = time.monotonic()

        try:
            resp = await asyncio.wait_for(
                self._client.post(
                    url, content=body, headers=headers, timeout=httpx.Timeout(budget)
                ),
                timeout=budget,
            )
        except TimeoutError as e:
            raise NetworkError(
                httpx.TimeoutException(f"request exceeded its {budget:g}s deadline")
            ) from e
        except httpx.RequestError as e:
            raise NetworkError(e) from e

        self._log_response(endpoint, headers, resp.status_code, resp.content, start)
        return decode_response(resp.status_code, resp.content)
