"""Exception taxonomy for the RCK client.

Every failure surfaces as a subclass of RCKError so callers can branch on
the exception type instead of parsing messages:

- ValidationError: caller parameters failed a precondition (no request sent)
- UnknownSchemaError: predefined schema name not in the catalog
- AuthenticationError: HTTP 401/403
- APIError: any other error status, or a response missing expected fields
- NetworkError: the HTTP exchange could not be completed
- SerializationError / DecodeError: JSON encoding or decoding failed
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import BaseModel, Field


class ErrorData(BaseModel):
    """Structured data attached to RCK errors.

    Args:
        message: Human-readable error description
        status_code: HTTP status code (if a response was received)
        response_data: Parsed error body (if parseable)
        cause: Original exception that caused this error
    """

    model_config = {"arbitrary_types_allowed": True}

    message: str
    status_code: int | None = None
    response_data: dict[str, Any] | None = None
    cause: BaseException | None = Field(default=None, repr=False)


class RCKError(Exception):
    """Base exception for all RCK client errors.

    Attributes:
        data: Structured error data (ErrorData)
        message: Human-readable error description
        cause: Original exception that caused this error
    """

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        self.data = ErrorData(message=message, cause=cause)
        self.message = self.data.message
        self.cause = self.data.cause
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class APIKeyRequiredError(RCKError):
    """No API key was supplied when constructing a client."""

    def __init__(self) -> None:
        super().__init__("API key is required")


class ValidationError(RCKError):
    """A caller-supplied parameter failed validation.

    Raised before any network call is made.

    Attributes:
        field: Name of the offending parameter (empty when not field-specific)
    """

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message)

    def __str__(self) -> str:
        if self.field:
            return f"validation error on field '{self.field}': {self.message}"
        return f"validation error: {self.message}"


class UnknownSchemaError(RCKError, LookupError):
    """Requested predefined schema name is not in the catalog."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"unknown schema name: {name}")


class AuthenticationError(RCKError):
    """HTTP 401/403 response. The response body is not inspected."""

    MESSAGE = "authentication failed, please check API key"

    def __init__(self, *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(self.MESSAGE)
        self.data.status_code = status_code


class APIError(RCKError):
    """Error status returned by the service, or an unusable success response.

    Attributes:
        status_code: HTTP status code (None when raised for a malformed
            success response)
        response_data: Parsed error body, when it was a JSON object
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        response_data: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        self.status_code = status_code
        self.response_data = response_data
        super().__init__(message, cause=cause)
        self.data.status_code = status_code
        self.data.response_data = response_data

    def __str__(self) -> str:
        return f"API error: {self.message} (status code: {self.status_code or 0})"


class NetworkError(RCKError):
    """Network-level failure (DNS, connection, timeout) before a response arrived."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"network error: {cause}", cause=cause)

    @property
    def is_timeout(self) -> bool:
        """Whether the underlying failure was a timeout."""
        return isinstance(self.cause, httpx.TimeoutException)


class SerializationError(RCKError):
    """Request payload could not be encoded as JSON."""


class DecodeError(RCKError):
    """Response body or result data could not be decoded."""


class ConnectionTestError(RCKError):
    """Connectivity self-test failed. The original error is kept as ``cause``."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"connection test failed: {cause}", cause=cause)
