"""Utility functions for transport operations."""

from __future__ import annotations

import json
import time
import uuid
from collections.abc import Mapping
from typing import Any
from urllib.parse import urljoin


def join_url(base_url: str, path: str) -> str:
    """Join base URL with path in a predictable way.

    Ensures base URL ends with '/' and strips leading '/' from path, so a
    base URL carrying its own path prefix keeps it.

    Args:
        base_url: Base URL (e.g. "https://api.example.com")
        path: Endpoint path (e.g. "/compute/execute")

    Returns:
        Joined URL (e.g. "https://api.example.com/compute/execute")
    """
    base = base_url if base_url.endswith("/") else base_url + "/"
    return urljoin(base, path.lstrip("/"))


def safe_snippet(content: bytes, limit: int = 512) -> str:
    """Extract safe text snippet from response content for logging.

    Args:
        content: Response body bytes
        limit: Maximum number of bytes to include

    Returns:
        Truncated, decoded text snippet
    """
    if not content:
        return ""
    return content[:limit].decode("utf-8", errors="replace")


def default_request_id() -> str:
    """Generate a request ID: millisecond timestamp plus a random suffix."""
    return f"req_{int(time.time() * 1000)}_{uuid.uuid4().hex[:8]}"


def parse_json_object(content: bytes) -> dict[str, Any] | None:
    """Parse a body as a JSON object.

    Args:
        content: Raw body bytes

    Returns:
        The decoded object, or None if the body is not valid JSON or
        is valid JSON of another shape (list, string, null, ...)
    """
    try:
        data = json.loads(content)
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def error_message_from_body(body: Mapping[str, Any] | None) -> str:
    """Pick the message to report for an error response body.

    Args:
        body: Parsed error body, or None when it was not a JSON object

    Returns:
        The body's ``error`` string if present, otherwise a generic message
    """
    if body is None:
        return "API request failed with unparseable error response"
    message = body.get("error")
    if isinstance(message, str):
        return message
    return "API request failed"


def redact_headers(headers: Mapping[str, str], redact: tuple[str, ...]) -> dict[str, str]:
    """Redact sensitive headers for logging.

    Args:
        headers: Headers to redact
        redact: Header names to redact (case-insensitive)

    Returns:
        Headers with sensitive values replaced with "***REDACTED***"
    """
    red = {name.lower() for name in redact}
    return {k: "***REDACTED***" if k.lower() in red else v for k, v in headers.items()}
