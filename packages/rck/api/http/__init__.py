"""HTTPX-based transport for the RCK service.

Exposes:
- Transport / AsyncTransport: authenticated JSON POST with error classification
- ApiKeyAuth: header auth for the service API key
"""

from rck.api.http.auth import ApiKeyAuth
from rck.api.http.transport import AsyncTransport, Transport

__all__ = [
    "ApiKeyAuth",
    "AsyncTransport",
    "Transport",
]
