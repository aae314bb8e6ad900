"""Python client for the RCK hosted inference service.

Exposes a small, ergonomic surface:
- Client / AsyncClient: facade owning one transport
- Compute parameters and ComputeResult
- Image parameters and ImageResult
- Exceptions: RCKError and subclasses
"""

from rck._version import __version__
from rck.client import AsyncClient, Client
from rck.compute import (
    AnalyzeParams,
    ComputeResult,
    CustomComputeParams,
    TranslateParams,
    get_predefined_schema,
    list_predefined_schemas,
)
from rck.config import ClientConfig
from rck.errors import (
    APIError,
    APIKeyRequiredError,
    AuthenticationError,
    ConnectionTestError,
    DecodeError,
    NetworkError,
    RCKError,
    SerializationError,
    UnknownSchemaError,
    ValidationError,
)
from rck.image import GenerateParams, ImageInfo, ImageResult

__all__ = [
    "__version__",
    "AsyncClient",
    "Client",
    "ClientConfig",
    "AnalyzeParams",
    "ComputeResult",
    "CustomComputeParams",
    "TranslateParams",
    "get_predefined_schema",
    "list_predefined_schemas",
    "GenerateParams",
    "ImageInfo",
    "ImageResult",
    "RCKError",
    "APIError",
    "APIKeyRequiredError",
    "AuthenticationError",
    "ConnectionTestError",
    "DecodeError",
    "NetworkError",
    "SerializationError",
    "UnknownSchemaError",
    "ValidationError",
]
