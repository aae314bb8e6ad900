"""Compute wire models and the public result type.

Wire models mirror the /compute/execute JSON exactly; field renames are
declared through serialization aliases rather than built by hand.
"""

from __future__ import annotations

import json
from typing import Any, TypeVar

from pydantic import BaseModel, Field, TypeAdapter

from rck.errors import DecodeError

T = TypeVar("T")


class ComputeStartPoint(BaseModel):
    """``start_point`` object: input text plus optional resources."""

    model_config = {"frozen": True}

    start_point: str = Field(serialization_alias="startPoint")
    resource: list[dict[str, str]] | None = None


class ComputePath(BaseModel):
    """``path`` object: task, serialized schema, and merged custom fields.

    Custom fields are kept apart from the typed keys and only merged into
    the mapping when rendering to the wire.
    """

    model_config = {"frozen": True}

    expect_path: str = Field(serialization_alias="expectPath")
    endpoint_class: str | None = Field(default=None, serialization_alias="endpointClass")
    custom_fields: dict[str, str] = Field(default_factory=dict, exclude=True)

    def to_wire(self) -> dict[str, Any]:
        path = self.model_dump(by_alias=True, exclude_none=True)
        path.update(self.custom_fields)
        return path


class ComputeRequest(BaseModel):
    """Request body for /compute/execute."""

    model_config = {"frozen": True}

    start_point: ComputeStartPoint
    path: ComputePath

    def to_wire(self) -> dict[str, Any]:
        """Render the exact JSON-ready payload."""
        return {
            "start_point": self.start_point.model_dump(by_alias=True, exclude_none=True),
            "path": self.path.to_wire(),
        }


class ComputeResponse(BaseModel):
    """Response envelope for /compute/execute."""

    end_point: dict[str, Any] | None = None


class ComputeResult(BaseModel):
    """Result of a compute call.

    ``data`` is shaped by the schema that was requested. Use ``decode`` to
    turn it into a typed structure.

    Example:
        >>> class Analysis(BaseModel):
        ...     emotion: str
        ...     theme: str
        >>> analysis = result.decode(Analysis)
    """

    model_config = {"frozen": True}

    data: dict[str, Any]

    def __getitem__(self, key: str) -> Any:
        return self.data[key]

    def __contains__(self, key: object) -> bool:
        return key in self.data

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def decode(self, target: type[T]) -> T:
        """Decode ``data`` into a caller-defined type.

        The mapping is re-serialized to JSON and validated against
        ``target``, which may be a pydantic model, dataclass, TypedDict or
        anything else pydantic can validate.

        Args:
            target: Type to decode into

        Returns:
            Instance of ``target``

        Raises:
            DecodeError: If data is empty or does not fit ``target``
        """
        if not self.data:
            raise DecodeError("response data is empty")
        try:
            return TypeAdapter(target).validate_json(json.dumps(self.data))
        except (TypeError, ValueError) as e:
            name = getattr(target, "__name__", repr(target))
            raise DecodeError(
                f"failed to unmarshal response data into {name}: {e}", cause=e
            ) from e
