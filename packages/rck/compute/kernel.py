"""Compute request builder.

Three entry points (custom_compute, analyze, translate) share one payload
assembly routine and one response decoder:

    validate -> build payload -> Transport.post -> decode end_point

Nothing is retried; every error reaches the caller on first occurrence.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from rck.api.http.transport import AsyncTransport, Transport
from rck.compute.models import (
    ComputePath,
    ComputeRequest,
    ComputeResponse,
    ComputeResult,
    ComputeStartPoint,
)
from rck.compute.params import AnalyzeParams, CustomComputeParams, TranslateParams
from rck.compute.schemas import Schema, get_predefined_schema
from rck.errors import APIError, SerializationError, UnknownSchemaError, ValidationError

logger = logging.getLogger(__name__)

COMPUTE_ENDPOINT = "/compute/execute"
TRANSLATION_SCHEMA = "translation"


def build_compute_payload(
    text: str,
    task: str,
    schema: Schema | None = None,
    custom_fields: dict[str, str] | None = None,
    resources: list[dict[str, str]] | None = None,
) -> ComputeRequest:
    """Assemble the /compute/execute request.

    The schema travels as a compact JSON string under ``endpointClass`` and
    is omitted entirely when None. Custom fields are merged into ``path``.

    Args:
        text: Input text (``start_point.startPoint``)
        task: Task description (``path.expectPath``)
        schema: Output schema, or None
        custom_fields: Extra path fields
        resources: Resource attachments; omitted when empty

    Returns:
        Typed request model

    Raises:
        SerializationError: If the schema is not JSON-serializable
    """
    endpoint_class = None
    if schema is not None:
        try:
            endpoint_class = json.dumps(
                schema, ensure_ascii=False, sort_keys=True, separators=(",", ":")
            )
        except (TypeError, ValueError) as e:
            raise SerializationError(f"failed to marshal output schema: {e}", cause=e) from e

    return ComputeRequest(
        start_point=ComputeStartPoint(start_point=text, resource=resources or None),
        path=ComputePath(
            expect_path=task,
            endpoint_class=endpoint_class,
            custom_fields=dict(custom_fields or {}),
        ),
    )


def decode_compute_response(raw: dict[str, Any]) -> ComputeResult:
    """Extract ``end_point`` from a decoded response.

    Raises:
        APIError: If ``end_point`` is missing, null, or not an object
    """
    try:
        response = ComputeResponse.model_validate(raw)
    except PydanticValidationError as e:
        raise APIError(f"failed to parse API response: {e}", cause=e) from e

    if response.end_point is None:
        raise APIError("API response missing 'end_point' field")

    return ComputeResult(data=response.end_point)


def prepare_custom_compute(params: CustomComputeParams) -> ComputeRequest:
    params.validate_fields()
    return build_compute_payload(
        params.text,
        params.task,
        params.output_schema,
        params.custom_fields,
        params.resources,
    )


def prepare_analyze(params: AnalyzeParams) -> ComputeRequest:
    params.validate_fields()
    try:
        schema = get_predefined_schema(params.output_format)
    except UnknownSchemaError as e:
        raise ValidationError(
            "output_format", f"invalid predefined schema name: {e}"
        ) from e
    return build_compute_payload(params.text, params.task, schema, params.custom_fields)


def prepare_translate(params: TranslateParams) -> ComputeRequest:
    params.validate_fields()
    schema = get_predefined_schema(TRANSLATION_SCHEMA)
    return build_compute_payload(
        params.text,
        params.task_description(),
        schema,
        params.path_fields(),
    )


class ComputeKernel:
    """Text computation operations (blocking).

    Normally reached through ``Client.compute`` rather than built directly.

    Args:
        transport: Shared transport instance
    """

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def _execute(self, request: ComputeRequest, timeout: float | None) -> ComputeResult:
        logger.debug("Dispatching compute request", extra={"task": request.path.expect_path})
        raw = self._transport.post(COMPUTE_ENDPOINT, request.to_wire(), timeout=timeout)
        return decode_compute_response(raw)

    def custom_compute(
        self, params: CustomComputeParams, *, timeout: float | None = None
    ) -> ComputeResult:
        """Run a computation with a caller-supplied output schema.

        Args:
            params: Text, task, schema, custom fields and resources
            timeout: Per-call timeout override in seconds

        Returns:
            ComputeResult wrapping the ``end_point`` payload

        Raises:
            ValidationError: If text or task is empty (no request is sent)
            RCKError: Any transport or response error
        """
        return self._execute(prepare_custom_compute(params), timeout)

    def analyze(self, params: AnalyzeParams, *, timeout: float | None = None) -> ComputeResult:
        """Run an analysis shaped by a predefined output format.

        Raises:
            ValidationError: If text, task or output_format is empty, or the
                format is not a known schema name
        """
        return self._execute(prepare_analyze(params), timeout)

    def translate(self, params: TranslateParams, *, timeout: float | None = None) -> ComputeResult:
        """Translate text using the ``translation`` schema.

        Raises:
            ValidationError: If text or target_language is empty
        """
        return self._execute(prepare_translate(params), timeout)


class AsyncComputeKernel:
    """Text computation operations (async). Mirrors ComputeKernel."""

    def __init__(self, transport: AsyncTransport) -> None:
        self._transport = transport

    async def _execute(self, request: ComputeRequest, timeout: float | None) -> ComputeResult:
        logger.debug("Dispatching compute request", extra={"task": request.path.expect_path})
        raw = await self._transport.post(COMPUTE_ENDPOINT, request.to_wire(), timeout=timeout)
        return decode_compute_response(raw)

    async def custom_compute(
        self, params: CustomComputeParams, *, timeout: float | None = None
    ) -> ComputeResult:
        return await self._execute(prepare_custom_compute(params), timeout)

    async def analyze(
        self, params: AnalyzeParams, *, timeout: float | None = None
    ) -> ComputeResult:
        return await self._execute(prepare_analyze(params), timeout)

    async def translate(
        self, params: TranslateParams, *, timeout: float | None = None
    ) -> ComputeResult:
        return await self._execute(prepare_translate(params), timeout)
