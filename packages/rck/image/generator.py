"""Image request builder for /sd2is/render."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from rck.api.http.transport import AsyncTransport, Transport
from rck.errors import APIError
from rck.image.models import (
    ImageInfo,
    ImagePath,
    ImageRequest,
    ImageResponse,
    ImageResult,
    ImageStartPoint,
)
from rck.image.params import GenerateParams

logger = logging.getLogger(__name__)

IMAGE_ENDPOINT = "/sd2is/render"


def build_image_payload(params: GenerateParams) -> ImageRequest:
    """Validate parameters and assemble the /sd2is/render request.

    Raises:
        ValidationError: Naming the first empty field
    """
    params.validate_fields()
    return ImageRequest(
        start_point=ImageStartPoint(start_point=params.prompt),
        path=ImagePath(
            composition=params.composition,
            lighting=params.lighting,
            style=params.style,
        ),
    )


def decode_image_response(raw: dict[str, Any]) -> ImageResult:
    """Translate a decoded /sd2is/render response into an ImageResult.

    The raw mapping is kept on the result as ``raw_data``.

    Raises:
        APIError: If ``end_point`` does not have the expected shape
    """
    try:
        response = ImageResponse.model_validate(raw)
    except PydanticValidationError as e:
        raise APIError("failed to parse API response into ImageResult", cause=e) from e

    end_point = response.end_point
    return ImageResult(
        images=[
            ImageInfo(
                url=img.url,
                image_data=img.image_data,
                index=img.index,
                size=img.size,
                mime_type=img.mime_type,
            )
            for img in end_point.images
        ],
        count=end_point.count,
        status=end_point.status,
        raw_data=raw,
    )


class ImageGenerator:
    """Image generation operations (blocking).

    Normally reached through ``Client.image``.

    Args:
        transport: Shared transport instance
    """

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def generate(self, params: GenerateParams, *, timeout: float | None = None) -> ImageResult:
        """Generate images from a prompt and three style descriptors.

        Args:
            params: Prompt, composition, lighting and style
            timeout: Per-call timeout override in seconds

        Returns:
            ImageResult; check ``success()`` before using the images

        Raises:
            ValidationError: If any field is empty (no request is sent)
            APIError: If the response cannot be decoded
            RCKError: Any transport error
        """
        request = build_image_payload(params)
        logger.debug("Dispatching image request", extra={"style": params.style})
        raw = self._transport.post(IMAGE_ENDPOINT, request.to_wire(), timeout=timeout)
        return decode_image_response(raw)


class AsyncImageGenerator:
    """Image generation operations (async). Mirrors ImageGenerator."""

    def __init__(self, transport: AsyncTransport) -> None:
        self._transport = transport

    async def generate(
        self, params: GenerateParams, *, timeout: float | None = None
    ) -> ImageResult:
        request = build_image_payload(params)
        logger.debug("Dispatching image request", extra={"style": params.style})
        raw = await self._transport.post(IMAGE_ENDPOINT, request.to_wire(), timeout=timeout)
        return decode_image_response(raw)
