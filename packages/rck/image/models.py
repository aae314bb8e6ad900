"""Image wire models and public result types."""

from __future__ import annotations

import base64
import binascii
from typing import Any

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from rck.errors import DecodeError

SUCCESS_STATUS = "success"

_MIME_EXTENSIONS = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/webp": "webp",
    "image/gif": "gif",
    "image/bmp": "bmp",
}


class ImageStartPoint(BaseModel):
    model_config = {"frozen": True}

    start_point: str = Field(serialization_alias="startPoint")


class ImagePath(BaseModel):
    """``path`` object. Composition goes out as ``frame_Composition``."""

    model_config = {"frozen": True}

    composition: str = Field(serialization_alias="frame_Composition")
    lighting: str
    style: str


class ImageRequest(BaseModel):
    """Request body for /sd2is/render."""

    model_config = {"frozen": True}

    start_point: ImageStartPoint
    path: ImagePath

    def to_wire(self) -> dict[str, Any]:
        """Render the exact JSON-ready payload."""
        return self.model_dump(by_alias=True)


class _NullableWireModel(BaseModel):
    """Response model where a JSON null decodes to the field default."""

    @field_validator("*", mode="before")
    @classmethod
    def null_as_default(cls, v: Any, info: ValidationInfo) -> Any:
        if v is None:
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)
        return v


class ImageInfoWire(_NullableWireModel):
    url: str = ""
    image_data: str = Field(default="", alias="imageData")
    index: int = 0
    size: int = 0
    mime_type: str = Field(default="", alias="mimeType")


class ImageEndPoint(_NullableWireModel):
    images: list[ImageInfoWire] = Field(default_factory=list)
    count: int = 0
    status: str = ""


class ImageResponse(BaseModel):
    """Response envelope for /sd2is/render."""

    end_point: ImageEndPoint = Field(default_factory=ImageEndPoint)


class ImageInfo(BaseModel):
    """One generated image, delivered as a URL or inline base64 data.

    Args:
        url: Download URL (may be empty)
        image_data: Base64-encoded image bytes (may be empty)
        index: Position in the batch
        size: Size in bytes as reported by the service
        mime_type: MIME type (e.g. "image/png")
    """

    model_config = {"frozen": True}

    url: str = ""
    image_data: str = ""
    index: int = 0
    size: int = 0
    mime_type: str = ""

    def has_data(self) -> bool:
        """Whether a URL or inline data is available."""
        return bool(self.url or self.image_data)

    def file_extension(self) -> str:
        """File extension for the MIME type, defaulting to ``png``."""
        return _MIME_EXTENSIONS.get(self.mime_type.lower(), "png")

    def decode_image_data(self) -> bytes:
        """Decode the inline base64 payload.

        Raises:
            DecodeError: If there is no inline data or it is not valid base64
        """
        if not self.image_data:
            raise DecodeError(f"image {self.index} has no inline data")
        try:
            # Line-wrapped (MIME style) payloads are accepted
            data = self.image_data.replace("\r", "").replace("\n", "")
            return base64.b64decode(data, validate=True)
        except binascii.Error as e:
            raise DecodeError(
                f"failed to decode base64 for image {self.index}: {e}", cause=e
            ) from e


class ImageResult(BaseModel):
    """Result of an image generation call.

    Args:
        images: Per-image records in response order
        count: Image count reported by the service
        status: Status string reported by the service
        raw_data: The full decoded response, for diagnostics
    """

    model_config = {"frozen": True}

    images: list[ImageInfo] = Field(default_factory=list)
    count: int = 0
    status: str = ""
    raw_data: dict[str, Any] = Field(default_factory=dict, repr=False)

    def success(self) -> bool:
        """Whether the service reported success and produced at least one image."""
        return self.status == SUCCESS_STATUS and self.count > 0
