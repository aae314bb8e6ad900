"""Caller-facing parameter model for image generation."""

from __future__ import annotations

from pydantic import BaseModel

from rck.errors import ValidationError


class GenerateParams(BaseModel):
    """Parameters for image generation.

    Args:
        prompt: Text prompt
        composition: Framing / composition descriptor
        lighting: Lighting descriptor
        style: Artistic style descriptor
    """

    model_config = {"frozen": True}

    prompt: str = ""
    composition: str = ""
    lighting: str = ""
    style: str = ""

    def validate_fields(self) -> None:
        """Check that every field is non-empty.

        Raises:
            ValidationError: Naming the first empty field, in declaration order
        """
        for field in ("prompt", "composition", "lighting", "style"):
            if not getattr(self, field):
                raise ValidationError(field, "is required")
