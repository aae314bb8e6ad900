"""Caller-facing parameter models for compute requests."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from rck.errors import ValidationError

# Keys the compute path object already uses on the wire
RESERVED_PATH_KEYS = frozenset({"expectPath", "endpointClass"})


def _require(field: str, value: str) -> None:
    if not value:
        raise ValidationError(field, "is required")


def _check_custom_fields(custom_fields: dict[str, str]) -> None:
    for key in custom_fields:
        if key in RESERVED_PATH_KEYS:
            raise ValidationError("custom_fields", f"key '{key}' is reserved")


class CustomComputeParams(BaseModel):
    """Parameters for a fully custom computation.

    Args:
        text: Input text
        task: Task description
        output_schema: Arbitrary output schema (JSON-schema-like mapping)
        custom_fields: Extra string fields merged into the request path
        resources: Resource attachments passed through unmodified
    """

    model_config = {"frozen": True}

    text: str = ""
    task: str = ""
    output_schema: dict[str, Any] | None = None
    custom_fields: dict[str, str] = Field(default_factory=dict)
    resources: list[dict[str, str]] | None = None

    def validate_fields(self) -> None:
        """Check required fields.

        Raises:
            ValidationError: Naming the first offending field
        """
        _require("text", self.text)
        _require("task", self.task)
        _check_custom_fields(self.custom_fields)


class AnalyzeParams(BaseModel):
    """Parameters for analysis against a predefined output format.

    Args:
        text: Input text
        task: Task description
        output_format: Predefined schema name (e.g. "basic_analysis");
            use CustomComputeParams for a custom schema
        custom_fields: Extra string fields merged into the request path
    """

    model_config = {"frozen": True}

    text: str = ""
    task: str = ""
    output_format: str = ""
    custom_fields: dict[str, str] = Field(default_factory=dict)

    def validate_fields(self) -> None:
        """Check required fields.

        Raises:
            ValidationError: Naming the first offending field
        """
        _require("text", self.text)
        _require("task", self.task)
        _require("output_format", self.output_format)
        _check_custom_fields(self.custom_fields)


class TranslateParams(BaseModel):
    """Parameters for translation.

    Args:
        text: Text to translate
        target_language: Target language name (e.g. "French")
        include_cultural_notes: Also ask for cultural background notes
    """

    model_config = {"frozen": True}

    text: str = ""
    target_language: str = ""
    include_cultural_notes: bool = False

    def validate_fields(self) -> None:
        """Check required fields.

        Raises:
            ValidationError: Naming the first offending field
        """
        _require("text", self.text)
        _require("target_language", self.target_language)

    def task_description(self) -> str:
        """Task text sent to the service for this translation."""
        if self.include_cultural_notes:
            return (
                f"Translate text to {self.target_language} "
                "and provide cultural background notes"
            )
        return f"Translate text to {self.target_language}"

    def path_fields(self) -> dict[str, str]:
        """Extra path fields describing the translation target."""
        return {
            "target_language": self.target_language,
            "include_cultural_notes": "true" if self.include_cultural_notes else "false",
        }
