"""Predefined output schemas for compute requests.

The catalog is part of the wire contract: the service recognises these
shapes by structure, so field names, nesting and required lists must stay
exactly as defined here.
"""

from __future__ import annotations

import copy
from typing import Any

from rck.errors import UnknownSchemaError

Schema = dict[str, Any]


def _text(description: str) -> dict[str, str]:
    return {"type": "string", "description": description}


_PREDEFINED_SCHEMAS: dict[str, Schema] = {
    "basic_analysis": {
        "type": "object",
        "properties": {
            "emotion": _text("Emotion analysis result"),
            "theme": _text("Theme analysis"),
            "analysis": _text("Detailed analysis"),
        },
        "required": ["emotion", "theme", "analysis"],
    },
    "poem_creation": {
        "type": "object",
        "properties": {
            "poem": _text("Created poem"),
            "creative_process": _text("Creative process"),
            "style_notes": _text("Style notes"),
        },
        "required": ["poem"],
    },
    "scene_description": {
        "type": "object",
        "properties": {
            "scene_description": {
                "type": "object",
                "properties": {
                    "main_subjects": _text("Main objects and spatial relationships"),
                    "lighting": _text("Lighting conditions and atmosphere"),
                    "composition": _text("Picture composition"),
                    "style": _text("Artistic style"),
                },
                "required": ["main_subjects", "lighting", "composition", "style"],
            },
        },
        "required": ["scene_description"],
    },
    "translation": {
        "type": "object",
        "properties": {
            "translation": _text("Translation result"),
            "original_language": _text("Source language"),
            "target_language": _text("Target language"),
            "cultural_notes": _text("Cultural background notes"),
        },
        "required": ["translation"],
    },
}


def get_predefined_schema(name: str) -> Schema:
    """Return an independent copy of a predefined schema.

    Callers may mutate the returned value freely; the catalog is never
    exposed by reference.

    Args:
        name: Schema name (e.g. "basic_analysis")

    Returns:
        Deep copy of the schema

    Raises:
        UnknownSchemaError: If the name is not in the catalog

    Example:
        >>> schema = get_predefined_schema("translation")
        >>> schema["required"]
        ['translation']
    """
    try:
        schema = _PREDEFINED_SCHEMAS[name]
    except KeyError:
        raise UnknownSchemaError(name) from None
    return copy.deepcopy(schema)


def list_predefined_schemas() -> list[str]:
    """Names of all predefined schemas, sorted."""
    return sorted(_PREDEFINED_SCHEMAS)
