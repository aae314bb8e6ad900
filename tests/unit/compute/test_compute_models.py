"""Tests for ComputeResult."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel
import pytest

from rck import ComputeResult, DecodeError


class Analysis(BaseModel):
    emotion: str
    theme: str
    analysis: str


@dataclass
class Scene:
    main_subjects: str
    lighting: str


class TestComputeResult:
    def test_mapping_access(self) -> None:
        result = ComputeResult(data={"poem": "roses", "style_notes": "free verse"})

        assert result["poem"] == "roses"
        assert result.get("creative_process") is None
        assert result.get("creative_process", "n/a") == "n/a"
        assert "style_notes" in result

    def test_decode_into_model(self) -> None:
        result = ComputeResult(data={"emotion": "neutral", "theme": "none", "analysis": "ok"})

        decoded = result.decode(Analysis)

        assert decoded == Analysis(emotion="neutral", theme="none", analysis="ok")

    def test_decode_into_dataclass(self) -> None:
        result = ComputeResult(data={"main_subjects": "a cat", "lighting": "dusk", "extra": 1})

        decoded = result.decode(Scene)

        assert decoded == Scene(main_subjects="a cat", lighting="dusk")

    def test_decode_into_nested_mapping(self) -> None:
        result = ComputeResult(data={"scores": {"a": 1, "b": 2}})
        assert result.decode(dict[str, dict[str, int]]) == {"scores": {"a": 1, "b": 2}}

    def test_decode_empty_data(self) -> None:
        with pytest.raises(DecodeError, match="empty"):
            ComputeResult(data={}).decode(Analysis)

    def test_decode_incompatible_shape(self) -> None:
        result = ComputeResult(data={"emotion": "neutral"})

        with pytest.raises(DecodeError) as ei:
            result.decode(Analysis)
        assert "Analysis" in ei.value.message
        assert ei.value.cause is not None
