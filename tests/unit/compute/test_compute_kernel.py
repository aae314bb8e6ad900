"""Tests for compute payload assembly, validation and response decoding."""

from __future__ import annotations

import json
from typing import Any

import pytest

from rck import (
    AnalyzeParams,
    APIError,
    Client,
    CustomComputeParams,
    SerializationError,
    TranslateParams,
    ValidationError,
)
from rck.compute.kernel import build_compute_payload, decode_compute_response
from rck.compute.schemas import get_predefined_schema

# ============================================================================
# Payload assembly
# ============================================================================


class TestBuildComputePayload:
    def test_minimal_payload(self) -> None:
        wire = build_compute_payload("hello", "summarize").to_wire()
        assert wire == {
            "start_point": {"startPoint": "hello"},
            "path": {"expectPath": "summarize"},
        }

    def test_schema_is_embedded_as_json_string(self) -> None:
        schema = {"type": "object", "required": ["a"]}
        wire = build_compute_payload("t", "k", schema).to_wire()

        endpoint_class = wire["path"]["endpointClass"]
        assert isinstance(endpoint_class, str)
        assert json.loads(endpoint_class) == schema
        assert endpoint_class == '{"required":["a"],"type":"object"}'

    def test_empty_schema_is_still_sent(self) -> None:
        wire = build_compute_payload("t", "k", {}).to_wire()
        assert wire["path"]["endpointClass"] == "{}"

    def test_custom_fields_and_resources(self) -> None:
        resources = [{"name": "doc", "url": "http://x/doc.txt"}, {"name": "img"}]
        wire = build_compute_payload(
            "t", "k", None, {"tone": "formal", "audience": "kids"}, resources
        ).to_wire()

        assert wire["start_point"]["resource"] == resources
        assert wire["path"] == {"expectPath": "k", "tone": "formal", "audience": "kids"}

    def test_empty_resources_are_omitted(self) -> None:
        wire = build_compute_payload("t", "k", None, None, []).to_wire()
        assert "resource" not in wire["start_point"]

    def test_unserializable_schema(self) -> None:
        with pytest.raises(SerializationError):
            build_compute_payload("t", "k", {"bad": object()})


# ============================================================================
# Response decoding
# ============================================================================


class TestDecodeComputeResponse:
    def test_end_point_is_wrapped(self) -> None:
        result = decode_compute_response({"end_point": {"answer": 42}})
        assert result.data == {"answer": 42}

    @pytest.mark.parametrize("raw", [{}, {"end_point": None}, {"other": 1}])
    def test_missing_end_point(self, raw: dict[str, Any]) -> None:
        with pytest.raises(APIError) as ei:
            decode_compute_response(raw)
        assert "missing 'end_point' field" in ei.value.message
        assert ei.value.status_code is None

    def test_end_point_of_wrong_shape(self) -> None:
        with pytest.raises(APIError) as ei:
            decode_compute_response({"end_point": ["not", "an", "object"]})
        assert ei.value.message.startswith("failed to parse API response")


# ============================================================================
# Validation (no request may be sent)
# ============================================================================


class TestValidation:
    @pytest.mark.parametrize(
        ("params", "field"),
        [
            (CustomComputeParams(text="", task="k"), "text"),
            (CustomComputeParams(text="t", task=""), "task"),
        ],
    )
    def test_custom_compute(self, client: Client, backend, params, field: str) -> None:
        with pytest.raises(ValidationError) as ei:
            client.compute.custom_compute(params)
        assert ei.value.field == field
        assert backend.calls == 0

    @pytest.mark.parametrize(
        ("params", "field"),
        [
            (AnalyzeParams(text="", task="k", output_format="basic_analysis"), "text"),
            (AnalyzeParams(text="t", task="", output_format="basic_analysis"), "task"),
            (AnalyzeParams(text="t", task="k", output_format=""), "output_format"),
        ],
    )
    def test_analyze(self, client: Client, backend, params, field: str) -> None:
        with pytest.raises(ValidationError) as ei:
            client.compute.analyze(params)
        assert ei.value.field == field
        assert str(ei.value) == f"validation error on field '{field}': is required"
        assert backend.calls == 0

    def test_analyze_unknown_format(self, client: Client, backend) -> None:
        params = AnalyzeParams(text="t", task="k", output_format="sonnet")
        with pytest.raises(ValidationError) as ei:
            client.compute.analyze(params)
        assert ei.value.field == "output_format"
        assert "unknown schema name: sonnet" in ei.value.message
        assert backend.calls == 0

    @pytest.mark.parametrize(
        ("params", "field"),
        [
            (TranslateParams(text="", target_language="French"), "text"),
            (TranslateParams(text="bonjour", target_language=""), "target_language"),
        ],
    )
    def test_translate(self, client: Client, backend, params, field: str) -> None:
        with pytest.raises(ValidationError) as ei:
            client.compute.translate(params)
        assert ei.value.field == field
        assert backend.calls == 0

    @pytest.mark.parametrize(
        ("params", "field"),
        [
            (CustomComputeParams(task="k"), "text"),
            (CustomComputeParams(text="t"), "task"),
            (AnalyzeParams(task="k", output_format="basic_analysis"), "text"),
            (AnalyzeParams(text="t", output_format="basic_analysis"), "task"),
            (AnalyzeParams(text="t", task="k"), "output_format"),
            (TranslateParams(target_language="French"), "text"),
            (TranslateParams(text="bonjour"), "target_language"),
        ],
    )
    def test_omitted_field(self, params, field: str) -> None:
        with pytest.raises(ValidationError) as ei:
            params.validate_fields()
        assert ei.value.field == field

    @pytest.mark.parametrize("key", ["expectPath", "endpointClass"])
    def test_reserved_custom_field(self, client: Client, backend, key: str) -> None:
        params = CustomComputeParams(text="t", task="k", custom_fields={key: "x"})
        with pytest.raises(ValidationError) as ei:
            client.compute.custom_compute(params)
        assert ei.value.field == "custom_fields"
        assert backend.calls == 0


# ============================================================================
# Entry points
# ============================================================================


class TestComputeKernel:
    def test_custom_compute_sends_schema_and_fields(self, client: Client, backend) -> None:
        schema = {"type": "object", "properties": {"score": {"type": "number"}}}
        params = CustomComputeParams(
            text="great product",
            task="rate sentiment",
            output_schema=schema,
            custom_fields={"scale": "10"},
            resources=[{"kind": "review"}],
        )

        client.compute.custom_compute(params)

        request = backend.last_request
        assert request.method == "POST"
        assert request.url.path == "/compute/execute"
        body = backend.last_json()
        assert body["start_point"] == {
            "startPoint": "great product",
            "resource": [{"kind": "review"}],
        }
        assert body["path"]["expectPath"] == "rate sentiment"
        assert json.loads(body["path"]["endpointClass"]) == schema
        assert body["path"]["scale"] == "10"

    def test_custom_compute_without_schema(self, client: Client, backend) -> None:
        client.compute.custom_compute(CustomComputeParams(text="t", task="k"))
        assert "endpointClass" not in backend.last_json()["path"]

    def test_analyze_resolves_predefined_schema(self, client: Client, backend) -> None:
        params = AnalyzeParams(
            text="test",
            task="simple analysis",
            output_format="poem_creation",
            custom_fields={"length": "short"},
        )

        client.compute.analyze(params)

        path = backend.last_json()["path"]
        assert json.loads(path["endpointClass"]) == get_predefined_schema("poem_creation")
        assert path["length"] == "short"
        assert "resource" not in backend.last_json()["start_point"]

    @pytest.mark.parametrize(
        ("include_notes", "flag"),
        [(True, "true"), (False, "false")],
    )
    def test_translate_payload(
        self, client: Client, backend, include_notes: bool, flag: str
    ) -> None:
        params = TranslateParams(
            text="Hello", target_language="French", include_cultural_notes=include_notes
        )

        client.compute.translate(params)

        path = backend.last_json()["path"]
        assert "French" in path["expectPath"]
        assert ("cultural background notes" in path["expectPath"]) is include_notes
        assert path["target_language"] == "French"
        assert path["include_cultural_notes"] == flag
        assert json.loads(path["endpointClass"]) == get_predefined_schema("translation")

    def test_missing_end_point_from_backend(self, make_backend, make_client) -> None:
        backend = make_backend({"result": "no envelope"})
        client = make_client(backend)

        with pytest.raises(APIError) as ei:
            client.compute.analyze(
                AnalyzeParams(text="t", task="k", output_format="basic_analysis")
            )
        assert "missing 'end_point' field" in str(ei.value)
        assert backend.calls == 1
