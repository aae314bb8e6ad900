"""Text computation: schema catalog, parameters, request builder, results."""

from rck.compute.kernel import AsyncComputeKernel, ComputeKernel, build_compute_payload
from rck.compute.models import ComputeResult
from rck.compute.params import AnalyzeParams, CustomComputeParams, TranslateParams
from rck.compute.schemas import Schema, get_predefined_schema, list_predefined_schemas

__all__ = [
    "AnalyzeParams",
    "AsyncComputeKernel",
    "ComputeKernel",
    "ComputeResult",
    "CustomComputeParams",
    "Schema",
    "TranslateParams",
    "build_compute_payload",
    "get_predefined_schema",
    "list_predefined_schemas",
]
