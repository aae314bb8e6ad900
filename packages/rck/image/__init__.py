"""Image generation: parameters, request builder, results."""

from rck.image.generator import AsyncImageGenerator, ImageGenerator
from rck.image.models import ImageInfo, ImageResult
from rck.image.params import GenerateParams

__all__ = [
    "AsyncImageGenerator",
    "GenerateParams",
    "ImageGenerator",
    "ImageInfo",
    "ImageResult",
]
