"""Re-export the model service interface shared by all providers."""

from .base import ModelService, ModelProvider, ResponseType, ToolSpec

__all__ = [
    "ModelService",
    "ModelProvider",
    "ResponseType",
    "ToolSpec",
]
