"""Expose the OpenAI protocol model service and its configuration."""

from .config import GPTModelServiceConfig
from .core import GPTModelService, MULTIMODAL_MODELS

__all__ = ["GPTModelService", "GPTModelServiceConfig", "MULTIMODAL_MODELS"]
