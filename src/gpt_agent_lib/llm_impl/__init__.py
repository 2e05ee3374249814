"""Collect concrete model service implementations."""

from .openai_api import GPTModelService, GPTModelServiceConfig

__all__ = [
    "GPTModelService",
    "GPTModelServiceConfig",
]
