import os
from typing import Mapping, Optional

from pydantic import BaseModel, Field


class GPTModelServiceConfig(BaseModel):
    """
    Settings for a GPTModelService and the client it talks through.

    Attributes:
        api_key: Key for the provider. None lets the OpenAI client fall back to its own lookup.
        base_url: Optional endpoint of an OpenAI compatible provider.
        model_name: General purpose chat model.
        multimodal_model: Model used when the caller requests multimodal handling.
        tools_call_model: Model used for every tool call request.
        reasoning_model: Optional model for reasoning heavy prompts. Defaults to ``model_name``.
        max_tokens: Token cap applied to non-multimodal completions.
    """

    api_key: Optional[str] = None
    base_url: Optional[str] = None
    model_name: str = "gpt-4o-mini"
    multimodal_model: str = "gpt-4o-mini"
    tools_call_model: str = "gpt-4o-mini"
    reasoning_model: Optional[str] = None
    max_tokens: int = Field(default=4096, gt=0)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GPTModelServiceConfig":
        """Build a config from ``OPENAI_*`` environment variables.

        Unset variables keep their defaults. Loading a ``.env`` file is left to the
        application.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.

        Returns:
            The validated config.
        """
        env = os.environ if environ is None else environ
        mapping = {
            "api_key": "OPENAI_API_KEY",
            "base_url": "OPENAI_BASE_URL",
            "model_name": "OPENAI_MODEL",
            "multimodal_model": "OPENAI_MULTIMODAL_MODEL",
            "tools_call_model": "OPENAI_TOOLS_CALL_MODEL",
            "reasoning_model": "OPENAI_REASONING_MODEL",
            "max_tokens": "OPENAI_MAX_TOKENS",
        }
        values = {field_name: env[var] for field_name, var in mapping.items() if env.get(var)}
        return cls.model_validate(values)
