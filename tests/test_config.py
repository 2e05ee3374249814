import logging

import pytest
from pydantic import ValidationError

from gpt_agent_lib import GPTModelServiceConfig, get_logger, setup_logging


def test_defaults() -> None:
    config = GPTModelServiceConfig()

    assert config.model_name == "gpt-4o-mini"
    assert config.multimodal_model == "gpt-4o-mini"
    assert config.tools_call_model == "gpt-4o-mini"
    assert config.reasoning_model is None
    assert config.max_tokens == 4096


def test_from_env() -> None:
    environ = {
        "OPENAI_API_KEY": "sk-test",
        "OPENAI_BASE_URL": "https://open.bigmodel.cn/api/paas/v4/",
        "OPENAI_MODEL": "glm-4",
        "OPENAI_MULTIMODAL_MODEL": "glm-4v-plus",
        "OPENAI_MAX_TOKENS": "2048",
        "OPENAI_TOOLS_CALL_MODEL": "",
    }

    config = GPTModelServiceConfig.from_env(environ)

    assert config.api_key == "sk-test"
    assert config.base_url == "https://open.bigmodel.cn/api/paas/v4/"
    assert config.model_name == "glm-4"
    assert config.multimodal_model == "glm-4v-plus"
    assert config.tools_call_model == "gpt-4o-mini"
    assert config.max_tokens == 2048


def test_from_env_reads_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPENAI_MODEL", "gpt-4-turbo")

    assert GPTModelServiceConfig.from_env().model_name == "gpt-4-turbo"


def test_invalid_max_tokens() -> None:
    with pytest.raises(ValidationError):
        GPTModelServiceConfig.from_env({"OPENAI_MAX_TOKENS": "0"})


def test_logger_namespace() -> None:
    assert get_logger().name == "gpt_agent_lib"
    assert get_logger("custom").name == "gpt_agent_lib.custom"
    assert get_logger("gpt_agent_lib.llm_core").name == "gpt_agent_lib.llm_core"


def test_setup_logging_adds_single_handler() -> None:
    logger = logging.getLogger("gpt_agent_lib")
    original_handlers = list(logger.handlers)
    original_level = logger.level
    try:
        setup_logging(logging.DEBUG)
        setup_logging(logging.DEBUG)
        stream_handlers = [h for h in logger.handlers if not isinstance(h, logging.NullHandler)]
        assert len(stream_handlers) == 1
        assert logger.level == logging.DEBUG
    finally:
        logger.handlers = original_handlers
        logger.setLevel(original_level)
