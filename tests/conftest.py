import os
from typing import Any, AsyncIterator, Callable, List, Optional, Sequence
from unittest.mock import AsyncMock, MagicMock

import pytest
from dotenv import load_dotenv, find_dotenv
from openai import AsyncOpenAI
from openai.types.chat import ChatCompletion, ChatCompletionChunk, ChatCompletionMessage
from openai.types.chat.chat_completion import Choice
from openai.types.chat.chat_completion_chunk import (
    Choice as ChunkChoice,
    ChoiceDelta,
    ChoiceDeltaToolCall,
    ChoiceDeltaToolCallFunction,
)

from gpt_agent_lib import GPTModelService

# Load environment variables from .env file
env_file = find_dotenv()
if not env_file:
    # Fallback: look in the current working directory, e.g. when started from a subdirectory
    potential_env = os.path.join(os.getcwd(), ".env")
    if os.path.exists(potential_env):
        env_file = potential_env

if env_file:
    load_dotenv(env_file)


@pytest.fixture
def openai_client() -> AsyncOpenAI:
    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        api_key = "dummy_key"
    return AsyncOpenAI(api_key=api_key, base_url=os.getenv("OPENAI_BASE_URL"))


@pytest.fixture
def mock_openai_client() -> Any:
    client = MagicMock(spec=AsyncOpenAI)
    client.chat = MagicMock()
    client.chat.completions = MagicMock()
    client.chat.completions.create = AsyncMock()
    client.base_url = "https://api.openai.com/v1/"
    return client


@pytest.fixture
def service(mock_openai_client: Any) -> GPTModelService:
    return GPTModelService(
        client=mock_openai_client,
        model_name="gpt-4-turbo",
        multimodal_model="gpt-4o-mini",
        tools_call_model="gpt-4-turbo",
        max_tokens=1024,
    )


def _tool_call(name: str, arguments: Optional[str], call_id: str) -> Any:
    # A plain MagicMock keeps the test independent of the tool call union in newer SDKs
    tool_call = MagicMock()
    tool_call.id = call_id
    tool_call.type = "function"
    tool_call.function.name = name
    tool_call.function.arguments = arguments
    return tool_call


@pytest.fixture
def make_completion() -> Callable[..., Any]:
    def _make(
        content: Optional[str] = None,
        finish_reason: Optional[str] = "stop",
        tool_calls: Optional[Sequence[tuple]] = None,
        empty: bool = False,
    ) -> Any:
        message = MagicMock(spec=ChatCompletionMessage)
        message.content = content
        message.tool_calls = (
            [_tool_call(name, args, f"call_{i}") for i, (name, args) in enumerate(tool_calls)] if tool_calls else None
        )

        choice = MagicMock(spec=Choice)
        choice.message = message
        choice.finish_reason = finish_reason

        response = MagicMock(spec=ChatCompletion)
        response.choices = [] if empty else [choice]
        response.usage = None
        return response

    return _make


@pytest.fixture
def make_chunk() -> Callable[..., ChatCompletionChunk]:
    def _make(
        content: Optional[str] = None,
        finish_reason: Optional[str] = None,
        tool_calls: Optional[List[ChoiceDeltaToolCall]] = None,
        empty: bool = False,
    ) -> ChatCompletionChunk:
        choices = []
        if not empty:
            choices.append(
                ChunkChoice(
                    index=0,
                    delta=ChoiceDelta(content=content, tool_calls=tool_calls),
                    finish_reason=finish_reason,
                )
            )
        return ChatCompletionChunk(
            id="chatcmpl-test",
            object="chat.completion.chunk",
            created=0,
            model="gpt-4-turbo",
            choices=choices,
        )

    return _make


@pytest.fixture
def make_tool_delta() -> Callable[..., ChoiceDeltaToolCall]:
    def _make(
        index: int, arguments: Optional[str] = None, name: Optional[str] = None, call_id: Optional[str] = None
    ) -> ChoiceDeltaToolCall:
        return ChoiceDeltaToolCall(
            index=index,
            id=call_id,
            type="function" if call_id else None,
            function=ChoiceDeltaToolCallFunction(name=name, arguments=arguments),
        )

    return _make


def stream_of(items: Sequence[Any]) -> AsyncIterator[Any]:
    async def _gen() -> AsyncIterator[Any]:
        for item in items:
            yield item

    return _gen()


@pytest.fixture
def async_stream() -> Callable[[Sequence[Any]], AsyncIterator[Any]]:
    return stream_of


@pytest.fixture(scope="session")
def vcr_config() -> dict[str, Any]:
    return {
        "cassette_library_dir": "tests/cassettes",
        "record_mode": os.getenv("VCR_RECORD_MODE", "once"),
        "match_on": ["method", "path", "query"],
        "filter_headers": [
            "authorization",
            "openai-organization",
            "x-api-key",
            "api-key",
        ],
        "filter_query_parameters": ["key", "api_key", "access_token"],
        "decode_compressed_response": True,
    }
