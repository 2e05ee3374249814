from typing import Any, Dict, Iterable, List, Optional, cast

from openai import AsyncOpenAI
from openai.types.chat import ChatCompletion, ChatCompletionToolParam

from gpt_agent_lib.llm_core import ModelService
from gpt_agent_lib.llm_core.base import ModelProvider, ResponseType
from gpt_agent_lib.llm_core.exceptions import ProtocolError
from gpt_agent_lib.llm_core.logger import get_logger
from gpt_agent_lib.llm_core.messages import ChatMessage, ContentPart, TextContentPart
from gpt_agent_lib.llm_core.streams import tee
from gpt_agent_lib.llm_core.thought import ActionsThought, MessageThought, StreamThought, Thought, ThoughtStream
from .adapter import ToolCallAccumulator, get_actions
from .config import GPTModelServiceConfig

logger = get_logger(__name__)

MULTIMODAL_MODELS = frozenset({"glm-4v-plus", "gpt-4o-mini"})


class GPTModelService(ModelService):
    """
    Model service speaking the OpenAI chat completions protocol.

    Holds three models: a general purpose one, a multimodal one (picked when the
    caller asks for multimodal handling) and one dedicated to tool calls. Message
    content is normalized to what the resolved model accepts right before the
    request is sent.
    """

    model_providers = ("openai.com", "custom")
    supported_models = ("gpt-4-turbo", "gpt-4o-mini")

    def __init__(
        self,
        client: AsyncOpenAI,
        model_name: str,
        multimodal_model: str,
        tools_call_model: str,
        reasoning_model: Optional[str] = None,
        max_tokens: int = 4096,
    ):
        """
        Initializes the GPTModelService.

        Args:
            client: The initialized AsyncOpenAI client.
            model_name: General purpose chat model (e.g. 'gpt-4-turbo').
            multimodal_model: Model used when multimodal handling is requested.
            tools_call_model: Model used for all tool call requests.
            reasoning_model: Optional model for reasoning heavy prompts. Defaults to ``model_name``.
            max_tokens: Token cap for non-multimodal completions.
        """
        super().__init__(max_tokens=max_tokens)
        self.client: AsyncOpenAI = client
        self.model_name = model_name
        self.multimodal_model = multimodal_model
        self.tools_call_model = tools_call_model
        self.reasoning_model = reasoning_model or model_name

    @classmethod
    def from_config(cls, config: GPTModelServiceConfig, client: Optional[AsyncOpenAI] = None) -> "GPTModelService":
        """Build a service from a config, creating the client unless one is given."""
        if client is None:
            client = AsyncOpenAI(api_key=config.api_key, base_url=config.base_url)
        return cls(
            client=client,
            model_name=config.model_name,
            multimodal_model=config.multimodal_model,
            tools_call_model=config.tools_call_model,
            reasoning_model=config.reasoning_model,
            max_tokens=config.max_tokens,
        )

    @property
    def provider(self) -> ModelProvider:
        base_url = str(self.client.base_url)
        return "openai.com" if "api.openai.com" in base_url else "custom"

    @staticmethod
    def is_multimodal_model(model_name: str) -> bool:
        return model_name in MULTIMODAL_MODELS

    async def _chat_completion_impl(
        self,
        messages: List[ChatMessage],
        stream: bool,
        use_multimodal: bool,
        response_type: ResponseType,
    ) -> Thought:
        model = self.multimodal_model if use_multimodal else self.model_name
        request: Dict[str, Any] = {
            "model": model,
            "messages": self._to_params(self.format_message_content(messages, model)),
            "stream": stream,
            "response_format": {"type": response_type},
        }
        # Multimodal requests are sent uncapped
        if not use_multimodal:
            request["max_tokens"] = self.max_tokens

        logger.debug(f"Sending chat completion request to model: {model}")
        result = await self.client.chat.completions.create(**request)

        if stream:
            return StreamThought(stream=ThoughtStream(result))

        completion = cast(ChatCompletion, result)
        if not completion.choices:
            msg = "Chat completion returned no choices."
            logger.error(msg)
            raise ProtocolError(msg)
        return MessageThought(text=completion.choices[0].message.content or "")

    def format_message_content(self, messages: List[ChatMessage], model: str) -> List[ChatMessage]:
        """
        Normalizes message content to the shape the model accepts.

        Multimodal models get content part lists, every other model gets plain text.
        The given messages are never modified; rewritten messages are new objects.

        Args:
            messages: The transcript.
            model: The resolved model name.

        Returns:
            The messages to send.
        """
        if self.is_multimodal_model(model):
            if not any(msg.is_text for msg in messages):
                return messages
            return [
                ChatMessage(role=msg.role, content=self._as_parts(msg), name=msg.name) for msg in messages
            ]

        return [ChatMessage(role=msg.role, content=msg.get_content_text(), name=msg.name) for msg in messages]

    @staticmethod
    def _as_parts(message: ChatMessage) -> List[ContentPart]:
        if isinstance(message.content, str):
            return [TextContentPart(text=message.content)]
        return list(message.content)

    @staticmethod
    def _to_params(messages: List[ChatMessage]) -> List[Dict[str, Any]]:
        return [msg.to_openai_param() for msg in messages]

    async def _tools_call_impl(
        self,
        messages: List[ChatMessage],
        tools: List[ChatCompletionToolParam],
        stream: bool,
    ) -> Thought:
        if stream:
            return await self._stream_tools_call(messages, tools)
        return await self._non_stream_tools_call(messages, tools)

    def _tools_request(
        self, messages: List[ChatMessage], tools: List[ChatCompletionToolParam], stream: bool
    ) -> Dict[str, Any]:
        request: Dict[str, Any] = {
            "model": self.tools_call_model,
            "messages": self._to_params(messages),
            "stream": stream,
        }
        if tools:
            request["tools"] = cast(Iterable[ChatCompletionToolParam], tools)
        return request

    async def _non_stream_tools_call(
        self, messages: List[ChatMessage], tools: List[ChatCompletionToolParam]
    ) -> Thought:
        """
        Requests tool calls and decodes them from a complete response.

        Returns:
            The requested actions, or a message thought if the model answered in prose.
        """
        logger.debug(f"Sending tools call request to model: {self.tools_call_model}")
        response: ChatCompletion = await self.client.chat.completions.create(
            **self._tools_request(messages, tools, stream=False)
        )

        if response.choices:
            choice = response.choices[0]
            logger.debug(f"Tools call finished with reason: {choice.finish_reason}")
            if choice.finish_reason == "tool_calls":
                return ActionsThought(actions=tuple(get_actions(response)))
            if choice.finish_reason == "stop" and choice.message.content:
                return MessageThought(text=choice.message.content)
        return ActionsThought()

    async def _stream_tools_call(self, messages: List[ChatMessage], tools: List[ChatCompletionToolParam]) -> Thought:
        """
        Requests tool calls as a stream and decides what the model is doing.

        The response is forked: one copy is scanned until a chunk carries a finish
        reason. If the model finished anything other than tool calls, the other,
        untouched copy is handed to the caller, so the returned stream starts at the
        very first chunk.

        Returns:
            The requested actions, or a stream thought over the full response.

        Raises:
            ProtocolError: If a chunk carries no choices.
        """
        logger.debug(f"Sending streaming tools call request to model: {self.tools_call_model}")
        response = await self.client.chat.completions.create(**self._tools_request(messages, tools, stream=True))
        scan, replay = tee(response, 2)

        accumulator = ToolCallAccumulator()
        async for chunk in scan:
            if not chunk.choices:
                msg = "Empty choices in chunk"
                logger.error(msg)
                await scan.aclose()
                await replay.aclose()
                raise ProtocolError(msg)

            choice = chunk.choices[0]
            delta = choice.delta
            if delta is not None and delta.tool_calls:
                accumulator.add(delta.tool_calls)

            if choice.finish_reason == "tool_calls":
                await scan.aclose()
                await replay.aclose()
                return ActionsThought(actions=tuple(accumulator.to_actions()))
            if choice.finish_reason is not None:
                logger.debug(f"Streaming tools call finished with reason: {choice.finish_reason}")
                await scan.aclose()
                return StreamThought(stream=ThoughtStream(replay))

        logger.debug("Stream ended without a finish reason.")
        return ActionsThought(actions=tuple(accumulator.to_actions()))
