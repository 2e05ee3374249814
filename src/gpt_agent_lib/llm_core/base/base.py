"""Core abstraction for chat model services."""

from abc import ABC, abstractmethod
from typing import ClassVar, List, Literal, Sequence, Tuple, Union

from openai.types.chat import ChatCompletionToolParam

from ..logger import get_logger
from ..messages import ChatMessage
from ..thought import Thought
from ..tools import ToolDefinition

logger = get_logger(__name__)

ModelProvider = Literal["openai.com", "custom"]
ResponseType = Literal["text", "json_object"]
ToolSpec = Union[ToolDefinition, ChatCompletionToolParam]


class ModelService(ABC):
    """Abstract base class for chat model services.

    A service turns a transcript into a :data:`Thought`: a final message, a live
    stream, or a list of requested tool actions. It performs no retries; retry
    policy belongs to the caller.
    """

    model_providers: ClassVar[Tuple[ModelProvider, ...]] = ()
    supported_models: ClassVar[Tuple[str, ...]] = ()

    def __init__(self, max_tokens: int = 4096):
        self.max_tokens = max_tokens

    async def chat_completion(
        self,
        messages: Sequence[ChatMessage],
        stream: bool,
        use_multimodal: bool = False,
        response_type: ResponseType = "text",
    ) -> Thought:
        """
        Asks the model for an answer to the transcript.

        Args:
            messages: The transcript to send.
            stream: Whether to return the answer incrementally.
            use_multimodal: Route the request to the multimodal model.
            response_type: Requested response format.

        Returns:
            A message thought, or a stream thought if ``stream`` is set.
        """
        logger.debug(
            f"chat_completion: {len(messages)} message(s), stream={stream}, "
            f"multimodal={use_multimodal}, response_type={response_type}"
        )
        return await self._chat_completion_impl(list(messages), stream, use_multimodal, response_type)

    async def tools_call(
        self,
        messages: Sequence[ChatMessage],
        tools: Sequence[ToolSpec],
        stream: bool,
    ) -> Thought:
        """
        Asks the model which of the given tools to invoke.

        Args:
            messages: The transcript to send.
            tools: Tool definitions or already compiled tool descriptors.
            stream: Whether to request a streamed response.

        Returns:
            An actions thought, or a message/stream thought if the model answered in prose.
        """
        descriptors = [tool.get_function() if isinstance(tool, ToolDefinition) else tool for tool in tools]
        logger.debug(f"tools_call: {len(messages)} message(s), {len(descriptors)} tool(s), stream={stream}")
        return await self._tools_call_impl(list(messages), descriptors, stream)

    @abstractmethod
    async def _chat_completion_impl(
        self,
        messages: List[ChatMessage],
        stream: bool,
        use_multimodal: bool,
        response_type: ResponseType,
    ) -> Thought:
        pass

    @abstractmethod
    async def _tools_call_impl(
        self,
        messages: List[ChatMessage],
        tools: List[ChatCompletionToolParam],
        stream: bool,
    ) -> Thought:
        pass

    def is_supported_model(self, model_name: str) -> bool:
        return model_name in self.supported_models
