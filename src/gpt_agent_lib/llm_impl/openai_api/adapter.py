"""Decoding of OpenAI tool calls into provider-agnostic actions."""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from openai.types.chat import ChatCompletion

from gpt_agent_lib.llm_core.logger import get_logger
from gpt_agent_lib.llm_core.tools import Action

logger = get_logger(__name__)


def decode_arguments(tool_name: str, arguments: Optional[str]) -> Dict[str, Any]:
    """Parse the serialized arguments of a tool call.

    A malformed payload never aborts the call: it is logged and replaced by an
    empty argument set.

    Args:
        tool_name: Name of the tool, for logging.
        arguments: The JSON encoded arguments as sent by the model.

    Returns:
        The decoded arguments.
    """
    if not arguments:
        return {}
    try:
        decoded = json.loads(arguments)
    except json.JSONDecodeError as e:
        logger.warning(f"Failed to decode arguments of tool '{tool_name}': {e}. Raw arguments: {arguments!r}")
        return {}
    if not isinstance(decoded, dict):
        logger.warning(f"Arguments of tool '{tool_name}' are not a JSON object: {arguments!r}")
        return {}
    return decoded


def to_action(tool_call: Any) -> Action:
    """Convert a single OpenAI tool call into an action."""
    name = tool_call.function.name
    return Action(
        name=name,
        arguments=decode_arguments(name, tool_call.function.arguments),
        call_id=getattr(tool_call, "id", None),
    )


def get_actions(response: ChatCompletion) -> List[Action]:
    """Extract the requested actions from a chat completion response.

    Args:
        response: The chat completion response from OpenAI.

    Returns:
        The actions in the order the model requested them.
    """
    if not response.choices:
        return []

    tool_calls = response.choices[0].message.tool_calls
    if not tool_calls:
        return []

    actions = []
    for tool_call in tool_calls:
        # Custom (non-function) tool calls carry no JSON arguments
        if tool_call.type == "function":
            actions.append(to_action(tool_call))
    return actions


@dataclass
class _PartialToolCall:
    call_id: Optional[str] = None
    name: str = ""
    arguments: List[str] = field(default_factory=list)


class ToolCallAccumulator:
    """Reassembles tool calls that arrive spread over several stream chunks.

    Deltas are keyed by their ``index``: the id and name are taken from the first
    delta that carries them, argument fragments are concatenated in arrival order.
    """

    def __init__(self) -> None:
        self._calls: Dict[int, _PartialToolCall] = {}

    def __bool__(self) -> bool:
        return bool(self._calls)

    def add(self, deltas: Sequence[Any]) -> None:
        for position, delta in enumerate(deltas):
            index = delta.index if delta.index is not None else position
            partial = self._calls.setdefault(index, _PartialToolCall())
            if delta.id and not partial.call_id:
                partial.call_id = delta.id
            function = delta.function
            if function is None:
                continue
            if function.name and not partial.name:
                partial.name = function.name
            if function.arguments:
                partial.arguments.append(function.arguments)

    def to_actions(self) -> List[Action]:
        actions = []
        for index in sorted(self._calls):
            partial = self._calls[index]
            actions.append(
                Action(
                    name=partial.name,
                    arguments=decode_arguments(partial.name, "".join(partial.arguments)),
                    call_id=partial.call_id,
                )
            )
        return actions
