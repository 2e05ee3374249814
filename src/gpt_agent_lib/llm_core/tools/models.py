from typing import Any, Dict, List, Sequence, cast

from openai.types.chat import ChatCompletionToolParam
from pydantic import BaseModel, Field

from ..exceptions import ToolValidationError
from ..logger import get_logger

logger = get_logger(__name__)


class ToolDefinition(BaseModel):
    """
    Builder for the descriptor of a tool that the model may ask to invoke.

    Attributes:
        name: The unique name of the tool.
        description: A brief description of what the tool does.
        properties: Mapping from parameter name to its JSON schema fragment.
    """

    name: str = Field(pattern=r"^[a-zA-Z0-9_-]{1,64}$")
    description: str
    properties: Dict[str, Dict[str, Any]] = Field(default_factory=dict)

    def __init__(self, name: str, description: str, **data: Any) -> None:
        super().__init__(name=name, description=description, **data)

    def set_string_parameter(self, name: str) -> "ToolDefinition":
        """Register a free text parameter, replacing any previous schema for ``name``."""
        self.properties[name] = {"type": "string"}
        return self

    def set_enum_parameter(self, name: str, enum_values: Sequence[str]) -> "ToolDefinition":
        """Register a string parameter restricted to ``enum_values``.

        Args:
            name: The parameter name.
            enum_values: The allowed values, in the order they are advertised.

        Raises:
            ToolValidationError: If no values are given.
        """
        values: List[str] = list(enum_values)
        if not values:
            msg = f"Enum parameter '{name}' of tool '{self.name}' needs at least one value."
            logger.error(msg)
            raise ToolValidationError(msg)
        self.properties[name] = {"type": "string", "enum": values}
        return self

    def get_function(self) -> ChatCompletionToolParam:
        """Compile the definition into a provider-ready tool descriptor.

        Tools without parameters do not advertise an empty object schema; the
        ``parameters`` block is left out entirely.

        Returns:
            The ``{"type": "function", "function": {...}}`` descriptor.
        """
        function: Dict[str, Any] = {"name": self.name, "description": self.description}
        if self.properties:
            function["parameters"] = {
                "type": "object",
                "properties": {key: dict(value) for key, value in self.properties.items()},
            }
        return cast(ChatCompletionToolParam, {"type": "function", "function": function})
