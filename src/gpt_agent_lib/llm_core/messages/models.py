"""Provider-agnostic message models for the chat transcript."""

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

Role = Literal["system", "user", "assistant"]


class TextContentPart(BaseModel):
    """A plain text segment of a multimodal message."""

    model_config = ConfigDict(frozen=True)

    type: Literal["text"] = "text"
    text: str


class ImageUrl(BaseModel):
    """Reference to an image, either a remote URL or a data URL."""

    model_config = ConfigDict(frozen=True)

    url: str
    detail: Optional[Literal["auto", "low", "high"]] = None


class ImageContentPart(BaseModel):
    """An image reference segment of a multimodal message."""

    model_config = ConfigDict(frozen=True)

    type: Literal["image_url"] = "image_url"
    image_url: ImageUrl


ContentPart = Annotated[Union[TextContentPart, ImageContentPart], Field(discriminator="type")]
MessageContent = Union[str, List[ContentPart]]


class ChatMessage(BaseModel):
    """One turn of dialogue.

    The content is stored exactly as given: either plain text or an ordered list of
    content parts. Provider specific normalization builds new messages instead of
    touching a stored one.

    Attributes:
        role: Author of the message.
        content: Plain text or ordered content parts.
        name: Optional display label of the author.
    """

    model_config = ConfigDict(frozen=True)

    role: Role
    content: MessageContent
    name: Optional[str] = None

    @property
    def is_text(self) -> bool:
        """Whether the content is currently held as plain text."""
        return isinstance(self.content, str)

    def get_content_text(self) -> str:
        """Return the text of the message.

        Returns:
            The plain text content, or the text of the first text part, or an empty
            string if the message carries no text part at all.
        """
        if isinstance(self.content, str):
            return self.content
        for part in self.content:
            if isinstance(part, TextContentPart):
                return part.text
        return ""

    def to_openai_param(self) -> Dict[str, Any]:
        """Serialize the message into the outbound chat completion message shape."""
        param: Dict[str, Any] = {"role": self.role}
        if isinstance(self.content, str):
            param["content"] = self.content
        else:
            param["content"] = [part.model_dump(exclude_none=True) for part in self.content]
        if self.name:
            param["name"] = self.name
        return param


class SystemMessage(ChatMessage):
    """Message authored by the system to steer behavior."""

    role: Role = "system"


class UserMessage(ChatMessage):
    """Message authored by an end user."""

    role: Role = "user"


class AssistantMessage(ChatMessage):
    """Message authored by the assistant."""

    role: Role = "assistant"
