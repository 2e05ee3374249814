"""
Custom exception classes for the conversation and protocol layers.

Recoverable conditions (malformed tool arguments, role misuse on append) are
logged and never raised; the classes below cover the failures that do reach
the caller.
"""


class LLMCoreError(Exception):
    """Base exception for all errors raised by this library."""

    pass


class ConversationError(LLMCoreError):
    """Raised when the transcript bookkeeping is used inconsistently."""

    pass


class InteractionError(ConversationError):
    """Raised when an interaction is answered more than once."""

    pass


class ProtocolError(LLMCoreError):
    """Raised when the remote provider returns a malformed response."""

    pass


class StreamConsumedError(ProtocolError):
    """Raised when a single-pass response stream is iterated a second time."""

    pass


class ToolValidationError(LLMCoreError):
    """Raised when a tool definition is invalid."""

    pass
