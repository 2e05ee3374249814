from .models import ToolDefinition
from .call_protocol import Action

__all__ = [
    "ToolDefinition",
    "Action",
]
