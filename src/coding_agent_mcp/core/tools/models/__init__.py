"""Tool-related data models."""

from .models import ToolDefinition, Route, RouteGroup
from .envelope import ToolResponseEnvelope, TextBlock
from .invocation import ToolInvocationRequest, ValidatedArguments, BackendRequest

__all__ = [
    "ToolDefinition",
    "Route",
    "RouteGroup",
    "ToolResponseEnvelope",
    "TextBlock",
    "ToolInvocationRequest",
    "ValidatedArguments",
    "BackendRequest",
]
