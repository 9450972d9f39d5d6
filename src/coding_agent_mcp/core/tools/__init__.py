from .models import (
    ToolDefinition,
    Route,
    RouteGroup,
    ToolResponseEnvelope,
    TextBlock,
    ToolInvocationRequest,
    ValidatedArguments,
    BackendRequest,
)
from .context import ToolContext
from .registry import ToolRegistry
from .dispatcher import Dispatcher
from .schema import SchemaValidator

__all__ = [
    "ToolDefinition",
    "Route",
    "RouteGroup",
    "ToolResponseEnvelope",
    "TextBlock",
    "ToolInvocationRequest",
    "ValidatedArguments",
    "BackendRequest",
    "ToolContext",
    "ToolRegistry",
    "Dispatcher",
    "SchemaValidator",
]
