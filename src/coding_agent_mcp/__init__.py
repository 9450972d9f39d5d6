"""Coding Agent MCP - an MCP adapter that forwards coding agent tool calls to the app backend."""

__version__ = "1.0.0"

from .core import (  # noqa: E402
    Settings,
    ToolRegistry,
    ToolDefinition,
    Route,
    RouteGroup,
    ToolResponseEnvelope,
    Dispatcher,
    ToolContext,
)
from .backend import BackendForwarder  # noqa: E402
from .catalog import build_registry  # noqa: E402

__all__ = [
    "__version__",
    "Settings",
    "ToolRegistry",
    "ToolDefinition",
    "Route",
    "RouteGroup",
    "ToolResponseEnvelope",
    "Dispatcher",
    "ToolContext",
    "BackendForwarder",
    "build_registry",
]
