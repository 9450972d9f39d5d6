"""Public exports for the dispatch core: registry, validation, envelopes and configuration."""

from .config import Settings
from .exceptions import (
    CodingAgentError,
    ToolRegistrationError,
    ToolNotFoundError,
    ToolValidationError,
    BackendError,
)
from .logger import get_logger, setup_logging
from .tools import (
    ToolDefinition,
    Route,
    RouteGroup,
    ToolResponseEnvelope,
    TextBlock,
    ToolInvocationRequest,
    ValidatedArguments,
    BackendRequest,
    ToolContext,
    ToolRegistry,
    Dispatcher,
    SchemaValidator,
)

__all__ = [
    "Settings",
    "CodingAgentError",
    "ToolRegistrationError",
    "ToolNotFoundError",
    "ToolValidationError",
    "BackendError",
    "get_logger",
    "setup_logging",
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
