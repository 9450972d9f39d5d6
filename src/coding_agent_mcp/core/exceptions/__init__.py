"""Export the exception hierarchy used across registration, dispatch and forwarding."""

from .exceptions import CodingAgentError, ToolRegistrationError, ToolNotFoundError, ToolValidationError, BackendError

__all__ = ["CodingAgentError", "ToolRegistrationError", "ToolNotFoundError", "ToolValidationError", "BackendError"]
