"""
Custom exception classes for the coding agent MCP server.

This module defines the hierarchy of exceptions raised while registering tools,
validating incoming tool calls, and forwarding them to the backend. They are
converted into response envelopes at the invocation boundary.
"""

from typing import Any, Dict, List, Optional


class CodingAgentError(Exception):
    """Base exception for all errors raised by the server."""

    pass


class ToolRegistrationError(CodingAgentError):
    """Raised when a tool cannot be registered (duplicate name, malformed definition)."""

    pass


class ToolNotFoundError(CodingAgentError):
    """Raised when a requested tool is not found in the registry."""

    def __init__(self, tool_name: str) -> None:
        self.tool_name = tool_name
        super().__init__(f"Unknown tool: {tool_name}")


class ToolValidationError(CodingAgentError):
    """Raised when tool arguments or a tool definition are invalid.

    Attributes:
        errors: One entry per offending field, each with ``field``, ``message`` and ``type``.
    """

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None) -> None:
        self.errors = errors or []
        super().__init__(message)


class BackendError(CodingAgentError):
    """Raised when a call to the backend fails.

    Attributes:
        message: The most specific human-readable message available.
        status_code: HTTP status of the backend response, if one was received.
        details: The raw backend error body, if one was received.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, details: Any = None) -> None:
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)
