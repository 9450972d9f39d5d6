"""Request-scoped data models for a single tool invocation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Optional

from pydantic import BaseModel

if TYPE_CHECKING:
    from .models import RouteGroup, ToolDefinition


@dataclass(frozen=True)
class ToolInvocationRequest:
    """Represents an inbound ``tools/call`` request before validation."""

    name: str
    arguments: Any = None


@dataclass(frozen=True)
class ValidatedArguments:
    """Arguments that passed the tool's schema, with defaults applied."""

    tool: ToolDefinition
    values: BaseModel

    def wire_payload(self) -> Dict[str, Any]:
        """Dump the arguments under their wire names, leaving out unset optionals."""
        return self.values.model_dump(mode="json", by_alias=True, exclude_none=True)


@dataclass(frozen=True)
class BackendRequest:
    """The one outbound HTTP call derived from a validated invocation."""

    method: str
    group: RouteGroup
    path: str
    params: Optional[Dict[str, Any]] = None
    json: Optional[Dict[str, Any]] = None

    @property
    def url(self) -> str:
        """Path relative to the backend host, including the route group prefix."""
        return f"{self.group.value}{self.path}"
