"""Static tool descriptors: route groups, routes and tool definitions."""

import re
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Literal, Optional, Set, Type
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .invocation import BackendRequest

# {name} is a single path segment, {name:path} may contain slashes
_PLACEHOLDER = re.compile(r"\{(\w+)(:path)?\}")

_QUERY_METHODS = {"GET", "DELETE"}


class RouteGroup(str, Enum):
    """Logical backend route groups. The value is the path prefix on the backend host."""

    CORE = "/api/coding-agent"
    GITHUB = "/api/github"
    PLANNING = "/api/planning"
    SEARCH = "/api/search"


class Route(BaseModel):
    """
    Describes how a validated tool call becomes one HTTP request.

    Attributes:
        group: The route group the path is relative to.
        method: HTTP method.
        path: Path template. Placeholders name wire fields, e.g. ``/sources/{sourceId}``.
        rename: Wire field renames applied to query/body fields, e.g. ``{"query": "q"}``.
    """

    model_config = ConfigDict(frozen=True)

    group: RouteGroup
    method: Literal["GET", "POST", "PUT", "DELETE"]
    path: str
    rename: Dict[str, str] = Field(default_factory=dict)

    @property
    def path_params(self) -> List[str]:
        """Names of the fields substituted into the path template."""
        return [m.group(1) for m in _PLACEHOLDER.finditer(self.path)]

    def build_request(self, payload: Dict[str, Any]) -> BackendRequest:
        """Place the payload fields into path, query string or JSON body.

        Args:
            payload: Validated arguments keyed by wire name, without unset optionals.

        Returns:
            The BackendRequest for this call.
        """
        remaining = dict(payload)

        def substitute(match: "re.Match[str]") -> str:
            value = remaining.pop(match.group(1))
            return quote(str(value), safe="/" if match.group(2) else "")

        path = _PLACEHOLDER.sub(substitute, self.path)
        fields = {self.rename.get(key, key): value for key, value in remaining.items()}

        if self.method in _QUERY_METHODS:
            params = {key: _query_value(value) for key, value in fields.items()}
            return BackendRequest(method=self.method, group=self.group, path=path, params=params)
        return BackendRequest(method=self.method, group=self.group, path=path, json=fields)


def _query_value(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


class ToolDefinition(BaseModel):
    """
    Represents one entry of the tool registry.

    A definition is either proxied (it carries a ``route``) or local (it carries
    a coroutine ``func``), never both.

    Attributes:
        name: The unique name of the tool.
        description: Text shown to the calling agent.
        parameters: The JSON schema published as the tool's ``inputSchema``.
        args_model: Pydantic model used for validating and coercing arguments.
        route: How the call is forwarded to the backend, for proxied tools.
        func: The coroutine implementing a local tool.
        context_param: Name of the ``func`` parameter that receives the ToolContext, if any.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(min_length=1)
    description: str
    parameters: Dict[str, Any]
    args_model: Type[BaseModel]
    route: Optional[Route] = None
    func: Optional[Callable[..., Awaitable[Any]]] = None
    context_param: Optional[str] = None

    @model_validator(mode="after")
    def _check_variant(self) -> "ToolDefinition":
        if (self.route is None) == (self.func is None):
            raise ValueError(f"Tool '{self.name}' must define exactly one of 'route' or 'func'.")
        if self.route is not None:
            missing = set(self.route.path_params) - _required_wire_names(self.args_model)
            if missing:
                raise ValueError(f"Tool '{self.name}' route uses fields that are not required arguments: {sorted(missing)}")
        return self

    @property
    def is_local(self) -> bool:
        return self.func is not None


def _required_wire_names(model: Type[BaseModel]) -> Set[str]:
    return {field.alias or name for name, field in model.model_fields.items() if field.is_required()}
