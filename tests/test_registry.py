import json
from typing import Annotated, List, Optional

import pytest
from pydantic import BaseModel, Field

from coding_agent_mcp.catalog.base import ToolArguments
from coding_agent_mcp.core.exceptions import ToolNotFoundError, ToolRegistrationError, ToolValidationError
from coding_agent_mcp.core.tools import ToolContext, ToolDefinition, ToolRegistry
from coding_agent_mcp.core.tools.models import Route, RouteGroup


class EchoArgs(ToolArguments):
    source_id: str = Field(min_length=1, description="Source to echo")
    note: Optional[str] = Field(default=None, description="Optional note")


ECHO_ROUTE = Route(group=RouteGroup.CORE, method="GET", path="/sources/{sourceId}")


def test_register_proxied_tool_by_name() -> None:
    registry = ToolRegistry()
    tool = registry.register("echo", description="Echo a source.", args_model=EchoArgs, route=ECHO_ROUTE)

    assert "echo" in registry
    assert registry.get("echo") is tool
    assert not tool.is_local
    assert tool.parameters["type"] == "object"
    assert tool.parameters["required"] == ["sourceId"]
    assert set(tool.parameters["properties"]) == {"sourceId", "note"}
    # Optional fields are published as plain types
    assert tool.parameters["properties"]["note"]["type"] == "string"


def test_register_by_name_requires_route_and_model() -> None:
    registry = ToolRegistry()
    with pytest.raises(ToolRegistrationError, match="requires description, args_model and route"):
        registry.register("echo", description="Echo a source.", args_model=EchoArgs)


def test_duplicate_name_is_rejected() -> None:
    registry = ToolRegistry()
    registry.register("echo", description="Echo a source.", args_model=EchoArgs, route=ECHO_ROUTE)

    with pytest.raises(ToolRegistrationError, match="already registered"):
        registry.register("echo", description="Again.", args_model=EchoArgs, route=ECHO_ROUTE)
    assert len(registry) == 1


def test_route_placeholder_must_be_a_required_field() -> None:
    registry = ToolRegistry()
    route = Route(group=RouteGroup.CORE, method="GET", path="/notes/{note}")

    with pytest.raises(ToolRegistrationError, match="not required arguments"):
        registry.register("bad", description="Bad route.", args_model=EchoArgs, route=route)


def test_definition_needs_exactly_one_of_route_or_func() -> None:
    registry = ToolRegistry()

    with pytest.raises(ToolRegistrationError, match="exactly one of"):
        registry._build_definition(name="nothing", description="No target.", args_model=EchoArgs)


def test_get_unknown_tool_raises() -> None:
    registry = ToolRegistry()
    with pytest.raises(ToolNotFoundError, match="Unknown tool: missing"):
        registry.get("missing")


def test_list_tools_keeps_registration_order() -> None:
    registry = ToolRegistry()
    for name in ("b_tool", "a_tool", "c_tool"):
        registry.register(name, description=f"{name}.", args_model=EchoArgs, route=ECHO_ROUTE)

    assert [tool.name for tool in registry.list_tools()] == ["b_tool", "a_tool", "c_tool"]


def test_register_prebuilt_definition() -> None:
    registry = ToolRegistry()
    definition = ToolDefinition(
        name="echo",
        description="Echo a source.",
        parameters=ToolRegistry.schema_for(EchoArgs),
        args_model=EchoArgs,
        route=ECHO_ROUTE,
    )
    assert registry.register(definition) is definition


def test_local_tool_decorator() -> None:
    registry = ToolRegistry()

    @registry.tool
    async def double(x: Annotated[int, Field(ge=0, description="A non-negative integer")] = 2) -> int:
        """Double a number."""
        return x * 2

    tool = registry.get("double")
    assert tool.is_local
    assert tool.description == "Double a number."
    assert tool.parameters["properties"]["x"]["default"] == 2
    assert tool.parameters["properties"]["x"]["minimum"] == 0
    assert "required" not in tool.parameters


def test_local_tool_context_parameter_is_hidden() -> None:
    registry = ToolRegistry()

    @registry.tool
    async def lookup(ctx: ToolContext, key: Annotated[str, Field(description="Key to look up")]) -> str:
        """Look something up."""
        return key

    tool = registry.get("lookup")
    assert tool.context_param == "ctx"
    assert list(tool.parameters["properties"]) == ["key"]
    assert tool.parameters["required"] == ["key"]


def test_local_tool_must_be_async() -> None:
    registry = ToolRegistry()
    with pytest.raises(ToolRegistrationError, match="must be an async function"):

        @registry.tool
        def sync_tool(x: Annotated[int, Field(description="desc")]) -> int:  # type: ignore[arg-type]
            """Docstring."""
            return x


def test_local_tool_missing_docstring() -> None:
    registry = ToolRegistry()
    with pytest.raises(ToolValidationError, match="missing docstring"):

        @registry.tool
        async def no_doc_tool(x: Annotated[int, Field(description="desc")]) -> None:
            pass


def test_local_tool_missing_param_description() -> None:
    registry = ToolRegistry()
    with pytest.raises(ToolValidationError, match="missing a description"):

        @registry.tool
        async def bad_param_tool(x: int) -> None:
            """Docstring."""


def test_nested_models_are_resolved_inline() -> None:
    class Snippet(ToolArguments):
        id: str = Field(description="Snippet id")
        code: str = Field(description="Snippet code")

    class BatchArgs(ToolArguments):
        snippets: List[Snippet] = Field(description="Snippets")

    schema = ToolRegistry.schema_for(BatchArgs)

    items = schema["properties"]["snippets"]["items"]
    assert items["type"] == "object"
    assert set(items["properties"]) == {"id", "code"}
    assert "$ref" not in json.dumps(schema)
    assert "$defs" not in schema


def test_recursive_model_detection() -> None:
    class Node(BaseModel):
        name: str = Field(description="Node name")
        child: Optional["Node"] = Field(default=None, description="Child node")

    Node.model_rebuild()

    with pytest.raises(ToolValidationError, match="Recursive structure detected"):
        ToolRegistry.schema_for(Node)
