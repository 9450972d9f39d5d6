"""Tool registry and schema generation helpers."""

import inspect
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple, Type, Union, cast

import jsonref  # type: ignore
from pydantic import BaseModel, ConfigDict, ValidationError, create_model

from ..context import ToolContext
from ..models import Route, ToolDefinition
from ..schema import SchemaValidator, ToolParameterFactory
from ...exceptions import ToolNotFoundError, ToolRegistrationError, ToolValidationError
from ...logger import get_logger

logger = get_logger(__name__)


class ToolRegistry:
    """
    The static catalog of every tool the server exposes.

    Definitions are kept in registration order, which is the order ``tools/list``
    reports them in. The registry is filled once at startup and only read afterwards.
    """

    def __init__(self) -> None:
        """Initialize an empty ToolRegistry."""
        self.tools: Dict[str, ToolDefinition] = {}

    def register(
        self,
        name_or_tool: Union[str, ToolDefinition, Callable[..., Awaitable[Any]]],
        description: Optional[str] = None,
        args_model: Optional[Type[BaseModel]] = None,
        route: Optional[Route] = None,
    ) -> ToolDefinition:
        """
        Register a new tool.

        A tool can be registered from a ready ``ToolDefinition``, from a name plus
        an argument model and a ``Route`` (proxied tools), or from a coroutine
        function whose signature describes its arguments (local tools).

        Args:
            name_or_tool: A `ToolDefinition`, the tool name (str), or a coroutine function.
            description: Text shown to the calling agent. Required with a name; optional for a
                function, which falls back to its docstring.
            args_model: Pydantic model of the arguments. Required with a name.
            route: How the call is forwarded. Required with a name.

        Returns:
            The registered ToolDefinition.

        Raises:
            ToolRegistrationError: If arguments are missing, the definition is malformed
                or the name is already registered.
        """
        if isinstance(name_or_tool, ToolDefinition):
            tool = name_or_tool
        elif callable(name_or_tool):
            tool = self._generate_tool_definition(name_or_tool, description=description)
        else:
            if description is None or args_model is None or route is None:
                raise ToolRegistrationError(
                    f"Tool '{name_or_tool}': registering by name requires description, args_model and route."
                )
            tool = self._build_definition(
                name=name_or_tool,
                description=description,
                args_model=args_model,
                route=route,
            )

        if tool.name in self.tools:
            msg = f"Tool '{tool.name}' is already registered."
            logger.error(msg)
            raise ToolRegistrationError(msg)

        self.tools[tool.name] = tool
        logger.debug(f"Registered tool: '{tool.name}'")
        return tool

    def tool(self, func: Callable[..., Awaitable[Any]]) -> Callable[..., Awaitable[Any]]:
        """A decorator to turn a coroutine function into a local tool.

        Args:
            func: The function to decorate.

        Returns:
            The original function, after registering it as a tool.
        """
        self.register(func)
        return func

    def get(self, name: str) -> ToolDefinition:
        """Look up a tool by name.

        Raises:
            ToolNotFoundError: If no tool with that name is registered.
        """
        try:
            return self.tools[name]
        except KeyError:
            raise ToolNotFoundError(name) from None

    def list_tools(self) -> List[ToolDefinition]:
        """Return every definition in registration order."""
        return list(self.tools.values())

    def __contains__(self, name: object) -> bool:
        return name in self.tools

    def __len__(self) -> int:
        return len(self.tools)

    def _build_definition(self, **kwargs: Any) -> ToolDefinition:
        args_model = kwargs["args_model"]
        try:
            return ToolDefinition(parameters=self.schema_for(args_model), **kwargs)
        except ValidationError as e:
            msg = f"Invalid definition for tool '{kwargs['name']}': {e}"
            logger.error(msg)
            raise ToolRegistrationError(msg) from e

    @staticmethod
    def schema_for(args_model: Type[BaseModel]) -> Dict[str, Any]:
        """Generate the published input schema of an argument model.

        Raises:
            ToolValidationError: If the model is recursive.
        """
        raw_schema = args_model.model_json_schema(by_alias=True)
        # 1. Check for recursion
        SchemaValidator.assert_no_recursive_refs(raw_schema)

        # 2. Resolve refs; proxies=False returns plain dicts instead of JsonRef objects
        resolved = jsonref.replace_refs(raw_schema, proxies=False)

        # 3. Drop $defs, titles and Optional unions
        return cast(Dict[str, Any], SchemaValidator.sanitize_schema(resolved))

    def _generate_tool_definition(
        self, func: Callable[..., Awaitable[Any]], name: Optional[str] = None, description: Optional[str] = None
    ) -> ToolDefinition:
        """Generate a ToolDefinition for a local tool from its coroutine function.

        Args:
            func: The coroutine function implementing the tool.
            name: Optional name override for the tool.
            description: Optional description override for the tool.

        Returns:
            A ToolDefinition whose argument model mirrors the function signature.

        Raises:
            ToolRegistrationError: If ``func`` is not a coroutine function.
            ToolValidationError: If the function is missing a docstring or parameter descriptions.
        """
        tool_name = name or func.__name__
        if not inspect.iscoroutinefunction(func):
            raise ToolRegistrationError(f"Tool '{tool_name}' must be an async function.")

        if description is None:
            description = self._get_docstring_from_func(func, tool_name)

        signature = inspect.signature(func, eval_str=True)
        fields, context_param = self._build_fields(signature, tool_name)

        # create_model expects **field_definitions: Any
        args_model = create_model(
            f"{tool_name}Params", __config__=ConfigDict(strict=True), **cast(Dict[str, Any], fields)
        )

        return self._build_definition(
            name=tool_name,
            description=description,
            args_model=args_model,
            func=func,
            context_param=context_param,
        )

    @staticmethod
    def _get_docstring_from_func(func: Callable[..., Any], tool_name: str) -> str:
        doc = inspect.getdoc(func)
        if not doc:
            msg = f"Tool '{tool_name}' missing docstring. The calling agent needs a description of what the tool does."
            logger.error(msg)
            raise ToolValidationError(msg)
        return doc

    @staticmethod
    def _build_fields(signature: inspect.Signature, tool_name: str) -> Tuple[Dict[str, Any], Optional[str]]:
        fields: Dict[str, Any] = {}
        context_param: Optional[str] = None
        for param_name, param in signature.parameters.items():
            if param.annotation is ToolContext:
                context_param = param_name
                continue
            ft = ToolParameterFactory.build_field_tuple(param_name=param_name, param=param, tool_name=tool_name)
            fields[param_name] = (ft.annotation, ft.field)
        return fields, context_param
