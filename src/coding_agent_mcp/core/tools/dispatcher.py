"""Validation and dispatch of inbound tool calls."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from pydantic import ValidationError

from ..exceptions import ToolNotFoundError, ToolValidationError
from ..logger import get_logger
from .context import ToolContext
from .models import ToolInvocationRequest, ToolResponseEnvelope, ValidatedArguments
from .registry import ToolRegistry

logger = get_logger(__name__)


class Dispatcher:
    """Turns ``tools/call`` requests into response envelopes.

    Each call goes Validating -> Forwarding -> Completed. Failures at any stage
    are converted into an error envelope here; nothing propagates to the transport.
    """

    def __init__(self, *, registry: ToolRegistry, context: ToolContext) -> None:
        """Initialize the dispatcher.

        Args:
            registry: Registry used to resolve tool definitions.
            context: Collaborators injected into local tools; its backend forwards proxied tools.
        """
        self.registry = registry
        self._context = context

    def dispatch(self, name: str, arguments: Any) -> ValidatedArguments:
        """Resolve the tool and validate its arguments.

        Args:
            name: The requested tool name.
            arguments: Raw arguments (mapping, JSON string, or None).

        Returns:
            The validated arguments, with defaults applied.

        Raises:
            ToolNotFoundError: If the tool is not registered.
            ToolValidationError: If the arguments do not match the tool's schema.
        """
        tool = self.registry.get(name)
        raw = self._normalize_arguments(name, arguments)
        try:
            # Validated as JSON so strict models still accept objects for nested fields
            values = tool.args_model.model_validate_json(_to_json(name, raw), strict=True)
        except ValidationError as exc:
            errors = _format_errors(exc)
            fields = ", ".join(sorted({e["field"] for e in errors if e["field"]}))
            msg = f"Invalid arguments for tool '{name}'" + (f": {fields}" if fields else "")
            raise ToolValidationError(msg, errors) from exc
        return ValidatedArguments(tool=tool, values=values)

    async def handle(self, name: str, arguments: Any = None) -> ToolResponseEnvelope:
        """Run one invocation end to end.

        Args:
            name: The requested tool name.
            arguments: Raw arguments as received from the caller.

        Returns:
            The response envelope. Never raises for a single bad invocation.
        """
        logger.debug(f"Handling tool call: {name}")
        try:
            validated = self.dispatch(name, arguments)
        except ToolNotFoundError as exc:
            logger.warning(str(exc))
            return ToolResponseEnvelope.failure(str(exc))
        except ToolValidationError as exc:
            logger.warning(f"Validation error for '{name}': {exc}")
            return ToolResponseEnvelope.failure(str(exc), exc.errors)

        try:
            if validated.tool.is_local:
                logger.info(f"Executing local tool '{name}'...")
                return ToolResponseEnvelope.success(await self._run_local(validated))
            return await self._context.backend.forward(validated)
        except Exception as exc:
            logger.exception(f"Unexpected error in tool '{name}'")
            return ToolResponseEnvelope.failure(str(exc) or "Unknown error")

    async def handle_request(self, request: ToolInvocationRequest) -> ToolResponseEnvelope:
        """Run an invocation received from the transport."""
        return await self.handle(request.name, request.arguments)

    async def _run_local(self, validated: ValidatedArguments) -> Any:
        tool = validated.tool
        if tool.func is None:
            raise ValueError(f"Tool '{tool.name}' has no local handler.")
        kwargs: Dict[str, Any] = dict(validated.values)
        if tool.context_param:
            kwargs[tool.context_param] = self._context
        return await tool.func(**kwargs)

    @staticmethod
    def _normalize_arguments(tool_name: str, raw_args: Any) -> Dict[str, Any]:
        """Normalize tool arguments into a dictionary.

        Handles JSON strings, mappings, or None values.

        Raises:
            ToolValidationError: If arguments cannot be parsed into an object.
        """
        if raw_args is None or raw_args == "":
            return {}

        if isinstance(raw_args, dict):
            return raw_args

        if isinstance(raw_args, str):
            try:
                parsed = json.loads(raw_args)
            except json.JSONDecodeError as exc:
                raise ToolValidationError(
                    f"Failed to parse arguments for tool '{tool_name}': {exc}",
                    [{"field": "", "message": str(exc), "type": "json_invalid"}],
                ) from exc

            if parsed is None:
                return {}
            if isinstance(parsed, dict):
                return parsed

        msg = f"Arguments for tool '{tool_name}' must be a JSON object."
        raise ToolValidationError(msg, [{"field": "", "message": msg, "type": "dict_type"}])


def _format_errors(exc: ValidationError) -> List[Dict[str, Any]]:
    return [
        {
            "field": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors(include_url=False)
    ]


def _to_json(tool_name: str, raw: Dict[str, Any]) -> str:
    try:
        return json.dumps(raw)
    except (TypeError, ValueError) as exc:
        msg = f"Arguments for tool '{tool_name}' are not JSON serializable: {exc}"
        raise ToolValidationError(msg, [{"field": "", "message": str(exc), "type": "json_invalid"}]) from exc
