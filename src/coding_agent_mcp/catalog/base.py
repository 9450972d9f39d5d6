"""Shared building blocks for tool argument models."""

from typing import Annotated, NamedTuple, Type

from pydantic import (
    AfterValidator,
    AnyUrl,
    BaseModel,
    ConfigDict,
    StringConstraints,
    TypeAdapter,
    ValidationError,
    WithJsonSchema,
)
from pydantic.alias_generators import to_camel

from ..core.tools.models import Route

_URL = TypeAdapter(AnyUrl)


def _check_url(value: str) -> str:
    try:
        _URL.validate_python(value)
    except ValidationError:
        raise ValueError("must be a valid URL") from None
    return value


NonEmptyStr = Annotated[str, StringConstraints(min_length=1)]

# Checked as a URL but forwarded exactly as given
UrlStr = Annotated[str, AfterValidator(_check_url), WithJsonSchema({"type": "string", "format": "uri"})]

WebhookSecret = Annotated[str, StringConstraints(min_length=16)]


class ToolArguments(BaseModel):
    """Base class for proxied tool arguments.

    Fields are snake_case in Python and camelCase on the wire and in the published schema.
    Unknown fields are ignored. Values are never coerced across types.
    """

    model_config = ConfigDict(alias_generator=to_camel, frozen=True, strict=True)


class NoArguments(ToolArguments):
    """Arguments of tools that take none."""


class ProxiedTool(NamedTuple):
    """Catalog entry of a tool forwarded to the backend."""

    name: str
    description: str
    args_model: Type[BaseModel]
    route: Route
