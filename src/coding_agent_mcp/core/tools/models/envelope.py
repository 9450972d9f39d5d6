"""The uniform response envelope every tool call returns."""

import json
from typing import Any, List, Literal

from pydantic import BaseModel, ConfigDict, Field


class TextBlock(BaseModel):
    """A single text content block."""

    model_config = ConfigDict(frozen=True)

    type: Literal["text"] = "text"
    text: str


class ToolResponseEnvelope(BaseModel):
    """Result of one tool invocation: exactly one JSON text block plus an error flag.

    Use :meth:`success` and :meth:`failure` rather than constructing it directly.
    """

    model_config = ConfigDict(frozen=True)

    content: List[TextBlock] = Field(min_length=1, max_length=1)
    is_error: bool = False

    @classmethod
    def success(cls, payload: Any) -> "ToolResponseEnvelope":
        """Wrap a result payload as pretty-printed JSON."""
        return cls(content=[TextBlock(text=to_json_text(payload))], is_error=False)

    @classmethod
    def failure(cls, message: str, details: Any = None) -> "ToolResponseEnvelope":
        """Build the error envelope ``{success: false, error, details}``."""
        body = {"success": False, "error": message or "Unknown error", "details": details}
        return cls(content=[TextBlock(text=to_json_text(body))], is_error=True)

    @property
    def text(self) -> str:
        return self.content[0].text

    def payload(self) -> Any:
        """Parse the JSON text back into Python data."""
        return json.loads(self.text)


def to_json_text(payload: Any) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False, default=str)
