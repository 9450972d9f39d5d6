"""Process-wide collaborators handed to local tools."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...backend import BackendForwarder
    from ..config import Settings


@dataclass(frozen=True)
class ToolContext:
    """Injected into a local tool's parameter annotated with ``ToolContext``.

    Such parameters are not part of the tool's input schema.
    """

    settings: Settings
    backend: BackendForwarder
