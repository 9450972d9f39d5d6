"""The tool catalog: every tool the server publishes, declared as data."""

from ..core.logger import get_logger
from ..core.tools import ToolRegistry
from . import context, core, github, planning
from .base import ProxiedTool

logger = get_logger(__name__)

PROXIED_TOOLS = [*core.TOOLS, *github.TOOLS, *planning.TOOLS]


def build_registry() -> ToolRegistry:
    """Create a registry holding the full catalog, in publication order."""
    registry = ToolRegistry()
    for tool in PROXIED_TOOLS:
        registry.register(tool.name, description=tool.description, args_model=tool.args_model, route=tool.route)
    for func in context.TOOLS:
        registry.register(func)
    logger.info(f"Tool catalog ready with {len(registry)} tools.")
    return registry


__all__ = ["build_registry", "ProxiedTool", "PROXIED_TOOLS"]
