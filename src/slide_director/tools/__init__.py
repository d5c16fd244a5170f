from slide_director.tools.registry import ToolRegistry
from slide_director.tools.slide_tools import SENSITIVE_TOOLS, SLIDE_TOOLS


def default_registry() -> ToolRegistry:
    """Returns a registry over the slide tool catalog."""

    return ToolRegistry(SLIDE_TOOLS)


__all__ = ["SENSITIVE_TOOLS", "SLIDE_TOOLS", "ToolRegistry", "default_registry"]
