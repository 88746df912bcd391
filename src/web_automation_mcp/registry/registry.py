"""
Tool Registry - Maps tool names to their handler classes.

Handlers register themselves by name when their module is imported.
The dispatcher looks the class up per call and instantiates it with the
server reference.

Example:
    >>> from web_automation_mcp.registry import register_tool, get_tool_handler
    >>>
    >>> @register_tool("playwright_click")
    >>> class ClickTool(BrowserToolBase):
    ...     pass
    >>>
    >>> handler_class = get_tool_handler("playwright_click")
"""

from typing import Callable, Dict, List, Optional, Type

from web_automation_mcp.tools.types import ToolHandler


class ToolRegistry:
    """
    Central registry of tool handlers.

    Every name in the tool catalog, session-control tools included, has
    exactly one registered handler class. The dispatcher decides how each
    category is run; the registry only maps names.
    """

    _handlers: Dict[str, Type[ToolHandler]] = {}

    @classmethod
    def register(cls, name: str) -> Callable[[Type[ToolHandler]], Type[ToolHandler]]:
        """
        Decorator to register a handler class under a tool name.

        Args:
            name: Tool name as it appears in the catalog

        Returns:
            Decorator function

        Raises:
            ValueError: If the name is already registered to another class
        """
        def decorator(handler_class: Type[ToolHandler]) -> Type[ToolHandler]:
            existing = cls._handlers.get(name)
            if existing is not None and existing is not handler_class:
                raise ValueError(f"Tool '{name}' is already registered")
            cls._handlers[name] = handler_class
            return handler_class
        return decorator

    @classmethod
    def get(cls, name: str) -> Optional[Type[ToolHandler]]:
        """Get the handler class for a tool, or None if unregistered."""
        return cls._handlers.get(name)

    @classmethod
    def list_tools(cls) -> List[str]:
        """List all registered tool names."""
        return sorted(cls._handlers)


def register_tool(name: str) -> Callable[[Type[ToolHandler]], Type[ToolHandler]]:
    """Register a tool handler class. See ToolRegistry.register."""
    return ToolRegistry.register(name)


def get_tool_handler(name: str) -> Optional[Type[ToolHandler]]:
    """Get a registered handler class by tool name."""
    return ToolRegistry.get(name)
