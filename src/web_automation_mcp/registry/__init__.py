"""
Registry module - Tool handler registration and lookup.
"""

from web_automation_mcp.registry.registry import (
    ToolRegistry,
    register_tool,
    get_tool_handler,
)

__all__ = [
    "ToolRegistry",
    "register_tool",
    "get_tool_handler",
]
