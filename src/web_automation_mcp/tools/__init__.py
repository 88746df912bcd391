"""
Tools module - Tool catalog, response types and handler bases.

Concrete handlers live in the browser, api and codegen subpackages and
register themselves when those are imported.
"""

from web_automation_mcp.tools.types import (
    TextContent,
    ImageContent,
    ToolResponse,
    ToolContext,
    ToolHandler,
    create_error_response,
    create_success_response,
)
from web_automation_mcp.tools.catalog import (
    ToolCategory,
    ToolDefinition,
    TOOL_DEFINITIONS,
    classify_tool,
    get_tool_definitions,
)

__all__ = [
    # Types
    "TextContent",
    "ImageContent",
    "ToolResponse",
    "ToolContext",
    "ToolHandler",
    "create_error_response",
    "create_success_response",
    # Catalog
    "ToolCategory",
    "ToolDefinition",
    "TOOL_DEFINITIONS",
    "classify_tool",
    "get_tool_definitions",
]
